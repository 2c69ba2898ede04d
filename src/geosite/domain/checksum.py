import hashlib

from src.geosite.application.errors import ChecksumMismatchError

SHA256_HEX_LENGTH = 64


def compute_sha256(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def verify_checksum(data: bytes, checksum_file: bytes) -> str:
    """Compare against a ``sha256sum`` style file ("<hex>  <filename>")."""
    expected = checksum_file.decode("utf-8", errors="replace").strip()[:SHA256_HEX_LENGTH].lower()
    actual = compute_sha256(data)
    if actual != expected:
        raise ChecksumMismatchError(f"checksum mismatch: expected={expected}, actual={actual}")
    return actual
