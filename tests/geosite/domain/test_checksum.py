import hashlib
import unittest

from src.geosite.application.errors import ChecksumMismatchError
from src.geosite.domain.checksum import compute_sha256, verify_checksum


class ChecksumTests(unittest.TestCase):
    def test_sha256sum_file_with_filename_suffix_passes(self):
        data = b"geosite-bytes"
        digest = hashlib.sha256(data).hexdigest()
        checksum_file = f"{digest}  geosite.dat\n".encode("utf-8")
        self.assertEqual(verify_checksum(data, checksum_file), digest)

    def test_mismatch_raises(self):
        checksum_file = compute_sha256(b"other").encode("utf-8")
        with self.assertRaises(ChecksumMismatchError):
            verify_checksum(b"geosite-bytes", checksum_file)
