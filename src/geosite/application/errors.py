class GeositeDecodeError(ValueError):
    """Raised when the upstream blob cannot be parsed into records."""


class ChecksumMismatchError(ValueError):
    """Raised when a downloaded blob does not match its published checksum."""


class ReleaseFetchError(RuntimeError):
    """Raised when a release or one of its assets cannot be retrieved."""


class ArtifactWriteError(RuntimeError):
    """Raised when an output artifact cannot be produced."""
