"""
Error taxonomy for the tubesum pipeline.

Helpers raise these; each component boundary catches them, logs the message
and hands a sentinel (``None``/``False``) back to its caller.
"""


class TubesumError(Exception):
    """Base class for all pipeline errors."""


class InvalidInputError(TubesumError):
    """Malformed URL or a missing video id."""


class ExternalApiError(TubesumError):
    """A third-party call raised or returned nothing usable."""


class TranscriptionError(ExternalApiError):
    """Audio could not be fetched, stored or transcribed."""


class OversizeAssetError(TranscriptionError):
    """Downloaded audio exceeds the transcription upload limit."""

    def __init__(self, size_bytes: int, limit_mb: int):
        self.size_bytes = size_bytes
        self.limit_mb = limit_mb
        super().__init__(
            f"Audio file is too large ({size_bytes / (1024 * 1024):.1f}MB > {limit_mb}MB)"
        )


class NotFoundError(TubesumError):
    """Nothing stored for the requested video."""
