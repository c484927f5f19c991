"""Exception hierarchy for the Shivanosh codec.

Every failure the codec can report is a subclass of ShivanoshError so
callers can catch the whole family at once. Decode failures also derive
from ValueError: they describe bad input data, not a broken environment.
"""

from __future__ import annotations


class ShivanoshError(Exception):
    """Base class for all Shivanosh errors."""


class DecodeError(ShivanoshError, ValueError):
    """A byte stream could not be decoded into a Raster."""


class InvalidFormat(DecodeError):
    """The stream does not start with the MYIF magic tag."""


class TruncatedHeader(DecodeError):
    """The stream ends before the 12-byte header is complete."""


class CorruptPayload(DecodeError):
    """The compressed payload was rejected by the compression codec."""


class SizeMismatch(DecodeError):
    """The decompressed payload is shorter than the declared dimensions need."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Payload too short: expected {expected} bytes, got {actual}"
        )
        self.expected = expected
        self.actual = actual


class EncodeError(ShivanoshError):
    """A Raster could not be encoded."""


class EncodeBackendFailure(EncodeError):
    """The compression backend failed while encoding."""


class SourceImageError(ShivanoshError):
    """A source image could not be opened or converted to RGBA."""


class ImageExportError(ShivanoshError):
    """A raster could not be exported to a regular image file."""


class ConfigError(ShivanoshError, ValueError):
    """The configuration file is unreadable or has invalid values."""
