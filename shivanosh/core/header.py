"""Container header definitions.

File format:
  [Header: 12 bytes]
    - Magic: 4 bytes ('MYIF')
    - Width: 4 bytes (uint32, little-endian)
    - Height: 4 bytes (uint32, little-endian)
  [Payload: variable]
    - zlib stream of width * height * 4 RGBA bytes

There is no payload length field: the payload runs to the end of the
source, so a container must not be concatenated with other data. There is
no version field either, so any change to this layout is a breaking one.
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass

from shivanosh.core.errors import InvalidFormat, TruncatedHeader

logger = logging.getLogger(__name__)

# File format constants
MAGIC = b"MYIF"
HEADER_FORMAT = "<4sII"
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)  # 4s (4) + I (4) + I (4) = 12 bytes
FILE_EXTENSION = ".shivanosh"
BYTES_PER_PIXEL = 4
MAX_DIMENSION = 2**32 - 1


@dataclass(frozen=True)
class ContainerHeader:
    """Parsed container header.

    Attributes:
        width: Image width in pixels
        height: Image height in pixels
    """

    width: int
    height: int

    def __post_init__(self) -> None:
        """Validate header fields."""
        for name, value in (("width", self.width), ("height", self.height)):
            if not 0 <= value <= MAX_DIMENSION:
                raise ValueError(
                    f"{name} must fit in an unsigned 32-bit integer, got {value}"
                )

    @property
    def expected_payload_size(self) -> int:
        """Number of bytes the payload must decompress to."""
        return self.width * self.height * BYTES_PER_PIXEL


def pack_header(width: int, height: int) -> bytes:
    """Pack the 12-byte container header.

    Args:
        width: Image width (uint32)
        height: Image height (uint32)

    Returns:
        Header bytes: magic, width and height

    Raises:
        ValueError: If a dimension does not fit in an unsigned 32-bit integer
    """
    header = ContainerHeader(width=width, height=height)
    return struct.pack(HEADER_FORMAT, MAGIC, header.width, header.height)


def unpack_header(data: bytes) -> ContainerHeader:
    """Parse the container header at the start of ``data``.

    The magic tag is checked before the dimensions, so a wrong tag is
    reported as InvalidFormat even when the rest of the header is missing.

    Raises:
        InvalidFormat: If the first 4 bytes are not the MYIF tag
        TruncatedHeader: If fewer than HEADER_SIZE bytes are available
    """
    magic = bytes(data[:4])
    if len(magic) == 4 and magic != MAGIC:
        raise InvalidFormat(
            f"Invalid file format: expected {MAGIC!r}, got {magic!r}"
        )
    if len(data) < HEADER_SIZE:
        raise TruncatedHeader(
            f"Data too short: need {HEADER_SIZE} header bytes, got {len(data)}"
        )

    _, width, height = struct.unpack_from(HEADER_FORMAT, data)
    logger.debug("Parsed header: %dx%d", width, height)
    return ContainerHeader(width=width, height=height)
