"""Compression codec used for the container payload.

The container treats compression as a black box with two operations,
compress and decompress. ZlibCodec is the only backend: the payload is a
zlib stream, written at the strongest level.
"""

from __future__ import annotations

import logging
import zlib
from abc import ABC, abstractmethod

from shivanosh.core.errors import CorruptPayload, EncodeBackendFailure

logger = logging.getLogger(__name__)

BEST_COMPRESSION = zlib.Z_BEST_COMPRESSION


class CompressionCodec(ABC):
    """Base class for lossless byte-stream compressors.

    Implementations must be lossless and deterministic for a given level.
    """

    name: str = "codec"

    @abstractmethod
    def compress(self, data: bytes, level: int = BEST_COMPRESSION) -> bytes:
        """Compress ``data``.

        Raises:
            EncodeBackendFailure: If the backend fails
        """
        pass

    @abstractmethod
    def decompress(self, data: bytes) -> bytes:
        """Decompress ``data``.

        Raises:
            CorruptPayload: If ``data`` is corrupt or truncated
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class ZlibCodec(CompressionCodec):
    """zlib/DEFLATE codec."""

    name = "zlib"

    def compress(self, data: bytes, level: int = BEST_COMPRESSION) -> bytes:
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"Expected bytes, got {type(data)}")
        if not 0 <= level <= 9:
            raise ValueError(f"zlib level must be 0..9, got {level}")
        try:
            compressed = zlib.compress(data, level)
        except (zlib.error, MemoryError) as e:
            raise EncodeBackendFailure(f"zlib compression failed: {e}") from e
        logger.debug(
            "zlib level %d: %d -> %d bytes", level, len(data), len(compressed)
        )
        return compressed

    def decompress(self, data: bytes) -> bytes:
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"Expected bytes, got {type(data)}")
        try:
            return zlib.decompress(data)
        except zlib.error as e:
            raise CorruptPayload(f"Failed to decompress payload: {e}") from e
