"""Raster serialization to and from the Shivanosh container.

encode_raster frames a raster as header + compressed pixels; decode_raster
validates a container and rebuilds the raster. Both work on in-memory
bytes only. File handling belongs to the caller (see shivanosh.api).
"""

from __future__ import annotations

import logging

import numpy as np

from shivanosh.components.raster import Raster
from shivanosh.core.errors import SizeMismatch
from shivanosh.core.header import (
    BYTES_PER_PIXEL,
    HEADER_SIZE,
    ContainerHeader,
    pack_header,
    unpack_header,
)
from shivanosh.systems.compression import BEST_COMPRESSION, CompressionCodec, ZlibCodec

logger = logging.getLogger(__name__)


def encode_raster(raster: Raster, codec: CompressionCodec | None = None) -> bytes:
    """Serialize a raster to container bytes.

    Args:
        raster: Raster to encode
        codec: Compression backend (zlib if None)

    Returns:
        Header followed by the compressed RGBA buffer, with no length prefix

    Raises:
        TypeError: If raster is not a Raster
        ValueError: If the pixel buffer does not match the dimensions
        EncodeBackendFailure: If compression fails
    """
    if not isinstance(raster, Raster):
        raise TypeError(f"Expected Raster, got {type(raster)}")

    buffer = raster.tobytes()
    if len(buffer) != raster.nbytes:
        raise ValueError(
            f"Pixel buffer is {len(buffer)} bytes, expected {raster.nbytes}"
        )

    codec = codec or ZlibCodec()
    header = pack_header(raster.width, raster.height)
    payload = codec.compress(buffer, BEST_COMPRESSION)
    logger.debug(
        "Encoded %dx%d raster: %d pixel bytes -> %d payload bytes",
        raster.width,
        raster.height,
        len(buffer),
        len(payload),
    )
    return header + payload


def read_container_header(data: bytes) -> ContainerHeader:
    """Parse only the header of a container, leaving the payload untouched."""
    return unpack_header(data)


def decode_raster(data: bytes, codec: CompressionCodec | None = None) -> Raster:
    """Deserialize container bytes to a raster.

    The whole of ``data`` must be one container: everything after the
    header is taken as the compressed payload.

    Args:
        data: Container bytes
        codec: Compression backend (zlib if None)

    Returns:
        Fully populated raster

    Raises:
        InvalidFormat: If the magic tag is wrong
        TruncatedHeader: If the header is incomplete
        CorruptPayload: If the payload cannot be decompressed
        SizeMismatch: If the payload is shorter than width * height * 4
    """
    header = unpack_header(data)
    payload = bytes(data[HEADER_SIZE:])

    codec = codec or ZlibCodec()
    decompressed = codec.decompress(payload)

    expected = header.expected_payload_size
    if len(decompressed) < expected:
        raise SizeMismatch(expected=expected, actual=len(decompressed))
    if len(decompressed) > expected:
        logger.debug(
            "Ignoring %d trailing payload bytes", len(decompressed) - expected
        )

    shape = (header.height, header.width, BYTES_PER_PIXEL)
    if expected == 0:
        return Raster(
            width=header.width,
            height=header.height,
            pixels=np.zeros(shape, dtype=np.uint8),
        )

    # Group i lands at (i % width, i // width), channels in R, G, B, A order
    pixels = np.frombuffer(decompressed, dtype=np.uint8, count=expected).reshape(shape)
    return Raster(width=header.width, height=header.height, pixels=pixels.copy())
