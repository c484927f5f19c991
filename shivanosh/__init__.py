"""Shivanosh: a minimal RGBA image container.

A .shivanosh file is a 12-byte header (magic 'MYIF', little-endian
uint32 width and height) followed by the zlib-compressed RGBA pixels.

Quick Start:
    >>> from shivanosh import Raster, encode, decode
    >>> import numpy as np
    >>>
    >>> pixels = np.random.randint(0, 256, (64, 64, 4), dtype=np.uint8)
    >>> raster = Raster.from_array(pixels)
    >>>
    >>> data = encode(raster)
    >>> decode(data) == raster
    True

Files:
    >>> from shivanosh import encode_file, decode_file
    >>> path = encode_file("photo.png")  # writes photo.shivanosh
    >>> raster = decode_file(path)
"""

__version__ = "0.1.0"

from shivanosh.api import (
    ConversionReport,
    convert_images,
    decode,
    decode_file,
    encode,
    encode_file,
    get_compression_ratio,
    get_container_info,
    output_path_for,
)
from shivanosh.components.raster import Raster
from shivanosh.core.errors import (
    ConfigError,
    CorruptPayload,
    DecodeError,
    EncodeBackendFailure,
    EncodeError,
    ImageExportError,
    InvalidFormat,
    ShivanoshError,
    SizeMismatch,
    SourceImageError,
    TruncatedHeader,
)

__all__ = [
    "__version__",
    "Raster",
    "encode",
    "decode",
    "encode_file",
    "decode_file",
    "convert_images",
    "ConversionReport",
    "output_path_for",
    "get_container_info",
    "get_compression_ratio",
    "ShivanoshError",
    "DecodeError",
    "InvalidFormat",
    "TruncatedHeader",
    "CorruptPayload",
    "SizeMismatch",
    "EncodeError",
    "EncodeBackendFailure",
    "SourceImageError",
    "ImageExportError",
    "ConfigError",
]
