"""High-level API for Shivanosh encoding and decoding.

Provides encode()/decode() for in-memory use, file helpers that read and
write .shivanosh containers, and batch conversion of source images.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable

from shivanosh.components.raster import Raster
from shivanosh.config import ShivanoshConfig
from shivanosh.core.errors import ShivanoshError
from shivanosh.core.header import HEADER_SIZE
from shivanosh.core.serialization import (
    decode_raster,
    encode_raster,
    read_container_header,
)
from shivanosh.imaging import load_raster

logger = logging.getLogger(__name__)


def encode(raster: Raster) -> bytes:
    """Encode a raster to container bytes.

    Example:
        >>> import numpy as np
        >>> from shivanosh import Raster, encode, decode
        >>> pixels = np.random.randint(0, 256, (32, 32, 4), dtype=np.uint8)
        >>> raster = Raster.from_array(pixels)
        >>> decode(encode(raster)) == raster
        True
    """
    return encode_raster(raster)


def decode(data: bytes) -> Raster:
    """Decode container bytes to a raster.

    Raises:
        DecodeError: InvalidFormat, TruncatedHeader, CorruptPayload or SizeMismatch
    """
    return decode_raster(data)


def output_path_for(path: str | Path, extension: str | None = None) -> Path:
    """Return ``path`` with its extension replaced by the container extension."""
    extension = extension or ShivanoshConfig().extension
    return Path(path).with_suffix(extension)


def _write_atomic(path: Path, data: bytes) -> None:
    """Write via a temporary sibling file and rename it into place."""
    fd, tmp_name = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise


def encode_file(
    source_path: str | Path,
    output_path: str | Path | None = None,
    config: ShivanoshConfig | None = None,
) -> Path:
    """Convert a source image (PNG, JPEG, ...) to a .shivanosh file.

    Args:
        source_path: Image readable by Pillow
        output_path: Destination (defaults to the source with its extension replaced)
        config: Settings (defaults if None)

    Returns:
        Path of the written container

    Raises:
        SourceImageError: If the source image cannot be read
        EncodeBackendFailure: If compression fails
        OSError: If the container cannot be written
    """
    config = config or ShivanoshConfig()
    destination = (
        Path(output_path)
        if output_path is not None
        else output_path_for(source_path, config.extension)
    )

    raster = load_raster(source_path)
    data = encode_raster(raster)
    _write_atomic(destination, data)

    logger.info(
        "Converted %s -> %s (%dx%d, %d bytes)",
        source_path,
        destination,
        raster.width,
        raster.height,
        len(data),
    )
    return destination


def decode_file(path: str | Path) -> Raster:
    """Read a .shivanosh file and decode it.

    Raises:
        OSError: If the file cannot be read
        DecodeError: If the contents are not a valid container
    """
    data = Path(path).read_bytes()
    raster = decode_raster(data)
    logger.debug("Decoded %s: %dx%d", path, raster.width, raster.height)
    return raster


@dataclass
class ConversionReport:
    """Outcome of a batch conversion.

    Attributes:
        converted: (source, destination) pairs written successfully
        failed: (source, error message) pairs
        status: Human-readable summary of the last event
    """

    converted: list[tuple[Path, Path]] = field(default_factory=list)
    failed: list[tuple[Path, str]] = field(default_factory=list)
    status: str = ""

    @property
    def ok(self) -> bool:
        """True if at least one file was converted and none failed."""
        return bool(self.converted) and not self.failed


def convert_images(
    paths: Iterable[str | Path],
    stop_on_error: bool | None = None,
    output_dir: str | Path | None = None,
    config: ShivanoshConfig | None = None,
) -> ConversionReport:
    """Convert several source images to .shivanosh files.

    Each image is written next to its source unless ``output_dir`` is set.

    Args:
        paths: Source images
        stop_on_error: Abort at the first failure (config value if None)
        output_dir: Directory for the containers
        config: Settings (defaults if None)

    Returns:
        ConversionReport describing what was written and what failed
    """
    config = config or ShivanoshConfig()
    if stop_on_error is None:
        stop_on_error = config.stop_on_error

    report = ConversionReport()
    sources = [Path(p) for p in paths]
    if not sources:
        report.status = "No images selected!"
        return report

    for source in sources:
        destination = output_path_for(source, config.extension)
        if output_dir is not None:
            destination = Path(output_dir) / destination.name
        try:
            written = encode_file(source, destination, config=config)
        except (ShivanoshError, OSError) as e:
            logger.warning("Error converting %s: %s", source, e)
            report.failed.append((source, str(e)))
            report.status = f"Error converting {source}: {e}"
            if stop_on_error:
                break
            continue
        report.converted.append((source, written))
        report.status = f"Successfully converted: {source}"

    return report


def get_container_info(data: bytes) -> dict[str, Any]:
    """Get header fields of a container without decompressing it.

    Returns:
        Dictionary with keys: width, height, pixel_bytes, payload_bytes
    """
    header = read_container_header(data)
    return {
        "width": header.width,
        "height": header.height,
        "pixel_bytes": header.expected_payload_size,
        "payload_bytes": len(data) - HEADER_SIZE,
    }


def get_compression_ratio(raster: Raster, data: bytes) -> float:
    """Calculate compression ratio (raw RGBA size / container size)."""
    compressed_bytes = len(data)
    return raster.nbytes / compressed_bytes if compressed_bytes > 0 else float("inf")
