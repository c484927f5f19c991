"""Bridge between Pillow images and rasters.

Source images of any format Pillow can read are flattened to RGBA before
encoding. Decoded rasters come back as straight-alpha RGBA images; any
premultiplication for display is left to the viewer.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from shivanosh.components.raster import Raster
from shivanosh.core.errors import ImageExportError, SourceImageError

logger = logging.getLogger(__name__)


def image_to_raster(image: Image.Image) -> Raster:
    """Convert a Pillow image to a raster, converting to RGBA if needed."""
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    return Raster.from_array(np.asarray(image, dtype=np.uint8))


def load_raster(path: str | Path) -> Raster:
    """Open a source image and return its pixels as an RGBA raster.

    Pixels are taken in stored order; EXIF orientation is not applied.

    Raises:
        SourceImageError: If the file is missing or not a readable image
    """
    try:
        with Image.open(path) as img:
            raster = image_to_raster(img)
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError) as e:
        raise SourceImageError(f"Cannot read image {path}: {e}") from e

    logger.debug("Loaded %s as %dx%d raster", path, raster.width, raster.height)
    return raster


def raster_to_image(raster: Raster) -> Image.Image:
    """Return the raster as an RGBA Pillow image."""
    if raster.width == 0 or raster.height == 0:
        return Image.new("RGBA", (raster.width, raster.height))
    return Image.fromarray(raster.pixels)


def save_raster(raster: Raster, path: str | Path) -> None:
    """Export a raster to a regular image file; format comes from the suffix.

    Raises:
        ImageExportError: If the raster is empty or the format is unknown
        OSError: If the file cannot be written
    """
    if raster.width == 0 or raster.height == 0:
        raise ImageExportError(
            f"Cannot export an empty {raster.width}x{raster.height} image to {path}"
        )
    try:
        raster_to_image(raster).save(path)
    except ValueError as e:
        raise ImageExportError(f"Cannot export image to {path}: {e}") from e
    logger.info("Exported %dx%d raster to %s", raster.width, raster.height, path)
