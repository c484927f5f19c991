"""Data components."""

from shivanosh.components.raster import Raster

__all__ = ["Raster"]
