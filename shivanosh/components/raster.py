"""Raster component: an in-memory RGBA image."""

from __future__ import annotations

from typing import Any

import numpy as np
from pydantic import BaseModel, Field, model_validator

from shivanosh.core.header import BYTES_PER_PIXEL, MAX_DIMENSION


class Component(BaseModel):
    """Base class for all Shivanosh components.

    Components are data containers using Pydantic for validation and type safety.
    Pixel data is held as NumPy arrays.
    """

    model_config = {"arbitrary_types_allowed": True}


class Raster(Component):
    """RGBA raster, row-major, top-to-bottom, left-to-right.

    Attributes:
        width: Image width in pixels (uint32)
        height: Image height in pixels (uint32)
        pixels: (height, width, 4) uint8 array of straight (non-premultiplied) RGBA
    """

    width: int = Field(ge=0, le=MAX_DIMENSION)
    height: int = Field(ge=0, le=MAX_DIMENSION)
    pixels: np.ndarray

    @model_validator(mode="after")
    def check_buffer(self) -> Raster:
        """Enforce len(buffer) == width * height * 4."""
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"Expected uint8 pixels, got {self.pixels.dtype}")
        expected = (self.height, self.width, BYTES_PER_PIXEL)
        if self.pixels.shape != expected:
            raise ValueError(
                f"Expected pixel shape {expected}, got {self.pixels.shape}"
            )
        return self

    @classmethod
    def from_buffer(cls, width: int, height: int, buffer: bytes) -> Raster:
        """Build a raster from a tightly packed RGBA byte buffer.

        Args:
            width: Image width
            height: Image height
            buffer: Exactly width * height * 4 bytes

        Raises:
            ValueError: If the buffer length does not match the dimensions
        """
        expected = width * height * BYTES_PER_PIXEL
        if len(buffer) != expected:
            raise ValueError(
                f"Buffer length {len(buffer)} does not match "
                f"{width}x{height} RGBA ({expected} bytes)"
            )
        shape = (height, width, BYTES_PER_PIXEL)
        if expected == 0:
            return cls(
                width=width, height=height, pixels=np.zeros(shape, dtype=np.uint8)
            )
        pixels = np.frombuffer(bytes(buffer), dtype=np.uint8).reshape(shape)
        return cls(width=width, height=height, pixels=pixels.copy())

    @classmethod
    def from_array(cls, array: np.ndarray) -> Raster:
        """Build a raster from an (H, W, 4) uint8 array."""
        if not isinstance(array, np.ndarray):
            raise TypeError(f"Expected ndarray, got {type(array)}")
        if array.ndim != 3 or array.shape[2] != BYTES_PER_PIXEL:
            raise ValueError(f"Expected shape (H, W, 4), got {array.shape}")
        height, width = array.shape[:2]
        return cls(
            width=width,
            height=height,
            pixels=np.ascontiguousarray(array),
        )

    @classmethod
    def empty(cls) -> Raster:
        """Return a 0x0 raster."""
        return cls(width=0, height=0, pixels=np.zeros((0, 0, 4), dtype=np.uint8))

    @property
    def size(self) -> tuple[int, int]:
        """(width, height)."""
        return self.width, self.height

    @property
    def nbytes(self) -> int:
        """Length of the flat RGBA buffer."""
        return self.width * self.height * BYTES_PER_PIXEL

    def tobytes(self) -> bytes:
        """Return the flat row-major RGBA buffer."""
        return self.pixels.tobytes()

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Return the (r, g, b, a) value at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) outside {self.width}x{self.height} raster"
            )
        r, g, b, a = (int(v) for v in self.pixels[y, x])
        return r, g, b, a

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Raster):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.pixels, other.pixels)
        )

    def __repr__(self) -> str:
        return f"Raster(width={self.width}, height={self.height})"
