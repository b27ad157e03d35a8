# -*- coding: utf-8 -*-
"""Immutable RGB pixel grids and their one-pixel-wide column slices.

A ``PixelBuffer`` is what the rasterizer produces for a string and what the
alignment engine consumes. It wraps a read-only ``uint8`` array of shape
``[H, W, 3]``; the alpha channel of source images is dropped on the way in.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from PIL import Image


@dataclass(frozen=True, eq=False)
class ColumnSlice:
    """A one-pixel-wide, full-height view into a PixelBuffer.

    Attributes:
        x: Horizontal offset of the column in its buffer.
        pixels: Read-only RGB values of the column. Shape: [H, 3]
    """

    x: int
    pixels: np.ndarray

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def same_as(self, other: "ColumnSlice") -> bool:
        """Return True if both columns have identical size and pixels."""
        return self.pixels.shape == other.pixels.shape and bool(
            np.array_equal(self.pixels, other.pixels)
        )


class PixelBuffer:
    """Immutable W x H grid of 24-bit RGB pixels.

    Attributes:
        width: Number of pixel columns (may be 0).
        height: Number of pixel rows (may be 0).

    Example:
        >>> buf = PixelBuffer(np.zeros((16, 4, 3), dtype=np.uint8))
        >>> buf.width, buf.height
        (4, 16)
        >>> buf.column(4) is None
        True
    """

    def __init__(self, pixels: np.ndarray) -> None:
        """Initialize PixelBuffer.

        Args:
            pixels: RGB array of shape [H, W, 3]. Values are cast to uint8
                and copied, so later changes to ``pixels`` are not seen.

        Raises:
            ValueError: If the array is not [H, W, 3].
        """
        array = np.asarray(pixels)
        if array.ndim != 3 or array.shape[2] != 3:
            raise ValueError(
                f"Expected an RGB array of shape [H, W, 3], got: {array.shape}"
            )

        self._pixels = np.array(array, dtype=np.uint8, copy=True)
        self._pixels.setflags(write=False)

    @classmethod
    def empty(cls, height: int = 0, width: int = 0) -> "PixelBuffer":
        """Create a buffer with no pixels in at least one dimension."""
        return cls(np.zeros((height, width, 3), dtype=np.uint8))

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        """Create a buffer from a PIL image, discarding any alpha channel."""
        if image.width == 0 or image.height == 0:
            return cls.empty(image.height, image.width)
        return cls(np.asarray(image.convert("RGB")))

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def shape(self) -> Tuple[int, int]:
        """(width, height) of the buffer."""
        return self.width, self.height

    def pixel(self, x: int, y: int) -> Tuple[int, int, int]:
        """Return the (r, g, b) triple at column x, row y.

        Raises:
            IndexError: If (x, y) lies outside the buffer.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) out of range for {self.width}x{self.height} buffer"
            )
        r, g, b = self._pixels[y, x]
        return int(r), int(g), int(b)

    def column(self, x: int) -> Optional[ColumnSlice]:
        """Return column x, or None when x is at or past the right edge.

        Raises:
            IndexError: If x is negative.
        """
        if x < 0:
            raise IndexError(f"Column index must be non-negative, got: {x}")
        if x >= self.width:
            return None
        return ColumnSlice(x=x, pixels=self._pixels[:, x, :])

    def to_array(self) -> np.ndarray:
        """Return a writable copy of the pixels. Shape: [H, W, 3]"""
        return self._pixels.copy()

    def to_image(self) -> Image.Image:
        return Image.fromarray(self._pixels)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self._pixels.shape == other._pixels.shape and bool(
            np.array_equal(self._pixels, other._pixels)
        )

    def __hash__(self) -> int:
        return hash((self._pixels.shape, self._pixels.tobytes()))

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"
