"""A 32-bit pixel buffer with bounds-checked access."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass
class Image:
    """Pixels stored row by row as unsigned 32-bit values."""

    pixels: np.ndarray

    @classmethod
    def blank(cls, width: int, height: int) -> "Image":
        """Create an image of the given size filled with zeros."""
        return cls(np.zeros((int(height), int(width)), dtype=np.uint32))

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def put_pixel(self, x: float, y: float, color: int) -> None:
        """Set one pixel; coordinates outside the image are ignored."""
        x, y = int(x), int(y)
        if 0 <= y < self.height and 0 <= x < self.width:
            self.pixels[y, x] = int(color) & 0xFFFFFFFF

    def get_pixel(self, x: float, y: float) -> int:
        """Read one pixel; coordinates outside the image read as 0."""
        x, y = int(x), int(y)
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            return 0
        return int(self.pixels[y, x])