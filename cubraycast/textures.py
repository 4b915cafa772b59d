"""Loading wall textures and cycling through animated ones."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PIL import Image as PILImage

from .config import path_is_valid
from .image import Image

DOOR_TEXTURE = "./textures/door.xpm"
TRANSPARENT = 0xFF000000


class TextureError(Exception):
    """Raised when a texture cannot be loaded."""


@dataclass
class Animation:
    """A looping sequence of frames with a current position."""

    frames: list[Image]
    index: int = 0

    def __post_init__(self) -> None:
        if not self.frames:
            raise TextureError("an animation needs at least one frame")
        self.index %= len(self.frames)

    @property
    def current(self) -> Image:
        return self.frames[self.index]

    def advance(self) -> Image:
        """Move to the next frame, wrapping to the first, and return it."""
        self.index = (self.index + 1) % len(self.frames)
        return self.current


def load_image(path: str) -> Image:
    """Load an image file as packed 0xRRGGBB pixels; transparent ones get the alpha bits."""
    if not path_is_valid(path):
        raise TextureError(f"cannot open texture {path}")
    try:
        with PILImage.open(path) as source:
            rgba = np.asarray(source.convert("RGBA"), dtype=np.uint32)
    except (OSError, ValueError, SyntaxError) as exc:
        raise TextureError(f"cannot load texture {path}: {exc}") from exc
    packed = (rgba[..., 0] << 16) | (rgba[..., 1] << 8) | rgba[..., 2]
    packed[rgba[..., 3] == 0] = TRANSPARENT
    return Image(packed.astype(np.uint32))


def load_animation(paths: list[str]) -> Animation:
    """Load every path, in order, as the frames of one animation."""
    if not paths:
        raise TextureError("no texture path given")
    return Animation([load_image(path) for path in paths])