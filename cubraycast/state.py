"""Everything the running game keeps between frames."""

from __future__ import annotations

import time
from dataclasses import dataclass, field

from .color import Color
from .image import Image
from .level import GameMap, Player
from .raycast import Ray, initialize_rays
from .textures import Animation

WINDOW_WIDTH = 1920
WINDOW_HEIGHT = 1080
MINIMAP_SIZE = 250
TITLE = "cub3D"


def now() -> float:
    """Current wall-clock time in seconds."""
    return time.time()


def _background() -> Image:
    return Image.blank(WINDOW_WIDTH, WINDOW_HEIGHT)


def _minimap() -> Image:
    return Image.blank(MINIMAP_SIZE, MINIMAP_SIZE)


@dataclass
class Images:
    """The frame buffers drawn into and the textures drawn from."""

    background: Image = field(default_factory=_background)
    minimap: Image = field(default_factory=_minimap)
    door: Image | None = None
    north: Animation | None = None
    south: Animation | None = None
    west: Animation | None = None
    east: Animation | None = None


@dataclass
class Keys:
    """Which movement and turning keys are held down."""

    w: bool = False
    a: bool = False
    s: bool = False
    d: bool = False
    rotate_left: bool = False
    rotate_right: bool = False


@dataclass
class GameState:
    """The level, the player and the rendering state of one game."""

    game_map: GameMap
    player: Player
    floor: Color
    ceiling: Color
    images: Images = field(default_factory=Images)
    keys: Keys = field(default_factory=Keys)
    rays: list[Ray] = field(default_factory=initialize_rays)
    shadow: bool = False
    mouse_control: bool = False
    door_cell: tuple[int, int] | None = None
    door_time: float | None = None
    frame_second: float = field(default_factory=now)
    second: float = 0.0