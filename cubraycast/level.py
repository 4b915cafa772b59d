"""The playable grid built from a level file, and the player placed on it."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .config import ConfigError, LevelFile

REC_WIDTH = 100
REC_HEIGHT = 100

EMPTY = "0"
WALL = "1"
DOOR = "2"
OPEN_DOOR = "3"
OUTSIDE = "M"
NORTH = "N"
SOUTH = "S"
WEST = "W"
EAST = "E"

HALF_PI = math.pi / 2
THREE_HALF_PI = 4.71238898038468985769396507491925432
TWO_PI = 6.28318530717958647692528676655900576

_PLAYER_ANGLES = {
    NORTH: HALF_PI,
    EAST: TWO_PI,
    SOUTH: THREE_HALF_PI,
    WEST: math.pi,
}


@dataclass(frozen=True)
class Vec2:
    """A point or displacement in world units."""

    x: float = 0.0
    y: float = 0.0


@dataclass
class GameMap:
    """The map padded with a blank border; cells are addressed as grid[y][x]."""

    grid: list[list[str]]
    width: int
    height: int


@dataclass
class Player:
    """Where the player stands and which way it looks, in radians."""

    pos: Vec2
    angle: float


def _flood_fill(grid: list[list[str]], x: int, y: int) -> None:
    stack = [(x, y)]
    while stack:
        x, y = stack.pop()
        if y < 0 or x < 0 or y >= len(grid) or x >= len(grid[y]):
            continue
        cell = grid[y][x]
        if cell in (WALL, OUTSIDE):
            continue
        if cell == " ":
            grid[y][x] = OUTSIDE
        elif cell in (EMPTY, DOOR):
            raise ConfigError("the map is not closed by walls")
        else:
            raise ConfigError("undefined element in map")
        # Popped in the order left, up, right, down.
        stack.extend(((x, y + 1), (x + 1, y), (x, y - 1), (x - 1, y)))


def build_game_map(level: LevelFile) -> GameMap:
    """Pad the level's map with a border and check that walls enclose it.

    Every blank cell ends up marked as outside; a blank cell that touches
    floor, a door or the player makes the map invalid.
    """
    width = level.map_width + 2
    grid = [[" "] * width]
    for line in level.map:
        row = [" "] * width
        row[1 : 1 + len(line)] = line
        grid.append(row)
    grid.append([" "] * width)
    for y, row in enumerate(grid):
        for x, cell in enumerate(row):
            if cell == " ":
                _flood_fill(grid, x, y)
    return GameMap(grid=grid, width=width, height=level.map_height + 2)


def find_player(game_map: GameMap) -> Player:
    """Place the player at the centre of its start cell and clear that cell."""
    for y, row in enumerate(game_map.grid):
        for x, cell in enumerate(row):
            if cell in _PLAYER_ANGLES:
                row[x] = EMPTY
                pos = Vec2(x * REC_WIDTH + REC_WIDTH / 2, y * REC_HEIGHT + REC_HEIGHT / 2)
                return Player(pos=pos, angle=_PLAYER_ANGLES[cell])
    raise ConfigError("the map holds no player")