"""Casting rays through the grid to find the walls they hit."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .level import (
    DOOR,
    EAST,
    EMPTY,
    HALF_PI,
    NORTH,
    OUTSIDE,
    REC_HEIGHT,
    REC_WIDTH,
    SOUTH,
    THREE_HALF_PI,
    WALL,
    WEST,
    GameMap,
    Vec2,
)

FLT_MAX = 3.4028234663852886e38
RAY_COUNT = 1920
PERSPECTIVE = 60.0
RAD_ANG = math.pi / 180


@dataclass
class Ray:
    """One screen column's ray and what it hit.

    ``persp_angle`` is the ray's offset from the view direction,
    ``relat_angle`` its world angle, ``hit`` the face or door struck and
    ``v_h`` whether that was a vertical ('v') or horizontal ('h') grid line.
    """

    persp_angle: float = 0.0
    relat_angle: float = 0.0
    pos: Vec2 = field(default_factory=Vec2)
    dis: float = 0.0
    hit: str = EMPTY
    v_h: str = "h"


def distance(p1: Vec2, p2: Vec2) -> float:
    """Euclidean distance between two points."""
    x = p1.x - p2.x
    y = p1.y - p2.y
    return math.sqrt(x * x + y * y)


def get_offset(pos: Vec2, rad: float, v_h: str) -> float:
    """Distance from a point to the next grid line in the ray's direction."""
    if v_h == "h":
        if 0.0 < rad <= math.pi:
            return REC_HEIGHT - math.fmod(pos.y, REC_HEIGHT)
        return math.fmod(pos.y, REC_HEIGHT)
    if v_h == "v":
        if HALF_PI < rad <= THREE_HALF_PI:
            return math.fmod(pos.x, REC_WIDTH)
        return REC_WIDTH - math.fmod(pos.x, REC_WIDTH)
    return 0.0


def inside_map(game_map: GameMap, point: Vec2) -> bool:
    """Tell whether a point lies within the map, one unit in from its edges."""
    if not (math.isfinite(point.x) and math.isfinite(point.y)):
        return False
    x = math.trunc(point.x)
    return (
        1 <= x <= game_map.width * REC_WIDTH - 1
        and 1 <= point.y <= game_map.height * REC_HEIGHT - 1
    )


def step(point: Vec2, add: Vec2, rad: float) -> Vec2:
    """Move a point by a non-negative step, signed by the ray's direction."""
    dx = -add.x if HALF_PI < rad < THREE_HALF_PI else add.x
    dy = add.y if 0 < rad < math.pi else -add.y
    return Vec2(point.x + dx, point.y + dy)


def hits_wall(game_map: GameMap, point: Vec2, rad: float, v_h: str) -> str:
    """Return the face struck at a grid crossing, DOOR, or EMPTY for none."""
    x = int(point.x) // REC_WIDTH
    y = int(point.y) // REC_HEIGHT
    leftward = HALF_PI < rad <= THREE_HALF_PI
    upward = not (0 < rad <= math.pi)
    if v_h == "v" and leftward:
        x -= 1
    elif v_h == "h" and upward:
        y -= 1
    cell = game_map.grid[y][x]
    if cell == DOOR:
        return DOOR
    if cell in (WALL, OUTSIDE):
        if v_h == "v":
            return WEST if leftward else EAST
        if v_h == "h":
            return SOUTH if upward else NORTH
    return EMPTY


def _walk(game_map: GameMap, origin: Vec2, rad: float, v_h: str, first: Vec2, then: Vec2) -> tuple[Vec2, str]:
    pos = origin
    add = first
    hit = EMPTY
    while True:
        pos = step(pos, add, rad)
        if not inside_map(game_map, pos):
            return pos, hit
        hit = hits_wall(game_map, pos, rad, v_h)
        if hit != EMPTY:
            return pos, hit
        add = then


def _vertical_hit(game_map: GameMap, origin: Vec2, rad: float, tan_a: float) -> tuple[Vec2, str]:
    if rad == 0 or rad == math.pi:
        return Vec2(FLT_MAX, origin.y), EMPTY
    offset = get_offset(origin, rad, "v")
    first = Vec2(offset, abs(offset * tan_a))
    then = Vec2(float(REC_WIDTH), abs(REC_WIDTH * tan_a))
    return _walk(game_map, origin, rad, "v", first, then)


def _horizontal_hit(game_map: GameMap, origin: Vec2, rad: float, tan_a: float) -> tuple[Vec2, str]:
    if rad == HALF_PI or rad == THREE_HALF_PI:
        return Vec2(origin.x, FLT_MAX), EMPTY

    def run(dy: float) -> float:
        return abs(dy / tan_a) if tan_a else math.inf

    offset = get_offset(origin, rad, "h")
    first = Vec2(run(offset), offset)
    then = Vec2(run(REC_HEIGHT), float(REC_HEIGHT))
    return _walk(game_map, origin, rad, "h", first, then)


def cast_ray(game_map: GameMap, origin: Vec2, ray: Ray) -> Ray:
    """Cast a ray from origin along ray.relat_angle and record the nearest hit.

    The ray is updated in place and returned; its distance is corrected for
    the fish-eye effect using its perspective angle.
    """
    tan_a = math.tan(ray.relat_angle)
    h_pos, h_hit = _horizontal_hit(game_map, origin, ray.relat_angle, tan_a)
    v_pos, v_hit = _vertical_hit(game_map, origin, ray.relat_angle, tan_a)
    h_dis = distance(origin, h_pos)
    v_dis = distance(origin, v_pos)
    if h_dis > v_dis:
        ray.pos, ray.dis, ray.hit, ray.v_h = v_pos, v_dis, v_hit, "v"
    else:
        ray.pos, ray.dis, ray.hit, ray.v_h = h_pos, h_dis, h_hit, "h"
    ray.dis *= math.cos(ray.persp_angle)
    return ray


def initialize_rays(count: int = RAY_COUNT) -> list[Ray]:
    """Create rays spread evenly across the field of view, left to right."""
    spread = PERSPECTIVE / count if count else 0.0
    return [
        Ray(persp_angle=((i + 1) * spread - PERSPECTIVE / 2.0) * RAD_ANG)
        for i in range(count)
    ]