"""Moving and turning the player, and closing doors left open behind it."""

from __future__ import annotations

import math

from .level import (
    DOOR,
    EMPTY,
    HALF_PI,
    OPEN_DOOR,
    REC_HEIGHT,
    REC_WIDTH,
    THREE_HALF_PI,
    TWO_PI,
    Vec2,
)
from .raycast import RAD_ANG, Ray, cast_ray, get_offset
from .state import WINDOW_HEIGHT, WINDOW_WIDTH, GameState

MOVE_SPEED = 6
WALL_MARGIN = 20.0
TURN_STEP = RAD_ANG * 2.5
DOOR_CLOSE_DELAY = 1.0
_PASSABLE = (EMPTY, OPEN_DOOR)


def _passable(grid: list[list[str]], x: int, y: int) -> bool:
    if 0 <= y < len(grid) and 0 <= x < len(grid[y]):
        return grid[y][x] in _PASSABLE
    return False


def collision(state: GameState, pos: Vec2) -> Vec2:
    """Push a proposed position back so it keeps a margin from nearby walls."""
    grid = state.game_map.grid
    player = state.player.pos
    x = int(pos.x / REC_WIDTH)
    y = int(pos.y / REC_HEIGHT)
    new_x, new_y = pos.x, pos.y

    east = get_offset(pos, 0.0, "v")
    west = get_offset(pos, math.pi, "v")
    if player.x < pos.x and east < WALL_MARGIN and not _passable(grid, x + 1, y):
        new_x -= WALL_MARGIN - east
    elif player.x >= pos.x and west < WALL_MARGIN and not _passable(grid, x - 1, y):
        new_x += WALL_MARGIN - west

    south = get_offset(pos, HALF_PI, "h")
    north = get_offset(pos, THREE_HALF_PI, "h")
    if player.y < pos.y and south < WALL_MARGIN and not _passable(grid, x, y + 1):
        new_y -= WALL_MARGIN - south
    elif player.y >= pos.y and north < WALL_MARGIN and not _passable(grid, x, y - 1):
        new_y += WALL_MARGIN - north
    return Vec2(new_x, new_y)


def player_move(state: GameState, pressed: bool, rad: float) -> None:
    """Step the player one move along the angle rad if the key is held."""
    if not pressed:
        return
    if rad <= 0:
        rad += TWO_PI
    if rad >= TWO_PI:
        rad -= TWO_PI
    if math.fmod(rad, HALF_PI) == 0:
        rad += 0.0000042
    origin = state.player.pos
    ray = cast_ray(state.game_map, origin, Ray(relat_angle=rad))
    if ray.dis <= MOVE_SPEED:
        new_pos = ray.pos
    else:
        new_pos = Vec2(origin.x + math.cos(rad) * MOVE_SPEED, origin.y + math.sin(rad) * MOVE_SPEED)
    new_pos = collision(state, new_pos)
    if _passable(state.game_map.grid, int(new_pos.x / REC_WIDTH), int(new_pos.y / REC_HEIGHT)):
        state.player.pos = new_pos


def limit_player_in_map(state: GameState) -> None:
    """Keep the player at least a wall margin inside the map's bounds."""
    max_x = state.game_map.width * REC_WIDTH - WALL_MARGIN
    max_y = state.game_map.height * REC_HEIGHT - WALL_MARGIN
    pos = state.player.pos
    state.player.pos = Vec2(
        min(max(pos.x, WALL_MARGIN), max_x),
        min(max(pos.y, WALL_MARGIN), max_y),
    )


def _mouse_turn(state: GameState, mouse_pos: tuple[int, int] | None) -> bool:
    if not state.mouse_control or mouse_pos is None:
        return False
    x, y = mouse_pos
    if not 20 < y < WINDOW_HEIGHT:
        return False
    state.player.angle += RAD_ANG * int((x - WINDOW_WIDTH // 2) / 10)
    state.player.angle = math.fmod(state.player.angle, TWO_PI)
    return True


def update_player_status(state: GameState, mouse_pos: tuple[int, int] | None = None) -> bool:
    """Apply one frame of movement and turning.

    Returns True when the mouse steered the view, meaning the pointer
    should be moved back to the centre of the window.
    """
    keys = state.keys
    angle = state.player.angle
    player_move(state, keys.w, angle)
    player_move(state, keys.d, angle + HALF_PI)
    player_move(state, keys.s, angle - math.pi)
    player_move(state, keys.a, angle - HALF_PI)
    if keys.rotate_right:
        state.player.angle += TURN_STEP
        if state.player.angle >= TWO_PI:
            state.player.angle -= TWO_PI
    if keys.rotate_left:
        state.player.angle -= TURN_STEP
        if state.player.angle < 0:
            state.player.angle += TWO_PI
    limit_player_in_map(state)
    recenter = _mouse_turn(state, mouse_pos)
    if state.player.angle < 0:
        state.player.angle += TWO_PI
    return recenter


def track_door(state: GameState, current_time: float) -> None:
    """Close the open door once the player has left its cell for long enough.

    ``state.door_cell`` holds the door's (row, column).
    """
    if state.door_time is None or state.door_cell is None:
        return
    here = (int(state.player.pos.y / REC_HEIGHT), int(state.player.pos.x / REC_WIDTH))
    if here == state.door_cell:
        return
    if current_time - state.door_time > DOOR_CLOSE_DELAY:
        row, col = state.door_cell
        state.game_map.grid[row][col] = DOOR
        state.door_cell = None
        state.door_time = None