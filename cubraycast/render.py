"""Drawing the floor, ceiling, walls and minimap into the frame buffers."""

from __future__ import annotations

import math

import numpy as np

from .image import Image
from .level import (
    DOOR,
    EAST,
    HALF_PI,
    NORTH,
    OPEN_DOOR,
    REC_HEIGHT,
    REC_WIDTH,
    SOUTH,
    THREE_HALF_PI,
    TWO_PI,
    WALL,
    WEST,
)
from .raycast import RAD_ANG, Ray, cast_ray
from .state import WINDOW_HEIGHT, WINDOW_WIDTH, GameState

WALL_SIZE = 150
MAX_SLICE = 15000
SHADOW_DISTANCE = 420

CELL_SIZE = 25
MINIMAP_CELLS = 11
EMPTY_CELL_COLOR = 0x10000000
BORDER_COLOR = 0x10303030
WALL_COLOR = 0x10743224
DOOR_COLOR = 0x10435231
OPEN_DOOR_COLOR = 0x1056545
FLOOR_COLOR = 0x10236412
MASK_COLOR = 0xFF000000
PLAYER_COLOR = 0x10FF0000
CROSSHAIR_COLOR = 0x10FFFFFF


def _intensity(ratio):
    return np.clip(1.0 - ratio, 0.0, 1.0)


def _pack(r: np.ndarray, g: np.ndarray, b: np.ndarray) -> np.ndarray:
    return (
        (r.astype(np.uint32) << np.uint32(16))
        | (g.astype(np.uint32) << np.uint32(8))
        | b.astype(np.uint32)
    )


def _darken(values: np.ndarray, ratio: float) -> np.ndarray:
    k = float(_intensity(ratio))
    values = values.astype(np.uint32)
    r = np.floor(((values >> np.uint32(16)) & np.uint32(0xFF)) * k)
    g = np.floor(((values >> np.uint32(8)) & np.uint32(0xFF)) * k)
    b = np.floor((values & np.uint32(0xFF)) * k)
    return _pack(r, g, b)


def paint_floor_ceiling(state: GameState) -> None:
    """Fill the upper half with the ceiling and the lower with the floor.

    With shadows on, both fade towards the horizon and the screen's sides.
    """
    pixels = state.images.background.pixels
    half_h = WINDOW_HEIGHT // 2
    ys = np.arange(WINDOW_HEIGHT)
    is_floor = ys >= half_h
    floor, ceiling = state.floor, state.ceiling
    if not state.shadow:
        pixels[:, :] = np.where(is_floor, floor.hex, ceiling.hex).astype(np.uint32)[:, None]
        return
    row_step = np.where(is_floor, ys - half_h, half_h - ys).astype(float)
    row_k = _intensity(1.0 - row_step / (WINDOW_HEIGHT / 2.0) + 0.32)
    xs = np.arange(WINDOW_WIDTH)
    col_step = np.where(xs <= WINDOW_WIDTH // 2, xs, WINDOW_WIDTH - xs).astype(float)
    col_k = _intensity(1.0 - (col_step / (WINDOW_WIDTH / 2.0) + 0.42))
    channels = []
    for floor_c, ceiling_c in ((floor.r, ceiling.r), (floor.g, ceiling.g), (floor.b, ceiling.b)):
        base = np.where(is_floor, floor_c, ceiling_c).astype(float)
        row = np.floor(base * row_k)
        channels.append(np.floor(row[:, None] * col_k[None, :]))
    pixels[:, :] = _pack(*channels)


def set_relative_ray_angle(ray: Ray, player_angle: float) -> Ray:
    """Turn the ray's view offset into a world angle in [0, 2*pi)."""
    ray.relat_angle = ray.persp_angle + player_angle
    if ray.relat_angle < 0:
        ray.relat_angle += TWO_PI
    if ray.relat_angle >= TWO_PI:
        ray.relat_angle -= TWO_PI
    if math.fmod(ray.relat_angle, HALF_PI / 2) == 0:
        ray.relat_angle += RAD_ANG * 0.00042
    return ray


def select_texture(state: GameState, ray: Ray) -> tuple[Image | None, float]:
    """Pick the texture for what the ray hit and the texture column to sample.

    Returns (None, 0.0) when the ray hit nothing that has a texture.
    """
    images = state.images
    if ray.hit == DOOR:
        texture = images.door
    else:
        animation = {
            NORTH: images.north,
            SOUTH: images.south,
            EAST: images.east,
            WEST: images.west,
        }.get(ray.hit)
        texture = animation.current if animation is not None else None
    if texture is None:
        return None, 0.0
    width = texture.width
    leftward = HALF_PI < ray.relat_angle <= THREE_HALF_PI
    downward = 0 < ray.relat_angle <= math.pi
    if ray.v_h == "v":
        along = math.fmod(ray.pos.y, REC_HEIGHT)
        pix_x = ((REC_WIDTH - along) if leftward else along) * width / REC_HEIGHT
    else:
        along = math.fmod(ray.pos.x, REC_WIDTH)
        pix_x = ((REC_WIDTH - along) if downward else along) * width / REC_WIDTH
    return texture, pix_x


def print_slice(state: GameState, texture: Image | None, x: int, pix_x: float) -> None:
    """Draw the wall slice of screen column x, sized by that ray's distance."""
    if texture is None or not 0 <= x < WINDOW_WIDTH or not math.isfinite(pix_x):
        return
    dis = state.rays[x].dis
    size = min(WINDOW_HEIGHT / dis * WALL_SIZE, MAX_SLICE) if dis else MAX_SLICE
    if not size > 0:
        return
    top = (WINDOW_HEIGHT - size) / 2
    ratio = texture.height / size
    steps = np.arange(math.ceil(size))
    ys = top + steps
    keep = (ys >= 0) & (ys < WINDOW_HEIGHT)
    steps = steps[keep]
    rows = ys[keep].astype(np.int64)
    if rows.size == 0:
        return
    colors = np.zeros(rows.size, dtype=np.uint32)
    tx = int(pix_x)
    if 0 <= tx < texture.width:
        ty = (steps * ratio).astype(np.int64)
        valid = (ty >= 0) & (ty < texture.height)
        colors[valid] = texture.pixels[ty[valid], tx]
    if state.shadow:
        colors = _darken(colors, dis / SHADOW_DISTANCE)
    state.images.background.pixels[rows, x] = colors


def render_scene(state: GameState) -> None:
    """Cast every ray from the player and draw the walls it sees."""
    for x, ray in enumerate(state.rays):
        set_relative_ray_angle(ray, state.player.angle)
        cast_ray(state.game_map, state.player.pos, ray)
        texture, pix_x = select_texture(state, ray)
        print_slice(state, texture, x, pix_x)


def draw_rectangle(img: Image, pos: tuple[float, float], size: tuple[int, int], color: int) -> None:
    """Draw a filled rectangle; unless it is the empty colour it gets a grey border."""
    px, py = int(pos[0]), int(pos[1])
    sx, sy = int(size[0]), int(size[1])
    if sx <= 0 or sy <= 0:
        return
    block = np.full((sy, sx), color & 0xFFFFFFFF, dtype=np.uint32)
    if color != EMPTY_CELL_COLOR:
        block[0, :] = BORDER_COLOR
        block[-1, :] = BORDER_COLOR
        block[:, 0] = BORDER_COLOR
        block[:, -1] = BORDER_COLOR
    xs = px + np.arange(sx)
    ys = py + np.arange(sy)
    col_ok = (xs >= 1) & (xs <= WINDOW_WIDTH - 1) & (xs < img.width)
    row_ok = (ys >= 0) & (ys <= WINDOW_HEIGHT - 1) & (ys < img.height)
    if not col_ok.any() or not row_ok.any():
        return
    img.pixels[np.ix_(ys[row_ok], xs[col_ok])] = block[np.ix_(row_ok, col_ok)]


def draw_circle(img: Image, x: int, y: int, radius: int) -> None:
    """Mask everything in the square around (x, y) that lies outside the circle."""
    offsets = np.arange(-radius, radius + 1)
    cy, cx = np.meshgrid(offsets, offsets, indexing="ij")
    outside = cx * cx + cy * cy >= radius * radius
    px = cx + x
    py = cy + y
    inside_img = (px >= 0) & (px < img.width) & (py >= 0) & (py < img.height)
    mask = outside & inside_img
    img.pixels[py[mask], px[mask]] = MASK_COLOR


def _cell_color(state: GameState, col: int, row: int) -> int:
    game_map = state.game_map
    if 0 <= col < game_map.width and 0 <= row < game_map.height:
        cell = game_map.grid[row][col]
        if cell in "0123":
            if cell == WALL:
                return WALL_COLOR
            if cell == DOOR:
                return DOOR_COLOR
            if cell == OPEN_DOOR:
                return OPEN_DOOR_COLOR
            return FLOOR_COLOR
    return EMPTY_CELL_COLOR


def mini_map(state: GameState) -> None:
    """Draw the round minimap around the player and the screen's crosshair."""
    minimap = state.images.minimap
    pos = state.player.pos
    offset_x = math.fmod(pos.y, REC_WIDTH) / 4
    offset_y = math.fmod(pos.x, REC_HEIGHT) / 4
    base_row = int(pos.y / REC_HEIGHT)
    base_col = int(pos.x / REC_WIDTH)
    for i in range(MINIMAP_CELLS):
        row = base_row + i - MINIMAP_CELLS // 2
        for j in range(MINIMAP_CELLS):
            col = base_col + j - MINIMAP_CELLS // 2
            draw_rectangle(
                minimap,
                (int(i * CELL_SIZE - offset_x), int(j * CELL_SIZE - offset_y)),
                (CELL_SIZE, CELL_SIZE),
                _cell_color(state, col, row),
            )
    draw_circle(minimap, 125, 125, 125)
    draw_rectangle(minimap, (minimap.width // 2 - 2, minimap.height // 2 - 2), (5, 5), PLAYER_COLOR)
    draw_rectangle(
        state.images.background,
        (WINDOW_WIDTH // 2 - 2, WINDOW_HEIGHT // 2 - 2),
        (5, 5),
        CROSSHAIR_COLOR,
    )