"""Level set-up, input handling, the per-frame loop and the command entry point."""

from __future__ import annotations

import os
import sys

import numpy as np

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame  # noqa: E402

from .config import ConfigError, parse_file  # noqa: E402
from .level import (  # noqa: E402
    DOOR,
    EMPTY,
    HALF_PI,
    OPEN_DOOR,
    OUTSIDE,
    REC_HEIGHT,
    REC_WIDTH,
    THREE_HALF_PI,
    WALL,
    build_game_map,
    find_player,
)
from .movement import track_door, update_player_status  # noqa: E402
from .render import mini_map, paint_floor_ceiling, render_scene  # noqa: E402
from .state import TITLE, WINDOW_HEIGHT, WINDOW_WIDTH, GameState, now  # noqa: E402
from .textures import DOOR_TEXTURE, TextureError, load_animation, load_image  # noqa: E402

ERR_INVALID_INPUT = "cub3D: Invalid input"
FRAME_DURATION = 0.1
DOOR_REACH = 150
MINIMAP_POS = 25
FPS_POS = (10, 10)
FPS_COLOR = (255, 255, 255)

_HELD_KEYS = {
    pygame.K_LEFT: "rotate_left",
    pygame.K_RIGHT: "rotate_right",
    pygame.K_w: "w",
    pygame.K_a: "a",
    pygame.K_s: "s",
    pygame.K_d: "d",
}

BUTTON_LEFT = 1
BUTTON_MIDDLE = 2
BUTTON_RIGHT = 3


def configure_level(file_name: str) -> GameState:
    """Read a level file and build the game state with its textures loaded."""
    level = parse_file(file_name)
    game_map = build_game_map(level)
    player = find_player(game_map)
    state = GameState(
        game_map=game_map,
        player=player,
        floor=level.floor,
        ceiling=level.ceiling,
    )
    images = state.images
    images.north = load_animation(level.north)
    images.south = load_animation(level.south)
    images.west = load_animation(level.west)
    images.east = load_animation(level.east)
    images.door = load_image(DOOR_TEXTURE)
    return state


def key_down(state: GameState, key: int) -> bool:
    """Handle a key press; returns False when the game should end."""
    if key in _HELD_KEYS:
        setattr(state.keys, _HELD_KEYS[key], True)
    elif key == pygame.K_ESCAPE:
        return False
    elif key == pygame.K_g:
        state.shadow = not state.shadow
    elif key == pygame.K_h:
        centre = state.rays[len(state.rays) // 2] if state.rays else None
        print(f"player x: {state.player.pos.x:f}")
        print(f"player y: {state.player.pos.y:f}")
        print(f"player angle: {state.player.angle:f}")
        if centre is not None:
            print(f"ray dist: {centre.dis:f}")
    return True


def key_up(state: GameState, key: int) -> None:
    """Handle a key release."""
    if key in _HELD_KEYS:
        setattr(state.keys, _HELD_KEYS[key], False)


def _cell(state: GameState, y: int, x: int) -> str | None:
    grid = state.game_map.grid
    if 0 <= y < len(grid) and 0 <= x < len(grid[y]):
        return grid[y][x]
    return None


def _centre_cell(state: GameState):
    ray = state.rays[len(state.rays) // 2]
    return ray, int(ray.pos.y / REC_HEIGHT), int(ray.pos.x / REC_WIDTH)


def _facing_left(angle: float) -> bool:
    return HALF_PI < angle <= THREE_HALF_PI


def _facing_down(angle: float) -> bool:
    return 0 < angle <= __import_pi()


def __import_pi() -> float:
    return 3.141592653589793


def _open_or_break(state: GameState) -> None:
    """Open the door in view if close enough, or knock out an inner wall."""
    ray, y, x = _centre_cell(state)
    angle = state.player.angle
    if ray.v_h == "v" and _facing_left(angle):
        x -= 1
    elif ray.v_h == "h" and not _facing_down(angle):
        y -= 1
    cell = _cell(state, y, x)
    if cell is None:
        return
    if ray.hit == DOOR and ray.dis < DOOR_REACH and state.door_time is None:
        state.game_map.grid[y][x] = OPEN_DOOR
        state.door_cell = (y, x)
        state.door_time = now()
    elif cell == WALL and all(
        _cell(state, ny, nx) not in (OUTSIDE, None)
        for ny, nx in ((y + 1, x), (y - 1, x), (y, x + 1), (y, x - 1))
    ):
        state.game_map.grid[y][x] = EMPTY


def _build_wall(state: GameState) -> None:
    """Put a wall on the floor cell just in front of the wall in view."""
    ray, y, x = _centre_cell(state)
    angle = state.player.angle
    if ray.v_h == "v" and not _facing_left(angle):
        x -= 1
    elif ray.v_h == "h" and _facing_down(angle):
        y -= 1
    if ray.dis > REC_HEIGHT and _cell(state, y, x) == EMPTY:
        state.game_map.grid[y][x] = WALL


def mouse_click(state: GameState, button: int) -> None:
    """Handle a mouse button press.

    The middle button toggles mouse steering, the left button builds a wall
    and the right button opens a door or knocks out a wall.
    """
    if button == BUTTON_MIDDLE:
        state.mouse_control = not state.mouse_control
    elif button == BUTTON_LEFT:
        _build_wall(state)
    elif button == BUTTON_RIGHT:
        _open_or_break(state)


def next_frame(state: GameState, current_time: float) -> None:
    """Advance every wall animation once a frame's time has passed."""
    if not current_time - state.frame_second > FRAME_DURATION:
        return
    images = state.images
    for animation in (images.east, images.west, images.north, images.south):
        if animation is not None:
            animation.advance()
    state.frame_second = current_time


def fps_text(state: GameState, current_time: float) -> str:
    """Return the frame-rate label since the previous call and remember the time."""
    elapsed = current_time - state.second
    value = int(1 / elapsed) if elapsed > 0 else 0
    state.second = current_time
    return f"FPS: {value:02d}"


def game_loop(state: GameState, current_time: float) -> str:
    """Update and draw one frame; returns the frame-rate label to show."""
    mouse_pos = None
    if state.mouse_control and pygame.display.get_init() and pygame.display.get_surface():
        mouse_pos = pygame.mouse.get_pos()
    if update_player_status(state, mouse_pos) and mouse_pos is not None:
        pygame.mouse.set_pos(WINDOW_WIDTH // 2, WINDOW_HEIGHT // 2)
    paint_floor_ceiling(state)
    track_door(state, current_time)
    render_scene(state)
    mini_map(state)
    text = fps_text(state, current_time)
    next_frame(state, current_time)
    return text


def _compose(state: GameState) -> np.ndarray:
    frame = state.images.background.pixels.copy()
    mini = state.images.minimap.pixels
    region = frame[MINIMAP_POS:MINIMAP_POS + mini.shape[0], MINIMAP_POS:MINIMAP_POS + mini.shape[1]]
    mini = mini[: region.shape[0], : region.shape[1]]
    visible = (mini >> np.uint32(24)) != np.uint32(0xFF)
    region[visible] = mini[visible]
    rgb = np.empty(frame.shape + (3,), dtype=np.uint8)
    rgb[..., 0] = (frame >> np.uint32(16)) & np.uint32(0xFF)
    rgb[..., 1] = (frame >> np.uint32(8)) & np.uint32(0xFF)
    rgb[..., 2] = frame & np.uint32(0xFF)
    return rgb.transpose(1, 0, 2)


def run(state: GameState) -> int:
    """Open the window and play until it is closed or Escape is pressed."""
    pygame.init()
    try:
        screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption(TITLE)
        font = pygame.font.Font(None, 24)
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    running = key_down(state, event.key) and running
                elif event.type == pygame.KEYUP:
                    key_up(state, event.key)
                elif event.type == pygame.MOUSEBUTTONDOWN:
                    mouse_click(state, event.button)
                    if event.button == BUTTON_MIDDLE:
                        pygame.mouse.set_visible(not state.mouse_control)
            if not running:
                break
            text = game_loop(state, now())
            screen.blit(pygame.surfarray.make_surface(_compose(state)), (0, 0))
            screen.blit(font.render(text, True, FPS_COLOR), FPS_POS)
            pygame.display.flip()
    finally:
        pygame.quit()
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the game on the level file named by the single argument."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print(ERR_INVALID_INPUT, file=sys.stderr)
        return 1
    try:
        state = configure_level(args[0])
    except (ConfigError, TextureError) as exc:
        print(f"cub3D: {exc}", file=sys.stderr)
        return 1
    return run(state)