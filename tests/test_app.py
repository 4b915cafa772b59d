import pygame
import pytest
from PIL import Image as PILImage

from cubraycast.app import (
    configure_level,
    fps_text,
    game_loop,
    key_down,
    key_up,
    main,
    mouse_click,
    next_frame,
)
from cubraycast.config import ConfigError, separate_content
from cubraycast.image import Image
from cubraycast.level import build_game_map, find_player, Vec2
from cubraycast.raycast import cast_ray
from cubraycast.render import set_relative_ray_angle
from cubraycast.state import WINDOW_HEIGHT, WINDOW_WIDTH, GameState
from cubraycast.textures import Animation

HEADER = (
    "NO ./n.png\n"
    "SO ./s.png\n"
    "WE ./w.png\n"
    "EA ./e.png\n"
    "F 10,20,30\n"
    "C 40,50,60\n"
)
MAP = (
    "1111111\n"
    "1000001\n"
    "100N001\n"
    "1000001\n"
    "1001001\n"
    "1000001\n"
    "1111111\n"
)


def _state(map_text=MAP):
    level = separate_content(HEADER + map_text)
    game_map = build_game_map(level)
    player = find_player(game_map)
    return GameState(game_map=game_map, player=player, floor=level.floor, ceiling=level.ceiling)


def _cast_centre(state):
    ray = state.rays[len(state.rays) // 2]
    set_relative_ray_angle(ray, state.player.angle)
    cast_ray(state.game_map, state.player.pos, ray)
    return ray


def test_key_down_and_up_toggle_held_keys():
    state = _state()
    assert key_down(state, pygame.K_w) is True
    key_down(state, pygame.K_LEFT)
    assert state.keys.w and state.keys.rotate_left
    key_up(state, pygame.K_w)
    key_up(state, pygame.K_LEFT)
    assert not state.keys.w and not state.keys.rotate_left


def test_escape_requests_quit():
    assert key_down(_state(), pygame.K_ESCAPE) is False


def test_g_toggles_shadow():
    state = _state()
    key_down(state, pygame.K_g)
    assert state.shadow is True
    key_down(state, pygame.K_g)
    assert state.shadow is False


def test_h_prints_player_position(capsys):
    state = _state()
    key_down(state, pygame.K_h)
    out = capsys.readouterr().out
    assert f"player x: {state.player.pos.x:f}" in out
    assert f"player y: {state.player.pos.y:f}" in out


def test_middle_button_toggles_mouse_control():
    state = _state()
    mouse_click(state, 2)
    assert state.mouse_control is True
    mouse_click(state, 2)
    assert state.mouse_control is False


def test_left_button_builds_wall_before_wall_in_view():
    state = _state()
    ray = _cast_centre(state)
    assert ray.v_h == "h"
    mouse_click(state, 1)
    assert state.game_map.grid[4][4] == "1"


def test_right_button_knocks_out_inner_wall():
    state = _state()
    _cast_centre(state)
    assert state.game_map.grid[5][4] == "1"
    mouse_click(state, 3)
    assert state.game_map.grid[5][4] == "0"


def test_right_button_keeps_outer_wall():
    state = _state()
    state.player.pos = Vec2(250, 450)
    _cast_centre(state)
    mouse_click(state, 3)
    assert state.game_map.grid[7][2] == "1"


def test_right_button_opens_near_door():
    state = _state(MAP.replace("1001001", "1002001"))
    state.player.pos = Vec2(450, 380)
    ray = _cast_centre(state)
    assert ray.hit == "2"
    mouse_click(state, 3)
    assert state.game_map.grid[5][4] == "3"
    assert state.door_cell == (5, 4)
    assert state.door_time is not None


def test_next_frame_waits_for_frame_time():
    state = _state()
    frames = [Image.blank(1, 1), Image.blank(2, 2)]
    for name in ("north", "south", "east", "west"):
        setattr(state.images, name, Animation(list(frames)))
    state.frame_second = 100.0
    next_frame(state, 100.05)
    assert state.images.north.index == 0
    next_frame(state, 100.2)
    assert state.images.north.index == 1
    assert state.images.west.current is frames[1]
    assert state.frame_second == 100.2


def test_fps_text_updates_second():
    state = _state()
    state.second = 10.0
    assert fps_text(state, 10.5) == "FPS: 02"
    assert state.second == 10.5


def test_game_loop_paints_ceiling_and_floor():
    state = _state()
    state.second = 0.0
    text = game_loop(state, 1.0)
    assert text.startswith("FPS: ")
    pixels = state.images.background.pixels
    assert int(pixels[0, 0]) == state.ceiling.hex
    assert int(pixels[WINDOW_HEIGHT - 1, WINDOW_WIDTH - 1]) == state.floor.hex


def test_configure_level_loads_everything(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for name in ("n", "s", "w", "e"):
        PILImage.new("RGB", (4, 4), (1, 2, 3)).save(tmp_path / f"{name}.png")
    (tmp_path / "textures").mkdir()
    PILImage.new("RGB", (3, 5), (9, 9, 9)).save(tmp_path / "textures" / "door.xpm", format="PNG")
    (tmp_path / "level.cub").write_text(HEADER + MAP)
    state = configure_level("level.cub")
    assert state.player.pos == Vec2(450, 350)
    assert state.images.door.width == 3
    assert state.images.north.current.get_pixel(0, 0) == (1 << 16) | (2 << 8) | 3


def test_configure_level_rejects_bad_extension(tmp_path):
    path = tmp_path / "level.txt"
    path.write_text(HEADER + MAP)
    with pytest.raises(ConfigError):
        configure_level(str(path))


def test_main_without_argument_fails(capsys):
    assert main([]) == 1
    assert "cub3D: Invalid input" in capsys.readouterr().err


def test_main_with_bad_file_fails(tmp_path):
    assert main([str(tmp_path / "missing.cub")]) == 1