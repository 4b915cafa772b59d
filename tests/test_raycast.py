import math

import pytest

from cubraycast.config import separate_content
from cubraycast.level import HALF_PI, REC_HEIGHT, REC_WIDTH, THREE_HALF_PI, Vec2, build_game_map, find_player
from cubraycast.raycast import (
    RAY_COUNT,
    Ray,
    cast_ray,
    distance,
    get_offset,
    hits_wall,
    initialize_rays,
    inside_map,
    step,
)

HEADER = "NO ./n.xpm\nSO ./s.xpm\nWE ./w.xpm\nEA ./e.xpm\nF 10,20,30\nC 40,50,60\n"


def world(*rows):
    game_map = build_game_map(separate_content(HEADER + "\n".join(rows) + "\n"))
    return game_map, find_player(game_map)


@pytest.fixture
def room():
    return world("11111", "10001", "10N01", "10001", "11111")


def test_distance_pythagorean():
    assert distance(Vec2(0, 0), Vec2(3, 4)) == 5.0


def test_distance_symmetric_and_zero():
    a, b = Vec2(12.5, -3.0), Vec2(-7.0, 40.0)
    assert distance(a, b) == distance(b, a)
    assert distance(a, a) == 0.0


def test_offsets_in_opposite_directions_span_one_cell():
    pos = Vec2(350.0, 320.0)
    assert get_offset(pos, 1.0, "h") + get_offset(pos, 4.0, "h") == pytest.approx(REC_HEIGHT)
    assert get_offset(pos, 0.5, "v") + get_offset(pos, 2.0, "v") == pytest.approx(REC_WIDTH)


def test_offset_for_unknown_line_kind():
    assert get_offset(Vec2(350.0, 320.0), 1.0, "x") == 0.0


def test_inside_map(room):
    game_map, player = room
    assert inside_map(game_map, player.pos)
    assert not inside_map(game_map, Vec2(0.5, 50.0))
    assert not inside_map(game_map, Vec2(50.0, game_map.height * REC_HEIGHT))
    assert not inside_map(game_map, Vec2(math.inf, 50.0))


@pytest.mark.parametrize(
    "rad, sx, sy",
    [(0.3, 1, 1), (2.0, -1, 1), (3.5, -1, -1), (5.0, 1, -1)],
)
def test_step_direction_follows_angle(rad, sx, sy):
    point, add = Vec2(100.0, 200.0), Vec2(7.0, 11.0)
    assert step(point, add, rad) == Vec2(point.x + sx * add.x, point.y + sy * add.y)


def test_hits_wall_faces(room):
    game_map, _ = room
    assert hits_wall(game_map, Vec2(500.0, 350.0), 0.1, "v") == "E"
    assert hits_wall(game_map, Vec2(100.0, 350.0), math.pi, "v") == "W"
    assert hits_wall(game_map, Vec2(300.0, 350.0), 0.1, "v") == "0"


@pytest.mark.parametrize(
    "angle, hit, v_h, axis, coord",
    [
        (1e-6, "E", "v", "x", 5 * REC_WIDTH),
        (HALF_PI + 1e-4, "N", "h", "y", 5 * REC_HEIGHT),
        (math.pi + 1e-4, "W", "v", "x", 2 * REC_WIDTH),
        (THREE_HALF_PI + 1e-4, "S", "h", "y", 2 * REC_HEIGHT),
    ],
)
def test_cast_ray_hits_room_walls(room, angle, hit, v_h, axis, coord):
    game_map, player = room
    ray = cast_ray(game_map, player.pos, Ray(relat_angle=angle))
    assert ray.hit == hit
    assert ray.v_h == v_h
    assert getattr(ray.pos, axis) == pytest.approx(coord)
    assert ray.dis == pytest.approx(distance(player.pos, ray.pos))


def test_perspective_shortens_distance(room):
    game_map, player = room
    straight = cast_ray(game_map, player.pos, Ray(relat_angle=1e-6))
    slanted = cast_ray(game_map, player.pos, Ray(relat_angle=1e-6, persp_angle=0.2))
    assert slanted.dis == pytest.approx(straight.dis * math.cos(0.2))


def test_cast_ray_reports_door():
    game_map, player = world("1111", "1N21", "1111")
    ray = cast_ray(game_map, player.pos, Ray(relat_angle=1e-6))
    assert ray.hit == "2"
    assert ray.pos.x == pytest.approx(3 * REC_WIDTH)


def test_axis_aligned_ray_finds_nothing(room):
    game_map, player = room
    ray = cast_ray(game_map, player.pos, Ray(relat_angle=0.0))
    assert math.isinf(ray.dis)
    assert ray.hit == "0"


def test_initialize_rays_spread():
    rays = initialize_rays()
    assert len(rays) == RAY_COUNT
    angles = [ray.persp_angle for ray in rays]
    assert all(a < b for a, b in zip(angles, angles[1:]))
    assert angles[-1] == pytest.approx(math.radians(30))
    assert angles[0] > -math.radians(30)


def test_initialize_rays_custom_count():
    rays = initialize_rays(4)
    assert len(rays) == 4
    assert rays[1].persp_angle == pytest.approx(0.0)