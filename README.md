# cubraycast

A small first-person maze explorer rendered by ray casting on a square grid.
Levels are described in `.cub` files: four wall textures (each may list
several frames, which are animated), a floor colour, a ceiling colour and a
map. The window is drawn with pygame; textures are read with Pillow.

## Installing

```
pip install .
```

## Running

```
cubraycast path/to/level.cub
```

The program takes exactly one argument, the level file. With any other
number of arguments it prints `cub3D: Invalid input` on standard error and
exits with status 1. The file name must end in `.cub`; any problem with the
file or with a texture is reported on standard error and the program exits
with status 1.

The window is 1920×1080 and titled `cub3D`.

## Level files

```
NO ./textures/north_1.xpm ./textures/north_2.xpm
SO ./textures/south.xpm
WE ./textures/west.xpm
EA ./textures/east.xpm
F 40,40,40
C 120,180,230

111111
1N0021
100001
111111
```

Empty lines are ignored everywhere in the file.

- The file starts with six elements, in any order, and nothing else may come
  before the sixth of them.
- `NO`, `SO`, `WE`, `EA` — each exactly once, followed by one or more
  texture paths separated by spaces; several paths form an animation whose
  frames change every 0.1 seconds.
- `F` and `C` — floor and ceiling colours as three comma separated values
  from 0 to 255.
- The map follows the six elements. It may contain `0` (floor), `1` (wall),
  `2` (door), spaces, and exactly one of `N`, `S`, `E`, `W` marking the
  player's start and facing direction. The map must be at least 3×3 and
  closed by walls: no floor, door or start position may touch a space or
  the edge of the map.

The door texture is always loaded from `./textures/door.xpm`, relative to the
working directory.

## Controls

| Input            | Action                                    |
|------------------|-------------------------------------------|
| W / A / S / D    | move forward / left / back / right        |
| Left / Right     | turn                                      |
| G                | toggle distance shading                   |
| H                | print the player position, angle and the distance straight ahead |
| Left click       | place a wall block on the empty floor square in front of the wall in view, if that wall is more than one square away |
| Right click      | open the door in view if it is close, or knock out the wall block in view unless it borders the outside |
| Middle click     | toggle mouse look (the pointer is hidden while it is on) |
| Esc              | quit                                      |

Only one door can be open at a time. It closes again once you have been out
of its square for more than a second. The frame rate is shown in the top
left corner, and a round minimap of the surroundings is drawn beneath it.

## Using it as a library

Level parsing, map validation and the ray caster can be used without opening
a window:

```python
from cubraycast.config import ConfigError, parse_file
from cubraycast.level import build_game_map, find_player
from cubraycast.raycast import Ray, cast_ray

try:
    level = parse_file("maps/simple.cub")
except ConfigError as exc:
    print("bad level:", exc)
else:
    game_map = build_game_map(level)
    player = find_player(game_map)

    ray = Ray(relat_angle=player.angle)
    cast_ray(game_map, player.pos, ray)
    print(ray.hit, ray.dis)
```

The modules:

- `cubraycast.config` — `parse_file`, `separate_content`, `parse_color`,
  `LevelFile` and `ConfigError`.
- `cubraycast.level` — `build_game_map`, `find_player`, `GameMap`, `Player`,
  `Vec2`.
- `cubraycast.raycast` — `cast_ray`, `initialize_rays`, `Ray` and the grid
  helpers.
- `cubraycast.textures` — `load_image`, `load_animation`, `Animation`,
  `TextureError`.
- `cubraycast.state` — `GameState`, `Images`, `Keys`.
- `cubraycast.movement` — `update_player_status`, `player_move`,
  `collision`, `track_door`.
- `cubraycast.render` — `paint_floor_ceiling`, `render_scene`, `mini_map`,
  drawing into `Image` buffers (`cubraycast.image`).
- `cubraycast.app` — `configure_level`, the input handlers, `game_loop`,
  `run` and `main`.

## What it does not do

There is no sound, no enemies or sprites other than walls and doors, and no
way to save a level changed by placing or knocking out walls.

## Running the tests

```
pip install .[test]
pytest
```