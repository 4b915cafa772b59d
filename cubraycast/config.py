"""Reading and validating .cub level description files."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass

from .color import Color, rgb_to_color

PLAYER_CHARS = frozenset("NSWE")
MAP_CHARS = frozenset("012 ")

_TEXTURE_KEYS = ("NO", "SO", "WE", "EA")
_COLOR_KEYS = ("F", "C")
_ELEMENT_KEYS = _TEXTURE_KEYS + _COLOR_KEYS
_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")


class ConfigError(Exception):
    """Raised when a level file cannot be read or is not a valid level."""


@dataclass
class LevelFile:
    """The validated contents of a level file."""

    north: list[str]
    south: list[str]
    west: list[str]
    east: list[str]
    floor: Color
    ceiling: Color
    map: list[str]
    map_width: int
    map_height: int


def extension_is_cub(file_name: str) -> bool:
    """Tell whether the name ends in '.cub' with at least one character before it."""
    name = os.fspath(file_name)
    return len(name) > 4 and name.endswith(".cub")


def path_is_valid(path: str) -> bool:
    """Tell whether the path can be opened for reading."""
    try:
        fd = os.open(os.fspath(path), os.O_RDONLY)
    except OSError:
        return False
    os.close(fd)
    return True


def read_file(path: str) -> str:
    """Return the whole content of a file."""
    try:
        with open(path, encoding="utf-8", errors="surrogateescape", newline="") as handle:
            return handle.read()
    except OSError as exc:
        raise ConfigError(f"cannot read {path}: {exc.strerror or exc}") from exc


def _atoi(text: str) -> int:
    match = _ATOI.match(text)
    return int(match.group(1)) if match else 0


def parse_color(text: str) -> Color:
    """Parse 'R,G,B' with each channel in 0..255."""
    parts = [part for part in text.split(",") if part]
    if len(parts) != 3:
        raise ConfigError("a colour needs exactly three components")
    channels = [_atoi(part) for part in parts]
    if not all(0 <= value < 256 for value in channels):
        raise ConfigError("colour components must be between 0 and 255")
    return rgb_to_color(*channels)


def _element_kind(line: str) -> str | None:
    for key in _TEXTURE_KEYS:
        if line.startswith(key):
            return key
    if line[0] in _COLOR_KEYS:
        return line[0]
    return None


def _parse_elements(lines: list[str]) -> tuple[dict[str, object], int]:
    counts = dict.fromkeys(_ELEMENT_KEYS, 0)
    values: dict[str, object] = {}
    total = 0
    map_start = len(lines)
    for index, line in enumerate(lines):
        kind = _element_kind(line)
        if kind is None:
            raise ConfigError("undefined element in file")
        counts[kind] += 1
        rest = line[len(kind):]
        if kind in _TEXTURE_KEYS:
            values[kind] = [token for token in rest.split(" ") if token]
        else:
            values[kind] = parse_color(rest)
        total += 1
        if total == 6:
            map_start = index + 1
            break
    if total != 6 or any(count != 1 for count in counts.values()):
        raise ConfigError("each of NO, SO, WE, EA, F and C must appear exactly once")
    if any(not values[key] for key in _TEXTURE_KEYS):
        raise ConfigError("a texture path is missing")
    return values, map_start


def _inspect_map(lines: list[str]) -> tuple[int, int]:
    players = 0
    for line in lines:
        for char in line:
            if char in PLAYER_CHARS:
                players += 1
            elif char not in MAP_CHARS:
                raise ConfigError("undefined element in map")
    if players != 1:
        raise ConfigError("the map must hold exactly one player")
    width = max((len(line) for line in lines), default=0)
    height = len(lines)
    if height < 3 or width < 3:
        raise ConfigError("the map is too small")
    return width, height


def separate_content(text: str) -> LevelFile:
    """Split file content into its elements and map, validating both."""
    lines = [line for line in text.split("\n") if line]
    values, map_start = _parse_elements(lines)
    map_lines = lines[map_start:]
    width, height = _inspect_map(map_lines)
    return LevelFile(
        north=values["NO"],
        south=values["SO"],
        west=values["WE"],
        east=values["EA"],
        floor=values["F"],
        ceiling=values["C"],
        map=list(map_lines),
        map_width=width,
        map_height=height,
    )


def parse_file(file_name: str) -> LevelFile:
    """Read and validate a .cub level file."""
    name = os.fspath(file_name)
    if not extension_is_cub(name):
        raise ConfigError("the level file must have a .cub extension")
    return separate_content(read_file(name))