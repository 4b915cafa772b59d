"""RGB colours packed into 24-bit integers, with a darkening helper."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Color:
    """A colour as separate channels together with its packed value."""

    r: int
    g: int
    b: int
    hex: int


def rgb_to_color(r: int, g: int, b: int) -> Color:
    """Build a colour from its red, green and blue channels."""
    r, g, b = int(r), int(g), int(b)
    return Color(r, g, b, (r << 16) | (g << 8) | b)


def hex_to_color(value: int) -> Color:
    """Split a packed 0xRRGGBB value into channels, keeping the value as is."""
    value = int(value)
    return Color(
        (value & 0xFF0000) >> 16,
        (value & 0xFF00) >> 8,
        value & 0xFF,
        value,
    )


def blackout(color: Color, ratio: float) -> Color:
    """Darken a colour; a ratio of 0 keeps it, 1 or more makes it black."""
    intensity = min(max(1.0 - ratio, 0.0), 1.0)
    return rgb_to_color(
        int(color.r * intensity),
        int(color.g * intensity),
        int(color.b * intensity),
    )