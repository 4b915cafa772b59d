"""Ray-casting maze explorer for .cub level files."""

__version__ = "0.1.0"
__all__ = [
    "app",
    "color",
    "config",
    "image",
    "level",
    "movement",
    "raycast",
    "render",
    "state",
    "textures",
]