"""A top-down tile world game with Perlin terrain, connected textures and binary saves."""

__version__ = "0.1.0"