"""Shared constants and small value types used across the game."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pygame

SCREEN_WIDTH = 800
SCREEN_HEIGHT = 800

CHUNK_SIZE = 16
WORLD_LOADED_CHUNKS = 9
TILE_SIZE = 16


class Direction(enum.IntEnum):
    """Facing direction of an entity."""

    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3


@dataclass(frozen=True)
class Vec2i:
    """An integer 2D vector."""

    x: int
    y: int


def vec2i(x: int, y: int) -> Vec2i:
    """Build a Vec2i from its coordinates."""
    return Vec2i(x, y)


@dataclass
class Rectangle:
    """An axis-aligned rectangle in floating point coordinates."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def contains_point(self, x: float, y: float) -> bool:
        """Return whether the point lies inside; right and bottom edges are excluded."""
        return (
            self.x <= x < self.x + self.width
            and self.y <= y < self.y + self.height
        )


@dataclass
class Texture:
    """A loaded image together with its size."""

    width: int = 0
    height: int = 0
    surface: Any = None


def read_file_to_string(filename: str | Path) -> str:
    """Read a whole file as UTF-8 text."""
    return Path(filename).read_bytes().decode("utf-8")


def load_texture(path: str | Path) -> Texture:
    """Load an image file into a Texture."""
    surface = pygame.image.load(str(path))
    return Texture(surface.get_width(), surface.get_height(), surface)