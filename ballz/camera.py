"""A 2D camera with a target, a screen offset, rotation and zoom."""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass
class Camera2D:
    """Maps world coordinates around ``target`` onto the screen at ``offset``."""

    target: tuple[float, float] = (0.0, 0.0)
    offset: tuple[float, float] = (0.0, 0.0)
    rotation: float = 0.0
    zoom: float = 1.0

    def screen_to_world(self, x: float, y: float) -> tuple[float, float]:
        """Convert a screen position into world coordinates."""
        dx = (x - self.offset[0]) / self.zoom
        dy = (y - self.offset[1]) / self.zoom
        angle = math.radians(self.rotation)
        cos, sin = math.cos(angle), math.sin(angle)
        return (
            cos * dx + sin * dy + self.target[0],
            -sin * dx + cos * dy + self.target[1],
        )


def camera_new(screen_width: int, screen_height: int) -> Camera2D:
    """Create the default camera for a screen of the given size."""
    return Camera2D(
        target=(screen_width / 2.0 - 400, screen_height / 2.0 - 400),
        offset=(screen_width / 2.0, screen_height / 2.0),
        rotation=0.0,
        zoom=1.0,
    )