"""The player: position, facing, camera and saved state."""

from __future__ import annotations

from dataclasses import dataclass, field

from .camera import Camera2D, camera_new
from .data import DataMap, data_int
from .shared import (
    CHUNK_SIZE,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    TILE_SIZE,
    Direction,
    Rectangle,
    Texture,
    Vec2i,
)
from .world import World

MOVE_STEP = 2
ZOOM_SPEED = 2.0
MIN_ZOOM = 1.0
MAX_ZOOM = 4.0
_CHUNK_PIXELS = CHUNK_SIZE * TILE_SIZE

# textures are ordered: down, up, left, right
_TEXTURE_INDEX = {
    Direction.DOWN: 0,
    Direction.UP: 1,
    Direction.LEFT: 2,
    Direction.RIGHT: 3,
}


def _trunc_div(value: int, divisor: int) -> int:
    quotient = abs(value) // divisor
    return quotient if value >= 0 else -quotient


@dataclass
class Player:
    """The player character and the camera that follows it."""

    world: World | None = None
    cam: Camera2D = field(default_factory=lambda: camera_new(SCREEN_WIDTH, SCREEN_HEIGHT))
    textures: tuple[Texture, ...] = field(
        default_factory=lambda: tuple(Texture() for _ in range(4))
    )
    direction: Direction = Direction.DOWN
    box: Rectangle = field(default_factory=lambda: Rectangle(0, 0, 16, 32))
    essence: int = 0
    chunk_pos: Vec2i = Vec2i(0, 0)

    def set_world(self, world: World) -> None:
        """Attach the world the player moves in."""
        self.world = world

    def get_texture(self) -> Texture:
        """Return the texture for the current facing direction."""
        return self.textures[_TEXTURE_INDEX[self.direction]]

    def set_pos(self, x: int, y: int) -> None:
        """Move to (x, y), follow with the camera and generate the chunk if new."""
        x, y = int(x), int(y)
        self.box.x = x
        self.box.y = y
        self.cam.target = (float(x), float(y))
        self.chunk_pos = Vec2i(_trunc_div(x, _CHUNK_PIXELS), _trunc_div(y, _CHUNK_PIXELS))
        if self.world is None:
            raise RuntimeError("player has no world")
        if not self.world.has_chunk_at(self.chunk_pos):
            self.world.gen_chunk_at(self.chunk_pos)

    def handle_zoom(self, zoom_in: bool, zoom_out: bool, frame_time: float) -> None:
        """Zoom the camera in or out, keeping the zoom between 1 and 4."""
        if zoom_in:
            self.cam.zoom = min(self.cam.zoom + frame_time * ZOOM_SPEED, MAX_ZOOM)
        if zoom_out:
            self.cam.zoom = max(self.cam.zoom - frame_time * ZOOM_SPEED, MIN_ZOOM)

    def handle_movement(self, w: bool, a: bool, s: bool, d: bool) -> None:
        """Step up, left, down and right for each pressed key, in that order."""
        moves = (
            (w, 0, -MOVE_STEP, Direction.UP),
            (a, -MOVE_STEP, 0, Direction.LEFT),
            (s, 0, MOVE_STEP, Direction.DOWN),
            (d, MOVE_STEP, 0, Direction.RIGHT),
        )
        for pressed, dx, dy, direction in moves:
            if pressed:
                self.set_pos(int(self.box.x + dx), int(self.box.y + dy))
                self.direction = direction

    def load(self, data: DataMap) -> None:
        """Restore essence and direction, defaulting both to 0."""
        self.essence = data.get_or_default("essence", data_int(0)).value
        self.direction = Direction(data.get_or_default("direction", data_int(0)).value)

    def save(self, data: DataMap) -> None:
        """Store essence and direction."""
        data.insert("essence", data_int(self.essence))
        data.insert("direction", data_int(self.direction))