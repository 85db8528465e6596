"""The game state: a player in a world."""

from __future__ import annotations

from dataclasses import dataclass, field

from .bytebuf import ByteBuf
from .data import DataMap, DataType, data_map, read_data, write_data
from .player import Player
from .world import World


@dataclass(frozen=True)
class Controls:
    """The input held down during one frame."""

    zoom_in: bool = False
    zoom_out: bool = False
    up: bool = False
    left: bool = False
    down: bool = False
    right: bool = False


@dataclass
class Game:
    """A player and the world it moves in."""

    player: Player = field(default_factory=Player)
    world: World = field(default_factory=World)

    def __post_init__(self) -> None:
        if self.player.world is None:
            self.player.set_world(self.world)

    def tick(self, controls: Controls, frame_time: float) -> None:
        """Apply one frame of input."""
        self.player.handle_zoom(controls.zoom_in, controls.zoom_out, frame_time)
        self.player.handle_movement(
            controls.up, controls.left, controls.down, controls.right
        )

    def load(self, buf: ByteBuf) -> None:
        """Restore the world from a buffer written by save."""
        world_data = read_data(buf)
        if world_data.type != DataType.MAP:
            raise ValueError("saved game does not start with a data map")
        self.world.load(world_data.value)

    def save(self, buf: ByteBuf) -> None:
        """Write the world to ``buf``."""
        world_map = DataMap()
        self.world.save(world_map)
        write_data(buf, data_map(world_map))