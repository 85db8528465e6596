"""A square block of tiles: generation, editing and saving."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from itertools import product

from .data import DataMap, data_byte
from .perlin import noise3
from .shared import CHUNK_SIZE, TILE_SIZE, Vec2i
from .tile import TILES, TileId, TileInstance, tile_new

_F32 = struct.Struct("<f")

# Neighbour order: top-left, top, top-right, left, right, bottom-left, bottom, bottom-right.
_NEIGHBOUR_OFFSETS = (
    (-1, -1), (0, -1), (1, -1),
    (-1, 0), (1, 0),
    (-1, 1), (0, 1), (1, 1),
)


def _f32(value: float) -> float:
    return _F32.unpack(_F32.pack(value))[0]


def _in_bounds(x: int, y: int) -> bool:
    return 0 <= x < CHUNK_SIZE and 0 <= y < CHUNK_SIZE


def pack_pos(x: int, y: int) -> int:
    """Pack in-chunk coordinates into one byte: x in the low nibble, y in the high one."""
    return ((x & 0x0F) | (y << 4)) & 0xFF


def unpack_pos(byte: int) -> tuple[int, int]:
    """Split a packed byte back into (x, y)."""
    return byte & 0x0F, (byte >> 4) & 0x0F


def tile_for_noise(noise: int) -> TileId:
    """Choose the tile for a scaled noise value."""
    if noise > 5:
        return TileId.DIRT if noise < 8 else TileId.GRASS
    return TileId.STONE


def _empty_tiles() -> list[list[TileInstance]]:
    return [
        [tile_new(TILES[TileId.EMPTY], x * TILE_SIZE, y * TILE_SIZE) for x in range(CHUNK_SIZE)]
        for y in range(CHUNK_SIZE)
    ]


@dataclass
class Chunk:
    """CHUNK_SIZE rows of CHUNK_SIZE tiles, indexed ``tiles[y][x]``."""

    tiles: list[list[TileInstance]] = field(default_factory=_empty_tiles)

    def _check(self, x: int, y: int) -> None:
        if not _in_bounds(x, y):
            raise IndexError(f"chunk coordinates out of bounds: {x}, {y}")

    def set_tile(self, tile: TileInstance, x: int, y: int) -> None:
        """Place a tile and refresh the sprites of it and its neighbours."""
        self._check(x, y)
        if self.tiles[y][x].type.id == tile.type.id:
            return
        self.tiles[y][x] = tile
        for dy, dx in product((-1, 0, 1), repeat=2):
            nx, ny = x + dx, y + dy
            if _in_bounds(nx, ny):
                self.set_tile_texture_data(nx, ny)
                self.tiles[ny][nx].calc_sprite_box()

    def set_tile_texture_data(self, x: int, y: int) -> None:
        """Record the ids of the eight tiles around (x, y); outside the chunk counts as empty."""
        self._check(x, y)
        self.tiles[y][x].texture_data = [
            self.tiles[y + dy][x + dx].type.id if _in_bounds(x + dx, y + dy) else TileId.EMPTY
            for dx, dy in _NEIGHBOUR_OFFSETS
        ]

    def load(self, data: DataMap) -> None:
        """Rebuild the tiles from ids stored under their packed positions."""
        for y, x in product(range(CHUNK_SIZE), repeat=2):
            tile_id = TileId(data.get(str(pack_pos(x, y))).value & 0xFF)
            self.tiles[y][x] = tile_new(TILES[tile_id], x * TILE_SIZE, y * TILE_SIZE)

    def save(self, data: DataMap) -> None:
        """Store each tile id as a byte under its packed position."""
        for y, x in product(range(CHUNK_SIZE), repeat=2):
            data.insert(str(pack_pos(x, y)), data_byte(self.tiles[y][x].type.id))


def _generated_tile(world_x: int, world_y: int) -> TileInstance:
    value = noise3(_f32(world_x * 0.1), _f32(world_y * 0.1), 0.0, 0, 0, 0)
    noise = int(_f32(_f32(value + 1) * 10))
    return tile_new(
        TILES[tile_for_noise(noise)], world_x * TILE_SIZE, world_y * TILE_SIZE
    )


def chunk_gen(chunk_pos: Vec2i) -> Chunk:
    """Generate the terrain of the chunk at ``chunk_pos`` from noise."""
    base_x = chunk_pos.x * CHUNK_SIZE
    base_y = chunk_pos.y * CHUNK_SIZE
    return Chunk(
        [
            [_generated_tile(base_x + x, base_y + y) for x in range(CHUNK_SIZE)]
            for y in range(CHUNK_SIZE)
        ]
    )