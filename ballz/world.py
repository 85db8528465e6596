"""The set of loaded chunks and their positions."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import product
from typing import Any

from .chunk import Chunk, chunk_gen
from .data import DataMap, DataType, data_map
from .shared import CHUNK_SIZE, TILE_SIZE, WORLD_LOADED_CHUNKS, Vec2i
from .tile import TILES, TileId

logger = logging.getLogger(__name__)

SAVED_CHUNK_KEY = "chunk0,0"


@dataclass
class World:
    """Up to WORLD_LOADED_CHUNKS chunks, each stored with its chunk position."""

    chunks: list[Chunk] = field(default_factory=list)
    chunk_positions: list[Vec2i] = field(default_factory=list)

    def has_chunk_at(self, chunk_pos: Vec2i) -> bool:
        """Return whether a chunk is loaded at ``chunk_pos``."""
        return self.chunk_index_by_pos(chunk_pos) is not None

    def add_chunk(self, pos: Vec2i, chunk: Chunk) -> None:
        """Add a chunk at ``pos``."""
        if len(self.chunks) >= WORLD_LOADED_CHUNKS:
            raise OverflowError(
                f"world can hold at most {WORLD_LOADED_CHUNKS} loaded chunks"
            )
        logger.info("chunk index: %d", len(self.chunks))
        self.chunks.append(chunk)
        self.chunk_positions.append(pos)
        for index, position in enumerate(self.chunk_positions):
            logger.info("chunk lookup %d: %d, %d", index, position.x, position.y)

    def chunk_index_by_pos(self, pos: Vec2i) -> int | None:
        """Return the index of the chunk at ``pos``, or None when none is loaded there."""
        for index, position in enumerate(self.chunk_positions):
            if position == pos:
                logger.info("found index: %d for pos: %d, %d", index, pos.x, pos.y)
                return index
        return None

    def gen(self) -> None:
        """Generate the chunk at the origin."""
        self.gen_chunk_at(Vec2i(0, 0))

    def gen_chunk_at(self, chunk_pos: Vec2i) -> None:
        """Generate terrain for ``chunk_pos`` and add it."""
        self.add_chunk(chunk_pos, chunk_gen(chunk_pos))

    def prepare_rendering(self) -> None:
        """Compute neighbour data and sprites for the first chunk."""
        if not self.chunks:
            raise ValueError("world has no chunks")
        chunk = self.chunks[0]
        for y, x in product(range(CHUNK_SIZE), repeat=2):
            chunk.set_tile_texture_data(x, y)
        for row in chunk.tiles:
            for tile in row:
                tile.calc_sprite_box()

    def render(self, surface: Any, offset: tuple[float, float] = (0.0, 0.0)) -> None:
        """Draw a dirt background and then every tile of every chunk."""
        dirt = TILES[TileId.DIRT].texture.surface
        for chunk, position in zip(self.chunks, self.chunk_positions):
            base_x = position.x * CHUNK_SIZE
            base_y = position.y * CHUNK_SIZE
            if dirt is not None:
                for y, x in product(range(CHUNK_SIZE), repeat=2):
                    dest = (
                        round((base_x + x) * TILE_SIZE - offset[0]),
                        round((base_y + y) * TILE_SIZE - offset[1]),
                    )
                    surface.blit(dirt, dest)
            for row in chunk.tiles:
                for tile in row:
                    tile.render(surface, offset)

    def load(self, data: DataMap) -> None:
        """Restore the first chunk from saved data."""
        saved = data.get(SAVED_CHUNK_KEY)
        if saved.type != DataType.MAP:
            raise ValueError(f"{SAVED_CHUNK_KEY} does not hold a data map")
        if not self.chunks:
            self.add_chunk(Vec2i(0, 0), Chunk())
        self.chunks[0].load(saved.value)

    def save(self, data: DataMap) -> None:
        """Store the first chunk."""
        if not self.chunks:
            raise ValueError("world has no chunks")
        chunk_data = DataMap()
        self.chunks[0].save(chunk_data)
        data.insert(SAVED_CHUNK_KEY, data_map(chunk_data))