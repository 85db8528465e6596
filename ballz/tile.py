"""Tile types, tile instances and connected-texture sprite selection."""

from __future__ import annotations

import enum
import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

import pygame

from .data import Data, DataMap
from .shared import (
    TILE_SIZE,
    Rectangle,
    Texture,
    Vec2i,
    load_texture,
    read_file_to_string,
)

logger = logging.getLogger(__name__)

DEFAULT_CONNECTED_PATH = "res/connected.json"
DEFAULT_ASSET_DIR = "res/assets"
CUSTOM_DATA_KEY = "custom_data"

NEIGHBOURS = 8
MAX_CONNECTIONS = 100
SPRITE_SIZE = 16
# Edge neighbours (up, left, right, down); corners never disqualify a rule.
_MAIN_NEIGHBOURS = frozenset({1, 3, 4, 6})


class TileId(enum.IntEnum):
    """Identifier of a tile type; also its saved byte value."""

    EMPTY = 0
    DIRT = 1
    GRASS = 2
    STONE = 3


@dataclass(frozen=True)
class TileType:
    """Shared properties of every tile of one kind."""

    id: TileId
    has_texture: bool = False
    texture: Texture = field(default_factory=Texture)
    is_solid: bool = False
    is_ticking: bool = False
    stores_custom_data: bool = False
    uses_tileset: bool = False
    on_tick: Callable[[TileInstance], Any] | None = field(default=None, compare=False)
    on_right_click: Callable[[TileInstance], Any] | None = field(
        default=None, compare=False
    )


@dataclass(frozen=True)
class Connection:
    """A rule: when exactly these neighbours match, use the sprite at ``sprite_pos``."""

    predicate: tuple[int, ...] = ()
    sprite_pos: Vec2i = Vec2i(0, 0)


@dataclass
class ConnectedInfo:
    """Connected-texture rules loaded from a JSON description."""

    res: int = 0
    default_sprite_pos: Vec2i = Vec2i(0, 0)
    connections: list[Connection] = field(default_factory=list)


_connected_info = ConnectedInfo()


# filename, has_texture, is_solid, uses_tileset
_TILE_SPECS: dict[TileId, tuple[str | None, bool, bool, bool]] = {
    TileId.EMPTY: (None, False, False, False),
    TileId.DIRT: ("dirt.png", True, True, False),
    TileId.GRASS: ("grass_tiles.png", True, True, True),
    TileId.STONE: ("stone.png", True, True, False),
}


def _make_type(tile_id: TileId, asset_dir: str | Path | None) -> TileType:
    filename, has_texture, is_solid, uses_tileset = _TILE_SPECS[tile_id]
    texture = Texture()
    if filename is not None and asset_dir is not None:
        texture = load_texture(Path(asset_dir) / filename)
    return TileType(
        id=tile_id,
        has_texture=has_texture,
        texture=texture,
        is_solid=is_solid,
        uses_tileset=uses_tileset,
    )


TILES: list[TileType] = [_make_type(tile_id, None) for tile_id in TileId]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant: {name}")


def _sprite_pos(value: list[Any], error: str) -> Vec2i:
    x = value[0] if len(value) > 0 else None
    y = value[1] if len(value) > 1 else None
    if not (_is_number(x) and _is_number(y)):
        raise ValueError(error)
    return Vec2i(int(x), int(y))


def _parse_connection(index: int, entry: Any) -> Connection:
    fields = entry if isinstance(entry, dict) else {}
    tiles = fields.get("tiles")
    value = fields.get("value")
    predicate: tuple[int, ...] = ()
    if isinstance(tiles, list):
        if len(tiles) > NEIGHBOURS:
            raise ValueError(f"too many tiles in values index: {index}")
        predicate = tuple(int(tile) for tile in tiles if _is_number(tile))
    sprite_pos = Vec2i(0, 0)
    if isinstance(value, list):
        sprite_pos = _sprite_pos(value, f"failed to get sprite pos, values index: {index}")
    return Connection(predicate, sprite_pos)


def parse_connected_info(text: str) -> ConnectedInfo:
    """Parse the connected-texture JSON document."""
    try:
        document = json.loads(text, parse_constant=_reject_constant)
    except ValueError as exc:
        raise ValueError(f"error parsing JSON: {exc}") from exc
    root = document if isinstance(document, dict) else {}
    info = ConnectedInfo()

    res = root.get("res")
    if _is_number(res):
        info.res = int(res)

    default = root.get("default")
    if isinstance(default, list):
        info.default_sprite_pos = _sprite_pos(default, "failed to get default sprite pos")

    values = root.get("values")
    if isinstance(values, list):
        if len(values) > MAX_CONNECTIONS:
            raise ValueError(f"at most {MAX_CONNECTIONS} connections are supported")
        info.connections = [
            _parse_connection(index, entry) for index, entry in enumerate(values)
        ]
    return info


def init_connected_info(path: str | Path = DEFAULT_CONNECTED_PATH) -> ConnectedInfo:
    """Load connected-texture rules from a file and make them current."""
    global _connected_info
    info = parse_connected_info(read_file_to_string(path))
    _connected_info = info
    return info


def tile_type_init(tile_id: int, asset_dir: str | Path | None = DEFAULT_ASSET_DIR) -> TileType:
    """Register the tile type for ``tile_id``; textures load from ``asset_dir`` unless None."""
    tile_id = TileId(tile_id)
    TILES[tile_id] = _make_type(tile_id, asset_dir)
    return TILES[tile_id]


def tile_types_init(
    connected_path: str | Path = DEFAULT_CONNECTED_PATH,
    asset_dir: str | Path | None = DEFAULT_ASSET_DIR,
) -> None:
    """Load the connected-texture rules and register every tile type."""
    init_connected_info(connected_path)
    for tile_id in TileId:
        tile_type_init(tile_id, asset_dir)


def tile_type_to_string(tile_type: TileType) -> str:
    """Return the lower-case name of a tile type."""
    return TileId(tile_type.id).name.lower()


def _sprite_rect(pos: Vec2i) -> Rectangle:
    return Rectangle(pos.x, pos.y, SPRITE_SIZE, SPRITE_SIZE)


def _matches(same_tile: Sequence[bool], predicate: Sequence[int]) -> bool:
    selected = set(predicate)
    return all(
        bool(flag) if index in selected else not (flag and index in _MAIN_NEIGHBOURS)
        for index, flag in enumerate(same_tile[:NEIGHBOURS])
    )


def select_tile(same_tile: Sequence[bool]) -> Rectangle:
    """Pick the sprite of the first rule matching which neighbours are the same tile."""
    for connection in _connected_info.connections:
        if _matches(same_tile, connection.predicate):
            return _sprite_rect(connection.sprite_pos)
    logger.error("failed to select tile box")
    return _sprite_rect(_connected_info.default_sprite_pos)


@dataclass
class TileInstance:
    """One placed tile."""

    type: TileType
    box: Rectangle
    custom_data: Data | None = None
    texture_data: list[TileId] = field(
        default_factory=lambda: [TileId.EMPTY] * NEIGHBOURS
    )
    cur_sprite_box: Rectangle = field(default_factory=Rectangle)

    def calc_sprite_box(self) -> None:
        """Choose the tileset sprite from the surrounding tile ids."""
        if self.type.uses_tileset:
            same_tile = [neighbour == self.type.id for neighbour in self.texture_data]
            self.cur_sprite_box = select_tile(same_tile)

    def render(self, surface: Any, offset: tuple[float, float] = (0.0, 0.0)) -> None:
        """Draw the current sprite onto ``surface``, shifted by ``offset``."""
        texture = self.type.texture
        if not self.type.has_texture or texture.surface is None:
            return
        sprite = self.cur_sprite_box
        area = pygame.Rect(
            int(sprite.x), int(sprite.y), int(sprite.width), int(sprite.height)
        )
        dest = (round(self.box.x - offset[0]), round(self.box.y - offset[1]))
        surface.blit(texture.surface, dest, area)

    def right_click(self) -> None:
        """Run the type's right-click handler, if it has one."""
        if self.type.on_right_click is not None:
            self.type.on_right_click(self)

    def tick(self) -> None:
        """Run the type's tick handler when the type is ticking."""
        if self.type.is_ticking and self.type.on_tick is not None:
            self.type.on_tick(self)

    def load(self, data: DataMap) -> None:
        """Restore custom data for types that store it."""
        if self.type.stores_custom_data and CUSTOM_DATA_KEY in data:
            self.custom_data = data.get(CUSTOM_DATA_KEY)

    def save(self, data: DataMap) -> None:
        """Store custom data for types that keep it."""
        if self.type.stores_custom_data and self.custom_data is not None:
            data.insert(CUSTOM_DATA_KEY, self.custom_data)


def tile_new(tile_type: TileType, x: float, y: float) -> TileInstance:
    """Create a tile of ``tile_type`` with its top-left corner at (x, y)."""
    if tile_type.uses_tileset:
        default = _connected_info.default_sprite_pos
        res = _connected_info.res
        sprite_box = Rectangle(default.x, default.y, res, res)
    else:
        sprite_box = Rectangle(0, 0, tile_type.texture.width, tile_type.texture.height)
    return TileInstance(
        type=tile_type,
        box=Rectangle(float(x), float(y), TILE_SIZE, TILE_SIZE),
        cur_sprite_box=sprite_box,
    )