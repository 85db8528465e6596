"""Item types and item instances."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pygame

from .shared import Texture, load_texture

DEFAULT_ASSET_DIR = "res/assets"
ITEMS_AMOUNT = 2
ITEM_SCALE = 3.5


class ItemId(enum.IntEnum):
    """Identifier of an item type."""

    EMPTY = 0
    TORCH = 1


@dataclass(frozen=True)
class ItemType:
    """Shared properties of every item of one kind."""

    id: ItemId
    texture: Texture = field(default_factory=Texture)


_ITEM_TEXTURES: dict[ItemId, str | None] = {
    ItemId.EMPTY: None,
    ItemId.TORCH: "torch.png",
}


def _make_type(item_id: ItemId, asset_dir: str | Path | None) -> ItemType:
    filename = _ITEM_TEXTURES[item_id]
    texture = Texture()
    if filename is not None and asset_dir is not None:
        texture = load_texture(Path(asset_dir) / filename)
    return ItemType(item_id, texture)


ITEMS: list[ItemType] = [_make_type(item_id, None) for item_id in ItemId]


def item_type_init(item_id: int, asset_dir: str | Path | None = DEFAULT_ASSET_DIR) -> ItemType:
    """Register the item type for ``item_id``; textures load from ``asset_dir`` unless None."""
    item_id = ItemId(item_id)
    ITEMS[item_id] = _make_type(item_id, asset_dir)
    return ITEMS[item_id]


def item_types_init(asset_dir: str | Path | None = DEFAULT_ASSET_DIR) -> None:
    """Register every item type."""
    for item_id in ItemId:
        item_type_init(item_id, asset_dir)


def item_type_to_string(item_type: ItemType) -> str:
    """Return the lower-case name of an item type."""
    return ItemId(item_type.id).name.lower()


@dataclass
class ItemInstance:
    """One item."""

    type: ItemType

    def render(self, surface: Any, x: float, y: float) -> None:
        """Draw the item's texture scaled up at (x, y)."""
        texture = self.type.texture
        if texture.surface is None:
            return
        size = (int(texture.width * ITEM_SCALE), int(texture.height * ITEM_SCALE))
        surface.blit(pygame.transform.scale(texture.surface, size), (int(x), int(y)))