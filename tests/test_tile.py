import json
from dataclasses import replace

import pygame
import pytest

from ballz.data import DataMap, data_int
from ballz.shared import TILE_SIZE, Rectangle, Texture
from ballz.tile import (
    TILES,
    TileId,
    TileType,
    init_connected_info,
    parse_connected_info,
    select_tile,
    tile_new,
    tile_type_init,
    tile_type_to_string,
    tile_types_init,
)

SAMPLE = {
    "res": 16,
    "default": [32, 48],
    "values": [
        {"tiles": [1, 3, 4, 6], "value": [16, 16]},
        {"tiles": [6], "value": [16, 0]},
        {"tiles": [], "value": [48, 48]},
    ],
}


@pytest.fixture(autouse=True)
def connected(tmp_path):
    path = tmp_path / "connected.json"
    path.write_text(json.dumps(SAMPLE))
    info = init_connected_info(path)
    yield info
    reset = tmp_path / "reset.json"
    reset.write_text("{}")
    init_connected_info(reset)
    for tile_id in TileId:
        tile_type_init(tile_id, None)


def _flags(*indices):
    return [index in indices for index in range(8)]


def _png(path, width, height, colour):
    surface = pygame.Surface((width, height))
    surface.fill(colour)
    pygame.image.save(surface, str(path))


def test_tile_type_names():
    assert tile_type_to_string(TILES[TileId.EMPTY]) == "empty"
    assert tile_type_to_string(TILES[TileId.DIRT]) == "dirt"
    assert tile_type_to_string(TILES[TileId.GRASS]) == "grass"
    assert tile_type_to_string(TILES[TileId.STONE]) == "stone"


def test_tile_type_properties():
    for tile_id in TileId:
        tile_type_init(tile_id, None)
    grass = tile_new(TILES[TileId.GRASS], 0, 0)
    dirt = tile_new(TILES[TileId.DIRT], 0, 0)
    empty = tile_new(TILES[TileId.EMPTY], 0, 0)
    stone = tile_new(TILES[TileId.STONE], 0, 0)
    assert grass.type.uses_tileset
    assert not dirt.type.uses_tileset
    assert not empty.type.is_solid
    assert stone.type.is_solid and stone.type.has_texture


def test_parse_connected_info(connected):
    assert connected.res == 16
    assert (connected.default_sprite_pos.x, connected.default_sprite_pos.y) == (32, 48)
    assert [c.predicate for c in connected.connections] == [(1, 3, 4, 6), (6,), ()]
    assert (connected.connections[1].sprite_pos.x, connected.connections[1].sprite_pos.y) == (16, 0)


def test_parse_invalid_json():
    with pytest.raises(ValueError):
        parse_connected_info("{not json")


def test_parse_rejects_nan():
    with pytest.raises(ValueError):
        parse_connected_info('{"res": NaN}')


def test_parse_bad_default():
    with pytest.raises(ValueError, match="default sprite pos"):
        parse_connected_info('{"default": ["a", 1]}')


def test_parse_bad_value():
    with pytest.raises(ValueError, match="values index: 0"):
        parse_connected_info('{"values": [{"tiles": [1], "value": [1]}]}')


def test_parse_empty_document():
    info = parse_connected_info("{}")
    assert info.res == 0
    assert info.connections == []


def test_init_connected_info_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        init_connected_info(tmp_path / "missing.json")


def test_select_tile_all_neighbours():
    assert select_tile([True] * 8) == Rectangle(16, 16, 16, 16)


def test_select_tile_corners_do_not_disqualify():
    assert select_tile(_flags(6)) == Rectangle(16, 0, 16, 16)
    assert select_tile(_flags(5, 6, 7)) == Rectangle(16, 0, 16, 16)


def test_select_tile_none_matching_neighbours():
    assert select_tile(_flags()) == Rectangle(48, 48, 16, 16)


def test_select_tile_falls_back_to_default():
    assert select_tile(_flags(1)) == Rectangle(32, 48, 16, 16)


def test_tile_new_box():
    tile = tile_new(TILES[TileId.DIRT], 32, 48)
    assert tile.box == Rectangle(32, 48, TILE_SIZE, TILE_SIZE)
    assert tile.texture_data == [TileId.EMPTY] * 8
    assert tile.custom_data is None


def test_tile_new_tileset_uses_default_sprite():
    tile = tile_new(TILES[TileId.GRASS], 0, 0)
    assert tile.cur_sprite_box == Rectangle(32, 48, 16, 16)


def test_tile_new_plain_uses_texture_size():
    kind = replace(TILES[TileId.STONE], texture=Texture(24, 12))
    assert tile_new(kind, 0, 0).cur_sprite_box == Rectangle(0, 0, 24, 12)


def test_calc_sprite_box_tileset():
    tile = tile_new(TILES[TileId.GRASS], 0, 0)
    tile.texture_data = [TileId.GRASS] * 8
    tile.calc_sprite_box()
    assert tile.cur_sprite_box == Rectangle(16, 16, 16, 16)


def test_calc_sprite_box_ignores_other_ids():
    tile = tile_new(TILES[TileId.GRASS], 0, 0)
    tile.texture_data = [TileId.DIRT] * 8
    tile.calc_sprite_box()
    assert tile.cur_sprite_box == Rectangle(48, 48, 16, 16)


def test_calc_sprite_box_non_tileset_unchanged():
    tile = tile_new(TILES[TileId.DIRT], 0, 0)
    before = tile.cur_sprite_box
    tile.texture_data = [TileId.DIRT] * 8
    tile.calc_sprite_box()
    assert tile.cur_sprite_box == before


def test_tick_runs_hook_for_ticking_type():
    calls = []
    kind = TileType(TileId.DIRT, is_ticking=True, on_tick=calls.append)
    tile = tile_new(kind, 0, 0)
    tile.tick()
    assert calls == [tile]


def test_tick_skips_non_ticking_type():
    calls = []
    kind = TileType(TileId.DIRT, is_ticking=False, on_tick=calls.append)
    tile_new(kind, 0, 0).tick()
    assert calls == []


def test_right_click_runs_hook():
    calls = []
    kind = TileType(TileId.STONE, on_right_click=calls.append)
    tile = tile_new(kind, 0, 0)
    tile.right_click()
    assert calls == [tile]


def test_custom_data_round_trip():
    kind = replace(TILES[TileId.DIRT], stores_custom_data=True)
    tile = tile_new(kind, 0, 0)
    tile.custom_data = data_int(42)
    stored = DataMap()
    tile.save(stored)
    other = tile_new(kind, 0, 0)
    other.load(stored)
    assert other.custom_data == data_int(42)


def test_save_without_custom_data_type():
    tile = tile_new(TILES[TileId.DIRT], 0, 0)
    tile.custom_data = data_int(1)
    stored = DataMap()
    tile.save(stored)
    assert len(stored) == 0


def test_render_draws_texture():
    texture_surface = pygame.Surface((16, 16))
    texture_surface.fill((255, 0, 0))
    kind = replace(TILES[TileId.DIRT], texture=Texture(16, 16, texture_surface))
    tile = tile_new(kind, 16, 0)
    target = pygame.Surface((32, 16))
    target.fill((0, 0, 0))
    tile.render(target, (0, 0))
    assert tuple(target.get_at((20, 4)))[:3] == (255, 0, 0)
    assert tuple(target.get_at((4, 4)))[:3] == (0, 0, 0)


def test_render_applies_offset():
    texture_surface = pygame.Surface((16, 16))
    texture_surface.fill((0, 255, 0))
    kind = replace(TILES[TileId.DIRT], texture=Texture(16, 16, texture_surface))
    tile = tile_new(kind, 16, 0)
    target = pygame.Surface((32, 16))
    target.fill((0, 0, 0))
    tile.render(target, (16, 0))
    assert tuple(target.get_at((4, 4)))[:3] == (0, 255, 0)


def test_render_skips_untextured_type():
    texture_surface = pygame.Surface((16, 16))
    texture_surface.fill((255, 0, 0))
    kind = replace(TILES[TileId.EMPTY], texture=Texture(16, 16, texture_surface))
    target = pygame.Surface((16, 16))
    target.fill((0, 0, 0))
    tile_new(kind, 0, 0).render(target)
    assert tuple(target.get_at((4, 4)))[:3] == (0, 0, 0)


def test_tile_types_init_loads_assets(tmp_path):
    for name in ("dirt.png", "grass_tiles.png", "stone.png"):
        _png(tmp_path / name, 16, 8, (10, 20, 30))
    connected_path = tmp_path / "c.json"
    connected_path.write_text('{"res": 8, "default": [4, 4]}')
    tile_types_init(connected_path, tmp_path)
    assert TILES[TileId.STONE].texture.width == 16
    assert TILES[TileId.GRASS].texture.height == 8
    assert TILES[TileId.EMPTY].texture.surface is None
    assert tile_new(TILES[TileId.GRASS], 0, 0).cur_sprite_box == Rectangle(4, 4, 8, 8)


def test_tile_type_init_unknown_id():
    with pytest.raises(ValueError):
        tile_type_init(9, None)