from ballz.app import load_saved_game, place_stone, save_game_file, tile_rect_at
from ballz.game import Game
from ballz.shared import TILE_SIZE, Rectangle
from ballz.tile import TileId


def make_game():
    game = Game()
    game.world.gen()
    return game


def test_tile_rect_at_snaps_to_grid():
    assert tile_rect_at(20, 35) == Rectangle(16, 32, TILE_SIZE, TILE_SIZE)


def test_tile_rect_at_contains_point():
    for x, y in [(0.5, 0.5), (100.2, 7.9), (250.0, 199.0)]:
        rect = tile_rect_at(x, y)
        assert rect.contains_point(x, y)
        assert rect.width == TILE_SIZE and rect.height == TILE_SIZE


def test_place_stone_sets_tile():
    game = make_game()
    assert place_stone(game, 5, 5)
    tile = game.world.chunks[0].tiles[0][0]
    assert tile.type.id == TileId.STONE
    assert (tile.box.x, tile.box.y) == (0.0, 0.0)


def test_place_stone_out_of_chunk_is_ignored():
    game = make_game()
    before = [[t.type.id for t in row] for row in game.world.chunks[0].tiles]
    assert not place_stone(game, -20, 5)
    assert not place_stone(game, 5, 10_000)
    after = [[t.type.id for t in row] for row in game.world.chunks[0].tiles]
    assert after == before


def test_save_and_load_file_round_trip(tmp_path):
    game = make_game()
    place_stone(game, 40, 40)
    path = tmp_path / "save" / "game.bin"
    save_game_file(game, path)
    text = path.read_text(encoding="ascii")
    assert text and set(text) <= {"0", "1"}
    assert len(text) % 8 == 0

    restored = make_game()
    assert load_saved_game(restored, path)
    original = [[t.type.id for t in row] for row in game.world.chunks[0].tiles]
    loaded = [[t.type.id for t in row] for row in restored.world.chunks[0].tiles]
    assert loaded == original


def test_load_missing_file_returns_false(tmp_path):
    game = make_game()
    before = [[t.type.id for t in row] for row in game.world.chunks[0].tiles]
    assert not load_saved_game(game, tmp_path / "missing.bin")
    after = [[t.type.id for t in row] for row in game.world.chunks[0].tiles]
    assert after == before