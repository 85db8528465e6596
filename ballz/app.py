"""The game window: input, drawing and saving on exit."""

from __future__ import annotations

import argparse
import math
from pathlib import Path

import pygame

from .bytebuf import ByteBuf
from .game import Controls, Game
from .item import ITEM_SCALE, ITEMS, ItemId, ItemInstance, item_types_init
from .player import Player
from .shared import (
    CHUNK_SIZE,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    TILE_SIZE,
    Rectangle,
    load_texture,
)
from .tile import TILES, TileId, init_connected_info, tile_new, tile_types_init

LOAD_CAPACITY = 4000
SAVE_CAPACITY = 5000
TARGET_FPS = 60
TITLE = "Ballz"

_BACKGROUND = (80, 80, 80)
_OUTLINE = (0, 121, 241)
_PLAYER_TEXTURES = ("player.png", "player_back.png", "player_left.png", "player_right.png")


def _tile_index(world_x: float, world_y: float) -> tuple[int, int]:
    return int(world_x / TILE_SIZE), int(world_y / TILE_SIZE)


def tile_rect_at(world_x: float, world_y: float) -> Rectangle:
    """Return the tile-sized rectangle under a world position."""
    x_index, y_index = _tile_index(world_x, world_y)
    return Rectangle(x_index * TILE_SIZE, y_index * TILE_SIZE, TILE_SIZE, TILE_SIZE)


def place_stone(game: Game, world_x: float, world_y: float) -> bool:
    """Put a stone tile in the first chunk under a world position; report whether it happened."""
    x_index, y_index = _tile_index(world_x, world_y)
    if not (0 <= x_index < CHUNK_SIZE and 0 <= y_index < CHUNK_SIZE) or not game.world.chunks:
        return False
    chunk = game.world.chunks[0]
    if not chunk.tiles[y_index][x_index].box.contains_point(world_x, world_y):
        return False
    stone = tile_new(TILES[TileId.STONE], x_index * TILE_SIZE, y_index * TILE_SIZE)
    chunk.set_tile(stone, x_index, y_index)
    return True


def load_saved_game(game: Game, path: str | Path) -> bool:
    """Load the world from a save file if it exists; report whether it did."""
    if not Path(path).exists():
        return False
    buf = ByteBuf(LOAD_CAPACITY)
    buf.load_file(path)
    game.load(buf)
    return True


def save_game_file(game: Game, path: str | Path) -> None:
    """Write the game to a save file, creating its directory if needed."""
    buf = ByteBuf(SAVE_CAPACITY)
    game.save(buf)
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    buf.save_file(path)


def _read_controls() -> Controls:
    keys = pygame.key.get_pressed()
    return Controls(
        zoom_in=keys[pygame.K_UP],
        zoom_out=keys[pygame.K_DOWN],
        up=keys[pygame.K_w],
        left=keys[pygame.K_a],
        down=keys[pygame.K_s],
        right=keys[pygame.K_d],
    )


def _draw_world(screen, game: Game, mouse_world: tuple[float, float]) -> None:
    cam = game.player.cam
    view_w = max(1, math.ceil(SCREEN_WIDTH / cam.zoom))
    view_h = max(1, math.ceil(SCREEN_HEIGHT / cam.zoom))
    origin = (
        cam.target[0] - cam.offset[0] / cam.zoom,
        cam.target[1] - cam.offset[1] / cam.zoom,
    )
    view = pygame.Surface((view_w, view_h))
    view.fill(_BACKGROUND)
    game.world.render(view, origin)

    outline = tile_rect_at(*mouse_world)
    pygame.draw.rect(
        view,
        _OUTLINE,
        pygame.Rect(
            round(outline.x - origin[0]),
            round(outline.y - origin[1]),
            int(outline.width),
            int(outline.height),
        ),
        1,
    )
    texture = game.player.get_texture()
    if texture.surface is not None:
        view.blit(
            texture.surface,
            (round(game.player.box.x - origin[0]), round(game.player.box.y - origin[1])),
        )
    screen.blit(pygame.transform.scale(view, (SCREEN_WIDTH, SCREEN_HEIGHT)), (0, 0))


def _draw_hud(screen, slot_texture, mouse_pos: tuple[int, int]) -> None:
    size = (int(slot_texture.width * ITEM_SCALE), int(slot_texture.height * ITEM_SCALE))
    dest = (
        int(SCREEN_WIDTH - ITEM_SCALE * 16 - 30),
        int(SCREEN_HEIGHT / 2.0 - ITEM_SCALE * 8),
    )
    screen.blit(pygame.transform.scale(slot_texture.surface, size), dest)
    ItemInstance(ITEMS[ItemId.TORCH]).render(screen, *mouse_pos)


def main(argv: list[str] | None = None) -> int:
    """Open the game window and run until it is closed."""
    parser = argparse.ArgumentParser(prog="ballz", description="Run the game.")
    parser.add_argument("--res", default="res", help="resource directory")
    parser.add_argument("--save", default="save/game.bin", help="save file")
    args = parser.parse_args(argv)

    res = Path(args.res)
    assets = res / "assets"
    connected = res / "connected.json"

    pygame.init()
    try:
        screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption(TITLE)

        tile_types_init(connected, assets)
        item_types_init(assets)

        player = Player(textures=tuple(load_texture(assets / name) for name in _PLAYER_TEXTURES))
        game = Game(player=player)
        game.world.gen()
        load_saved_game(game, args.save)
        game.world.prepare_rendering()

        slot_texture = load_texture(assets / "slot.png")
        clock = pygame.time.Clock()
        frame_time = 0.0
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
            if not running:
                break

            game.tick(_read_controls(), frame_time)
            if pygame.key.get_pressed()[pygame.K_r]:
                init_connected_info(connected)

            mouse_pos = pygame.mouse.get_pos()
            mouse_world = game.player.cam.screen_to_world(*mouse_pos)
            if pygame.mouse.get_pressed()[0]:
                place_stone(game, *mouse_world)

            _draw_world(screen, game, mouse_world)
            _draw_hud(screen, slot_texture, mouse_pos)
            pygame.display.flip()
            frame_time = clock.tick(TARGET_FPS) / 1000.0

        save_game_file(game, args.save)
    finally:
        pygame.quit()
    return 0