# ballz

A small top-down tile game. The world is made of 16×16 chunks of
16-pixel tiles (dirt, grass and stone) laid out from Perlin noise.
Grass uses a connected-texture tileset, so its sprite follows the tiles
around it. You walk around, zoom in and out, and paint stone tiles with
the mouse. The first chunk is saved when the window is closed and loaded
again at the next start.

## Installing

```
pip install .
```

This brings in `pygame`, which the game uses for its window, input and
drawing.

## Running

```
ballz [--res DIR] [--save FILE]
```

- `--res` (default `res`): the resource directory. The game reads
  `DIR/connected.json` (the connected-texture rules) and these sprites
  from `DIR/assets/`: `dirt.png`, `grass_tiles.png`, `stone.png`,
  `torch.png`, `slot.png`, `player.png`, `player_back.png`,
  `player_left.png` and `player_right.png`.
- `--save` (default `save/game.bin`): the save file. If it exists at
  start-up it is loaded; it is written when the window is closed, and
  its directory is created if needed.

### Controls

| Key / button  | Action                                         |
|---------------|------------------------------------------------|
| W A S D       | move the player two pixels per frame           |
| Up / Down     | zoom in (up to 4×) / out (down to 1×)          |
| Left mouse    | place a stone tile under the cursor            |
| R             | reload the connected-texture rules             |

## Connected textures

`connected.json` describes how a tileset tile chooses its sprite:

```json
{
  "res": 16,
  "default": [16, 16],
  "values": [
    {"tiles": [1, 3, 4, 6], "value": [16, 16]},
    {"tiles": [4, 6], "value": [0, 0]}
  ]
}
```

The neighbours of a tile are numbered 0–7 row by row, leaving out the
centre:

```
0 1 2
3 . 4
5 6 7
```

A rule matches when every listed neighbour is the same tile and none of
the unlisted edge neighbours (1, 3, 4, 6) is. The first matching rule
gives the position of a 16×16 sprite in the tileset; if none matches,
`default` is used. A new tileset tile starts with a `res`×`res` sprite at
`default`. At most 100 rules and 8 tiles per rule are accepted;
`ballz.tile.parse_connected_info` raises `ValueError` on bad input.

## Using the pieces as a library

The game's parts work without a window:

```python
from ballz.bytebuf import ByteBuf
from ballz.data import DataMap, data_int, data_string, data_map, write_data, read_data

m = DataMap()
m.insert("essence", data_int(3))
m.insert("name", data_string("hero"))

buf = ByteBuf()
write_data(buf, data_map(m))
text = buf.to_bin()          # the save format: a string of '0' and '1'

restored = ByteBuf()
restored.load_bin(text)
again = read_data(restored)
```

`ByteBuf` has a fixed capacity (4000 bytes by default) and raises
`BufferError` when it is full or read past its end. `write_data` encodes
byte, int, char, string and map values; other `DataType`s raise
`ValueError`.

Other modules:

- `ballz.perlin`: `noise3`, `noise3_seed`, `fbm_noise3`, `ridge_noise3`,
  `turbulence_noise3`, `noise3_wrap_nonpow2`, computed in single
  precision.
- `ballz.chunk`: `Chunk`, `chunk_gen`, `pack_pos`, `unpack_pos`,
  `tile_for_noise`.
- `ballz.tile` and `ballz.item`: tile and item types and instances.
- `ballz.world.World`, `ballz.player.Player`, `ballz.game.Game` and
  `ballz.game.Controls`: the game state and one frame of input.
- `ballz.camera.Camera2D`: screen-to-world conversion.
- `ballz.app`: `tile_rect_at`, `place_stone`, `load_saved_game`,
  `save_game_file` and the `main` entry point.

## What it does not do

- Only the chunk at the origin is saved and loaded. Other chunks are
  generated again from noise, and the player's position, direction and
  essence are not written to the save file.
- Stone can only be placed in the chunk at the origin.
- The world holds at most nine loaded chunks; walking into a tenth new
  chunk raises `OverflowError`.
- There is no lighting; the torch item is only drawn at the cursor.

## Tests

```
pip install .[test]
pytest
```