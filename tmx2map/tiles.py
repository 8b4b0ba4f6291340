"""tmx2map/tiles.py -- Tile id to engine byte encoding.

The tile tileset holds MAX_TILES plain tiles followed by mirrored
variants laid out in strips of 8. A mirrored tile is addressed by its strip
row and reversed column, with the high bit set.
"""

from __future__ import annotations

import numpy as np

from tmx2map.tmx import TmxMap

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MAX_TILES = 104  # number of non-mirrored tiles
MIRROR_STRIP = 8
MIRROR_FLAG = 0x80


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def tile_value(raw: int, first_tile_gid: int) -> int:
    """Encode one raw tile id as the engine's tile byte."""
    local = raw - first_tile_gid
    if local < MAX_TILES:
        return local & 0xFF
    row, col = divmod(local - MAX_TILES, MIRROR_STRIP)
    return (MIRROR_STRIP * row + (MIRROR_STRIP - 1 - col) + MIRROR_FLAG) & 0xFF


def encode_tile_grid(tiles: np.ndarray, first_tile_gid: int) -> np.ndarray:
    """Vectorized tile_value over a whole grid. Returns a uint8 array."""
    local = tiles.astype(np.int32) - first_tile_gid
    row, col = np.divmod(local - MAX_TILES, MIRROR_STRIP)
    mirrored = MIRROR_STRIP * row + (MIRROR_STRIP - 1 - col) + MIRROR_FLAG
    encoded = np.where(local < MAX_TILES, local, mirrored)
    return (encoded & 0xFF).astype(np.uint8)


def encode_tiles(tmx: TmxMap) -> bytes:
    """Encoded tile bytes for *tmx*, row-major."""
    return encode_tile_grid(tmx.tiles, tmx.first_tile_gid).tobytes(order="C")
