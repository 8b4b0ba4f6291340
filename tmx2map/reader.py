"""tmx2map/reader.py -- Load a map binary back into tiles and events.

This is the engine's view of the output: the tile grid size is known in
advance and the event count is whatever remains after it.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np

from tmx2map.errors import FormatError, MapIOError
from tmx2map.events import EVENT_SIZE, Event
from tmx2map.tmx import MAP_HEIGHT, MAP_WIDTH, MAX_EVENTS


@dataclass
class MapData:
    """A decoded map binary."""

    tiles: np.ndarray  # uint8, shape (MAP_HEIGHT, MAP_WIDTH)
    events: list[Event]


def decode_map(data: bytes) -> MapData:
    """Split raw map bytes into the tile grid and event records.

    Raises:
        FormatError: If the data is too short or the event block is ragged.
    """
    tile_count = MAP_WIDTH * MAP_HEIGHT
    if len(data) < tile_count:
        raise FormatError(
            f"Map data too short: {len(data)} bytes, need at least {tile_count}.", 29
        )
    tail = data[tile_count:]
    if len(tail) % EVENT_SIZE:
        raise FormatError(
            f"Event block is {len(tail)} bytes, not a multiple of {EVENT_SIZE}.", 29
        )
    if len(tail) // EVENT_SIZE > MAX_EVENTS:
        raise FormatError(
            f"{len(tail) // EVENT_SIZE} events, maximum is {MAX_EVENTS}.", 29
        )

    tiles = np.frombuffer(data[:tile_count], dtype=np.uint8).reshape(MAP_HEIGHT, MAP_WIDTH)
    events = [
        Event.from_bytes(tail[i:i + EVENT_SIZE])
        for i in range(0, len(tail), EVENT_SIZE)
    ]
    return MapData(tiles=tiles, events=events)


def load_map(path: str | Path) -> MapData:
    """Read and decode a map binary from *path*."""
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise MapIOError(f"Could not read {path}: {e}", 31) from e
    return decode_map(data)
