"""tmx2map -- Tiled TMX tracks to racing-engine map binaries."""

from tmx2map.errors import (
    CapacityError,
    ConversionError,
    EndOfInput,
    FormatError,
    InvalidValueError,
    MapIOError,
    MissingAttributeError,
    MissingTagError,
    TmxAttributeError,
    UnknownEventError,
)
from tmx2map.events import TRIGGER_TYPE_BY_GID, Event, event_from
from tmx2map.reader import MapData, decode_map, load_map
from tmx2map.scanner import LineScanner, read_attribute
from tmx2map.tiles import encode_tiles, tile_value
from tmx2map.tmx import TmxMap, TmxObject, TmxParser, parse_tmx, read_tmx
from tmx2map.writer import MapWriter, write_map

__all__ = [
    "ConversionError",
    "MapIOError",
    "FormatError",
    "MissingTagError",
    "TmxAttributeError",
    "MissingAttributeError",
    "InvalidValueError",
    "UnknownEventError",
    "CapacityError",
    "EndOfInput",
    "LineScanner",
    "read_attribute",
    "TmxObject",
    "TmxMap",
    "TmxParser",
    "parse_tmx",
    "read_tmx",
    "tile_value",
    "encode_tiles",
    "TRIGGER_TYPE_BY_GID",
    "Event",
    "event_from",
    "MapWriter",
    "write_map",
    "MapData",
    "decode_map",
    "load_map",
]
