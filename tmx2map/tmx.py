"""tmx2map/tmx.py -- TMX map model and the line-oriented parser that builds it.

Only the narrow TMX subset the racing engine's maps are authored in is
accepted: an XML declaration, a <map> line, two tilesets (tiles first,
objects second), one 32x32 CSV layer and one object group of 1-32 tile
objects. The parser walks the file top to bottom and fails on the first
deviation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

import numpy as np

from tmx2map.errors import (
    CapacityError,
    EndOfInput,
    FormatError,
    InvalidValueError,
    MapIOError,
    MissingTagError,
)
from tmx2map.scanner import LineScanner, parse_int, read_attribute

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

MAP_WIDTH = 32
MAP_HEIGHT = 32
MAX_EVENTS = 32


# ---------------------------------------------------------------------------
# Data classes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TmxObject:
    """A tile object from the object group, in TMX pixel coordinates."""

    gid: int
    x: int
    y: int


@dataclass(frozen=True, eq=False)
class TmxMap:
    """Everything the encoders need from a parsed TMX file."""

    first_tile_gid: int
    first_object_gid: int
    width: int
    height: int
    tiles: np.ndarray  # uint8, shape (height, width), row-major
    objects: tuple[TmxObject, ...] = field(default_factory=tuple)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class TmxParser:
    """Sequential TMX reader.

    Usage::

        parser = TmxParser(open("track.tmx"))
        tmx = parser.parse()
        for w in parser.warnings:
            print(w)
    """

    def __init__(self, lines: Iterable[str]) -> None:
        self.scanner = LineScanner(lines)
        self.warnings: list[str] = []

    def parse(self) -> TmxMap:
        self._read_header()
        first_tile_gid = self._read_tileset()
        first_object_gid = self._read_tileset()
        width, height = self._read_layer()
        self._read_data_tag()
        tiles = self._read_rows(width, height)
        objects = self._read_objects()
        tiles.flags.writeable = False
        return TmxMap(
            first_tile_gid=first_tile_gid,
            first_object_gid=first_object_gid,
            width=width,
            height=height,
            tiles=tiles,
            objects=tuple(objects),
        )

    # -- header ------------------------------------------------------------

    def _line_or_fail(self, message: str, exit_code: int) -> str:
        try:
            return self.scanner.next_line()
        except EndOfInput:
            raise FormatError(message, exit_code) from None

    def _read_header(self) -> None:
        line = self._line_or_fail("Could not read XML header.", 3)
        if not line.startswith("<?xml"):
            raise FormatError("TMX file is not XML.", 4)
        line = self._line_or_fail("Could not read TMX header.", 5)
        if not line.startswith("<map"):
            raise FormatError("TMX file is not a TMX file.", 6)

    # -- tilesets and layer ------------------------------------------------

    def _read_tileset(self) -> int:
        tag = self.scanner.find_tag("<tileset", 7)
        firstgid = read_attribute(tag, "firstgid", 8)
        value = parse_int(firstgid)
        if value is None:
            raise InvalidValueError(f"Invalid tileset firstgid {firstgid!r}.", 27)
        return value

    def _read_layer(self) -> tuple[int, int]:
        tag = self.scanner.find_tag("<layer", 7)
        height = read_attribute(tag, "height", 8)
        width = read_attribute(tag, "width", 8)
        read_attribute(tag, "name", 8)
        if parse_int(width) != MAP_WIDTH or parse_int(height) != MAP_HEIGHT:
            raise FormatError(
                f"Invalid width and/or height: {width}x{height} "
                f"(expected {MAP_WIDTH}x{MAP_HEIGHT}).",
                9,
            )
        return MAP_WIDTH, MAP_HEIGHT

    def _read_data_tag(self) -> None:
        line = self._line_or_fail("Unexpected EOF before <data> tag.", 10)
        pos = line.find("<data")
        if pos < 0:
            raise MissingTagError("Missing <data> tag.", 11)
        encoding = read_attribute(line[pos:], "encoding", 12)
        if encoding != "csv":
            raise FormatError(f'Invalid encoding "{encoding}".', 13)

    # -- tile rows ---------------------------------------------------------

    def _read_rows(self, width: int, height: int) -> np.ndarray:
        tiles = np.zeros((height, width), dtype=np.uint8)
        for ty in range(height):
            line = self._line_or_fail(f"Unexpected EOF in tile row {ty}.", 14)
            # Empty tokens come from the trailing comma Tiled writes per row.
            tokens = [t for t in line.split(",") if t]
            for tx in range(width):
                if tx >= len(tokens):
                    raise FormatError(f"Missing/invalid value at {tx},{ty}.", 15)
                value = parse_int(tokens[tx])
                if value is None:
                    raise FormatError(f"Missing/invalid value at {tx},{ty}.", 15)
                if value > 255:
                    self.warnings.append(f"Byte overflow at {tx},{ty}: {value}.")
                tiles[ty, tx] = value & 0xFF
        return tiles

    # -- objects -----------------------------------------------------------

    def _read_objects(self) -> list[TmxObject]:
        self.scanner.find_tag("<objectgroup", 16)
        line = self._line_or_fail("Unexpected EOF before first <object> tag.", 17)
        pos = line.find("<object")
        if pos < 0:
            raise MissingTagError("Missing <object> tag.", 18)
        tag = line[pos:]

        objects: list[TmxObject] = []
        while True:
            objects.append(self._read_object(tag))

            line = self._line_or_fail("Unexpected EOF in <objectgroup>.", 21)
            if "</objectgroup" in line:
                break
            pos = line.find("<object")
            if pos < 0:
                raise MissingTagError("Missing <object> tag.", 22)
            if len(objects) >= MAX_EVENTS:
                raise CapacityError(
                    f"Too many objects (maximum is {MAX_EVENTS}).", 23
                )
            tag = line[pos:]
        return objects

    def _read_object(self, tag: str) -> TmxObject:
        raw_y = read_attribute(tag, "y", 19)
        raw_x = read_attribute(tag, "x", 19)
        raw_gid = read_attribute(tag, "gid", 19)
        gid, x, y = parse_int(raw_gid), parse_int(raw_x), parse_int(raw_y)
        # Zero is indistinguishable from "not a number" here, so objects at
        # coordinate 0 or with gid 0 are rejected as well.
        if not gid or not x or not y:
            raise InvalidValueError(
                f"Invalid gid, x and/or y at line {self.scanner.line_number}: "
                f"gid={raw_gid!r} x={raw_x!r} y={raw_y!r}.",
                20,
            )
        return TmxObject(gid=gid, x=x, y=y)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_tmx(text: str) -> tuple[TmxMap, list[str]]:
    """Parse TMX source text. Returns the map and any warnings."""
    parser = TmxParser(text.splitlines(keepends=True))
    return parser.parse(), parser.warnings


def read_tmx(path: str | Path) -> tuple[TmxMap, list[str]]:
    """Read and parse a TMX file. Returns the map and any warnings.

    Raises:
        MapIOError: If the file cannot be opened or read.
        FormatError, CapacityError: If the content is not an accepted map.
    """
    try:
        with open(path, encoding="utf-8-sig") as f:
            parser = TmxParser(f)
            return parser.parse(), parser.warnings
    except (OSError, UnicodeDecodeError) as e:
        raise MapIOError(f"Could not read {path}: {e}", 30) from e
