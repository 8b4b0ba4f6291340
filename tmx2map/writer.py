"""tmx2map/writer.py -- Map binary output.

Layout: width*height tile bytes (row-major), then one 4-byte event record per
object in document order. No header, padding or separators.
"""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO, Callable

from tmx2map.errors import MapIOError
from tmx2map.events import Event, event_from
from tmx2map.tiles import encode_tiles
from tmx2map.tmx import TmxMap, TmxObject


class MapWriter:
    """Writes encoded tiles and events to a binary stream."""

    def __init__(
        self,
        stream: BinaryIO,
        on_event: Callable[[TmxObject, Event], None] | None = None,
    ) -> None:
        self.stream = stream
        self.on_event = on_event
        self.bytes_written = 0

    def write(self, tmx: TmxMap) -> None:
        self._write_tiles(tmx)
        self._write_events(tmx)

    def _write_tiles(self, tmx: TmxMap) -> None:
        self._write_chunk(encode_tiles(tmx), "Could not write map tiles.", 24)

    def _write_events(self, tmx: TmxMap) -> None:
        for obj in tmx.objects:
            event = event_from(obj, tmx.first_object_gid)
            if self.on_event is not None:
                self.on_event(obj, event)
            self._write_chunk(event.to_bytes(), "Could not write map events.", 25)

    def _write_chunk(self, data: bytes, message: str, exit_code: int) -> None:
        try:
            written = self.stream.write(data)
        except OSError as e:
            raise MapIOError(f"{message} {e}", exit_code) from e
        if written is not None and written != len(data):
            raise MapIOError(
                f"{message} Short write: {written} of {len(data)} bytes.", exit_code
            )
        self.bytes_written += len(data)


def write_map(
    tmx: TmxMap,
    path: str | Path,
    on_event: Callable[[TmxObject, Event], None] | None = None,
) -> int:
    """Write *tmx* to *path*. Returns the number of bytes written.

    The file is truncated on open; a failed write leaves it partial.
    """
    try:
        f = open(path, "wb")
    except OSError as e:
        raise MapIOError(f"Could not open {path} for writing: {e}", 28) from e
    writer = MapWriter(f, on_event=on_event)
    try:
        with f:
            writer.write(tmx)
    except OSError as e:
        # Buffered data is flushed on close
        raise MapIOError(f"Could not write {path}: {e}", 24) from e
    return writer.bytes_written
