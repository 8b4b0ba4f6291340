"""tmx2map/output.py -- Console output and JSON export."""

from __future__ import annotations

import json
import sys
from dataclasses import asdict
from pathlib import Path

from tmx2map.events import DIRECTION_NAMES, Event
from tmx2map.reader import MapData
from tmx2map.tmx import TmxObject

# ---------------------------------------------------------------------------
# TTY / color helpers
# ---------------------------------------------------------------------------

_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"


def _is_tty(stream) -> bool:
    return hasattr(stream, "isatty") and stream.isatty()


def _colorize(text: str, color: str, stream) -> str:
    if _is_tty(stream):
        return f"{color}{text}{_RESET}"
    return text


# ---------------------------------------------------------------------------
# Console output
# ---------------------------------------------------------------------------


def print_warning(message: str) -> None:
    print(_colorize(f"WARNING: {message}", _YELLOW, sys.stdout))


def print_error(message: str) -> None:
    print(_colorize(f"ERROR: {message}", _RED, sys.stderr), file=sys.stderr)


def format_event_trace(obj: TmxObject, event: Event) -> str:
    """One-line trace of an object and the event it encoded to."""
    return (
        f"from: {obj.gid} @ {obj.x},{obj.y} to: trigger {event.trigger_type}, "
        f"cp {event.checkpoint}, type {event.type}, color {event.color}"
    )


def _event_flags(event: Event) -> str:
    flags = []
    if event.is_finish:
        flags.append("finish")
    if event.is_jump:
        flags.append("jump")
    if event.is_skid:
        flags.append("skid")
    return ",".join(flags) or "-"


def print_map_dump(data: MapData) -> None:
    """Print the event table of a decoded map."""
    mirrored = int((data.tiles & 0x80).astype(bool).sum())
    print(f"Tiles: {data.tiles.shape[1]}x{data.tiles.shape[0]}, {mirrored} mirrored")
    print(f"Events: {len(data.events)}")
    for i, event in enumerate(data.events):
        direction = DIRECTION_NAMES.get(event.direction, "?")
        print(
            f"  {i:>2d}  trigger=0x{event.trigger_type:02x} ({direction:<2s} "
            f"{_event_flags(event)})  cp={event.checkpoint:>3d}  "
            f"type={event.type:>2d}  color={event.color}"
        )


# ---------------------------------------------------------------------------
# JSON serialization
# ---------------------------------------------------------------------------


def map_to_dict(data: MapData) -> dict:
    """Convert decoded map data to a JSON-serializable dict."""
    return {
        "tiles": data.tiles.tolist(),
        "events": [asdict(e) for e in data.events],
    }


def save_map_json(data: MapData, path: Path | str) -> None:
    """Save decoded map data as a JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(map_to_dict(data), indent=2) + "\n")
