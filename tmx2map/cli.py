"""tmx2map/cli.py -- CLI entry point for TMX to map conversion.

Usage::

    tmx2map track.tmx track.map
    tmx2map track.tmx track.map --dump
    tmx2map track.tmx track.map --json track.json
    TMX2MAP_DEBUG=1 python -m tmx2map track.tmx track.map
"""

from __future__ import annotations

import argparse
import sys

from tmx2map import debug
from tmx2map.errors import ConversionError
from tmx2map.output import (
    format_event_trace,
    print_error,
    print_map_dump,
    print_warning,
    save_map_json,
)
from tmx2map.reader import load_map
from tmx2map.tmx import read_tmx
from tmx2map.writer import write_map


def _trace_event(obj, event) -> None:
    print(format_event_trace(obj, event))


def main(argv: list[str] | None = None) -> None:
    """Convert a TMX file into an engine map binary."""
    parser = argparse.ArgumentParser(
        description="Convert a Tiled TMX track into map tiles and events."
    )
    parser.add_argument("input_tmx", help="Path to input TMX file")
    parser.add_argument("output_map", help="Path to output map binary")
    parser.add_argument(
        "--dump", action="store_true",
        help="Print the event table of the written map",
    )
    parser.add_argument(
        "--json", metavar="PATH", help="Also save the written map as JSON",
    )
    parser.add_argument(
        "--quiet", "-q", action="store_true",
        help="Only print warnings and errors",
    )
    args = parser.parse_args(argv)

    def info(message: str) -> None:
        if not args.quiet:
            print(message)

    try:
        tmx, warnings = read_tmx(args.input_tmx)
    except ConversionError as e:
        print_error(str(e))
        print_error("Could not read TMX file.")
        sys.exit(e.exit_code)
    for w in warnings:
        print_warning(w)
    info(f"TMX file read: {tmx.width}x{tmx.height} tiles, {len(tmx.objects)} objects")

    on_event = _trace_event if debug.DEBUG else None
    try:
        size = write_map(tmx, args.output_map, on_event=on_event)
    except ConversionError as e:
        print_error(str(e))
        print_error("Could not write map file.")
        sys.exit(e.exit_code)
    info(f"Map file written: {args.output_map} ({size} bytes)")

    if args.dump or args.json:
        try:
            data = load_map(args.output_map)
        except ConversionError as e:
            print_error(str(e))
            sys.exit(e.exit_code)
        if args.dump:
            print_map_dump(data)
        if args.json:
            save_map_json(data, args.json)
            info(f"JSON written to {args.json}")


if __name__ == "__main__":
    main()
