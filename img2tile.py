#!/usr/bin/env python3
"""
img2tile.py
Convert one or more images into a single sheet of 8x8 tiles for 8-bit targets.

Usage:
  python img2tile.py -i IMAGE [-i IMAGE ...] -o OUTPUT [-g HEADER] [-l LUM] [-R]
                     [-m] [-b BANK] [-B NAME] [-j JOBS] [-v|-q]

Modes:
  mono       : 1 bit per pixel, pixel on when luminance >= LUM (inverted by -R).
               Images must be multiples of 8x8 pixels.
  multicolor : 2 bits per pixel, at most 4 distinct colours per image.
               Images must be multiples of 4x8 pixels.

Output:
  Raw tiles, 8 bytes each, images in command line order. No header.
  With -g, a C header with start/width/height per image and the total count.

Exit codes:
  1 wrong options, 2 missing input, 3 missing output, 4 unknown colour,
  5 cannot open input, 6 cannot open output, 7/8 width/height not aligned,
  9 too many colours, 10 two inputs share a symbol name.
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path
from typing import List, Optional

from PIL import UnidentifiedImageError

from tilemap.config import TileConfig
from tilemap.convert import convert_files
from tilemap.errors import (
    DimensionError,
    DuplicateSymbolError,
    PaletteOverflowError,
    UnknownColourError,
)
from tilemap.image_io import is_image_file
from tilemap.palette_data import REFERENCE_PALETTE
from tilemap.symbols import render_header, write_header
from tilemap.utils import (
    enable_line_buffered_stdout,
    error,
    format_bytes,
    format_seconds_compact,
    log,
    print_banner,
    print_config_line,
    warn,
)

ERL_WRONG_OPTIONS = 1
ERL_MISSING_INPUT_FILENAME = 2
ERL_MISSING_OUTPUT_FILENAME = 3
ERL_UNKNOWN_COLOUR = 4
ERL_CANNOT_OPEN_INPUT = 5
ERL_CANNOT_OPEN_OUTPUT = 6
ERL_CANNOT_CONVERT_WIDTH = 7
ERL_CANNOT_CONVERT_HEIGHT = 8
ERL_TOO_MANY_COLOURS = 9
ERL_DUPLICATE_SYMBOL = 10


class _Parser(argparse.ArgumentParser):
    """argparse with the tool's own exit code for bad options."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        error(message)
        sys.exit(ERL_WRONG_OPTIONS)


def build_parser() -> argparse.ArgumentParser:
    colour_names = ", ".join(c.name for c in REFERENCE_PALETTE)
    parser = _Parser(
        prog="img2tile",
        description="Convert images into (a set of) 8x8 tiles.",
    )
    parser.add_argument(
        "-i", "--input", dest="inputs", type=Path, action="append", default=[],
        help="Input image (repeat for several images)",
    )
    parser.add_argument("-o", "--output", type=Path, default=None, help="Output tile file")
    parser.add_argument("-g", "--header", type=Path, default=None, help="C header with tile offsets")
    parser.add_argument("-l", "--luminance", type=int, default=1, help="Luminance threshold")
    parser.add_argument("-R", "--reverse", action="store_true", help="Reverse luminance threshold")
    parser.add_argument("-m", "--multicolor", action="store_true", help="2 bit per pixel mode")
    parser.add_argument("-b", "--bank", type=int, default=0, help="Bank number for symbols")
    parser.add_argument(
        "-B", "--background", default=None,
        help=f"Colour kept at index 0 in multicolor mode ({colour_names})",
    )
    parser.add_argument("-j", "--jobs", type=int, default=1, help="Images decoded in parallel")
    # last of -v / -q wins
    parser.add_argument(
        "-v", "--verbose", dest="verbose", action="store_const", const=True,
        default=False, help="Verbose output",
    )
    parser.add_argument(
        "-q", "--quiet", dest="verbose", action="store_const", const=False,
        help="Quiet output (default)",
    )
    return parser


def parse_cli_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def config_from_args(args: argparse.Namespace) -> TileConfig:
    return TileConfig(
        threshold=args.luminance,
        reverse=args.reverse,
        multicolour=args.multicolor,
        bank=args.bank,
        background=args.background,
        verbose=args.verbose,
        jobs=args.jobs,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns the process exit code."""
    enable_line_buffered_stdout()
    args = parse_cli_args(argv)

    if not args.inputs:
        error("Missing input filename.")
        return ERL_MISSING_INPUT_FILENAME
    if args.output is None:
        error("Missing output filename.")
        return ERL_MISSING_OUTPUT_FILENAME

    config = config_from_args(args)
    try:
        resolved = config.validate()
    except UnknownColourError as e:
        error(str(e))
        return ERL_UNKNOWN_COLOUR
    except ValueError as e:
        error(str(e))
        return ERL_WRONG_OPTIONS

    if resolved.background is not None and not config.multicolour:
        warn("background colour only applies in multicolor mode")

    for path in args.inputs:
        if not path.is_file() or not is_image_file(path):
            error(f"Unable to open file {path}")
            return ERL_CANNOT_OPEN_INPUT

    if resolved.verbose:
        print_banner("img2tile")
        print_config_line(
            "run",
            [
                ("Images", len(args.inputs)),
                ("Mode", "multicolor" if config.multicolour else "mono"),
                ("Threshold", config.threshold),
                ("Reverse", config.reverse),
                ("Bank", config.bank),
                ("Background", resolved.background.name if resolved.background else "-"),
                ("Jobs", config.jobs),
            ],
            debug=True,
        )

    t_start = time.perf_counter()
    try:
        result = convert_files(args.inputs, resolved)
    except DimensionError as e:
        error(str(e))
        return ERL_CANNOT_CONVERT_WIDTH if e.axis == "width" else ERL_CANNOT_CONVERT_HEIGHT
    except PaletteOverflowError as e:
        error(str(e))
        return ERL_TOO_MANY_COLOURS
    except DuplicateSymbolError as e:
        error(str(e))
        return ERL_DUPLICATE_SYMBOL
    except (UnidentifiedImageError, OSError) as e:
        error(f"Unable to open input: {e}")
        return ERL_CANNOT_OPEN_INPUT

    try:
        result.sheet.save(args.output)
        if args.header is not None:
            text = render_header(result.records, result.tiles_count, config.bank)
            write_header(args.header, text)
    except OSError as e:
        error(f"Unable to open file {e.filename or args.output}")
        return ERL_CANNOT_OPEN_OUTPUT

    if resolved.verbose:
        log(f"Output tile(s) .............. {args.output}")
        log(
            f"Wrote {result.tiles_count} tile(s) ({format_bytes(result.sheet.nbytes)}) "
            f"in {format_seconds_compact(time.perf_counter() - t_start)}"
        )
    return 0


def main_exit() -> None:
    """Console script wrapper."""
    sys.exit(main())


if __name__ == "__main__":
    main_exit()
