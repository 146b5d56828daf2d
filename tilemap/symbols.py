# tilemap/symbols.py
from __future__ import annotations

"""
C header emission for a finished tile sheet.

Per image:   TILE_<NAME>_START / _WIDTH / _HEIGHT / _COUNT
Multicolour: TILE_<NAME>_COLOR<i>  MR_COLOR_<REFERENCE>
Totals:      TILE_BANK<b>_COUNT / TILE_BANK<b>_BYTES

A non-zero bank prefixes per-image symbols with TILE_B<b>_ so several banks
can be included into one translation unit.
"""

import re
from pathlib import Path, PureWindowsPath
from typing import Dict, Iterable, List, Sequence, Tuple, Union

from .core_types import TILE_BYTES, ImageTileRecord
from .errors import DuplicateSymbolError

_NON_IDENT = re.compile(r"[^A-Z0-9_]")


def symbol_name(path: Union[str, Path]) -> str:
    """'gfx/tiles_alien.png' -> 'ALIEN'."""
    base = PureWindowsPath(str(path)).name  # splits on both / and \
    stem = base.rsplit(".", 1)[0] if "." in base else base
    tail = stem.rsplit("_", 1)[-1]
    ident = _NON_IDENT.sub("_", tail.upper())
    if not ident or ident[0].isdigit():
        ident = f"_{ident}"
    return ident


def check_unique_names(pairs: Iterable[Tuple[str, str]]) -> None:
    """Raise DuplicateSymbolError on the first repeated (name, source) name."""
    seen: Dict[str, str] = {}
    for name, source in pairs:
        if name in seen:
            raise DuplicateSymbolError(name, seen[name], source)
        seen[name] = source


def symbol_prefix(bank: int) -> str:
    return "TILE_" if bank == 0 else f"TILE_B{bank}_"


def _define(name: str, value: Union[int, str]) -> str:
    return f"#define {name:<40} {value}"


def render_header(
    records: Sequence[ImageTileRecord], tiles_count: int, bank: int = 0
) -> str:
    """Header text for the given records and sheet total."""
    check_unique_names((rec.name, f"tile {rec.start}") for rec in records)
    guard = f"TILE_BANK{bank}_H"
    prefix = symbol_prefix(bank)
    lines: List[str] = [
        "/* Generated by img2tile. Do not edit. */",
        "",
        f"#ifndef {guard}",
        f"#define {guard}",
        "",
    ]
    for rec in records:
        base = f"{prefix}{rec.name}"
        lines.append(_define(f"{base}_START", rec.start))
        lines.append(_define(f"{base}_WIDTH", rec.width_tiles))
        lines.append(_define(f"{base}_HEIGHT", rec.height_tiles))
        lines.append(_define(f"{base}_COUNT", rec.tiles))
        for i, colour in enumerate(rec.colour_names):
            lines.append(_define(f"{base}_COLOR{i}", f"MR_COLOR_{colour}"))
        lines.append("")
    lines.append(_define(f"TILE_BANK{bank}_COUNT", tiles_count))
    lines.append(_define(f"TILE_BANK{bank}_BYTES", tiles_count * TILE_BYTES))
    lines.append("")
    lines.append(f"#endif /* {guard} */")
    return "\n".join(lines) + "\n"


def write_header(path: Path, text: str) -> Path:
    path.write_text(text, encoding="ascii")
    return path


__all__ = ["symbol_name", "check_unique_names", "symbol_prefix", "render_header", "write_header"]
