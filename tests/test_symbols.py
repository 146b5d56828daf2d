from __future__ import annotations

from typing import Dict

import pytest

from tilemap.core_types import ImageTileRecord
from tilemap.errors import DuplicateSymbolError
from tilemap.symbols import check_unique_names, render_header, symbol_name, write_header


def _defines(text: str) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for line in text.splitlines():
        parts = line.split()
        if len(parts) == 3 and parts[0] == "#define":
            out[parts[1]] = parts[2]
    return out


@pytest.mark.parametrize(
    "path, expected",
    [
        ("gfx/tiles_alien.png", "ALIEN"),
        ("C:\\art\\my_ship.gif", "SHIP"),
        ("logo.png", "LOGO"),
        ("a_b_c.tar.png", "C_TAR"),
        ("sprite_1.png", "_1"),
    ],
)
def test_symbol_name(path: str, expected: str) -> None:
    assert symbol_name(path) == expected


def test_header_lists_offsets_and_total() -> None:
    records = [
        ImageTileRecord("ALIEN", 0, 2, 1),
        ImageTileRecord("SHIP", 2, 1, 3),
    ]
    defs = _defines(render_header(records, 5))
    assert defs["TILE_ALIEN_START"] == "0"
    assert defs["TILE_ALIEN_WIDTH"] == "2"
    assert defs["TILE_SHIP_START"] == "2"
    assert defs["TILE_SHIP_HEIGHT"] == "3"
    assert defs["TILE_SHIP_COUNT"] == "3"
    assert defs["TILE_BANK0_COUNT"] == "5"
    assert defs["TILE_BANK0_BYTES"] == "40"


def test_header_colours_and_bank_prefix() -> None:
    rec = ImageTileRecord("HERO", 7, 1, 1, ("BLACK", "WHITE", "RED", "CYAN"))
    text = render_header([rec], 8, bank=2)
    defs = _defines(text)
    assert defs["TILE_B2_HERO_START"] == "7"
    assert defs["TILE_B2_HERO_COLOR0"] == "MR_COLOR_BLACK"
    assert defs["TILE_B2_HERO_COLOR3"] == "MR_COLOR_CYAN"
    assert defs["TILE_BANK2_COUNT"] == "8"
    assert "#ifndef TILE_BANK2_H" in text


def test_write_header(tmp_path) -> None:
    path = write_header(tmp_path / "tiles.h", "#define X 1\n")
    assert path.read_text(encoding="ascii") == "#define X 1\n"


def test_header_rejects_repeated_symbol_names() -> None:
    records = [
        ImageTileRecord("HERO", 0, 1, 1),
        ImageTileRecord("HERO", 1, 1, 1),
    ]
    with pytest.raises(DuplicateSymbolError) as excinfo:
        render_header(records, 2)
    assert excinfo.value.name == "HERO"


def test_check_unique_names_reports_both_sources() -> None:
    pairs = [(symbol_name(p), p) for p in ("a_hero.png", "tiles_ship.png", "b_hero.png")]
    with pytest.raises(DuplicateSymbolError) as excinfo:
        check_unique_names(pairs)
    assert (excinfo.value.first, excinfo.value.second) == ("a_hero.png", "b_hero.png")


def test_check_unique_names_accepts_distinct_names() -> None:
    check_unique_names([("HERO", "a_hero.png"), ("SHIP", "a_ship.png")])
