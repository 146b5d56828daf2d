# tilemap/palette_data.py
from __future__ import annotations

"""
Reference palette definitions and lookups.

Exports:
  PALETTE: list[tuple[str, str]]  # [(hex, name), ...]
  build_palette(hex_name_pairs=PALETTE) -> list[NamedColour]
  REFERENCE_PALETTE: list[NamedColour]
  find_colour(name, palette=REFERENCE_PALETTE) -> NamedColour
"""

from typing import List, Optional, Tuple

from .core_types import NamedColour, hex_to_rgb
from .errors import UnknownColourError


# Order matters: the first entry at minimal distance wins a nearest search.
PALETTE: List[Tuple[str, str]] = [
    ("#000000", "BLACK"),
    ("#ffffff", "WHITE"),
    ("#880000", "RED"),
    ("#aaffee", "CYAN"),
    ("#cc44cc", "VIOLET"),
    ("#00cc55", "GREEN"),
    ("#0000aa", "BLUE"),
    ("#eeee77", "YELLOW"),
    ("#dd8855", "ORANGE"),
    ("#664400", "BROWN"),
    ("#ff7777", "LIGHT_RED"),
    ("#333333", "DARK_GREY"),
    ("#777777", "GREY"),
    ("#aaff66", "LIGHT_GREEN"),
    ("#0088ff", "LIGHT_BLUE"),
    ("#bbbbbb", "LIGHT_GREY"),
    ("#ff00ff", "MAGENTA"),
    ("#000066", "DARK_BLUE"),
    ("#b4a0f0", "LAVENDER"),
    ("#c8a000", "GOLD"),
    ("#40e0d0", "TURQUOISE"),
    ("#d2b48c", "TAN"),
    ("#9acd32", "YELLOW_GREEN"),
    ("#556b2f", "OLIVE_GREEN"),
    ("#ffc0cb", "PINK"),
    ("#ffdab9", "PEACH"),
    ("#550000", "DARK_RED"),
    ("#005522", "DARK_GREEN"),
]


def build_palette(
    hex_name_pairs: List[Tuple[str, str]] = PALETTE,
) -> List[NamedColour]:
    """Convert a list of (hex, name) into NamedColour entries, order kept."""
    return [NamedColour(name=name, rgb=hex_to_rgb(hx)) for hx, name in hex_name_pairs]


REFERENCE_PALETTE: List[NamedColour] = build_palette()


def find_colour(
    name: Optional[str], palette: List[NamedColour] = REFERENCE_PALETTE
) -> NamedColour:
    """Case-insensitive lookup by symbolic name."""
    key = (name or "").strip().upper()
    for item in palette:
        if item.name.upper() == key:
            return item
    raise UnknownColourError(name or "")


__all__ = ["PALETTE", "REFERENCE_PALETTE", "build_palette", "find_colour"]
