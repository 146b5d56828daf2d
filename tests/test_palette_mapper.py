from __future__ import annotations

import pytest

from tilemap.core_types import NamedColour
from tilemap.palette_data import REFERENCE_PALETTE, find_colour
from tilemap.palette_mapper import (
    map_to_reference,
    nearest_reference,
    pin_background,
    resolve_palette,
)

SMALL = [
    NamedColour("BLACK", (0, 0, 0)),
    NamedColour("GREY", (128, 128, 128)),
    NamedColour("WHITE", (255, 255, 255)),
    NamedColour("RED", (255, 0, 0)),
]


def test_reference_palette_has_28_named_entries() -> None:
    assert len(REFERENCE_PALETTE) == 28
    assert len({c.name for c in REFERENCE_PALETTE}) == 28


def test_nearest_reference_first_minimum_wins() -> None:
    ref = [NamedColour("A", (0, 0, 0)), NamedColour("B", (2, 0, 0))]
    assert nearest_reference((1, 0, 0), ref) == 0


def test_near_black_colours_get_distinct_names() -> None:
    colours = [(0, 0, 0), (1, 1, 1), (2, 2, 2), (3, 3, 3)]
    idx = map_to_reference(colours, REFERENCE_PALETTE)
    assert len(set(idx)) == 4
    assert REFERENCE_PALETTE[idx[0]].name == "BLACK"


def test_assignment_is_greedy_in_slot_order() -> None:
    idx = map_to_reference([(250, 250, 250), (255, 255, 255)], SMALL)
    # first slot takes WHITE even though the second is an exact match
    assert [SMALL[j].name for j in idx] == ["WHITE", "GREY"]


def test_exhausted_reference_falls_back_to_plain_nearest() -> None:
    ref = [NamedColour("BLACK", (0, 0, 0)), NamedColour("WHITE", (255, 255, 255))]
    idx = map_to_reference([(0, 0, 0), (255, 255, 255), (10, 10, 10)], ref)
    assert idx == [0, 1, 0]


def test_pin_background_moves_nearest_to_slot_zero() -> None:
    colours = [(250, 250, 250), (5, 0, 0), (0, 0, 200)]
    pinned = pin_background(colours, find_colour("black"))
    assert pinned == [(5, 0, 0), (250, 250, 250), (0, 0, 200)]


def test_pin_background_without_background_keeps_order() -> None:
    colours = [(1, 2, 3), (4, 5, 6)]
    assert pin_background(colours, None) == colours


def test_resolve_palette_labels_pinned_order() -> None:
    mapped = resolve_palette([(255, 255, 255), (0, 0, 0)], SMALL, SMALL[0])
    assert mapped.colours == ((0, 0, 0), (255, 255, 255))
    assert mapped.names == ("BLACK", "WHITE")


def test_find_colour_is_case_insensitive() -> None:
    assert find_colour("Light_Blue").name == "LIGHT_BLUE"


def test_find_colour_unknown_name() -> None:
    from tilemap.errors import UnknownColourError

    with pytest.raises(UnknownColourError):
        find_colour("chartreuse")
