# tilemap/palette_mapper.py
from __future__ import annotations

"""
Match extracted image colours to named reference colours.

Functions:
  nearest_reference(colour, reference, exclude) -> index
  pin_background(colours, background) -> list of colours, background-nearest at 0
  map_to_reference(colours, reference) -> list of reference indices, one per slot
  resolve_palette(colours, reference, background) -> MappedPalette

Assignment is greedy in slot order: each slot takes the nearest reference
entry not already taken by an earlier slot. This is not globally optimal
when two image colours sit near the same reference entry; that ordering is
kept so symbol names stay stable between runs.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from .colour_metric import distance
from .core_types import NamedColour, RGBTuple


@dataclass(frozen=True)
class MappedPalette:
    """Final slot order plus the reference entry chosen for each slot."""

    colours: Tuple[RGBTuple, ...]
    references: Tuple[NamedColour, ...]

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(ref.name for ref in self.references)


def nearest_reference(
    colour: RGBTuple,
    reference: Sequence[NamedColour],
    exclude: Iterable[int] = (),
) -> Optional[int]:
    """Index of the nearest reference entry; first minimum wins."""
    skip: Set[int] = set(exclude)
    best_idx: Optional[int] = None
    best_dist = 0
    for j, item in enumerate(reference):
        if j in skip:
            continue
        d = distance(colour, item.rgb)
        if best_idx is None or d < best_dist:
            best_idx, best_dist = j, d
    return best_idx


def nearest_colour_index(target: RGBTuple, colours: Sequence[RGBTuple]) -> int:
    """Index in `colours` nearest to `target`; lowest index wins ties."""
    if not colours:
        raise ValueError("empty colour list")
    best_idx = 0
    best_dist = distance(target, colours[0])
    for i in range(1, len(colours)):
        d = distance(target, colours[i])
        if d < best_dist:
            best_idx, best_dist = i, d
    return best_idx


def pin_background(
    colours: Sequence[RGBTuple], background: Optional[NamedColour]
) -> List[RGBTuple]:
    """Swap the colour nearest `background` into slot 0."""
    out = list(colours)
    if background is None or not out:
        return out
    i = nearest_colour_index(background.rgb, out)
    if i != 0:
        out[0], out[i] = out[i], out[0]
    return out


def map_to_reference(
    colours: Sequence[RGBTuple], reference: Sequence[NamedColour]
) -> List[int]:
    """Greedy per-slot assignment with exclusion of already chosen entries."""
    if not reference:
        raise ValueError("reference palette is empty")
    chosen: List[int] = []
    for colour in colours:
        j = nearest_reference(colour, reference, exclude=chosen)
        if j is None:
            # every entry already taken: reuse the plain nearest
            j = nearest_reference(colour, reference)
        chosen.append(int(j))  # type: ignore[arg-type]
    return chosen


def resolve_palette(
    colours: Sequence[RGBTuple],
    reference: Sequence[NamedColour],
    background: Optional[NamedColour] = None,
) -> MappedPalette:
    """Pin the background slot, then label every slot."""
    ordered = pin_background(colours, background)
    idx = map_to_reference(ordered, reference)
    return MappedPalette(
        colours=tuple(ordered), references=tuple(reference[j] for j in idx)
    )


__all__ = [
    "MappedPalette",
    "nearest_reference",
    "nearest_colour_index",
    "pin_background",
    "map_to_reference",
    "resolve_palette",
]
