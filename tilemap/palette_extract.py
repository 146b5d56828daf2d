# tilemap/palette_extract.py
from __future__ import annotations

"""
Distinct-colour discovery for one image.

Colours are compared by exact equality and kept in first-seen row-major
order. At most `capacity` colours are recorded, but `count` always reports
how many distinct colours the image really uses so callers can tell
"too many for multicolour" apart from "buffer full".
"""

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .core_types import RGBTuple, U8Image, assert_u8_image_rgb

DEFAULT_CAPACITY = 256


@dataclass(frozen=True)
class ExtractedPalette:
    colours: Tuple[RGBTuple, ...]
    count: int
    capacity: int

    @property
    def overflowed(self) -> bool:
        """True when more colours exist than were recorded."""
        return self.count > self.capacity

    def exceeds(self, limit: int) -> bool:
        return self.count > limit


def unique_colours_in_order(image: U8Image) -> np.ndarray:
    """Return unique RGB rows in first-seen order."""
    flat = image[..., :3].reshape(-1, 3)
    if flat.shape[0] == 0:
        return np.zeros((0, 3), dtype=np.uint8)
    uniques, first_idx = np.unique(flat, axis=0, return_index=True)
    order = np.argsort(first_idx, kind="stable")
    return uniques[order].astype(np.uint8, copy=False)


def extract_palette(image: U8Image, capacity: int = DEFAULT_CAPACITY) -> ExtractedPalette:
    """Scan pixels in row-major order and collect distinct colours."""
    if capacity < 0:
        raise ValueError("capacity must be >= 0")
    image = assert_u8_image_rgb(image)
    uniques = unique_colours_in_order(image)
    kept: List[RGBTuple] = [
        (int(r), int(g), int(b)) for r, g, b in uniques[:capacity].tolist()
    ]
    return ExtractedPalette(
        colours=tuple(kept), count=int(uniques.shape[0]), capacity=capacity
    )


__all__ = [
    "DEFAULT_CAPACITY",
    "ExtractedPalette",
    "unique_colours_in_order",
    "extract_palette",
]
