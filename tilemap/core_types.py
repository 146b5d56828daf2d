# tilemap/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, and lightweight helpers.
"""

from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]
HexStr = str

U8Image = NDArray[np.uint8]  # (H, W, C>=3)
U8Tiles = NDArray[np.uint8]  # (N, 8)
IndexMap = NDArray[np.uint8]  # (H, W) palette indices

TILE_BYTES = 8
TILE_ROWS = 8

# Value objects


@dataclass(frozen=True)
class NamedColour:
    """Reference palette entry: symbolic name plus 8-bit RGB."""

    name: str
    rgb: RGBTuple


@dataclass(frozen=True)
class ImageTileRecord:
    """Where one image landed in the tile sheet."""

    name: str
    start: int
    width_tiles: int
    height_tiles: int
    colour_names: Tuple[str, ...] = ()

    @property
    def tiles(self) -> int:
        return self.width_tiles * self.height_tiles


# Small helpers


def rgb_to_hex(rgb: RGBTuple) -> HexStr:
    """RGB tuple to lowercase hex string '#rrggbb'."""
    return f"#{rgb[0]:02x}{rgb[1]:02x}{rgb[2]:02x}"


def hex_to_rgb(hex_str: str) -> RGBTuple:
    """Parse '#rgb' or '#rrggbb' (case-insensitive) into an RGB tuple."""
    s = hex_str.strip().lower()
    if not s.startswith("#"):
        raise ValueError("hex must start with '#'")
    if len(s) == 4:
        r, g, b = s[1], s[2], s[3]
        s = f"#{r}{r}{g}{g}{b}{b}"
    if len(s) != 7:
        raise ValueError("hex must be '#rrggbb' or '#rgb'")
    return (int(s[1:3], 16), int(s[3:5], 16), int(s[5:7], 16))


def colours_to_array(colours: Sequence[RGBTuple]) -> NDArray[np.int32]:
    """(P,3) int32 array from a list of RGB tuples; empty input gives (0,3)."""
    if not colours:
        return np.zeros((0, 3), dtype=np.int32)
    return np.array([list(c) for c in colours], dtype=np.int32)


def assert_u8_image_rgb(image: np.ndarray) -> U8Image:
    """Validate a uint8 (H,W,C>=3) image and return it typed as U8Image."""
    if (
        not isinstance(image, np.ndarray)
        or image.dtype != np.uint8
        or image.ndim != 3
        or image.shape[-1] < 3
    ):
        raise TypeError("expected uint8 (H,W,3+) image")
    return image  # type: ignore[return-value]


def image_size(image: U8Image) -> Tuple[int, int]:
    """(width, height) of an (H,W,C) buffer."""
    return int(image.shape[1]), int(image.shape[0])


__all__ = [
    # aliases / constants
    "RGBTuple",
    "HexStr",
    "U8Image",
    "U8Tiles",
    "IndexMap",
    "TILE_BYTES",
    "TILE_ROWS",
    # value objects
    "NamedColour",
    "ImageTileRecord",
    # helpers
    "rgb_to_hex",
    "hex_to_rgb",
    "colours_to_array",
    "assert_u8_image_rgb",
    "image_size",
]
