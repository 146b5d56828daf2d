# tilemap/mono.py
from __future__ import annotations

"""
1-bit monochrome encoder.

A pixel is "on" when its luminance reaches the threshold, inverted when
reverse is set. Each 8x8 block becomes 8 row bytes, MSB = leftmost pixel.
Tiles are stored row-major across the image.
"""

from typing import List, Tuple, Union

import numpy as np

from .colour_metric import luminance_map
from .config import MONO_GRANULARITY, ResolvedConfig, TileConfig
from .core_types import (
    TILE_BYTES,
    TILE_ROWS,
    ImageTileRecord,
    U8Image,
    U8Tiles,
    assert_u8_image_rgb,
    image_size,
)
from .errors import DimensionError
from .tile_sheet import TileSheet

Config = Union[TileConfig, ResolvedConfig]


def check_dimensions(image: U8Image, granularity: Tuple[int, int]) -> None:
    """Raise DimensionError unless width and height are cell aligned."""
    width, height = image_size(image)
    gx, gy = granularity
    if width % gx != 0:
        raise DimensionError("width", width, gx)
    if height % gy != 0:
        raise DimensionError("height", height, gy)


def on_mask(image: U8Image, threshold: int, reverse: bool) -> np.ndarray:
    """(H,W) bool: pixel lit after threshold and optional inversion."""
    lit = luminance_map(image) >= int(threshold)
    return np.logical_xor(lit, bool(reverse))


def pack_monochrome(image: U8Image, config: Config) -> U8Tiles:
    """Pack an 8-aligned image into (N,8) tile rows."""
    image = assert_u8_image_rgb(image)
    check_dimensions(image, MONO_GRANULARITY)
    width, height = image_size(image)
    wt, ht = width >> 3, height >> 3
    bits = on_mask(image, config.threshold, config.reverse).astype(np.uint8)
    # (ht,8,wt,8) -> (ht,wt,8 rows,8 cols)
    cells = bits.reshape(ht, TILE_ROWS, wt, 8).transpose(0, 2, 1, 3)
    rows = np.packbits(cells, axis=-1, bitorder="big")
    return rows.reshape(ht * wt, TILE_BYTES)


def encode_monochrome(
    image: U8Image, config: Config, sheet: TileSheet, name: str = ""
) -> ImageTileRecord:
    """Append the image's tiles to `sheet` and return where they went."""
    tiles = pack_monochrome(image, config)
    width, height = image_size(image)
    start = sheet.extend(tiles)
    return ImageTileRecord(
        name=name, start=start, width_tiles=width >> 3, height_tiles=height >> 3
    )


def preview_lines(image: U8Image, config: Config) -> List[str]:
    """ASCII rendering of the thresholded image ('*' on, ' ' off)."""
    mask = on_mask(assert_u8_image_rgb(image), config.threshold, config.reverse)
    return ["".join("*" if v else " " for v in row) for row in mask.tolist()]


__all__ = [
    "check_dimensions",
    "on_mask",
    "pack_monochrome",
    "encode_monochrome",
    "preview_lines",
]
