# tilemap/multicolour.py
from __future__ import annotations

"""
2-bit multicolour encoder.

Every pixel is quantised to the nearest of at most four palette colours
(integer RGB distance, lowest index wins ties). A row byte carries four
2-bit indices, leftmost pixel in bits 7-6, so a tile covers 4x8 source
pixels and still serialises to 8 bytes.
"""

from typing import Optional, Sequence

import numpy as np

from .colour_metric import distance_map
from .config import MULTICOLOUR_GRANULARITY, MULTICOLOUR_MAX_COLOURS
from .core_types import (
    TILE_BYTES,
    TILE_ROWS,
    ImageTileRecord,
    IndexMap,
    RGBTuple,
    U8Image,
    U8Tiles,
    assert_u8_image_rgb,
    image_size,
)
from .errors import PaletteOverflowError
from .mono import check_dimensions
from .palette_extract import extract_palette
from .tile_sheet import TileSheet

PIXELS_PER_BYTE = 4


def quantise_indices(image: U8Image, colours: Sequence[RGBTuple]) -> IndexMap:
    """(H,W) palette index of the nearest colour for every pixel."""
    if not colours:
        raise ValueError("multicolour palette is empty")
    if len(colours) > MULTICOLOUR_MAX_COLOURS:
        raise PaletteOverflowError(len(colours), MULTICOLOUR_MAX_COLOURS)
    # argmin returns the first minimum
    return np.argmin(distance_map(image, colours), axis=-1).astype(np.uint8)


def pack_indices(indices: IndexMap) -> U8Tiles:
    """Pack a (H,W) 2-bit index map into (N,8) tile rows."""
    height, width = indices.shape
    wt, ht = width >> 2, height >> 3
    cells = indices.reshape(ht, TILE_ROWS, wt, PIXELS_PER_BYTE).transpose(0, 2, 1, 3)
    shifts = np.array([6, 4, 2, 0], dtype=np.uint8)
    rows = np.bitwise_or.reduce((cells & 0x03) << shifts, axis=-1).astype(np.uint8)
    return rows.reshape(ht * wt, TILE_BYTES)


def palette_for(image: U8Image) -> Sequence[RGBTuple]:
    """Extracted colours of `image`, refusing more than four."""
    extracted = extract_palette(image)
    if extracted.exceeds(MULTICOLOUR_MAX_COLOURS):
        raise PaletteOverflowError(extracted.count, MULTICOLOUR_MAX_COLOURS)
    return extracted.colours


def pack_multicolour(
    image: U8Image, colours: Optional[Sequence[RGBTuple]] = None
) -> U8Tiles:
    """Validate, quantise and pack; colours default to the image's own."""
    image = assert_u8_image_rgb(image)
    check_dimensions(image, MULTICOLOUR_GRANULARITY)
    if image.shape[0] == 0 or image.shape[1] == 0:
        return np.zeros((0, TILE_BYTES), dtype=np.uint8)
    if colours is None:
        colours = palette_for(image)
    return pack_indices(quantise_indices(image, colours))


def encode_multicolour(
    image: U8Image,
    colours: Optional[Sequence[RGBTuple]],
    sheet: TileSheet,
    name: str = "",
    colour_names: Sequence[str] = (),
) -> ImageTileRecord:
    """Append the image's tiles to `sheet` and return where they went."""
    tiles = pack_multicolour(image, colours)
    width, height = image_size(image)
    start = sheet.extend(tiles)
    return ImageTileRecord(
        name=name,
        start=start,
        width_tiles=width >> 2,
        height_tiles=height >> 3,
        colour_names=tuple(colour_names),
    )


__all__ = [
    "PIXELS_PER_BYTE",
    "quantise_indices",
    "pack_indices",
    "palette_for",
    "pack_multicolour",
    "encode_multicolour",
]
