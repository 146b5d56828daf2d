# tilemap/colour_metric.py
from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from numpy.typing import NDArray

from .core_types import RGBTuple, U8Image, colours_to_array

"""
Integer RGB metrics. Scalar and vectorised forms return identical integers.

Exports:
- luminance(c)               # magnitude of (r/3, g/3, b/3), truncated
- distance(a, b)             # Euclidean RGB distance, truncated
- luminance_map(img)         # (H,W) int32
- distance_map(img, colours) # (H,W,P) int32
"""


def luminance(c: RGBTuple) -> int:
    """Geometric magnitude of the RGB vector, each channel weighted 1/3."""
    red = c[0] / 3
    green = c[1] / 3
    blue = c[2] / 3
    return int(math.sqrt(red * red + green * green + blue * blue))


def distance(a: RGBTuple, b: RGBTuple) -> int:
    """Euclidean distance between two RGB triples, truncated to int."""
    dr = a[0] - b[0]
    dg = a[1] - b[1]
    db = a[2] - b[2]
    return int(math.sqrt(dr * dr + dg * dg + db * db))


def luminance_map(image: U8Image) -> NDArray[np.int32]:
    """Per-pixel luminance of an (H,W,C) buffer; extra channels ignored."""
    px = image[..., :3].astype(np.float64)
    red = px[..., 0] / 3
    green = px[..., 1] / 3
    blue = px[..., 2] / 3
    mag = np.sqrt(red * red + green * green + blue * blue)
    return np.floor(mag).astype(np.int32)


def distance_map(image: U8Image, colours: Sequence[RGBTuple]) -> NDArray[np.int32]:
    """Per-pixel distance to each palette colour. Shape (H,W,P)."""
    pal = colours_to_array(colours).astype(np.int64)
    px = image[..., :3].astype(np.int64)
    diff = px[..., None, :] - pal[None, None, :, :]
    dist2 = np.sum(diff * diff, axis=-1).astype(np.float64)
    return np.floor(np.sqrt(dist2)).astype(np.int32)


__all__ = ["luminance", "distance", "luminance_map", "distance_map"]
