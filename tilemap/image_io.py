# tilemap/image_io.py
from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .core_types import U8Image

"""
Image decoding helpers: any Pillow-readable file -> (H,W,3) uint8 RGB.
"""


def load_image_rgb(path: Path) -> U8Image:
    with Image.open(path) as im0:
        im = ImageOps.exif_transpose(im0)
        arr = np.array(im.convert("RGB"), dtype=np.uint8)
    return arr


def is_image_file(path: Path) -> bool:
    try:
        with Image.open(path) as im:
            im.seek(0)
            im.load()
        return True
    except (UnidentifiedImageError, OSError):
        return False


__all__ = ["load_image_rgb", "is_image_file"]
