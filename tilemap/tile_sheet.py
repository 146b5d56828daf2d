# tilemap/tile_sheet.py
from __future__ import annotations

"""
Append-only tile sheet shared by every image of one run.

The sheet owns a single bytearray of `tiles_count * 8` bytes. append()
grants a zero-filled region and returns its starting tile index; writes are
bounds-checked against the sheet size.
"""

from pathlib import Path
from typing import Union

import numpy as np

from .core_types import TILE_BYTES, U8Tiles


class TileSheet:
    """Growable sequence of 8-byte tiles."""

    def __init__(self) -> None:
        self._data = bytearray()

    def __len__(self) -> int:
        return self.tiles_count

    @property
    def tiles_count(self) -> int:
        return len(self._data) // TILE_BYTES

    @property
    def nbytes(self) -> int:
        return len(self._data)

    def append(self, new_tiles: int) -> int:
        """Grow by `new_tiles` zeroed tiles; return the first new index."""
        if new_tiles < 0:
            raise ValueError(f"cannot append {new_tiles} tiles")
        start = self.tiles_count
        self._data.extend(bytes(new_tiles * TILE_BYTES))
        return start

    def write_tiles(self, start: int, tiles: Union[U8Tiles, bytes]) -> None:
        """Copy whole tiles into the sheet starting at tile index `start`."""
        payload = (
            np.ascontiguousarray(tiles, dtype=np.uint8).tobytes()
            if isinstance(tiles, np.ndarray)
            else bytes(tiles)
        )
        if len(payload) % TILE_BYTES:
            raise ValueError(f"tile payload of {len(payload)} bytes is not tile aligned")
        lo = start * TILE_BYTES
        hi = lo + len(payload)
        if start < 0 or hi > len(self._data):
            raise IndexError(
                f"tiles {start}..{hi // TILE_BYTES} outside sheet of {self.tiles_count}"
            )
        self._data[lo:hi] = payload

    def extend(self, tiles: Union[U8Tiles, bytes]) -> int:
        """append() plus write_tiles() in one step; returns the start index."""
        size = tiles.size if isinstance(tiles, np.ndarray) else len(tiles)
        start = self.append(size // TILE_BYTES)
        self.write_tiles(start, tiles)
        return start

    def tile(self, index: int) -> bytes:
        if not 0 <= index < self.tiles_count:
            raise IndexError(f"tile {index} outside sheet of {self.tiles_count}")
        lo = index * TILE_BYTES
        return bytes(self._data[lo : lo + TILE_BYTES])

    def to_bytes(self) -> bytes:
        return bytes(self._data)

    def save(self, path: Path) -> Path:
        path.write_bytes(self.to_bytes())
        return path


__all__ = ["TileSheet"]
