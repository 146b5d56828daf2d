# tilemap/errors.py
"""
Fatal conversion errors. Every one aborts the batch run.
"""

from __future__ import annotations


class TileError(ValueError):
    """Base class for conversion failures."""


class DimensionError(TileError):
    """Image width or height is not a multiple of the cell granularity."""

    def __init__(self, axis: str, size: int, granularity: int) -> None:
        self.axis = axis
        self.size = size
        self.granularity = granularity
        super().__init__(
            f"cannot convert images with {axis} not multiple of "
            f"{granularity} pixels (got {size})"
        )


class PaletteOverflowError(TileError):
    """Multicolour source uses more distinct colours than a tile can index."""

    def __init__(self, count: int, limit: int) -> None:
        self.count = count
        self.limit = limit
        super().__init__(
            f"image uses {count} distinct colours, multicolour allows {limit}"
        )


class UnknownColourError(TileError):
    """Background selector does not name any reference palette entry."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unknown colour name: {name!r}")


class DuplicateSymbolError(TileError):
    """Two images would emit the same header symbols."""

    def __init__(self, name: str, first: str, second: str) -> None:
        self.name = name
        self.first = first
        self.second = second
        super().__init__(
            f"{first!r} and {second!r} both map to symbol {name!r}"
        )


__all__ = [
    "TileError",
    "DimensionError",
    "PaletteOverflowError",
    "UnknownColourError",
    "DuplicateSymbolError",
]
