# tilemap/config.py
from __future__ import annotations

"""
Immutable run configuration.

TileConfig is what the CLI (or a caller) builds; validate() checks it once
before any image is touched and returns a ResolvedConfig with the background
name turned into a reference palette entry.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from .core_types import NamedColour
from .palette_data import REFERENCE_PALETTE, find_colour

MONO_GRANULARITY: Tuple[int, int] = (8, 8)
MULTICOLOUR_GRANULARITY: Tuple[int, int] = (4, 8)
MULTICOLOUR_MAX_COLOURS = 4


@dataclass(frozen=True)
class TileConfig:
    """User-facing options. Defaults match the command line defaults."""

    threshold: int = 1
    reverse: bool = False
    multicolour: bool = False
    bank: int = 0
    background: Optional[str] = None
    verbose: bool = False
    jobs: int = 1

    @property
    def granularity(self) -> Tuple[int, int]:
        """(x, y) pixel alignment required by the active encoder."""
        return MULTICOLOUR_GRANULARITY if self.multicolour else MONO_GRANULARITY

    def validate(
        self, reference: List[NamedColour] = REFERENCE_PALETTE
    ) -> "ResolvedConfig":
        if self.threshold < 0:
            raise ValueError(f"threshold must be >= 0 (got {self.threshold})")
        if self.bank < 0:
            raise ValueError(f"bank must be >= 0 (got {self.bank})")
        if self.jobs < 1:
            raise ValueError(f"jobs must be >= 1 (got {self.jobs})")
        background = None
        if self.background is not None:
            background = find_colour(self.background, reference)
        return ResolvedConfig(options=self, background=background, reference=tuple(reference))


@dataclass(frozen=True)
class ResolvedConfig:
    """Validated configuration handed to the encoders."""

    options: TileConfig
    background: Optional[NamedColour]
    reference: Tuple[NamedColour, ...]

    @property
    def threshold(self) -> int:
        return self.options.threshold

    @property
    def reverse(self) -> bool:
        return self.options.reverse

    @property
    def multicolour(self) -> bool:
        return self.options.multicolour

    @property
    def verbose(self) -> bool:
        return self.options.verbose

    @property
    def granularity(self) -> Tuple[int, int]:
        return self.options.granularity


__all__ = [
    "MONO_GRANULARITY",
    "MULTICOLOUR_GRANULARITY",
    "MULTICOLOUR_MAX_COLOURS",
    "TileConfig",
    "ResolvedConfig",
]
