"""
tilemap package.

Purpose:
  Convert decoded images into packed 8x8 tiles for 8-bit targets and merge
  them into one tile sheet. See img2tile.py for the CLI.

Public API:
  convert_images : (name, image) pairs -> ConversionResult (sheet + records)
  convert_files  : image paths -> ConversionResult
  TileConfig     : immutable run options
  TileSheet      : append-only tile buffer
  colour_metric  : luminance / distance
  palette_data   : reference palette and name lookup
  palette_mapper : background pinning and reference labelling
  symbols        : C header emission

Quick start:
  from tilemap import TileConfig, convert_images
  result = convert_images([("ALIEN", rgb)], TileConfig(threshold=64))
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import colour_metric
from . import core_types
from . import errors
from . import palette_data
from . import palette_extract
from . import palette_mapper
from . import symbols
from . import utils

from .config import TileConfig, ResolvedConfig  # noqa: E402
from .convert import ConversionResult, convert_files, convert_images  # noqa: E402
from .core_types import ImageTileRecord, NamedColour  # noqa: E402
from .errors import (  # noqa: E402
    DimensionError,
    PaletteOverflowError,
    TileError,
    UnknownColourError,
)
from .mono import encode_monochrome  # noqa: E402
from .multicolour import encode_multicolour  # noqa: E402
from .tile_sheet import TileSheet  # noqa: E402

__all__ = [
    "__version__",
    "colour_metric",
    "core_types",
    "errors",
    "palette_data",
    "palette_extract",
    "palette_mapper",
    "symbols",
    "utils",
    "TileConfig",
    "ResolvedConfig",
    "ConversionResult",
    "convert_files",
    "convert_images",
    "ImageTileRecord",
    "NamedColour",
    "TileError",
    "DimensionError",
    "PaletteOverflowError",
    "UnknownColourError",
    "encode_monochrome",
    "encode_multicolour",
    "TileSheet",
]
