# tilemap/convert.py
from __future__ import annotations

"""
Batch conversion: images in, one tile sheet plus per-image records out.

Per-image work (decode, checks, palette, packing) is independent and may run
on a thread pool. Sheet appends always happen afterwards in input order, so
start indices do not depend on the worker count.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union

from .config import MULTICOLOUR_GRANULARITY, ResolvedConfig, TileConfig
from .core_types import ImageTileRecord, U8Image, U8Tiles, assert_u8_image_rgb, rgb_to_hex
from .image_io import load_image_rgb
from .mono import check_dimensions, pack_monochrome, preview_lines
from .multicolour import pack_multicolour, palette_for
from .palette_mapper import resolve_palette
from .symbols import check_unique_names, symbol_name
from .tile_sheet import TileSheet
from .utils import debug_log, format_seconds_compact, key_value_pairs_to_string, log

Source = Tuple[str, U8Image]


@dataclass(frozen=True)
class PreparedImage:
    """Packed tiles for one image, not yet placed in a sheet."""

    name: str
    tiles: U8Tiles
    width_tiles: int
    height_tiles: int
    colour_names: Tuple[str, ...] = ()
    notes: Tuple[str, ...] = ()


@dataclass
class ConversionResult:
    sheet: TileSheet
    records: List[ImageTileRecord] = field(default_factory=list)

    @property
    def tiles_count(self) -> int:
        return self.sheet.tiles_count


def _resolve(config: Union[TileConfig, ResolvedConfig]) -> ResolvedConfig:
    return config.validate() if isinstance(config, TileConfig) else config


def prepare_image(image: U8Image, name: str, config: ResolvedConfig) -> PreparedImage:
    """Validate and pack one image without touching any sheet."""
    image = assert_u8_image_rgb(image)
    height, width, depth = image.shape
    notes: List[str] = []

    if not config.multicolour:
        tiles = pack_monochrome(image, config)
        wt, ht = width >> 3, height >> 3
        if config.verbose:
            notes.append(f"{name}: ({width}x{height}, {depth} bpp) -> ({wt}x{ht}, 1 bpp)")
            notes.extend(preview_lines(image, config))
        return PreparedImage(name, tiles, wt, ht, notes=tuple(notes))

    check_dimensions(image, MULTICOLOUR_GRANULARITY)
    mapped = resolve_palette(palette_for(image), config.reference, config.background)
    tiles = pack_multicolour(image, mapped.colours)
    wt, ht = width >> 2, height >> 3
    if config.verbose:
        notes.append(f"{name}: ({width}x{height}, {depth} bpp) -> ({wt}x{ht}, 2 bpp)")
        for i, (rgb, ref) in enumerate(zip(mapped.colours, mapped.references)):
            notes.append(f"  colour {i}: {rgb_to_hex(rgb)} -> {ref.name}")
    return PreparedImage(name, tiles, wt, ht, mapped.names, tuple(notes))


def place(sheet: TileSheet, prepared: PreparedImage) -> ImageTileRecord:
    """Append prepared tiles to the sheet; the only mutation point."""
    start = sheet.extend(prepared.tiles)
    return ImageTileRecord(
        name=prepared.name,
        start=start,
        width_tiles=prepared.width_tiles,
        height_tiles=prepared.height_tiles,
        colour_names=prepared.colour_names,
    )


def _run(
    jobs: Sequence[Callable[[], PreparedImage]],
    config: ResolvedConfig,
    sheet: Optional[TileSheet],
) -> ConversionResult:
    result = ConversionResult(sheet=sheet if sheet is not None else TileSheet())
    t_start = time.perf_counter()
    workers = min(config.options.jobs, len(jobs))

    def _commit(prepared: PreparedImage) -> None:
        for line in prepared.notes:
            debug_log(line)
        rec = place(result.sheet, prepared)
        result.records.append(rec)
        if config.verbose:
            debug_log(
                key_value_pairs_to_string(
                    [("Image", rec.name), ("Start", rec.start), ("Tiles", rec.tiles)]
                )
            )

    if workers <= 1:
        for job in jobs:
            _commit(job())
    else:
        with ThreadPoolExecutor(max_workers=workers) as ex:
            futures = [ex.submit(job) for job in jobs]
            # in submission order; the first failure stops the run
            try:
                for fu in futures:
                    _commit(fu.result())
            except BaseException:
                ex.shutdown(wait=False, cancel_futures=True)
                raise

    if config.verbose:
        debug_log(
            f"converted {len(result.records)} image(s) into {result.tiles_count} tile(s) "
            f"in {format_seconds_compact(time.perf_counter() - t_start)}"
        )
    return result


def convert_images(
    sources: Sequence[Source],
    config: Union[TileConfig, ResolvedConfig],
    sheet: Optional[TileSheet] = None,
) -> ConversionResult:
    """Convert already-decoded (name, image) pairs in order."""
    resolved = _resolve(config)
    jobs = [
        (lambda img=img, nm=nm: prepare_image(img, nm, resolved)) for nm, img in sources
    ]
    return _run(jobs, resolved, sheet)


def convert_files(
    paths: Sequence[Path],
    config: Union[TileConfig, ResolvedConfig],
    sheet: Optional[TileSheet] = None,
) -> ConversionResult:
    """Decode and convert image files in order; names come from file names."""
    resolved = _resolve(config)
    paths = [Path(p) for p in paths]
    check_unique_names((symbol_name(p), str(p)) for p in paths)
    if resolved.verbose:
        for p in paths:
            log(f"Input image ................. {p}")

    def _job(path: Path) -> Callable[[], PreparedImage]:
        return lambda: prepare_image(load_image_rgb(path), symbol_name(path), resolved)

    return _run([_job(p) for p in paths], resolved, sheet)


__all__ = [
    "PreparedImage",
    "ConversionResult",
    "prepare_image",
    "place",
    "convert_images",
    "convert_files",
]
