from __future__ import annotations

import threading
import time

import numpy as np
import pytest
from PIL import Image

import tilemap.convert as convert_mod
from tilemap.config import TileConfig
from tilemap.convert import PreparedImage, convert_files, convert_images, prepare_image
from tilemap.errors import (
    DimensionError,
    DuplicateSymbolError,
    PaletteOverflowError,
    UnknownColourError,
)
from tilemap.tile_sheet import TileSheet


def _batch(rng: np.random.Generator):
    return [
        ("ONE", rng.integers(0, 256, size=(8, 8, 3), dtype=np.uint8)),
        ("TWO", rng.integers(0, 256, size=(8, 16, 3), dtype=np.uint8)),
        ("THREE", rng.integers(0, 256, size=(16, 8, 3), dtype=np.uint8)),
    ]


def test_start_indices_are_cumulative(rng: np.random.Generator) -> None:
    result = convert_images(_batch(rng), TileConfig(threshold=70))
    assert [r.start for r in result.records] == [0, 1, 3]
    assert [r.tiles for r in result.records] == [1, 2, 2]
    assert result.tiles_count == 5
    assert result.sheet.nbytes == 40


def test_parallel_jobs_match_sequential(rng: np.random.Generator) -> None:
    batch = _batch(rng)
    seq = convert_images(batch, TileConfig(threshold=70))
    par = convert_images(batch, TileConfig(threshold=70, jobs=3))
    assert par.records == seq.records
    assert par.sheet.to_bytes() == seq.sheet.to_bytes()


def test_existing_sheet_keeps_growing(make_solid) -> None:
    sheet = TileSheet()
    sheet.append(4)
    result = convert_images([("A", make_solid(8, 8, (255, 255, 255)))], TileConfig(), sheet)
    assert result.records[0].start == 4
    assert sheet.tile(4) == b"\xff" * 8


def test_multicolour_records_resolved_names() -> None:
    img = np.zeros((8, 8, 3), dtype=np.uint8)
    img[:, 0::2] = (255, 255, 255)
    result = convert_images([("CHECK", img)], TileConfig(multicolour=True, background="black"))
    rec = result.records[0]
    assert rec.colour_names == ("BLACK", "WHITE")
    # black pinned to index 0, white is index 1 at even columns
    assert result.sheet.to_bytes() == bytes([0x44] * 16)


def test_unknown_background_fails_before_any_image(make_solid) -> None:
    with pytest.raises(UnknownColourError):
        convert_images([("A", make_solid(8, 8, (0, 0, 0)))], TileConfig(background="nope"))


def test_failure_stops_the_run_after_earlier_images(make_solid) -> None:
    sheet = TileSheet()
    batch = [("OK", make_solid(8, 8, (0, 0, 0))), ("BAD", make_solid(4, 8, (0, 0, 0)))]
    with pytest.raises(DimensionError):
        convert_images(batch, TileConfig(), sheet)
    assert sheet.tiles_count == 1


def test_multicolour_overflow_is_fatal() -> None:
    img = np.zeros((8, 8, 3), dtype=np.uint8)
    for x in range(5):
        img[:, x] = (0, x * 50, 0)
    with pytest.raises(PaletteOverflowError):
        prepare_image(img, "X", TileConfig(multicolour=True).validate())


def test_verbose_mono_prints_preview(make_solid, capsys) -> None:
    convert_images([("A", make_solid(8, 8, (255, 255, 255)))], TileConfig(verbose=True))
    out = capsys.readouterr().out
    assert "A: (8x8, 3 bpp) -> (1x1, 1 bpp)" in out
    assert "[debug] ********" in out


def test_convert_files_names_images_from_paths(tmp_path) -> None:
    arr = np.zeros((8, 16, 3), dtype=np.uint8)
    arr[:, 8:] = 255
    path = tmp_path / "tiles_hero.png"
    Image.fromarray(arr).save(path)

    result = convert_files([path], TileConfig())
    assert result.records[0].name == "HERO"
    assert result.sheet.to_bytes() == bytes(8) + b"\xff" * 8


def test_convert_files_rejects_shared_symbol_before_appending(tmp_path) -> None:
    arr = np.zeros((8, 8, 3), dtype=np.uint8)
    paths = [tmp_path / "a_hero.png", tmp_path / "b_hero.png"]
    for p in paths:
        Image.fromarray(arr).save(p)
    sheet = TileSheet()
    with pytest.raises(DuplicateSymbolError):
        convert_files(paths, TileConfig(), sheet)
    assert sheet.tiles_count == 0


def test_empty_multicolour_image_gives_no_tiles() -> None:
    result = convert_images(
        [("E", np.zeros((0, 4, 3), dtype=np.uint8))], TileConfig(multicolour=True)
    )
    assert result.tiles_count == 0
    rec = result.records[0]
    assert (rec.start, rec.width_tiles, rec.height_tiles) == (0, 1, 0)
    assert rec.colour_names == ()


def test_parallel_failure_cancels_queued_images(monkeypatch, make_solid) -> None:
    slow_started = threading.Event()
    ran = []

    def fake_prepare(image, name, config):
        if name == "FAIL":
            slow_started.wait(5)
            raise DimensionError("width", 4, 8)
        if name == "SLOW":
            slow_started.set()
            time.sleep(0.2)
        else:
            time.sleep(0.05)
            ran.append(name)
        return PreparedImage(name, np.zeros((1, 8), dtype=np.uint8), 1, 1)

    monkeypatch.setattr(convert_mod, "prepare_image", fake_prepare)
    img = make_solid(8, 8, (0, 0, 0))
    sources = [("FAIL", img), ("SLOW", img)] + [(f"T{i}", img) for i in range(20)]
    sheet = TileSheet()
    with pytest.raises(DimensionError):
        convert_images(sources, TileConfig(jobs=2), sheet)
    assert len(ran) < 20
    assert sheet.tiles_count == 0
