"""Pytest configuration to ensure tilemap and img2tile are importable."""
from __future__ import annotations

import sys
from pathlib import Path

import numpy as np
import pytest

_REPO_ROOT = Path(__file__).resolve().parents[1]
_root_str = str(_REPO_ROOT)
if _root_str not in sys.path:
    sys.path.insert(0, _root_str)


def solid(width: int, height: int, rgb, channels: int = 3) -> np.ndarray:
    """uint8 (H,W,C) image filled with one colour."""
    img = np.zeros((height, width, channels), dtype=np.uint8)
    img[..., :3] = rgb
    return img


@pytest.fixture
def make_solid():
    return solid


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)
