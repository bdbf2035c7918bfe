"""Programmatic leaf image fixtures."""

from __future__ import annotations

import io
from collections.abc import Callable
from pathlib import Path

import numpy as np
import pytest
from PIL import Image


def encode_array(arr: np.ndarray, fmt: str = "PNG") -> bytes:
    buf = io.BytesIO()
    Image.fromarray(arr).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture
def make_png() -> Callable[[np.ndarray], bytes]:
    """Encode an (H, W, 3|4) uint8 array as PNG bytes."""
    return encode_array


@pytest.fixture
def gray_png() -> bytes:
    """4x4 uniform mid-gray image."""
    return encode_array(np.full((4, 4, 3), 128, dtype=np.uint8))


@pytest.fixture
def mpo_jpeg() -> bytes:
    """Two-frame Multi-Picture JPEG, the layout many phone cameras write."""
    first = Image.fromarray(np.full((12, 16, 3), (70, 150, 60), dtype=np.uint8))
    second = Image.fromarray(np.full((6, 8, 3), 200, dtype=np.uint8))
    buf = io.BytesIO()
    first.save(buf, format="MPO", save_all=True, append_images=[second])
    return buf.getvalue()


@pytest.fixture
def leaf_png() -> bytes:
    """Synthetic 64x48 leaf: a green ellipse with a dark vein on a pale background."""
    h, w = 48, 64
    yy, xx = np.mgrid[0:h, 0:w]
    arr = np.full((h, w, 3), 230, dtype=np.uint8)
    inside = ((xx - w / 2) / 26) ** 2 + ((yy - h / 2) / 18) ** 2 <= 1.0
    arr[inside] = (60, 140, 50)
    arr[inside & (np.abs(yy - h / 2) < 1.5)] = (30, 70, 25)
    return encode_array(arr)


@pytest.fixture
def tmp_leaf_dir(tmp_path: Path, leaf_png: bytes) -> Path:
    """Directory of valid leaf photos, one nested, plus one corrupt file."""
    img_dir = tmp_path / "leaves"
    (img_dir / "plot_b").mkdir(parents=True)

    rng = np.random.default_rng(7)
    for i in range(5):
        arr = rng.integers(40, 220, (30 + i * 5, 40 + i * 5, 3), dtype=np.uint8)
        Image.fromarray(arr).save(img_dir / f"leaf_{i:03d}.jpg")

    (img_dir / "plot_b" / "leaf_big.png").write_bytes(leaf_png)
    (img_dir / "dark.png").write_bytes(encode_array(np.zeros((20, 20, 3), dtype=np.uint8)))
    (img_dir / "corrupt.jpg").write_bytes(b"not a real image file content")
    return img_dir
