"""Sobel gradient magnitude and edge-map rendering."""

from __future__ import annotations

import numpy as np

from leaflens.models.grids import GradientGrid, LumaGrid, PixelGrid

SOBEL_X = np.array(
    [
        [-1, 0, 1],
        [-2, 0, 2],
        [-1, 0, 1],
    ],
    dtype=np.float64,
)
SOBEL_Y = np.array(
    [
        [-1, -2, -1],
        [0, 0, 0],
        [1, 2, 1],
    ],
    dtype=np.float64,
)


def _correlate3x3(values: np.ndarray, kernel: np.ndarray) -> np.ndarray:
    """Apply a 3x3 kernel to every interior pixel, returning shape (H-2, W-2).

    Sums shifted slices instead of np.roll so the kernel never reads across
    the image border.
    """
    h, w = values.shape
    out = np.zeros((h - 2, w - 2), dtype=np.float64)
    for ky in range(3):
        for kx in range(3):
            weight = kernel[ky, kx]
            if weight:
                out += weight * values[ky : ky + h - 2, kx : kx + w - 2]
    return out


def gradient(luma: LumaGrid) -> GradientGrid:
    """Sobel gradient magnitude. The outermost 1-pixel ring is always 0."""
    values = luma.values
    h, w = values.shape
    magnitude = np.zeros((h, w), dtype=np.float64)
    if h < 3 or w < 3:
        return GradientGrid(magnitude)

    gx = _correlate3x3(values, SOBEL_X)
    gy = _correlate3x3(values, SOBEL_Y)
    magnitude[1:-1, 1:-1] = np.hypot(gx, gy)
    return GradientGrid(magnitude)


def to_image(grad: GradientGrid, invert: bool = False) -> PixelGrid:
    """Render magnitude as a grayscale edge map.

    Default is bright edges on black; ``invert`` gives dark edges on white.
    """
    level = np.rint(np.clip(grad.magnitude, 0.0, 255.0)).astype(np.uint8)
    if invert:
        level = 255 - level
    h, w = level.shape
    pixels = np.empty((h, w, 4), dtype=np.uint8)
    pixels[:, :, 0] = level
    pixels[:, :, 1] = level
    pixels[:, :, 2] = level
    pixels[:, :, 3] = 255
    return PixelGrid(pixels)
