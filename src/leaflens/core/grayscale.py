"""RGBA -> luma reduction."""

from __future__ import annotations

import numpy as np

from leaflens.models.grids import LumaGrid, PixelGrid

# ITU-R BT.601 perceptual weights
LUMA_WEIGHTS = (0.299, 0.587, 0.114)


def to_luma(grid: PixelGrid) -> LumaGrid:
    """Weighted sum of R, G, B per pixel. Alpha is ignored."""
    rgb = grid.rgb.astype(np.float64)
    wr, wg, wb = LUMA_WEIGHTS
    luma = wr * rgb[:, :, 0] + wg * rgb[:, :, 1] + wb * rgb[:, :, 2]
    # Weights sum to 1, but float rounding can land a hair above 255 for white
    np.clip(luma, 0.0, 255.0, out=luma)
    return LumaGrid(luma)
