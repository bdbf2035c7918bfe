"""False-color "thermogram" remap of luma through a fixed 5-stop gradient."""

from __future__ import annotations

import numpy as np

from leaflens.models.grids import LumaGrid, PixelGrid

# Blue -> cyan -> green -> yellow -> red. Changing these changes every
# thermogram users have already seen, so they are fixed rather than derived.
COLOR_STOPS: tuple[tuple[int, int, int], ...] = (
    (0, 0, 255),
    (0, 255, 255),
    (0, 255, 0),
    (255, 255, 0),
    (255, 0, 0),
)

_STOPS = np.array(COLOR_STOPS, dtype=np.float64)


def colorize(luma: LumaGrid) -> PixelGrid:
    """Piecewise-linear interpolation between the two stops bracketing each pixel."""
    t = luma.values / 255.0 * (len(COLOR_STOPS) - 1)
    lower = np.floor(t).astype(np.intp)
    upper = np.ceil(t).astype(np.intp)
    frac = (t - lower)[:, :, np.newaxis]

    rgb = _STOPS[lower] * (1.0 - frac) + _STOPS[upper] * frac
    h, w = luma.values.shape
    pixels = np.empty((h, w, 4), dtype=np.uint8)
    pixels[:, :, :3] = np.clip(np.rint(rgb), 0, 255).astype(np.uint8)
    pixels[:, :, 3] = 255
    return PixelGrid(pixels)
