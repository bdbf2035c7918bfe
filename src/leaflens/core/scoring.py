"""Scalar 0-100 scores derived from gradient and luma grids."""

from __future__ import annotations

from leaflens.core.grayscale import to_luma
from leaflens.models.grids import GradientGrid, LumaGrid, PixelGrid

# Empirical gain: places typical leaf imagery mid-range on the 0-100 scale.
# Tuned against the web client's chart, not derived from any physical quantity.
EDGE_SCORE_GAIN = 400.0

SCORE_MAX = 100.0


def edge_score(grad: GradientGrid, gain: float = EDGE_SCORE_GAIN) -> float:
    """Mean gradient magnitude scaled by ``gain`` and capped at 100."""
    mean_magnitude = float(grad.magnitude.mean())
    raw = (mean_magnitude / 255.0) * gain
    return min(SCORE_MAX, max(0.0, raw))


def brightness_score(grid: PixelGrid | LumaGrid) -> float:
    """Mean luma as a percentage of full white."""
    luma = to_luma(grid) if isinstance(grid, PixelGrid) else grid
    mean_luma = float(luma.values.mean())
    return min(SCORE_MAX, max(0.0, mean_luma / 255.0 * SCORE_MAX))
