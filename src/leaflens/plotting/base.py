"""Headless matplotlib setup, figure helpers, sampling."""

from __future__ import annotations

import random
from pathlib import Path
from typing import Any

import matplotlib

matplotlib.use("Agg")  # headless backend

import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.axes import Axes  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

from leaflens.models.config import PlotConfig  # noqa: E402
from leaflens.models.results import ScoreRecord  # noqa: E402

COLORS = {
    "edge": "#55a868",
    "thermogram": "#dd8452",
    "neutral": "#555555",
    "light": "#cccccc",
    "bg": "#fffff8",
    "text": "#333333",
    "text_secondary": "#555555",
}


def apply_theme() -> None:
    """Serif fonts, no grid, light spines."""
    plt.rcParams.update(
        {
            "figure.facecolor": COLORS["bg"],
            "axes.facecolor": COLORS["bg"],
            "font.family": "serif",
            "font.serif": ["Palatino", "Georgia", "DejaVu Serif", "serif"],
            "font.size": 11,
            "axes.titlesize": 15,
            "axes.titlepad": 12,
            "axes.labelsize": 12,
            "axes.grid": False,
            "axes.spines.top": False,
            "axes.spines.right": False,
            "axes.edgecolor": COLORS["light"],
            "axes.linewidth": 0.6,
            "xtick.color": COLORS["light"],
            "ytick.color": COLORS["light"],
            "xtick.labelcolor": COLORS["text"],
            "ytick.labelcolor": COLORS["text"],
            "axes.labelcolor": COLORS["text"],
        }
    )


def range_frame(ax: Axes) -> None:
    """Trim bottom/left spines to the current axis limits."""
    xmin, xmax = ax.get_xlim()
    ax.spines["bottom"].set_bounds(xmin, xmax)
    ymin, ymax = ax.get_ylim()
    ax.spines["left"].set_bounds(ymin, ymax)


def create_figure(config: PlotConfig) -> tuple[Figure, Any]:
    apply_theme()
    fig, ax = plt.subplots(figsize=config.figsize, dpi=config.dpi)
    return fig, ax


def save_figure(fig: Figure, name: str, config: PlotConfig) -> str:
    out_dir = Path(config.output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"{name}.{config.format}"
    fig.savefig(path, bbox_inches="tight", dpi=config.dpi, facecolor=COLORS["bg"])
    plt.close(fig)
    return str(path)


def prepare_records(records: list[ScoreRecord], config: PlotConfig) -> list[ScoreRecord]:
    """Scored (non-corrupt) records, sampled down to ``config.sample`` if set."""
    recs = [r for r in records if not r.is_corrupt and r.edge_score is not None]
    if config.sample is None or len(recs) <= config.sample:
        return recs
    return random.Random(config.seed).sample(recs, config.sample)
