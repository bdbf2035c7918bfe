"""Edge / thermogram score charts."""

from __future__ import annotations

from leaflens.models.config import PlotConfig
from leaflens.models.results import ScoreRecord
from leaflens.plotting.base import COLORS, create_figure, prepare_records, range_frame, save_figure


def plot_filter_metrics(
    edge_score: float,
    brightness_score: float,
    config: PlotConfig,
    name: str = "filter_metrics",
) -> str:
    """Side-by-side bars of one image's edge and thermogram scores."""
    fig, ax = create_figure(config)

    labels = ["Edge Score", "Thermogram Score"]
    values = [edge_score, brightness_score]
    bars = ax.bar(labels, values, color=[COLORS["edge"], COLORS["thermogram"]], width=0.45)
    for bar, value in zip(bars, values):
        ax.text(
            bar.get_x() + bar.get_width() / 2,
            value + 1.5,
            f"{value:.1f}",
            ha="center",
            va="bottom",
            color=COLORS["text_secondary"],
        )

    ax.set_ylim(0, 105)
    ax.set_ylabel("Score (0-100)")
    ax.set_title("Filter Metrics")
    range_frame(ax)
    fig.tight_layout()

    return save_figure(fig, name, config)


def plot_score_distribution(records: list[ScoreRecord], config: PlotConfig) -> str:
    """Overlaid histograms of edge and thermogram scores across a manifest."""
    recs = prepare_records(records, config)
    edge = [r.edge_score for r in recs if r.edge_score is not None]
    brightness = [r.brightness_score for r in recs if r.brightness_score is not None]

    fig, ax = create_figure(config)
    bins = [i * 2.5 for i in range(41)]
    ax.hist(edge, bins=bins, color=COLORS["edge"], alpha=0.7, edgecolor="none", label="Edge")
    ax.hist(
        brightness,
        bins=bins,
        color=COLORS["thermogram"],
        alpha=0.7,
        edgecolor="none",
        label="Thermogram",
    )

    ax.set_xlim(0, 100)
    ax.set_xlabel("Score")
    ax.set_ylabel("Count")
    ax.set_title(f"Score Distribution  ({len(recs):,} images)")
    ax.legend(frameon=False)
    range_frame(ax)
    fig.tight_layout()

    return save_figure(fig, "score_distribution", config)
