"""Manifest-level score aggregation."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from leaflens.models.results import ScoreRecord


@dataclass
class ScoreStats:
    count: int = 0
    mean: float = 0.0
    min: float = 0.0
    max: float = 0.0


@dataclass
class ScoreSummary:
    total_images: int = 0
    total_size_bytes: int = 0
    corrupt_count: int = 0
    edge: ScoreStats = field(default_factory=ScoreStats)
    brightness: ScoreStats = field(default_factory=ScoreStats)
    format_counts: dict[str, int] = field(default_factory=dict)


def _stats(values: list[float]) -> ScoreStats:
    if not values:
        return ScoreStats()
    return ScoreStats(
        count=len(values),
        mean=sum(values) / len(values),
        min=min(values),
        max=max(values),
    )


def aggregate(records: list[ScoreRecord]) -> ScoreSummary:
    """Compute count/mean/min/max of both scores across a manifest."""
    if not records:
        return ScoreSummary()

    formats: Counter[str] = Counter(r.format for r in records if r.format)
    valid = [r for r in records if not r.is_corrupt]

    return ScoreSummary(
        total_images=len(records),
        total_size_bytes=sum(r.file_size_bytes for r in records),
        corrupt_count=len(records) - len(valid),
        edge=_stats([r.edge_score for r in valid if r.edge_score is not None]),
        brightness=_stats([r.brightness_score for r in valid if r.brightness_score is not None]),
        format_counts=dict(formats.most_common()),
    )
