"""Configuration models with sensible defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

# Upload limit enforced by the web client before an image reaches the pipeline.
DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


@dataclass(slots=True)
class AnalysisConfig:
    edge_gain: float = 400.0
    invert_edges: bool = False
    output_format: str = "PNG"
    as_data_uri: bool = False
    jpeg_quality: int = 95
    max_upload_bytes: int | None = DEFAULT_MAX_UPLOAD_BYTES
    allowed_formats: tuple[str, ...] | None = ("PNG", "JPEG", "WEBP")
    apply_exif_orientation: bool = True
    max_pixels: int | None = 50_000_000


@dataclass(slots=True)
class ScanConfig:
    workers: int = field(default_factory=lambda: os.cpu_count() or 4)
    checkpoint_every: int = 100
    extensions: tuple[str, ...] = (
        ".jpg",
        ".jpeg",
        ".png",
        ".webp",
    )
    save_images_dir: str | None = None
    resume: bool = True
    force: bool = False
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)


@dataclass(slots=True)
class PlotConfig:
    output_dir: str = "."
    format: str = "png"
    dpi: int = 150
    sample: int | None = None
    figsize: tuple[float, float] = (9.0, 6.0)
    seed: int = 42
