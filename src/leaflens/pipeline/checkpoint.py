"""Resume key logic for checkpoint/resume."""

from __future__ import annotations

import os

from leaflens.io.manifest_io import build_resume_set, read_manifest
from leaflens.models.results import ScoreRecord


def load_processed_set(
    manifest_path: str,
) -> tuple[set[tuple[str, int, float]], list[ScoreRecord]]:
    """Load already-scored image keys from an existing manifest."""
    _meta, records = read_manifest(manifest_path)
    return build_resume_set(records), records


def filter_pending(
    image_paths: list[str],
    processed: set[tuple[str, int, float]],
) -> list[str]:
    """Drop images whose (path, size, mtime) is already in the manifest."""
    pending: list[str] = []
    for path in image_paths:
        try:
            stat = os.stat(path)
        except OSError:
            pending.append(path)  # let the worker record the failure
            continue
        if (path, stat.st_size, stat.st_mtime) not in processed:
            pending.append(path)
    return pending
