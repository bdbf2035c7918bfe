"""JSONL score manifest read/write/append with crash-tolerant parsing."""

from __future__ import annotations

import os
from pathlib import Path

import orjson

from leaflens.models.results import MANIFEST_META_KEY, ManifestMeta, ScoreRecord


def create_manifest(path: str | Path, meta: ManifestMeta) -> None:
    """Create a fresh manifest file with only the metadata header (truncates existing)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(orjson.dumps(meta.to_dict(), option=orjson.OPT_APPEND_NEWLINE))


def append_records(path: str | Path, records: list[ScoreRecord]) -> None:
    """Append records to JSONL manifest file."""
    path = Path(path)
    with open(path, "ab") as f:
        for rec in records:
            f.write(orjson.dumps(rec.to_dict(), option=orjson.OPT_APPEND_NEWLINE))
        f.flush()
        os.fsync(f.fileno())


def read_manifest(path: str | Path) -> tuple[ManifestMeta | None, list[ScoreRecord]]:
    """Read a JSONL manifest, skipping corrupt trailing lines (crash tolerance)."""
    path = Path(path)
    if not path.exists():
        return None, []

    meta: ManifestMeta | None = None
    records: list[ScoreRecord] = []

    with open(path, "rb") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            try:
                data = orjson.loads(line)
            except orjson.JSONDecodeError:
                # Truncated by a crash mid-write
                continue

            if data.get(MANIFEST_META_KEY):
                if meta is None:
                    meta = ManifestMeta.from_dict(data)
            else:
                records.append(ScoreRecord.from_dict(data))

    return meta, records


def build_resume_set(records: list[ScoreRecord]) -> set[tuple[str, int, float]]:
    """Build set of (path, file_size_bytes, mtime) for resume detection."""
    return {(r.path, r.file_size_bytes, r.mtime) for r in records}
