"""Shared utilities."""

from __future__ import annotations

# Binary units, matching the --max-upload-mb flag (1 MB = 1024 * 1024 bytes)
_UNITS = ("B", "KB", "MB", "GB")


def fmt_bytes(b: int | float) -> str:
    """Format a byte count using 1024-based units."""
    size = float(b)
    for unit in _UNITS[:-1]:
        if abs(size) < 1024:
            return f"{size:.0f} {unit}" if unit == "B" else f"{size:.2f} {unit}"
        size /= 1024
    return f"{size:.2f} {_UNITS[-1]}"


def fmt_score(score: float | None) -> str:
    """Format a 0-100 score for tables; missing scores render as a dash."""
    if score is None:
        return "-"
    return f"{score:.1f}"
