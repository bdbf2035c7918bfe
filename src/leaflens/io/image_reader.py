"""Leaf image discovery for batch scans."""

from __future__ import annotations

from pathlib import Path


def discover_images(root: str | Path, extensions: tuple[str, ...]) -> list[str]:
    """Return image paths under root whose suffix is in extensions, sorted.

    Hidden files and anything inside hidden directories are skipped.
    """
    root = Path(root)
    wanted = {e.lower() for e in extensions}
    return sorted(
        str(p)
        for p in root.rglob("*")
        if p.is_file()
        and p.suffix.lower() in wanted
        and not any(part.startswith(".") for part in p.relative_to(root).parts)
    )
