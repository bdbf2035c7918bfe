"""leaflens scan command."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from leaflens.models.config import AnalysisConfig, ScanConfig


def scan(
    directory: str = typer.Argument(..., help="Directory of leaf photos to score"),
    output: str = typer.Option(
        "./leaflens_manifest.jsonl", "-o", "--output", help="Manifest output path"
    ),
    workers: Optional[int] = typer.Option(None, "--workers", help="Number of parallel workers"),
    checkpoint_every: int = typer.Option(100, "--checkpoint-every", help="Flush interval"),
    resume: bool = typer.Option(
        True, "--resume/--no-resume", help="Auto-resume from existing manifest"
    ),
    force: bool = typer.Option(False, "--force", help="Force rescan, ignoring existing manifest"),
    extensions: Optional[str] = typer.Option(
        None, "--extensions", help="Comma-separated extensions"
    ),
    save_images: Optional[str] = typer.Option(
        None, "--save-images", help="Directory to write edge maps and thermograms into"
    ),
    invert_edges: bool = typer.Option(False, "--invert-edges", help="Dark edges on white"),
    edge_gain: float = typer.Option(400.0, "--edge-gain", help="Edge score gain"),
) -> None:
    """Score a directory of images and produce a JSONL manifest."""
    from leaflens.pipeline.runner import run_scan

    dir_path = Path(directory)
    if not dir_path.is_dir():
        typer.echo(f"Error: {directory} is not a valid directory", err=True)
        raise typer.Exit(1)

    config = ScanConfig(
        checkpoint_every=checkpoint_every,
        save_images_dir=save_images,
        resume=resume,
        force=force,
        analysis=AnalysisConfig(edge_gain=edge_gain, invert_edges=invert_edges),
    )
    if workers is not None:
        config.workers = workers
    if extensions:
        config.extensions = tuple(f".{e.strip().lstrip('.')}" for e in extensions.split(","))

    run_scan(str(dir_path), output, config)
