"""leaflens plot command group."""

from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from leaflens.io.manifest_io import read_manifest
from leaflens.models.config import PlotConfig

plot_app = typer.Typer(help="Generate score charts.")
console = Console()

_output_opt = typer.Option("./plots", "-o", "--output", help="Output directory")
_format_opt = typer.Option("png", "--format", help="Output format (png, pdf, svg)")
_dpi_opt = typer.Option(150, "--dpi", help="DPI for output")


@plot_app.command()
def scores(
    manifest: str = typer.Option(..., "-m", "--manifest", help="Path to manifest JSONL"),
    output: str = _output_opt,
    fmt: str = _format_opt,
    dpi: int = _dpi_opt,
    sample: Optional[int] = typer.Option(None, "--sample", help="Sample N records"),
    seed: int = typer.Option(42, "--seed", help="Random seed for sampling"),
) -> None:
    """Histogram of edge and thermogram scores across a manifest."""
    from leaflens.plotting.scores import plot_score_distribution

    _meta, records = read_manifest(manifest)
    if not records:
        console.print("[red]No records found in manifest.[/red]")
        raise typer.Exit(1)

    config = PlotConfig(output_dir=output, format=fmt, dpi=dpi, sample=sample, seed=seed)
    path = plot_score_distribution(records, config)
    console.print(f"[green]Saved:[/green] {path}")


@plot_app.command()
def metrics(
    edge_score: float = typer.Argument(..., help="Edge score (0-100)"),
    brightness_score: float = typer.Argument(..., help="Thermogram score (0-100)"),
    output: str = _output_opt,
    fmt: str = _format_opt,
    dpi: int = _dpi_opt,
) -> None:
    """Bar chart of a single image's two filter scores."""
    from leaflens.plotting.scores import plot_filter_metrics

    for value in (edge_score, brightness_score):
        if not 0.0 <= value <= 100.0:
            console.print(f"[red]Scores must be within 0-100, got {value}[/red]")
            raise typer.Exit(1)

    config = PlotConfig(output_dir=output, format=fmt, dpi=dpi, figsize=(5.0, 4.0))
    path = plot_filter_metrics(edge_score, brightness_score, config)
    console.print(f"[green]Saved:[/green] {path}")
