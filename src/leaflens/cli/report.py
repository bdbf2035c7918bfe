"""leaflens info command."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from leaflens.core.aggregator import ScoreStats, aggregate
from leaflens.io.manifest_io import read_manifest
from leaflens.utils import fmt_bytes, fmt_score

console = Console()


def _stats_row(stats: ScoreStats) -> str:
    if not stats.count:
        return "-"
    return (
        f"mean {fmt_score(stats.mean)}  "
        f"(min {fmt_score(stats.min)}, max {fmt_score(stats.max)})"
    )


def info(
    manifest: str = typer.Option(..., "-m", "--manifest", help="Path to manifest JSONL"),
) -> None:
    """Show a quick summary of a score manifest."""
    meta, records = read_manifest(manifest)
    if not records:
        console.print("[red]No records found.[/red]")
        raise typer.Exit(1)

    summary = aggregate(records)

    table = Table(title="Score Summary", show_header=False, border_style="green")
    table.add_column("Key", style="bold")
    table.add_column("Value")

    table.add_row("Total images", f"{summary.total_images:,}")
    table.add_row("Total size", fmt_bytes(summary.total_size_bytes))
    table.add_row("Failed to decode", f"{summary.corrupt_count:,}")
    table.add_row("Edge score", _stats_row(summary.edge))
    table.add_row("Thermogram score", _stats_row(summary.brightness))
    table.add_row("Formats", ", ".join(f"{k} ({v})" for k, v in summary.format_counts.items()))

    if meta:
        table.add_row("Input dir", meta.input_dir)
        table.add_row("Created", meta.created_at)

    console.print(table)
