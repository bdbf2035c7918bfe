"""leaflens analyze command."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import orjson
import typer
from rich.console import Console
from rich.table import Table

from leaflens.models.config import DEFAULT_MAX_UPLOAD_BYTES, AnalysisConfig

console = Console()


def analyze_cmd(
    image: str = typer.Argument(..., help="Leaf photo to analyze (PNG, JPEG or WEBP)"),
    output: str = typer.Option("./leaflens_out", "-o", "--output", help="Output directory"),
    fmt: str = typer.Option("png", "--format", help="Output image format (png, jpeg, webp)"),
    invert_edges: bool = typer.Option(
        False, "--invert-edges", help="Dark edges on a white background"
    ),
    edge_gain: float = typer.Option(400.0, "--edge-gain", help="Edge score gain"),
    max_upload_mb: Optional[float] = typer.Option(
        DEFAULT_MAX_UPLOAD_BYTES / (1024 * 1024),
        "--max-upload-mb",
        help="Reject inputs larger than this (0 disables)",
    ),
    chart: bool = typer.Option(False, "--chart", help="Also save a filter-metrics bar chart"),
    as_json: bool = typer.Option(False, "--json", help="Print scores as JSON"),
) -> None:
    """Render the edge map and thermogram for one image and print both scores."""
    from leaflens.io.codec import DecodeError
    from leaflens.pipeline.orchestrator import analyze

    path = Path(image)
    if not path.is_file():
        console.print(f"[red]Error: {image} is not a file[/red]")
        raise typer.Exit(1)

    config = AnalysisConfig(
        edge_gain=edge_gain,
        invert_edges=invert_edges,
        output_format=fmt.upper(),
        max_upload_bytes=int(max_upload_mb * 1024 * 1024) if max_upload_mb else None,
    )

    try:
        result = analyze(path.read_bytes(), config)
    except DecodeError as exc:
        console.print(f"[red]Could not analyze {path.name}: {exc}[/red]")
        raise typer.Exit(1)
    except ValueError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise typer.Exit(1)

    out_dir = Path(output)
    out_dir.mkdir(parents=True, exist_ok=True)
    ext = config.output_format.lower().replace("jpeg", "jpg")
    edge_path = out_dir / f"{path.stem}_edges.{ext}"
    thermo_path = out_dir / f"{path.stem}_thermogram.{ext}"
    edge_path.write_bytes(result.edge_image)  # type: ignore[arg-type]
    thermo_path.write_bytes(result.thermogram_image)  # type: ignore[arg-type]

    chart_path: str | None = None
    if chart:
        from leaflens.models.config import PlotConfig
        from leaflens.plotting.scores import plot_filter_metrics

        chart_path = plot_filter_metrics(
            result.edge_score,
            result.brightness_score,
            PlotConfig(output_dir=str(out_dir), figsize=(5.0, 4.0)),
            name=f"{path.stem}_filter_metrics",
        )

    if as_json:
        payload = {
            "image": str(path),
            "width": result.width,
            "height": result.height,
            **result.scores(),
            "edge_image": str(edge_path),
            "thermogram_image": str(thermo_path),
            "chart": chart_path,
        }
        typer.echo(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode())
        return

    table = Table(title=f"Leaf Analysis: {path.name}", show_header=False, border_style="green")
    table.add_column("Key", style="bold")
    table.add_column("Value")
    table.add_row("Dimensions", f"{result.width}x{result.height}")
    table.add_row("Edge score", f"{result.edge_score:.1f}")
    table.add_row("Thermogram score", f"{result.brightness_score:.1f}")
    table.add_row("Edge map", str(edge_path))
    table.add_row("Thermogram", str(thermo_path))
    if chart_path:
        table.add_row("Chart", chart_path)
    console.print(table)
