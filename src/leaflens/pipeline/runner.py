"""ProcessPoolExecutor batch scoring with Rich progress."""

from __future__ import annotations

import dataclasses
import hashlib
import os
from concurrent.futures import Future, ProcessPoolExecutor, as_completed
from datetime import datetime, timezone
from pathlib import Path

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

from leaflens.io.codec import DecodeError
from leaflens.io.image_reader import discover_images
from leaflens.io.manifest_io import append_records, create_manifest
from leaflens.io.upload import sniff_format
from leaflens.models.config import ScanConfig
from leaflens.models.results import ManifestMeta, ScoreRecord
from leaflens.pipeline.checkpoint import filter_pending, load_processed_set
from leaflens.pipeline.orchestrator import analyze
from leaflens.pipeline.signals import ShutdownHandler, worker_init

console = Console()

# Max futures in flight at once to bound memory usage
_BATCH_SIZE = 1000


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def output_stem(path: str) -> str:
    """Filename stem for saved visualizations, unique across subdirectories."""
    digest = hashlib.sha1(os.path.abspath(path).encode("utf-8")).hexdigest()[:8]
    return f"{Path(path).stem}_{digest}"


def score_file(path: str, config: ScanConfig) -> ScoreRecord:
    """Score a single image file. Never raises; failures set is_corrupt=True."""
    record = ScoreRecord(path=path, filename=os.path.basename(path), analyzed_at=_now())

    try:
        stat = os.stat(path)
        record.file_size_bytes = stat.st_size
        record.mtime = stat.st_mtime
        raw = Path(path).read_bytes()
    except OSError as exc:
        record.is_corrupt = True
        record.error = str(exc)
        return record

    analysis = dataclasses.replace(config.analysis, as_data_uri=False)
    try:
        result = analyze(raw, analysis)
    except DecodeError as exc:
        record.is_corrupt = True
        record.error = str(exc)
        return record

    record.format = sniff_format(raw) or ""
    record.width = result.width
    record.height = result.height
    record.edge_score = result.edge_score
    record.brightness_score = result.brightness_score

    if config.save_images_dir:
        out_dir = Path(config.save_images_dir)
        ext = analysis.output_format.lower().replace("jpeg", "jpg")
        stem = output_stem(path)
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
            edge_path = out_dir / f"{stem}_edges.{ext}"
            thermo_path = out_dir / f"{stem}_thermogram.{ext}"
            edge_path.write_bytes(result.edge_image)  # type: ignore[arg-type]
            thermo_path.write_bytes(result.thermogram_image)  # type: ignore[arg-type]
        except OSError as exc:
            record.error = f"could not save visualizations: {exc}"
        else:
            record.edge_image_path = str(edge_path)
            record.thermogram_image_path = str(thermo_path)

    return record


def run_scan(
    input_dir: str,
    output_path: str,
    config: ScanConfig,
) -> tuple[int, int]:
    """Score every image under input_dir. Returns (total_processed, failed_count)."""
    with ShutdownHandler() as shutdown:
        return _run_scan_inner(input_dir, output_path, config, shutdown)


def _run_scan_inner(
    input_dir: str,
    output_path: str,
    config: ScanConfig,
    shutdown: ShutdownHandler,
) -> tuple[int, int]:
    output = Path(output_path)

    console.print(f"[bold]Discovering images in[/bold] {input_dir} ...")
    all_images = discover_images(input_dir, config.extensions)
    total_discovered = len(all_images)
    console.print(f"  Found [bold]{total_discovered:,}[/bold] images")

    if total_discovered == 0:
        console.print("[yellow]No images found.[/yellow]")
        return 0, 0

    already_processed = 0
    if config.resume and not config.force and output.exists():
        processed_set, existing_records = load_processed_set(output_path)
        already_processed = len(existing_records)
        pending = filter_pending(all_images, processed_set)
        if already_processed > 0:
            console.print(
                f"  Resuming: [green]{already_processed:,}[/green] already scored, "
                f"[bold]{len(pending):,}[/bold] remaining"
            )
    else:
        pending = all_images
        meta = ManifestMeta(
            input_dir=os.path.abspath(input_dir),
            total_files=total_discovered,
            created_at=_now(),
            settings={
                "edge_gain": config.analysis.edge_gain,
                "invert_edges": config.analysis.invert_edges,
                "output_format": config.analysis.output_format,
                "save_images_dir": config.save_images_dir,
            },
        )
        create_manifest(output_path, meta)

    if not pending:
        console.print("[green]All images already scored![/green]")
        return already_processed, 0

    total_done = 0
    failed_count = 0
    buffer: list[ScoreRecord] = []

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]Scoring images"),
        BarColumn(bar_width=40),
        MofNCompleteColumn(),
        TextColumn("•"),
        TimeElapsedColumn(),
        TextColumn("•"),
        TimeRemainingColumn(),
        console=console,
    )

    with progress:
        task = progress.add_task("Scoring", total=len(pending))

        workers = max(1, min(config.workers, len(pending)))
        with ProcessPoolExecutor(max_workers=workers, initializer=worker_init) as executor:
            for batch_start in range(0, len(pending), _BATCH_SIZE):
                if shutdown.is_shutting_down:
                    break

                batch = pending[batch_start : batch_start + _BATCH_SIZE]
                futures: dict[Future[ScoreRecord], str] = {
                    executor.submit(score_file, path, config): path for path in batch
                }

                for future in as_completed(futures):
                    if shutdown.is_shutting_down:
                        progress.update(task, description="[yellow]Shutting down gracefully...")
                        for f in futures:
                            f.cancel()
                        break

                    try:
                        record = future.result(timeout=120)
                    except Exception as exc:
                        path = futures[future]
                        record = ScoreRecord(
                            path=path,
                            filename=os.path.basename(path),
                            is_corrupt=True,
                            error=f"worker failed: {exc}",
                            analyzed_at=_now(),
                        )

                    buffer.append(record)
                    if record.is_corrupt:
                        failed_count += 1
                    total_done += 1
                    progress.update(task, advance=1)

                    if len(buffer) >= config.checkpoint_every:
                        append_records(output_path, buffer)
                        buffer.clear()

        if buffer:
            append_records(output_path, buffer)
            buffer.clear()

    final_count = already_processed + total_done

    console.print()
    console.print("[bold green]Scan complete![/bold green]")
    console.print(f"  Total scored: [bold]{final_count:,}[/bold]")
    if failed_count:
        console.print(f"  Failed to decode: [red]{failed_count:,}[/red]")
    console.print(f"  Manifest: {output_path}")

    if shutdown.is_shutting_down:
        console.print(f"\n[yellow]Saved progress. Resume with: leaflens scan {input_dir}[/yellow]")

    return final_count, failed_count
