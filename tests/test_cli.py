"""Tests for CLI commands."""

from __future__ import annotations

from pathlib import Path

import orjson
import pytest
from typer.testing import CliRunner

from leaflens.cli.app import app
from leaflens.io.manifest_io import append_records, create_manifest
from leaflens.models.results import ManifestMeta, ScoreRecord

runner = CliRunner()


@pytest.fixture
def leaf_file(tmp_path: Path, leaf_png: bytes) -> Path:
    path = tmp_path / "leaf.png"
    path.write_bytes(leaf_png)
    return path


@pytest.fixture
def manifest(tmp_path: Path) -> Path:
    path = tmp_path / "scores.jsonl"
    create_manifest(path, ManifestMeta(input_dir="/data", created_at="now"))
    append_records(
        path,
        [
            ScoreRecord(
                path="/data/a.jpg",
                filename="a.jpg",
                format="JPEG",
                file_size_bytes=5000,
                edge_score=12.5,
                brightness_score=48.0,
            ),
            ScoreRecord(path="/data/b.jpg", filename="b.jpg", is_corrupt=True),
        ],
    )
    return path


class TestCLI:
    def test_help(self) -> None:
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "analyze" in result.output

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "leaflens" in result.output

    def test_analyze_writes_images(self, leaf_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "out"
        result = runner.invoke(app, ["analyze", str(leaf_file), "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert (out / "leaf_edges.png").exists()
        assert (out / "leaf_thermogram.png").exists()
        assert "Edge score" in result.output

    def test_analyze_json(self, leaf_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "out"
        result = runner.invoke(
            app, ["analyze", str(leaf_file), "-o", str(out), "--json", "--format", "webp"]
        )
        assert result.exit_code == 0, result.output
        payload = orjson.loads(result.output)
        assert payload["width"] == 64
        assert 0 <= payload["edge_score"] <= 100
        assert 0 <= payload["brightness_score"] <= 100
        assert payload["edge_image"].endswith("leaf_edges.webp")
        assert payload["chart"] is None

    def test_analyze_chart(self, leaf_file: Path, tmp_path: Path) -> None:
        out = tmp_path / "out"
        result = runner.invoke(app, ["analyze", str(leaf_file), "-o", str(out), "--chart"])
        assert result.exit_code == 0, result.output
        assert (out / "leaf_filter_metrics.png").exists()

    def test_analyze_corrupt(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.jpg"
        bad.write_bytes(b"definitely not a jpeg")
        result = runner.invoke(app, ["analyze", str(bad), "-o", str(tmp_path / "out")])
        assert result.exit_code == 1
        assert not (tmp_path / "out").exists()

    def test_analyze_missing_file(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["analyze", str(tmp_path / "nope.png")])
        assert result.exit_code == 1

    def test_analyze_too_large(self, leaf_file: Path, tmp_path: Path) -> None:
        result = runner.invoke(
            app, ["analyze", str(leaf_file), "-o", str(tmp_path), "--max-upload-mb", "0.0001"]
        )
        assert result.exit_code == 1

    @pytest.mark.timeout(60)
    def test_scan_command(self, tmp_leaf_dir: Path, tmp_path: Path) -> None:
        output = tmp_path / "scores.jsonl"
        result = runner.invoke(
            app,
            [
                "scan",
                str(tmp_leaf_dir),
                "-o",
                str(output),
                "--workers",
                "2",
                "--extensions",
                "png",
                "--save-images",
                str(tmp_path / "renders"),
            ],
        )
        assert result.exit_code == 0, result.output
        assert output.exists()
        assert len(list((tmp_path / "renders").glob("*_thermogram.png"))) == 2

    def test_scan_invalid_dir(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["scan", str(tmp_path / "nonexistent")])
        assert result.exit_code != 0

    def test_info(self, manifest: Path) -> None:
        result = runner.invoke(app, ["info", "-m", str(manifest)])
        assert result.exit_code == 0, result.output
        assert "Total images" in result.output
        assert "12.5" in result.output

    def test_info_empty(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["info", "-m", str(tmp_path / "missing.jsonl")])
        assert result.exit_code == 1

    def test_plot_scores(self, manifest: Path, tmp_path: Path) -> None:
        out = tmp_path / "plots"
        result = runner.invoke(app, ["plot", "scores", "-m", str(manifest), "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert (out / "score_distribution.png").exists()

    def test_plot_metrics(self, tmp_path: Path) -> None:
        out = tmp_path / "plots"
        result = runner.invoke(app, ["plot", "metrics", "40", "55.5", "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert (out / "filter_metrics.png").exists()

    def test_plot_metrics_out_of_range(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["plot", "metrics", "140", "5", "-o", str(tmp_path)])
        assert result.exit_code == 1
