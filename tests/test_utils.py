"""Tests for formatting helpers."""

from __future__ import annotations

from leaflens.utils import fmt_bytes, fmt_score


class TestFmtBytes:
    def test_binary_units(self) -> None:
        assert fmt_bytes(512) == "512 B"
        assert fmt_bytes(2048) == "2.00 KB"
        assert fmt_bytes(10 * 1024 * 1024) == "10.00 MB"
        assert fmt_bytes(3 * 1024**3) == "3.00 GB"


class TestFmtScore:
    def test_missing(self) -> None:
        assert fmt_score(None) == "-"

    def test_one_decimal(self) -> None:
        assert fmt_score(42.345) == "42.3"
