"""Tests for pixel, luma and gradient grid value types."""

from __future__ import annotations

import numpy as np
import pytest

from leaflens.models.grids import GradientGrid, LumaGrid, PixelGrid


class TestPixelGrid:
    def test_from_rgb_adds_opaque_alpha(self) -> None:
        grid = PixelGrid.from_array(np.full((2, 3, 3), 10, dtype=np.uint8))
        assert grid.width == 3
        assert grid.height == 2
        assert grid.pixels.shape == (2, 3, 4)
        assert grid.sample(2, 1) == (10, 10, 10, 255)

    def test_out_of_range_values_are_clamped_not_wrapped(self) -> None:
        arr = np.array([[[300, -20, 128.4, 256]]], dtype=np.float64)
        grid = PixelGrid.from_array(arr)
        assert grid.sample(0, 0) == (255, 0, 128, 255)

    def test_wide_int_values_are_clamped(self) -> None:
        arr = np.array([[[1000, 5, -1]]], dtype=np.int32)
        assert PixelGrid.from_array(arr).sample(0, 0) == (255, 5, 0, 255)

    def test_samples_are_read_only(self) -> None:
        grid = PixelGrid.from_array(np.zeros((2, 2, 3), dtype=np.uint8))
        with pytest.raises(ValueError):
            grid.pixels[0, 0, 0] = 1

    def test_rejects_wrong_dtype(self) -> None:
        with pytest.raises(TypeError):
            PixelGrid(np.zeros((2, 2, 4), dtype=np.float32))

    def test_rejects_wrong_shape(self) -> None:
        with pytest.raises(ValueError):
            PixelGrid(np.zeros((2, 2, 3), dtype=np.uint8))
        with pytest.raises(ValueError):
            PixelGrid.from_array(np.zeros((2, 2), dtype=np.uint8))

    def test_rejects_empty(self) -> None:
        with pytest.raises(ValueError):
            PixelGrid(np.zeros((0, 3, 4), dtype=np.uint8))


class TestLumaAndGradientGrids:
    def test_luma_dimensions_and_read_only(self) -> None:
        luma = LumaGrid(np.zeros((3, 5)))
        assert (luma.width, luma.height) == (5, 3)
        with pytest.raises(ValueError):
            luma.values[0, 0] = 1.0

    def test_luma_int_input_becomes_float(self) -> None:
        luma = LumaGrid(np.full((2, 2), 7, dtype=np.uint8))
        assert luma.values.dtype == np.float64

    def test_gradient_requires_2d(self) -> None:
        with pytest.raises(ValueError):
            GradientGrid(np.zeros((2, 2, 1)))
        grad = GradientGrid(np.zeros((4, 6)))
        assert (grad.width, grad.height) == (6, 4)
