"""Immutable pixel, luma and gradient grids passed between pipeline stages."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray


def _frozen(arr: NDArray) -> NDArray:
    """Return a read-only view so downstream stages cannot mutate a shared grid."""
    view = arr.view()
    view.flags.writeable = False
    return view


@dataclass(frozen=True, slots=True)
class PixelGrid:
    """RGBA samples, row-major, shape (height, width, 4), dtype uint8."""

    pixels: NDArray[np.uint8]

    def __post_init__(self) -> None:
        arr = self.pixels
        if arr.dtype != np.uint8:
            raise TypeError(f"PixelGrid requires uint8 samples, got {arr.dtype}")
        if arr.ndim != 3 or arr.shape[2] != 4:
            raise ValueError(f"PixelGrid requires shape (H, W, 4), got {arr.shape}")
        if arr.shape[0] == 0 or arr.shape[1] == 0:
            raise ValueError("PixelGrid must contain at least one pixel")
        object.__setattr__(self, "pixels", _frozen(arr))

    @classmethod
    def from_array(cls, data: ArrayLike) -> PixelGrid:
        """Build a grid from any (H, W, 3|4) numeric array.

        Values are rounded and clamped to [0, 255], never wrapped. A missing
        alpha channel is filled with 255.
        """
        arr = np.asarray(data)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise ValueError(f"expected shape (H, W, 3) or (H, W, 4), got {arr.shape}")
        if arr.dtype != np.uint8:
            arr = np.clip(np.rint(arr.astype(np.float64)), 0, 255).astype(np.uint8)
        if arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
            arr = np.concatenate([arr, alpha], axis=2)
        return cls(np.ascontiguousarray(arr))

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def rgb(self) -> NDArray[np.uint8]:
        return self.pixels[:, :, :3]

    def sample(self, x: int, y: int) -> tuple[int, int, int, int]:
        r, g, b, a = self.pixels[y, x]
        return int(r), int(g), int(b), int(a)


@dataclass(frozen=True, slots=True)
class LumaGrid:
    """Single-channel brightness, float64 in [0, 255], shape (height, width)."""

    values: NDArray[np.float64]

    def __post_init__(self) -> None:
        if self.values.ndim != 2:
            raise ValueError(f"LumaGrid requires a 2-D array, got {self.values.shape}")
        object.__setattr__(self, "values", _frozen(self.values.astype(np.float64, copy=False)))

    @property
    def width(self) -> int:
        return int(self.values.shape[1])

    @property
    def height(self) -> int:
        return int(self.values.shape[0])


@dataclass(frozen=True, slots=True)
class GradientGrid:
    """Sobel gradient magnitude per pixel, float64 >= 0, unbounded."""

    magnitude: NDArray[np.float64]

    def __post_init__(self) -> None:
        if self.magnitude.ndim != 2:
            raise ValueError(f"GradientGrid requires a 2-D array, got {self.magnitude.shape}")
        object.__setattr__(
            self, "magnitude", _frozen(self.magnitude.astype(np.float64, copy=False))
        )

    @property
    def width(self) -> int:
        return int(self.magnitude.shape[1])

    @property
    def height(self) -> int:
        return int(self.magnitude.shape[0])
