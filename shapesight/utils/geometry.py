"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray


def unpack_indices(indices: NDArray[np.int64], width: int) -> tuple[NDArray[np.int64], NDArray[np.int64]]:
    """Split packed ``y * width + x`` indices into (xs, ys)."""
    ys, xs = np.divmod(indices, width)
    return xs, ys


def pixel_bbox(xs: NDArray[np.int64], ys: NDArray[np.int64]) -> tuple[int, int, int, int]:
    """(x, y, width, height) of a pixel set; sizes count both edge pixels."""
    if len(xs) == 0:
        return (0, 0, 0, 0)
    x0, y0 = int(xs.min()), int(ys.min())
    return (x0, y0, int(xs.max()) - x0 + 1, int(ys.max()) - y0 + 1)


def pixel_centroid(xs: NDArray[np.int64], ys: NDArray[np.int64]) -> tuple[float, float]:
    """Mean pixel coordinate."""
    if len(xs) == 0:
        return (0.0, 0.0)
    return (float(np.mean(xs)), float(np.mean(ys)))


def compactness(area: float, perimeter: float) -> float:
    """Isoperimetric ratio 4π·area/perimeter². Circle=1.0, 0 for no perimeter."""
    if perimeter <= 0:
        return 0.0
    return 4 * math.pi * area / (perimeter ** 2)


def side_lengths(vertices: NDArray[np.float64]) -> NDArray[np.float64]:
    """Lengths of the sides of a closed polygon, last vertex joined to the first."""
    if len(vertices) < 2:
        return np.empty(0)
    nxt = np.roll(vertices, -1, axis=0)
    return np.sqrt(np.sum((nxt - vertices) ** 2, axis=1))


def side_ratio(vertices: NDArray[np.float64]) -> float:
    """Longest over shortest side. inf for a zero-length side."""
    sides = side_lengths(vertices)
    if len(sides) == 0:
        return float("inf")
    shortest = float(sides.min())
    if shortest <= 0:
        return float("inf")
    return float(sides.max()) / shortest
