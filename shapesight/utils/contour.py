"""Contour simplification — RDP over a contiguous point array."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray


def perpendicular_distances(
    points: NDArray[np.float64],
    start: NDArray[np.float64],
    end: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Distance from each point to the infinite line through start and end.

    Coincident endpoints define no line; every distance is 0 then.
    """
    dx = float(end[0] - start[0])
    dy = float(end[1] - start[1])
    den = math.hypot(dx, dy)
    if den == 0.0:
        return np.zeros(len(points))
    num = np.abs(
        dy * points[:, 0] - dx * points[:, 1] + end[0] * start[1] - end[1] * start[0]
    )
    return num / den


def rdp_simplify(
    points: NDArray[np.float64],
    epsilon: float,
) -> NDArray[np.float64]:
    """Ramer-Douglas-Peucker line simplification.

    Works on (start, end) index ranges with an explicit stack and a keep-mask,
    so long boundaries neither recurse nor copy. The result is a subsequence of
    ``points`` that always keeps the first and last point.
    """
    points = np.asarray(points, dtype=np.float64)
    n = len(points)
    if n < 3:
        return points

    keep = np.zeros(n, dtype=bool)
    keep[0] = keep[-1] = True
    stack = [(0, n - 1)]

    while stack:
        first, last = stack.pop()
        if last - first < 2:
            continue
        dists = perpendicular_distances(points[first + 1 : last], points[first], points[last])
        # argmax returns the first maximum
        idx = int(np.argmax(dists))
        if dists[idx] > epsilon:
            split = first + 1 + idx
            keep[split] = True
            stack.append((split, last))
            stack.append((first, split))

    return points[keep]


def close_polygon(
    vertices: NDArray[np.float64],
    epsilon: float,
) -> NDArray[np.float64]:
    """Drop the wrap-around vertex of a simplified closed trace.

    A closed trace ends on the pixel just before its start, so after RDP the
    last vertex duplicates the first. It is dropped when within epsilon of the
    first vertex and at least three vertices remain.
    """
    if len(vertices) > 3:
        gap = float(np.hypot(*(vertices[-1] - vertices[0])))
        if gap <= epsilon:
            return vertices[:-1]
    return vertices
