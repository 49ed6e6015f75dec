"""Pixel-grid morphology — 8-connected component labeling and boundary tracing.

Grids are flat buffers indexed ``y * width + x``.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Collection

import numpy as np
from numpy.typing import NDArray

# (dx, dy) in row-major scan order, center excluded.
_NEIGHBORS_8 = [
    (-1, -1), (0, -1), (1, -1),
    (-1, 0), (1, 0),
    (-1, 1), (0, 1), (1, 1),
]

# Clockwise from north with y growing downward: N, NE, E, SE, S, SW, W, NW.
_MOORE_DIRECTIONS = [
    (0, -1), (1, -1), (1, 0), (1, 1),
    (0, 1), (-1, 1), (-1, 0), (-1, -1),
]


def connected_components(
    mask: NDArray[np.uint8],
    width: int,
    height: int,
) -> list[NDArray[np.int64]]:
    """Label 8-connected foreground regions with BFS flood fill.

    Returns one array of packed pixel indices per region, in BFS order.
    Regions are ordered by their first pixel in row-major scan order.
    """
    cells = np.ascontiguousarray(mask, dtype=np.uint8).reshape(-1).tobytes()
    visited = bytearray(width * height)
    blobs: list[NDArray[np.int64]] = []

    # Foreground indices come back ascending, i.e. in row-major scan order.
    for seed in np.flatnonzero(mask).tolist():
        if visited[seed]:
            continue
        visited[seed] = 1
        queue = deque([seed])
        members: list[int] = []

        while queue:
            idx = queue.popleft()
            members.append(idx)
            y, x = divmod(idx, width)
            for dx, dy in _NEIGHBORS_8:
                nx, ny = x + dx, y + dy
                if 0 <= nx < width and 0 <= ny < height:
                    n = ny * width + nx
                    if cells[n] and not visited[n]:
                        visited[n] = 1
                        queue.append(n)

        blobs.append(np.array(members, dtype=np.int64))

    return blobs


def moore_trace(
    members: Collection[int],
    width: int,
    height: int,
) -> tuple[NDArray[np.float64], bool]:
    """Walk the outer boundary of a region with Moore-neighbor tracing.

    Starts at the topmost-leftmost member with incoming direction north. Each
    step searches clockwise from one step counter-clockwise of the incoming
    direction. Stops when the walk returns to the start (closed) or a pixel has
    no member neighbor (open, partial boundary kept).

    The walk is deterministic over at most 8·len(members) (pixel, direction)
    states, so a walk that has not come back by then never will; it is cut
    there and reported open.

    Returns ((N, 2) array of (x, y) boundary points, closed).
    """
    if not members:
        return np.empty((0, 2)), False

    start = min(members)
    sy, sx = divmod(start, width)
    x, y = sx, sy
    direction = 0
    closed = False
    boundary: list[tuple[int, int]] = []

    for _ in range(8 * len(members)):
        boundary.append((x, y))
        for i in range(8):
            d = (direction + 7 + i) % 8
            dx, dy = _MOORE_DIRECTIONS[d]
            nx, ny = x + dx, y + dy
            # Bounds first: an out-of-row x would alias a pixel on the next row.
            if 0 <= nx < width and 0 <= ny < height and ny * width + nx in members:
                x, y, direction = nx, ny, d
                break
        else:
            break
        if x == sx and y == sy:
            closed = True
            break

    return np.array(boundary, dtype=np.float64).reshape(-1, 2), closed
