"""DetectionContext — the single mutable state object flowing through all transforms.

Per-blob results → BlobData fields and BlobData.features
Image-wide results → DetectionContext.* (gray, threshold, mask, shapes)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import NDArray

from shapesight.engine.config import DetectorConfig
from shapesight.engine.results import DetectedShape
from shapesight.utils.geometry import compactness, pixel_bbox, pixel_centroid, unpack_indices


@dataclass
class BlobData:
    """One 8-connected foreground region and everything derived from it."""

    id: int
    # Packed pixel indices (y * image_width + x) in flood-fill order
    indices: NDArray[np.int64]
    image_width: int
    # Traced outer boundary: Nx2 array of (x, y)
    boundary: NDArray[np.float64] = field(default_factory=lambda: np.empty((0, 2)))
    # Did the trace return to its start pixel?
    closed: bool = False
    # Simplified polygon vertices: Mx2 array of (x, y)
    vertices: NDArray[np.float64] = field(default_factory=lambda: np.empty((0, 2)))
    # RDP tolerance used for this blob
    epsilon: float = 0.0
    # All computed features go here (keyed by feature name)
    features: dict[str, Any] = field(default_factory=dict)

    @property
    def area(self) -> int:
        return len(self.indices)

    @property
    def bbox(self) -> tuple[int, int, int, int]:
        """(x, y, width, height) of the raw pixel set."""
        return pixel_bbox(*unpack_indices(self.indices, self.image_width))

    @property
    def centroid(self) -> tuple[float, float]:
        return pixel_centroid(*unpack_indices(self.indices, self.image_width))

    @property
    def perimeter(self) -> float:
        """Boundary length as the number of traced boundary pixels."""
        return float(len(self.boundary))

    @property
    def compactness(self) -> float:
        return compactness(self.area, self.perimeter)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)


@dataclass
class DetectionContext:
    """Shared state for one detection call."""

    # Validated flat RGBA buffer
    pixels: NDArray[np.uint8] = field(default_factory=lambda: np.empty(0, dtype=np.uint8))
    width: int = 0
    height: int = 0
    config: DetectorConfig = field(default_factory=DetectorConfig)

    # --- Layer 0 ---
    gray: NDArray[np.uint8] | None = None
    threshold: int = 0
    mask: NDArray[np.uint8] | None = None

    # --- Layer 1 ---
    blobs: list[BlobData] = field(default_factory=list)

    # --- Layer 3 ---
    shapes: list[DetectedShape] = field(default_factory=list)

    # --- Pipeline metadata ---
    completed_transforms: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def num_blobs(self) -> int:
        return len(self.blobs)

    @property
    def pixel_count(self) -> int:
        return self.width * self.height
