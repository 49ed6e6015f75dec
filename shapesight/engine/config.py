"""Detector configuration — every numeric constant the pipeline decides with."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class DetectorConfig:
    """Thresholds and confidences for segmentation and classification."""

    # Noise floor: blobs with fewer pixels are never classified
    min_area: int = 100

    # Compactness bands (4π·area/perimeter²)
    min_compactness: float = 0.2  # below: thin line artifact
    circle_compactness: float = 0.95  # above: circle, vertex analysis skipped

    # RDP simplification epsilon, as a fraction of traced perimeter length
    rdp_epsilon_pct: float = 0.042

    # Vertex-count branches
    star_vertices: int = 10
    pentagon_vertices: int = 5
    triangle_vertices: int = 3
    quad_vertices: int = 4

    # 3 vertices but this compact: a noisy square
    triangle_square_compactness: float = 0.75
    # 4 vertices: longest/shortest side below this is a square
    square_side_ratio: float = 1.2

    # Any other vertex count falls back to compactness alone
    fallback_square_compactness: float = 0.76
    fallback_rectangle_compactness: float = 0.5

    # Confidences
    polygon_confidence: float = 0.85
    noisy_square_confidence: float = 0.7
    quad_confidence: float = 0.9
    fallback_confidence: float = 0.65
