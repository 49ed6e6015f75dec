"""T3.01 — Shape classification.

First match wins:
  area < 100                      → noise, dropped
  compactness < 0.2               → thin trace, dropped
  compactness > 0.95              → circle (confidence = compactness, capped at 1)
  10 vertices                     → star
  5 vertices                      → pentagon
  3 vertices                      → square if compactness > 0.75, else triangle
  4 vertices                      → square if max/min side < 1.2, else rectangle
  anything else                   → square if compactness > 0.76,
                                    rectangle if > 0.5, else dropped
"""

from __future__ import annotations

import logging

from numpy.typing import NDArray

from shapesight.engine.config import DetectorConfig
from shapesight.engine.context import DetectionContext
from shapesight.engine.registry import Layer, transform
from shapesight.engine.results import BoundingBox, DetectedShape, Point, ShapeType
from shapesight.utils.geometry import compactness, side_ratio

logger = logging.getLogger(__name__)


def classify_shape(
    area: float,
    perimeter: float,
    vertices: NDArray,
    config: DetectorConfig | None = None,
) -> tuple[ShapeType, float] | None:
    """Label a blob from its pixel count, boundary length and polygon vertices.

    Returns (type, confidence), or None when the blob is discarded.
    """
    cfg = config or DetectorConfig()

    if area < cfg.min_area:
        return None

    c = compactness(area, perimeter)
    if c < cfg.min_compactness:
        return None
    if c > cfg.circle_compactness:
        return ShapeType.CIRCLE, min(c, 1.0)

    v = len(vertices)
    if v == cfg.star_vertices:
        return ShapeType.STAR, cfg.polygon_confidence
    if v == cfg.pentagon_vertices:
        return ShapeType.PENTAGON, cfg.polygon_confidence
    if v == cfg.triangle_vertices:
        if c > cfg.triangle_square_compactness:
            return ShapeType.SQUARE, cfg.noisy_square_confidence
        return ShapeType.TRIANGLE, cfg.polygon_confidence
    if v == cfg.quad_vertices:
        if side_ratio(vertices) < cfg.square_side_ratio:
            return ShapeType.SQUARE, cfg.quad_confidence
        return ShapeType.RECTANGLE, cfg.quad_confidence

    if c > cfg.fallback_square_compactness:
        return ShapeType.SQUARE, cfg.fallback_confidence
    if c > cfg.fallback_rectangle_compactness:
        return ShapeType.RECTANGLE, cfg.fallback_confidence
    return None


@transform(
    id="T3.01",
    layer=Layer.CLASSIFICATION,
    dependencies=["T2.02"],
    description="Classify blobs into shapes, dropping noise",
)
def shape_classification(ctx: DetectionContext) -> None:
    shapes: list[DetectedShape] = []
    for blob in ctx.blobs:
        label = classify_shape(blob.area, blob.perimeter, blob.vertices, ctx.config)
        blob.features["shape_type"] = None if label is None else label[0].value
        logger.debug("Blob %d (%d px): %s", blob.id, blob.area, blob.features)
        if label is None:
            continue

        shape_type, confidence = label
        x, y, w, h = blob.bbox
        cx, cy = blob.centroid
        shapes.append(
            DetectedShape(
                type=shape_type,
                confidence=confidence,
                bounding_box=BoundingBox(x=x, y=y, width=w, height=h),
                center=Point(x=cx, y=cy),
                area=float(blob.area),
            )
        )
    ctx.shapes = shapes
