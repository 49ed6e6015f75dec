"""ShapeSight detection engine."""

from shapesight.engine.registry import transform, Layer, get_registry, load_transforms
from shapesight.engine.config import DetectorConfig
from shapesight.engine.context import DetectionContext, BlobData
from shapesight.engine.pipeline import Pipeline, create_pipeline, detect
from shapesight.engine.results import BoundingBox, DetectedShape, DetectionResult, Point, ShapeType

__all__ = [
    "transform",
    "Layer",
    "get_registry",
    "load_transforms",
    "DetectorConfig",
    "DetectionContext",
    "BlobData",
    "Pipeline",
    "create_pipeline",
    "detect",
    "BoundingBox",
    "DetectedShape",
    "DetectionResult",
    "Point",
    "ShapeType",
]
