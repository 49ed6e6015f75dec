"""API response models. Detection payloads use camelCase on the wire."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from shapesight.engine.results import DetectionResult


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    transforms_registered: int = 0


class BoundingBoxModel(_CamelModel):
    x: int
    y: int
    width: int
    height: int


class PointModel(_CamelModel):
    x: float
    y: float


class DetectedShapeModel(_CamelModel):
    type: Literal["circle", "triangle", "rectangle", "square", "pentagon", "star"]
    confidence: float = Field(..., ge=0.0, le=1.0)
    bounding_box: BoundingBoxModel
    center: PointModel
    area: float


class DetectionResponse(_CamelModel):
    shapes: list[DetectedShapeModel] = Field(default_factory=list)
    processing_time: float = 0.0
    image_width: int = 0
    image_height: int = 0

    @classmethod
    def from_result(cls, result: DetectionResult) -> DetectionResponse:
        return cls.model_validate(result.to_dict())
