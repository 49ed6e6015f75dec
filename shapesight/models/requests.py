"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class DetectRequest(BaseModel):
    width: int = Field(..., ge=0, description="Image width in pixels")
    height: int = Field(..., ge=0, description="Image height in pixels")
    pixels: str = Field(..., description="Base64 of the row-major interleaved RGBA bytes")


class DetectImageRequest(BaseModel):
    image: str = Field(..., description="Base64 of an encoded image file (PNG, JPEG, ...)")
