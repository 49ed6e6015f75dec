"""POST /api/detect — shape detection on raw or encoded images."""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging

from fastapi import APIRouter, Depends, HTTPException

from shapesight.config import Settings
from shapesight.dependencies import get_settings
from shapesight.engine.pipeline import detect
from shapesight.errors import ImageTooLargeError, InvalidImageError
from shapesight.models.requests import DetectImageRequest, DetectRequest
from shapesight.models.responses import DetectionResponse
from shapesight.utils.imaging import decode_image

logger = logging.getLogger(__name__)

router = APIRouter()


def _b64decode(payload: str, field: str) -> bytes:
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise HTTPException(status_code=422, detail=f"{field} is not valid base64: {e}") from e


def _check_size(width: int, height: int, settings: Settings) -> None:
    if width * height > settings.max_image_pixels:
        raise HTTPException(
            status_code=413,
            detail=f"image has {width * height} pixels, limit is {settings.max_image_pixels}",
        )


async def _run_detect(pixels: object, width: int, height: int) -> DetectionResponse:
    """Run the sync pipeline in the default executor so the event loop stays free."""
    loop = asyncio.get_running_loop()
    try:
        result = await loop.run_in_executor(None, detect, pixels, width, height)
    except InvalidImageError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    return DetectionResponse.from_result(result)


@router.post("/detect", response_model=DetectionResponse)
async def detect_pixels(
    req: DetectRequest,
    settings: Settings = Depends(get_settings),
) -> DetectionResponse:
    _check_size(req.width, req.height, settings)
    pixels = _b64decode(req.pixels, "pixels")
    return await _run_detect(pixels, req.width, req.height)


@router.post("/detect/image", response_model=DetectionResponse)
async def detect_image(
    req: DetectImageRequest,
    settings: Settings = Depends(get_settings),
) -> DetectionResponse:
    data = _b64decode(req.image, "image")
    try:
        pixels, width, height = decode_image(data, max_pixels=settings.max_image_pixels)
    except ImageTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e)) from e
    except InvalidImageError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    logger.debug("Decoded %dx%d image (%d bytes)", width, height, len(data))
    return await _run_detect(pixels, width, height)
