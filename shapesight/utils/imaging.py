"""Pixel buffer helpers — validation, decoding, luma reduction. No engine imports."""

from __future__ import annotations

import io

import numpy as np
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError

from shapesight.errors import ImageTooLargeError, InvalidImageError

# ITU-R BT.601 luma weights.
_LUMA_R = 0.299
_LUMA_G = 0.587
_LUMA_B = 0.114

_CHANNELS = 4  # interleaved R, G, B, A


def as_rgba_buffer(pixels: object, width: int, height: int) -> NDArray[np.uint8]:
    """Validate an interleaved RGBA buffer and return it as a flat uint8 array.

    Accepts bytes-like objects or a uint8 numpy array (flat or (h, w, 4)).
    """
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise InvalidImageError(f"{name} must be an integer, got {type(value).__name__}")
        if value < 0:
            raise InvalidImageError(f"{name} must be non-negative, got {value}")

    if isinstance(pixels, np.ndarray):
        if pixels.dtype != np.uint8:
            raise InvalidImageError(f"pixel array must be uint8, got {pixels.dtype}")
        if pixels.ndim == 3 and pixels.shape != (height, width, _CHANNELS):
            raise InvalidImageError(
                f"pixel array shape {pixels.shape} does not match "
                f"({height}, {width}, {_CHANNELS})"
            )
        if pixels.ndim not in (1, 3):
            raise InvalidImageError(f"pixel array must be flat or (h, w, 4), got shape {pixels.shape}")
        flat = np.ascontiguousarray(pixels).reshape(-1)
    elif isinstance(pixels, (bytes, bytearray, memoryview)):
        flat = np.frombuffer(bytes(pixels), dtype=np.uint8)
    else:
        raise InvalidImageError(f"unsupported pixel buffer type: {type(pixels).__name__}")

    expected = int(width) * int(height) * _CHANNELS
    if flat.size != expected:
        raise InvalidImageError(
            f"pixel buffer has {flat.size} bytes, expected {expected} "
            f"for {width}x{height} RGBA"
        )
    return flat


def to_grayscale(rgba: NDArray[np.uint8]) -> NDArray[np.uint8]:
    """Reduce a flat RGBA buffer to one luma byte per pixel. Alpha is ignored.

    Values are rounded half-to-even and clamped, like an 8-bit clamped store.
    """
    px = rgba.reshape(-1, _CHANNELS).astype(np.float64)
    gray = _LUMA_R * px[:, 0] + _LUMA_G * px[:, 1] + _LUMA_B * px[:, 2]
    return np.clip(np.rint(gray), 0, 255).astype(np.uint8)


def decode_image(
    data: bytes,
    max_pixels: int | None = None,
) -> tuple[NDArray[np.uint8], int, int]:
    """Decode an encoded image file (PNG, JPEG, ...) to an (h, w, 4) RGBA array.

    The size is checked against ``max_pixels`` from the header alone, before
    any pixel data is decoded.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            width, height = img.size
            if max_pixels is not None and width * height > max_pixels:
                raise ImageTooLargeError(
                    f"image has {width * height} pixels, limit is {max_pixels}"
                )
            rgba = img.convert("RGBA")
    except Image.DecompressionBombError as e:
        raise ImageTooLargeError(str(e)) from e
    except (UnidentifiedImageError, OSError) as e:
        raise InvalidImageError(f"cannot decode image: {e}") from e
    return np.array(rgba, dtype=np.uint8), rgba.width, rgba.height
