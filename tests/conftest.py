"""Shared test fixtures — shapes drawn with Pillow on a white canvas."""

from __future__ import annotations

import io
import math
import struct
import zlib
from typing import Callable

import numpy as np
import pytest
from PIL import Image, ImageDraw

WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)

CANVAS = 200

# 50x50 filled square (PIL rectangles include both corners)
SQUARE_BOX = [50, 50, 99, 99]
# 160x60 filled rectangle
RECTANGLE_BOX = [20, 60, 179, 119]
# 81 px diameter disk
DISK_BOX = [60, 60, 140, 140]
# Tall triangle, apex up
TRIANGLE_POINTS = [(100, 20), (130, 140), (70, 140)]
# Five-pointed star, point up, on a 300 px canvas
STAR_CANVAS = 300
STAR_POINTS = [
    (
        150 + r * math.cos(math.radians(-90 + 36 * i)),
        150 + r * math.sin(math.radians(-90 + 36 * i)),
    )
    for i, r in enumerate([120, 48] * 5)
]


def render(draw: Callable[[ImageDraw.ImageDraw], None], size: int = CANVAS) -> Image.Image:
    img = Image.new("RGBA", (size, size), WHITE)
    draw(ImageDraw.Draw(img))
    return img


def as_input(img: Image.Image) -> tuple[np.ndarray, int, int]:
    return np.array(img, dtype=np.uint8), img.width, img.height


def mask_to_rgba(mask: np.ndarray) -> np.ndarray:
    """Black foreground on white from a (h, w) 0/1 mask."""
    rgba = np.full(mask.shape + (4,), 255, dtype=np.uint8)
    rgba[mask.astype(bool), :3] = 0
    return rgba


@pytest.fixture
def blank_image() -> tuple[np.ndarray, int, int]:
    return as_input(render(lambda d: None))


@pytest.fixture
def square_image() -> tuple[np.ndarray, int, int]:
    return as_input(render(lambda d: d.rectangle(SQUARE_BOX, fill=BLACK)))


@pytest.fixture
def rectangle_image() -> tuple[np.ndarray, int, int]:
    return as_input(render(lambda d: d.rectangle(RECTANGLE_BOX, fill=BLACK)))


@pytest.fixture
def disk_image() -> tuple[np.ndarray, int, int]:
    return as_input(render(lambda d: d.ellipse(DISK_BOX, fill=BLACK)))


@pytest.fixture
def triangle_image() -> tuple[np.ndarray, int, int]:
    return as_input(render(lambda d: d.polygon(TRIANGLE_POINTS, fill=BLACK)))


@pytest.fixture
def star_image() -> tuple[np.ndarray, int, int]:
    return as_input(render(lambda d: d.polygon(STAR_POINTS, fill=BLACK), size=STAR_CANVAS))


@pytest.fixture
def mixed_image() -> tuple[np.ndarray, int, int]:
    """Square (top-left), a 6x6 speck (top-right), a disk (bottom-right)."""

    def draw(d: ImageDraw.ImageDraw) -> None:
        d.rectangle([20, 20, 69, 69], fill=BLACK)
        d.rectangle([150, 20, 155, 25], fill=BLACK)
        d.ellipse([110, 100, 170, 160], fill=BLACK)

    return as_input(render(draw))


@pytest.fixture
def square_png() -> bytes:
    buf = io.BytesIO()
    render(lambda d: d.rectangle(SQUARE_BOX, fill=BLACK)).save(buf, format="PNG")
    return buf.getvalue()


def png_with_header_size(width: int, height: int) -> bytes:
    """A 1x1 PNG whose IHDR claims ``width`` x ``height``; the pixel data is never valid."""
    buf = io.BytesIO()
    Image.new("RGBA", (1, 1), WHITE).save(buf, format="PNG")
    data = bytearray(buf.getvalue())
    # Signature (8) + length (4) + b"IHDR" (4), then width and height
    struct.pack_into(">II", data, 16, width, height)
    # CRC covers the chunk type and the 13 data bytes
    struct.pack_into(">I", data, 29, zlib.crc32(bytes(data[12:29])) & 0xFFFFFFFF)
    return bytes(data)
