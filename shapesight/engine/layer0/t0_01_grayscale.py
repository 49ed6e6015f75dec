"""T0.01 — Grayscale reduction.

gray = 0.299·R + 0.587·G + 0.114·B (BT.601 luma), alpha ignored.
"""

from __future__ import annotations

from shapesight.engine.context import DetectionContext
from shapesight.engine.registry import Layer, transform
from shapesight.utils.imaging import to_grayscale


@transform(
    id="T0.01",
    layer=Layer.PREPROCESSING,
    description="Reduce RGBA pixels to one luma byte per pixel",
)
def grayscale(ctx: DetectionContext) -> None:
    ctx.gray = to_grayscale(ctx.pixels)
