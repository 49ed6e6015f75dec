"""T0.02 — Otsu binarization.

Global threshold maximizing between-class variance; dark pixels are foreground.
"""

from __future__ import annotations

import logging

from shapesight.engine.context import DetectionContext
from shapesight.engine.registry import Layer, transform
from shapesight.utils.threshold import binarize, otsu_threshold

logger = logging.getLogger(__name__)


@transform(
    id="T0.02",
    layer=Layer.PREPROCESSING,
    dependencies=["T0.01"],
    description="Otsu threshold and dark-on-light foreground mask",
)
def otsu_binarization(ctx: DetectionContext) -> None:
    ctx.threshold = otsu_threshold(ctx.gray)
    ctx.mask = binarize(ctx.gray, ctx.threshold)
    logger.debug(
        "Otsu threshold %d: %d foreground pixels of %d",
        ctx.threshold,
        int(ctx.mask.sum()),
        ctx.pixel_count,
    )
