"""T1.01 — Connected components.

BFS flood fill over 8-connected foreground pixels. One blob per maximal
region, ordered by the row-major position of its first pixel.
"""

from __future__ import annotations

from shapesight.engine.context import BlobData, DetectionContext
from shapesight.engine.registry import Layer, transform
from shapesight.utils.morphology import connected_components


@transform(
    id="T1.01",
    layer=Layer.SEGMENTATION,
    dependencies=["T0.02"],
    description="Extract 8-connected foreground blobs",
)
def extract_blobs(ctx: DetectionContext) -> None:
    regions = connected_components(ctx.mask, ctx.width, ctx.height)
    ctx.blobs = [
        BlobData(id=i, indices=indices, image_width=ctx.width)
        for i, indices in enumerate(regions)
    ]
