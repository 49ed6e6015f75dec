"""T2.01 — Moore-neighbor boundary trace.

Ordered clockwise outer boundary per blob. Blobs under the noise floor are
never classified, so they are not traced.
"""

from __future__ import annotations

import logging

from shapesight.engine.context import DetectionContext
from shapesight.engine.registry import Layer, transform
from shapesight.utils.morphology import moore_trace

logger = logging.getLogger(__name__)


@transform(
    id="T2.01",
    layer=Layer.CONTOUR,
    dependencies=["T1.01"],
    description="Trace each blob's outer boundary (Moore neighborhood)",
)
def boundary_trace(ctx: DetectionContext) -> None:
    min_area = ctx.config.min_area
    for blob in ctx.blobs:
        if blob.area < min_area:
            continue
        members = frozenset(blob.indices.tolist())
        blob.boundary, blob.closed = moore_trace(members, ctx.width, ctx.height)
        blob.features["perimeter"] = blob.perimeter
        blob.features["compactness"] = round(blob.compactness, 4)
        if not blob.closed:
            # Partial boundary still flows downstream
            logger.debug("Blob %d: open trace after %d points", blob.id, len(blob.boundary))
