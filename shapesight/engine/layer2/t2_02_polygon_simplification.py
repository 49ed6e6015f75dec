"""T2.02 — Polygon simplification.

RDP with epsilon = rdp_epsilon_pct × traced perimeter. Closed traces then
lose their wrap-around vertex so the vertex count is that of the polygon.
"""

from __future__ import annotations

from shapesight.engine.context import DetectionContext
from shapesight.engine.registry import Layer, transform
from shapesight.utils.contour import close_polygon, rdp_simplify


@transform(
    id="T2.02",
    layer=Layer.CONTOUR,
    dependencies=["T2.01"],
    description="Reduce traced boundaries to polygon vertices (RDP)",
)
def polygon_simplification(ctx: DetectionContext) -> None:
    pct = ctx.config.rdp_epsilon_pct
    for blob in ctx.blobs:
        if len(blob.boundary) == 0:
            continue
        blob.epsilon = blob.perimeter * pct
        vertices = rdp_simplify(blob.boundary, blob.epsilon)
        if blob.closed:
            vertices = close_polygon(vertices, blob.epsilon)
        blob.vertices = vertices
        blob.features["vertex_count"] = blob.vertex_count
