"""S1.03 — Convex Hull. ★★

Andrew's monotone chain over the boundary points. Collinear points are
excluded, so the hull is minimal. Hull perimeter and area feed circularity.
"""

from __future__ import annotations

from shapesight.engine.context import DetectionContext
from shapesight.engine.registry import Layer, stage
from shapesight.utils.geometry import monotone_chain_hull


@stage(
    id="S1.03",
    layer=Layer.OUTLINE,
    dependencies=["S1.01"],
    description="Compute the convex hull of the boundary points",
)
def convex_hull(ctx: DetectionContext) -> None:
    for comp in ctx.components:
        comp.hull = monotone_chain_hull(comp.boundary)
        comp.features["hull_vertices"] = len(comp.hull)
