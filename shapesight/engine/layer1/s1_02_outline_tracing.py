"""S1.02 — Outer Outline Tracing.

Marching-squares outline of each component, giving the boundary as an
ordered closed polyline on half-pixel edges. Unlike the hull it keeps
concavities. Skipped when the simplifier reduces the hull instead.
"""

from __future__ import annotations

from shapesight.engine.context import DetectionContext
from shapesight.engine.registry import Layer, stage
from shapesight.utils.morphology import component_mask, outer_contour


@stage(
    id="S1.02",
    layer=Layer.OUTLINE,
    dependencies=["S1.01"],
    description="Trace the ordered outer contour of each component",
)
def outline_tracing(ctx: DetectionContext) -> None:
    for comp in ctx.components:
        x0, y0, _, _ = comp.bbox
        local = component_mask(comp.pixel_indices, ctx.width, comp.bbox)
        pts = outer_contour(local)
        pts[:, 0] += x0
        pts[:, 1] += y0
        comp.contour = pts
        comp.features["contour_points"] = len(pts)
