"""S1.04 — Douglas-Peucker Simplification. ★★

ε = max(2, round(min(bbox_w, bbox_h) · 0.03)), so a larger object tolerates
proportionally larger deviations. The vertex count of the result drives
classification.
"""

from __future__ import annotations

from shapesight.engine.context import DetectionContext
from shapesight.engine.registry import Layer, stage
from shapesight.utils.contour import simplification_epsilon, simplify_outline


@stage(
    id="S1.04",
    layer=Layer.OUTLINE,
    dependencies=["S1.02", "S1.03"],
    description="Reduce the outline to a small approximating polygon",
)
def simplification(ctx: DetectionContext) -> None:
    cfg = ctx.config
    for comp in ctx.components:
        eps = simplification_epsilon(
            comp.width,
            comp.height,
            scale=cfg.simplify_scale,
            floor=cfg.simplify_min_epsilon,
        )
        source = comp.hull if cfg.outline_source == "hull" else comp.contour
        comp.approx = simplify_outline(source, eps)
        comp.features["epsilon"] = eps
        comp.features["vertex_count"] = len(comp.approx)
