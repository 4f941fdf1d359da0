"""S2.02 — Solidity.

Solidity = simplified-outline area / hull area. Convex shapes: ~1.0,
five-pointed star: ~0.5.
"""

from __future__ import annotations

from shapesight.engine.context import DetectionContext
from shapesight.engine.registry import Layer, stage
from shapesight.utils.geometry import polygon_area


@stage(
    id="S2.02",
    layer=Layer.FEATURES,
    dependencies=["S1.04", "S2.01"],
    description="Compute solidity (outline area / hull area)",
)
def solidity(ctx: DetectionContext) -> None:
    for comp in ctx.components:
        area = comp.features.get("area", 0.0)
        hull_area = comp.features.get("hull_area", 0.0)
        approx_area = polygon_area(comp.approx) or area

        comp.features["approx_area"] = approx_area
        if hull_area > 0:
            comp.features["solidity"] = approx_area / hull_area
        else:
            comp.features["solidity"] = 1.0
