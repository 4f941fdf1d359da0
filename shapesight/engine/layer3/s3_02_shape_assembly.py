"""S3.02 — Shape Assembly.

Freezes each classified component into a Shape record, in scan order.
Area is reported in whole pixels, rounded half up.
"""

from __future__ import annotations

from shapesight.engine.context import BoundingBox, DetectionContext, Shape
from shapesight.engine.registry import Layer, stage
from shapesight.utils.math_helpers import round_half_up


@stage(
    id="S3.02",
    layer=Layer.CLASSIFICATION,
    dependencies=["S3.01"],
    description="Build immutable Shape records",
)
def shape_assembly(ctx: DetectionContext) -> None:
    shapes: list[Shape] = []
    for comp in ctx.components:
        if "category" not in comp.features:
            continue
        x, y, w, h = comp.bbox
        shapes.append(
            Shape(
                category=comp.features["category"],
                confidence=comp.features["confidence"],
                bounding_box=BoundingBox(x=x, y=y, width=w, height=h),
                center=comp.center,
                area=float(round_half_up(comp.features.get("area", float(comp.pixel_count)))),
                vertices=tuple((float(px), float(py)) for px, py in comp.approx),
                rule=comp.features.get("rule", ""),
            )
        )
    ctx.shapes = shapes
