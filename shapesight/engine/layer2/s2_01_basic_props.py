"""S2.01 — Basic Geometric Properties. ★★★

Center and aspect from the raw-pixel bounding box; perimeter, area and
circularity from the convex hull. C = 4π·area/perimeter², circle = 1.0.
Cheap, always compute.
"""

from __future__ import annotations

import math

from shapesight.engine.context import DetectionContext
from shapesight.engine.registry import Layer, stage
from shapesight.utils.geometry import polygon_area, polygon_perimeter


@stage(
    id="S2.01",
    layer=Layer.FEATURES,
    dependencies=["S1.03"],
    description="Compute center, aspect, perimeter, area and circularity",
)
def basic_props(ctx: DetectionContext) -> None:
    for comp in ctx.components:
        cx, cy = comp.center
        comp.features["center_x"] = cx
        comp.features["center_y"] = cy
        comp.features["bbox_width"] = comp.width
        comp.features["bbox_height"] = comp.height
        comp.features["aspect_ratio"] = comp.width / comp.height if comp.height else float("inf")

        perimeter = polygon_perimeter(comp.hull)
        hull_area = polygon_area(comp.hull)
        # Degenerate hull (line-like component): fall back to the pixel count
        area = hull_area or float(comp.pixel_count)

        comp.features["perimeter"] = perimeter
        comp.features["area"] = area
        comp.features["hull_area"] = hull_area or area
        if perimeter > 0:
            comp.features["circularity"] = 4 * math.pi * area / (perimeter**2)
        else:
            comp.features["circularity"] = 0.0
