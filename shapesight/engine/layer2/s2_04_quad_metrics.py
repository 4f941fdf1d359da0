"""S2.04 — Quadrilateral Metrics.

Only for 4-vertex outlines: side ratio (longest / shortest) and the mean
absolute deviation of the corner angles from 90°. Square: 1.0 and 0°.
"""

from __future__ import annotations

import numpy as np

from shapesight.engine.context import DetectionContext
from shapesight.engine.registry import Layer, stage
from shapesight.utils.geometry import edge_lengths, vertex_angles


@stage(
    id="S2.04",
    layer=Layer.FEATURES,
    dependencies=["S1.04"],
    description="Side ratio and right-angle deviation of quadrilaterals",
)
def quad_metrics(ctx: DetectionContext) -> None:
    for comp in ctx.components:
        if len(comp.approx) != 4:
            continue

        sides = edge_lengths(comp.approx)
        # Angle at vertex i+1 between edge i and edge i+1
        angles = np.roll(vertex_angles(comp.approx), -1)
        shortest = float(np.min(sides))

        comp.features["quad_sides"] = [float(s) for s in sides]
        comp.features["quad_angles"] = [float(a) for a in angles]
        comp.features["side_ratio"] = float(np.max(sides)) / shortest if shortest > 0 else float("inf")
        comp.features["angle_deviation"] = float(np.mean(np.abs(angles - 90.0)))
