"""S2.03 — Concavity & Vertex Angles. ★★

The simplified outline is first reoriented to positive signed area, so the
sign of each vertex's turn is comparable across shapes: a negative
cross(incoming, outgoing) marks a concave vertex. Interior angles are
reflex at concave vertices; their population variance separates spiky
outlines (stars) from regular polygons.
"""

from __future__ import annotations

import numpy as np

from shapesight.engine.context import DetectionContext
from shapesight.engine.registry import Layer, stage
from shapesight.utils.geometry import interior_angles, normalize_orientation, vertex_turns
from shapesight.utils.math_helpers import population_variance


@stage(
    id="S2.03",
    layer=Layer.FEATURES,
    dependencies=["S1.04"],
    description="Count concave vertices and compute angle statistics",
)
def concavity(ctx: DetectionContext) -> None:
    for comp in ctx.components:
        poly = normalize_orientation(comp.approx)
        n = len(poly)
        if n < 3:
            comp.features["concave_count"] = 0
            comp.features["concave_ratio"] = 0.0
            comp.features["interior_angles"] = []
            comp.features["angle_mean"] = 0.0
            comp.features["angle_variance"] = 0.0
            continue

        concave = int(np.count_nonzero(vertex_turns(poly) < 0))
        angles = interior_angles(poly)

        comp.features["concave_count"] = concave
        comp.features["concave_ratio"] = concave / n
        comp.features["interior_angles"] = [float(a) for a in angles]
        comp.features["angle_mean"] = float(np.mean(angles))
        comp.features["angle_variance"] = population_variance(angles)
