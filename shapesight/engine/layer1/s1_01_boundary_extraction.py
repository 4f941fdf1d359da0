"""S1.01 — Boundary Extraction.

A pixel is on the boundary iff one of its 8 neighbours is outside the raster
or outside its component. Components with too few boundary points are dropped.
"""

from __future__ import annotations

import logging

import numpy as np

from shapesight.engine.context import DetectionContext
from shapesight.engine.registry import Layer, stage
from shapesight.utils.morphology import boundary_mask, component_mask

logger = logging.getLogger(__name__)


@stage(
    id="S1.01",
    layer=Layer.OUTLINE,
    dependencies=["S0.03"],
    description="Reduce each component to its edge pixels",
)
def boundary_extraction(ctx: DetectionContext) -> None:
    min_points = ctx.config.min_boundary_points
    kept = []
    for comp in ctx.components:
        x0, y0, _, _ = comp.bbox
        # Cropping to the bbox keeps raster edges and foreign pixels outside the mask
        local = component_mask(comp.pixel_indices, ctx.width, comp.bbox)
        rows, cols = np.nonzero(boundary_mask(local))
        comp.boundary = np.column_stack([cols + x0, rows + y0]).astype(np.float64)
        comp.features["boundary_points"] = len(comp.boundary)

        if len(comp.boundary) < min_points:
            ctx.discarded[comp.label] = "too_few_boundary_points"
            logger.debug(
                "Component %d dropped: %d boundary points < %d",
                comp.label,
                len(comp.boundary),
                min_points,
            )
            continue
        kept.append(comp)

    ctx.components = kept
