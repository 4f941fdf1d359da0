"""S0.03 — Connected Component Labeling. ★★

8-connected flood fill with an explicit stack, scanning in index order.
Components below the minimum pixel count are noise and are dropped here.
The raw-pixel bounding box is recorded for every survivor.
"""

from __future__ import annotations

import logging

import numpy as np

from shapesight.engine.context import ComponentData, DetectionContext
from shapesight.engine.registry import Layer, stage
from shapesight.utils.morphology import label_components

logger = logging.getLogger(__name__)


@stage(
    id="S0.03",
    layer=Layer.SEGMENTATION,
    dependencies=["S0.02"],
    description="Group foreground pixels into 8-connected components",
)
def component_labeling(ctx: DetectionContext) -> None:
    if ctx.mask is None:
        raise ValueError("foreground mask missing")

    labels, pixel_sets = label_components(ctx.mask)
    ctx.labels = labels
    min_pixels = ctx.config.min_component_pixels
    width = ctx.width

    components: list[ComponentData] = []
    for label, pixels in enumerate(pixel_sets, start=1):
        if len(pixels) < min_pixels:
            ctx.discarded[label] = "too_few_pixels"
            logger.debug("Component %d dropped: %d px < %d", label, len(pixels), min_pixels)
            continue
        ys, xs = np.divmod(pixels, width)
        min_x, max_x = int(xs.min()), int(xs.max())
        min_y, max_y = int(ys.min()), int(ys.max())
        comp = ComponentData(
            label=label,
            pixel_indices=pixels,
            bbox=(min_x, min_y, max_x - min_x + 1, max_y - min_y + 1),
        )
        comp.features["pixel_count"] = len(pixels)
        components.append(comp)

    ctx.components = components
    logger.debug(
        "Labeled %d components, %d kept (>= %d px)",
        len(pixel_sets),
        len(components),
        min_pixels,
    )
