"""S0.02 — Binarization.

Foreground iff luminance < T. Finds dark shapes on a light background;
T is a fixed parameter, not derived from the histogram.
"""

from __future__ import annotations

from shapesight.engine.context import DetectionContext
from shapesight.engine.registry import Layer, stage
from shapesight.utils.imaging import threshold_dark


@stage(
    id="S0.02",
    layer=Layer.SEGMENTATION,
    dependencies=["S0.01"],
    description="Threshold luminance into a foreground mask",
)
def binarize(ctx: DetectionContext) -> None:
    if ctx.gray is None:
        raise ValueError("grayscale buffer missing")
    ctx.mask = threshold_dark(ctx.gray, ctx.config.threshold)
