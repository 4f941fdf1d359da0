"""S0.01 — Grayscale Conversion.

Y = 0.299·R + 0.587·G + 0.114·B, clamped to 0-255. Alpha is ignored.
"""

from __future__ import annotations

from shapesight.engine.context import DetectionContext
from shapesight.engine.registry import Layer, stage
from shapesight.utils.imaging import luminance


@stage(
    id="S0.01",
    layer=Layer.SEGMENTATION,
    description="Convert RGBA raster to a luminance buffer",
)
def grayscale(ctx: DetectionContext) -> None:
    ctx.gray = luminance(ctx.raster.pixels)
