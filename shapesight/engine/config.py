"""Detection configuration — the tunable constants of the pipeline."""

from __future__ import annotations

from dataclasses import dataclass, replace

OUTLINE_SOURCES = ("contour", "hull")


@dataclass(frozen=True)
class DetectionConfig:
    """Parameters that, together with the raster, fully determine the output."""

    # Binarization: foreground iff luminance < threshold (dark shapes on light)
    threshold: int = 128

    # Noise filter: components smaller than this are dropped
    min_component_pixels: int = 50

    # Components whose boundary has fewer points are too thin to classify
    min_boundary_points: int = 6

    # Douglas-Peucker epsilon = max(floor, round(min(bbox_w, bbox_h) * scale))
    simplify_scale: float = 0.03
    simplify_min_epsilon: float = 2.0

    # What the simplifier reduces: the traced outer contour, or the convex hull.
    # A simplified hull is always convex, so "hull" cannot produce stars.
    outline_source: str = "contour"

    def __post_init__(self) -> None:
        if self.outline_source not in OUTLINE_SOURCES:
            raise ValueError(
                f"outline_source must be one of {OUTLINE_SOURCES}, got {self.outline_source!r}"
            )
        if not 0 <= self.threshold <= 256:
            raise ValueError(f"threshold must be within 0-256, got {self.threshold}")

    def with_overrides(self, **overrides) -> DetectionConfig:
        """Copy with the given fields replaced; None values are ignored."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)
