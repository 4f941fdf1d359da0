"""DetectionContext — the single mutable state object flowing through all stages.

Per-component results → ComponentData.features
Whole-raster results → DetectionContext.* (gray, mask, labels, shapes)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np
from numpy.typing import NDArray
from PIL import Image

from shapesight.engine.config import DetectionConfig
from shapesight.utils.imaging import to_rgba


@dataclass(frozen=True)
class Raster:
    """Input bitmap: height x width x 4 RGBA bytes."""

    width: int
    height: int
    pixels: NDArray[np.uint8] = field(repr=False)

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    @classmethod
    def empty(cls) -> Raster:
        return cls(0, 0, np.zeros((0, 0, 4), dtype=np.uint8))

    @classmethod
    def from_array(cls, array: NDArray) -> Raster:
        """Wrap a gray, RGB or RGBA numpy array."""
        arr = np.asarray(array)
        if arr.size == 0:
            height = arr.shape[0] if arr.ndim >= 1 else 0
            width = arr.shape[1] if arr.ndim >= 2 else 0
            return cls(width, height, np.zeros((height, width, 4), dtype=np.uint8))
        rgba = to_rgba(arr)
        return cls(rgba.shape[1], rgba.shape[0], rgba)

    @classmethod
    def from_buffer(cls, width: int, height: int, data: bytes) -> Raster:
        """Wrap a flat RGBA byte buffer (4 bytes per pixel, row-major)."""
        expected = width * height * 4
        if len(data) != expected:
            raise ValueError(f"Expected {expected} bytes for {width}x{height} RGBA, got {len(data)}")
        pixels = np.frombuffer(data, dtype=np.uint8).reshape(height, width, 4).copy()
        return cls(width, height, pixels)

    @classmethod
    def from_image(cls, image: Image.Image) -> Raster:
        return cls.from_array(np.array(image.convert("RGBA")))

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.pixels)


@dataclass(frozen=True)
class BoundingBox:
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class Shape:
    """One classified region. Immutable once created."""

    category: str
    confidence: float
    bounding_box: BoundingBox
    center: tuple[float, float]
    area: float
    vertices: tuple[tuple[float, float], ...]
    # Name of the classification rule that fired
    rule: str = ""


@dataclass
class ComponentData:
    """Data for a single 8-connected foreground component."""

    label: int
    # Flat pixel indices y * width + x, in flood-fill visit order
    pixel_indices: NDArray[np.int64] = field(default_factory=lambda: np.empty(0, dtype=np.int64))
    # Raw-pixel bounding box (x, y, width, height), inclusive extents
    bbox: tuple[int, int, int, int] = (0, 0, 0, 0)
    # Boundary pixels, Nx2 (x, y), scan order
    boundary: NDArray[np.float64] = field(default_factory=lambda: np.empty((0, 2)))
    # Ordered outer contour, Nx2, implicit closure
    contour: NDArray[np.float64] = field(default_factory=lambda: np.empty((0, 2)))
    # Convex hull of the boundary, Nx2
    hull: NDArray[np.float64] = field(default_factory=lambda: np.empty((0, 2)))
    # Douglas-Peucker simplified outline, Nx2
    approx: NDArray[np.float64] = field(default_factory=lambda: np.empty((0, 2)))
    # All computed features go here (keyed by feature name)
    features: dict[str, Any] = field(default_factory=dict)

    @property
    def pixel_count(self) -> int:
        return len(self.pixel_indices)

    @property
    def width(self) -> int:
        return self.bbox[2]

    @property
    def height(self) -> int:
        return self.bbox[3]

    @property
    def center(self) -> tuple[float, float]:
        x, y, w, h = self.bbox
        return (x + w / 2, y + h / 2)


@dataclass
class DetectionContext:
    """Shared state flowing through the entire pipeline."""

    raster: Raster = field(default_factory=Raster.empty)
    config: DetectionConfig = field(default_factory=DetectionConfig)

    # False when the raster has no pixels; no stage runs in that case
    input_ready: bool = True

    # --- Layer 0 ---
    gray: NDArray[np.uint8] | None = None
    mask: NDArray[np.bool_] | None = None
    # Label image, 0 = background; labels of filtered components remain
    labels: NDArray[np.int32] | None = None
    components: list[ComponentData] = field(default_factory=list)
    # Components dropped by a size filter: label -> reason
    discarded: dict[int, str] = field(default_factory=dict)

    # --- Output ---
    shapes: list[Shape] = field(default_factory=list)

    # --- Pipeline metadata ---
    completed_stages: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def width(self) -> int:
        return self.raster.width

    @property
    def height(self) -> int:
        return self.raster.height

    @property
    def num_components(self) -> int:
        return len(self.components)

    def get_component(self, label: int) -> ComponentData | None:
        for comp in self.components:
            if comp.label == label:
                return comp
        return None
