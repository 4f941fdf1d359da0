"""Built-in sample gallery — synthetic black-on-white rasters.

Each sample is drawn with skimage.draw so pixel coverage is exact and
reproducible. Used by the API's sample endpoints, the CLI and the tests.
"""

from __future__ import annotations

import math
from typing import Callable

import numpy as np
from numpy.typing import NDArray
from skimage.draw import disk, polygon, rectangle

from shapesight.engine.context import Raster

WHITE = (255, 255, 255, 255)
BLACK = (0, 0, 0, 255)


def blank_canvas(width: int, height: int) -> NDArray[np.uint8]:
    """Opaque white HxWx4 canvas."""
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[...] = WHITE
    return canvas


def fill_polygon(canvas: NDArray[np.uint8], points: NDArray[np.float64], color=BLACK) -> None:
    """Fill the polygon given as Nx2 (x, y) vertices."""
    rr, cc = polygon(points[:, 1], points[:, 0], shape=canvas.shape[:2])
    canvas[rr, cc] = color


def fill_disk(canvas: NDArray[np.uint8], center: tuple[float, float], radius: float, color=BLACK) -> None:
    cx, cy = center
    rr, cc = disk((cy, cx), radius, shape=canvas.shape[:2])
    canvas[rr, cc] = color


def fill_rect(canvas: NDArray[np.uint8], x: int, y: int, width: int, height: int, color=BLACK) -> None:
    rr, cc = rectangle(start=(y, x), extent=(height, width), shape=canvas.shape[:2])
    canvas[rr, cc] = color


def regular_polygon(
    cx: float,
    cy: float,
    radius: float,
    sides: int,
    rotation_deg: float = -90.0,
) -> NDArray[np.float64]:
    """Vertices of a regular polygon; the default rotation puts a vertex on top."""
    angles = np.radians(rotation_deg) + 2 * math.pi * np.arange(sides) / sides
    return np.column_stack([cx + radius * np.cos(angles), cy + radius * np.sin(angles)])


def star_polygon(
    cx: float,
    cy: float,
    outer: float,
    inner: float,
    points: int = 5,
    rotation_deg: float = -90.0,
) -> NDArray[np.float64]:
    """Vertices of a star alternating between the outer and inner radius."""
    n = 2 * points
    angles = np.radians(rotation_deg) + 2 * math.pi * np.arange(n) / n
    radii = np.where(np.arange(n) % 2 == 0, outer, inner)
    return np.column_stack([cx + radii * np.cos(angles), cy + radii * np.sin(angles)])


def _circle() -> Raster:
    canvas = blank_canvas(150, 150)
    fill_disk(canvas, (75, 75), 50)
    return Raster.from_array(canvas)


def _square() -> Raster:
    canvas = blank_canvas(160, 160)
    fill_rect(canvas, 30, 30, 100, 100)
    return Raster.from_array(canvas)


def _rectangle() -> Raster:
    canvas = blank_canvas(200, 140)
    fill_rect(canvas, 30, 35, 140, 70)
    return Raster.from_array(canvas)


def _triangle() -> Raster:
    canvas = blank_canvas(160, 160)
    fill_polygon(canvas, regular_polygon(80, 90, 60, 3))
    return Raster.from_array(canvas)


def _pentagon() -> Raster:
    canvas = blank_canvas(160, 160)
    fill_polygon(canvas, regular_polygon(80, 85, 60, 5))
    return Raster.from_array(canvas)


def _star() -> Raster:
    canvas = blank_canvas(160, 160)
    fill_polygon(canvas, star_polygon(80, 85, 60, 24))
    return Raster.from_array(canvas)


def _pair() -> Raster:
    canvas = blank_canvas(260, 140)
    fill_disk(canvas, (70, 70), 40)
    fill_rect(canvas, 150, 30, 80, 80)
    return Raster.from_array(canvas)


_SAMPLES: dict[str, Callable[[], Raster]] = {
    "circle": _circle,
    "square": _square,
    "rectangle": _rectangle,
    "triangle": _triangle,
    "pentagon": _pentagon,
    "star": _star,
    "pair": _pair,
    "empty": Raster.empty,
}


def list_samples() -> list[str]:
    return list(_SAMPLES)


def get_sample(name: str) -> Raster:
    """Build a sample raster by name. Raises KeyError for unknown names."""
    try:
        builder = _SAMPLES[name]
    except KeyError:
        raise KeyError(f"Unknown sample {name!r}; available: {', '.join(_SAMPLES)}") from None
    return builder()
