"""Shared test fixtures."""

from __future__ import annotations

import numpy as np
import pytest

from shapesight.engine.context import Raster
from shapesight.engine.pipeline import register_stages
from shapesight.samples import blank_canvas, fill_rect, get_sample

register_stages()


def raster_from_mask(mask: np.ndarray) -> Raster:
    """Black where mask is True, white elsewhere."""
    canvas = blank_canvas(mask.shape[1], mask.shape[0])
    canvas[mask] = (0, 0, 0, 255)
    return Raster.from_array(canvas)


def square_raster(side: int = 100, margin: int = 30) -> Raster:
    size = side + 2 * margin
    canvas = blank_canvas(size, size)
    fill_rect(canvas, margin, margin, side, side)
    return Raster.from_array(canvas)


# Pixel-exact expectations for the "square" sample (x, y in 30..129)
SQUARE_CORNERS = {(30.0, 30.0), (129.0, 30.0), (129.0, 129.0), (30.0, 129.0)}


def near_corners(points, corners, tol: float = 1.0) -> bool:
    """One point per corner, each within tol of it (outlines sit on half-pixel edges)."""
    points = np.asarray(points, dtype=float).reshape(-1, 2)
    if len(points) != len(corners):
        return False
    return all(np.hypot(*(points - c).T).min() <= tol for c in corners)


@pytest.fixture
def circle_raster() -> Raster:
    return get_sample("circle")


@pytest.fixture
def square_sample() -> Raster:
    return get_sample("square")


@pytest.fixture
def rectangle_raster() -> Raster:
    return get_sample("rectangle")


@pytest.fixture
def triangle_raster() -> Raster:
    return get_sample("triangle")


@pytest.fixture
def pentagon_raster() -> Raster:
    return get_sample("pentagon")


@pytest.fixture
def star_raster() -> Raster:
    return get_sample("star")


@pytest.fixture
def pair_raster() -> Raster:
    return get_sample("pair")


@pytest.fixture
def empty_raster() -> Raster:
    return Raster.empty()
