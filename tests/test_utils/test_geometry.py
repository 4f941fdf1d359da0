"""Tests for leaf geometry helpers."""

from __future__ import annotations

import math

import numpy as np
import pytest
from scipy.spatial import ConvexHull
from shapely.geometry import Point, Polygon

from shapesight.utils.geometry import (
    as_points,
    cross,
    interior_angles,
    monotone_chain_hull,
    normalize_orientation,
    perpendicular_distance,
    polygon_area,
    polygon_perimeter,
    signed_area,
    vertex_angles,
    vertex_turns,
    winding_direction,
)

SQUARE = as_points([(0, 0), (10, 0), (10, 10), (0, 10)])
# Arrow-head: one dent at (5, 4)
DART = as_points([(0, 0), (5, 4), (10, 0), (5, 10)])


class TestArea:
    def test_square_area(self):
        assert polygon_area(SQUARE) == 100.0

    def test_invariant_to_start_vertex(self):
        for shift in range(len(DART)):
            assert polygon_area(np.roll(DART, shift, axis=0)) == pytest.approx(polygon_area(DART))

    def test_invariant_to_direction(self):
        assert signed_area(DART[::-1]) == pytest.approx(-signed_area(DART))
        assert polygon_area(DART[::-1]) == pytest.approx(polygon_area(DART))

    def test_degenerate_polygons_are_zero(self):
        assert polygon_area(as_points([(0, 0), (5, 5)])) == 0.0
        assert polygon_perimeter(as_points([(0, 0), (5, 5)])) == 0.0
        assert polygon_area(as_points([])) == 0.0

    def test_perimeter_closes_the_ring(self):
        assert polygon_perimeter(SQUARE) == 40.0


class TestOrientation:
    def test_winding_flips_with_reversal(self):
        assert winding_direction(SQUARE) == 1
        assert winding_direction(SQUARE[::-1]) == -1

    def test_normalize_makes_area_positive(self):
        flipped = normalize_orientation(SQUARE[::-1])
        assert signed_area(flipped) > 0

    def test_concave_vertex_is_the_only_negative_turn(self):
        poly = normalize_orientation(DART)
        turns = vertex_turns(poly)
        negatives = [tuple(p) for p, t in zip(poly, turns) if t < 0]
        assert negatives == [(5.0, 4.0)]

    def test_interior_angles_reflex_at_dent(self):
        poly = normalize_orientation(DART)
        angles = interior_angles(poly)
        # Interior angles of a simple quadrilateral sum to 360
        assert float(np.sum(angles)) == pytest.approx(360.0)
        dent = [a for p, a in zip(poly, angles) if tuple(p) == (5.0, 4.0)][0]
        assert dent > 180.0


class TestDistancesAndAngles:
    def test_perpendicular_distance(self):
        a = np.array([0.0, 0.0])
        b = np.array([10.0, 0.0])
        assert perpendicular_distance(a, b, np.array([3.0, 4.0])) == pytest.approx(4.0)

    def test_zero_length_segment_falls_back_to_point_distance(self):
        a = np.array([1.0, 1.0])
        assert perpendicular_distance(a, a, np.array([4.0, 5.0])) == pytest.approx(5.0)

    def test_square_corners_are_right_angles(self):
        assert np.allclose(vertex_angles(SQUARE), 90.0)

    def test_zero_length_edge_does_not_produce_nan(self):
        poly = as_points([(0, 0), (0, 0), (10, 0), (10, 10)])
        angles = vertex_angles(poly)
        assert not np.any(np.isnan(angles))

    def test_cross_sign(self):
        o, a, b = np.array([0.0, 0.0]), np.array([1.0, 0.0]), np.array([1.0, 1.0])
        assert cross(o, a, b) > 0
        assert cross(o, b, a) < 0


class TestMonotoneChainHull:
    def test_small_inputs_unchanged(self):
        pts = as_points([(3, 4), (1, 2)])
        assert np.array_equal(monotone_chain_hull(pts), pts)

    def test_collinear_and_interior_points_excluded(self):
        pts = as_points([(0, 0), (5, 0), (10, 0), (10, 10), (0, 10), (5, 5), (0, 5)])
        hull = monotone_chain_hull(pts)
        assert {tuple(p) for p in hull} == {(0, 0), (10, 0), (10, 10), (0, 10)}
        assert len(hull) == 4

    def test_matches_scipy_area(self):
        rng = np.random.default_rng(7)
        pts = rng.integers(0, 200, size=(300, 2)).astype(np.float64)
        hull = monotone_chain_hull(pts)
        assert polygon_area(hull) == pytest.approx(ConvexHull(pts).volume)

    def test_contains_every_input_point(self):
        rng = np.random.default_rng(11)
        pts = rng.normal(100, 30, size=(250, 2))
        hull = Polygon(monotone_chain_hull(pts)).buffer(1e-9)
        assert all(hull.covers(Point(p)) for p in pts)

    def test_is_strictly_convex(self):
        rng = np.random.default_rng(3)
        pts = rng.integers(0, 50, size=(200, 2)).astype(np.float64)
        hull = monotone_chain_hull(pts)
        n = len(hull)
        turns = [cross(hull[i], hull[(i + 1) % n], hull[(i + 2) % n]) for i in range(n)]
        assert all(t > 0 for t in turns) or all(t < 0 for t in turns)

    def test_circle_points_all_on_hull(self):
        theta = np.linspace(0, 2 * math.pi, 36, endpoint=False)
        pts = np.column_stack([np.cos(theta), np.sin(theta)]) * 20
        assert len(monotone_chain_hull(pts)) == 36
