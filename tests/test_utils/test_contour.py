"""Tests for Douglas-Peucker simplification."""

from __future__ import annotations

import numpy as np
import pytest

from shapesight.utils.contour import rdp_simplify, simplification_epsilon, simplify_outline
from shapesight.utils.geometry import as_points, perpendicular_distance


class TestEpsilon:
    def test_floor_applies_to_small_objects(self):
        assert simplification_epsilon(20, 30) == 2.0

    def test_scales_with_the_smaller_side(self):
        assert simplification_epsilon(100, 300) == 3.0

    def test_rounds_half_up(self):
        # 150 * 0.03 = 4.5
        assert simplification_epsilon(150, 150) == 5.0

    def test_custom_scale_and_floor(self):
        assert simplification_epsilon(100, 100, scale=0.1, floor=1) == 10.0


class TestRdpSimplify:
    def test_fewer_than_three_points_unchanged(self):
        pts = as_points([(0, 0), (4, 4)])
        assert np.array_equal(rdp_simplify(pts, 1.0), pts)

    def test_collinear_collapses_to_endpoints(self):
        pts = as_points([(x, 0) for x in range(10)])
        assert rdp_simplify(pts, 0.5).tolist() == [[0.0, 0.0], [9.0, 0.0]]

    def test_zero_tolerance_keeps_every_bend(self):
        pts = as_points([(0, 0), (1, 2), (2, 0), (3, 3), (4, 1), (6, 5)])
        assert np.array_equal(rdp_simplify(pts, 0.0), pts)

    def test_spike_survives_small_noise_does_not(self):
        pts = as_points([(0, 0), (2, 4.3), (4, 8), (6, 3.8), (8, 0)])
        assert rdp_simplify(pts, 1.0).tolist() == [[0, 0], [4, 8], [8, 0]]

    def test_dropped_points_within_tolerance_of_their_span(self):
        rng = np.random.default_rng(5)
        xs = np.arange(200, dtype=np.float64)
        pts = np.column_stack([xs, 30 * np.sin(xs / 15) + rng.normal(0, 1, 200)])
        eps = 2.5
        simplified = rdp_simplify(pts, eps)
        kept = [int(np.flatnonzero((pts == p).all(axis=1))[0]) for p in simplified]
        for left, right in zip(kept, kept[1:]):
            for i in range(left + 1, right):
                assert perpendicular_distance(pts[left], pts[right], pts[i]) <= eps

    def test_degenerate_span_uses_point_distance(self):
        # Closed path: first and last coincide, the farthest point splits
        pts = as_points([(0, 0), (1, 1), (8, 0), (1, -1), (0, 0)])
        assert rdp_simplify(pts, 0.5).tolist() == [[0, 0], [1, 1], [8, 0], [1, -1], [0, 0]]

    def test_long_outline_does_not_recurse(self):
        theta = np.linspace(0, 40 * np.pi, 20000)
        pts = np.column_stack([theta * np.cos(theta), theta * np.sin(theta)])
        assert len(rdp_simplify(pts, 0.01)) > 100


class TestSimplifyOutline:
    def test_square_ring_reduces_to_corners(self):
        top = [(x, 0) for x in range(0, 20)]
        right = [(19, y) for y in range(1, 20)]
        bottom = [(x, 19) for x in range(18, -1, -1)]
        left = [(0, y) for y in range(18, 0, -1)]
        ring = as_points(top + right + bottom + left)
        result = simplify_outline(ring, 2.0)
        assert result.tolist() == [[0, 0], [19, 0], [19, 19], [0, 19]]

    def test_short_outline_unchanged(self):
        pts = as_points([(0, 0), (3, 0)])
        assert np.array_equal(simplify_outline(pts, 2.0), pts)

    @pytest.mark.parametrize("eps", [0.5, 2.0, 5.0])
    def test_first_point_always_kept(self, eps):
        theta = np.linspace(0, 2 * np.pi, 90, endpoint=False)
        ring = np.column_stack([50 + 40 * np.cos(theta), 50 + 40 * np.sin(theta)])
        result = simplify_outline(ring, eps)
        assert np.array_equal(result[0], ring[0])
        assert len(result) >= 3
