"""Tests for component labeling, boundary pixels and outline tracing."""

from __future__ import annotations

import numpy as np
import pytest
from scipy import ndimage
from skimage.draw import disk

from shapesight.utils.geometry import polygon_area
from shapesight.utils.morphology import (
    boundary_mask,
    component_mask,
    label_components,
    outer_contour,
)


def _block(height, width, y0, y1, x0, x1):
    mask = np.zeros((height, width), dtype=bool)
    mask[y0:y1, x0:x1] = True
    return mask


class TestLabelComponents:
    def test_empty_mask(self):
        labels, components = label_components(np.zeros((4, 5), dtype=bool))
        assert labels.shape == (4, 5)
        assert not labels.any()
        assert components == []

    def test_diagonal_pixels_are_connected(self):
        mask = np.zeros((3, 3), dtype=bool)
        mask[0, 0] = mask[1, 1] = mask[2, 2] = True
        _, components = label_components(mask)
        assert len(components) == 1
        assert sorted(components[0].tolist()) == [0, 4, 8]

    def test_labels_follow_scan_order(self):
        mask = np.zeros((6, 8), dtype=bool)
        mask[4:6, 0:2] = True  # lower left, found second
        mask[0:2, 6:8] = True  # upper right, found first
        labels, components = label_components(mask)
        assert labels[0, 6] == 1
        assert labels[4, 0] == 2
        assert len(components) == 2

    def test_partition_matches_scipy(self):
        rng = np.random.default_rng(42)
        mask = rng.random((40, 60)) < 0.35
        labels, components = label_components(mask)
        reference, count = ndimage.label(mask, structure=np.ones((3, 3), dtype=int))

        assert len(components) == count
        covered = np.concatenate(components)
        assert len(covered) == int(mask.sum())
        assert len(np.unique(covered)) == len(covered)
        for idx, members in enumerate(components, start=1):
            assert len(np.unique(reference.ravel()[members])) == 1
            assert np.all(labels.ravel()[members] == idx)


def test_component_mask_crops_to_bbox():
    mask = _block(10, 12, 3, 6, 4, 9)
    _, components = label_components(mask)
    local = component_mask(components[0], 12, (4, 3, 5, 3))
    assert local.shape == (3, 5)
    assert local.all()


class TestBoundaryMask:
    def test_solid_square_boundary_is_its_ring(self):
        mask = _block(9, 9, 2, 7, 2, 7)
        boundary = boundary_mask(mask)
        assert int(boundary.sum()) == 16
        assert not boundary[3:6, 3:6].any()

    def test_raster_edge_counts_as_outside(self):
        mask = np.ones((4, 4), dtype=bool)
        boundary = boundary_mask(mask)
        assert int(boundary.sum()) == 12
        assert not boundary[1:3, 1:3].any()

    def test_diagonal_gap_makes_boundary(self):
        mask = _block(7, 7, 0, 7, 0, 7)
        mask[2, 2] = False
        boundary = boundary_mask(mask)
        # The diagonal neighbours of the hole are boundary too
        assert boundary[1, 1] and boundary[3, 3] and boundary[1, 3] and boundary[3, 1]


class TestOuterContour:
    def test_empty_mask(self):
        assert outer_contour(np.zeros((3, 3), dtype=bool)).shape == (0, 2)

    def test_single_pixel_is_a_diamond(self):
        mask = np.zeros((3, 3), dtype=bool)
        mask[1, 2] = True
        contour = outer_contour(mask)
        assert len(contour) == 4
        assert polygon_area(contour) == pytest.approx(0.5)
        assert contour.mean(axis=0) == pytest.approx([2.0, 1.0])

    def test_block_outline_sits_on_half_pixel_edges(self):
        mask = _block(5, 5, 1, 4, 1, 4)
        contour = outer_contour(mask)
        # 3 crossings per side, corners cut by half a pixel
        assert len(contour) == 12
        assert polygon_area(contour) == pytest.approx(8.5)
        assert contour[0].tolist() == [1.0, 0.5]
        assert not np.array_equal(contour[0], contour[-1])

    def test_mask_touching_the_edge_still_closes(self):
        contour = outer_contour(np.ones((3, 3), dtype=bool))
        assert len(contour) == 12
        assert contour.min() == pytest.approx(-0.5)
        assert contour.max() == pytest.approx(2.5)

    def test_disk_contour_hugs_boundary_pixels(self):
        mask = np.zeros((60, 60), dtype=bool)
        mask[disk((30, 30), 20)] = True
        contour = outer_contour(mask)
        ys, xs = np.nonzero(boundary_mask(mask))
        centres = np.column_stack([xs, ys]).astype(float)
        dist = np.linalg.norm(contour[:, None, :] - centres[None, :, :], axis=2).min(axis=1)
        assert dist.max() <= 0.75
        assert polygon_area(contour) == pytest.approx(mask.sum(), rel=0.05)
