"""Contour simplification — Ramer-Douglas-Peucker on open and closed outlines."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from shapesight.utils.math_helpers import round_half_up


def simplification_epsilon(
    bbox_width: float,
    bbox_height: float,
    scale: float = 0.03,
    floor: float = 2.0,
) -> float:
    """Tolerance that grows with the object: max(floor, round(min(w, h) * scale))."""
    return float(max(floor, round_half_up(min(bbox_width, bbox_height) * scale)))


def _segment_distances(points: NDArray[np.float64], start: int, end: int) -> NDArray[np.float64]:
    """Perpendicular distance of points[start+1:end] to the line start→end."""
    a = points[start]
    b = points[end]
    inner = points[start + 1 : end]
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    den = float(np.hypot(dx, dy))
    if den == 0:
        # Degenerate reference segment: distance to the shared endpoint
        return np.hypot(inner[:, 0] - a[0], inner[:, 1] - a[1])
    num = np.abs(dy * inner[:, 0] - dx * inner[:, 1] + b[0] * a[1] - b[1] * a[0])
    return num / den


def rdp_simplify(
    points: NDArray[np.float64],
    epsilon: float,
) -> NDArray[np.float64]:
    """Ramer-Douglas-Peucker line simplification of an open polyline.

    The endpoints are fixed. The interior point farthest from the line through
    the endpoints splits the polyline when its distance exceeds epsilon;
    otherwise the span collapses to its endpoints. Runs on an explicit stack so
    long outlines do not hit the recursion limit.
    """
    if len(points) < 3:
        return points.copy()

    keep = np.zeros(len(points), dtype=bool)
    keep[0] = True
    keep[-1] = True

    stack = [(0, len(points) - 1)]
    while stack:
        start, end = stack.pop()
        if end - start < 2:
            continue
        distances = _segment_distances(points, start, end)
        offset = int(np.argmax(distances))
        if distances[offset] > epsilon:
            split = start + 1 + offset
            keep[split] = True
            stack.append((split, end))
            stack.append((start, split))

    return points[keep]


def simplify_outline(
    points: NDArray[np.float64],
    epsilon: float,
) -> NDArray[np.float64]:
    """Simplify a closed outline (implicit closure) with rdp_simplify.

    The ring is closed by repeating the first point, simplified, and the
    repeated point dropped again. The closed ring's reference segment has zero
    length, so the first split lands on the point farthest from the start.
    """
    if len(points) < 3:
        return points.copy()
    ring = np.vstack([points, points[:1]])
    simplified = rdp_simplify(ring, epsilon)
    return simplified[:-1]
