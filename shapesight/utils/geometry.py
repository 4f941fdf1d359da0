"""Leaf-node geometry helpers. No engine imports.

Polygons are Nx2 float arrays of (x, y) in pixel space with implicit closure
(edge from the last point back to the first). Polygons with fewer than three
points have zero area and zero perimeter.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def as_points(points) -> NDArray[np.float64]:
    """Coerce a sequence of (x, y) pairs to an Nx2 float64 array."""
    arr = np.asarray(points, dtype=np.float64)
    if arr.size == 0:
        return np.empty((0, 2))
    return arr.reshape(-1, 2)


def signed_area(points: NDArray[np.float64]) -> float:
    """Shoelace formula for signed area over the closed ring.

    Positive when the ring turns from +x towards +y. In image coordinates
    (y pointing down) that is clockwise on screen.
    """
    if len(points) < 3:
        return 0.0
    x = points[:, 0]
    y = points[:, 1]
    x_next = np.roll(x, -1)
    y_next = np.roll(y, -1)
    return float(0.5 * np.sum(x * y_next - x_next * y))


def polygon_area(points: NDArray[np.float64]) -> float:
    """Unsigned shoelace area. Invariant to start vertex and direction."""
    return abs(signed_area(points))


def polygon_perimeter(points: NDArray[np.float64]) -> float:
    """Sum of edge lengths around the closed polygon."""
    if len(points) < 3:
        return 0.0
    return float(np.sum(edge_lengths(points)))


def edge_lengths(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Length of edge i, from point i to point i+1 (wrapping)."""
    if len(points) == 0:
        return np.empty(0)
    diffs = np.roll(points, -1, axis=0) - points
    return np.sqrt(np.sum(diffs**2, axis=1))


def winding_direction(points: NDArray[np.float64]) -> int:
    """Return 1 for positive signed area, -1 for negative, 0 if degenerate."""
    sa = signed_area(points)
    if sa > 0:
        return 1
    elif sa < 0:
        return -1
    return 0


def normalize_orientation(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Reverse the vertex order if the signed area is negative."""
    if winding_direction(points) < 0:
        return points[::-1].copy()
    return points


def cross(o: NDArray[np.float64], a: NDArray[np.float64], b: NDArray[np.float64]) -> float:
    """Z component of (a - o) × (b - o)."""
    return float((a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0]))


def perpendicular_distance(
    a: NDArray[np.float64],
    b: NDArray[np.float64],
    p: NDArray[np.float64],
) -> float:
    """Distance from p to the infinite line through a and b.

    A zero-length reference segment falls back to the distance from p to a.
    """
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    den = float(np.hypot(dx, dy))
    if den == 0:
        return float(np.hypot(p[0] - a[0], p[1] - a[1]))
    num = abs(dy * p[0] - dx * p[1] + b[0] * a[1] - b[1] * a[0])
    return float(num / den)


def vertex_turns(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Cross product of incoming and outgoing edge vectors at each vertex."""
    if len(points) == 0:
        return np.empty(0)
    prev_pts = np.roll(points, 1, axis=0)
    next_pts = np.roll(points, -1, axis=0)
    incoming = points - prev_pts
    outgoing = next_pts - points
    return incoming[:, 0] * outgoing[:, 1] - incoming[:, 1] * outgoing[:, 0]


def vertex_angles(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Angle in degrees (0-180) between the two edges meeting at each vertex.

    A zero-length edge makes the magnitude product 1 instead of 0.
    """
    if len(points) == 0:
        return np.empty(0)
    prev_pts = np.roll(points, 1, axis=0)
    next_pts = np.roll(points, -1, axis=0)
    u = prev_pts - points
    w = next_pts - points
    dot = np.sum(u * w, axis=1)
    mag = np.hypot(u[:, 0], u[:, 1]) * np.hypot(w[:, 0], w[:, 1])
    mag = np.where(mag == 0, 1.0, mag)
    cos = np.clip(dot / mag, -1.0, 1.0)
    return np.degrees(np.arccos(cos))


def interior_angles(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Interior angle in degrees at each vertex, reflex at concave vertices.

    Expects a positively oriented polygon (see normalize_orientation).
    """
    angles = vertex_angles(points)
    turns = vertex_turns(points)
    return np.where(turns < 0, 360.0 - angles, angles)


def monotone_chain_hull(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Convex hull via Andrew's monotone chain, O(n log n).

    Points are sorted by x then y. A point is popped whenever the last three
    do not make a strict left turn, so collinear points are left out. Two or
    fewer input points come back unchanged.
    """
    if len(points) <= 2:
        return points.copy()

    order = np.lexsort((points[:, 1], points[:, 0]))
    pts = points[order]

    lower: list[NDArray[np.float64]] = []
    for p in pts:
        while len(lower) >= 2 and cross(lower[-2], lower[-1], p) <= 0:
            lower.pop()
        lower.append(p)

    upper: list[NDArray[np.float64]] = []
    for p in pts[::-1]:
        while len(upper) >= 2 and cross(upper[-2], upper[-1], p) <= 0:
            upper.pop()
        upper.append(p)

    hull = lower[:-1] + upper[:-1]
    return np.array(hull, dtype=np.float64).reshape(-1, 2)
