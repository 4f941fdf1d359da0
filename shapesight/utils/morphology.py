"""Binary-mask operations — component labeling, boundary pixels, outline tracing."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy.ndimage import binary_erosion
from skimage.measure import find_contours

# 8-connected neighbour offsets (dx, dy)
_NEIGHBORS_8 = [
    (-1, -1), (0, -1), (1, -1),
    (-1, 0), (1, 0),
    (-1, 1), (0, 1), (1, 1),
]

_FULL_3X3 = np.ones((3, 3), dtype=bool)


def label_components(mask: NDArray[np.bool_]) -> tuple[NDArray[np.int32], list[NDArray[np.int64]]]:
    """Label 8-connected foreground components with an explicit-stack flood fill.

    Pixels are scanned in index order (row-major); each unvisited foreground
    pixel seeds a new label. Returns the label image (0 = background) and,
    per label in order, the flat pixel indices ``y * width + x`` it covers.
    """
    height, width = mask.shape
    flat = mask.ravel()
    labels = np.zeros(height * width, dtype=np.int32)
    components: list[NDArray[np.int64]] = []
    current = 0

    for seed in np.flatnonzero(flat):
        seed = int(seed)
        if labels[seed]:
            continue
        current += 1
        labels[seed] = current
        stack = [seed]
        members: list[int] = []
        while stack:
            idx = stack.pop()
            members.append(idx)
            y, x = divmod(idx, width)
            for dx, dy in _NEIGHBORS_8:
                nx, ny = x + dx, y + dy
                if nx < 0 or ny < 0 or nx >= width or ny >= height:
                    continue
                ni = ny * width + nx
                if flat[ni] and not labels[ni]:
                    labels[ni] = current
                    stack.append(ni)
        components.append(np.array(members, dtype=np.int64))

    return labels.reshape(height, width), components


def component_mask(
    pixel_indices: NDArray[np.int64],
    width: int,
    bbox: tuple[int, int, int, int],
) -> NDArray[np.bool_]:
    """Boolean mask of one component cropped to its (x, y, w, h) bounding box."""
    x0, y0, bw, bh = bbox
    ys, xs = np.divmod(pixel_indices, width)
    local = np.zeros((bh, bw), dtype=bool)
    local[ys - y0, xs - x0] = True
    return local


def boundary_mask(mask: NDArray[np.bool_]) -> NDArray[np.bool_]:
    """Pixels with at least one 8-neighbour outside the mask or the array.

    Erosion with a full 3x3 element and a zero border keeps exactly the pixels
    whose whole neighbourhood is inside, so the rest are boundary.
    """
    interior = binary_erosion(mask, structure=_FULL_3X3, border_value=0)
    return mask & ~interior



def outer_contour(mask: NDArray[np.bool_]) -> NDArray[np.float64]:
    """Outer outline of a single component as Nx2 (x, y), implicit closure.

    Marching squares at level 0.5 over the mask padded with one background
    pixel, so components touching the crop edge still close. Points lie on
    the half-pixel edges between foreground and background; foreground is
    8-connected. The longest contour is the outer one. The ring is rotated to
    start at its topmost-leftmost point, which is always a hull extreme.
    """
    if not mask.any():
        return np.empty((0, 2))

    padded = np.pad(mask, 1).astype(float)
    contours = find_contours(padded, 0.5, fully_connected="high", positive_orientation="high")
    rc = max(contours, key=len)
    if len(rc) > 1 and np.array_equal(rc[0], rc[-1]):
        rc = rc[:-1]

    # (row, col) → (x, y), undoing the padding
    pts = np.column_stack([rc[:, 1] - 1, rc[:, 0] - 1])
    start = int(np.lexsort((pts[:, 0], pts[:, 1]))[0])
    return np.roll(pts, -start, axis=0)
