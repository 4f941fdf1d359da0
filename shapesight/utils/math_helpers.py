"""Math helpers — rounding, variance. No engine imports."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties away from zero for positives.

    Python's round() is banker's rounding: round(4.5) == 4. Tolerances and
    vertex quotas are integer counts of pixels/vertices where 4.5 → 5 is wanted.
    """
    return int(math.floor(value + 0.5))


def round_to(value: float, places: int = 2) -> float:
    """Half-up rounding to a number of decimal places (0.875 → 0.88)."""
    scale = 10 ** places
    return round_half_up(value * scale) / scale


def population_variance(values: NDArray[np.float64]) -> float:
    """Mean squared deviation from the mean. 0.0 for an empty input."""
    if len(values) == 0:
        return 0.0
    return float(np.var(values))
