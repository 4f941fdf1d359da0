"""Rule-table shape classifier.

The table is ordered and first match wins. Each rule is a value with its own
condition and outcome, so it can be exercised on its own:

  1  circle        circularity > 0.90, |w-h| < 8% of min(w,h), solidity > 0.92
  2  triangle      3 vertices
  3  quad          4 vertices → square (near-right angles, even sides) or rectangle
  4  star_strict   ≥8 vertices, concave, low solidity/circularity, spread angles
  5  star_concave  ≥8 vertices with enough concave vertices
  6  pentagon      5-7 vertices, moderately round, solid
  7  circle_ish    round-ish with more than 6 vertices
  7b polygon       everything else
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Mapping

from shapesight.utils.math_helpers import round_half_up, round_to

CIRCLE = "circle"
TRIANGLE = "triangle"
SQUARE = "square"
RECTANGLE = "rectangle"
PENTAGON = "pentagon"
STAR = "star"
CIRCLE_ISH = "circle-ish"
POLYGON = "polygon"

CATEGORIES = (CIRCLE, TRIANGLE, SQUARE, RECTANGLE, PENTAGON, STAR, CIRCLE_ISH, POLYGON)

# Circle: isoperimetric ratio near 1, square-ish box, no dents
_CIRC_CIRCLE = 0.90
_CIRCLE_BOX_TOLERANCE = 0.08
_SOLIDITY_CIRCLE = 0.92
# Square: corners within 15° of right on average, sides within 20%
_SQUARE_ANGLE_DEVIATION = 15.0
_SQUARE_SIDE_RATIO = 1.2
# Strict star: dented, hollow, spiky
_STAR_MIN_VERTICES = 8
_STAR_CONCAVE_RATIO = 0.15
_STAR_MAX_SOLIDITY = 0.78
_STAR_MAX_CIRCULARITY = 0.72
_STAR_ANGLE_VARIANCE = 400.0
# Pentagon band: regular pentagon C ≈ 0.865
_PENTAGON_MIN_CIRC = 0.68
_PENTAGON_MAX_CIRC = 0.90
_PENTAGON_MIN_SOLIDITY = 0.8
# Round-ish fallback
_CIRCLE_ISH_MIN_CIRC = 0.65


@dataclass(frozen=True)
class ShapeFeatures:
    """The subset of component features the rule table reads."""

    vertex_count: int
    circularity: float
    solidity: float
    width: float
    height: float
    concave_count: int = 0
    concave_ratio: float = 0.0
    angle_variance: float = 0.0
    side_ratio: float | None = None
    angle_deviation: float | None = None

    @classmethod
    def from_features(cls, features: Mapping[str, Any]) -> ShapeFeatures:
        return cls(
            vertex_count=int(features.get("vertex_count", 0)),
            circularity=float(features.get("circularity", 0.0)),
            solidity=float(features.get("solidity", 1.0)),
            width=float(features.get("bbox_width", 0.0)),
            height=float(features.get("bbox_height", 0.0)),
            concave_count=int(features.get("concave_count", 0)),
            concave_ratio=float(features.get("concave_ratio", 0.0)),
            angle_variance=float(features.get("angle_variance", 0.0)),
            side_ratio=features.get("side_ratio"),
            angle_deviation=features.get("angle_deviation"),
        )


@dataclass(frozen=True)
class ClassificationRule:
    name: str
    condition: Callable[[ShapeFeatures], bool]
    # Returns (category, raw confidence); only called when condition holds
    outcome: Callable[[ShapeFeatures], tuple[str, float]]

    def matches(self, f: ShapeFeatures) -> bool:
        return self.condition(f)


def _is_circle(f: ShapeFeatures) -> bool:
    return (
        f.circularity > _CIRC_CIRCLE
        and abs(f.width - f.height) < min(f.width, f.height) * _CIRCLE_BOX_TOLERANCE
        and f.solidity > _SOLIDITY_CIRCLE
    )


def _quad_outcome(f: ShapeFeatures) -> tuple[str, float]:
    if (
        f.angle_deviation is not None
        and f.side_ratio is not None
        and f.angle_deviation < _SQUARE_ANGLE_DEVIATION
        and f.side_ratio < _SQUARE_SIDE_RATIO
    ):
        return SQUARE, 0.96
    return RECTANGLE, 0.88


def _is_strict_star(f: ShapeFeatures) -> bool:
    return (
        f.vertex_count >= _STAR_MIN_VERTICES
        and f.concave_ratio > _STAR_CONCAVE_RATIO
        and f.solidity < _STAR_MAX_SOLIDITY
        and f.circularity < _STAR_MAX_CIRCULARITY
        and f.angle_variance > _STAR_ANGLE_VARIANCE
    )


def _is_concave_star(f: ShapeFeatures) -> bool:
    if f.vertex_count < _STAR_MIN_VERTICES:
        return False
    quota = max(2, round_half_up(_STAR_CONCAVE_RATIO * f.vertex_count))
    return f.concave_count >= quota


def _is_pentagon(f: ShapeFeatures) -> bool:
    return (
        5 <= f.vertex_count <= 7
        and _PENTAGON_MIN_CIRC < f.circularity < _PENTAGON_MAX_CIRC
        and f.solidity > _PENTAGON_MIN_SOLIDITY
    )


def _polygon_outcome(f: ShapeFeatures) -> tuple[str, float]:
    return POLYGON, min(0.85, 0.4 + f.vertex_count / 12)


RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule("circle", _is_circle, lambda f: (CIRCLE, 0.96)),
    ClassificationRule("triangle", lambda f: f.vertex_count == 3, lambda f: (TRIANGLE, 0.95)),
    ClassificationRule("quad", lambda f: f.vertex_count == 4, _quad_outcome),
    ClassificationRule(
        "star_strict",
        _is_strict_star,
        lambda f: (STAR, 0.85 + 0.1 * min(f.concave_ratio * 5, 0.2)),
    ),
    ClassificationRule(
        "star_concave",
        _is_concave_star,
        lambda f: (STAR, 0.8 + min(0.1, f.concave_count / f.vertex_count)),
    ),
    ClassificationRule(
        "pentagon",
        _is_pentagon,
        lambda f: (PENTAGON, 0.9 - 0.05 * abs(f.vertex_count - 5)),
    ),
    ClassificationRule(
        "circle_ish",
        lambda f: f.circularity > _CIRCLE_ISH_MIN_CIRC and f.vertex_count > 6,
        lambda f: (CIRCLE_ISH, 0.7),
    ),
    ClassificationRule("polygon", lambda f: True, _polygon_outcome),
)


def classify(
    features: ShapeFeatures,
    rules: tuple[ClassificationRule, ...] = RULES,
) -> tuple[str, float, str]:
    """Return (category, confidence rounded to 2 places, rule name)."""
    for rule in rules:
        if rule.matches(features):
            category, confidence = rule.outcome(features)
            return category, round_to(confidence, 2), rule.name
    # Only reachable with a custom table lacking a catch-all
    category, confidence = _polygon_outcome(features)
    return category, round_to(confidence, 2), "polygon"
