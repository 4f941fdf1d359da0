"""S3.01 — Shape Classification. ★★★

Runs each component's features through the ordered rule table in
shapesight.engine.classifier. Stateless per component.
"""

from __future__ import annotations

import logging

from shapesight.engine.classifier import ShapeFeatures, classify
from shapesight.engine.context import DetectionContext
from shapesight.engine.registry import Layer, stage

logger = logging.getLogger(__name__)


@stage(
    id="S3.01",
    layer=Layer.CLASSIFICATION,
    dependencies=["S2.01", "S2.02", "S2.03", "S2.04"],
    description="Assign a category and confidence from the rule table",
)
def shape_classification(ctx: DetectionContext) -> None:
    for comp in ctx.components:
        category, confidence, rule = classify(ShapeFeatures.from_features(comp.features))
        comp.features["category"] = category
        comp.features["confidence"] = confidence
        comp.features["rule"] = rule
        logger.debug(
            "Component %d → %s (%.2f) via %s", comp.label, category, confidence, rule
        )
