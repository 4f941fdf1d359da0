"""ShapeSight shape detection engine."""

from shapesight.engine.registry import stage, Layer, get_registry
from shapesight.engine.config import DetectionConfig
from shapesight.engine.context import BoundingBox, ComponentData, DetectionContext, Raster, Shape
from shapesight.engine.errors import ImageDecodeError, InputNotReadyError, ShapeSightError
from shapesight.engine.pipeline import Pipeline, create_pipeline, detect

__all__ = [
    "stage",
    "Layer",
    "get_registry",
    "DetectionConfig",
    "BoundingBox",
    "ComponentData",
    "DetectionContext",
    "Raster",
    "Shape",
    "ImageDecodeError",
    "InputNotReadyError",
    "ShapeSightError",
    "Pipeline",
    "create_pipeline",
    "detect",
]
