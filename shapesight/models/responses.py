"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from shapesight.models.shapes import ShapeModel


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    stages_registered: int = 0


class DetectResponse(BaseModel):
    shapes: list[ShapeModel] = Field(default_factory=list)
    input_ready: bool = True
    message: str = ""
    processing_time_ms: float = 0.0
    stages_completed: int = 0
    stages_failed: int = 0
    errors: dict[str, str] = Field(default_factory=dict)
    annotated_image: str | None = None


class SampleListResponse(BaseModel):
    samples: list[str] = Field(default_factory=list)
