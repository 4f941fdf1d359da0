"""API request models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class DetectRequest(BaseModel):
    image: str = Field(
        "",
        description="Base64-encoded image or data URL; empty means no image loaded",
    )
    threshold: int | None = Field(None, ge=0, le=256, description="Override luminance threshold")
    outline_source: Literal["contour", "hull"] | None = Field(
        None, description="Outline the simplifier reduces"
    )
    annotate: bool = Field(False, description="Return a PNG with the detections drawn on it")
