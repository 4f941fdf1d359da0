"""Shape output model — the JSON form of engine Shape records."""

from __future__ import annotations

from pydantic import BaseModel, Field

from shapesight.engine.context import Shape


class BoundingBoxModel(BaseModel):
    x: int
    y: int
    width: int
    height: int


class PointModel(BaseModel):
    x: float
    y: float


class ShapeModel(BaseModel):
    type: str = Field(..., description="Shape category")
    confidence: float = Field(..., ge=0.0, le=1.0)
    bounding_box: BoundingBoxModel
    center: PointModel
    area: float
    vertices: list[PointModel] = Field(default_factory=list)
    rule: str = ""

    @classmethod
    def from_shape(cls, shape: Shape) -> ShapeModel:
        box = shape.bounding_box
        return cls(
            type=shape.category,
            confidence=shape.confidence,
            bounding_box=BoundingBoxModel(x=box.x, y=box.y, width=box.width, height=box.height),
            center=PointModel(x=shape.center[0], y=shape.center[1]),
            area=shape.area,
            vertices=[PointModel(x=x, y=y) for x, y in shape.vertices],
            rule=shape.rule,
        )
