"""POST /api/detect — run shape detection on an uploaded image."""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, HTTPException

from shapesight.config import Settings
from shapesight.dependencies import get_settings
from shapesight.engine.config import DetectionConfig
from shapesight.engine.context import DetectionContext, Raster
from shapesight.engine.errors import ImageDecodeError, InputNotReadyError
from shapesight.engine.pipeline import create_pipeline
from shapesight.models.requests import DetectRequest
from shapesight.models.responses import DetectResponse
from shapesight.models.shapes import ShapeModel
from shapesight.render.overlay import draw_shapes
from shapesight.utils.imaging import decode_image, encode_png_base64

logger = logging.getLogger(__name__)

router = APIRouter()


def raster_from_payload(image: str) -> Raster:
    """Empty payload → empty raster (no image loaded)."""
    if not image.strip():
        return Raster.empty()
    try:
        return Raster.from_array(decode_image(image))
    except ValueError as e:
        raise ImageDecodeError(str(e)) from e


def run_detection(raster: Raster, config: DetectionConfig, annotate: bool = False) -> DetectResponse:
    """Run the pipeline and package the result for the API."""
    start = time.perf_counter()
    ctx = create_pipeline(config).run(DetectionContext(raster=raster))
    elapsed = (time.perf_counter() - start) * 1000

    if not ctx.input_ready:
        return DetectResponse(input_ready=False, message=str(InputNotReadyError()))

    annotated = encode_png_base64(draw_shapes(raster, ctx.shapes)) if annotate else None
    return DetectResponse(
        shapes=[ShapeModel.from_shape(s) for s in ctx.shapes],
        input_ready=True,
        message=f"{len(ctx.shapes)} shape(s) detected",
        processing_time_ms=round(elapsed, 1),
        stages_completed=len(ctx.completed_stages),
        stages_failed=len(ctx.errors),
        errors=ctx.errors,
        annotated_image=annotated,
    )


@router.post("/detect", response_model=DetectResponse)
def detect_shapes(req: DetectRequest, settings: Settings = Depends(get_settings)) -> DetectResponse:
    try:
        raster = raster_from_payload(req.image)
    except ImageDecodeError as e:
        logger.info("Rejected upload: %s", e)
        raise HTTPException(status_code=400, detail=str(e)) from e

    config = settings.detection_config().with_overrides(
        threshold=req.threshold,
        outline_source=req.outline_source,
    )
    return run_detection(raster, config, annotate=req.annotate)
