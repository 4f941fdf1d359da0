"""GET /api/samples/* — built-in sample gallery."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from shapesight.api.detect import run_detection
from shapesight.config import Settings
from shapesight.dependencies import get_settings
from shapesight.models.responses import DetectResponse, SampleListResponse
from shapesight.samples import get_sample, list_samples

router = APIRouter(prefix="/samples")


@router.get("", response_model=SampleListResponse)
def samples() -> SampleListResponse:
    return SampleListResponse(samples=list_samples())


@router.get("/{name}/detect", response_model=DetectResponse)
def detect_sample(
    name: str,
    annotate: bool = False,
    settings: Settings = Depends(get_settings),
) -> DetectResponse:
    try:
        raster = get_sample(name)
    except KeyError as e:
        raise HTTPException(status_code=404, detail=f"Unknown sample: {name}") from e
    return run_detection(raster, settings.detection_config(), annotate=annotate)
