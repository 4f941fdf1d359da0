"""Engine exceptions."""

from __future__ import annotations


class ShapeSightError(ValueError):
    """Base class for errors surfaced to callers of the detection engine."""


class InputNotReadyError(ShapeSightError):
    """The raster has zero width or height — there is nothing to detect on."""

    def __init__(self, message: str = "Load or upload an image first") -> None:
        super().__init__(message)


class ImageDecodeError(ShapeSightError):
    """An uploaded payload could not be decoded into a raster."""
