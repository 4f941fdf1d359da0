"""Pixel utilities — decoding, luminance, thresholding. No engine imports."""

from __future__ import annotations

import base64
import binascii
import io
from pathlib import Path

import numpy as np
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError

# ITU-R BT.601 luma weights
_LUMA_R = 0.299
_LUMA_G = 0.587
_LUMA_B = 0.114


def to_rgba(array: NDArray) -> NDArray[np.uint8]:
    """Promote a gray (HxW), RGB or RGBA array to HxWx4 uint8."""
    arr = np.asarray(array)
    if arr.ndim == 2:
        arr = np.stack([arr, arr, arr], axis=-1)
    if arr.ndim != 3 or arr.shape[2] not in (3, 4):
        raise ValueError(f"Expected HxW, HxWx3 or HxWx4 pixels, got shape {arr.shape}")
    arr = np.clip(arr, 0, 255).astype(np.uint8)
    if arr.shape[2] == 3:
        alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
        arr = np.concatenate([arr, alpha], axis=-1)
    return arr


def luminance(pixels: NDArray[np.uint8]) -> NDArray[np.uint8]:
    """0.299·R + 0.587·G + 0.114·B per pixel, rounded and clamped to 0-255.

    Alpha is ignored. Works on RGB or RGBA arrays.
    """
    rgb = pixels[..., :3].astype(np.float64)
    lum = _LUMA_R * rgb[..., 0] + _LUMA_G * rgb[..., 1] + _LUMA_B * rgb[..., 2]
    return np.clip(np.rint(lum), 0, 255).astype(np.uint8)


def threshold_dark(gray: NDArray[np.uint8], threshold: int = 128) -> NDArray[np.bool_]:
    """Foreground mask of dark pixels: luminance strictly below threshold."""
    return gray < threshold


def _strip_data_url(data: str) -> str:
    # "data:image/png;base64,...."
    if data.startswith("data:") and "," in data:
        return data.split(",", 1)[1]
    return data


def decode_image(data: str) -> NDArray[np.uint8]:
    """Decode a base64 string or data URL into an HxWx4 RGBA array.

    Raises ValueError when the payload is not base64 or not an image.
    """
    payload = _strip_data_url(data.strip())
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"Image payload is not valid base64: {e}") from e
    try:
        with Image.open(io.BytesIO(raw)) as img:
            return np.array(img.convert("RGBA"))
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Could not decode image: {e}") from e


def load_image(path: str | Path) -> NDArray[np.uint8]:
    """Read an image file into an HxWx4 RGBA array."""
    with Image.open(path) as img:
        return np.array(img.convert("RGBA"))


def encode_png(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def encode_png_base64(image: Image.Image) -> str:
    """PNG-encode a Pillow image as a data URL."""
    return "data:image/png;base64," + base64.b64encode(encode_png(image)).decode("ascii")
