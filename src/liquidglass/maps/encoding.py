from __future__ import annotations

import base64
import io
from pathlib import Path

import numpy as np
from PIL import Image

from liquidglass.maps.geometry import PixelBuffer

DATA_URL_PREFIX = "data:image/png;base64,"


def _as_image(buffer: PixelBuffer) -> Image.Image:
    array = np.asarray(buffer)
    if array.ndim != 3 or array.shape[2] != 4:
        msg = f"Expected an (height, width, 4) RGBA buffer, got shape {array.shape}"
        raise ValueError(msg)
    if array.dtype != np.uint8:
        msg = f"Expected a uint8 buffer, got {array.dtype}"
        raise ValueError(msg)
    if array.shape[0] == 0 or array.shape[1] == 0:
        msg = "Cannot encode an empty image"
        raise ValueError(msg)
    return Image.fromarray(np.array(array, dtype=np.uint8, order="C"))


def encode_png(buffer: PixelBuffer) -> bytes:
    handle = io.BytesIO()
    _as_image(buffer).save(handle, format="PNG")
    return handle.getvalue()


def to_data_url(buffer: PixelBuffer) -> str:
    """PNG data URL suitable for an ``<feImage href=...>`` filter input."""
    return DATA_URL_PREFIX + base64.b64encode(encode_png(buffer)).decode("ascii")


def save_png(buffer: PixelBuffer, path: str | Path) -> Path:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    _as_image(buffer).save(output_path, format="PNG")
    return output_path


def decode_png(payload: bytes) -> PixelBuffer:
    with Image.open(io.BytesIO(payload)) as image:
        return np.asarray(image.convert("RGBA"), dtype=np.uint8)


__all__ = ["DATA_URL_PREFIX", "encode_png", "to_data_url", "save_png", "decode_png"]
