from __future__ import annotations

import math

import numpy as np

from liquidglass.maps.geometry import (
    PixelBuffer,
    band_mask,
    corner_offsets,
    edge_opacity,
    to_bytes,
    unit_directions,
)
from liquidglass.optics.refraction import RefractionTable

NEUTRAL_FILL = (128, 128, 0, 255)
CHANNEL_MIDPOINT = 128.0
CHANNEL_AMPLITUDE = 127.0


def _normalizer(maximum_displacement: float) -> float:
    if not math.isfinite(maximum_displacement) or maximum_displacement <= 0:
        return 1.0
    return float(maximum_displacement)


def _table_values(table: RefractionTable, ratio: np.ndarray) -> np.ndarray:
    values = np.asarray(table, dtype=float)
    if values.size == 0:
        return np.zeros_like(ratio)
    indices = np.clip(np.floor(ratio * values.size).astype(int), 0, values.size - 1)
    picked = values[indices]
    return np.where(np.isfinite(picked), picked, 0.0)


def neutral_canvas(width: int, height: int) -> PixelBuffer:
    canvas = np.empty((max(0, height), max(0, width), 4), dtype=np.uint8)
    canvas[...] = NEUTRAL_FILL
    return canvas


def _object_field(
    object_width: int,
    object_height: int,
    radius: float,
    bezel_width: float,
    maximum_displacement: float,
    table: RefractionTable,
) -> np.ndarray:
    local_x, local_y = corner_offsets(object_width, object_height, radius)
    distance_sq = (local_x * local_x) + (local_y * local_y)
    in_band = band_mask(distance_sq, radius, bezel_width)

    distance = np.sqrt(distance_sq)
    opacity = edge_opacity(distance_sq, radius)
    cos, sin = unit_directions(local_x, local_y, distance)

    safe_bezel = max(float(bezel_width), 1e-9)
    ratio = np.clip((radius - distance) / safe_bezel, 0.0, 1.0)
    travel = _table_values(table, ratio) / _normalizer(maximum_displacement)

    rgba = neutral_canvas(object_width, object_height)
    rgba[..., 0] = np.where(
        in_band,
        to_bytes(CHANNEL_MIDPOINT + (-cos * travel) * CHANNEL_AMPLITUDE * opacity),
        rgba[..., 0],
    )
    rgba[..., 1] = np.where(
        in_band,
        to_bytes(CHANNEL_MIDPOINT + (-sin * travel) * CHANNEL_AMPLITUDE * opacity),
        rgba[..., 1],
    )
    return rgba


def compute_displacement_field(
    canvas_width: int,
    canvas_height: int,
    object_width: int,
    object_height: int,
    radius: float,
    bezel_width: float,
    maximum_displacement: float,
    table: RefractionTable,
) -> PixelBuffer:
    """Encode the bezel refraction as an RGBA displacement map.

    R and G hold the x and y displacement around a 128 midpoint, scaled so that
    ``maximum_displacement`` maps to the full channel swing. The object is centred
    on the canvas; everything outside the bezel band keeps the neutral fill.
    """
    canvas = neutral_canvas(int(canvas_width), int(canvas_height))
    object_width = max(0, int(object_width))
    object_height = max(0, int(object_height))
    if object_width == 0 or object_height == 0 or canvas.size == 0:
        canvas.setflags(write=False)
        return canvas

    rgba = _object_field(
        object_width,
        object_height,
        float(radius),
        float(bezel_width),
        float(maximum_displacement),
        table,
    )

    origin_x = (canvas.shape[1] - object_width) // 2
    origin_y = (canvas.shape[0] - object_height) // 2
    src_x0 = max(0, -origin_x)
    src_y0 = max(0, -origin_y)
    dst_x0 = max(0, origin_x)
    dst_y0 = max(0, origin_y)
    copy_w = min(object_width - src_x0, canvas.shape[1] - dst_x0)
    copy_h = min(object_height - src_y0, canvas.shape[0] - dst_y0)
    if copy_w > 0 and copy_h > 0:
        canvas[dst_y0 : dst_y0 + copy_h, dst_x0 : dst_x0 + copy_w] = rgba[
            src_y0 : src_y0 + copy_h, src_x0 : src_x0 + copy_w
        ]
    canvas.setflags(write=False)
    return canvas


__all__ = [
    "NEUTRAL_FILL",
    "neutral_canvas",
    "compute_displacement_field",
]
