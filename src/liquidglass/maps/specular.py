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

SPECULAR_THICKNESS = 1.5
DEFAULT_LIGHT_ANGLE = math.pi / 3


def compute_specular_field(
    object_width: int,
    object_height: int,
    radius: float,
    bezel_width: float,
    light_angle: float = DEFAULT_LIGHT_ANGLE,
) -> PixelBuffer:
    """Grey rim highlight along the outer 1.5 px of the rounded rectangle.

    Brightness follows how squarely the edge normal faces the light direction
    (either side of it), with a quarter-circle falloff towards the interior.
    Alpha is the brightness attenuated once more by the same coefficient and by
    the antialiasing coverage. ``bezel_width`` does not affect the highlight.
    """
    del bezel_width
    object_width = max(0, int(object_width))
    object_height = max(0, int(object_height))
    rgba = np.zeros((object_height, object_width, 4), dtype=np.uint8)
    if rgba.size == 0:
        rgba.setflags(write=False)
        return rgba

    radius = float(radius)
    local_x, local_y = corner_offsets(object_width, object_height, radius)
    distance_sq = (local_x * local_x) + (local_y * local_y)
    near_edge = band_mask(distance_sq, radius, SPECULAR_THICKNESS)

    distance = np.sqrt(distance_sq)
    opacity = edge_opacity(distance_sq, radius)
    # Image rows grow downwards; flip y so the light angle is counter-clockwise.
    cos, sin = unit_directions(local_x, -local_y, distance)
    facing = np.abs((cos * math.cos(light_angle)) + (sin * math.sin(light_angle)))

    edge_ratio = np.clip((radius - distance) / SPECULAR_THICKNESS, 0.0, 1.0)
    falloff = np.sqrt(1.0 - (1.0 - edge_ratio) ** 2)
    coefficient = facing * falloff

    color = np.minimum(255.0, 255.0 * coefficient)
    alpha = np.minimum(255.0, color * coefficient * opacity)

    color_bytes = np.where(near_edge, to_bytes(color), 0).astype(np.uint8)
    rgba[..., 0] = color_bytes
    rgba[..., 1] = color_bytes
    rgba[..., 2] = color_bytes
    rgba[..., 3] = np.where(near_edge, to_bytes(alpha), 0)
    rgba.setflags(write=False)
    return rgba


__all__ = ["SPECULAR_THICKNESS", "DEFAULT_LIGHT_ANGLE", "compute_specular_field"]
