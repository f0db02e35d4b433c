from __future__ import annotations

import numpy as np
import numpy.typing as npt

PixelBuffer = npt.NDArray[np.uint8]


def corner_offsets(width: int, height: int, radius: float) -> tuple[np.ndarray, np.ndarray]:
    """Per-pixel offset from the nearest corner centre of a rounded rectangle.

    Pixels between the corner arcs along an axis get a zero offset on that axis,
    so the distance to the corner centre becomes the distance to the straight edge
    line. Arrays are indexed ``[y, x]``.
    """
    ys, xs = np.mgrid[0:height, 0:width].astype(float)
    straight_width = width - (radius * 2.0)
    straight_height = height - (radius * 2.0)

    local_x = np.where(
        xs < radius,
        xs - radius,
        np.where(xs >= width - radius, xs - radius - straight_width, 0.0),
    )
    local_y = np.where(
        ys < radius,
        ys - radius,
        np.where(ys >= height - radius, ys - radius - straight_height, 0.0),
    )
    return local_x, local_y


def band_mask(distance_sq: np.ndarray, radius: float, thickness: float) -> np.ndarray:
    inner = max(0.0, radius - thickness)
    outer = radius + 1.0
    return (distance_sq >= inner * inner) & (distance_sq <= outer * outer)


def edge_opacity(distance_sq: np.ndarray, radius: float) -> np.ndarray:
    """Coverage fading linearly from 1 to 0 over the pixel just outside ``radius``."""
    distance = np.sqrt(distance_sq)
    fade = 1.0 - (distance - abs(radius))
    return np.where(distance_sq < radius * radius, 1.0, fade)


def unit_directions(
    local_x: np.ndarray,
    local_y: np.ndarray,
    distance: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    safe = np.where(distance > 0, distance, 1.0)
    cos = np.where(distance > 0, local_x / safe, 0.0)
    sin = np.where(distance > 0, local_y / safe, 0.0)
    return cos, sin


def to_bytes(channel: np.ndarray) -> np.ndarray:
    """Clamp to [0, 255] and round half to even, as a clamped byte array does."""
    cleaned = np.nan_to_num(channel, nan=0.0, posinf=255.0, neginf=0.0)
    return np.rint(np.clip(cleaned, 0.0, 255.0)).astype(np.uint8)


__all__ = [
    "PixelBuffer",
    "corner_offsets",
    "band_mask",
    "edge_opacity",
    "unit_directions",
    "to_bytes",
]
