from __future__ import annotations

import numpy as np
import numpy.typing as npt

from liquidglass.optics.profiles import SurfaceProfile

DEFAULT_SAMPLES = 128
DERIVATIVE_STEP = 1e-4
# Below this the refracted ray runs parallel to the backing surface.
MIN_VERTICAL_COMPONENT = 1e-12

RefractionTable = npt.NDArray[np.float64]


def _surface_normals(
    profile: SurfaceProfile,
    positions: np.ndarray,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    heights = np.asarray(profile(positions), dtype=float)
    steps = np.where(positions < 1.0, DERIVATIVE_STEP, -DERIVATIVE_STEP)
    probes = np.clip(positions + steps, 0.0, 1.0)
    slopes = (np.asarray(profile(probes), dtype=float) - heights) / steps
    magnitude = np.sqrt(slopes**2 + 1.0)
    return heights, -slopes / magnitude, -1.0 / magnitude


def _refract(
    normal_x: np.ndarray,
    normal_y: np.ndarray,
    eta: float,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Vector Snell's law for a vertical ray; returns (rx, ry, valid)."""
    dot = normal_y
    k = 1.0 - (eta * eta) * (1.0 - dot * dot)
    valid = k >= 0.0
    k_sqrt = np.sqrt(np.where(valid, k, 0.0))
    factor = (eta * dot) + k_sqrt
    return -factor * normal_x, eta - (factor * normal_y), valid


def compute_refraction_table(
    glass_thickness: float,
    bezel_width: float,
    profile: SurfaceProfile,
    refractive_index: float,
    samples: int = DEFAULT_SAMPLES,
) -> RefractionTable:
    """Horizontal exit offset of a refracted ray for each depth into the bezel.

    Entry ``i`` corresponds to the normalised bezel position ``i / samples``.
    Samples lost to total internal reflection, or whose refracted ray never
    reaches the backing surface, contribute zero displacement.
    """
    count = max(0, int(samples))
    if count == 0:
        table = np.zeros(0, dtype=float)
        table.setflags(write=False)
        return table

    positions = np.arange(count, dtype=float) / count
    heights, normal_x, normal_y = _surface_normals(profile, positions)

    eta = 1.0 / refractive_index if refractive_index != 0 else float("inf")
    remaining_height = (heights * bezel_width) + glass_thickness
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        refracted_x, refracted_y, valid = _refract(normal_x, normal_y, eta)
        reaches_floor = valid & (np.abs(refracted_y) >= MIN_VERTICAL_COMPONENT)
        displacement = refracted_x * (remaining_height / refracted_y)
    table = np.where(reaches_floor & np.isfinite(displacement), displacement, 0.0)
    table.setflags(write=False)
    return table


def max_abs_displacement(table: RefractionTable) -> float:
    if len(table) == 0:
        return 0.0
    return float(np.max(np.abs(table)))


def lookup_displacement(table: RefractionTable, ratio: float) -> float:
    """Nearest-lower table entry for a bezel depth ratio in [0, 1]."""
    if len(table) == 0:
        return 0.0
    clamped = max(0.0, min(1.0, ratio))
    index = int(np.floor(clamped * len(table)))
    return float(table[max(0, min(index, len(table) - 1))])


__all__ = [
    "DEFAULT_SAMPLES",
    "RefractionTable",
    "compute_refraction_table",
    "max_abs_displacement",
    "lookup_displacement",
]
