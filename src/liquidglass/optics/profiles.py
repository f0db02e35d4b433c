from __future__ import annotations

from collections.abc import Callable

import numpy as np
import numpy.typing as npt

FloatOrArray = float | npt.NDArray[np.float64]
SurfaceProfile = Callable[[FloatOrArray], FloatOrArray]


def _unit(x: FloatOrArray) -> FloatOrArray:
    return np.clip(x, 0.0, 1.0)


def convex_circle(x: FloatOrArray) -> FloatOrArray:
    """Quarter-circle bezel rising from the outer edge."""
    x = _unit(x)
    return np.sqrt(1.0 - (1.0 - x) ** 2)


def convex_squircle(x: FloatOrArray) -> FloatOrArray:
    """Superellipse bezel: flatter top, steeper outer wall than the circle."""
    x = _unit(x)
    return (1.0 - (1.0 - x) ** 4) ** 0.25


def concave(x: FloatOrArray) -> FloatOrArray:
    x = _unit(x)
    return 1.0 - np.sqrt(1.0 - x**2)


def _smootherstep(x: FloatOrArray) -> FloatOrArray:
    return (6.0 * x**5) - (15.0 * x**4) + (10.0 * x**3)


def lip(x: FloatOrArray) -> FloatOrArray:
    """Convex rim blending into a raised concave dish."""
    x = _unit(x)
    convex_part = (1.0 - (1.0 - np.minimum(x * 2.0, 1.0)) ** 4) ** 0.25
    concave_part = 1.0 - np.sqrt(1.0 - (1.0 - x) ** 2) + 0.1
    weight = _smootherstep(x)
    return convex_part * (1.0 - weight) + concave_part * weight


SURFACE_PROFILES: dict[str, SurfaceProfile] = {
    "convex_circle": convex_circle,
    "convex_squircle": convex_squircle,
    "concave": concave,
    "lip": lip,
}
SURFACE_NAMES = tuple(SURFACE_PROFILES)


def get_surface_profile(name: str) -> SurfaceProfile:
    try:
        return SURFACE_PROFILES[name]
    except KeyError:
        msg = f"Unknown surface profile {name!r}; expected one of {list(SURFACE_NAMES)}"
        raise ValueError(msg) from None


__all__ = [
    "SurfaceProfile",
    "SURFACE_PROFILES",
    "SURFACE_NAMES",
    "convex_circle",
    "convex_squircle",
    "concave",
    "lip",
    "get_surface_profile",
]
