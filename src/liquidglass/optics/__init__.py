from liquidglass.optics.profiles import (
    SURFACE_NAMES,
    SURFACE_PROFILES,
    SurfaceProfile,
    concave,
    convex_circle,
    convex_squircle,
    get_surface_profile,
    lip,
)
from liquidglass.optics.refraction import (
    DEFAULT_SAMPLES,
    RefractionTable,
    compute_refraction_table,
    lookup_displacement,
    max_abs_displacement,
)

__all__ = [
    "SurfaceProfile",
    "SURFACE_PROFILES",
    "SURFACE_NAMES",
    "convex_circle",
    "convex_squircle",
    "concave",
    "lip",
    "get_surface_profile",
    "DEFAULT_SAMPLES",
    "RefractionTable",
    "compute_refraction_table",
    "max_abs_displacement",
    "lookup_displacement",
]
