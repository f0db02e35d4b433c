"""liquidglass public API: refraction maps, specular maps and spring motion."""

from liquidglass.glass.config import GLASS_PRESETS, GlassConfig, get_preset, load_glass_config
from liquidglass.glass.instance import FilterMaps, GlassInstance
from liquidglass.maps.displacement import NEUTRAL_FILL, compute_displacement_field
from liquidglass.maps.encoding import encode_png, to_data_url
from liquidglass.maps.specular import compute_specular_field
from liquidglass.motion.driver import FrameDriver, MotionFrame, run_motion_trace
from liquidglass.motion.spring import Spring
from liquidglass.optics.profiles import SURFACE_NAMES, SURFACE_PROFILES, get_surface_profile
from liquidglass.optics.refraction import compute_refraction_table, max_abs_displacement

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "SURFACE_NAMES",
    "SURFACE_PROFILES",
    "get_surface_profile",
    "compute_refraction_table",
    "max_abs_displacement",
    "NEUTRAL_FILL",
    "compute_displacement_field",
    "compute_specular_field",
    "encode_png",
    "to_data_url",
    "Spring",
    "FrameDriver",
    "MotionFrame",
    "run_motion_trace",
    "GlassConfig",
    "GLASS_PRESETS",
    "get_preset",
    "load_glass_config",
    "FilterMaps",
    "GlassInstance",
]
