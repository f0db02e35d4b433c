from liquidglass.glass.config import GLASS_PRESETS, GlassConfig, get_preset, load_glass_config
from liquidglass.glass.instance import FilterMaps, FilterParameters, GlassInstance

__all__ = [
    "GlassConfig",
    "GLASS_PRESETS",
    "get_preset",
    "load_glass_config",
    "FilterMaps",
    "FilterParameters",
    "GlassInstance",
]
