from liquidglass.maps.displacement import NEUTRAL_FILL, compute_displacement_field
from liquidglass.maps.encoding import decode_png, encode_png, save_png, to_data_url
from liquidglass.maps.geometry import PixelBuffer
from liquidglass.maps.specular import (
    DEFAULT_LIGHT_ANGLE,
    SPECULAR_THICKNESS,
    compute_specular_field,
)

__all__ = [
    "PixelBuffer",
    "NEUTRAL_FILL",
    "compute_displacement_field",
    "SPECULAR_THICKNESS",
    "DEFAULT_LIGHT_ANGLE",
    "compute_specular_field",
    "encode_png",
    "decode_png",
    "to_data_url",
    "save_png",
]
