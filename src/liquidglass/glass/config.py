from __future__ import annotations

import json
import logging
import math
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

from liquidglass.maps.specular import DEFAULT_LIGHT_ANGLE
from liquidglass.optics.profiles import SURFACE_NAMES
from liquidglass.optics.refraction import DEFAULT_SAMPLES

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1
_INT_FIELDS = ("object_width", "object_height", "samples")
_FLOAT_FIELDS = (
    "bezel_width",
    "glass_thickness",
    "refractive_index",
    "refraction_scale",
    "specular_opacity",
    "blur",
    "radius",
    "light_angle",
)
_FIELD_CASTS: dict[str, type] = {
    **dict.fromkeys(_INT_FIELDS, int),
    **dict.fromkeys(_FLOAT_FIELDS, float),
}


@dataclass(frozen=True)
class GlassConfig:
    surface: str = "convex_squircle"
    bezel_width: float = 30.0
    glass_thickness: float = 150.0
    refractive_index: float = 1.5
    refraction_scale: float = 1.5
    specular_opacity: float = 1.0
    blur: float = 0.5
    object_width: int = 200
    object_height: int = 140
    radius: float = 70.0
    light_angle: float = DEFAULT_LIGHT_ANGLE
    samples: int = DEFAULT_SAMPLES

    def __post_init__(self) -> None:
        if self.surface not in SURFACE_NAMES:
            msg = f"surface must be one of {list(SURFACE_NAMES)}, got {self.surface!r}"
            raise ValueError(msg)
        non_negative = {
            "bezel_width": self.bezel_width,
            "glass_thickness": self.glass_thickness,
            "refraction_scale": self.refraction_scale,
            "specular_opacity": self.specular_opacity,
            "blur": self.blur,
            "object_width": self.object_width,
            "object_height": self.object_height,
            "radius": self.radius,
        }
        for name, value in non_negative.items():
            if not math.isfinite(value) or value < 0:
                msg = f"{name} must be a finite non-negative number"
                raise ValueError(msg)
        if not self.refractive_index > 0:
            msg = "refractive_index must be positive"
            raise ValueError(msg)
        if self.samples <= 0:
            msg = "samples must be positive"
            raise ValueError(msg)

    @property
    def optics_key(self) -> tuple[float, float, str, float, int]:
        """Inputs that determine the refraction table."""
        return (
            self.glass_thickness,
            self.bezel_width,
            self.surface,
            self.refractive_index,
            self.samples,
        )

    @property
    def geometry_key(self) -> tuple[int, int, float, float]:
        return (self.object_width, self.object_height, self.radius, self.bezel_width)

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["format_version"] = FORMAT_VERSION
        return payload

    @staticmethod
    def from_dict(payload: dict[str, Any]) -> GlassConfig:
        known = {item.name for item in fields(GlassConfig)}
        unknown = sorted(set(payload) - known - {"format_version"})
        if unknown:
            msg = f"Unknown glass config keys: {unknown}"
            raise ValueError(msg)
        values = {key: value for key, value in payload.items() if key in known}
        for key, cast in _FIELD_CASTS.items():
            if key not in values:
                continue
            try:
                values[key] = cast(values[key])
            except (TypeError, ValueError, OverflowError):
                msg = f"{key} must be a number, got {values[key]!r}"
                raise ValueError(msg) from None
        return GlassConfig(**values)


GLASS_PRESETS: dict[str, GlassConfig] = {
    "panel": GlassConfig(),
    "pill": GlassConfig(
        surface="convex_circle",
        bezel_width=22.0,
        glass_thickness=90.0,
        refraction_scale=1.2,
        object_width=240,
        object_height=80,
        radius=40.0,
    ),
    "lens": GlassConfig(
        surface="lip",
        bezel_width=40.0,
        glass_thickness=120.0,
        refractive_index=1.45,
        refraction_scale=1.8,
        specular_opacity=0.8,
        blur=0.0,
        object_width=160,
        object_height=160,
        radius=80.0,
    ),
}


def get_preset(name: str) -> GlassConfig:
    try:
        return GLASS_PRESETS[name]
    except KeyError:
        msg = f"Unknown glass preset {name!r}; expected one of {sorted(GLASS_PRESETS)}"
        raise ValueError(msg) from None


def load_glass_config(path: str | Path) -> GlassConfig:
    config_path = Path(path)
    if not config_path.exists():
        msg = f"Glass config file does not exist: {config_path}"
        raise FileNotFoundError(msg)
    payload = json.loads(config_path.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        msg = f"Glass config must be a JSON object: {config_path}"
        raise ValueError(msg)
    config = GlassConfig.from_dict(payload)
    logger.info(f"Loaded glass config from: {config_path}")
    return config


__all__ = [
    "FORMAT_VERSION",
    "GlassConfig",
    "GLASS_PRESETS",
    "get_preset",
    "load_glass_config",
]
