from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from liquidglass.glass.config import GlassConfig
from liquidglass.maps.displacement import compute_displacement_field
from liquidglass.maps.geometry import PixelBuffer
from liquidglass.maps.specular import compute_specular_field
from liquidglass.motion.driver import FRAME_DT_MAX, FrameDriver, MotionFrame
from liquidglass.motion.pointer import DragTracker, Rect, RectCache
from liquidglass.optics.profiles import get_surface_profile
from liquidglass.optics.refraction import (
    RefractionTable,
    compute_refraction_table,
    max_abs_displacement,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterMaps:
    table: RefractionTable
    maximum_displacement: float
    displacement: PixelBuffer
    specular: PixelBuffer
    displacement_scale: float
    specular_slope: float
    blur: float


@dataclass(frozen=True)
class FilterParameters:
    displacement_scale: float
    specular_slope: float
    blur: float


class GlassInstance:
    """One glass element: its configuration, springs and derived maps.

    Derived data is rebuilt lazily. The refraction table depends only on the
    optical parameters, the maps additionally on the element geometry, so a
    geometry change reuses the table and a scale/opacity change reuses both.

    Dragging needs ``area``, the bounds the element moves within. Without it the
    instance still renders and animates, but :meth:`begin_drag` raises.
    """

    def __init__(self, config: GlassConfig | None = None, *, area: RectCache | None = None) -> None:
        self.config = config or GlassConfig()
        self.driver = FrameDriver()
        self.has_area = area is not None
        self.area = area or RectCache(self._default_area)
        self.drag = DragTracker(self.area, self.config.object_width, self.config.object_height)
        self._table: RefractionTable | None = None
        self._table_key: tuple[float, float, str, float, int] | None = None
        self._maps: tuple[PixelBuffer, PixelBuffer] | None = None
        self._maps_key: tuple[object, ...] | None = None

    def _default_area(self) -> Rect:
        return Rect(0.0, 0.0, float(self.config.object_width), float(self.config.object_height))

    def configure(self, **changes: object) -> GlassConfig:
        """Apply control changes; invalid values raise before anything is replaced."""
        self.config = replace(self.config, **changes)
        self.drag.object_width = self.config.object_width
        self.drag.object_height = self.config.object_height
        return self.config

    def refraction_table(self) -> RefractionTable:
        key = self.config.optics_key
        if self._table is None or key != self._table_key:
            self._table = compute_refraction_table(
                self.config.glass_thickness,
                self.config.bezel_width,
                get_surface_profile(self.config.surface),
                self.config.refractive_index,
                samples=self.config.samples,
            )
            self._table_key = key
            logger.debug(f"Recomputed refraction table for {key}")
        return self._table

    def maximum_displacement(self) -> float:
        return max_abs_displacement(self.refraction_table())

    def filter_maps(self) -> FilterMaps:
        table = self.refraction_table()
        maximum = max_abs_displacement(table)
        key = (self._table_key, self.config.geometry_key, self.config.light_angle)
        if self._maps is None or key != self._maps_key:
            width, height = self.config.object_width, self.config.object_height
            displacement = compute_displacement_field(
                width,
                height,
                width,
                height,
                self.config.radius,
                self.config.bezel_width,
                maximum or 1.0,
                table,
            )
            specular = compute_specular_field(
                width,
                height,
                self.config.radius,
                self.config.bezel_width,
                light_angle=self.config.light_angle,
            )
            self._maps = (displacement, specular)
            self._maps_key = key
            logger.debug(f"Regenerated {width}x{height} displacement and specular maps")

        displacement, specular = self._maps
        return FilterMaps(
            table=table,
            maximum_displacement=maximum,
            displacement=displacement,
            specular=specular,
            displacement_scale=maximum * self.config.refraction_scale,
            specular_slope=self.config.specular_opacity,
            blur=self.config.blur,
        )

    def filter_parameters(self, refraction_boost: float = 1.0) -> FilterParameters:
        return FilterParameters(
            displacement_scale=(
                self.maximum_displacement() * self.config.refraction_scale * refraction_boost
            ),
            specular_slope=self.config.specular_opacity,
            blur=self.config.blur,
        )

    def begin_drag(
        self,
        client_x: float,
        client_y: float,
        now_ms: float,
        *,
        element_left: float,
        element_top: float,
    ) -> None:
        if not self.has_area:
            msg = "GlassInstance needs an area RectCache before it can be dragged"
            raise ValueError(msg)
        self.drag.start(
            client_x,
            client_y,
            now_ms,
            element_left=element_left,
            element_top=element_top,
            scale=self.driver.springs.scale.value,
        )
        self.driver.press()

    def drag_to(self, client_x: float, client_y: float, now_ms: float) -> tuple[float, float]:
        position = self.drag.move(client_x, client_y, now_ms)
        if self.drag.is_dragging:
            self.driver.set_pointer_velocity(self.drag.velocity_x, self.drag.velocity_y)
        return position

    def end_drag(self) -> tuple[float, float]:
        position = self.drag.end()
        self.driver.release()
        return position

    def animate(self, dt: float = FRAME_DT_MAX) -> tuple[MotionFrame, FilterParameters]:
        frame = self.driver.step(dt)
        return frame, self.filter_parameters(frame.refraction_boost)


__all__ = ["FilterMaps", "FilterParameters", "GlassInstance"]
