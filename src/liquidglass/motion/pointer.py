from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

logger = logging.getLogger(__name__)

RECT_CACHE_TTL_MS = 100.0
EDGE_RESISTANCE = 0.3
MIN_SAMPLE_INTERVAL_MS = 1.0


def _now_ms() -> float:
    return time.perf_counter() * 1000.0


@dataclass(frozen=True)
class Rect:
    left: float
    top: float
    width: float
    height: float


class RectCache:
    """Bounding rect of the drag area, refetched at most once per TTL window."""

    def __init__(
        self,
        fetch: Callable[[], Rect],
        *,
        ttl_ms: float = RECT_CACHE_TTL_MS,
        clock: Callable[[], float] = _now_ms,
    ) -> None:
        self._fetch = fetch
        self._clock = clock
        self.ttl_ms = ttl_ms
        self._rect: Rect | None = None
        self._fetched_at = 0.0

    def get(self) -> Rect:
        now = self._clock()
        if self._rect is None or now - self._fetched_at > self.ttl_ms:
            self._rect = self._fetch()
            self._fetched_at = now
        return self._rect

    def invalidate(self) -> None:
        self._rect = None


def rubber_band(value: float, upper: float, resistance: float = EDGE_RESISTANCE) -> float:
    """Let ``value`` overshoot [0, upper] at a fraction of the pointer travel."""
    if value < 0:
        return value * resistance
    if value > upper:
        return upper + (value - upper) * resistance
    return value


class DragTracker:
    def __init__(
        self,
        area: RectCache,
        object_width: float,
        object_height: float,
        *,
        resistance: float = EDGE_RESISTANCE,
    ) -> None:
        self.area = area
        self.object_width = object_width
        self.object_height = object_height
        self.resistance = resistance
        self.is_dragging = False
        self.left = 0.0
        self.top = 0.0
        self.velocity_x = 0.0
        self.velocity_y = 0.0
        self._offset_x = 0.0
        self._offset_y = 0.0
        self._last_x = 0.0
        self._last_y = 0.0
        self._last_time_ms = 0.0

    def _bounds(self) -> tuple[float, float]:
        rect = self.area.get()
        return rect.width - self.object_width, rect.height - self.object_height

    def start(
        self,
        client_x: float,
        client_y: float,
        now_ms: float,
        *,
        element_left: float,
        element_top: float,
        scale: float = 1.0,
    ) -> None:
        """Grab the element; ``element_left/top`` are its on-screen (scaled) corner."""
        scale = scale if scale > 0 else 1.0
        self.is_dragging = True
        self._offset_x = (client_x - element_left) / scale
        self._offset_y = (client_y - element_top) / scale
        self._last_x = client_x
        self._last_y = client_y
        self._last_time_ms = now_ms
        self.velocity_x = 0.0
        self.velocity_y = 0.0

    def move(self, client_x: float, client_y: float, now_ms: float) -> tuple[float, float]:
        if not self.is_dragging:
            return self.left, self.top

        elapsed_s = max(MIN_SAMPLE_INTERVAL_MS, now_ms - self._last_time_ms) / 1000.0
        self.velocity_x = (client_x - self._last_x) / elapsed_s
        self.velocity_y = (client_y - self._last_y) / elapsed_s
        self._last_x = client_x
        self._last_y = client_y
        self._last_time_ms = now_ms

        rect = self.area.get()
        max_x, max_y = self._bounds()
        self.left = rubber_band(client_x - rect.left - self._offset_x, max_x, self.resistance)
        self.top = rubber_band(client_y - rect.top - self._offset_y, max_y, self.resistance)
        return self.left, self.top

    def end(self) -> tuple[float, float]:
        if not self.is_dragging:
            return self.left, self.top
        self.is_dragging = False
        max_x, max_y = self._bounds()
        self.left = max(0.0, min(self.left, max_x))
        self.top = max(0.0, min(self.top, max_y))
        logger.debug(f"Drag released at ({self.left:.1f}, {self.top:.1f})")
        return self.left, self.top


__all__ = [
    "RECT_CACHE_TTL_MS",
    "EDGE_RESISTANCE",
    "Rect",
    "RectCache",
    "DragTracker",
    "rubber_band",
]
