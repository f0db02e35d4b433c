from __future__ import annotations

import pytest

from liquidglass.motion.pointer import DragTracker, Rect, RectCache, rubber_band


def _area(width: float = 400.0, height: float = 300.0) -> RectCache:
    return RectCache(lambda: Rect(0.0, 0.0, width, height))


def test_rect_cache_refetches_after_ttl_and_on_invalidate() -> None:
    fetches: list[float] = []
    now = [0.0]

    def fetch() -> Rect:
        fetches.append(now[0])
        return Rect(0.0, 0.0, 100.0 + len(fetches), 50.0)

    cache = RectCache(fetch, ttl_ms=100.0, clock=lambda: now[0])

    assert cache.get().width == 101.0
    now[0] = 60.0
    assert cache.get().width == 101.0
    now[0] = 161.0
    assert cache.get().width == 102.0
    cache.invalidate()
    assert cache.get().width == 103.0
    assert fetches == [0.0, 161.0, 161.0]


def test_rubber_band_resists_overshoot() -> None:
    assert rubber_band(-10.0, 100.0) == pytest.approx(-3.0)
    assert rubber_band(110.0, 100.0) == pytest.approx(103.0)
    assert rubber_band(50.0, 100.0) == 50.0


def test_drag_tracks_position_and_velocity() -> None:
    tracker = DragTracker(_area(), 200.0, 140.0)
    tracker.start(110.0, 60.0, 1000.0, element_left=100.0, element_top=50.0)

    left, top = tracker.move(160.0, 110.0, 1016.0)
    assert (left, top) == pytest.approx((150.0, 100.0))
    assert tracker.velocity_x == pytest.approx(3125.0)
    assert tracker.velocity_y == pytest.approx(3125.0)

    left, _ = tracker.move(500.0, 110.0, 1032.0)
    assert left == pytest.approx(200.0 + 290.0 * 0.3)

    assert tracker.end() == pytest.approx((200.0, 100.0))
    assert not tracker.is_dragging


def test_drag_offset_accounts_for_scale_and_minimum_interval() -> None:
    tracker = DragTracker(_area(), 200.0, 140.0)
    tracker.start(185.0, 118.0, 0.0, element_left=100.0, element_top=50.0, scale=0.85)

    left, top = tracker.move(185.0, 118.0, 0.2)
    assert (left, top) == pytest.approx((85.0, 38.0))

    tracker.move(186.0, 118.0, 0.4)
    assert tracker.velocity_x == pytest.approx(1000.0)


def test_move_without_drag_is_ignored() -> None:
    tracker = DragTracker(_area(), 200.0, 140.0)

    assert tracker.move(50.0, 50.0, 10.0) == (0.0, 0.0)
    assert tracker.end() == (0.0, 0.0)
