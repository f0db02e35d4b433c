from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from dataclasses import asdict, dataclass, field

import pandas as pd

from liquidglass.motion.spring import Spring

logger = logging.getLogger(__name__)

FRAME_DT_MAX = 1.0 / 60.0
VELOCITY_DECAY = 0.95
SQUISH_MAX = 0.15
SQUISH_SPEED_SCALE = 3000.0
SQUISH_MIN_SPEED = 50.0
POINTER_REST_SPEED = 1.0
INSET_ALPHA_RATIO = 0.6

SPRING_NAMES = (
    "scale",
    "scale_x",
    "scale_y",
    "shadow_offset_x",
    "shadow_offset_y",
    "shadow_blur",
    "shadow_alpha",
    "refraction_boost",
)


def clamp_frame_dt(measured_dt: float) -> float:
    return max(0.0, min(measured_dt, FRAME_DT_MAX))


@dataclass(frozen=True)
class Pose:
    scale: float
    shadow_offset_x: float
    shadow_offset_y: float
    shadow_blur: float
    shadow_alpha: float
    refraction_boost: float


RESTING_POSE = Pose(
    scale=0.85,
    shadow_offset_x=0.0,
    shadow_offset_y=4.0,
    shadow_blur=12.0,
    shadow_alpha=0.15,
    refraction_boost=0.8,
)
DRAGGING_POSE = Pose(
    scale=1.0,
    shadow_offset_x=4.0,
    shadow_offset_y=16.0,
    shadow_blur=24.0,
    shadow_alpha=0.22,
    refraction_boost=1.0,
)


def squish_targets(velocity_x: float, velocity_y: float) -> tuple[float, float]:
    """Stretch along the direction of travel and compress across it."""
    speed = math.hypot(velocity_x, velocity_y)
    if speed <= SQUISH_MIN_SPEED:
        return 1.0, 1.0
    amount = min(SQUISH_MAX, speed / SQUISH_SPEED_SCALE)
    along_x = abs(velocity_x / speed)
    along_y = abs(velocity_y / speed)
    return (
        1.0 + (amount * along_x) - (amount * 0.5 * along_y),
        1.0 + (amount * along_y) - (amount * 0.5 * along_x),
    )


@dataclass
class GlassSprings:
    scale: Spring = field(default_factory=lambda: Spring(RESTING_POSE.scale, 400.0, 25.0))
    scale_x: Spring = field(default_factory=lambda: Spring(1.0, 400.0, 30.0))
    scale_y: Spring = field(default_factory=lambda: Spring(1.0, 400.0, 30.0))
    shadow_offset_x: Spring = field(default_factory=lambda: Spring(0.0, 400.0, 30.0))
    shadow_offset_y: Spring = field(default_factory=lambda: Spring(4.0, 400.0, 30.0))
    shadow_blur: Spring = field(default_factory=lambda: Spring(12.0, 400.0, 30.0))
    shadow_alpha: Spring = field(default_factory=lambda: Spring(0.15, 300.0, 25.0))
    refraction_boost: Spring = field(default_factory=lambda: Spring(0.8, 300.0, 18.0))

    def items(self) -> Iterator[tuple[str, Spring]]:
        for name in SPRING_NAMES:
            yield name, getattr(self, name)

    def apply_pose(self, pose: Pose) -> None:
        self.scale.set_target(pose.scale)
        self.shadow_offset_x.set_target(pose.shadow_offset_x)
        self.shadow_offset_y.set_target(pose.shadow_offset_y)
        self.shadow_blur.set_target(pose.shadow_blur)
        self.shadow_alpha.set_target(pose.shadow_alpha)
        self.refraction_boost.set_target(pose.refraction_boost)

    def all_settled(self) -> bool:
        return all(spring.is_settled() for _, spring in self.items())


@dataclass(frozen=True)
class MotionFrame:
    scale: float
    scale_x: float
    scale_y: float
    shadow_offset_x: float
    shadow_offset_y: float
    shadow_blur: float
    shadow_alpha: float
    refraction_boost: float
    settled: bool

    @property
    def transform_scale_x(self) -> float:
        return self.scale * self.scale_x

    @property
    def transform_scale_y(self) -> float:
        return self.scale * self.scale_y

    @property
    def inset_alpha(self) -> float:
        return self.shadow_alpha * INSET_ALPHA_RATIO

    @property
    def inset_offset_x(self) -> float:
        return self.shadow_offset_x * 0.3

    @property
    def inset_offset_y(self) -> float:
        return self.shadow_offset_y * 0.4

    def to_dict(self) -> dict[str, float | bool]:
        payload: dict[str, float | bool] = asdict(self)
        payload["transform_scale_x"] = self.transform_scale_x
        payload["transform_scale_y"] = self.transform_scale_y
        payload["inset_alpha"] = self.inset_alpha
        payload["inset_offset_x"] = self.inset_offset_x
        payload["inset_offset_y"] = self.inset_offset_y
        return payload


class FrameDriver:
    """Per-frame spring update for one glass element.

    The caller schedules frames; after each :meth:`step` it keeps scheduling while
    :attr:`needs_frame` is true and resumes once an interaction changes a target.
    """

    def __init__(self, springs: GlassSprings | None = None) -> None:
        self.springs = springs or GlassSprings()
        self.is_dragging = False
        self.velocity_x = 0.0
        self.velocity_y = 0.0
        self.needs_frame = True

    def press(self) -> None:
        self.is_dragging = True
        self.velocity_x = 0.0
        self.velocity_y = 0.0
        self.needs_frame = True

    def set_pointer_velocity(self, velocity_x: float, velocity_y: float) -> None:
        self.velocity_x = velocity_x
        self.velocity_y = velocity_y
        self.needs_frame = True

    def release(self) -> None:
        self.is_dragging = False
        self.needs_frame = True

    def _pointer_at_rest(self) -> bool:
        return (
            abs(self.velocity_x) < POINTER_REST_SPEED and abs(self.velocity_y) < POINTER_REST_SPEED
        )

    def step(self, dt: float = FRAME_DT_MAX) -> MotionFrame:
        dt = clamp_frame_dt(dt)
        self.springs.apply_pose(DRAGGING_POSE if self.is_dragging else RESTING_POSE)
        target_x, target_y = squish_targets(self.velocity_x, self.velocity_y)
        self.springs.scale_x.set_target(target_x)
        self.springs.scale_y.set_target(target_y)

        values = {name: spring.update(dt) for name, spring in self.springs.items()}

        if not self.is_dragging:
            self.velocity_x *= VELOCITY_DECAY
            self.velocity_y *= VELOCITY_DECAY

        settled = self.springs.all_settled() and self._pointer_at_rest()
        if settled and self.needs_frame:
            logger.debug("Glass motion settled; suspending frame updates")
        self.needs_frame = not settled
        return MotionFrame(settled=settled, **values)


def run_motion_trace(
    *,
    frames: int,
    press_frame: int | None = None,
    release_frame: int | None = None,
    pointer_velocity: tuple[float, float] = (0.0, 0.0),
    dt: float = FRAME_DT_MAX,
    maximum_displacement: float = 0.0,
    refraction_scale: float = 1.0,
    springs: GlassSprings | None = None,
) -> pd.DataFrame:
    """Run a scripted press/drag/release and record every frame.

    The pointer moves at ``pointer_velocity`` (px/s) while pressed; after the
    release it coasts and decays as in a live session.
    """
    if frames <= 0:
        msg = "frames must be positive"
        raise ValueError(msg)
    if dt <= 0:
        msg = "dt must be positive"
        raise ValueError(msg)
    if press_frame is not None and release_frame is not None and release_frame < press_frame:
        msg = "release_frame must not precede press_frame"
        raise ValueError(msg)

    driver = FrameDriver(springs)
    rows: list[dict[str, int | float | bool]] = []
    for tick in range(frames):
        if tick == press_frame:
            driver.press()
        if driver.is_dragging:
            driver.set_pointer_velocity(*pointer_velocity)
        if tick == release_frame and driver.is_dragging:
            driver.release()

        frame = driver.step(dt)
        row: dict[str, int | float | bool] = {
            "tick": tick,
            "time_s": float(tick * clamp_frame_dt(dt)),
            "is_dragging": driver.is_dragging,
            "velocity_x": driver.velocity_x,
            "velocity_y": driver.velocity_y,
        }
        row.update(frame.to_dict())
        row["displacement_scale"] = (
            maximum_displacement * refraction_scale * frame.refraction_boost
        )
        rows.append(row)

    return pd.DataFrame(rows)


__all__ = [
    "FRAME_DT_MAX",
    "SPRING_NAMES",
    "Pose",
    "RESTING_POSE",
    "DRAGGING_POSE",
    "GlassSprings",
    "MotionFrame",
    "FrameDriver",
    "clamp_frame_dt",
    "squish_targets",
    "run_motion_trace",
]
