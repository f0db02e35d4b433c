from liquidglass.motion.driver import (
    DRAGGING_POSE,
    FRAME_DT_MAX,
    RESTING_POSE,
    FrameDriver,
    GlassSprings,
    MotionFrame,
    run_motion_trace,
    squish_targets,
)
from liquidglass.motion.pointer import DragTracker, Rect, RectCache
from liquidglass.motion.spring import Spring, critical_damping

__all__ = [
    "Spring",
    "critical_damping",
    "FRAME_DT_MAX",
    "RESTING_POSE",
    "DRAGGING_POSE",
    "GlassSprings",
    "MotionFrame",
    "FrameDriver",
    "squish_targets",
    "run_motion_trace",
    "Rect",
    "RectCache",
    "DragTracker",
]
