from __future__ import annotations

import math
from dataclasses import dataclass, field

DEFAULT_STIFFNESS = 300.0
DEFAULT_DAMPING = 20.0
SETTLE_TOLERANCE = 1e-3


def critical_damping(stiffness: float) -> float:
    """Damping coefficient at which a unit-mass spring stops overshooting."""
    return 2.0 * math.sqrt(max(stiffness, 0.0))


@dataclass
class Spring:
    """Unit-mass damped spring pulling ``value`` towards ``target``.

    Integrated with semi-implicit Euler, which stays stable for the frame steps
    used here as long as callers keep ``dt`` at or below 1/30 s.
    """

    value: float
    stiffness: float = DEFAULT_STIFFNESS
    damping: float = DEFAULT_DAMPING
    target: float = field(init=False)
    velocity: float = field(default=0.0, init=False)

    def __post_init__(self) -> None:
        self.target = self.value

    def set_target(self, target: float) -> None:
        self.target = target

    def update(self, dt: float) -> float:
        force = (self.target - self.value) * self.stiffness
        damping_force = self.velocity * self.damping
        self.velocity += (force - damping_force) * dt
        self.value += self.velocity * dt
        return self.value

    def is_settled(self) -> bool:
        return (
            abs(self.target - self.value) < SETTLE_TOLERANCE
            and abs(self.velocity) < SETTLE_TOLERANCE
        )

    def reset(self, value: float) -> None:
        self.value = value
        self.target = value
        self.velocity = 0.0


__all__ = [
    "DEFAULT_STIFFNESS",
    "DEFAULT_DAMPING",
    "SETTLE_TOLERANCE",
    "Spring",
    "critical_damping",
]
