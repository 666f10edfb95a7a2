"""Friction-based fling trajectory sampled on animation ticks."""

import math

GRAVITY_EARTH = 9.80665  # m/s^2
INCHES_PER_METER = 39.37
BASE_DPI = 160.0


def deceleration_for(friction: float, density: float = 1.0) -> float:
    """Deceleration in pixels/s^2 for a friction coefficient and display density."""
    ppi = density * BASE_DPI
    return GRAVITY_EARTH * INCHES_PER_METER * ppi * friction


class FlingTrajectory:
    """Pixel offset of a fling decelerating uniformly to rest.

    The offset starts at 0 at ``start_ms`` and follows
    ``v*t - sign(v)*a*t^2/2`` until the velocity reaches zero.
    """

    def __init__(self, velocity: float, deceleration: float, start_ms: float) -> None:
        self.velocity = float(velocity)
        self.deceleration = abs(float(deceleration))
        self.start_ms = float(start_ms)
        self._forced = False
        if self.velocity == 0 or self.deceleration == 0:
            self.duration_ms = 0.0
        else:
            self.duration_ms = abs(self.velocity) / self.deceleration * 1000.0

    @property
    def final_offset(self) -> int:
        return self._offset(self.duration_ms / 1000.0)

    def _offset(self, t: float) -> int:
        sign = math.copysign(1.0, self.velocity)
        return int(round(self.velocity * t - sign * self.deceleration * t * t / 2.0))

    def _elapsed_s(self, now_ms: float) -> float:
        elapsed = min(max(now_ms - self.start_ms, 0.0), self.duration_ms)
        return elapsed / 1000.0

    def offset_at(self, now_ms: float) -> int:
        """Integer pixel offset reached at ``now_ms``."""
        return self._offset(self._elapsed_s(now_ms))

    def velocity_at(self, now_ms: float) -> float:
        if self._forced:
            return 0.0
        t = self._elapsed_s(now_ms)
        sign = math.copysign(1.0, self.velocity)
        return self.velocity - sign * self.deceleration * t

    def is_finished(self, now_ms: float) -> bool:
        return self._forced or now_ms - self.start_ms >= self.duration_ms

    def force_finished(self) -> None:
        """Cancel the trajectory; later samples report it finished."""
        self._forced = True
