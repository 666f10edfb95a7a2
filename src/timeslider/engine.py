"""Translation of drag and fling gestures into quantized time changes."""

import threading
from dataclasses import dataclass

from timeslider.calendar import UnitSpec, cascade, units_to_approx_millis
from timeslider.kinematics import FlingTrajectory, deceleration_for
from timeslider.logging import get_logger


@dataclass
class ScrollSession:
    """Ephemeral state of one gesture, from press to release or fling end."""

    origin_time: int
    continuous_time: int
    millis_per_pixel: float
    fling: FlingTrajectory | None = None
    dragged: bool = False


class ScrollEngine:
    """Owns the discrete time of a slider and applies gestures to it.

    The discrete time only changes through :meth:`set_time` or through the
    field cascade in :meth:`update_time`. Gestures are ignored while the
    pixel scale is unknown (``pixels_per_unit <= 0``) or no unit is active.

    Every gesture sample holds one reentrant lock from reading the session
    to writing the discrete time.
    """

    def __init__(
        self,
        time: int = 0,
        scroll_speed: float = 1.0,
        pixels_per_unit: int = 0,
        deceleration: float | None = None,
    ) -> None:
        self._time = int(time)
        self.scroll_speed = scroll_speed
        self.pixels_per_unit = pixels_per_unit
        self.deceleration = (
            deceleration if deceleration is not None else deceleration_for(0.015)
        )
        self._session: ScrollSession | None = None
        self._lock = threading.RLock()
        self._log = get_logger(__name__)

    @property
    def time(self) -> int:
        return self._time

    @property
    def session(self) -> ScrollSession | None:
        return self._session

    @property
    def is_flinging(self) -> bool:
        return self._session is not None and self._session.fling is not None

    def set_time(self, time: int) -> None:
        """Assign the discrete time directly."""
        with self._lock:
            self._time = int(time)

    def is_ready(self, spec: UnitSpec | None) -> bool:
        return spec is not None and self.pixels_per_unit > 0

    def millis_per_pixel(self, spec: UnitSpec) -> float:
        return (
            self.scroll_speed
            * units_to_approx_millis(spec.unit)
            * spec.factor
            / self.pixels_per_unit
        )

    def begin_session(self, spec: UnitSpec | None) -> ScrollSession | None:
        """Start a gesture at the current discrete time.

        Any running fling is cancelled. Returns None when the engine is not
        ready to scroll.
        """
        with self._lock:
            self.cancel_fling()
            if not self.is_ready(spec):
                self._session = None
                return None
            self._session = ScrollSession(
                origin_time=self._time,
                continuous_time=self._time,
                millis_per_pixel=self.millis_per_pixel(spec),
            )
            self._log.debug(
                "session_started",
                time=self._time,
                unit=spec.unit.name,
                factor=spec.factor,
                millis_per_pixel=self._session.millis_per_pixel,
            )
            return self._session

    def end_session(self) -> None:
        with self._lock:
            self._session = None

    def update_time(self, continuous_time: int, spec: UnitSpec) -> bool:
        """Cascade the fields of ``continuous_time`` onto the discrete time.

        Returns whether the discrete time changed.
        """
        with self._lock:
            new_time = cascade(self._time, continuous_time, spec)
            changed = new_time != self._time
            self._time = new_time
            return changed

    def apply_drag(
        self, distance: float, axis_sign: int, spec: UnitSpec | None
    ) -> tuple[int, bool]:
        """Advance the continuous time by a drag distance in pixels.

        Returns the discrete time and whether it changed.
        """
        with self._lock:
            if not self.is_ready(spec):
                return self._time, False
            session = self._session
            if session is None or session.fling is not None:
                session = self.begin_session(spec)
            session.continuous_time += int(axis_sign * distance * session.millis_per_pixel)
            session.dragged = True
            changed = self.update_time(session.continuous_time, spec)
            return self._time, changed

    def apply_fling(
        self, velocity: float, axis_sign: int, spec: UnitSpec | None, now_ms: float
    ) -> bool:
        """Start a decelerating trajectory from the current discrete time.

        Returns whether a fling was started.
        """
        with self._lock:
            if not self.is_ready(spec):
                return False
            session = self._session or self.begin_session(spec)
            session.origin_time = self._time
            session.continuous_time = self._time
            session.fling = FlingTrajectory(axis_sign * velocity, self.deceleration, now_ms)
            self._log.debug(
                "fling_started",
                time=self._time,
                velocity=session.fling.velocity,
                duration_ms=round(session.fling.duration_ms, 1),
            )
            return True

    def compute_scroll(
        self, spec: UnitSpec | None, now_ms: float
    ) -> tuple[int, bool, bool]:
        """Sample the running fling at ``now_ms``.

        Returns the discrete time, whether it changed, and whether the fling
        is still running after this sample.
        """
        with self._lock:
            session = self._session
            if session is None or session.fling is None or spec is None:
                return self._time, False, False
            fling = session.fling
            offset = fling.offset_at(now_ms)
            session.continuous_time = session.origin_time + int(
                session.millis_per_pixel * offset
            )
            changed = self.update_time(session.continuous_time, spec)
            running = not fling.is_finished(now_ms)
            if not running:
                session.fling = None
                self._log.debug("fling_finished", time=self._time, offset=offset)
            return self._time, changed, running

    def cancel_fling(self) -> None:
        with self._lock:
            if self._session is not None and self._session.fling is not None:
                self._session.fling.force_finished()
                self._session.fling = None
