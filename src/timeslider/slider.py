"""Single scrollable time slider driven by host gesture events."""

import datetime as dt
from time import monotonic
from typing import Callable, NamedTuple

from timeslider.calendar import UnitSpec, add_units
from timeslider.config import Orientation, SliderConfig, get_default_config
from timeslider.engine import ScrollEngine
from timeslider.formatting import Formatter, StrftimeFormatter, resolve_tz
from timeslider.kinematics import deceleration_for
from timeslider.logging import get_logger
from timeslider.scrollable import TimeScrollable, TimeScrollListener
from timeslider.units import UnitCycle


def _monotonic_ms() -> float:
    return monotonic() * 1000.0


class VisibleItem(NamedTuple):
    """One rendered cell: the active item has offset 0."""

    offset: int
    time: int
    label: str
    selected: bool


class TimeSlider(TimeScrollable):
    """Leaf TimeScrollable combining a UnitCycle with a ScrollEngine.

    The host delivers gesture callbacks (``on_press_start``, ``on_drag``,
    ``on_fling``, ``on_single_tap``, ``on_double_tap``) and animation ticks
    (``on_animation_tick``) on one thread. After every state change the
    optional ``invalidate`` callback is invoked so the host can redraw.
    """

    def __init__(
        self,
        config: SliderConfig | None = None,
        time: int = 0,
        formatter: Formatter | None = None,
        clock: Callable[[], float] | None = None,
        invalidate: Callable[[], None] | None = None,
        name: str | None = None,
    ) -> None:
        """Initialize a TimeSlider.

        Args:
            config: Slider configuration. Defaults to the module defaults.
            time: Initial discrete time in epoch milliseconds.
            formatter: Renders items for display. Defaults to strftime.
            clock: Returns the current time in milliseconds for fling
                sampling. Defaults to a monotonic clock.
            invalidate: Called after every state change.
            name: Identifier bound into log events.
        """
        self._config = config or get_default_config()
        self._units = UnitCycle.from_config(self._config)
        self._engine = ScrollEngine(
            time=time,
            scroll_speed=self._config.scroll_speed,
            deceleration=deceleration_for(self._config.friction, self._config.density),
        )
        self.set_item_size(self._config.item_width, self._config.item_height)
        self._time_zone = resolve_tz(self._config.time_zone)
        self._locale = self._config.locale
        self._formatter = formatter or StrftimeFormatter()
        self._clock = clock or _monotonic_ms
        self._listener: TimeScrollListener | None = None
        self.invalidate = invalidate
        self.name = name
        self._log = get_logger(__name__).bind(slider=name or hex(id(self)))

    def __repr__(self) -> str:
        return f"TimeSlider(name={self.name!r}, time={self.get_time()})"

    # Configuration and layout

    @property
    def config(self) -> SliderConfig:
        return self._config

    @property
    def orientation(self) -> Orientation:
        return self._config.orientation

    @property
    def units(self) -> UnitCycle:
        return self._units

    @property
    def engine(self) -> ScrollEngine:
        return self._engine

    @property
    def current_unit(self) -> UnitSpec:
        return self._units.current()

    @property
    def time_zone(self) -> dt.tzinfo:
        return self._time_zone

    @property
    def locale(self) -> str | None:
        return self._locale

    def set_item_size(self, width: int, height: int) -> None:
        """Set the measured item box; the scroll axis picks the pixel scale."""
        self._item_width = max(int(width), 0)
        self._item_height = max(int(height), 0)
        self._engine.pixels_per_unit = (
            self._item_width if self.orientation.is_horizontal else self._item_height
        )

    # TimeScrollable

    def set_on_time_scroll_listener(self, listener: TimeScrollListener | None) -> None:
        self._listener = listener
        if listener is not None:
            listener.on_time_scroll(self.get_time(), self)

    def get_time(self) -> int:
        return self._engine.time

    def set_time(self, time: int) -> None:
        self._engine.set_time(time)
        self._invalidate()

    def set_time_zone(self, time_zone: str | dt.tzinfo) -> None:
        self._time_zone = resolve_tz(time_zone)
        self._invalidate()

    def set_locale(self, locale: str | None) -> None:
        self._locale = locale
        self._invalidate()

    def cycle_time_units(self) -> None:
        spec = self._units.advance()
        self._log.debug(
            "time_unit_cycled", index=self._units.index, unit=spec.unit.name, factor=spec.factor
        )
        self._switch_to_manual()
        self._invalidate()

    def reset_scrolling(self) -> None:
        self._units.reset()
        self._invalidate()

    def get_current_scroll_unit_name(self) -> str | None:
        return self._units.current().name

    def get_next_scroll_unit_name(self) -> str | None:
        return self._units.next().name

    # Gestures

    def on_press_start(self) -> None:
        """Pointer down: start a session and stop any running fling."""
        self._engine.begin_session(self.current_unit)
        self._invalidate()

    def on_drag(self, distance_x: float, distance_y: float) -> None:
        """Scroll by the distance since the previous drag sample.

        Distances are previous-minus-current pointer positions in pixels.
        """
        spec = self.current_unit
        if not self._engine.is_ready(spec):
            return
        session = self._engine.session
        if session is None or not session.dragged:
            self._switch_to_manual()

        distance = distance_x if self.orientation.is_horizontal else distance_y
        _, changed = self._engine.apply_drag(distance, self.orientation.drag_sign, spec)
        if changed:
            self._notify_time_scroll()
            self._invalidate()

    def on_fling(
        self, velocity_x: float, velocity_y: float, now_ms: float | None = None
    ) -> None:
        """Start an inertial scroll with the release velocity in pixels/s."""
        velocity = velocity_x if self.orientation.is_horizontal else velocity_y
        now = self._clock() if now_ms is None else now_ms
        # velocity points along the pointer motion, drag distance against it
        if self._engine.apply_fling(
            velocity, -self.orientation.drag_sign, self.current_unit, now
        ):
            self._invalidate()

    def on_animation_tick(self, now_ms: float | None = None) -> bool:
        """Sample a running fling. Returns True while it is still running."""
        now = self._clock() if now_ms is None else now_ms
        time, changed, running = self._engine.compute_scroll(self.current_unit, now)
        if changed:
            if self._listener is not None:
                self._listener.on_time_changed(time, self)
            self._invalidate()
        return running

    def on_release(self) -> None:
        """Pointer up without a fling ends the session."""
        if not self._engine.is_flinging:
            self._engine.end_session()

    def stop_fling(self) -> None:
        self._engine.cancel_fling()

    def on_single_tap(self) -> None:
        """Tap selects this slider as the active one."""
        self._notify_unit_changed()

    def on_double_tap(self) -> None:
        self.cycle_time_units()

    # Rendering input

    def format_time(self, instant: int | None = None, spec: UnitSpec | None = None) -> str:
        spec = spec or self.current_unit
        instant = self.get_time() if instant is None else instant
        return self._formatter.format(instant, spec.pattern, self._time_zone, self._locale)

    def visible_items(self) -> list[VisibleItem]:
        """Items around the current time, one unit step apart.

        Each item is offset from the current time itself, so the selected
        item always equals :meth:`get_time`.
        """
        spec = self.current_unit
        time = self.get_time()
        items = []
        for offset in range(-self._config.items_before, self._config.items_after + 1):
            instant = add_units(time, spec.unit, offset * spec.factor)
            items.append(
                VisibleItem(
                    offset=offset,
                    time=instant,
                    label=self.format_time(instant, spec),
                    selected=offset == 0,
                )
            )
        return items

    # Internals

    def _switch_to_manual(self) -> None:
        """Re-quantize onto the active unit and announce this slider as active."""
        self._engine.update_time(self.get_time(), self.current_unit)
        self._notify_time_scroll()
        self._notify_unit_changed()

    def _notify_time_scroll(self) -> None:
        if self._listener is not None:
            self._listener.on_time_scroll(self.get_time(), self)

    def _notify_unit_changed(self) -> None:
        if self._listener is not None:
            self._listener.on_scroll_unit_changed(self)

    def _invalidate(self) -> None:
        if self.invalidate is not None:
            self.invalidate()
