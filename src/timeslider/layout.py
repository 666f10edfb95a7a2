"""Composite scrollable keeping several child sliders in sync."""

import datetime as dt
import weakref
from typing import Iterable

from timeslider.formatting import resolve_tz
from timeslider.logging import get_logger
from timeslider.scrollable import TimeScrollable, TimeScrollListener


class TimeSliderLayout(TimeScrollable):
    """A TimeScrollable hosting an ordered list of child TimeScrollables.

    The layout registers itself as the listener of every child. When a child
    reports a new time, every other child is set to that time and the event
    is re-emitted once to the layout's own listener with the originating
    slider as source. The child that produced the event never receives it
    back.

    Children are not owned: the layout only forwards calls to them. The
    active child is tracked by position.
    """

    def __init__(
        self,
        children: Iterable[TimeScrollable] = (),
        time: int = 0,
        time_zone: str | dt.tzinfo = "UTC",
        locale: str | None = None,
        name: str | None = None,
    ) -> None:
        self._time = int(time)
        self._time_zone = resolve_tz(time_zone)
        self._locale = locale
        self._children: list[TimeScrollable] = []
        self._active_index: int | None = None
        self._active_source: weakref.ref | None = None
        self._listener: TimeScrollListener | None = None
        self.name = name
        self._log = get_logger(__name__).bind(layout=name or hex(id(self)))
        for child in children:
            self.add_child(child)

    def __repr__(self) -> str:
        return f"TimeSliderLayout(name={self.name!r}, children={len(self._children)})"

    @property
    def children(self) -> tuple[TimeScrollable, ...]:
        return tuple(self._children)

    @property
    def active_scrollable(self) -> TimeScrollable | None:
        """Direct child that produced the most recent event, if any."""
        if self._active_index is None:
            return None
        return self._children[self._active_index]

    @property
    def active_source(self) -> TimeScrollable | None:
        """Innermost scrollable that produced the most recent event, if alive."""
        return self._active_source() if self._active_source is not None else None

    @property
    def time_zone(self) -> dt.tzinfo:
        return self._time_zone

    @property
    def locale(self) -> str | None:
        return self._locale

    def add_child(self, child: TimeScrollable) -> None:
        """Attach a child: forward zone and locale, then listen to it.

        A leaf child reports its time immediately on registration, which
        makes it the active child and synchronizes its siblings.
        """
        self._children.append(child)
        child.set_time_zone(self._time_zone)
        child.set_locale(self._locale)
        child.set_on_time_scroll_listener(self)
        self._log.debug("child_attached", child=repr(child), count=len(self._children))

    def contains(self, scrollable: TimeScrollable | None) -> bool:
        """True if ``scrollable`` is this layout or nested anywhere below it."""
        return scrollable is self or self._index_of(scrollable) is not None

    def _index_of(self, scrollable: TimeScrollable | None) -> int | None:
        if scrollable is None:
            return None
        for i, child in enumerate(self._children):
            if child is scrollable:
                return i
            if isinstance(child, TimeSliderLayout) and child.contains(scrollable):
                return i
        return None

    # TimeScrollListener

    def on_time_scroll(self, time: int, source: TimeScrollable | None) -> None:
        self._synchronize_time(time, source)
        if self._listener is not None:
            self._listener.on_time_scroll(time, source)

    def on_time_changed(self, time: int, source: TimeScrollable | None) -> None:
        self._synchronize_time(time, source)
        if self._listener is not None:
            self._listener.on_time_changed(time, source)

    def on_scroll_unit_changed(self, source: TimeScrollable | None) -> None:
        self._set_active(source)
        if self._listener is not None:
            self._listener.on_scroll_unit_changed(source)

    def _synchronize_time(self, time: int, source: TimeScrollable | None) -> None:
        self._time = int(time)
        self._set_active(source)
        for i, child in enumerate(self._children):
            if i != self._active_index:
                child.set_time(self._time)

    def _set_active(self, source: TimeScrollable | None) -> None:
        self._active_index = self._index_of(source)
        self._active_source = weakref.ref(source) if source is not None else None

    # TimeScrollable

    def set_on_time_scroll_listener(self, listener: TimeScrollListener | None) -> None:
        self._listener = listener
        if listener is not None:
            source = self.active_source
            listener.on_time_scroll(self._time, source if source is not None else self)

    def get_time(self) -> int:
        return self._time

    def set_time(self, time: int) -> None:
        self._time = int(time)
        for child in self._children:
            child.set_time(self._time)

    def set_time_zone(self, time_zone: str | dt.tzinfo) -> None:
        self._time_zone = resolve_tz(time_zone)
        for child in self._children:
            child.set_time_zone(self._time_zone)

    def set_locale(self, locale: str | None) -> None:
        self._locale = locale
        for child in self._children:
            child.set_locale(locale)

    def cycle_time_units(self) -> None:
        active = self.active_scrollable
        if active is not None:
            active.cycle_time_units()

    def reset_scrolling(self) -> None:
        active = self.active_scrollable
        if active is not None:
            active.reset_scrolling()

    def get_current_scroll_unit_name(self) -> str | None:
        active = self.active_scrollable
        return active.get_current_scroll_unit_name() if active is not None else None

    def get_next_scroll_unit_name(self) -> str | None:
        active = self.active_scrollable
        return active.get_next_scroll_unit_name() if active is not None else None
