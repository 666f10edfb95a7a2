"""Contract shared by single sliders and slider layouts."""

import datetime as dt
from abc import ABC, abstractmethod
from typing import Protocol


class TimeScrollListener(Protocol):
    """Receives notifications from a TimeScrollable."""

    def on_time_scroll(self, time: int, source: "TimeScrollable | None") -> None:
        """Discrete time or active unit changed by a drag, unit cycle or
        switch to manual mode."""
        ...

    def on_time_changed(self, time: int, source: "TimeScrollable | None") -> None:
        """Discrete time changed by a fling sample."""
        ...

    def on_scroll_unit_changed(self, source: "TimeScrollable | None") -> None:
        """``source`` became the active scrollable."""
        ...


class TimeScrollable(ABC):
    """A value holding an absolute instant that can be scrolled by unit."""

    @abstractmethod
    def set_on_time_scroll_listener(self, listener: TimeScrollListener | None) -> None:
        """Register the single listener, replacing any previous one."""
        pass

    @abstractmethod
    def get_time(self) -> int:
        """Current discrete time in epoch milliseconds."""
        pass

    @abstractmethod
    def set_time(self, time: int) -> None:
        pass

    @abstractmethod
    def set_time_zone(self, time_zone: str | dt.tzinfo) -> None:
        """Zone used for display only."""
        pass

    @abstractmethod
    def set_locale(self, locale: str | None) -> None:
        """Locale used for display only."""
        pass

    @abstractmethod
    def cycle_time_units(self) -> None:
        """Switch to the next scroll unit."""
        pass

    @abstractmethod
    def reset_scrolling(self) -> None:
        """Return to the first scroll unit without notifying."""
        pass

    @abstractmethod
    def get_current_scroll_unit_name(self) -> str | None:
        pass

    @abstractmethod
    def get_next_scroll_unit_name(self) -> str | None:
        pass
