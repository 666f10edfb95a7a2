"""Tests for TimeSliderLayout synchronization."""

import datetime as dt
from datetime import datetime, timedelta, timezone

import pytest

from timeslider import SliderConfig, TimeScrollable, TimeSlider, TimeSliderLayout

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def ms(*args: int) -> int:
    return (datetime(*args, tzinfo=timezone.utc) - EPOCH) // timedelta(milliseconds=1)


T0 = ms(2024, 3, 10, 8, 30)


class RecordingListener:
    """Listener that records every notification in order."""

    def __init__(self):
        self.events = []

    def on_time_scroll(self, time, source):
        self.events.append(("scroll", time, source))

    def on_time_changed(self, time, source):
        self.events.append(("changed", time, source))

    def on_scroll_unit_changed(self, source):
        self.events.append(("unit", source))


class FakeScrollable(TimeScrollable):
    """TimeScrollable that records the calls it receives."""

    def __init__(self, name, time=0, unit_names=("day", "month")):
        self.name = name
        self.time = time
        self.unit_names = list(unit_names)
        self.listener = None
        self.set_time_calls = []
        self.time_zones = []
        self.locales = []
        self.cycles = 0
        self.resets = 0

    def __repr__(self):
        return f"FakeScrollable({self.name!r})"

    def set_on_time_scroll_listener(self, listener):
        self.listener = listener
        if listener is not None:
            listener.on_time_scroll(self.time, self)

    def get_time(self):
        return self.time

    def set_time(self, time):
        self.time = time
        self.set_time_calls.append(time)

    def set_time_zone(self, time_zone):
        self.time_zones.append(time_zone)

    def set_locale(self, locale):
        self.locales.append(locale)

    def cycle_time_units(self):
        self.cycles += 1
        self.unit_names.append(self.unit_names.pop(0))

    def reset_scrolling(self):
        self.resets += 1

    def get_current_scroll_unit_name(self):
        return self.unit_names[0]

    def get_next_scroll_unit_name(self):
        return self.unit_names[1 % len(self.unit_names)]

    def scroll_to(self, time):
        """Simulate a drag producing ``time``."""
        self.time = time
        self.listener.on_time_scroll(time, self)

    def fling_to(self, time):
        self.time = time
        self.listener.on_time_changed(time, self)


def reset_calls(*fakes):
    for fake in fakes:
        fake.set_time_calls.clear()


@pytest.fixture
def fakes():
    return FakeScrollable("a"), FakeScrollable("b"), FakeScrollable("c")


@pytest.fixture
def layout(fakes):
    layout = TimeSliderLayout(fakes, name="root")
    reset_calls(*fakes)
    return layout


class TestAttach:
    """Test structural attachment of children."""

    def test_children_listen_to_layout(self, layout, fakes):
        assert all(fake.listener is layout for fake in fakes)
        assert layout.children == fakes

    def test_zone_and_locale_forwarded(self):
        a = FakeScrollable("a")
        TimeSliderLayout([a], time_zone="+01:00", locale="fr_FR")
        assert a.time_zones == [dt.timezone(timedelta(hours=1))]
        assert a.locales == ["fr_FR"]

    def test_registration_synchronizes_to_last_child(self):
        """Each child reports on registration; the last one wins."""
        a, b = FakeScrollable("a", time=100), FakeScrollable("b", time=200)
        layout = TimeSliderLayout([a, b])
        assert layout.get_time() == 200
        assert a.time == 200
        assert b.set_time_calls == []
        assert layout.active_scrollable is b


class TestSynchronization:
    """Test fan-out of child events."""

    def test_scroll_not_echoed_to_source(self, layout, fakes):
        """The originating child gets no set_time; siblings get exactly one."""
        a, b, c = fakes
        a.scroll_to(T0)

        assert a.set_time_calls == []
        assert b.set_time_calls == [T0]
        assert c.set_time_calls == [T0]
        assert layout.get_time() == T0

    def test_fling_not_echoed_to_source(self, layout, fakes):
        a, b, c = fakes
        b.fling_to(T0)

        assert b.set_time_calls == []
        assert a.set_time_calls == [T0]
        assert c.set_time_calls == [T0]

    def test_events_reemitted_once(self, layout, fakes):
        listener = RecordingListener()
        layout.set_on_time_scroll_listener(listener)
        listener.events.clear()
        a, b, _ = fakes

        a.scroll_to(T0)
        b.fling_to(T0 + 1)

        assert listener.events == [("scroll", T0, a), ("changed", T0 + 1, b)]

    def test_unit_change_sets_active(self, layout, fakes):
        listener = RecordingListener()
        layout.set_on_time_scroll_listener(listener)
        a, _, _ = fakes

        layout.on_scroll_unit_changed(a)

        assert layout.active_scrollable is a
        assert listener.events[-1] == ("unit", a)

    def test_registration_reports_layout_time(self, layout, fakes):
        listener = RecordingListener()
        fakes[0].scroll_to(T0)
        layout.set_on_time_scroll_listener(listener)
        assert listener.events == [("scroll", T0, fakes[0])]


class TestDirectCalls:
    """Test calls issued on the layout itself."""

    def test_set_time_reaches_all_children(self, layout, fakes):
        a, b, c = fakes
        a.scroll_to(T0)
        reset_calls(*fakes)

        layout.set_time(T0 + 5)

        assert [fake.set_time_calls for fake in fakes] == [[T0 + 5]] * 3
        assert layout.get_time() == T0 + 5

    def test_set_time_zone_reaches_all_children(self, layout, fakes):
        layout.set_time_zone("UTC")
        assert all(fake.time_zones[-1] == dt.timezone.utc for fake in fakes)

    def test_set_locale_reaches_all_children(self, layout, fakes):
        layout.set_locale("ja_JP")
        assert all(fake.locales[-1] == "ja_JP" for fake in fakes)

    def test_unit_calls_delegate_to_active_only(self, layout, fakes):
        a, b, c = fakes
        b.scroll_to(T0)

        layout.cycle_time_units()
        layout.reset_scrolling()

        assert (a.cycles, b.cycles, c.cycles) == (0, 1, 0)
        assert (a.resets, b.resets, c.resets) == (0, 1, 0)
        assert layout.get_current_scroll_unit_name() == "month"
        assert layout.get_next_scroll_unit_name() == "day"

    def test_unit_calls_without_active_child(self):
        layout = TimeSliderLayout()
        layout.cycle_time_units()
        layout.reset_scrolling()
        assert layout.get_current_scroll_unit_name() is None
        assert layout.get_next_scroll_unit_name() is None
        assert layout.active_scrollable is None


class TestNesting:
    """Test layouts nested inside layouts."""

    def test_innermost_source_reaches_outer_listener(self):
        x, y, z = FakeScrollable("x"), FakeScrollable("y"), FakeScrollable("z")
        inner = TimeSliderLayout([x, y], name="inner")
        outer = TimeSliderLayout([inner, z], name="outer")
        listener = RecordingListener()
        outer.set_on_time_scroll_listener(listener)
        listener.events.clear()
        reset_calls(x, y, z)

        x.scroll_to(T0)

        assert listener.events == [("scroll", T0, x)]
        assert x.set_time_calls == []
        assert y.set_time_calls == [T0]
        assert z.set_time_calls == [T0]
        assert outer.active_scrollable is inner
        assert outer.active_source is x
        assert outer.contains(x)
        assert not inner.contains(z)

    def test_outer_delegates_through_inner(self):
        x, y = FakeScrollable("x"), FakeScrollable("y")
        inner = TimeSliderLayout([x, y])
        outer = TimeSliderLayout([inner])
        x.scroll_to(T0)

        outer.cycle_time_units()

        assert x.cycles == 1
        assert y.cycles == 0


class TestWithSliders:
    """End-to-end with real sliders."""

    def test_drag_in_one_slider_moves_the_other(self):
        minutes = TimeSlider(SliderConfig(time_units=["minute"]), time=T0, name="minutes")
        hours = TimeSlider(SliderConfig(time_units=["hour"]), time=T0, name="hours")
        layout = TimeSliderLayout([minutes, hours])
        listener = RecordingListener()
        layout.set_on_time_scroll_listener(listener)
        listener.events.clear()

        minutes.on_press_start()
        minutes.on_drag(0, 90)

        assert minutes.get_time() == T0 + 60_000
        assert hours.get_time() == T0 + 60_000
        assert layout.get_time() == T0 + 60_000
        assert layout.active_scrollable is minutes
        assert listener.events[-1] == ("scroll", T0 + 60_000, minutes)

    def test_layout_zone_reaches_sliders(self):
        slider = TimeSlider(SliderConfig(time_units=["hour"], format_strings=["%H"]), time=ms(2024, 1, 1, 12))
        TimeSliderLayout([slider], time_zone="-05:00")
        assert slider.format_time() == "07"
