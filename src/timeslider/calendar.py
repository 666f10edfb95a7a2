"""Calendar-unit arithmetic for scrollable time values.

Instants are signed integer milliseconds since 1970-01-01T00:00:00 UTC.
Calendar fields are always derived in UTC on the proleptic Gregorian
calendar. Years use era-signed (astronomical) numbering: year 0 is 1 BC,
year -1 is 2 BC, and so on.
"""

import math
from enum import IntEnum
from typing import NamedTuple

import numpy as np

from timeslider.logging import get_logger

_log = get_logger(__name__)

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR


class Unit(IntEnum):
    """Calendar granularity, ordered from finest to coarsest."""

    MILLISECOND = 0
    SECOND = 1
    MINUTE = 2
    HOUR = 3
    DAY = 4
    MONTH = 5
    YEAR = 6


class UnitSpec(NamedTuple):
    """A scroll granularity: unit, multiplier, display name and format pattern."""

    unit: Unit
    factor: int = 1
    name: str | None = None
    pattern: str | None = None


class CalendarFields(NamedTuple):
    """Broken-down UTC representation of an instant."""

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0


# Unit name -> (unit, factor). Composite year granularities carry a factor.
UNIT_TABLE: dict[str, tuple[Unit, int]] = {
    "millisecond": (Unit.MILLISECOND, 1),
    "second": (Unit.SECOND, 1),
    "minute": (Unit.MINUTE, 1),
    "hour": (Unit.HOUR, 1),
    "day": (Unit.DAY, 1),
    "month": (Unit.MONTH, 1),
    "year": (Unit.YEAR, 1),
    "decade": (Unit.YEAR, 10),
    "century": (Unit.YEAR, 100),
    "millennium": (Unit.YEAR, 1000),
}

# Nominal size of one step of each unit in steps of the next finer unit.
_APPROX_STEP: dict[Unit, int] = {
    Unit.MILLISECOND: 1,
    Unit.SECOND: 1000,
    Unit.MINUTE: 60,
    Unit.HOUR: 60,
    Unit.DAY: 24,
    Unit.MONTH: 30,
    Unit.YEAR: 12,
}

_FIELD_NAMES: dict[Unit, str] = {
    Unit.MILLISECOND: "millisecond",
    Unit.SECOND: "second",
    Unit.MINUTE: "minute",
    Unit.HOUR: "hour",
    Unit.DAY: "day",
    Unit.MONTH: "month",
    Unit.YEAR: "year",
}

# Minimum value of each field, used when truncating.
_FIELD_FLOOR: dict[Unit, int] = {
    Unit.MILLISECOND: 0,
    Unit.SECOND: 0,
    Unit.MINUTE: 0,
    Unit.HOUR: 0,
    Unit.DAY: 1,
    Unit.MONTH: 1,
}

_EXACT_MS: dict[Unit, int] = {
    Unit.MILLISECOND: 1,
    Unit.SECOND: MS_PER_SECOND,
    Unit.MINUTE: MS_PER_MINUTE,
    Unit.HOUR: MS_PER_HOUR,
    Unit.DAY: MS_PER_DAY,
}


def parse_unit(name: str) -> tuple[Unit, int]:
    """Look up a unit name such as "minute" or "century".

    Unknown names resolve to (MILLISECOND, 1).
    """
    key = name.strip().lower()
    if key not in UNIT_TABLE:
        _log.warning("unknown_time_unit", unit_name=name, fallback="millisecond")
        return Unit.MILLISECOND, 1
    return UNIT_TABLE[key]


def make_unit_spec(
    name: str, display_name: str | None = None, pattern: str | None = None
) -> UnitSpec:
    """Build a UnitSpec from a unit name."""
    unit, factor = parse_unit(name)
    return UnitSpec(unit=unit, factor=factor, name=display_name, pattern=pattern)


def units_to_approx_millis(unit: Unit) -> int:
    """Nominal milliseconds for one step of ``unit``.

    A month counts as 30 days and a year as 12 months. Only used to derive a
    pixel-to-time scale, never for field arithmetic.
    """
    return math.prod(_APPROX_STEP[u] for u in Unit if u <= unit)


def _days_in_month(year: int, month: int) -> int:
    start = np.datetime64(year - 1970, "Y").astype("datetime64[M]") + np.timedelta64(
        month - 1, "M"
    )
    end = start + np.timedelta64(1, "M")
    return int((end.astype("datetime64[D]") - start.astype("datetime64[D]")).astype(np.int64))


def to_fields(instant: int) -> CalendarFields:
    """Break an instant into UTC calendar fields."""
    t = np.datetime64(int(instant), "ms")
    year_start = t.astype("datetime64[Y]")
    month_start = t.astype("datetime64[M]")
    day_start = t.astype("datetime64[D]")

    year = int(year_start.astype(np.int64)) + 1970
    month = int((month_start - year_start.astype("datetime64[M]")).astype(np.int64)) + 1
    day = int((day_start - month_start.astype("datetime64[D]")).astype(np.int64)) + 1
    ms_of_day = int(instant) - int(day_start.astype(np.int64)) * MS_PER_DAY

    hour, rem = divmod(ms_of_day, MS_PER_HOUR)
    minute, rem = divmod(rem, MS_PER_MINUTE)
    second, millisecond = divmod(rem, MS_PER_SECOND)
    return CalendarFields(year, month, day, hour, minute, second, millisecond)


def from_fields(fields: CalendarFields) -> int:
    """Assemble an instant from UTC calendar fields.

    Month overflow carries into the year; the day is clamped to the length
    of the resulting month.
    """
    year, month0 = divmod(fields.year * 12 + fields.month - 1, 12)
    day = min(max(fields.day, 1), _days_in_month(year, month0 + 1))

    month_start = np.datetime64(year - 1970, "Y").astype("datetime64[M]") + np.timedelta64(
        month0, "M"
    )
    day_start = month_start.astype("datetime64[D]") + np.timedelta64(day - 1, "D")
    ms_of_day = (
        fields.hour * MS_PER_HOUR
        + fields.minute * MS_PER_MINUTE
        + fields.second * MS_PER_SECOND
        + fields.millisecond
    )
    return int(day_start.astype(np.int64)) * MS_PER_DAY + ms_of_day


def get_era_year(instant: int) -> int:
    """Era-signed year of an instant (0 = 1 BC, -1 = 2 BC)."""
    return to_fields(instant).year


def set_era_year(instant: int, year: int) -> int:
    """Replace the era-signed year, keeping the other fields.

    Years > 0 are AD; years <= 0 are ``1 - year`` BC. Feb 29 becomes Feb 28
    in a non-leap target year.
    """
    return from_fields(to_fields(instant)._replace(year=year))


def is_before_christ(instant: int) -> bool:
    """True when the instant falls in the BC era."""
    return get_era_year(instant) <= 0


def floor_year(year: int, factor: int) -> int:
    """Floor an era-signed year onto a multiple of ``factor``.

    Non-positive years are shifted by ``factor - 1`` first, then the result
    is truncated toward zero. Years 1..factor-1 therefore land on year 0.
    """
    if factor <= 1:
        return year
    if year <= 0:
        year -= factor - 1
    quotient = abs(year) // factor
    return quotient * factor if year >= 0 else -quotient * factor


def add_units(instant: int, unit: Unit, count: int) -> int:
    """Add ``count`` steps of ``unit`` with calendar-correct normalization.

    Years added to a BC instant have their sign inverted, so positive counts
    walk further into the past on the BC side of the calendar.
    """
    if unit in _EXACT_MS:
        return int(instant) + count * _EXACT_MS[unit]

    fields = to_fields(instant)
    if unit == Unit.MONTH:
        return from_fields(fields._replace(month=fields.month + count))

    if fields.year <= 0:
        count = -count
    return from_fields(fields._replace(year=fields.year + count))


def quantize(instant: int, spec: UnitSpec) -> int:
    """Truncate every field finer than ``spec.unit`` to its minimum.

    For year granularities the year is additionally floored to a multiple of
    ``spec.factor``. Quantization is idempotent.
    """
    fields = to_fields(instant)
    values = fields._asdict()
    for unit, floor in _FIELD_FLOOR.items():
        if unit < spec.unit:
            values[_FIELD_NAMES[unit]] = floor
    if spec.unit == Unit.YEAR:
        values["year"] = floor_year(fields.year, spec.factor)
    return from_fields(CalendarFields(**values))


def cascade(base: int, source: int, spec: UnitSpec) -> int:
    """Copy calendar fields from ``source`` onto ``base``.

    Fields from ``spec.unit`` up to the year are taken from ``source``; finer
    fields keep their ``base`` values. The copied year is floored to
    ``spec.factor`` with the same era rule as :func:`quantize`.
    """
    base_fields = to_fields(base)
    source_fields = to_fields(source)
    values = base_fields._asdict()
    for unit in Unit:
        if unit >= spec.unit:
            name = _FIELD_NAMES[unit]
            values[name] = getattr(source_fields, name)
    values["year"] = floor_year(source_fields.year, spec.factor)
    return from_fields(CalendarFields(**values))


def to_iso(instant: int) -> str:
    """ISO-8601-like UTC rendering that also covers negative years."""
    f = to_fields(instant)
    sign = "-" if f.year < 0 else ""
    return (
        f"{sign}{abs(f.year):04d}-{f.month:02d}-{f.day:02d}"
        f"T{f.hour:02d}:{f.minute:02d}:{f.second:02d}.{f.millisecond:03d}Z"
    )
