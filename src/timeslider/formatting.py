"""Rendering of discrete instants for display.

Formatting reads an instant; it never changes the stored value.
"""

import datetime as dt
import re
from typing import Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from timeslider.calendar import to_fields

_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")
_EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)
_TOKEN_RE = re.compile(r"%[a-zA-Z%]")

DEFAULT_PATTERN = "%Y-%m-%d %H:%M:%S"


class Formatter(Protocol):
    """Formats an instant for display."""

    def format(
        self,
        instant: int,
        pattern: str | None,
        time_zone: dt.tzinfo,
        locale: str | None,
    ) -> str:
        ...


def resolve_tz(name: str | dt.tzinfo | None) -> dt.tzinfo:
    """Resolve a time zone name into a tzinfo.

    Accepts tzinfo instances, "UTC"/"Z"/"GMT", "local", IANA names and fixed
    offsets such as "+02:00" or "-0500". None means UTC.

    Raises ValueError for invalid identifiers.
    """
    if isinstance(name, dt.tzinfo):
        return name
    if name is None:
        return dt.timezone.utc
    tz_name = str(name).strip()
    low = tz_name.lower()
    if low in {"", "utc", "z", "gmt"}:
        return dt.timezone.utc
    if low in {"local", "system"}:
        return dt.datetime.now().astimezone().tzinfo or dt.timezone.utc

    m = _OFFSET_RE.match(tz_name)
    if m:
        sign_s, hh_s, mm_s = m.groups()
        hh, mm = int(hh_s), int(mm_s)
        if hh > 23 or mm > 59:
            raise ValueError(f"Invalid timezone offset: {tz_name!r}")
        sign = 1 if sign_s == "+" else -1
        return dt.timezone(dt.timedelta(minutes=sign * (hh * 60 + mm)))

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as ex:
        raise ValueError(f"Invalid timezone identifier: {tz_name!r}") from ex


def era_year_label(year: int) -> str:
    """Human label for an era-signed year: 2024 -> "2024", 0 -> "1 BC"."""
    return str(year) if year > 0 else f"{1 - year} BC"


class StrftimeFormatter:
    """Formats with ``datetime.strftime`` in the requested zone.

    Instants outside the range of ``datetime`` (including every BC date) are
    rendered in UTC from their calendar fields, with ``%Y`` written as an
    era label. Locale is accepted but not applied.
    """

    def format(
        self,
        instant: int,
        pattern: str | None,
        time_zone: dt.tzinfo,
        locale: str | None = None,
    ) -> str:
        pattern = pattern or DEFAULT_PATTERN
        try:
            moment = (_EPOCH + dt.timedelta(milliseconds=instant)).astimezone(time_zone)
        except (OverflowError, ValueError):
            return self._format_fields(instant, pattern)
        return moment.strftime(pattern)

    def _format_fields(self, instant: int, pattern: str) -> str:
        f = to_fields(instant)
        values = {
            "%Y": era_year_label(f.year),
            "%m": f"{f.month:02d}",
            "%d": f"{f.day:02d}",
            "%H": f"{f.hour:02d}",
            "%M": f"{f.minute:02d}",
            "%S": f"{f.second:02d}",
            "%f": f"{f.millisecond * 1000:06d}",
            "%%": "%",
        }
        return _TOKEN_RE.sub(lambda m: values.get(m.group(0), m.group(0)), pattern)
