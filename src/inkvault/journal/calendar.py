"""Calendar codecs — map a day to the ``YYYY-MM-DD`` string used as its file name.

The string is written in the codec's own calendar, so the same Gregorian day
has a different file name under ``PersianCalendar`` than under
``GregorianCalendar``. Both codecs are lossless and deterministic.
"""

from __future__ import annotations

import calendar as _stdlib_calendar
import re
from datetime import date
from typing import Protocol, runtime_checkable

import jdatetime

from inkvault.core.exceptions import ConfigurationError

DATE_STRING_RE = re.compile(r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})$")

PERSIAN_MONTH_NAMES = (
    "Farvardin",
    "Ordibehesht",
    "Khordad",
    "Tir",
    "Mordad",
    "Shahrivar",
    "Mehr",
    "Aban",
    "Azar",
    "Dey",
    "Bahman",
    "Esfand",
)


@runtime_checkable
class CalendarCodec(Protocol):
    """Protocol for date <-> canonical date-string conversion."""

    name: str

    def date_to_string(self, value: date) -> str: ...

    def string_to_date(self, text: str) -> date | None:
        """Parse a canonical date string. Returns None if it is not one."""
        ...

    def year_of(self, value: date) -> int: ...

    def month_of(self, value: date) -> int: ...

    def month_name(self, month: int) -> str: ...


def _split(text: str) -> tuple[int, int, int] | None:
    match = DATE_STRING_RE.match(text)
    if not match:
        return None
    return int(match["year"]), int(match["month"]), int(match["day"])


class GregorianCalendar:
    """ISO-style Gregorian date strings."""

    name = "gregorian"

    def date_to_string(self, value: date) -> str:
        return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"

    def string_to_date(self, text: str) -> date | None:
        parts = _split(text)
        if parts is None:
            return None
        try:
            return date(*parts)
        except ValueError:
            return None

    def year_of(self, value: date) -> int:
        return value.year

    def month_of(self, value: date) -> int:
        return value.month

    def month_name(self, month: int) -> str:
        if 1 <= month <= 12:
            return _stdlib_calendar.month_name[month]
        return "Invalid Month"


class PersianCalendar:
    """Solar Hijri date strings, backed by ``jdatetime``."""

    name = "persian"

    def date_to_string(self, value: date) -> str:
        jd = jdatetime.date.fromgregorian(date=value)
        return f"{jd.year:04d}-{jd.month:02d}-{jd.day:02d}"

    def string_to_date(self, text: str) -> date | None:
        parts = _split(text)
        if parts is None:
            return None
        year, month, day = parts
        if not 1 <= month <= 12 or year < 1:
            return None
        try:
            return jdatetime.date(year, month, day).togregorian()
        except (ValueError, OverflowError):
            return None

    def year_of(self, value: date) -> int:
        return jdatetime.date.fromgregorian(date=value).year

    def month_of(self, value: date) -> int:
        return jdatetime.date.fromgregorian(date=value).month

    def month_name(self, month: int) -> str:
        if 1 <= month <= 12:
            return PERSIAN_MONTH_NAMES[month - 1]
        return "Invalid Month"


_CALENDARS: dict[str, type] = {
    PersianCalendar.name: PersianCalendar,
    GregorianCalendar.name: GregorianCalendar,
}


def get_calendar(name: str = "persian") -> CalendarCodec:
    """Return a codec by name (``persian`` or ``gregorian``)."""
    key = (name or "").strip().lower()
    if key not in _CALENDARS:
        raise ConfigurationError(f"Unknown calendar '{name}'. Choose one of: {', '.join(sorted(_CALENDARS))}")
    return _CALENDARS[key]()
