# caltime/core/isoweek.py
"""
ISO-8601 week date and Unix epoch seconds, computed from the calendar alone.

Both values used to come from the host strftime ('%G %V %u' and '%s'); the
host route still exists in caltime.core.host_bridge.HostCalendarBackend and
any object with the same two methods can be passed where a backend is
accepted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Tuple

from caltime.core.calendar import days_before_year, weekday, yearday
from caltime.core.carry import add_days
from caltime.core.constants import UNIX_EPOCH_FIELDS
from caltime.core.ordinal import day_number

if TYPE_CHECKING:  # pragma: no cover
    from caltime.core.instant import Instant

__all__ = [
    "CalendarBackend",
    "PureCalendarBackend",
    "PURE_BACKEND",
    "iso_weekday",
    "isocalendar",
    "seconds_since_epoch",
]

# Ordinal day number of 1970-01-01.
_UNIX_EPOCH_DAY: int = days_before_year(UNIX_EPOCH_FIELDS[0]) + 1


class CalendarBackend(Protocol):
    name: str

    def isocalendar(self, instant: "Instant") -> Tuple[int, int, int]: ...

    def seconds_since_epoch(self, instant: "Instant") -> int: ...


def iso_weekday(instant: "Instant") -> int:
    """Monday = 1 .. Sunday = 7."""
    return weekday(instant.year, instant.month, instant.day) or 7


def isocalendar(instant: "Instant") -> Tuple[int, int, int]:
    """
    (ISO year, ISO week, ISO weekday).

    Week 1 is the week holding the year's first Thursday, so the ISO year of
    a date is the calendar year of the Thursday in its week.
    """
    wday = iso_weekday(instant)
    thursday = add_days(instant, 4 - wday)
    week = (yearday(thursday.year, thursday.month, thursday.day) - 1) // 7 + 1
    return thursday.year, week, wday


def seconds_since_epoch(instant: "Instant") -> int:
    """Whole seconds since 1970-01-01T00:00:00, reading the instant as UTC."""
    days = day_number(instant) - _UNIX_EPOCH_DAY
    return days * 86400 + instant.hour * 3600 + instant.minute * 60 + instant.second


class PureCalendarBackend:
    name = "pure"

    def isocalendar(self, instant: "Instant") -> Tuple[int, int, int]:
        return isocalendar(instant)

    def seconds_since_epoch(self, instant: "Instant") -> int:
        return seconds_since_epoch(instant)


PURE_BACKEND = PureCalendarBackend()
