# caltime/core/calendar.py
"""
Calendar queries for the proleptic Gregorian calendar.

Every function here is a pure function of its integer arguments. Invalid
months are answered with the sentinel 0 from days_in_month() rather than an
exception; callers that accept arbitrary months must check for it.
"""

from __future__ import annotations

from caltime.core.constants import (
    MONTH_DAYS,
    WEEKDAYS_LONG,
    WEEKDAYS_SHORT,
)

__all__ = [
    "is_leap_year",
    "days_in_month",
    "days_in_year",
    "days_before_year",
    "yearday",
    "weekday",
    "weekday_long",
    "weekday_short",
]


def is_leap_year(year: int) -> bool:
    """True iff `year` is a Gregorian leap year (total for all integers)."""
    return (year % 4 == 0 and year % 100 != 0) or year % 400 == 0


def days_in_month(month: int, year: int) -> int:
    """Length of `month` in `year`; 0 when month is outside [1, 12]."""
    if month < 1 or month > 12:
        return 0
    if month == 2 and is_leap_year(year):
        return 29
    return MONTH_DAYS[month - 1]


def days_in_year(year: int) -> int:
    return 366 if is_leap_year(year) else 365


def days_before_year(year: int) -> int:
    """
    Sum of days_in_year(y) for y in [1, year - 1].

    Closed form of the running sum; floor division keeps it consistent for
    proleptic years below 1.
    """
    y = year - 1
    return 365 * y + y // 4 - y // 100 + y // 400


def yearday(year: int, month: int, day: int) -> int:
    """1-based ordinal day within the year."""
    n = 0
    for m in range(1, month):
        n += days_in_month(m, year)
    return n + day


def weekday(year: int, month: int, day: int) -> int:
    """
    Day of the week by Zeller's congruence: 0 = Sunday .. 6 = Saturday.

    January and February count as months 13 and 14 of the previous year.
    """
    if month <= 2:
        month += 12
        year -= 1
    j, k = divmod(year, 100)
    h = (day + (13 * (month + 1)) // 5 + k + k // 4 + j // 4 + 5 * j) % 7
    # Zeller yields 0 = Saturday; shift to a Sunday-first index.
    return (h + 6) % 7


def weekday_long(index: int) -> str:
    return WEEKDAYS_LONG[index]


def weekday_short(index: int) -> str:
    return WEEKDAYS_SHORT[index]
