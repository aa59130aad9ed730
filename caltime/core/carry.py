# caltime/core/carry.py
"""
Carry normalizer — add a signed offset to one unit of an Instant.

Every add_*() returns a new Instant whose units up to and including the one
that received the offset are back in canonical range. Overflow cascades
milliseconds -> seconds -> minutes -> hours -> days, and day overflow walks
months (and years) with the month length re-evaluated at every step.

The cascade stops at the first unit that produces no carry, so larger units
of an out-of-range Instant are left untouched unless a carry reaches them.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, List, Tuple

from caltime.core.calendar import days_in_month
from caltime.core.constants import (
    DAYS_PER_400_YEARS,
    HOURS_PER_DAY,
    MINUTES_PER_HOUR,
    MS_PER_SECOND,
    SECONDS_PER_MINUTE,
)

if TYPE_CHECKING:  # pragma: no cover
    from caltime.core.duration import Duration
    from caltime.core.instant import Instant

__all__ = [
    "add_milliseconds",
    "add_seconds",
    "add_minutes",
    "add_hours",
    "add_days",
    "apply_duration",
]

# Field positions in the (year, month, day, hour, minute, second, ms) tuple.
_YEAR, _MONTH, _DAY, _HOUR, _MINUTE, _SECOND, _MS = range(7)

# Clock units, smallest first: (field position, modulus).
_CLOCK_UNITS: Tuple[Tuple[int, int], ...] = (
    (_MS, MS_PER_SECOND),
    (_SECOND, SECONDS_PER_MINUTE),
    (_MINUTE, MINUTES_PER_HOUR),
    (_HOUR, HOURS_PER_DAY),
)


def _fields(instant: "Instant") -> List[int]:
    return [
        instant.year, instant.month, instant.day,
        instant.hour, instant.minute, instant.second, instant.millisecond,
    ]


def _rebuild(instant: "Instant", f: List[int]) -> "Instant":
    return replace(
        instant,
        year=f[_YEAR], month=f[_MONTH], day=f[_DAY],
        hour=f[_HOUR], minute=f[_MINUTE], second=f[_SECOND], millisecond=f[_MS],
    )


def _wrap_month(f: List[int]) -> None:
    """Fold month back into [1, 12], moving whole years into the year field."""
    years, m0 = divmod(f[_MONTH] - 1, 12)
    f[_YEAR] += years
    f[_MONTH] = m0 + 1


def _carry_days(f: List[int], n: int) -> None:
    f[_DAY] += n

    # Whole Gregorian cycles leave month and day unchanged.
    if f[_DAY] > DAYS_PER_400_YEARS or f[_DAY] < -DAYS_PER_400_YEARS:
        cycles = f[_DAY] // DAYS_PER_400_YEARS
        if f[_DAY] - cycles * DAYS_PER_400_YEARS < 1:
            cycles -= 1
        f[_DAY] -= cycles * DAYS_PER_400_YEARS
        f[_YEAR] += 400 * cycles

    while True:
        current = days_in_month(f[_MONTH], f[_YEAR])
        if f[_DAY] > current:
            f[_DAY] -= current
            f[_MONTH] += 1
            if f[_MONTH] > 12:
                _wrap_month(f)
        elif f[_DAY] < 1:
            f[_MONTH] -= 1
            if f[_MONTH] < 1:
                _wrap_month(f)
            f[_DAY] += days_in_month(f[_MONTH], f[_YEAR])
        else:
            break


def _add(instant: "Instant", position: int, n: int) -> "Instant":
    f = _fields(instant)
    carry = n
    if position != _DAY:
        for pos, modulus in _CLOCK_UNITS:
            if pos > position:
                continue  # smaller than the unit being added to
            f[pos] += carry
            carry, f[pos] = divmod(f[pos], modulus)
            if carry == 0:
                return _rebuild(instant, f)
    _carry_days(f, carry)
    return _rebuild(instant, f)


def add_milliseconds(instant: "Instant", ms: int) -> "Instant":
    return _add(instant, _MS, int(ms))


def add_seconds(instant: "Instant", s: int) -> "Instant":
    return _add(instant, _SECOND, int(s))


def add_minutes(instant: "Instant", m: int) -> "Instant":
    return _add(instant, _MINUTE, int(m))


def add_hours(instant: "Instant", h: int) -> "Instant":
    return _add(instant, _HOUR, int(h))


def add_days(instant: "Instant", d: int) -> "Instant":
    return _add(instant, _DAY, int(d))


def apply_duration(instant: "Instant", duration: "Duration", sign: int = 1) -> "Instant":
    """
    Add (sign=1) or subtract (sign=-1) every field of `duration`,
    milliseconds first and days last. Zero fields are skipped.
    """
    out = instant
    if duration.milliseconds:
        out = add_milliseconds(out, sign * duration.milliseconds)
    if duration.seconds:
        out = add_seconds(out, sign * duration.seconds)
    if duration.minutes:
        out = add_minutes(out, sign * duration.minutes)
    if duration.hours:
        out = add_hours(out, sign * duration.hours)
    if duration.days:
        out = add_days(out, sign * duration.days)
    return out
