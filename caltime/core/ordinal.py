# caltime/core/ordinal.py
"""
Ordinal converter — calendar fields <-> continuous day number.

Axis
----
  ordinal = days_before_year(year) + yearday + time_of_day / 1 day
  0001-01-01T00:00:00.000  ->  1.0

The fractional part carries the time of day. Conversions go through a
double, so millisecond fields are recovered by rounding; the one rounding
artefact (a millisecond of exactly 1000) is folded back into seconds.

Public API:
  to_ordinal(instant)   -> float   (alias date2num)
  ordinal_fields(num)   -> (y, m, d, hh, mm, ss, ms, carry_second)
  day_number(instant)   -> int     (exact integer part of to_ordinal)
  difference(a, b)      -> Duration (a - b)
  to_julian_day(instant) / julian_to_ordinal(jd)
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Tuple

from caltime.core.calendar import (
    days_before_year,
    days_in_month,
    days_in_year,
    yearday,
)
from caltime.core.constants import (
    D2H,
    D2M,
    D2S,
    DAYS_PER_400_YEARS,
    EPOCH_ORDINAL,
    H2D,
    H2S,
    JD_OF_EPOCH,
    M2D,
    M2S,
    S2D,
)
from caltime.core.duration import Duration

if TYPE_CHECKING:  # pragma: no cover
    from caltime.core.instant import Instant

__all__ = [
    "to_ordinal",
    "date2num",
    "ordinal_fields",
    "day_number",
    "difference",
    "to_julian_day",
    "julian_to_ordinal",
]

log = logging.getLogger(__name__)


def _nint(x: float) -> int:
    """Round half away from zero."""
    return int(math.floor(x + 0.5)) if x >= 0 else -int(math.floor(-x + 0.5))


def day_number(instant: "Instant") -> int:
    """Whole days on the ordinal axis (exact integer arithmetic)."""
    return days_before_year(instant.year) + yearday(instant.year, instant.month, instant.day)


def to_ordinal(instant: "Instant") -> float:
    """Days since the epoch as a float; 0001-01-01T00:00 is 1.0."""
    return (
        day_number(instant)
        + instant.hour * H2D
        + instant.minute * M2D
        + (instant.second + 1e-3 * instant.millisecond) * S2D
    )


date2num = to_ordinal


def ordinal_fields(num: float) -> Tuple[int, int, int, int, int, int, int, bool]:
    """
    Decompose an ordinal into calendar fields.

    Returns (year, month, day, hour, minute, second, millisecond, carry) where
    `carry` is True when the rounded millisecond hit 1000 and was reset to 0;
    the caller owes the result one extra second.
    """
    whole = math.floor(num)
    totseconds = (num - whole) * D2S
    if totseconds >= D2S:  # fraction rounded up to a full day
        whole += 1
        totseconds = 0.0

    days = int(whole) - int(EPOCH_ORDINAL)  # whole days elapsed since the epoch

    year = 1
    cycles, days = divmod(days, DAYS_PER_400_YEARS)
    year += 400 * cycles
    while days >= days_in_year(year):
        days -= days_in_year(year)
        year += 1

    month = 1
    while days >= days_in_month(month, year):
        days -= days_in_month(month, year)
        month += 1

    day = days + 1
    # Floor division keeps exact multiples (7200.0 s) from truncating to 1:59:60.
    hour = int(totseconds // H2S)
    minute = int((totseconds - hour * H2S) // M2S)
    second = int(totseconds - hour * H2S - minute * M2S)
    millisecond = _nint((totseconds - int(totseconds)) * 1e3)

    carry = False
    if millisecond == 1000:
        log.debug("ordinal %r: millisecond rounded to 1000, carrying one second", num)
        millisecond = 0
        carry = True

    return year, month, day, hour, minute, second, millisecond, carry


def difference(a: "Instant", b: "Instant") -> Duration:
    """
    a - b as a Duration whose fields all share the sign of the difference.

    Whole days come from the floor of |d|; hours, minutes and seconds are
    truncated from the remaining fraction and the millisecond is rounded.
    A rounded millisecond of 1000 is carried upwards so no field leaves its
    natural range.
    """
    days_diff = to_ordinal(a) - to_ordinal(b)

    if days_diff < 0:
        sign = -1
        days_diff = abs(days_diff)
    else:
        sign = 1

    days = int(math.floor(days_diff))
    hours = int((days_diff - days) * D2H)
    minutes = int((days_diff - days - hours * H2D) * D2M)
    seconds = int((days_diff - days - hours * H2D - minutes * M2D) * D2S)
    milliseconds = _nint(
        (days_diff - days - hours * H2D - minutes * M2D - seconds * S2D) * D2S * 1e3
    )

    if milliseconds >= 1000:
        milliseconds -= 1000
        seconds += 1
    if seconds >= 60:
        seconds -= 60
        minutes += 1
    if minutes >= 60:
        minutes -= 60
        hours += 1
    if hours >= 24:
        hours -= 24
        days += 1

    return Duration(
        days=sign * days,
        hours=sign * hours,
        minutes=sign * minutes,
        seconds=sign * seconds,
        milliseconds=sign * milliseconds,
    )


def to_julian_day(instant: "Instant") -> float:
    """Julian Day of the instant (proleptic Gregorian, no time scale)."""
    return to_ordinal(instant) - EPOCH_ORDINAL + JD_OF_EPOCH


def julian_to_ordinal(jd: float) -> float:
    return jd - JD_OF_EPOCH + EPOCH_ORDINAL
