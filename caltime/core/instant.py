# caltime/core/instant.py
"""
Instant — a calendar datetime (proleptic Gregorian, millisecond resolution).

Value semantics:
  • Frozen dataclass; every operation returns a new Instant.
  • Fields are NOT range-checked on construction. is_valid() is the one
    place ranges (including the leap-year dependent day bound) are checked;
    arithmetic on an invalid Instant is defined but may be meaningless.

Operators:
  Instant + Duration -> Instant      (carry normalizer)
  Instant - Duration -> Instant
  Instant - Instant  -> Duration     (ordinal difference)
  ==, !=, <, >, <=, >=               (lexicographic comparator)
"""

from __future__ import annotations

import time
from dataclasses import dataclass, asdict
from typing import Any, Callable, Dict, Optional, Tuple

from caltime.core import carry as _carry
from caltime.core import comparator as _cmp
from caltime.core.calendar import (
    days_in_month,
    weekday as _weekday,
    weekday_long as _weekday_long,
    weekday_short as _weekday_short,
    yearday as _yearday,
)
from caltime.core.duration import Duration
from caltime.core.formatter import isoformat as _isoformat, parse_isoformat
from caltime.core.isoweek import PURE_BACKEND, CalendarBackend
from caltime.core.ordinal import (
    difference,
    ordinal_fields,
    to_julian_day as _to_julian_day,
    to_ordinal as _to_ordinal,
)

__all__ = ["Instant", "to_ordinal", "from_ordinal", "date2num", "num2date"]


@dataclass(frozen=True, eq=False)
class Instant:
    year: int = 1
    month: int = 1
    day: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: int = 0

    # ───────────────────────── constructors ─────────────────────────
    @classmethod
    def from_ordinal(cls, num: float) -> "Instant":
        """Inverse of to_ordinal(); see caltime.core.ordinal."""
        y, m, d, hh, mi, ss, ms, carry_second = ordinal_fields(num)
        out = cls(y, m, d, hh, mi, ss, ms)
        if carry_second:
            out = _carry.add_seconds(out, 1)
        return out

    @classmethod
    def fromisoformat(cls, text: str) -> "Instant":
        return cls(*parse_isoformat(text))

    @classmethod
    def now(cls, clock: Optional[Callable[[], Any]] = None) -> "Instant":
        """Current local wall-clock time (raises HostTimeError on host failure)."""
        from caltime.core.host_bridge import host_now
        return host_now(clock)

    # ───────────────────────── validity ─────────────────────────
    def is_valid(self) -> bool:
        if self.year < 1:
            return False
        if self.month < 1 or self.month > 12:
            return False
        if self.day < 1 or self.day > days_in_month(self.month, self.year):
            return False
        if self.hour < 0 or self.hour > 23:
            return False
        if self.minute < 0 or self.minute > 59:
            return False
        if self.second < 0 or self.second > 59:
            return False
        if self.millisecond < 0 or self.millisecond > 999:
            return False
        return True

    # ───────────────────────── unit adds ─────────────────────────
    def add_milliseconds(self, ms: int) -> "Instant":
        return _carry.add_milliseconds(self, ms)

    def add_seconds(self, s: int) -> "Instant":
        return _carry.add_seconds(self, s)

    def add_minutes(self, m: int) -> "Instant":
        return _carry.add_minutes(self, m)

    def add_hours(self, h: int) -> "Instant":
        return _carry.add_hours(self, h)

    def add_days(self, d: int) -> "Instant":
        return _carry.add_days(self, d)

    # ───────────────────────── calendar views ─────────────────────────
    def weekday(self) -> int:
        """0 = Sunday .. 6 = Saturday."""
        return _weekday(self.year, self.month, self.day)

    def weekday_short(self) -> str:
        return _weekday_short(self.weekday())

    def weekday_long(self) -> str:
        return _weekday_long(self.weekday())

    def yearday(self) -> int:
        return _yearday(self.year, self.month, self.day)

    def isocalendar(self, backend: Optional[CalendarBackend] = None) -> Tuple[int, int, int]:
        return (backend or PURE_BACKEND).isocalendar(self)

    def seconds_since_epoch(self, backend: Optional[CalendarBackend] = None) -> int:
        return (backend or PURE_BACKEND).seconds_since_epoch(self)

    def tm(self) -> time.struct_time:
        from caltime.core.host_bridge import to_struct_time
        return to_struct_time(self)

    def to_ordinal(self) -> float:
        return _to_ordinal(self)

    def to_julian_day(self) -> float:
        return _to_julian_day(self)

    # ───────────────────────── rendering ─────────────────────────
    def isoformat(self, sep: str = "T") -> str:
        return _isoformat(self, sep)

    def __str__(self) -> str:
        return _isoformat(self)

    def astuple(self) -> Tuple[int, int, int, int, int, int, int]:
        return _cmp.sort_key(self)

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    # ───────────────────────── arithmetic ─────────────────────────
    def __add__(self, other: Any) -> "Instant":
        if isinstance(other, Duration):
            return _carry.apply_duration(self, other)
        return NotImplemented

    def __sub__(self, other: Any) -> Any:
        if isinstance(other, Duration):
            return _carry.apply_duration(self, other, sign=-1)
        if isinstance(other, Instant):
            return difference(self, other)
        return NotImplemented

    # ───────────────────────── ordering ─────────────────────────
    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return _cmp.eq(self, other)

    def __ne__(self, other: Any) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return not _cmp.eq(self, other)

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return _cmp.gt(self, other)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return _cmp.lt(self, other)

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return _cmp.ge(self, other)

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return _cmp.le(self, other)

    def __hash__(self) -> int:
        return hash(_cmp.sort_key(self))


# ───────────────────────── module-level helpers ─────────────────────────
def to_ordinal(instant: Instant) -> float:
    return _to_ordinal(instant)


def from_ordinal(num: float) -> Instant:
    return Instant.from_ordinal(num)


date2num = to_ordinal
num2date = from_ordinal
