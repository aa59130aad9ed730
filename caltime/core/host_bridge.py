# caltime/core/host_bridge.py
"""
host_bridge.py — the only place caltime talks to the host platform.

Two collaborators live behind this module:

  • Host clock:      host_now(clock=None) -> Instant
                     local broken-down wall-clock time; milliseconds from
                     the clock's microseconds (truncated).
  • Host formatter:  format_via_host(instant, pattern) -> str
                     parse_via_host(text, pattern)     -> time.struct_time
                     both going through time.struct_time, the interpreter's
                     view of the C `tm` struct (the interpreter applies
                     month-1, year-1900 and the Sunday-first weekday when
                     it hands the struct to the C library).

HostCalendarBackend reproduces the classic route for the ISO week date
('%G %V %u') and Unix seconds ('%s'); it can be passed anywhere a calendar
backend is accepted. The pure backend in caltime.core.isoweek is the
default and gives the same answers for valid instants (with TZ=UTC for '%s').

Any failure of the host, or output we cannot read back, raises
HostTimeError. We never fall back to a zero-valued Instant.
"""

from __future__ import annotations

import logging
import re
import time
from datetime import datetime
from typing import Any, Callable, Optional, Tuple

from caltime.core.instant import Instant

__all__ = [
    "HostTimeError",
    "HostCalendarBackend",
    "HOST_BACKEND",
    "to_struct_time",
    "format_via_host",
    "parse_via_host",
    "strftime",
    "strptime",
    "host_now",
]

log = logging.getLogger(__name__)

_ISOCAL_RE = re.compile(r"^\s*(?P<y>-?\d+) (?P<w>\d{1,2}) (?P<d>[1-7])\s*$")
_EPOCH_RE = re.compile(r"^\s*-?\d+\s*$")


class HostTimeError(RuntimeError):
    """The host clock or time formatter failed or returned unexpected data."""


# ───────────────────────── struct bridge ─────────────────────────
def to_struct_time(instant: Instant) -> time.struct_time:
    """
    Field-for-field struct for the host formatter.

    tm_wday is Monday = 0 here (Python convention) and tm_yday is 1-based;
    tm_isdst is always 0.
    """
    return time.struct_time((
        instant.year,
        instant.month,
        instant.day,
        instant.hour,
        instant.minute,
        instant.second,
        (instant.weekday() + 6) % 7,
        instant.yearday(),
        0,
    ))


def format_via_host(instant: Instant, pattern: str) -> str:
    try:
        out = time.strftime(pattern, to_struct_time(instant))
    except (ValueError, OverflowError, TypeError) as e:
        raise HostTimeError(f"host strftime failed for {instant.isoformat()!s} with {pattern!r}: {e}") from e
    log.debug("strftime(%r, %s) -> %r", pattern, instant.isoformat(), out)
    return out


def parse_via_host(text: str, pattern: str) -> time.struct_time:
    try:
        return time.strptime(text, pattern)
    except (ValueError, OverflowError, TypeError) as e:
        raise HostTimeError(f"host strptime failed for {text!r} with {pattern!r}: {e}") from e


def strftime(instant: Instant, pattern: str) -> str:
    """Render `instant` with the host's %-directives."""
    return format_via_host(instant, pattern)


def strptime(text: str, pattern: str) -> Instant:
    """Parse `text` with the host's %-directives; millisecond is 0."""
    st = parse_via_host(text, pattern)
    return Instant(st.tm_year, st.tm_mon, st.tm_mday, st.tm_hour, st.tm_min, st.tm_sec, 0)


# ───────────────────────── host clock ─────────────────────────
def host_now(clock: Optional[Callable[[], Any]] = None) -> Instant:
    """
    Current local time as an Instant.

    `clock` is any zero-argument callable returning a datetime-like object
    (year .. microsecond); defaults to datetime.now.
    """
    read = clock or datetime.now
    try:
        t = read()
        return Instant(
            year=int(t.year),
            month=int(t.month),
            day=int(t.day),
            hour=int(t.hour),
            minute=int(t.minute),
            second=int(t.second),
            millisecond=int(t.microsecond) // 1000,
        )
    except Exception as e:
        raise HostTimeError(f"host clock read failed: {e!r}") from e


# ───────────────────────── host calendar backend ─────────────────────────
class HostCalendarBackend:
    name = "host"

    def isocalendar(self, instant: Instant) -> Tuple[int, int, int]:
        out = format_via_host(instant, "%G %V %u")
        m = _ISOCAL_RE.match(out)
        if not m:
            raise HostTimeError(f"unexpected host output for '%G %V %u': {out!r}")
        return int(m.group("y")), int(m.group("w")), int(m.group("d"))

    def seconds_since_epoch(self, instant: Instant) -> int:
        out = format_via_host(instant, "%s")
        if not _EPOCH_RE.match(out):
            raise HostTimeError(f"unexpected host output for '%s': {out!r}")
        return int(out)


HOST_BACKEND = HostCalendarBackend()
