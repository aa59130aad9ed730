# tests/test_carry.py
from __future__ import annotations

from datetime import datetime, timedelta

import pytest
from hypothesis import assume, given, strategies as st

from caltime.core import carry
from caltime.core.duration import Duration
from caltime.core.instant import Instant
from strategies import datetimes_ms, from_datetime

_DT_MIN = datetime(1, 1, 1)
_DT_MAX = datetime(9999, 12, 31, 23, 59, 59, 999000)

# ─────────────────────────────────────────────────────────────────────────────
# Reference cases
# ─────────────────────────────────────────────────────────────────────────────

def test_ms_carry_across_month_and_year() -> None:
    d = Instant(2024, 12, 31, 23, 59, 59, 500) + Duration(milliseconds=600)
    assert d == Instant(2025, 1, 1, 0, 0, 0, 100)


def test_negative_day_carry() -> None:
    assert Instant(2024, 1, 1) + Duration(days=-1) == Instant(2023, 12, 31)


def test_leap_day_carry() -> None:
    assert Instant(2024, 2, 28).add_days(1) == Instant(2024, 2, 29)
    assert Instant(2023, 2, 28).add_days(1) == Instant(2023, 3, 1)
    assert Instant(2024, 3, 1).add_hours(-1) == Instant(2024, 2, 29, 23)


@pytest.mark.parametrize(
    "fn, n, expected",
    [
        (carry.add_milliseconds, -1, Instant(2023, 12, 31, 23, 59, 59, 999)),
        (carry.add_seconds, -1, Instant(2023, 12, 31, 23, 59, 59)),
        (carry.add_minutes, -1, Instant(2023, 12, 31, 23, 59)),
        (carry.add_hours, -1, Instant(2023, 12, 31, 23)),
        (carry.add_days, -1, Instant(2023, 12, 31)),
    ],
)
def test_each_unit_borrows_from_the_next(fn, n, expected) -> None:
    assert fn(Instant(2024, 1, 1), n) == expected


def test_exact_negative_multiple_stays_canonical() -> None:
    # -60 s is exactly one minute back, not "minute - 2, second 60"
    assert carry.add_seconds(Instant(2024, 5, 5, 10, 30, 15), -60) == Instant(2024, 5, 5, 10, 29, 15)
    assert carry.add_milliseconds(Instant(2024, 5, 5, 10, 30, 15, 0), -1000) == Instant(2024, 5, 5, 10, 30, 14, 0)


def test_large_day_offsets_skip_whole_cycles() -> None:
    d = Instant(2000, 3, 1, 12)
    assert d.add_days(146097 * 3) == Instant(3200, 3, 1, 12)
    assert d.add_days(-146097) == Instant(1600, 3, 1, 12)
    assert d.add_days(1_000_000) == from_datetime(datetime(2000, 3, 1, 12) + timedelta(days=1_000_000))


def test_carry_only_reaches_units_it_overflows() -> None:
    # an out-of-range day is left alone while the clock carry stops at seconds
    d = Instant(2024, 1, 40, 10, 0, 0, 0).add_milliseconds(1500)
    assert d == Instant(2024, 1, 40, 10, 0, 1, 500)
    assert not d.is_valid()


def test_results_are_new_values() -> None:
    d = Instant(2024, 1, 1)
    e = d.add_hours(5)
    assert d == Instant(2024, 1, 1)
    assert e is not d


# ─────────────────────────────────────────────────────────────────────────────
# Properties (oracle: datetime + timedelta)
# ─────────────────────────────────────────────────────────────────────────────

_UNITS = {
    "milliseconds": carry.add_milliseconds,
    "seconds": carry.add_seconds,
    "minutes": carry.add_minutes,
    "hours": carry.add_hours,
    "days": carry.add_days,
}


@pytest.mark.slow
@given(datetimes_ms, st.sampled_from(sorted(_UNITS)), st.integers(-10**6, 10**6))
def test_unit_add_matches_timedelta(dt: datetime, unit: str, n: int) -> None:
    try:
        expected = dt + timedelta(**{unit: n})
    except OverflowError:
        assume(False)
    assume(_DT_MIN <= expected <= _DT_MAX)
    out = _UNITS[unit](from_datetime(dt), n)
    assert out.is_valid()
    assert out == from_datetime(expected)


@given(datetimes_ms, st.integers(-10**6, 10**6), st.integers(-10**6, 10**6))
def test_duration_add_then_subtract_restores(dt: datetime, secs: int, ms: int) -> None:
    t = Duration(seconds=secs, milliseconds=ms)
    try:
        assume(_DT_MIN <= dt + timedelta(seconds=secs, milliseconds=ms) <= _DT_MAX)
        assume(_DT_MIN <= dt + timedelta(milliseconds=ms) <= _DT_MAX)
    except OverflowError:
        assume(False)
    d = from_datetime(dt)
    assert (d + t) - t == d
