# tests/test_ordinal.py
from __future__ import annotations

import math
from datetime import date, datetime

import pytest
from hypothesis import given, strategies as st

from caltime.core.constants import EPOCH_ORDINAL, JD_OF_EPOCH
from caltime.core.instant import Instant, date2num, from_ordinal, num2date, to_ordinal
from caltime.core.ordinal import day_number, julian_to_ordinal, ordinal_fields, to_julian_day
from strategies import datetimes_ms, from_datetime, month_end_instants, valid_instants

# MJD of 0001-01-01 is -678575, so ordinal = MJD + 678576
_MJD_TO_ORDINAL = 678576

# ─────────────────────────────────────────────────────────────────────────────
# Axis anchors
# ─────────────────────────────────────────────────────────────────────────────

def test_epoch_is_one() -> None:
    assert to_ordinal(Instant()) == EPOCH_ORDINAL
    assert from_ordinal(1.0) == Instant(1, 1, 1)


def test_known_dates() -> None:
    assert to_ordinal(Instant(2000, 1, 1)) == 730120.0
    assert to_ordinal(Instant(1970, 1, 1)) == 719163.0
    assert to_ordinal(Instant(2000, 1, 1, 12)) == pytest.approx(730120.5, abs=1e-9)
    assert from_ordinal(730120.75) == Instant(2000, 1, 1, 18)


def test_aliases() -> None:
    assert date2num is to_ordinal
    assert num2date(730120.0) == Instant(2000, 1, 1)


@given(st.dates())
def test_day_number_matches_date_toordinal(d: date) -> None:
    assert day_number(Instant(d.year, d.month, d.day)) == d.toordinal()


@given(st.dates(min_value=date(1, 1, 1), max_value=date(9999, 12, 31)))
def test_day_number_matches_erfa(ensure_erfa, d: date) -> None:
    djm0, djm = ensure_erfa.cal2jd(d.year, d.month, d.day)
    assert djm0 == 2400000.5
    assert day_number(Instant(d.year, d.month, d.day)) == int(djm) + _MJD_TO_ORDINAL


def test_julian_day() -> None:
    assert to_julian_day(Instant()) == JD_OF_EPOCH
    assert to_julian_day(Instant(2000, 1, 1, 12)) == pytest.approx(2451545.0, abs=1e-9)  # J2000.0
    assert julian_to_ordinal(2451545.0) == 730120.5


def test_julian_day_against_erfa(ensure_erfa) -> None:
    iy, im, idd, fd = ensure_erfa.jd2cal(2460000.5, 0.25)
    assert from_ordinal(julian_to_ordinal(2460000.75)) == Instant(int(iy), int(im), int(idd), 6)
    assert math.isclose(fd, 0.25)


# ─────────────────────────────────────────────────────────────────────────────
# Round trip
# ─────────────────────────────────────────────────────────────────────────────

@given(valid_instants)
def test_round_trip(d: Instant) -> None:
    assert Instant.from_ordinal(d.to_ordinal()) == d


@given(month_end_instants())
def test_round_trip_month_ends(d: Instant) -> None:
    assert Instant.from_ordinal(d.to_ordinal()) == d


@pytest.mark.parametrize(
    "d",
    [
        Instant(2024, 12, 31, 23, 59, 59, 999),
        Instant(2024, 2, 29, 23, 59, 59, 999),
        Instant(2023, 12, 31),
        Instant(2000, 12, 31, 12),
        Instant(9999, 12, 31, 23, 59, 59, 999),
        Instant(1, 12, 31, 23, 59, 59, 999),
        Instant(1600, 3, 1, 0, 0, 0, 1),
    ],
)
def test_round_trip_boundaries(d: Instant) -> None:
    assert Instant.from_ordinal(d.to_ordinal()) == d


@given(datetimes_ms)
def test_ordinal_fraction_matches_datetime(dt: datetime) -> None:
    frac = (dt - datetime(dt.year, dt.month, dt.day)).total_seconds() / 86400.0
    assert math.isclose(from_datetime(dt).to_ordinal(), dt.toordinal() + frac, rel_tol=0, abs_tol=5e-9)


# ─────────────────────────────────────────────────────────────────────────────
# Millisecond rounding to 1000
# ─────────────────────────────────────────────────────────────────────────────

def test_rounded_millisecond_carries_one_second() -> None:
    # 0.9996 ms short of the next second rounds up
    num = 730120.0 + (10 * 3600 + 59.9996) / 86400.0
    *_, ms, carried = ordinal_fields(num)
    assert carried is True
    assert ms == 0
    assert from_ordinal(num) == Instant(2000, 1, 1, 10, 1, 0, 0)


def test_rounded_millisecond_carries_into_next_day() -> None:
    num = 730120.0 + 86399.9998 / 86400.0
    assert from_ordinal(num) == Instant(2000, 1, 2)


def test_no_carry_for_ordinary_fraction() -> None:
    y, m, d, hh, mm, ss, ms, carried = ordinal_fields(730120.0 + 3723.004 / 86400.0)
    assert (y, m, d, hh, mm, ss, ms, carried) == (2000, 1, 1, 1, 2, 3, 4, False)


def test_exact_hours_do_not_truncate() -> None:
    for h in range(24):
        assert from_ordinal(730120.0 + h / 24.0) == Instant(2000, 1, 1, h)
