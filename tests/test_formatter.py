# tests/test_formatter.py
from __future__ import annotations

import pytest
from hypothesis import given

from caltime.core.formatter import int2str, isoformat, parse_isoformat
from caltime.core.instant import Instant
from strategies import valid_instants


def test_isoformat_reference() -> None:
    assert isoformat(Instant(2013, 5, 12, 9, 5, 3, 7)) == "2013-05-12T09:05:03.007"
    assert str(Instant(2013, 5, 12, 9, 5, 3, 7)) == "2013-05-12T09:05:03.007"


def test_isoformat_separator() -> None:
    assert Instant(2013, 5, 12, 9, 5, 3, 7).isoformat(" ") == "2013-05-12 09:05:03.007"
    assert Instant(1, 1, 1).isoformat("_") == "0001-01-01_00:00:00.000"


@pytest.mark.parametrize("i, n, out", [(7, 3, "007"), (2013, 4, "2013"), (12345, 4, "12345"), (0, 2, "00"), (5, 0, "5")])
def test_int2str_pads_left(i: int, n: int, out: str) -> None:
    assert int2str(i, n) == out


def test_parse_full() -> None:
    assert parse_isoformat("2013-05-12T09:05:03.007") == (2013, 5, 12, 9, 5, 3, 7)


@pytest.mark.parametrize(
    "text, fields",
    [
        ("2013-05-12", (2013, 5, 12, 0, 0, 0, 0)),
        ("2013-05-12 09:05", (2013, 5, 12, 9, 5, 0, 0)),
        ("2013-05-12T09:05:03", (2013, 5, 12, 9, 5, 3, 0)),
        ("2013-05-12T09:05:03.5", (2013, 5, 12, 9, 5, 3, 500)),
        ("2013-05-12T09:05:03.25", (2013, 5, 12, 9, 5, 3, 250)),
        ("  2013-05-12T09:05:03.250  ", (2013, 5, 12, 9, 5, 3, 250)),
        ("12013-01-01T00:00:00.000", (12013, 1, 1, 0, 0, 0, 0)),
    ],
)
def test_parse_partial_forms(text: str, fields) -> None:
    assert parse_isoformat(text) == fields


def test_parse_does_not_range_check() -> None:
    assert parse_isoformat("2024-02-30T25:61:61.000") == (2024, 2, 30, 25, 61, 61, 0)


@pytest.mark.parametrize("text", ["", "2013-5-12", "2013/05/12", "13-05-12", "2013-05-12T9:05", "2013-05-12T09:05:03.0001", "hello"])
def test_parse_rejects_malformed(text: str) -> None:
    with pytest.raises(ValueError):
        parse_isoformat(text)


@given(valid_instants)
def test_fromisoformat_inverts_isoformat(d: Instant) -> None:
    assert Instant.fromisoformat(d.isoformat()) == d
