# caltime/core/comparator.py
"""
Total order over Instants by lexicographic field comparison.

Comparison is purely structural: out-of-range Instants are ordered by their
raw field values like any other.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:  # pragma: no cover
    from caltime.core.instant import Instant

__all__ = ["gt", "lt", "eq", "ge", "le", "compare", "sort_key"]


def sort_key(d: "Instant") -> Tuple[int, int, int, int, int, int, int]:
    return (d.year, d.month, d.day, d.hour, d.minute, d.second, d.millisecond)


def gt(d0: "Instant", d1: "Instant") -> bool:
    """True if d0 is later than d1; stops at the first unequal field."""
    for f0, f1 in zip(sort_key(d0), sort_key(d1)):
        if f0 > f1:
            return True
        if f0 < f1:
            return False
    return False


def eq(d0: "Instant", d1: "Instant") -> bool:
    return sort_key(d0) == sort_key(d1)


def lt(d0: "Instant", d1: "Instant") -> bool:
    return gt(d1, d0)


def ge(d0: "Instant", d1: "Instant") -> bool:
    return gt(d0, d1) or eq(d0, d1)


def le(d0: "Instant", d1: "Instant") -> bool:
    return gt(d1, d0) or eq(d0, d1)


def compare(d0: "Instant", d1: "Instant") -> int:
    """-1, 0 or 1 as d0 is earlier than, equal to, or later than d1."""
    if gt(d0, d1):
        return 1
    if eq(d0, d1):
        return 0
    return -1
