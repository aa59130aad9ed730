# caltime/core/formatter.py
from __future__ import annotations

import re
from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:  # pragma: no cover
    from caltime.core.instant import Instant

__all__ = ["int2str", "isoformat", "parse_isoformat"]

# YYYY-MM-DD[T| ]hh:mm[:ss[.fff]] ; year may run past four digits
_ISO_RE = re.compile(
    r"^\s*(?P<Y>\d{4,})-(?P<M>\d{2})-(?P<D>\d{2})"
    r"(?:[T ](?P<h>\d{2}):(?P<m>\d{2})(?::(?P<s>\d{2})(?:\.(?P<f>\d{1,3}))?)?)?\s*$"
)


def int2str(i: int, length: int) -> str:
    """Decimal rendering of `i`, left-padded with '0' up to `length` characters."""
    return str(int(i)).rjust(length, "0")


def isoformat(instant: "Instant", sep: str = "T") -> str:
    """YYYY-MM-DD<sep>hh:mm:ss.mmm with fixed-width zero-padded fields."""
    return (
        int2str(instant.year, 4) + "-"
        + int2str(instant.month, 2) + "-"
        + int2str(instant.day, 2) + sep
        + int2str(instant.hour, 2) + ":"
        + int2str(instant.minute, 2) + ":"
        + int2str(instant.second, 2) + "."
        + int2str(instant.millisecond, 3)
    )


def parse_isoformat(text: str) -> Tuple[int, int, int, int, int, int, int]:
    """
    Parse the text produced by isoformat() back into seven integer fields.

    The time part is optional, as are seconds and the fraction; a fraction
    of one or two digits is read as tenths / hundredths of a second.
    Field ranges are not checked here.
    """
    m = _ISO_RE.match(text or "")
    if not m:
        raise ValueError(f"Invalid instant '{text}': expected YYYY-MM-DDThh:mm:ss.mmm")
    frac = (m.group("f") or "").ljust(3, "0")
    return (
        int(m.group("Y")),
        int(m.group("M")),
        int(m.group("D")),
        int(m.group("h") or 0),
        int(m.group("m") or 0),
        int(m.group("s") or 0),
        int(frac),
    )
