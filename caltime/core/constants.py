# caltime/core/constants.py
# -*- coding: utf-8 -*-
"""
caltime — core constants

Purpose
-------
Single source of truth for:
- unit conversion factors (day/hour/minute/second)
- clock-unit moduli used by the carry normalizer
- the month-length table
- fixed English weekday names (Sunday-first)
- the epoch of the ordinal day axis

Design
------
- Pure-Python, no external dependencies.
- Safe to import from any core module.
- Constants are immutable by convention (tuples, floats, ints).
"""

from __future__ import annotations
from typing import Tuple

__all__ = [
    # unit factors
    "D2H", "H2D", "D2M", "M2D", "S2D", "D2S", "H2S", "S2H", "M2S", "S2M",
    "MS_PER_SECOND", "SECONDS_PER_MINUTE", "MINUTES_PER_HOUR", "HOURS_PER_DAY",
    # calendar tables
    "MONTH_DAYS", "DAYS_PER_400_YEARS",
    "WEEKDAYS_LONG", "WEEKDAYS_SHORT",
    # ordinal axis
    "EPOCH_FIELDS", "EPOCH_ORDINAL", "JD_OF_EPOCH", "UNIX_EPOCH_FIELDS",
    # version tag
    "CALTIME_CONSTANTS_VERSION",
]

# ── version tag ───────────────────────────────────────────────────────────────
CALTIME_CONSTANTS_VERSION: str = "1.0.0"

# ── unit factors ─────────────────────────────────────────────────────────────
D2H: float = 24.0          # day    -> hour
H2D: float = 1.0 / D2H     # hour   -> day
D2M: float = D2H * 60.0    # day    -> minute
M2D: float = 1.0 / D2M     # minute -> day
S2D: float = M2D / 60.0    # second -> day
D2S: float = 86400.0       # day    -> second
H2S: float = 3600.0        # hour   -> second
S2H: float = 1.0 / H2S     # second -> hour
M2S: float = 60.0          # minute -> second
S2M: float = 1.0 / M2S     # second -> minute

# Moduli of the clock units, smallest first.
MS_PER_SECOND: int = 1000
SECONDS_PER_MINUTE: int = 60
MINUTES_PER_HOUR: int = 60
HOURS_PER_DAY: int = 24

# ── calendar tables ──────────────────────────────────────────────────────────
# Non-leap month lengths, January first.
MONTH_DAYS: Tuple[int, ...] = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

# The proleptic Gregorian calendar repeats every 400 years.
DAYS_PER_400_YEARS: int = 146097

WEEKDAYS_LONG: Tuple[str, ...] = (
    "Sunday", "Monday", "Tuesday", "Wednesday",
    "Thursday", "Friday", "Saturday",
)
WEEKDAYS_SHORT: Tuple[str, ...] = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")

# ── ordinal axis ─────────────────────────────────────────────────────────────
# (year, month, day, hour, minute, second, millisecond)
EPOCH_FIELDS: Tuple[int, ...] = (1, 1, 1, 0, 0, 0, 0)
EPOCH_ORDINAL: float = 1.0              # 0001-01-01T00:00:00.000
JD_OF_EPOCH: float = 1721425.5          # Julian Day of 0001-01-01T00:00 (proleptic Gregorian)
UNIX_EPOCH_FIELDS: Tuple[int, ...] = (1970, 1, 1, 0, 0, 0, 0)
