# caltime/core/duration.py
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Dict

__all__ = ["Duration"]


@dataclass(frozen=True)
class Duration:
    """
    Signed time interval.

    Each field carries its own sign and nothing is cross-normalized:
    Duration(days=1, hours=-2) is a legal value and stays as given.
    total_seconds() is the only place the fields are reduced to one number.
    """
    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    milliseconds: int = 0

    def total_seconds(self) -> float:
        return (
            self.days * 86400
            + self.hours * 3600
            + self.minutes * 60
            + self.seconds
            + self.milliseconds * 1e-3
        )

    def __neg__(self) -> "Duration":
        return Duration(
            days=-self.days,
            hours=-self.hours,
            minutes=-self.minutes,
            seconds=-self.seconds,
            milliseconds=-self.milliseconds,
        )

    def __pos__(self) -> "Duration":
        return self

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)
