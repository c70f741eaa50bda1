"""Recurring unpaid rest windows anchored on the shift start."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime, timedelta

from roborate.core.errors import RoboRateValueError

__all__ = ["BreakPolicy"]


@dataclass(frozen=True, slots=True)
class BreakPolicy:
    """Rest for ``rest`` after every ``work`` period, counted from the shift start."""

    work: timedelta = timedelta(hours=8)
    rest: timedelta = timedelta(hours=1)

    def __post_init__(self) -> None:
        if self.work <= timedelta(0) or self.rest <= timedelta(0):
            raise RoboRateValueError("Break work and rest periods must be positive")

    @classmethod
    def from_hours(cls, work_hours: float, rest_hours: float) -> "BreakPolicy":
        return cls(work=timedelta(hours=work_hours), rest=timedelta(hours=rest_hours))

    def windows(self, anchor: datetime) -> Iterator[tuple[datetime, datetime]]:
        """Yield the endless sequence of ``(rest_start, rest_end)`` windows after ``anchor``."""
        start = anchor
        while True:
            rest_start = start + self.work
            yield rest_start, rest_start + self.rest
            start = rest_start + self.rest
