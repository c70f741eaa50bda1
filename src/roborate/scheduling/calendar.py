"""Calendar-day classification (standard vs extra days) layered over band sets."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol

from roborate.core.errors import BandConfigurationError, RoboRateValueError
from roborate.scheduling.bands import BandSet, RateBand

__all__ = [
    "STANDARD",
    "EXTRA",
    "DayClassifier",
    "WeekdayClassifier",
    "TieredBandSet",
    "parse_weekday",
]

STANDARD = "standard"
EXTRA = "extra"

_WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


def parse_weekday(name: str) -> int:
    """Return the ``date.weekday()`` index for ``sat``/``saturday``-style names."""
    key = name.strip().lower()
    for index, full in enumerate(_WEEKDAYS):
        if key in (full, full[:3]):
            return index
    raise RoboRateValueError(f"Unknown weekday '{name}'")


class DayClassifier(Protocol):
    @property
    def tiers(self) -> tuple[str, ...]: ...

    def __call__(self, day: date) -> str: ...


@dataclass(frozen=True, slots=True)
class WeekdayClassifier:
    """Classify calendar dates as ``extra`` on selected weekdays, ``standard`` otherwise."""

    extra_days: frozenset[int] = frozenset({5, 6})

    @property
    def tiers(self) -> tuple[str, ...]:
        return (STANDARD, EXTRA)

    def __call__(self, day: date) -> str:
        return EXTRA if day.weekday() in self.extra_days else STANDARD

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "WeekdayClassifier":
        return cls(extra_days=frozenset(parse_weekday(name) for name in names))


class TieredBandSet:
    """Resolve bands by first classifying the calendar date, then the time of day.

    Parameters
    ----------
    tiers:
        Band set per classification value (e.g. ``{"standard": ..., "extra": ...}``).
    classifier:
        Callable mapping a ``date`` to one of ``classifier.tiers``.
    """

    def __init__(self, tiers: Mapping[str, BandSet], classifier: DayClassifier):
        missing = [tier for tier in classifier.tiers if tier not in tiers]
        if missing:
            raise BandConfigurationError(f"No bands configured for tier(s): {', '.join(missing)}")
        self.tiers = dict(tiers)
        self.classifier = classifier

    def resolve(self, instant: datetime) -> tuple[str, RateBand]:
        return self.tiers[self.classifier(instant.date())].resolve(instant)

    def check_partition(self) -> None:
        for bands in self.tiers.values():
            bands.check_partition()

    def labels(self) -> list[str]:
        return [label for bands in self.tiers.values() for label in bands]
