"""Scheduling primitives (rate bands, day classification, breaks)."""

from .bands import BandResolver, BandSet, RateBand
from .breaks import BreakPolicy
from .calendar import EXTRA, STANDARD, TieredBandSet, WeekdayClassifier, parse_weekday

__all__ = [
    "RateBand",
    "BandSet",
    "BandResolver",
    "BreakPolicy",
    "TieredBandSet",
    "WeekdayClassifier",
    "parse_weekday",
    "STANDARD",
    "EXTRA",
]
