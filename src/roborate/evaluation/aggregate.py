"""Weighted sums over decomposed segments."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import timedelta
from decimal import ROUND_DOWN, ROUND_HALF_UP, Decimal
from enum import Enum
from fractions import Fraction

from roborate.core.errors import RoboRateValueError
from roborate.evaluation.decompose import Segment

__all__ = [
    "RATE_UNITS",
    "Rounding",
    "LabelTotal",
    "rate_unit",
    "duration_in_units",
    "aggregate",
    "apply_rounding",
    "totals_by_label",
    "to_json_number",
]

RATE_UNITS: dict[str, timedelta] = {
    "second": timedelta(seconds=1),
    "minute": timedelta(minutes=1),
    "hour": timedelta(hours=1),
}

_MICROSECOND = timedelta(microseconds=1)


class Rounding(str, Enum):
    TRUNCATE = "truncate"
    HALF_UP = "half_up"
    NONE = "none"


@dataclass(slots=True)
class LabelTotal:
    """Worked time and amount accumulated for one band label."""

    label: str
    duration: timedelta = timedelta(0)
    amount: Decimal = Decimal(0)


def rate_unit(name: str) -> timedelta:
    try:
        return RATE_UNITS[name.lower()]
    except KeyError as exc:
        raise RoboRateValueError(
            f"Unknown rate unit '{name}' (expected one of {', '.join(RATE_UNITS)})"
        ) from exc


def _units(duration: timedelta, unit: timedelta) -> Fraction:
    return Fraction(duration // _MICROSECOND, unit // _MICROSECOND)


def _to_decimal(value: Fraction) -> Decimal:
    return Decimal(value.numerator) / Decimal(value.denominator)


def duration_in_units(duration: timedelta, unit: timedelta = RATE_UNITS["hour"]) -> Decimal:
    """Express ``duration`` as a (fractional) number of ``unit``."""
    return _to_decimal(_units(duration, unit))


def aggregate(segments: Iterable[Segment], *, unit: timedelta = RATE_UNITS["hour"]) -> Decimal:
    """Sum ``duration / unit * band.value`` over billable segments.

    Accumulation is exact, so the total does not depend on segment order and partial units
    are billed proportionally. Rounding is left to :func:`apply_rounding`.
    """
    total = Fraction(0)
    for segment in segments:
        if segment.band is None:
            continue
        total += _units(segment.duration, unit) * Fraction(segment.band.value)
    return _to_decimal(total)


def apply_rounding(total: Decimal, policy: Rounding | str = Rounding.TRUNCATE) -> Decimal:
    policy = Rounding(policy)
    if policy is Rounding.TRUNCATE:
        return total.to_integral_value(rounding=ROUND_DOWN)
    if policy is Rounding.HALF_UP:
        return total.to_integral_value(rounding=ROUND_HALF_UP)
    return total


def totals_by_label(
    segments: Iterable[Segment], *, unit: timedelta = RATE_UNITS["hour"]
) -> dict[str, LabelTotal]:
    """Group worked time and amounts by segment label (breaks included, at zero cost)."""
    totals: dict[str, LabelTotal] = {}
    for segment in segments:
        entry = totals.setdefault(segment.label, LabelTotal(label=segment.label))
        entry.duration += segment.duration
        if segment.band is not None:
            entry.amount += _to_decimal(_units(segment.duration, unit) * Fraction(segment.band.value))
    return totals


def to_json_number(value: Decimal) -> int | float:
    if value == value.to_integral_value():
        return int(value)
    return float(value)
