"""Recurring wall-clock rate bands and band sets."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from datetime import datetime, time, timedelta
from decimal import Decimal
from typing import Protocol

from roborate.core.errors import BandConfigurationError, UncoveredTimeError

__all__ = ["RateBand", "BandSet", "BandResolver"]

_DAY = timedelta(days=1)


@dataclass(frozen=True, slots=True)
class RateBand:
    """Rate applicable whenever wall-clock time falls in ``[start, end)``.

    Attributes
    ----------
    start / end:
        Time-of-day boundaries. ``start > end`` means the band wraps past midnight
        (e.g. 23:00-07:00).
    value:
        Rate per billing unit (the unit is chosen at aggregation time).
    """

    start: time
    end: time
    value: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.value, Decimal):
            object.__setattr__(self, "value", Decimal(str(self.value)))

    @property
    def wraps(self) -> bool:
        return self.start > self.end

    def contains(self, t: time) -> bool:
        if self.wraps:
            return t >= self.start or t < self.end
        return self.start <= t < self.end

    def next_end(self, instant: datetime) -> datetime:
        """Return the first instant strictly after ``instant`` whose time of day is ``end``."""
        candidate = datetime.combine(instant.date(), self.end)
        if candidate <= instant:
            candidate += _DAY
        return candidate


class BandResolver(Protocol):
    """Maps an absolute instant to the ``(label, band)`` active at that instant."""

    def resolve(self, instant: datetime) -> tuple[str, RateBand]: ...


class BandSet(Mapping[str, RateBand]):
    """Ordered collection of labelled bands covering one 24-hour clock.

    Lookup returns the first band (in insertion order) containing the requested time.
    The bands are expected to partition the clock; :meth:`check_partition` verifies it.
    """

    def __init__(self, bands: Mapping[str, RateBand] | Iterable[tuple[str, RateBand]]):
        self._bands: dict[str, RateBand] = dict(bands)
        if not self._bands:
            raise BandConfigurationError("A band set needs at least one band")

    def __getitem__(self, label: str) -> RateBand:
        return self._bands[label]

    def __iter__(self) -> Iterator[str]:
        return iter(self._bands)

    def __len__(self) -> int:
        return len(self._bands)

    def __repr__(self) -> str:
        return f"BandSet({self._bands!r})"

    def band_at(self, t: time) -> tuple[str, RateBand]:
        for label, band in self._bands.items():
            if band.contains(t):
                return label, band
        raise UncoveredTimeError(t.isoformat())

    def resolve(self, instant: datetime) -> tuple[str, RateBand]:
        return self.band_at(instant.time())

    def boundaries(self) -> list[time]:
        points = {band.start for band in self._bands.values()}
        points.update(band.end for band in self._bands.values())
        return sorted(points)

    def check_partition(self) -> None:
        """Raise ``BandConfigurationError`` on gaps or overlaps in the 24-hour clock.

        Band membership only changes at a band boundary, so testing each distinct
        boundary covers every wall-clock instant.
        """
        for point in self.boundaries():
            owners = [label for label, band in self._bands.items() if band.contains(point)]
            if not owners:
                raise BandConfigurationError(f"No band covers {point.isoformat()}")
            if len(owners) > 1:
                raise BandConfigurationError(
                    f"Bands {', '.join(owners)} overlap at {point.isoformat()}"
                )
