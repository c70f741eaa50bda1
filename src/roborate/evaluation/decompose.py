"""Shift decomposition into rate-homogeneous segments."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, replace
from datetime import datetime, time, timedelta

from roborate.core.errors import InvalidShiftError
from roborate.scheduling.bands import BandResolver, RateBand
from roborate.scheduling.breaks import BreakPolicy

__all__ = ["BREAK_LABEL", "Shift", "Segment", "decompose"]

logger = logging.getLogger(__name__)

BREAK_LABEL = "break"

_DAY = timedelta(days=1)


@dataclass(frozen=True, slots=True)
class Shift:
    """Absolute work period on naive local timestamps."""

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.end <= self.start:
            raise InvalidShiftError(
                f"Shift end {self.end.isoformat()} must be after start {self.start.isoformat()}"
            )

    @property
    def duration(self) -> timedelta:
        return self.end - self.start


@dataclass(frozen=True, slots=True)
class Segment:
    """Contiguous slice ``[start, end)`` of a shift billed at a single band.

    Break segments carry ``band=None`` and are not billed.
    """

    start: datetime
    end: datetime
    label: str
    band: RateBand | None

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def billable(self) -> bool:
        return self.band is not None


def _next_midnight(instant: datetime) -> datetime:
    return datetime.combine(instant.date() + _DAY, time.min)


def _walk(shift: Shift, bands: BandResolver, breaks: BreakPolicy | None) -> Iterator[Segment]:
    windows = breaks.windows(shift.start) if breaks is not None else iter(())
    rest = next(windows, None)
    cursor = shift.start
    while cursor < shift.end:
        if rest is not None and cursor >= rest[1]:
            rest = next(windows, None)
            continue
        if rest is not None and rest[0] <= cursor:
            stop = min(rest[1], shift.end)
            yield Segment(cursor, stop, BREAK_LABEL, None)
            cursor = stop
            continue

        label, band = bands.resolve(cursor)
        stop = min(band.next_end(cursor), _next_midnight(cursor), shift.end)
        if rest is not None:
            stop = min(stop, rest[0])
        yield Segment(cursor, stop, label, band)
        cursor = stop


def _coalesce(segments: Iterable[Segment]) -> Iterator[Segment]:
    pending: Segment | None = None
    for segment in segments:
        if (
            pending is not None
            and pending.end == segment.start
            and pending.label == segment.label
            and pending.band == segment.band
        ):
            pending = replace(pending, end=segment.end)
            continue
        if pending is not None:
            yield pending
        pending = segment
    if pending is not None:
        yield pending


def decompose(
    shift: Shift,
    bands: BandResolver,
    *,
    breaks: BreakPolicy | None = None,
    coalesce: bool = True,
) -> Iterator[Segment]:
    """Lazily split ``shift`` into segments that each lie inside one resolved band.

    Parameters
    ----------
    shift:
        Work period to decompose.
    bands:
        Resolver returning the ``(label, band)`` active at an instant, e.g. a
        :class:`~roborate.scheduling.bands.BandSet` or a
        :class:`~roborate.scheduling.calendar.TieredBandSet`. The resolved band must stay
        constant until its next end boundary or the next midnight.
    breaks:
        Optional rest policy; rest windows become unbilled ``"break"`` segments.
    coalesce:
        Merge adjacent segments resolving to the same label and band. When ``False`` every
        segment also stays within one calendar day.

    Raises
    ------
    UncoveredTimeError
        When the resolver finds no band for an instant inside the shift.
    """
    segments = _walk(shift, bands, breaks)
    if coalesce:
        segments = _coalesce(segments)
    for segment in segments:
        logger.debug(
            "segment %s -> %s [%s]",
            segment.start.isoformat(),
            segment.end.isoformat(),
            segment.label,
        )
        yield segment
