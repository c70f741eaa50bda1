"""Tabular views over decomposed segments."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import timedelta

import pandas as pd

from roborate.evaluation.aggregate import RATE_UNITS, duration_in_units
from roborate.evaluation.decompose import Segment

__all__ = ["SEGMENT_COLUMNS", "segments_dataframe"]

SEGMENT_COLUMNS = [
    "start",
    "end",
    "label",
    "units",
    "rate",
    "amount",
]


def segments_dataframe(
    segments: Sequence[Segment],
    *,
    unit: timedelta = RATE_UNITS["hour"],
) -> pd.DataFrame:
    """Return one row per segment with its duration in ``unit`` and billed amount.

    Break rows carry an empty rate and a zero amount.
    """
    if not segments:
        return pd.DataFrame(columns=SEGMENT_COLUMNS)
    rows = []
    for segment in segments:
        units = duration_in_units(segment.duration, unit)
        rate = segment.band.value if segment.band is not None else None
        rows.append(
            {
                "start": segment.start,
                "end": segment.end,
                "label": segment.label,
                "units": float(units),
                "rate": float(rate) if rate is not None else None,
                "amount": float(units * rate) if rate is not None else 0.0,
            }
        )
    return pd.DataFrame(rows).reindex(columns=SEGMENT_COLUMNS)
