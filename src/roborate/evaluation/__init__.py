"""Evaluation layer (decomposition, aggregation, reporting)."""

from .aggregate import (
    RATE_UNITS,
    LabelTotal,
    Rounding,
    aggregate,
    apply_rounding,
    duration_in_units,
    rate_unit,
    to_json_number,
    totals_by_label,
)
from .decompose import BREAK_LABEL, Segment, Shift, decompose
from .reporting import SEGMENT_COLUMNS, segments_dataframe

__all__ = [
    "Shift",
    "Segment",
    "BREAK_LABEL",
    "decompose",
    "aggregate",
    "apply_rounding",
    "duration_in_units",
    "rate_unit",
    "to_json_number",
    "totals_by_label",
    "LabelTotal",
    "Rounding",
    "RATE_UNITS",
    "SEGMENT_COLUMNS",
    "segments_dataframe",
]
