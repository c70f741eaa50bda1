"""End-to-end evaluation of a work order under a run configuration."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from roborate.config import RunConfig
from roborate.evaluation import Segment, aggregate, apply_rounding, decompose
from roborate.scenario.contract import WorkOrder
from roborate.scenario.io import build_resolver

__all__ = ["RateEvaluation", "evaluate"]


@dataclass(slots=True)
class RateEvaluation:
    """Segments, exact total and rounded payable value for one work order."""

    segments: list[Segment]
    total: Decimal
    value: Decimal
    config: RunConfig


def evaluate(order: WorkOrder, config: RunConfig | None = None) -> RateEvaluation:
    config = config or RunConfig()
    resolver = build_resolver(order, config.classifier(), strict=config.strict_bands)
    segments = list(decompose(order.shift.to_shift(), resolver, breaks=config.break_policy()))
    total = aggregate(segments, unit=config.unit())
    return RateEvaluation(
        segments=segments,
        total=total,
        value=apply_rounding(total, config.rounding),
        config=config,
    )
