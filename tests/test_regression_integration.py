from __future__ import annotations

from decimal import Decimal

from roborate.config import RunConfig
from roborate.pipeline import evaluate
from roborate.scenario.io import load_work_order


def test_shipped_sample_matches_expected_output(fixtures_dir):
    result = evaluate(load_work_order(fixtures_dir / "sample_work_order.json"))
    assert result.value == Decimal(13725)
    assert [s.label for s in result.segments] == ["standardDay", "standardNight", "extraNight"]


def test_week_long_shift_with_breaks(fixtures_dir):
    result = evaluate(load_work_order(fixtures_dir / "week_work_order.yaml"))
    assert result.value == Decimal(202200)
    assert sum(1 for s in result.segments if not s.billable) == 17


def test_hourly_rates_without_weekend_or_breaks(fixtures_dir):
    order = load_work_order(fixtures_dir / "sample_work_order.json")
    config = RunConfig(rate_unit="hour", rounding="none", extra_days=(), breaks={"enabled": False})
    result = evaluate(order, config)
    assert result.total == Decimal("186.25")
    assert result.value == Decimal("186.25")


def test_rounding_applies_to_final_total_only(fixtures_dir):
    order = load_work_order(fixtures_dir / "sample_work_order.json")
    config = RunConfig(rate_unit="hour", extra_days=())
    result = evaluate(order, config)
    assert result.total == Decimal("186.25")
    assert result.value == Decimal(186)
