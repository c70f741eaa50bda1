"""Run configuration (billing unit, rounding, breaks, extra days)."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, field_validator

from roborate.evaluation.aggregate import RATE_UNITS, Rounding, rate_unit
from roborate.scheduling.breaks import BreakPolicy
from roborate.scheduling.calendar import WeekdayClassifier, parse_weekday

__all__ = ["BreakSettings", "RunConfig", "load_config"]


class BreakSettings(BaseModel):
    """Rest policy: ``rest_hours`` off after every ``work_hours`` from the shift start."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    work_hours: float = 8.0
    rest_hours: float = 1.0

    @field_validator("work_hours", "rest_hours")
    @classmethod
    def _positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("Break periods must be positive")
        return value

    def policy(self) -> BreakPolicy | None:
        if not self.enabled:
            return None
        return BreakPolicy.from_hours(self.work_hours, self.rest_hours)


class RunConfig(BaseModel):
    """Settings applied when turning a work order into a payable value.

    Attributes
    ----------
    rate_unit:
        Time unit each band ``value`` is quoted in (``second``, ``minute`` or ``hour``).
    rounding:
        Rounding applied to the final total only (``truncate``, ``half_up``, ``none``).
    breaks:
        Unpaid rest policy.
    extra_days:
        Weekday names billed with the ``extra`` bands.
    strict_bands:
        Check that each band set partitions the 24-hour clock before decomposing.
    """

    model_config = ConfigDict(frozen=True)

    rate_unit: str = "minute"
    rounding: Rounding = Rounding.TRUNCATE
    breaks: BreakSettings = BreakSettings()
    extra_days: tuple[str, ...] = ("sat", "sun")
    strict_bands: bool = True

    @field_validator("rounding", mode="before")
    @classmethod
    def _lower_rounding(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value

    @field_validator("rate_unit")
    @classmethod
    def _known_unit(cls, value: str) -> str:
        value = value.lower()
        if value not in RATE_UNITS:
            raise ValueError(f"rate_unit must be one of {', '.join(RATE_UNITS)}")
        return value

    @field_validator("extra_days")
    @classmethod
    def _known_days(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        for name in value:
            parse_weekday(name)
        return value

    def unit(self) -> timedelta:
        return rate_unit(self.rate_unit)

    def classifier(self) -> WeekdayClassifier:
        return WeekdayClassifier.from_names(self.extra_days)

    def break_policy(self) -> BreakPolicy | None:
        return self.breaks.policy()

    def with_overrides(
        self,
        *,
        rate_unit: str | None = None,
        rounding: str | None = None,
        breaks: bool | None = None,
        strict_bands: bool | None = None,
    ) -> "RunConfig":
        """Return a copy where every non-``None`` CLI override replaces the file value."""
        data: dict[str, Any] = self.model_dump()
        if rate_unit is not None:
            data["rate_unit"] = rate_unit
        if rounding is not None:
            data["rounding"] = rounding
        if breaks is not None:
            data["breaks"]["enabled"] = breaks
        if strict_bands is not None:
            data["strict_bands"] = strict_bands
        return RunConfig.model_validate(data)


def load_config(path: str | Path | None = None) -> RunConfig:
    """Load a ``RunConfig`` from YAML; ``None`` returns the defaults."""
    if path is None:
        return RunConfig()
    with Path(path).open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config {path} must contain a mapping")
    return RunConfig.model_validate(data)
