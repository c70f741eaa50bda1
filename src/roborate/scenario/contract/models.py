"""Pydantic models describing the robot work order document."""

from __future__ import annotations

from datetime import datetime, time
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from roborate.evaluation.decompose import Shift
from roborate.scheduling.bands import RateBand

__all__ = ["ShiftWindow", "BandSpec", "WorkOrder"]


class ShiftWindow(BaseModel):
    """Shift boundaries as ISO-8601 local date-times.

    Attributes
    ----------
    start / end:
        Naive timestamps; ``end`` must be strictly after ``start``.
    """

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime

    @field_validator("start", "end")
    @classmethod
    def _naive(cls, value: datetime) -> datetime:
        if value.tzinfo is not None:
            raise ValueError("Shift timestamps must be naive local times (no UTC offset)")
        return value

    @model_validator(mode="after")
    def _end_after_start(self) -> "ShiftWindow":
        if self.end <= self.start:
            raise ValueError("shift.end must be after shift.start")
        return self

    def to_shift(self) -> Shift:
        return Shift(start=self.start, end=self.end)


class BandSpec(BaseModel):
    """Wall-clock band ``[start, end)`` and its rate."""

    model_config = ConfigDict(frozen=True)

    start: time
    end: time
    value: Decimal

    @field_validator("start", "end", mode="before")
    @classmethod
    def _not_numeric(cls, value: Any) -> Any:
        if isinstance(value, (int, float)):
            raise ValueError(
                f"Band boundary {value!r} must be an HH:MM:SS string "
                "(quote HH:MM:SS values in YAML)"
            )
        return value

    @field_validator("start", "end")
    @classmethod
    def _naive(cls, value: time) -> time:
        if value.tzinfo is not None:
            raise ValueError(
                "Band boundaries must be naive wall-clock times "
                "(no UTC offset; quote HH:MM:SS values in YAML)"
            )
        return value

    @model_validator(mode="after")
    def _non_empty(self) -> "BandSpec":
        if self.start == self.end:
            raise ValueError("Band start and end must differ (a zero-width band covers no time)")
        return self

    @field_validator("value")
    @classmethod
    def _non_negative(cls, value: Decimal) -> Decimal:
        if value < 0:
            raise ValueError("Band value must be non-negative")
        return value

    def to_band(self) -> RateBand:
        return RateBand(start=self.start, end=self.end, value=self.value)


class WorkOrder(BaseModel):
    """Top-level document: a shift plus the robot's named rate bands.

    ``roboRate`` maps arbitrary labels (``standardDay``, ``extraNight`` ...) to bands;
    the label order is preserved for lookup.
    """

    model_config = ConfigDict(populate_by_name=True)

    shift: ShiftWindow
    robo_rate: dict[str, BandSpec] = Field(alias="roboRate")

    @field_validator("robo_rate")
    @classmethod
    def _has_bands(cls, value: dict[str, BandSpec]) -> dict[str, BandSpec]:
        if not value:
            raise ValueError("roboRate must define at least one band")
        return value

    def bands(self) -> dict[str, RateBand]:
        return {label: spec.to_band() for label, spec in self.robo_rate.items()}
