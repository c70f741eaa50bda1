"""Core utilities shared across roborate modules."""

from .errors import (
    BandConfigurationError,
    InvalidShiftError,
    RoboRateValueError,
    UncoveredTimeError,
)

__all__ = [
    "RoboRateValueError",
    "InvalidShiftError",
    "BandConfigurationError",
    "UncoveredTimeError",
]
