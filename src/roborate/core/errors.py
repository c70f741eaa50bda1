"""Common roborate-specific exceptions."""


class RoboRateValueError(ValueError):
    """Raised when roborate detects invalid user-provided data."""


class InvalidShiftError(RoboRateValueError):
    """Raised when a shift does not end strictly after it starts."""


class BandConfigurationError(RoboRateValueError):
    """Raised when rate bands do not partition the 24-hour clock or a tier is missing."""


class UncoveredTimeError(RoboRateValueError):
    """Raised when no rate band covers a wall-clock instant."""

    def __init__(self, instant: object) -> None:
        super().__init__(f"No rate band covers {instant}")
        self.instant = instant


__all__ = [
    "RoboRateValueError",
    "InvalidShiftError",
    "BandConfigurationError",
    "UncoveredTimeError",
]
