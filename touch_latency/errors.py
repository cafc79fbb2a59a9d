"""Exceptions raised by the calibration and projection engine.

None of these are fatal to a session: each one is scoped to a single fit,
period estimate or projection and leaves the last good circle in place.
"""
from __future__ import annotations


class CalibrationError(Exception):
    """Base class for all touch latency errors."""


class InsufficientData(CalibrationError):
    """Too few samples to fit a circle, or too few crossings to time it."""

    def __init__(self, message: str, count: int | None = None) -> None:
        super().__init__(message)
        self.count = count


class DegenerateSample(CalibrationError):
    """Sample sits exactly on the circle center, so it has no direction."""


class PeriodUndefined(CalibrationError):
    """Projection was requested from a circle whose period is unresolved."""


class InvalidTransition(CalibrationError):
    """Command is not valid in the session's current state."""
