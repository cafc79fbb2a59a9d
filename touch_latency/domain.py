"""Data structures flowing through the latency calibration engine.

Samples come from an external touch source as ``(t, x, y)`` triples for a
single tracked contact. The classes here carry data and small helpers only;
fitting, timing and projection live in their own modules.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class Sample:
    """Single touch observation for the tracked contact."""

    t: float
    x: float
    y: float


@dataclass(frozen=True)
class AnnotatedSample(Sample):
    """Sample with its polar angle (radians) about a fitted center."""

    angle: float = 0.0


@dataclass(frozen=True)
class Circle:
    """Fitted circle; ``period`` is ``None`` until the revolution time is known."""

    cx: float
    cy: float
    r: float
    period: Optional[float] = None

    @property
    def has_period(self) -> bool:
        return self.period is not None

    @property
    def angular_velocity(self) -> Optional[float]:
        """Radians per time unit, or ``None`` when the period is unresolved."""
        if self.period is None or self.period == 0:
            return None
        return (math.pi * 2.0) / self.period

    def with_period(self, period: Optional[float]) -> "Circle":
        return replace(self, period=period)


@dataclass(frozen=True)
class ProjectedPoint:
    """Lag-compensated point on the circle for one live sample."""

    x: float
    y: float


@dataclass(frozen=True)
class ConsistencyWarning:
    """The two reference-angle period estimates disagree beyond the threshold."""

    quarter_period: float
    three_quarter_period: float
    threshold: float

    @property
    def delta(self) -> float:
        return abs(self.quarter_period - self.three_quarter_period)

    def __str__(self) -> str:
        return (
            f"Inconsistent revolution times: {self.quarter_period:.2f}ms "
            f"{self.three_quarter_period:.2f}ms"
        )


@dataclass(frozen=True)
class CalibrationResult:
    """Outcome of one finished collection phase."""

    circle: Circle
    sample_count: int
    warning: Optional[ConsistencyWarning] = None

    @property
    def cx(self) -> float:
        return self.circle.cx

    @property
    def cy(self) -> float:
        return self.circle.cy

    @property
    def r(self) -> float:
        return self.circle.r

    @property
    def period(self) -> Optional[float]:
        return self.circle.period


@dataclass(frozen=True)
class NudgeChanged:
    """Emitted whenever the nudge offset is adjusted."""

    value_ms: float


class SessionState(Enum):
    """Modes of the calibration session."""

    UNCALIBRATED = "uncalibrated"
    COLLECTING = "collecting"
    CALIBRATED = "calibrated"
