"""Touchscreen latency calibration toolkit."""

from .config import CalibrationConfig, CalibrationConstants, NudgeConfig
from .domain import (
    AnnotatedSample,
    CalibrationResult,
    Circle,
    ConsistencyWarning,
    NudgeChanged,
    ProjectedPoint,
    Sample,
    SessionState,
)
from .errors import (
    CalibrationError,
    DegenerateSample,
    InsufficientData,
    InvalidTransition,
    PeriodUndefined,
)
from .fitting import CircleFitter, FitResult, fit_circle
from .revolution import (
    PeriodEstimate,
    RevolutionTimer,
    crossing_time,
    crossing_times,
    estimate_period,
    period_at_angle,
)
from .projection import Projector, project_sample
from .nudge import NudgeController
from .session import CalibrationSet, LatencySession
from .synthetic import generate_circle_trace

__all__ = [
    "CalibrationConfig",
    "CalibrationConstants",
    "NudgeConfig",
    "AnnotatedSample",
    "CalibrationResult",
    "Circle",
    "ConsistencyWarning",
    "NudgeChanged",
    "ProjectedPoint",
    "Sample",
    "SessionState",
    "CalibrationError",
    "DegenerateSample",
    "InsufficientData",
    "InvalidTransition",
    "PeriodUndefined",
    "CircleFitter",
    "FitResult",
    "fit_circle",
    "PeriodEstimate",
    "RevolutionTimer",
    "crossing_time",
    "crossing_times",
    "estimate_period",
    "period_at_angle",
    "Projector",
    "project_sample",
    "NudgeController",
    "CalibrationSet",
    "LatencySession",
    "generate_circle_trace",
]
