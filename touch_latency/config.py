"""Configuration dataclasses and constants for latency calibration."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple


class CalibrationConstants:
    """Defaults shared by the calibration pipeline."""

    # Circle fit needs at least three points to define a center and radius
    MIN_FIT_SAMPLES: int = 3

    # Period needs two crossings of a reference angle to measure one interval
    MIN_CROSSINGS: int = 2

    # Two reference angles a quarter turn apart in the rotated frame
    REFERENCE_ANGLES_RAD: Tuple[float, float] = (math.pi / 2.0, math.pi * 1.5)

    # Disagreement between the two period estimates that triggers a warning (ms)
    CONSISTENCY_THRESHOLD_MS: float = 30.0

    # One press of the nudge buttons (ms)
    NUDGE_STEP_MS: float = 5.0


@dataclass(frozen=True)
class CalibrationConfig:
    """Configuration for circle fitting and revolution timing."""

    min_samples: int = CalibrationConstants.MIN_FIT_SAMPLES
    reference_angles_rad: Tuple[float, float] = CalibrationConstants.REFERENCE_ANGLES_RAD
    consistency_threshold_ms: float = CalibrationConstants.CONSISTENCY_THRESHOLD_MS

    # Reject a calibration whose period could not be resolved
    require_period: bool = True


@dataclass(frozen=True)
class NudgeConfig:
    """Configuration for the nudge controller."""

    step_ms: float = CalibrationConstants.NUDGE_STEP_MS
    initial_ms: float = 0.0
