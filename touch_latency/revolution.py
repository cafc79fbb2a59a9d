"""Revolution period estimation from timestamped angle crossings.

The traced path is timed at two reference angles a quarter turn apart
(pi/2 and 3*pi/2 by default). At each one we collect the times at which the
path crosses that angle, interpolating between consecutive samples, and
average the intervals between consecutive crossings. The two estimates are
then averaged together and compared for consistency.

Crossing detection works on angles normalized to ``[0, 2*pi)``. A pair of
samples straddling the 0/2*pi seam looks, in that frame, like it spans
almost the whole circle. To reject those pairs the containment test is
repeated in a frame rotated by pi, where the seam sits on the opposite side
of the target. Only pairs that contain the target in both frames count.
Targets at 0 or pi sit on the seam of one of the two frames and are only
reported on an exact hit, so reference angles must stay clear of them.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from .config import CalibrationConfig, CalibrationConstants
from .domain import AnnotatedSample, Circle, ConsistencyWarning, Sample
from .geometry import normalize_angle, polar_angle

logger = logging.getLogger(__name__)


def crossing_time(prev: AnnotatedSample, nxt: AnnotatedSample, target: float) -> Optional[float]:
    """Time at which the path between ``prev`` and ``nxt`` crosses ``target``.

    Returns ``nxt.t`` when ``nxt`` sits exactly on the target angle, the
    linearly interpolated time when the pair strictly brackets the target in
    both the raw and the pi-rotated frame, and ``None`` otherwise.
    """
    angle = normalize_angle(target)
    rot_angle = normalize_angle(angle + math.pi)

    last_angle = normalize_angle(prev.angle)
    this_angle = normalize_angle(nxt.angle)
    if this_angle == angle:
        return nxt.t

    low_angle, high_angle = sorted((last_angle, this_angle))
    rot_low, rot_high = sorted(
        (normalize_angle(this_angle + math.pi), normalize_angle(last_angle + math.pi))
    )
    if not (low_angle < angle < high_angle and rot_low < rot_angle < rot_high):
        return None

    # angle is taken as linear in time between consecutive samples
    time_per_rad = (nxt.t - prev.t) / (this_angle - last_angle)
    return prev.t + time_per_rad * (angle - last_angle)


def crossing_times(samples: Sequence[AnnotatedSample], target: float) -> List[float]:
    """All crossings of ``target`` in traversal order."""
    if not samples:
        return []

    times: List[float] = []
    if normalize_angle(samples[0].angle) == normalize_angle(target):
        times.append(samples[0].t)
    for prev, nxt in zip(samples, samples[1:]):
        t = crossing_time(prev, nxt, target)
        if t is not None:
            times.append(t)
    return times


def period_at_angle(
    samples: Sequence[AnnotatedSample],
    target: float,
) -> Optional[float]:
    """Mean interval between consecutive crossings, or ``None`` if too few."""
    times = crossing_times(samples, target)
    if len(times) < CalibrationConstants.MIN_CROSSINGS:
        logger.debug(
            "Not enough rotations to time angle %.4f rad: %s crossing(s)", target, len(times)
        )
        return None
    return float(np.diff(np.asarray(times, dtype=float)).mean())


@dataclass(frozen=True)
class PeriodEstimate:
    """Combined period plus the per-angle estimates it was built from."""

    period: Optional[float]
    quarter_period: Optional[float]
    three_quarter_period: Optional[float]
    warning: Optional[ConsistencyWarning] = None

    @property
    def is_defined(self) -> bool:
        return self.period is not None

    def apply(self, circle: Circle) -> Circle:
        return circle.with_period(self.period)


class RevolutionTimer:
    """Estimate how long the traced path takes to complete one revolution."""

    def __init__(self, config: Optional[CalibrationConfig] = None) -> None:
        self.config = config or CalibrationConfig()

    def estimate_period(self, samples: Sequence[Sample], circle: Circle) -> PeriodEstimate:
        annotated = self._annotate(samples, circle)
        first_angle, second_angle = self.config.reference_angles_rad

        quarter = period_at_angle(annotated, first_angle)
        three_quarter = period_at_angle(annotated, second_angle)

        warning = None
        if quarter is not None and three_quarter is not None:
            period = (quarter + three_quarter) / 2.0
            if abs(quarter - three_quarter) > self.config.consistency_threshold_ms:
                warning = ConsistencyWarning(
                    quarter_period=quarter,
                    three_quarter_period=three_quarter,
                    threshold=self.config.consistency_threshold_ms,
                )
                logger.warning("%s", warning)
        elif quarter is not None:
            period = quarter
        else:
            period = three_quarter

        if period is None:
            logger.info("Revolution period unresolved from %s samples", len(annotated))
        else:
            logger.info("Revolution period %.3f (%s / %s)", period, quarter, three_quarter)

        return PeriodEstimate(
            period=period,
            quarter_period=quarter,
            three_quarter_period=three_quarter,
            warning=warning,
        )

    @staticmethod
    def _annotate(samples: Sequence[Sample], circle: Circle) -> List[AnnotatedSample]:
        return [
            s
            if isinstance(s, AnnotatedSample)
            else AnnotatedSample(t=s.t, x=s.x, y=s.y, angle=polar_angle(s.x, s.y, circle.cx, circle.cy))
            for s in samples
        ]


def estimate_period(
    samples: Sequence[Sample],
    circle: Circle,
    cfg: Optional[CalibrationConfig] = None,
) -> PeriodEstimate:
    return RevolutionTimer(cfg).estimate_period(samples, circle)
