"""Circle fit over a collected calibration trace."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from .config import CalibrationConfig
from .domain import AnnotatedSample, Circle, Sample
from .errors import InsufficientData
from .geometry import polar_angle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FitResult:
    """Fitted circle (without period) and the angle-annotated samples."""

    circle: Circle
    annotated: List[AnnotatedSample]


class CircleFitter:
    """Average the trace into a center and radius.

    The drawing machine is assumed to trace the circle with minimal
    deviation, so the center is the mean position and the radius the mean
    distance to it. There is no outlier rejection. The trace should cover
    whole revolutions, otherwise the mean is pulled towards the denser arc.
    """

    def __init__(self, config: Optional[CalibrationConfig] = None) -> None:
        self.config = config or CalibrationConfig()

    def fit(self, samples: Sequence[Sample]) -> FitResult:
        count = len(samples)
        if count < self.config.min_samples:
            raise InsufficientData(
                f"Circle fit needs at least {self.config.min_samples} samples, got {count}",
                count=count,
            )

        xs = np.fromiter((s.x for s in samples), dtype=float, count=count)
        ys = np.fromiter((s.y for s in samples), dtype=float, count=count)

        cx = float(xs.mean())
        cy = float(ys.mean())
        r = float(np.hypot(xs - cx, ys - cy).mean())

        annotated = [
            AnnotatedSample(t=s.t, x=s.x, y=s.y, angle=polar_angle(s.x, s.y, cx, cy))
            for s in samples
        ]
        logger.debug("Fitted circle center=(%.3f, %.3f) r=%.3f from %s samples", cx, cy, r, count)
        return FitResult(circle=Circle(cx=cx, cy=cy, r=r), annotated=annotated)


def fit_circle(samples: Sequence[Sample], cfg: Optional[CalibrationConfig] = None) -> FitResult:
    return CircleFitter(cfg).fit(samples)
