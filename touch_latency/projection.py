"""Lag-compensated projection of live samples onto the fitted circle."""
from __future__ import annotations

import logging
import math
from typing import Iterable, Optional, Tuple

import pandas as pd

from .domain import Circle, ProjectedPoint, Sample
from .errors import DegenerateSample, PeriodUndefined
from .geometry import point_at_angle, polar_angle

logger = logging.getLogger(__name__)


class Projector:
    """Project a live sample onto the circle, shifted forward by the nudge.

    The nudge is a time offset in the same unit as the circle's period. With
    the angular velocity known from calibration it becomes a rotation of the
    nearest point along the path: a positive nudge moves the target ahead of
    the reported touch, which is what compensates for input latency.
    """

    def nearest_point(self, circle: Circle, sample: Sample) -> Tuple[float, float]:
        vx = sample.x - circle.cx
        vy = sample.y - circle.cy
        mag = math.hypot(vx, vy)
        if mag == 0:
            raise DegenerateSample(
                f"Sample at t={sample.t} coincides with the circle center ({circle.cx}, {circle.cy})"
            )
        return circle.cx + vx / mag * circle.r, circle.cy + vy / mag * circle.r

    def project(self, circle: Circle, nudge: float, sample: Sample) -> ProjectedPoint:
        velocity = circle.angular_velocity
        if velocity is None:
            raise PeriodUndefined("Circle has no revolution period; calibrate over more rotations")

        ax, ay = self.nearest_point(circle, sample)
        angle = polar_angle(ax, ay, circle.cx, circle.cy)
        angle += velocity * nudge

        x, y = point_at_angle(circle.cx, circle.cy, circle.r, angle)
        return ProjectedPoint(x=x, y=y)

    def project_many(
        self,
        circle: Circle,
        nudge: float,
        samples: Iterable[Sample],
    ) -> pd.DataFrame:
        """Project a batch; degenerate samples keep NaN coordinates."""

        rows = []
        skipped = 0
        for sample in samples:
            try:
                point: Optional[ProjectedPoint] = self.project(circle, nudge, sample)
            except DegenerateSample:
                point = None
                skipped += 1
            rows.append(
                {
                    "time_ms": sample.t,
                    "x_px": sample.x,
                    "y_px": sample.y,
                    "projected_x_px": point.x if point else float("nan"),
                    "projected_y_px": point.y if point else float("nan"),
                }
            )
        if skipped:
            logger.info("Skipped %s degenerate sample(s) at the circle center", skipped)

        return pd.DataFrame(
            rows,
            columns=["time_ms", "x_px", "y_px", "projected_x_px", "projected_y_px"],
        )


def project_sample(circle: Circle, nudge: float, sample: Sample) -> ProjectedPoint:
    return Projector().project(circle, nudge, sample)
