"""Angle helpers shared by fitting, timing and projection.

All angles use the same convention: ``atan2(x - cx, y - cy)``, i.e. the
x-offset is the sine component and the y-offset the cosine component.
Crossing detection depends on every caller agreeing on it.
"""
from __future__ import annotations

import math
from typing import Tuple

TWO_PI = math.pi * 2.0


def polar_angle(x: float, y: float, cx: float, cy: float) -> float:
    """Angle of ``(x, y)`` about ``(cx, cy)`` in ``(-pi, pi]``."""
    return math.atan2(x - cx, y - cy)


def normalize_angle(angle: float) -> float:
    """Map an angle to ``[0, 2*pi)``."""
    return (angle + TWO_PI) % TWO_PI


def point_at_angle(cx: float, cy: float, r: float, angle: float) -> Tuple[float, float]:
    """Inverse of :func:`polar_angle` for a point at distance ``r``."""
    return cx + r * math.sin(angle), cy + r * math.cos(angle)


def angular_difference(a: float, b: float) -> float:
    """Signed difference ``a - b`` wrapped to ``[-pi, pi)``."""
    return (a - b + math.pi) % TWO_PI - math.pi
