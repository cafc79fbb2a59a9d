"""Synthetic circular stylus traces.

Stands in for the external drawing machine: a stylus moving around a circle
at constant angular velocity, sampled at a fixed interval. An optional
reporting lag makes each sample show where the stylus was ``lag`` time units
earlier, which is the effect the nudge is meant to cancel out.
"""
from __future__ import annotations

import math
from typing import List, Optional

import numpy as np

from .domain import Sample


def generate_circle_trace(
    cx: float,
    cy: float,
    r: float,
    period: float,
    duration: float,
    interval: float,
    phase: float = 0.0,
    start_time: float = 0.0,
    noise_px: float = 0.0,
    lag: float = 0.0,
    clockwise: bool = False,
    seed: Optional[int] = None,
) -> List[Sample]:
    """Sample ``[start_time, start_time + duration)`` every ``interval``.

    Angles follow the shared convention (x = cx + r*sin, y = cy + r*cos) and
    start at ``phase`` radians. ``noise_px`` adds Gaussian jitter to both
    coordinates.
    """
    if period <= 0:
        raise ValueError("period must be positive")
    if interval <= 0:
        raise ValueError("interval must be positive")

    count = int(math.floor(duration / interval + 1e-9))
    times = start_time + np.arange(count, dtype=float) * interval

    direction = -1.0 if clockwise else 1.0
    omega = direction * (math.pi * 2.0) / period
    angles = phase + omega * (times - start_time - lag)

    xs = cx + r * np.sin(angles)
    ys = cy + r * np.cos(angles)
    if noise_px > 0:
        rng = np.random.default_rng(seed)
        xs = xs + rng.normal(0.0, noise_px, size=count)
        ys = ys + rng.normal(0.0, noise_px, size=count)

    return [Sample(t=float(t), x=float(x), y=float(y)) for t, x, y in zip(times, xs, ys)]
