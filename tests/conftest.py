from typing import List

import pytest

from touch_latency import Sample, generate_circle_trace


@pytest.fixture
def one_revolution_trace() -> List[Sample]:
    """12 samples, evenly spaced over one revolution of a 1200 ms circle."""
    return generate_circle_trace(cx=100.0, cy=100.0, r=50.0, period=1200.0, duration=1200.0, interval=100.0)


@pytest.fixture
def two_revolution_trace() -> List[Sample]:
    """Same circle sampled at the same rate for two whole revolutions."""
    return generate_circle_trace(cx=100.0, cy=100.0, r=50.0, period=1200.0, duration=2400.0, interval=100.0)


@pytest.fixture
def dense_trace() -> List[Sample]:
    """2.5 revolutions at a sample rate that does not divide the period."""
    return generate_circle_trace(
        cx=400.0, cy=300.0, r=200.0, period=1000.0, duration=2500.0, interval=7.0, phase=0.3
    )
