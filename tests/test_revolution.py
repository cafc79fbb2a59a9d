import math

import pytest

from touch_latency import (
    AnnotatedSample,
    CalibrationConfig,
    RevolutionTimer,
    crossing_time,
    crossing_times,
    fit_circle,
    generate_circle_trace,
    period_at_angle,
)

QUARTER = math.pi / 2.0
THREE_QUARTER = math.pi * 1.5


def _s(t, angle):
    return AnnotatedSample(t=t, x=0.0, y=0.0, angle=angle)


# ---------------------------------------------------------------------------
# crossing_time
# ---------------------------------------------------------------------------

def test_crossing_time_interpolates_forward_pair():
    assert crossing_time(_s(0.0, 1.0), _s(10.0, 2.0), QUARTER) == pytest.approx(10.0 * (QUARTER - 1.0))


def test_crossing_time_interpolates_backward_pair():
    assert crossing_time(_s(0.0, 2.0), _s(10.0, 1.0), QUARTER) == pytest.approx(10.0 * (2.0 - QUARTER))


def test_crossing_time_returns_none_when_target_not_bracketed():
    assert crossing_time(_s(0.0, 0.2), _s(10.0, 0.5), QUARTER) is None
    assert crossing_time(_s(0.0, 2.0), _s(10.0, 3.0), QUARTER) is None


def test_crossing_time_returns_none_for_stationary_pair():
    assert crossing_time(_s(0.0, 1.0), _s(10.0, 1.0), QUARTER) is None


def test_crossing_time_exact_hit_uses_next_timestamp():
    assert crossing_time(_s(0.0, 1.0), _s(10.0, QUARTER), QUARTER) == 10.0


def test_crossing_time_does_not_count_exact_hit_twice():
    # the sample on the target is reported as the pair's end, never its start
    assert crossing_time(_s(10.0, QUARTER), _s(20.0, 2.0), QUARTER) is None


@pytest.mark.parametrize("target", [QUARTER, THREE_QUARTER, 0.0, math.pi])
@pytest.mark.parametrize(
    "prev_angle, next_angle",
    [
        (6.1, 0.2),
        (0.2, 6.1),
        (-0.18, 0.2),
        (math.pi - 0.05, -math.pi + 0.05),
    ],
)
def test_crossing_time_rejects_pairs_straddling_either_seam(target, prev_angle, next_angle):
    # 0 and pi sit on the seam of the raw and the rotated frame respectively
    assert crossing_time(_s(0.0, prev_angle), _s(10.0, next_angle), target) is None


@pytest.mark.parametrize(
    "prev_angle, next_angle, target, expected",
    [
        (0.02, 0.1, 0.05, 3.0),
        (6.2, 6.28, 6.25, 5.0),
        (0.1, 0.02, 0.05, 5.0),
    ],
)
def test_crossing_time_near_zero_and_two_pi(prev_angle, next_angle, target, expected):
    assert crossing_time(_s(0.0, prev_angle), _s(8.0, next_angle), target) == pytest.approx(expected)


def test_crossing_time_accepts_unnormalized_angles():
    # -pi/2 and 3*pi/2 are the same direction
    t = crossing_time(_s(0.0, -1.7), _s(10.0, -1.4), -QUARTER)
    assert t == pytest.approx(10.0 * (1.7 - QUARTER) / 0.3)
    assert crossing_time(_s(0.0, -1.7), _s(10.0, -1.4), THREE_QUARTER) == pytest.approx(t)


# ---------------------------------------------------------------------------
# crossing_times / period_at_angle
# ---------------------------------------------------------------------------

def test_crossing_times_counts_first_sample_on_target():
    samples = [_s(0.0, QUARTER), _s(10.0, 2.0), _s(20.0, 3.0)]
    assert crossing_times(samples, QUARTER) == [0.0]


def test_crossing_times_empty_input():
    assert crossing_times([], QUARTER) == []


def test_crossing_times_follow_traversal_order(two_revolution_trace):
    annotated = fit_circle(two_revolution_trace).annotated

    assert crossing_times(annotated, QUARTER) == pytest.approx([300.0, 1500.0], abs=1e-6)
    assert crossing_times(annotated, THREE_QUARTER) == pytest.approx([900.0, 2100.0], abs=1e-6)


def test_period_at_angle_needs_two_crossings(one_revolution_trace):
    annotated = fit_circle(one_revolution_trace).annotated

    assert len(crossing_times(annotated, QUARTER)) == 1
    assert period_at_angle(annotated, QUARTER) is None
    assert period_at_angle(annotated, THREE_QUARTER) is None


def test_period_at_angle_is_mean_of_consecutive_intervals():
    samples = [
        _s(0.0, QUARTER),
        _s(100.0, math.pi),
        _s(200.0, 0.0),
        _s(300.0, QUARTER),
        _s(400.0, math.pi),
        _s(500.0, 0.0),
        _s(700.0, QUARTER),
    ]
    # crossings at 0, 300 and 700
    assert period_at_angle(samples, QUARTER) == pytest.approx(350.0)


# ---------------------------------------------------------------------------
# RevolutionTimer
# ---------------------------------------------------------------------------

def _irregular_revolutions(last_time=1600.0):
    return [
        _s(0.0, QUARTER),
        _s(250.0, math.pi),
        _s(500.0, THREE_QUARTER),
        _s(750.0, 0.0),
        _s(1000.0, QUARTER),
        _s(1300.0, math.pi),
        _s(last_time, THREE_QUARTER),
    ]


def test_timer_recovers_period_from_dense_trace(dense_trace):
    fit = fit_circle(dense_trace)
    estimate = RevolutionTimer().estimate_period(fit.annotated, fit.circle)

    assert estimate.period == pytest.approx(1000.0, abs=1.0)
    assert estimate.quarter_period == pytest.approx(1000.0, abs=1.0)
    assert estimate.three_quarter_period == pytest.approx(1000.0, abs=1.0)
    assert estimate.warning is None


def test_timer_recovers_period_for_clockwise_trace():
    samples = generate_circle_trace(0.0, 0.0, 80.0, 800.0, duration=2000.0, interval=9.0, clockwise=True)
    fit = fit_circle(samples)
    estimate = RevolutionTimer().estimate_period(fit.annotated, fit.circle)

    assert estimate.period == pytest.approx(800.0, abs=1.0)


def test_timer_annotates_plain_samples_from_circle(dense_trace):
    fit = fit_circle(dense_trace)
    from_plain = RevolutionTimer().estimate_period(dense_trace, fit.circle)
    from_annotated = RevolutionTimer().estimate_period(fit.annotated, fit.circle)

    assert from_plain.period == pytest.approx(from_annotated.period)


def test_timer_warns_when_reference_angles_disagree():
    estimate = RevolutionTimer().estimate_period(_irregular_revolutions(), None)

    assert estimate.quarter_period == pytest.approx(1000.0)
    assert estimate.three_quarter_period == pytest.approx(1100.0)
    assert estimate.period == pytest.approx(1050.0)
    assert estimate.warning is not None
    assert estimate.warning.delta == pytest.approx(100.0)
    assert "Inconsistent revolution times" in str(estimate.warning)


def test_timer_threshold_is_strict():
    estimate = RevolutionTimer().estimate_period(_irregular_revolutions(last_time=1530.0), None)

    assert estimate.three_quarter_period == pytest.approx(1030.0)
    assert estimate.warning is None


def test_timer_threshold_is_configurable():
    timer = RevolutionTimer(CalibrationConfig(consistency_threshold_ms=150.0))
    assert timer.estimate_period(_irregular_revolutions(), None).warning is None


def test_timer_falls_back_to_single_defined_estimate():
    estimate = RevolutionTimer().estimate_period(_irregular_revolutions()[:5], None)

    assert estimate.three_quarter_period is None
    assert estimate.period == pytest.approx(1000.0)
    assert estimate.warning is None


def test_timer_period_undefined_for_single_revolution(one_revolution_trace):
    fit = fit_circle(one_revolution_trace)
    estimate = RevolutionTimer().estimate_period(fit.annotated, fit.circle)

    assert estimate.period is None
    assert not estimate.is_defined
    assert estimate.apply(fit.circle).period is None


def test_timer_concrete_two_revolution_period(two_revolution_trace):
    fit = fit_circle(two_revolution_trace)
    estimate = RevolutionTimer().estimate_period(fit.annotated, fit.circle)

    assert estimate.period == pytest.approx(1200.0, abs=1e-6)
    assert estimate.apply(fit.circle).period == estimate.period
