"""Observers receiving session output (renderers, diagnostics sinks).

The session never draws anything itself. Everything it produces is handed to
registered observers synchronously, in the order it happens.

Example:
    >>> from touch_latency import LatencySession
    >>> from touch_latency.observers import ConsoleReporter
    >>>
    >>> session = LatencySession()
    >>> session.register_observer(ConsoleReporter())
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Tuple

from .domain import CalibrationResult, NudgeChanged, ProjectedPoint, Sample, SessionState


class SessionObserver(ABC):
    """Abstract base class for session observers."""

    @abstractmethod
    def on_state_changed(self, old: SessionState, new: SessionState):
        pass

    @abstractmethod
    def on_calibrated(self, result: CalibrationResult):
        pass

    @abstractmethod
    def on_projected(self, sample: Sample, point: ProjectedPoint):
        pass

    @abstractmethod
    def on_nudge_changed(self, event: NudgeChanged):
        pass

    @abstractmethod
    def on_sample_rejected(self, sample: Sample, error: Exception):
        """Called when a calibrated sample cannot be projected."""
        pass


class ConsoleReporter(SessionObserver):
    """
    Prints state changes, calibration results and nudge changes.

    Projections are only printed when ``verbose`` is set, since one arrives
    per touch move.
    """

    def __init__(self, verbose: bool = False):
        self.verbose = verbose

    def on_state_changed(self, old: SessionState, new: SessionState):
        print(f"state: {new.value}")

    def on_calibrated(self, result: CalibrationResult):
        period = f"{result.period:.2f}" if result.period is not None else "undefined"
        print(f"\n{'=' * 50}")
        print(f"Calibrated from {result.sample_count} samples")
        print(f"   center: ({result.cx:.2f}, {result.cy:.2f})")
        print(f"   radius: {result.r:.2f}")
        print(f"   period: {period}")
        if result.warning is not None:
            print(f"   {result.warning}")
        print(f"{'=' * 50}\n")

    def on_projected(self, sample: Sample, point: ProjectedPoint):
        if self.verbose:
            print(f"{sample.t:.1f}\t{point.x:.2f}\t{point.y:.2f}")

    def on_nudge_changed(self, event: NudgeChanged):
        print(f"NUDGE {event.value_ms:g}ms")

    def on_sample_rejected(self, sample: Sample, error: Exception):
        if self.verbose:
            print(f"skipped sample at t={sample.t}: {error}")


class EventRecorder(SessionObserver):
    """Keeps every notification in memory for later inspection."""

    def __init__(self):
        self.transitions: List[Tuple[SessionState, SessionState]] = []
        self.calibrations: List[CalibrationResult] = []
        self.projections: List[Tuple[Sample, ProjectedPoint]] = []
        self.nudges: List[NudgeChanged] = []
        self.rejected: List[Tuple[Sample, Exception]] = []

    def on_state_changed(self, old: SessionState, new: SessionState):
        self.transitions.append((old, new))

    def on_calibrated(self, result: CalibrationResult):
        self.calibrations.append(result)

    def on_projected(self, sample: Sample, point: ProjectedPoint):
        self.projections.append((sample, point))

    def on_nudge_changed(self, event: NudgeChanged):
        self.nudges.append(event)

    def on_sample_rejected(self, sample: Sample, error: Exception):
        self.rejected.append((sample, error))
