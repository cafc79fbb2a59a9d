"""Calibration session: the state machine composing fit, timing and projection.

States::

    UNCALIBRATED --begin_collecting--> COLLECTING --finish_collecting--> CALIBRATED
                                           ^                              |  ^   |
                                           +-------begin_collecting-------+  +---+
                                                                      finish_collecting

While collecting, every live sample is appended to the calibration set.
Once calibrated, every live sample is projected with the current nudge.
Output is returned to the caller and also handed to registered observers.
"""
from __future__ import annotations

import logging
import threading
from typing import Iterable, Iterator, List, Optional

from .config import CalibrationConfig, NudgeConfig
from .domain import (
    CalibrationResult,
    Circle,
    NudgeChanged,
    ProjectedPoint,
    Sample,
    SessionState,
)
from .errors import DegenerateSample, InsufficientData, InvalidTransition, PeriodUndefined
from .fitting import CircleFitter
from .nudge import NudgeController
from .observers import SessionObserver
from .projection import Projector
from .revolution import RevolutionTimer

logger = logging.getLogger(__name__)


class CalibrationSet:
    """Ordered, append-only buffer of samples for one collection phase."""

    def __init__(self) -> None:
        self._samples: List[Sample] = []

    def append(self, sample: Sample) -> None:
        self._samples.append(sample)

    def clear(self) -> None:
        self._samples = []

    def snapshot(self) -> List[Sample]:
        return list(self._samples)

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self._samples)


class LatencySession:
    """Owns all mutable state of one latency measurement session."""

    def __init__(
        self,
        config: Optional[CalibrationConfig] = None,
        nudge_config: Optional[NudgeConfig] = None,
    ) -> None:
        self.config = config or CalibrationConfig()
        self.fitter = CircleFitter(self.config)
        self.timer = RevolutionTimer(self.config)
        self.projector = Projector()
        self.nudge = NudgeController(nudge_config)
        self.calibration_set = CalibrationSet()

        self._state = SessionState.UNCALIBRATED
        self._circle: Optional[Circle] = None
        self._lock = threading.Lock()
        self._observers: List[SessionObserver] = []

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------
    def register_observer(self, observer: SessionObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def unregister_observer(self, observer: SessionObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def circle(self) -> Optional[Circle]:
        """Last good circle; survives failed calibrations and new collection phases."""
        return self._circle

    @property
    def latency_ms(self) -> Optional[float]:
        """The nudge currently under test, once there is a circle to apply it to."""
        if self._state is not SessionState.CALIBRATED:
            return None
        return self.nudge.current()

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    def begin_collecting(self) -> None:
        with self._lock:
            self.calibration_set.clear()
        self._set_state(SessionState.COLLECTING)

    def finish_collecting(self) -> CalibrationResult:
        """Fit the circle and time the revolution over the collected samples.

        Valid while collecting, and again once calibrated, where it re-runs
        over the same (unchanged) set. Raises :class:`InvalidTransition` when
        no collection phase was ever started and :class:`InsufficientData`
        when the set is too small or the period cannot be resolved; in both
        cases the state and the previous circle are left as they were.
        """
        if self._state is SessionState.UNCALIBRATED:
            raise InvalidTransition("finish_collecting() called before begin_collecting()")

        with self._lock:
            samples = self.calibration_set.snapshot()

        fit = self.fitter.fit(samples)
        estimate = self.timer.estimate_period(fit.annotated, fit.circle)
        if not estimate.is_defined and self.config.require_period:
            raise InsufficientData(
                "Not enough rotations to calibrate the revolution period", count=len(samples)
            )

        circle = estimate.apply(fit.circle)
        result = CalibrationResult(circle=circle, sample_count=len(samples), warning=estimate.warning)
        self._circle = circle
        logger.info(
            "Calibrated: center=(%.2f, %.2f) r=%.2f period=%s",
            circle.cx,
            circle.cy,
            circle.r,
            circle.period,
        )
        self._set_state(SessionState.CALIBRATED)
        for observer in self._observers:
            observer.on_calibrated(result)
        return result

    def adjust_nudge(self, delta_ms: float) -> NudgeChanged:
        event = self.nudge.adjust(delta_ms)
        self._notify_nudge(event)
        return event

    def increment_nudge(self) -> NudgeChanged:
        event = self.nudge.increment()
        self._notify_nudge(event)
        return event

    def decrement_nudge(self) -> NudgeChanged:
        event = self.nudge.decrement()
        self._notify_nudge(event)
        return event

    # ------------------------------------------------------------------
    # Sample input
    # ------------------------------------------------------------------
    def on_sample(self, sample: Sample) -> Optional[ProjectedPoint]:
        """Route one live sample according to the current state."""

        if self._state is SessionState.COLLECTING:
            with self._lock:
                self.calibration_set.append(sample)
            return None

        if self._state is SessionState.UNCALIBRATED or self._circle is None:
            return None

        try:
            point = self.projector.project(self._circle, self.nudge.current(), sample)
        except (DegenerateSample, PeriodUndefined) as exc:
            logger.debug("%s", exc)
            for observer in self._observers:
                observer.on_sample_rejected(sample, exc)
            return None

        for observer in self._observers:
            observer.on_projected(sample, point)
        return point

    def replay(self, samples: Iterable[Sample]) -> List[ProjectedPoint]:
        """Feed a recorded stream through :meth:`on_sample`; keep the projections."""
        points = []
        for sample in samples:
            point = self.on_sample(sample)
            if point is not None:
                points.append(point)
        return points

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _set_state(self, new: SessionState) -> None:
        old = self._state
        self._state = new
        if old is new:
            return
        logger.debug("State %s -> %s", old.value, new.value)
        for observer in self._observers:
            observer.on_state_changed(old, new)

    def _notify_nudge(self, event: NudgeChanged) -> None:
        for observer in self._observers:
            observer.on_nudge_changed(event)
