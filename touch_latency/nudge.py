"""User-adjustable latency hypothesis."""
from __future__ import annotations

import logging
from typing import Optional

from .config import NudgeConfig
from .domain import NudgeChanged

logger = logging.getLogger(__name__)


class NudgeController:
    """Signed time offset (ms), changed only by discrete additions."""

    def __init__(self, config: Optional[NudgeConfig] = None) -> None:
        self.config = config or NudgeConfig()
        self._value_ms = float(self.config.initial_ms)

    def current(self) -> float:
        return self._value_ms

    def adjust(self, delta_ms: float) -> NudgeChanged:
        self._value_ms += delta_ms
        logger.debug("NUDGE %sms", self._value_ms)
        return NudgeChanged(value_ms=self._value_ms)

    def increment(self) -> NudgeChanged:
        return self.adjust(self.config.step_ms)

    def decrement(self) -> NudgeChanged:
        return self.adjust(-self.config.step_ms)

    def reset(self) -> NudgeChanged:
        return self.adjust(-self._value_ms)
