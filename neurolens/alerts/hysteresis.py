# neurolens/alerts/hysteresis.py
"""
Debounced threshold alerts.

A raw threshold test on a noisy score flickers on and off. The hysteresis
alert only raises after the breach has held for more than ``duration_ticks``
consecutive observations, and only recovers once the value has crossed a
second, less extreme threshold. Between the two thresholds (the dead band)
an active alert stays active and an inactive one stays inactive.
"""
from __future__ import annotations

import logging
import math
import time
from typing import Optional

from ..config.config import AlertDirection, check_hysteresis_band
from ..domain.events import AlertEvent, AlertKind

logger = logging.getLogger(__name__)


class AlertHysteresis:
    """
    Consecutive-breach counter plus active flag for one signal.

    ``direction="high"`` breaches above the alert threshold and recovers
    below the recovery threshold; ``direction="low"`` mirrors both tests.

    Usage:
        stress_alert = AlertHysteresis("stress", direction="high")
        event = stress_alert.observe(point.stress, 85, 4, 70, point.timestamp)
    """

    def __init__(self, signal: str, direction: AlertDirection = "high") -> None:
        if direction not in ("high", "low"):
            raise ValueError(f"Unknown alert direction: {direction}")
        self.signal = signal
        self.direction = direction
        self._counter = 0
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    @property
    def counter(self) -> int:
        return self._counter

    def _breaches(self, value: float, threshold: float) -> bool:
        return value > threshold if self.direction == "high" else value < threshold

    def _recovers(self, value: float, recovery_threshold: float) -> bool:
        return value < recovery_threshold if self.direction == "high" else value > recovery_threshold

    def observe(
        self,
        value: float,
        high_threshold: float,
        duration_ticks: int,
        recovery_threshold: float,
        timestamp: Optional[float] = None,
    ) -> Optional[AlertEvent]:
        """
        Feed one value; return an event on a state transition, else None.

        ``high_threshold`` is the alert threshold for either direction.
        Non-finite values leave the state untouched.
        """
        check_hysteresis_band(self.direction, high_threshold, recovery_threshold)
        if value is None or not math.isfinite(value):
            return None

        if self._breaches(value, high_threshold):
            self._counter += 1
        else:
            self._counter = 0

        kind: Optional[AlertKind] = None
        if self._counter > duration_ticks and not self._active:
            self._active = True
            kind = AlertKind.RAISED
        elif self._active and self._recovers(value, recovery_threshold):
            self._active = False
            kind = AlertKind.RECOVERED

        if kind is None:
            return None
        event = AlertEvent(
            kind=kind,
            signal=self.signal,
            timestamp=time.time() if timestamp is None else float(timestamp),
            value=float(value),
        )
        logger.info("Alert %s %s at %.2f", self.signal, kind.value, value)
        return event

    def reset(self) -> None:
        self._counter = 0
        self._active = False
