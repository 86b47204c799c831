"""Exponential moving average."""
from __future__ import annotations

import math
from typing import Optional

from .base import IScalarFilter


class ExponentialMovingAverage(IScalarFilter):
    """Blend each new value into the previous one with weight ``alpha``.

    Cheaper than a Kalman update and adequate for inputs that are already
    smoothed upstream (the decaying motion heatmap).
    """

    def __init__(self, alpha: float, initial: Optional[float] = None) -> None:
        if not (0.0 < alpha <= 1.0):
            raise ValueError(f"alpha must be in (0, 1], got {alpha}.")
        self.alpha = float(alpha)
        self._initial = initial
        self._value: Optional[float] = initial

    @property
    def estimate(self) -> Optional[float]:
        return self._value

    def filter(self, measurement: float) -> float:
        if not math.isfinite(measurement):
            return self._value if self._value is not None else math.nan
        if self._value is None:
            self._value = float(measurement)
        else:
            self._value = self._value * (1.0 - self.alpha) + measurement * self.alpha
        return self._value

    def reset(self) -> None:
        self._value = self._initial
