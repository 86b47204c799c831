"""Constant-model scalar Kalman filter."""
from __future__ import annotations

import math
from typing import Optional

from .base import IScalarFilter


class ScalarKalmanFilter(IScalarFilter):
    """
    One-dimensional Kalman filter with identity transition and observation.

    The tracked value is assumed constant between ticks apart from process
    noise ``Q``; each measurement carries noise ``R``. The first valid
    measurement seeds the estimate directly with covariance ``R``.

    Non-finite measurements are rejected: the state is left untouched and
    the prior estimate is returned (NaN while the filter is still unseeded).

    Example:
        >>> kf = ScalarKalmanFilter(process_noise=0.1, measurement_noise=5.0)
        >>> kf.filter(42.0)
        42.0
    """

    def __init__(self, process_noise: float, measurement_noise: float) -> None:
        if not math.isfinite(process_noise) or process_noise < 0:
            raise ValueError("process_noise must be a finite value >= 0.")
        if not math.isfinite(measurement_noise) or measurement_noise <= 0:
            raise ValueError("measurement_noise must be a finite value > 0.")
        self.process_noise = float(process_noise)
        self.measurement_noise = float(measurement_noise)
        self._estimate: Optional[float] = None
        self._covariance: Optional[float] = None
        self._gain: Optional[float] = None

    @property
    def estimate(self) -> Optional[float]:
        return self._estimate

    @property
    def covariance(self) -> Optional[float]:
        return self._covariance

    @property
    def gain(self) -> Optional[float]:
        """Kalman gain of the last update (None until the second measurement)."""
        return self._gain

    def filter(self, measurement: float) -> float:
        if not math.isfinite(measurement):
            return self._estimate if self._estimate is not None else math.nan

        if self._estimate is None:
            self._estimate = float(measurement)
            self._covariance = self.measurement_noise
            return self._estimate

        # Predict: x stays, P grows by Q
        pred_x = self._estimate
        pred_cov = self._covariance + self.process_noise

        # Update
        gain = pred_cov / (pred_cov + self.measurement_noise)
        self._estimate = pred_x + gain * (measurement - pred_x)
        self._covariance = (1.0 - gain) * pred_cov
        self._gain = gain
        return self._estimate

    def reset(self) -> None:
        self._estimate = None
        self._covariance = None
        self._gain = None
