"""Scalar smoothing filter implementations."""

from .base import IScalarFilter
from .kalman import ScalarKalmanFilter
from .ema import ExponentialMovingAverage

__all__ = [
    "IScalarFilter",
    "ScalarKalmanFilter",
    "ExponentialMovingAverage",
]
