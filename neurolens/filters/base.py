"""Smoothing filters for scalar score streams."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class IScalarFilter(ABC):
    """Strategy interface for recursive one-value-at-a-time smoothing."""

    @abstractmethod
    def filter(self, measurement: float) -> float:
        """Feed one measurement and return the new smoothed value."""
        raise NotImplementedError

    @property
    @abstractmethod
    def estimate(self) -> Optional[float]:
        """Current smoothed value, or None before the first valid measurement."""
        raise NotImplementedError

    @abstractmethod
    def reset(self) -> None:
        raise NotImplementedError

    @property
    def is_seeded(self) -> bool:
        return self.estimate is not None
