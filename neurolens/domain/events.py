"""Events emitted by the alerting and tracking layers."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AlertKind(Enum):
    """Transition of a hysteresis alert."""

    RAISED = "raised"
    RECOVERED = "recovered"


@dataclass(frozen=True)
class AlertEvent:
    """A monitored signal entered or left its alerting state."""

    kind: AlertKind
    signal: str
    timestamp: float
    value: float


@dataclass(frozen=True)
class Highlight:
    """Meeting-level moment worth surfacing, e.g. a spike in group engagement."""

    timestamp: float
    text: str
    value: float
