"""Hysteresis alerting on scored signals."""

from .hysteresis import AlertHysteresis
from .monitor import CognitiveAlertMonitor

__all__ = ["AlertHysteresis", "CognitiveAlertMonitor"]
