"""Stress and attention alerts of a single subject."""
from __future__ import annotations

from typing import Iterable, List, Optional

from ..config import AlertConfig, default_attention_alert, default_stress_alert
from ..domain.events import AlertEvent
from ..domain.scores import SCORE_FIELDS, ScoredPoint
from .hysteresis import AlertHysteresis


class CognitiveAlertMonitor:
    """Runs one :class:`AlertHysteresis` per configured alert over scored points.

    Defaults to the dashboard pair: high stress (85, 4 ticks, recover at 70)
    and low attention (35, 4 ticks, recover at 40).
    """

    def __init__(self, alerts: Optional[Iterable[AlertConfig]] = None) -> None:
        configs = list(alerts) if alerts is not None else [default_stress_alert(), default_attention_alert()]
        for cfg in configs:
            if cfg.signal not in SCORE_FIELDS:
                raise ValueError(f"Unknown alert signal: {cfg.signal}")
        self.configs = configs
        self._alerts = [AlertHysteresis(cfg.signal, cfg.direction) for cfg in configs]

    @property
    def active_signals(self) -> List[str]:
        return [alert.signal for alert in self._alerts if alert.active]

    def observe(self, point: ScoredPoint) -> List[AlertEvent]:
        events = []
        for cfg, alert in zip(self.configs, self._alerts):
            event = alert.observe(
                getattr(point, cfg.signal),
                cfg.threshold,
                cfg.duration_ticks,
                cfg.recovery_threshold,
                point.timestamp,
            )
            if event is not None:
                events.append(event)
        return events

    def reset(self) -> None:
        for alert in self._alerts:
            alert.reset()
