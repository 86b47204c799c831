# neurolens/observers.py
"""
Observer Pattern hooks for the tick engine.

Observers decouple the real-time core from whatever consumes its output
(logging, history buffers, a UI bridge).

Example:
    >>> from neurolens.engine import NeuroLensEngine
    >>> from neurolens.observers import HistoryRecorder, LoggingObserver
    >>>
    >>> engine = NeuroLensEngine()
    >>> recorder = HistoryRecorder()
    >>> engine.register_observer(LoggingObserver())
    >>> engine.register_observer(recorder)
    >>>
    >>> engine.process_features(features, subject="alice")
    >>> recorder.history("alice").to_dataframe()
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from .config.constants import HistoryConstants
from .domain.events import AlertEvent, AlertKind, Highlight
from .domain.participants import ParticipantState
from .domain.scores import ScoredPoint
from .history import ScoreHistory

logger = logging.getLogger(__name__)


class EngineObserver(ABC):
    """
    Abstract base class for engine observers.

    Every hook is called synchronously from the tick that produced the data,
    so implementations must return quickly.
    """

    @abstractmethod
    def on_scored_point(self, subject: str, point: ScoredPoint) -> None:
        """
        Called after a subject's features have been scored.

        Args:
            subject: Subject identifier
            point: Smoothed scores of this tick
        """

    @abstractmethod
    def on_alert(self, subject: str, event: AlertEvent) -> None:
        """
        Called when an alert is raised or recovers.

        Args:
            subject: Subject identifier
            event: The alert transition
        """

    @abstractmethod
    def on_participants(
        self,
        states: List[ParticipantState],
        highlight: Optional[Highlight] = None,
    ) -> None:
        """
        Called after each frame tick of the participant tracker.

        Args:
            states: One snapshot per slot
            highlight: Group highlight produced by this tick, if any
        """


class LoggingObserver(EngineObserver):
    """Writes engine output to the module logger."""

    def __init__(self, log_points: bool = False) -> None:
        self.log_points = log_points

    def on_scored_point(self, subject: str, point: ScoredPoint) -> None:
        if self.log_points:
            logger.info(
                "%s @%.2f attention=%.2f stress=%.2f curiosity=%.2f",
                subject,
                point.timestamp,
                point.attention,
                point.stress,
                point.curiosity,
            )

    def on_alert(self, subject: str, event: AlertEvent) -> None:
        if event.kind is AlertKind.RAISED:
            logger.warning("%s: %s alert raised (%.2f)", subject, event.signal, event.value)
        else:
            logger.info("%s: %s alert recovered (%.2f)", subject, event.signal, event.value)

    def on_participants(
        self,
        states: List[ParticipantState],
        highlight: Optional[Highlight] = None,
    ) -> None:
        for state in states:
            logger.debug(
                "%s activity=%.1f engagement=%.1f speaking=%s %s",
                state.label,
                state.activity,
                state.engagement,
                state.speaking,
                state.body_language.value,
            )
        if highlight is not None:
            logger.info("Highlight: %s (%.1f)", highlight.text, highlight.value)


class HistoryRecorder(EngineObserver):
    """Collects scored points and alerts per subject."""

    def __init__(self, max_points: int = HistoryConstants.MAX_HISTORY_POINTS) -> None:
        self.max_points = max_points
        self._histories: Dict[str, ScoreHistory] = {}
        self.alerts: List[AlertEvent] = []
        self.highlights: List[Highlight] = []

    @property
    def subjects(self) -> List[str]:
        return list(self._histories)

    def history(self, subject: str) -> ScoreHistory:
        if subject not in self._histories:
            self._histories[subject] = ScoreHistory(self.max_points)
        return self._histories[subject]

    def on_scored_point(self, subject: str, point: ScoredPoint) -> None:
        self.history(subject).append(point)

    def on_alert(self, subject: str, event: AlertEvent) -> None:
        self.alerts.append(event)

    def on_participants(
        self,
        states: List[ParticipantState],
        highlight: Optional[Highlight] = None,
    ) -> None:
        if highlight is not None:
            self.highlights.append(highlight)
