"""High level tick orchestration for scoring and participant tracking."""
from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

import numpy as np

from .alerts import CognitiveAlertMonitor
from .config import NeuroLensConfiguration
from .domain.events import AlertEvent, Highlight
from .domain.features import FeatureVector
from .domain.participants import ParticipantState
from .domain.scores import ScoredPoint
from .history import ScoreHistory
from .motion.heatmap import MotionHeatmap
from .observers import EngineObserver
from .scoring.blink import BlinkRateTracker
from .scoring.cognitive import CognitiveScorer
from .tracking.audio import AudioSignal, is_audio_active
from .tracking.tracker import ParticipantTracker

logger = logging.getLogger(__name__)

DEFAULT_SUBJECT = "subject"


@dataclass
class ScoringResult:
    """Output of one feature tick for one subject."""

    subject: str
    point: ScoredPoint
    alerts: List[AlertEvent] = field(default_factory=list)


@dataclass
class FrameResult:
    """Output of one frame tick."""

    participants: List[ParticipantState]
    group_engagement: float
    highlight: Optional[Highlight] = None


@dataclass
class _SubjectPipeline:
    scorer: CognitiveScorer
    monitor: CognitiveAlertMonitor
    history: ScoreHistory
    blinks: BlinkRateTracker = field(default_factory=BlinkRateTracker)
    lock: threading.Lock = field(default_factory=threading.Lock)


class NeuroLensEngine:
    """
    Runs the two real-time flows of a session.

    - feature flow: FeatureVector -> CognitiveScorer -> alerts (per subject)
    - frame flow: frame + previous frame -> MotionHeatmap -> ParticipantTracker

    Ticks never overlap for the same entity: each subject has its own lock
    and the frame flow (heatmap plus all slots) has one. A tick that arrives
    while the previous one for that entity is still running is dropped: the
    call returns None and ``dropped_ticks`` is incremented. Different
    subjects may be scored from different threads at the same time.

    Usage:
        engine = NeuroLensEngine()
        engine.register_observer(LoggingObserver())

        result = engine.process_features(features, subject="alice")
        frame_result = engine.process_frame(frame, audio=spectrum)
    """

    def __init__(self, config: Optional[NeuroLensConfiguration] = None) -> None:
        self.config = config or NeuroLensConfiguration()
        self._subjects: Dict[str, _SubjectPipeline] = {}
        self._observers: List[EngineObserver] = []

        self.heatmap = MotionHeatmap(self.config.heatmap)
        self.tracker = ParticipantTracker(self.config.heatmap, self.config.tracker)
        self._previous_frame: Optional[np.ndarray] = None

        self._registry_lock = threading.Lock()
        self._frame_lock = threading.Lock()
        self._stats_lock = threading.Lock()
        self._dropped: Dict[str, int] = {"feature": 0, "frame": 0}

    # Observers

    def register_observer(self, observer: EngineObserver) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def unregister_observer(self, observer: EngineObserver) -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def _notify(self, hook: str, *args) -> None:
        for observer in self._observers:
            try:
                getattr(observer, hook)(*args)
            except Exception as e:
                logger.warning("Observer %s failed on %s: %s", type(observer).__name__, hook, e)

    # Subjects

    @property
    def subjects(self) -> List[str]:
        return list(self._subjects)

    def _pipeline(self, subject: str) -> _SubjectPipeline:
        with self._registry_lock:
            pipeline = self._subjects.get(subject)
            if pipeline is None:
                cfg = self.config
                pipeline = _SubjectPipeline(
                    scorer=CognitiveScorer(cfg.scorer),
                    monitor=CognitiveAlertMonitor([cfg.stress_alert, cfg.attention_alert]),
                    history=ScoreHistory(cfg.max_history_points),
                )
                self._subjects[subject] = pipeline
                logger.debug("New subject pipeline: %s", subject)
            return pipeline

    def history(self, subject: str = DEFAULT_SUBJECT) -> ScoreHistory:
        return self._pipeline(subject).history

    def live_points(self, subject: str = DEFAULT_SUBJECT) -> List[ScoredPoint]:
        return self.history(subject).latest(self.config.max_live_points)

    def blink_rate(self, subject: str = DEFAULT_SUBJECT) -> int:
        """Blinks counted in the rolling window when the engine derives blink rates."""
        return self._pipeline(subject).blinks.blink_rate

    @property
    def dropped_ticks(self) -> int:
        with self._stats_lock:
            return sum(self._dropped.values())

    @property
    def dropped_by_flow(self) -> Dict[str, int]:
        with self._stats_lock:
            return dict(self._dropped)

    def _drop(self, flow: str) -> None:
        with self._stats_lock:
            self._dropped[flow] += 1
            count = self._dropped[flow]
        logger.debug("Dropped %s tick; previous tick still running (%d dropped)", flow, count)

    # Flows

    def process_features(
        self,
        features: Optional[FeatureVector],
        subject: str = DEFAULT_SUBJECT,
        timestamp: Optional[float] = None,
        derive_blink_rate: bool = False,
    ) -> Optional[ScoringResult]:
        """
        Score one feature vector; ``None`` features mean the face was lost.

        With ``derive_blink_rate`` the subject's blink rate is counted here
        from the EAR stream and replaces ``features.blink_rate``.
        """
        pipeline = self._pipeline(subject)
        if not pipeline.lock.acquire(blocking=False):
            self._drop("feature")
            return None
        try:
            if timestamp is None:
                timestamp = time.time()
            if features is None:
                features = FeatureVector.face_lost()
            elif derive_blink_rate:
                rate = pipeline.blinks.observe(features.ear, timestamp)
                features = replace(features, blink_rate=float(rate))
            point = pipeline.scorer.update(features, timestamp)
            pipeline.history.append(point)
            alerts = pipeline.monitor.observe(point)
        finally:
            pipeline.lock.release()

        self._notify("on_scored_point", subject, point)
        for event in alerts:
            self._notify("on_alert", subject, event)
        return ScoringResult(subject=subject, point=point, alerts=alerts)

    def process_frame(
        self,
        frame: np.ndarray,
        audio: AudioSignal = False,
        timestamp: Optional[float] = None,
    ) -> Optional[FrameResult]:
        """Accumulate motion against the previous frame and update every slot."""
        if not self._frame_lock.acquire(blocking=False):
            self._drop("frame")
            return None
        try:
            current = np.array(frame, copy=True)
            self.heatmap.ingest(current, self._previous_frame)
            self._previous_frame = current
            audio_active = is_audio_active(audio, self.config.audio_activity_threshold)
            states = self.tracker.tick(self.heatmap, audio_active, timestamp)
            result = FrameResult(
                participants=states,
                group_engagement=self.tracker.group_engagement,
                highlight=self.tracker.last_highlight,
            )
        finally:
            self._frame_lock.release()

        self._notify("on_participants", result.participants, result.highlight)
        return result

    def reset(self) -> None:
        with self._registry_lock, self._frame_lock:
            self._subjects.clear()
            self.heatmap.reset()
            self.tracker.reset()
            self._previous_frame = None
        with self._stats_lock:
            self._dropped = {"feature": 0, "frame": 0}
