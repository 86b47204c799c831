"""Real-time cognitive-signal estimation and participant tracking."""

from .config import NeuroLensConfiguration
from .domain import (
    AlertEvent,
    AlertKind,
    BodyLanguage,
    ExpressionConfidence,
    FeatureVector,
    Highlight,
    ParticipantState,
    ScoredPoint,
    TrackingBox,
)
from .filters import ExponentialMovingAverage, ScalarKalmanFilter
from .scoring import CognitiveScorer
from .motion import MotionHeatmap
from .tracking import ParticipantTracker, classify_body_language, is_audio_active
from .alerts import AlertHysteresis, CognitiveAlertMonitor
from .history import ScoreHistory
from .engine import FrameResult, NeuroLensEngine, ScoringResult

__all__ = [
    "NeuroLensConfiguration",
    "AlertEvent",
    "AlertKind",
    "BodyLanguage",
    "ExpressionConfidence",
    "FeatureVector",
    "Highlight",
    "ParticipantState",
    "ScoredPoint",
    "TrackingBox",
    "ExponentialMovingAverage",
    "ScalarKalmanFilter",
    "CognitiveScorer",
    "MotionHeatmap",
    "ParticipantTracker",
    "classify_body_language",
    "is_audio_active",
    "AlertHysteresis",
    "CognitiveAlertMonitor",
    "ScoreHistory",
    "FrameResult",
    "NeuroLensEngine",
    "ScoringResult",
]
