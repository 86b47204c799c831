"""Domain models for measurements, scores, participants and events."""

from .features import ExpressionConfidence, FeatureVector
from .scores import SCORE_FIELDS, ScoredPoint
from .participants import BodyLanguage, ParticipantState, TrackingBox
from .events import AlertEvent, AlertKind, Highlight

__all__ = [
    "ExpressionConfidence",
    "FeatureVector",
    "SCORE_FIELDS",
    "ScoredPoint",
    "BodyLanguage",
    "ParticipantState",
    "TrackingBox",
    "AlertEvent",
    "AlertKind",
    "Highlight",
]
