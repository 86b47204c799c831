"""Fixed-slot participant tracking."""

from .audio import is_audio_active
from .body_language import BODY_LANGUAGE_RULES, BodySignals, classify_body_language
from .tracker import ParticipantTracker, activity_targets, clamp_box_position

__all__ = [
    "is_audio_active",
    "BODY_LANGUAGE_RULES",
    "BodySignals",
    "classify_body_language",
    "ParticipantTracker",
    "activity_targets",
    "clamp_box_position",
]
