"""Per-subject cognitive scoring."""

from .cognitive import (
    CognitiveScorer,
    blink_stress_bonus,
    clamp_score,
    raw_attention,
    raw_curiosity,
    raw_stress,
)
from .blink import BlinkRateTracker
from .summary import CognitiveSummary, is_bad_sign, suggestion_for, summarize

__all__ = [
    "CognitiveScorer",
    "blink_stress_bonus",
    "clamp_score",
    "raw_attention",
    "raw_curiosity",
    "raw_stress",
    "BlinkRateTracker",
    "CognitiveSummary",
    "is_bad_sign",
    "suggestion_for",
    "summarize",
]
