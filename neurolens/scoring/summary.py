"""Human-readable summary of a scored point."""
from __future__ import annotations

from enum import Enum
from typing import Callable, List, Tuple

from ..domain.scores import ScoredPoint


class CognitiveSummary(Enum):
    DEEP_FLOW = "Deep Flow State"
    OVERLOAD = "Cognitive Overload"
    ACTIVE_LEARNING = "Active Learning"
    HIGH_STRESS = "High Stress"
    DISTRACTED = "Distracted"
    NOMINAL = "Nominal State"


SUGGESTIONS = {
    CognitiveSummary.DEEP_FLOW: "Optimal performance detected. Maintain current focus.",
    CognitiveSummary.OVERLOAD: "Cognitive load peaking. Take a 2-minute eye-rest break.",
    CognitiveSummary.ACTIVE_LEARNING: "Engagement is high. Great time for complex tasks.",
    CognitiveSummary.HIGH_STRESS: "Blink volatility high. Try box breathing (4-4-4-4).",
    CognitiveSummary.DISTRACTED: "Head pose indicates distraction. Re-align with the screen.",
    CognitiveSummary.NOMINAL: "Biometrics nominal. Continuing analysis.",
}

# Evaluated top to bottom, first match wins.
SUMMARY_RULES: List[Tuple[CognitiveSummary, Callable[[ScoredPoint], bool]]] = [
    (CognitiveSummary.DEEP_FLOW, lambda p: p.attention > 85 and p.stress < 35),
    (CognitiveSummary.OVERLOAD, lambda p: p.attention > 75 and p.stress > 65),
    (CognitiveSummary.ACTIVE_LEARNING, lambda p: p.curiosity > 75),
    (CognitiveSummary.HIGH_STRESS, lambda p: p.stress > 75),
    (CognitiveSummary.DISTRACTED, lambda p: p.attention < 30),
]


def summarize(point: ScoredPoint) -> CognitiveSummary:
    for summary, matches in SUMMARY_RULES:
        if matches(point):
            return summary
    return CognitiveSummary.NOMINAL


def suggestion_for(summary: CognitiveSummary) -> str:
    return SUGGESTIONS[summary]


def is_bad_sign(point: ScoredPoint) -> bool:
    """Stressed and disengaged at the same time."""
    return point.stress > 75 and point.attention < 35
