"""Body-language decision table for a participant slot."""
from __future__ import annotations

from typing import Callable, List, NamedTuple, Tuple

from ..domain.participants import BodyLanguage


class BodySignals(NamedTuple):
    activity: float
    attention: float
    stress: float
    curiosity: float
    speaking: bool


Rule = Tuple[BodyLanguage, Callable[[BodySignals], bool]]

# Evaluated top to bottom, first match wins; LISTENING is the fallback.
BODY_LANGUAGE_RULES: List[Rule] = [
    (BodyLanguage.GESTURING, lambda s: s.speaking),
    (BodyLanguage.FIDGETING, lambda s: s.stress > 75 and s.activity > 30),
    (BodyLanguage.ARMS_CROSSED, lambda s: s.stress > 75 and s.activity < 10),
    (BodyLanguage.LEANING_IN, lambda s: s.attention > 80 and s.curiosity > 70),
    (BodyLanguage.NODDING, lambda s: 15 < s.activity < 40 and s.attention > 60),
    (BodyLanguage.SLOUCHING, lambda s: s.attention < 40 and s.stress < 50 and s.activity < 10),
]


def classify_body_language(
    activity: float,
    attention: float,
    stress: float,
    curiosity: float,
    speaking: bool,
) -> BodyLanguage:
    signals = BodySignals(activity, attention, stress, curiosity, speaking)
    for tag, matches in BODY_LANGUAGE_RULES:
        if matches(signals):
            return tag
    return BodyLanguage.LISTENING
