# neurolens/scoring/cognitive.py
"""
Cognitive scoring from facial geometry and expression confidences.

Each tick a subject's :class:`FeatureVector` is turned into raw attention,
stress and curiosity values by fixed heuristic rules; each raw value is then
smoothed by its own Kalman filter.

Attention
    ``100 - (|yaw|^1.6 + |pitch - 5|^1.6)``, minus 50 when the eye aspect
    ratio is below 0.20 (eyes closing or looking down).
Stress
    Base 30 plus a blink-rate term (>30/min: +30, >20/min: +15, <5/min: +10)
    plus ``60*angry + 70*fearful - 10*neutral - 30*happy``.
Curiosity
    Base 50, +20 when the *previous* tick was in flow (attention > 80 and
    stress < 40), +15 when leaning forward (-25 < pitch < -5), plus
    ``50*surprised + 20*happy``.

Every raw value is clamped to [0, 100] before smoothing.
"""
from __future__ import annotations

import logging
import math
import time
from typing import Optional

import numpy as np

from ..config import CognitiveScorerConfig
from ..domain.features import FeatureVector
from ..domain.scores import ScoredPoint
from ..filters.kalman import ScalarKalmanFilter

logger = logging.getLogger(__name__)

SCORE_MIN = 0.0
SCORE_MAX = 100.0

# Flow state: previous tick attentive and relaxed
FLOW_ATTENTION = 80.0
FLOW_STRESS = 40.0
FLOW_BONUS = 20.0

# Forward lean window (pitch is negative when leaning in)
LEAN_PITCH_RANGE = (-25.0, -5.0)
LEAN_BONUS = 15.0


def clamp_score(value: float) -> float:
    """Clamp to [0, 100]. NaN passes through so filters can reject it."""
    return float(np.clip(value, SCORE_MIN, SCORE_MAX))


def _finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def raw_attention(features: FeatureVector, config: Optional[CognitiveScorerConfig] = None) -> float:
    cfg = config or CognitiveScorerConfig()
    if not _finite(features.yaw, features.pitch, features.ear):
        return math.nan
    exp = cfg.pose_penalty_exponent
    penalty = abs(features.yaw) ** exp + abs(features.pitch - cfg.neutral_pitch_deg) ** exp
    raw = SCORE_MAX - penalty
    if features.ear < cfg.ear_closed_threshold:
        raw -= cfg.ear_closed_penalty
    return clamp_score(raw)


def blink_stress_bonus(blink_rate: float) -> float:
    """Stress contribution of the blink rate (blinks per minute)."""
    if blink_rate > 30:
        return 30.0  # panic / high anxiety
    if blink_rate > 20:
        return 15.0
    if blink_rate < 5:
        return 10.0  # staring: high load or stress
    return 0.0


def raw_stress(features: FeatureVector) -> float:
    expr = features.expressions
    if not _finite(features.blink_rate, expr.angry, expr.fearful, expr.neutral, expr.happy):
        return math.nan
    stress = 30.0 + blink_stress_bonus(features.blink_rate)
    stress += expr.angry * 60.0
    stress += expr.fearful * 70.0
    stress -= expr.neutral * 10.0
    stress -= expr.happy * 30.0
    return clamp_score(stress)


def raw_curiosity(features: FeatureVector, prior_attention: float, prior_stress: float) -> float:
    expr = features.expressions
    if not _finite(features.pitch, expr.surprised, expr.happy):
        return math.nan
    curiosity = 50.0
    if prior_attention > FLOW_ATTENTION and prior_stress < FLOW_STRESS:
        curiosity += FLOW_BONUS
    low, high = LEAN_PITCH_RANGE
    if low < features.pitch < high:
        curiosity += LEAN_BONUS
    curiosity += expr.surprised * 50.0
    curiosity += expr.happy * 20.0
    return clamp_score(curiosity)


class CognitiveScorer:
    """
    Stateful scorer for a single subject.

    Owns three independent Kalman filters and the previous smoothed triple.
    ``update`` must be called sequentially; one instance per subject.

    Usage:
        scorer = CognitiveScorer()
        point = scorer.update(features)
        print(point.attention, point.stress, point.curiosity)
    """

    def __init__(self, config: Optional[CognitiveScorerConfig] = None) -> None:
        self.config = config or CognitiveScorerConfig()
        self._attention_filter = self._make_filter(self.config.attention_noise)
        self._stress_filter = self._make_filter(self.config.stress_noise)
        self._curiosity_filter = self._make_filter(self.config.curiosity_noise)
        self._attention = self.config.initial_attention
        self._stress = self.config.initial_stress
        self._curiosity = self.config.initial_curiosity
        self._last_point: Optional[ScoredPoint] = None

    @staticmethod
    def _make_filter(noise) -> ScalarKalmanFilter:
        return ScalarKalmanFilter(noise.process_noise, noise.measurement_noise)

    @property
    def last_point(self) -> Optional[ScoredPoint]:
        return self._last_point

    @property
    def prior(self) -> tuple:
        """Unrounded smoothed (attention, stress, curiosity) of the last tick."""
        return self._attention, self._stress, self._curiosity

    def update(self, features: FeatureVector, timestamp: Optional[float] = None) -> ScoredPoint:
        # Curiosity reads last tick's smoothed values, so all raw values
        # are computed before any filter moves.
        attention_raw = raw_attention(features, self.config)
        stress_raw = raw_stress(features)
        curiosity_raw = raw_curiosity(features, self._attention, self._stress)

        self._attention = self._smooth(self._attention_filter, attention_raw, self._attention, "attention")
        self._stress = self._smooth(self._stress_filter, stress_raw, self._stress, "stress")
        self._curiosity = self._smooth(self._curiosity_filter, curiosity_raw, self._curiosity, "curiosity")

        point = ScoredPoint(
            timestamp=time.time() if timestamp is None else float(timestamp),
            attention=round(clamp_score(self._attention), 2),
            stress=round(clamp_score(self._stress), 2),
            curiosity=round(clamp_score(self._curiosity), 2),
        )
        self._last_point = point
        return point

    @staticmethod
    def _smooth(flt: ScalarKalmanFilter, raw: float, prior: float, name: str) -> float:
        if not math.isfinite(raw):
            logger.debug("Rejected non-finite %s sample; holding %.2f", name, prior)
        value = flt.filter(raw)
        return value if math.isfinite(value) else prior

    def reset(self) -> None:
        for flt in (self._attention_filter, self._stress_filter, self._curiosity_filter):
            flt.reset()
        self._attention = self.config.initial_attention
        self._stress = self.config.initial_stress
        self._curiosity = self.config.initial_curiosity
        self._last_point = None
