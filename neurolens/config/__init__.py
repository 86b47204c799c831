"""Configuration and constants for the cognitive-signal pipeline."""

from .config import (
    AlertConfig,
    CognitiveScorerConfig,
    HeatmapConfig,
    KalmanNoiseConfig,
    NeuroLensConfiguration,
    TrackerConfig,
    check_hysteresis_band,
    default_attention_alert,
    default_stress_alert,
)
from .constants import (
    AlertConstants,
    HistoryConstants,
    MotionConstants,
    ScoringConstants,
    TrackingConstants,
)

__all__ = [
    "AlertConfig",
    "CognitiveScorerConfig",
    "HeatmapConfig",
    "KalmanNoiseConfig",
    "NeuroLensConfiguration",
    "TrackerConfig",
    "check_hysteresis_band",
    "default_attention_alert",
    "default_stress_alert",
    "AlertConstants",
    "HistoryConstants",
    "MotionConstants",
    "ScoringConstants",
    "TrackingConstants",
]
