# neurolens/config/config.py
"""
Configuration classes for the cognitive-signal pipeline.

This module defines the tunable parameters for:
  - Kalman smoothing of the attention / stress / curiosity scores
  - the decaying motion heatmap
  - the fixed-slot participant tracker
  - hysteresis alerting

Example:
    >>> from neurolens.config import HeatmapConfig, TrackerConfig
    >>>
    >>> # 640x480 capture with a finer grid
    >>> heat_cfg = HeatmapConfig(frame_width=640, frame_height=480,
    ...                          grid_width=64, grid_height=48)
    >>>
    >>> # Three participants side by side
    >>> trk_cfg = TrackerConfig(grid_columns=3, grid_rows=1)
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Literal, Optional, Tuple

from .constants import (
    AlertConstants,
    HistoryConstants,
    MotionConstants,
    ScoringConstants,
    TrackingConstants,
)

AlertDirection = Literal["high", "low"]


def check_hysteresis_band(
    direction: str,
    high_threshold: float,
    recovery_threshold: float,
) -> None:
    """Raise ValueError unless the recovery threshold is less extreme than the alert threshold."""
    if direction not in ("high", "low"):
        raise ValueError(f"Unknown alert direction: {direction}")
    if high_threshold == recovery_threshold:
        raise ValueError("Alert and recovery thresholds must differ.")
    if direction == "high" and recovery_threshold > high_threshold:
        raise ValueError("Recovery threshold must be below the alert threshold for 'high' alerts.")
    if direction == "low" and recovery_threshold < high_threshold:
        raise ValueError("Recovery threshold must be above the alert threshold for 'low' alerts.")


def _check_alpha(name: str, alpha: float) -> None:
    if not (0.0 < alpha <= 1.0):
        raise ValueError(f"{name} must be in (0, 1], got {alpha}.")


@dataclass
class KalmanNoiseConfig:
    """Noise constants of a scalar Kalman filter."""

    # Q: how much the true value is expected to move between ticks
    process_noise: float = 0.1
    # R: variance of a single measurement
    measurement_noise: float = 5.0

    def __post_init__(self) -> None:
        if not math.isfinite(self.process_noise) or self.process_noise < 0:
            raise ValueError("process_noise must be a finite value >= 0.")
        if not math.isfinite(self.measurement_noise) or self.measurement_noise <= 0:
            raise ValueError("measurement_noise must be a finite value > 0.")


def _noise(pair: tuple) -> KalmanNoiseConfig:
    return KalmanNoiseConfig(process_noise=pair[0], measurement_noise=pair[1])


@dataclass
class CognitiveScorerConfig:
    """
    Configuration of the per-subject cognitive scorer.
    """

    attention_noise: KalmanNoiseConfig = field(
        default_factory=lambda: _noise(ScoringConstants.ATTENTION_NOISE)
    )
    stress_noise: KalmanNoiseConfig = field(
        default_factory=lambda: _noise(ScoringConstants.STRESS_NOISE)
    )
    curiosity_noise: KalmanNoiseConfig = field(
        default_factory=lambda: _noise(ScoringConstants.CURIOSITY_NOISE)
    )

    # Prior smoothed triple, used until the filters have been seeded
    initial_attention: float = ScoringConstants.INITIAL_ATTENTION
    initial_stress: float = ScoringConstants.INITIAL_STRESS
    initial_curiosity: float = ScoringConstants.INITIAL_CURIOSITY

    # Head pose penalty |yaw|^e + |pitch - neutral|^e
    pose_penalty_exponent: float = ScoringConstants.POSE_PENALTY_EXPONENT
    neutral_pitch_deg: float = ScoringConstants.NEUTRAL_PITCH_DEG

    # Eye aspect ratio below the threshold costs a fixed penalty
    ear_closed_threshold: float = ScoringConstants.EAR_CLOSED_THRESHOLD
    ear_closed_penalty: float = ScoringConstants.EAR_CLOSED_PENALTY


@dataclass
class HeatmapConfig:
    """
    Configuration of the decaying motion heatmap.
    """

    # Declared capture resolution (pixels)
    frame_width: int = MotionConstants.FRAME_WIDTH
    frame_height: int = MotionConstants.FRAME_HEIGHT

    # Heatmap resolution (cells), much coarser than the frame
    grid_width: int = MotionConstants.GRID_WIDTH
    grid_height: int = MotionConstants.GRID_HEIGHT

    # Compare every n-th pixel in both axes
    sample_stride: int = MotionConstants.SAMPLE_STRIDE
    diff_noise_threshold: float = MotionConstants.DIFF_NOISE_THRESHOLD

    # Multiplicative decay applied before each accumulation
    decay_factor: float = MotionConstants.DECAY_FACTOR
    # Energy added per unit of RGB difference
    increment_scale: float = MotionConstants.INCREMENT_SCALE
    # Weight of pixels that pass the skin-tone test (background motion = 1.0)
    skin_weight: float = MotionConstants.SKIN_WEIGHT

    # Centroids ignore cells below the floor and need a minimum total energy
    cell_noise_floor: float = MotionConstants.CELL_NOISE_FLOOR
    min_centroid_energy: float = MotionConstants.MIN_CENTROID_ENERGY

    def __post_init__(self) -> None:
        for name in ("frame_width", "frame_height", "grid_width", "grid_height", "sample_stride"):
            if int(getattr(self, name)) < 1:
                raise ValueError(f"{name} must be >= 1.")
        if self.grid_width > self.frame_width or self.grid_height > self.frame_height:
            raise ValueError("Heatmap grid cannot be finer than the frame.")
        _check_alpha("decay_factor", self.decay_factor)

    @property
    def frame_size(self) -> Tuple[int, int]:
        return self.frame_width, self.frame_height

    @property
    def grid_size(self) -> Tuple[int, int]:
        return self.grid_width, self.grid_height


@dataclass
class TrackerConfig:
    """
    Configuration of the fixed-slot participant tracker.
    """

    # Slot layout over the heatmap grid (row-major order)
    grid_columns: int = TrackingConstants.GRID_COLUMNS
    grid_rows: int = TrackingConstants.GRID_ROWS
    # None -> "Top-Left" ... for the 2x2 layout, "Slot n" otherwise
    slot_labels: Optional[Tuple[str, ...]] = None

    activity_scale: float = TrackingConstants.ACTIVITY_SCALE
    speaking_activity_threshold: float = TrackingConstants.SPEAKING_ACTIVITY_THRESHOLD
    speaking_attention: float = TrackingConstants.SPEAKING_ATTENTION
    speaking_engagement: float = TrackingConstants.SPEAKING_ENGAGEMENT

    # EMA weight of the new value, one per smoothed quantity
    activity_alpha: float = TrackingConstants.ACTIVITY_ALPHA
    attention_alpha: float = TrackingConstants.ATTENTION_ALPHA
    stress_alpha: float = TrackingConstants.STRESS_ALPHA
    curiosity_alpha: float = TrackingConstants.CURIOSITY_ALPHA
    engagement_alpha: float = TrackingConstants.ENGAGEMENT_ALPHA
    group_engagement_alpha: float = TrackingConstants.GROUP_ENGAGEMENT_ALPHA

    engagement_weights: Tuple[float, float, float] = TrackingConstants.ENGAGEMENT_WEIGHTS
    group_highlight_threshold: float = TrackingConstants.GROUP_HIGHLIGHT_THRESHOLD

    # Tracking box (percent of the frame); only its position is tracked
    box_width: float = TrackingConstants.BOX_WIDTH
    box_height: float = TrackingConstants.BOX_HEIGHT
    min_centroid_energy: float = TrackingConstants.MIN_CENTROID_ENERGY
    default_drift_rate: float = TrackingConstants.DEFAULT_DRIFT_RATE
    drift_blend: float = TrackingConstants.DRIFT_BLEND
    follow_blend: float = TrackingConstants.FOLLOW_BLEND

    def __post_init__(self) -> None:
        if self.grid_columns < 1 or self.grid_rows < 1:
            raise ValueError("Tracker needs at least one slot column and row.")
        if not (0.0 < self.box_width < 100.0) or not (0.0 < self.box_height < 100.0):
            raise ValueError("Box size must lie strictly between 0 and 100 percent.")
        if self.slot_labels is not None and len(self.slot_labels) != self.slot_count:
            raise ValueError(
                f"Expected {self.slot_count} slot labels, got {len(self.slot_labels)}."
            )
        for name in (
            "activity_alpha",
            "attention_alpha",
            "stress_alpha",
            "curiosity_alpha",
            "engagement_alpha",
            "group_engagement_alpha",
            "default_drift_rate",
            "drift_blend",
            "follow_blend",
        ):
            _check_alpha(name, getattr(self, name))

    @property
    def slot_count(self) -> int:
        return self.grid_columns * self.grid_rows

    def resolved_labels(self) -> Tuple[str, ...]:
        if self.slot_labels is not None:
            return tuple(self.slot_labels)
        if (self.grid_columns, self.grid_rows) == (2, 2):
            return TrackingConstants.SLOT_LABELS
        return tuple(f"Slot {i + 1}" for i in range(self.slot_count))


@dataclass
class AlertConfig:
    """
    Hysteresis alert on one scored signal.

    ``direction="high"`` alerts on values above ``threshold`` (stress),
    ``direction="low"`` on values below it (attention).
    """

    signal: str
    direction: AlertDirection = "high"
    threshold: float = AlertConstants.HIGH_STRESS_THRESHOLD
    duration_ticks: int = AlertConstants.STRESS_ALERT_DURATION_COUNT
    recovery_threshold: float = AlertConstants.STRESS_RECOVERY_THRESHOLD

    def __post_init__(self) -> None:
        check_hysteresis_band(self.direction, self.threshold, self.recovery_threshold)
        if self.duration_ticks < 0:
            raise ValueError("duration_ticks must be >= 0.")


def default_stress_alert() -> AlertConfig:
    return AlertConfig(
        signal="stress",
        direction="high",
        threshold=AlertConstants.HIGH_STRESS_THRESHOLD,
        duration_ticks=AlertConstants.STRESS_ALERT_DURATION_COUNT,
        recovery_threshold=AlertConstants.STRESS_RECOVERY_THRESHOLD,
    )


def default_attention_alert() -> AlertConfig:
    return AlertConfig(
        signal="attention",
        direction="low",
        threshold=AlertConstants.LOW_ATTENTION_THRESHOLD,
        duration_ticks=AlertConstants.LOW_ATTENTION_DURATION_COUNT,
        recovery_threshold=AlertConstants.LOW_ATTENTION_RECOVERY_THRESHOLD,
    )


@dataclass
class NeuroLensConfiguration:
    """Aggregate configuration consumed by :class:`neurolens.engine.NeuroLensEngine`."""

    scorer: CognitiveScorerConfig = field(default_factory=CognitiveScorerConfig)
    heatmap: HeatmapConfig = field(default_factory=HeatmapConfig)
    tracker: TrackerConfig = field(default_factory=TrackerConfig)
    stress_alert: AlertConfig = field(default_factory=default_stress_alert)
    attention_alert: AlertConfig = field(default_factory=default_attention_alert)

    # Audio spectrum mean above this is treated as speech
    audio_activity_threshold: float = TrackingConstants.AUDIO_ACTIVITY_THRESHOLD

    # Rolling history sizes per subject
    max_live_points: int = HistoryConstants.MAX_LIVE_POINTS
    max_history_points: int = HistoryConstants.MAX_HISTORY_POINTS
