# neurolens/config/constants.py
"""Numeric defaults for scoring, motion tracking and alerting."""

from __future__ import annotations


class ScoringConstants:
    """Defaults for the per-subject cognitive scorer."""

    # Kalman noise pairs (process, measurement) per tracked quantity
    ATTENTION_NOISE: tuple = (0.1, 10.0)
    STRESS_NOISE: tuple = (0.1, 5.0)
    CURIOSITY_NOISE: tuple = (0.1, 8.0)

    # Prior smoothed triple before the first sample
    INITIAL_ATTENTION: float = 50.0
    INITIAL_STRESS: float = 30.0
    INITIAL_CURIOSITY: float = 60.0

    # Head pose penalty: |angle| ** exponent
    POSE_PENALTY_EXPONENT: float = 1.6
    # Neutral pitch (slight downward gaze at a screen)
    NEUTRAL_PITCH_DEG: float = 5.0

    # Eyes closed / looking away
    EAR_CLOSED_THRESHOLD: float = 0.20
    EAR_CLOSED_PENALTY: float = 50.0

    # Blink detection for the rolling blink rate
    BLINK_EAR_THRESHOLD: float = 0.18
    BLINK_WINDOW_SEC: float = 60.0

    # Fallback head pose when no face is detected
    FACE_LOST_YAW_DEG: float = 45.0
    FACE_LOST_PITCH_DEG: float = 45.0
    FACE_LOST_EAR: float = 0.3


class MotionConstants:
    """Defaults for the motion heatmap."""

    FRAME_WIDTH: int = 320
    FRAME_HEIGHT: int = 240
    GRID_WIDTH: int = 32
    GRID_HEIGHT: int = 24

    # Only every n-th pixel (per axis) is compared
    SAMPLE_STRIDE: int = 4
    # Sum of absolute RGB differences below this is sensor noise
    DIFF_NOISE_THRESHOLD: float = 50.0

    # 0.96 per tick -> about 25 ticks to reach 1/e
    DECAY_FACTOR: float = 0.96
    INCREMENT_SCALE: float = 0.02
    SKIN_WEIGHT: float = 2.0

    # Centroid queries
    CELL_NOISE_FLOOR: float = 5.0
    MIN_CENTROID_ENERGY: float = 20.0

    MAX_CELL_VALUE: float = 100.0


class TrackingConstants:
    """Defaults for the fixed-slot participant tracker."""

    GRID_COLUMNS: int = 2
    GRID_ROWS: int = 2
    SLOT_LABELS: tuple = ("Top-Left", "Top-Right", "Btm-Left", "Btm-Right")

    # Motion density (diff per sampled pixel) -> 0..100
    ACTIVITY_SCALE: float = 5.0
    SPEAKING_ACTIVITY_THRESHOLD: float = 15.0
    SPEAKING_ATTENTION: float = 90.0
    SPEAKING_ENGAGEMENT: float = 95.0

    # EMA blend weight given to the new value
    ACTIVITY_ALPHA: float = 0.3
    ATTENTION_ALPHA: float = 0.2
    STRESS_ALPHA: float = 0.15
    CURIOSITY_ALPHA: float = 0.25
    ENGAGEMENT_ALPHA: float = 0.3
    GROUP_ENGAGEMENT_ALPHA: float = 0.3

    # Engagement weights: attention, curiosity, activity
    ENGAGEMENT_WEIGHTS: tuple = (0.45, 0.35, 0.20)

    GROUP_HIGHLIGHT_THRESHOLD: float = 85.0

    # Tracking box in percent of the frame
    BOX_WIDTH: float = 22.0
    BOX_HEIGHT: float = 30.0
    MIN_CENTROID_ENERGY: float = 20.0
    DEFAULT_DRIFT_RATE: float = 0.02
    DRIFT_BLEND: float = 0.2
    FOLLOW_BLEND: float = 0.4

    # Audio spectrum mean (0..255) above this counts as speech
    AUDIO_ACTIVITY_THRESHOLD: float = 20.0


class AlertConstants:
    """Dashboard alert thresholds."""

    HIGH_STRESS_THRESHOLD: float = 85.0
    STRESS_ALERT_DURATION_COUNT: int = 4
    STRESS_RECOVERY_THRESHOLD: float = 70.0

    LOW_ATTENTION_THRESHOLD: float = 35.0
    LOW_ATTENTION_DURATION_COUNT: int = 4
    LOW_ATTENTION_RECOVERY_THRESHOLD: float = 40.0


class HistoryConstants:
    """Rolling history sizes."""

    MAX_LIVE_POINTS: int = 30
    MAX_HISTORY_POINTS: int = 5000
