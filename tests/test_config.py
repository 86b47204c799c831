import pytest

from neurolens.config import (
    CognitiveScorerConfig,
    KalmanNoiseConfig,
    NeuroLensConfiguration,
    TrackerConfig,
)


def test_default_configuration_matches_dashboard():
    cfg = NeuroLensConfiguration()
    assert (cfg.stress_alert.threshold, cfg.stress_alert.duration_ticks, cfg.stress_alert.recovery_threshold) == (
        85.0,
        4,
        70.0,
    )
    assert cfg.attention_alert.direction == "low"
    assert cfg.heatmap.grid_size == (32, 24)
    assert cfg.tracker.slot_count == 4
    assert cfg.max_live_points == 30
    assert cfg.max_history_points == 5000


def test_scorer_noise_defaults():
    cfg = CognitiveScorerConfig()
    assert cfg.attention_noise.measurement_noise == 10.0
    assert cfg.stress_noise.measurement_noise == 5.0
    assert cfg.curiosity_noise.measurement_noise == 8.0


@pytest.mark.parametrize("q, r", [(-1.0, 5.0), (0.1, 0.0)])
def test_kalman_noise_validation(q, r):
    with pytest.raises(ValueError):
        KalmanNoiseConfig(process_noise=q, measurement_noise=r)


@pytest.mark.parametrize(
    "kwargs",
    [{"grid_columns": 0}, {"box_width": 100.0}, {"attention_alpha": 0.0}, {"follow_blend": 1.2}],
)
def test_tracker_config_validation(kwargs):
    with pytest.raises(ValueError):
        TrackerConfig(**kwargs)
