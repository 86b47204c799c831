import math

import pytest

from neurolens.domain.features import FeatureVector
from neurolens.scoring import (
    CognitiveScorer,
    blink_stress_bonus,
    raw_attention,
    raw_curiosity,
    raw_stress,
)

from conftest import make_features


def test_attention_is_full_when_facing_screen():
    assert raw_attention(make_features(yaw=0.0, pitch=5.0, ear=0.25)) == 100.0


def test_closed_eyes_cost_fifty_points():
    assert raw_attention(make_features(ear=0.19)) == 50.0


def test_attention_drops_with_head_turn_and_clamps():
    turned = raw_attention(make_features(yaw=10.0))
    assert turned == pytest.approx(100.0 - 10.0 ** 1.6)
    assert raw_attention(make_features(yaw=60.0, pitch=-40.0)) == 0.0


@pytest.mark.parametrize(
    "rate, expected",
    [(4.0, 40.0), (5.0, 30.0), (20.0, 30.0), (21.0, 45.0), (30.0, 45.0), (31.0, 60.0)],
)
def test_stress_blink_rate_steps(rate, expected):
    assert raw_stress(make_features(blink_rate=rate)) == expected


def test_blink_bonus_values():
    assert blink_stress_bonus(35) == 30.0
    assert blink_stress_bonus(25) == 15.0
    assert blink_stress_bonus(2) == 10.0
    assert blink_stress_bonus(12) == 0.0


def test_stress_expression_terms_and_clamp():
    assert raw_stress(make_features(happy=1.0)) == 0.0
    assert raw_stress(make_features(neutral=1.0)) == 20.0
    assert raw_stress(make_features(angry=1.0, fearful=1.0, blink_rate=40.0)) == 100.0


def test_curiosity_flow_and_lean_bonus():
    base = make_features(pitch=5.0)
    assert raw_curiosity(base, prior_attention=50.0, prior_stress=30.0) == 50.0
    assert raw_curiosity(base, prior_attention=90.0, prior_stress=20.0) == 70.0
    leaning = make_features(pitch=-10.0)
    assert raw_curiosity(leaning, prior_attention=50.0, prior_stress=30.0) == 65.0
    surprised = make_features(surprised=1.0, happy=1.0)
    assert raw_curiosity(surprised, 50.0, 30.0) == 100.0


def test_first_update_seeds_all_filters():
    scorer = CognitiveScorer()
    point = scorer.update(make_features(), timestamp=1.0)
    assert point.timestamp == 1.0
    assert point.attention == 100.0
    assert point.stress == 30.0
    # Prior triple 50 / 30 is not in flow, so no bonus on the first tick
    assert point.curiosity == 50.0


def test_curiosity_reads_previous_tick():
    scorer = CognitiveScorer()
    scorer.update(make_features(), timestamp=1.0)
    second = scorer.update(make_features(), timestamp=2.0)
    # Attention 100 / stress 30 from tick one puts tick two in flow
    assert second.curiosity > 50.0


def test_scores_stay_in_bounds_and_are_rounded():
    scorer = CognitiveScorer()
    samples = [
        make_features(yaw=80.0, pitch=-70.0, ear=0.05, blink_rate=50.0, angry=1.0, fearful=1.0),
        make_features(happy=1.0, surprised=1.0, pitch=-10.0),
        make_features(yaw=-3.3, pitch=7.7, ear=0.31, blink_rate=17.0, neutral=0.4),
    ]
    for i, features in enumerate(samples * 5):
        point = scorer.update(features, timestamp=float(i))
        for value in (point.attention, point.stress, point.curiosity):
            assert 0.0 <= value <= 100.0
            assert round(value, 2) == value


def test_non_finite_features_hold_previous_scores():
    scorer = CognitiveScorer()
    first = scorer.update(make_features(yaw=10.0), timestamp=1.0)
    held = scorer.update(make_features(yaw=float("nan")), timestamp=2.0)
    assert held.attention == first.attention
    assert not math.isnan(held.stress)


def test_face_lost_vector_scores_no_attention():
    scorer = CognitiveScorer()
    point = scorer.update(FeatureVector.face_lost(), timestamp=0.0)
    assert point.attention == 0.0


def test_default_timestamp_and_reset():
    scorer = CognitiveScorer()
    point = scorer.update(make_features())
    assert point.timestamp > 0
    assert scorer.last_point == point
    scorer.reset()
    assert scorer.last_point is None
    assert scorer.prior == (50.0, 30.0, 60.0)


def test_features_from_mapping_ignores_unknown_columns():
    row = {
        "yaw": "1.5",
        "pitch": 2,
        "roll": 0,
        "ear": 0.3,
        "blink_rate": 10,
        "happy": 0.5,
        "disgusted": 0.9,
    }
    features = FeatureVector.from_mapping(row)
    assert features.yaw == 1.5
    assert features.expressions.happy == 0.5
    assert features.expressions.angry == 0.0
    assert features.interaction_level == 0.0
