import pytest

from neurolens.config import HeatmapConfig, TrackerConfig
from neurolens.domain.participants import BodyLanguage
from neurolens.motion import MotionHeatmap
from neurolens.tracking import (
    ParticipantTracker,
    activity_targets,
    classify_body_language,
    clamp_box_position,
    is_audio_active,
)

from conftest import block_frame, solid_frame


def _run(tracker, heatmap, frames, audio=False):
    """Feed frames in order; return the states of every tick."""
    history = []
    previous = None
    for t, frame in enumerate(frames):
        heatmap.ingest(frame, previous)
        previous = frame
        history.append(tracker.tick(heatmap, audio, timestamp=float(t)))
    return history


def _flicker(n):
    black, white = solid_frame(), solid_frame((255, 255, 255))
    return [white if i % 2 else black for i in range(n)]


# Body language


def test_speaking_always_gestures():
    assert classify_body_language(0, 10, 90, 10, True) is BodyLanguage.GESTURING


@pytest.mark.parametrize("activity", [35, 50])
def test_fidgeting_beats_leaning_in(activity):
    tag = classify_body_language(activity=activity, attention=90, stress=80, curiosity=80, speaking=False)
    assert tag is BodyLanguage.FIDGETING


@pytest.mark.parametrize(
    "activity, attention, stress, curiosity, expected",
    [
        (5, 50, 80, 50, BodyLanguage.ARMS_CROSSED),
        (20, 85, 40, 75, BodyLanguage.LEANING_IN),
        (20, 70, 40, 50, BodyLanguage.NODDING),
        (5, 30, 40, 50, BodyLanguage.SLOUCHING),
        (50, 50, 50, 50, BodyLanguage.LISTENING),
    ],
)
def test_body_language_table(activity, attention, stress, curiosity, expected):
    assert classify_body_language(activity, attention, stress, curiosity, False) is expected


# Audio


@pytest.mark.parametrize(
    "signal, expected",
    [
        (True, True),
        (False, False),
        (25.0, True),
        (20.0, False),
        ([10.0, 40.0], True),
        ([], False),
        (float("nan"), False),
    ],
)
def test_is_audio_active(signal, expected):
    assert is_audio_active(signal) is expected


# Targets and geometry


def test_activity_targets_stress_steps():
    assert activity_targets(70, False, 50, 30)[1] == 60.0
    assert activity_targets(40, False, 50, 30)[1] == 45.0
    assert activity_targets(10, False, 50, 30)[1] == 30.0
    assert activity_targets(2, False, 50, 30)[1] == 40.0


def test_activity_targets_attention_and_curiosity():
    attention, _, curiosity = activity_targets(20, True, 85, 30)
    assert attention == 90.0
    assert curiosity == 100.0
    attention, _, curiosity = activity_targets(20, False, 50, 30)
    assert attention == 80.0
    assert curiosity == 65.0


def test_clamp_box_position():
    assert clamp_box_position(-5, 90, 22, 30) == (0.0, 70.0)
    assert clamp_box_position(40, 20, 22, 30) == (40.0, 20.0)


# Tracker


def test_default_layout_has_four_labelled_slots(heatmap_config):
    tracker = ParticipantTracker(heatmap_config)
    heatmap = MotionHeatmap(heatmap_config)
    states = _run(tracker, heatmap, [solid_frame()])[-1]
    assert [s.label for s in states] == ["Top-Left", "Top-Right", "Btm-Left", "Btm-Right"]
    assert [s.slot for s in states] == [0, 1, 2, 3]


def test_still_scene_settles_and_boxes_stay_home(heatmap_config):
    tracker = ParticipantTracker(heatmap_config)
    heatmap = MotionHeatmap(heatmap_config)
    history = _run(tracker, heatmap, [solid_frame()] * 60)
    first, last = history[0], history[-1]
    for before, after in zip(first, last):
        assert after.activity == 0.0
        assert not after.speaking
        # frozen scene: stress target 40
        assert after.stress == pytest.approx(40.0, abs=0.5)
        assert after.box.x == pytest.approx(before.box.x)
        assert after.box.y == pytest.approx(before.box.y)


def test_speaking_needs_audio_and_motion(heatmap_config):
    frames = _flicker(4)
    silent = ParticipantTracker(heatmap_config)
    states = _run(silent, MotionHeatmap(heatmap_config), frames, audio=False)[-1]
    assert not any(s.speaking for s in states)

    talking = ParticipantTracker(heatmap_config)
    states = _run(talking, MotionHeatmap(heatmap_config), frames, audio=True)[-1]
    assert all(s.speaking for s in states)
    assert all(s.engagement == 95.0 for s in states)
    assert all(s.body_language is BodyLanguage.GESTURING for s in states)


def test_speaking_follows_current_motion_not_smoothed_activity(heatmap_config):
    tracker = ParticipantTracker(heatmap_config)
    heatmap = MotionHeatmap(heatmap_config)
    moving = _flicker(6)
    still = [moving[-1]] * 3
    history = _run(tracker, heatmap, moving + still, audio=True)

    # first tick with motion already speaks
    assert history[1][0].speaking

    for states in history[6:]:
        for s in states:
            assert not s.speaking
            assert s.body_language is not BodyLanguage.GESTURING
    # smoothed activity still high on the first still tick
    assert history[6][0].activity > 15.0
    assert history[6][0].engagement < 95.0


def test_audio_without_motion_is_not_speaking(heatmap_config):
    tracker = ParticipantTracker(heatmap_config)
    states = _run(tracker, MotionHeatmap(heatmap_config), [solid_frame()] * 5, audio=[200.0] * 8)[-1]
    assert not any(s.speaking for s in states)


def test_group_highlight_fires_once_on_upward_crossing(heatmap_config):
    tracker = ParticipantTracker(heatmap_config)
    heatmap = MotionHeatmap(heatmap_config)
    highlights = []
    previous = None
    for t, frame in enumerate(_flicker(12)):
        heatmap.ingest(frame, previous)
        previous = frame
        tracker.tick(heatmap, True, timestamp=float(t))
        if tracker.last_highlight is not None:
            highlights.append(tracker.last_highlight)
    assert len(highlights) == 1
    assert highlights[0].text == "High Group Engagement detected"
    assert highlights[0].value > 85.0
    assert tracker.group_engagement > 85.0


def test_box_follows_motion_and_stays_inside_frame(heatmap_config):
    tracker = ParticipantTracker(heatmap_config)
    heatmap = MotionHeatmap(heatmap_config)
    corner_on = block_frame(0, 0, 40, 40)
    corner_off = solid_frame()
    frames = [corner_on if i % 2 else corner_off for i in range(40)]
    history = _run(tracker, heatmap, frames)

    start = history[0][0].box
    end = history[-1][0].box
    assert end.x < start.x
    assert end.y < start.y
    for states in history:
        for s in states:
            assert 0.0 <= s.box.x <= 100.0 - s.box.w
            assert 0.0 <= s.box.y <= 100.0 - s.box.h
            for value in (s.activity, s.attention, s.stress, s.curiosity, s.engagement):
                assert 0.0 <= value <= 100.0


def test_box_drifts_back_after_motion_stops(heatmap_config):
    tracker = ParticipantTracker(heatmap_config)
    heatmap = MotionHeatmap(heatmap_config)
    corner_on = block_frame(0, 0, 40, 40)
    frames = [corner_on if i % 2 else solid_frame() for i in range(20)]
    moved = _run(tracker, heatmap, frames)[-1][0].box
    # Heat decays below the centroid floor, then the box heads home
    settled = _run(tracker, heatmap, [solid_frame()] * 400)[-1][0].box
    assert settled.x > moved.x
    assert settled.y > moved.y


def test_custom_layout_labels():
    tracker = ParticipantTracker(HeatmapConfig(), TrackerConfig(grid_columns=3, grid_rows=1))
    assert len(tracker.regions) == 3
    heatmap = MotionHeatmap(HeatmapConfig())
    heatmap.ingest(solid_frame())
    assert [s.label for s in tracker.tick(heatmap)] == ["Slot 1", "Slot 2", "Slot 3"]


def test_grid_mismatch_raises():
    tracker = ParticipantTracker(HeatmapConfig())
    other = MotionHeatmap(HeatmapConfig(grid_width=16, grid_height=12))
    with pytest.raises(ValueError):
        tracker.tick(other)


def test_wrong_label_count_raises():
    with pytest.raises(ValueError):
        TrackerConfig(slot_labels=("a", "b"))


def test_reset_restores_defaults(heatmap_config):
    tracker = ParticipantTracker(heatmap_config)
    heatmap = MotionHeatmap(heatmap_config)
    _run(tracker, heatmap, _flicker(6), audio=True)
    tracker.reset()
    assert tracker.group_engagement == 50.0
    assert tracker.states == [None, None, None, None]
