import math

import pytest

from neurolens.alerts import AlertHysteresis, CognitiveAlertMonitor
from neurolens.config import AlertConfig, check_hysteresis_band
from neurolens.domain.events import AlertKind
from neurolens.domain.scores import ScoredPoint


def _feed(alert, values, high=85.0, duration=4, recovery=70.0):
    events = []
    for t, value in enumerate(values):
        event = alert.observe(value, high, duration, recovery, timestamp=float(t))
        if event is not None:
            events.append(event)
    return events


def test_dead_band_flicker_raises_nothing():
    alert = AlertHysteresis("stress")
    events = _feed(alert, [86.0, 84.0] * 20)
    raised = [e for e in events if e.kind is AlertKind.RAISED]
    recovered = [e for e in events if e.kind is AlertKind.RECOVERED]
    assert len(raised) <= 1
    assert recovered == []
    assert not alert.active


def test_raises_after_duration_exceeded():
    alert = AlertHysteresis("stress")
    assert _feed(alert, [90.0] * 4) == []
    assert alert.counter == 4
    event = alert.observe(90.0, 85.0, 4, 70.0, timestamp=10.0)
    assert event.kind is AlertKind.RAISED
    assert event.signal == "stress"
    assert event.timestamp == 10.0
    assert event.value == 90.0
    assert alert.active


def test_single_raise_while_active():
    alert = AlertHysteresis("stress")
    events = _feed(alert, [95.0] * 20)
    assert [e.kind for e in events] == [AlertKind.RAISED]


def test_recovery_only_below_recovery_threshold():
    alert = AlertHysteresis("stress")
    events = _feed(alert, [90.0] * 5 + [80.0, 75.0, 71.0, 69.0, 60.0])
    assert [e.kind for e in events] == [AlertKind.RAISED, AlertKind.RECOVERED]
    assert events[1].value == 69.0
    assert not alert.active


def test_low_direction_for_attention():
    alert = AlertHysteresis("attention", direction="low")
    events = _feed(alert, [30.0] * 5 + [38.0, 45.0], high=35.0, recovery=40.0)
    assert [e.kind for e in events] == [AlertKind.RAISED, AlertKind.RECOVERED]
    assert events[1].value == 45.0


def test_non_finite_values_are_ignored():
    alert = AlertHysteresis("stress")
    _feed(alert, [90.0, 90.0])
    assert alert.observe(float("nan"), 85.0, 4, 70.0) is None
    assert alert.counter == 2


@pytest.mark.parametrize(
    "direction, high, recovery",
    [("high", 85.0, 85.0), ("high", 70.0, 85.0), ("low", 40.0, 35.0), ("sideways", 1.0, 2.0)],
)
def test_bad_threshold_band_raises(direction, high, recovery):
    with pytest.raises(ValueError):
        check_hysteresis_band(direction, high, recovery)


def test_observe_validates_thresholds():
    alert = AlertHysteresis("stress")
    with pytest.raises(ValueError):
        alert.observe(90.0, 80.0, 4, 80.0)


def test_reset_clears_counter_and_flag():
    alert = AlertHysteresis("stress")
    _feed(alert, [90.0] * 6)
    alert.reset()
    assert alert.counter == 0
    assert not alert.active


def _point(t, attention, stress):
    return ScoredPoint(timestamp=t, attention=attention, stress=stress, curiosity=50.0)


def test_monitor_runs_both_default_alerts():
    monitor = CognitiveAlertMonitor()
    events = []
    for t in range(5):
        events.extend(monitor.observe(_point(float(t), attention=20.0, stress=90.0)))
    assert sorted(e.signal for e in events) == ["attention", "stress"]
    assert all(e.kind is AlertKind.RAISED for e in events)
    assert sorted(monitor.active_signals) == ["attention", "stress"]

    events = monitor.observe(_point(5.0, attention=60.0, stress=50.0))
    assert sorted(e.signal for e in events) == ["attention", "stress"]
    assert all(e.kind is AlertKind.RECOVERED for e in events)


def test_monitor_rejects_unknown_signal():
    with pytest.raises(ValueError):
        CognitiveAlertMonitor([AlertConfig(signal="boredom")])


def test_alert_config_validates_band():
    with pytest.raises(ValueError):
        AlertConfig(signal="stress", threshold=70.0, recovery_threshold=80.0)
    assert math.isclose(AlertConfig(signal="stress").recovery_threshold, 70.0)
