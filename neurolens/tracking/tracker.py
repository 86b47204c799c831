# neurolens/tracking/tracker.py
"""
Fixed-slot participant tracking from the motion heatmap.

The frame is split into a fixed grid of participant slots (2x2 by default,
matching a video-call gallery). Each tick every slot reads the motion of its
heatmap region and derives:

  - activity: motion density, scaled to 0-100
  - speaking: audio active while the slot moves
  - attention / stress / curiosity targets from activity heuristics
  - engagement: weighted blend, pinned high while speaking
  - a body-language tag from an ordered decision table
  - a tracking box following the slot's motion centroid

All per-slot quantities are smoothed with exponential moving averages; the
heatmap already decays, so a Kalman update would add cost without benefit.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from ..config import HeatmapConfig, TrackerConfig
from ..domain.events import Highlight
from ..domain.participants import ParticipantState, TrackingBox
from ..filters.ema import ExponentialMovingAverage
from ..motion.heatmap import MotionHeatmap
from ..motion.mapping import GridRegion, cell_to_percent, split_grid
from ..scoring.cognitive import FLOW_ATTENTION, FLOW_STRESS, clamp_score
from .audio import AudioSignal, is_audio_active
from .body_language import classify_body_language

logger = logging.getLogger(__name__)

# Starting values of the slot filters
INITIAL_ATTENTION = 50.0
INITIAL_STRESS = 30.0
INITIAL_CURIOSITY = 50.0
INITIAL_ENGAGEMENT = 50.0

HIGH_GROUP_ENGAGEMENT_TEXT = "High Group Engagement detected"


def clamp_box_position(x: float, y: float, w: float, h: float) -> Tuple[float, float]:
    """Keep a w x h box fully inside the 0-100 percent frame."""
    return float(np.clip(x, 0.0, 100.0 - w)), float(np.clip(y, 0.0, 100.0 - h))


def activity_targets(
    activity: float,
    speaking: bool,
    prior_attention: float,
    prior_stress: float,
    speaking_attention: float = 90.0,
) -> Tuple[float, float, float]:
    """Attention, stress and curiosity targets of a slot for one tick."""
    attention = speaking_attention if speaking else 100.0 - activity

    stress = 30.0
    if activity > 60:
        stress += 30.0  # restless
    elif activity > 30:
        stress += 15.0
    elif activity < 5:
        stress += 10.0  # frozen

    curiosity = 50.0
    if prior_attention > FLOW_ATTENTION and prior_stress < FLOW_STRESS:
        curiosity += 20.0
    if 15 < activity < 40:
        curiosity += 15.0
    if speaking:
        curiosity += 20.0

    return clamp_score(attention), clamp_score(stress), clamp_score(curiosity)


@dataclass
class _SlotState:
    """Mutable tracking state owned by one slot."""

    index: int
    label: str
    region: GridRegion
    default_xy: Tuple[float, float]
    activity: ExponentialMovingAverage
    attention: ExponentialMovingAverage
    stress: ExponentialMovingAverage
    curiosity: ExponentialMovingAverage
    engagement: ExponentialMovingAverage
    box_xy: Tuple[float, float] = (0.0, 0.0)
    target_xy: Tuple[float, float] = (0.0, 0.0)
    last_state: Optional[ParticipantState] = field(default=None)


class ParticipantTracker:
    """
    Tracks a fixed set of participant slots over a shared motion heatmap.

    Usage:
        heatmap = MotionHeatmap(heat_cfg)
        tracker = ParticipantTracker(heat_cfg, TrackerConfig())

        heatmap.ingest(frame, previous)
        states = tracker.tick(heatmap, audio_active=True)
    """

    def __init__(
        self,
        heatmap_config: Optional[HeatmapConfig] = None,
        tracker_config: Optional[TrackerConfig] = None,
    ) -> None:
        self.config = tracker_config or TrackerConfig()
        self.heatmap_config = heatmap_config or HeatmapConfig()
        cfg = self.config
        grid_size = self.heatmap_config.grid_size
        regions = split_grid(grid_size, cfg.grid_columns, cfg.grid_rows)

        self._slots: List[_SlotState] = []
        for index, (label, region) in enumerate(zip(cfg.resolved_labels(), regions)):
            rx, ry, rw, rh = region.to_percent(grid_size)
            default_xy = clamp_box_position(
                rx + (rw - cfg.box_width) / 2.0,
                ry + (rh - cfg.box_height) / 2.0,
                cfg.box_width,
                cfg.box_height,
            )
            self._slots.append(
                _SlotState(
                    index=index,
                    label=label,
                    region=region,
                    default_xy=default_xy,
                    activity=ExponentialMovingAverage(cfg.activity_alpha, initial=0.0),
                    attention=ExponentialMovingAverage(cfg.attention_alpha, initial=INITIAL_ATTENTION),
                    stress=ExponentialMovingAverage(cfg.stress_alpha, initial=INITIAL_STRESS),
                    curiosity=ExponentialMovingAverage(cfg.curiosity_alpha, initial=INITIAL_CURIOSITY),
                    engagement=ExponentialMovingAverage(cfg.engagement_alpha, initial=INITIAL_ENGAGEMENT),
                    box_xy=default_xy,
                    target_xy=default_xy,
                )
            )

        self._group = ExponentialMovingAverage(cfg.group_engagement_alpha, initial=INITIAL_ENGAGEMENT)
        self.last_highlight: Optional[Highlight] = None

    @property
    def regions(self) -> List[GridRegion]:
        return [slot.region for slot in self._slots]

    @property
    def group_engagement(self) -> float:
        return float(self._group.estimate)

    @property
    def states(self) -> List[Optional[ParticipantState]]:
        return [slot.last_state for slot in self._slots]

    def tick(
        self,
        heatmap: MotionHeatmap,
        audio_active: AudioSignal = False,
        timestamp: Optional[float] = None,
    ) -> List[ParticipantState]:
        """Update every slot from the heatmap's current grid and return snapshots."""
        if heatmap.config.grid_size != self.heatmap_config.grid_size:
            raise ValueError(
                f"Heatmap grid {heatmap.config.grid_size} does not match tracker grid "
                f"{self.heatmap_config.grid_size}."
            )
        audio = is_audio_active(audio_active)
        states = [self._tick_slot(slot, heatmap, audio) for slot in self._slots]
        self._update_group(states, time.time() if timestamp is None else float(timestamp))
        return states

    def _tick_slot(self, slot: _SlotState, heatmap: MotionHeatmap, audio: bool) -> ParticipantState:
        cfg = self.config
        motion, sampled = heatmap.region_motion(slot.region)
        raw_activity = min(100.0, motion / max(sampled, 1) * cfg.activity_scale)
        activity = slot.activity.filter(raw_activity)
        # Speech gate reads this tick's motion, not the smoothed trail
        speaking = audio and raw_activity > cfg.speaking_activity_threshold

        att_t, stress_t, cur_t = activity_targets(
            activity,
            speaking,
            slot.attention.estimate,
            slot.stress.estimate,
            cfg.speaking_attention,
        )
        attention = slot.attention.filter(att_t)
        stress = slot.stress.filter(stress_t)
        curiosity = slot.curiosity.filter(cur_t)

        w_att, w_cur, w_act = cfg.engagement_weights
        engagement = slot.engagement.filter(
            attention * w_att + curiosity * w_cur + min(100.0, activity * 2.0) * w_act
        )
        if speaking:
            engagement = cfg.speaking_engagement

        body = classify_body_language(activity, attention, stress, curiosity, speaking)
        box = self._track_box(slot, heatmap)

        state = ParticipantState(
            slot=slot.index,
            label=slot.label,
            activity=clamp_score(activity),
            attention=clamp_score(attention),
            stress=clamp_score(stress),
            curiosity=clamp_score(curiosity),
            engagement=clamp_score(engagement),
            speaking=speaking,
            body_language=body,
            box=box,
        )
        if slot.last_state is None or slot.last_state.body_language != body:
            logger.debug("Slot %s body language -> %s", slot.label, body.value)
        slot.last_state = state
        return state

    def _track_box(self, slot: _SlotState, heatmap: MotionHeatmap) -> TrackingBox:
        cfg = self.config
        w, h = cfg.box_width, cfg.box_height
        centroid = heatmap.centroid_of(slot.region)

        if centroid is not None and centroid[2] >= cfg.min_centroid_energy:
            px, py = cell_to_percent(centroid[0], centroid[1], self.heatmap_config.grid_size)
            slot.target_xy = clamp_box_position(px - w / 2.0, py - h / 2.0, w, h)
            blend = cfg.follow_blend
        else:
            tx, ty = slot.target_xy
            dx, dy = slot.default_xy
            rate = cfg.default_drift_rate
            slot.target_xy = (tx + (dx - tx) * rate, ty + (dy - ty) * rate)
            blend = cfg.drift_blend

        bx, by = slot.box_xy
        tx, ty = slot.target_xy
        slot.box_xy = clamp_box_position(
            bx * (1.0 - blend) + tx * blend,
            by * (1.0 - blend) + ty * blend,
            w,
            h,
        )
        return TrackingBox(x=slot.box_xy[0], y=slot.box_xy[1], w=w, h=h)

    def _update_group(self, states: List[ParticipantState], timestamp: float) -> None:
        previous = self._group.estimate
        mean_engagement = sum(s.engagement for s in states) / len(states)
        current = self._group.filter(mean_engagement)
        threshold = self.config.group_highlight_threshold

        self.last_highlight = None
        if current > threshold >= previous:
            self.last_highlight = Highlight(timestamp=timestamp, text=HIGH_GROUP_ENGAGEMENT_TEXT, value=current)
            logger.info("%s (%.1f)", HIGH_GROUP_ENGAGEMENT_TEXT, current)

    def reset(self) -> None:
        for slot in self._slots:
            for flt in (slot.activity, slot.attention, slot.stress, slot.curiosity, slot.engagement):
                flt.reset()
            slot.box_xy = slot.default_xy
            slot.target_xy = slot.default_xy
            slot.last_state = None
        self._group.reset()
        self.last_highlight = None


__all__ = [
    "ParticipantTracker",
    "activity_targets",
    "clamp_box_position",
]
