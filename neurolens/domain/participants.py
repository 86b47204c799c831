"""Per-slot participant state produced by the motion tracker."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class BodyLanguage(Enum):
    """Coarse posture tag derived from activity and the slot scores."""

    GESTURING = "Gesturing"
    FIDGETING = "Fidgeting"
    ARMS_CROSSED = "Arms Crossed"
    LEANING_IN = "Leaning In"
    NODDING = "Nodding"
    SLOUCHING = "Slouching"
    LISTENING = "Listening"


@dataclass(frozen=True)
class TrackingBox:
    """Box in percent of the frame; (x, y) is the top-left corner."""

    x: float
    y: float
    w: float
    h: float

    @property
    def center(self) -> tuple:
        return self.x + self.w / 2.0, self.y + self.h / 2.0


@dataclass(frozen=True)
class ParticipantState:
    """Snapshot of one fixed participant slot after a tick."""

    slot: int
    label: str
    activity: float
    attention: float
    stress: float
    curiosity: float
    engagement: float
    speaking: bool
    body_language: BodyLanguage
    box: TrackingBox
