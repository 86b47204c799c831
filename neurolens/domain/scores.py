"""Smoothed cognitive scores emitted once per tick and subject."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

SCORE_FIELDS = ("attention", "stress", "curiosity")


@dataclass(frozen=True)
class ScoredPoint:
    """One tick's smoothed attention / stress / curiosity triple (0-100)."""

    timestamp: float
    attention: float
    stress: float
    curiosity: float

    def as_dict(self) -> Dict[str, float]:
        return {
            "timestamp": self.timestamp,
            "attention": self.attention,
            "stress": self.stress,
            "curiosity": self.curiosity,
        }
