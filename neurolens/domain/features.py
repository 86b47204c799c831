"""Per-subject measurements supplied by the perception layer.

The face-landmark and expression models live outside this package; these
classes only carry what they produce for one sampling tick.
"""
from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Mapping

from ..config.constants import ScoringConstants


@dataclass(frozen=True)
class ExpressionConfidence:
    """Expression probabilities in [0, 1]. Entries need not sum to 1."""

    neutral: float = 0.0
    happy: float = 0.0
    angry: float = 0.0
    fearful: float = 0.0
    surprised: float = 0.0

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "ExpressionConfidence":
        """Build from a name -> probability mapping; unknown names are ignored."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: float(v) for k, v in values.items() if k in known})


@dataclass(frozen=True)
class FeatureVector:
    """Geometric and expression features of one subject for one tick."""

    yaw: float
    pitch: float
    roll: float
    ear: float
    blink_rate: float
    expressions: ExpressionConfidence = field(default_factory=ExpressionConfidence)
    interaction_level: float = 0.0

    @classmethod
    def face_lost(cls) -> "FeatureVector":
        """Vector fed while no face is detected: head turned away, eyes open."""
        return cls(
            yaw=ScoringConstants.FACE_LOST_YAW_DEG,
            pitch=ScoringConstants.FACE_LOST_PITCH_DEG,
            roll=0.0,
            ear=ScoringConstants.FACE_LOST_EAR,
            blink_rate=0.0,
        )

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any]) -> "FeatureVector":
        """Build from a flat row such as a TSV record.

        Expression columns (``neutral``, ``happy`` ...) sit next to the pose
        columns; ``interaction_level`` is optional.
        """
        return cls(
            yaw=float(row["yaw"]),
            pitch=float(row["pitch"]),
            roll=float(row["roll"]),
            ear=float(row["ear"]),
            blink_rate=float(row["blink_rate"]),
            expressions=ExpressionConfidence.from_mapping(row),
            interaction_level=float(row.get("interaction_level", 0.0)),
        )
