from __future__ import annotations

from typing import Dict, List, Mapping, Sequence, Tuple

import pandas as pd

from .domain.features import FeatureVector
from .domain.scores import ScoredPoint
from .history import HISTORY_COLUMNS

SUBJECT_COLUMN = "subject"
DEFAULT_SUBJECT = "subject"

REQUIRED_FEATURE_COLUMNS = [
    "timestamp",
    "yaw",
    "pitch",
    "roll",
    "ear",
    "blink_rate",
    "neutral",
    "happy",
    "angry",
    "fearful",
    "surprised",
    "interaction_level",
]

TimedFeatures = Tuple[float, FeatureVector]


def read_tsv(path: str) -> pd.DataFrame:
    """
    Read a tab separated feature recording.

    - Tab as separator
    - Point as decimal separator
    """
    return pd.read_csv(path, sep="\t", low_memory=False)


def write_tsv(df: pd.DataFrame, path: str) -> None:
    """
    Write a DataFrame as tab separated file without index.
    """
    df.to_csv(path, sep="\t", index=False)


def check_feature_columns(df: pd.DataFrame) -> None:
    missing = [c for c in REQUIRED_FEATURE_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required feature columns: {', '.join(missing)}")


def feature_streams(df: pd.DataFrame) -> Dict[str, List[TimedFeatures]]:
    """
    Split a feature table into per-subject streams ordered by timestamp.

    Without a ``subject`` column every row belongs to one subject.
    """
    check_feature_columns(df)
    if SUBJECT_COLUMN in df.columns:
        subjects = df[SUBJECT_COLUMN].astype(str)
    else:
        subjects = pd.Series(DEFAULT_SUBJECT, index=df.index)

    streams: Dict[str, List[TimedFeatures]] = {}
    for subject, group in df.groupby(subjects, sort=False):
        group = group.sort_values("timestamp", kind="stable")
        streams[str(subject)] = [
            (float(row["timestamp"]), FeatureVector.from_mapping(row))
            for row in group.to_dict(orient="records")
        ]
    return streams


def scored_frame(scored: Mapping[str, Sequence[ScoredPoint]]) -> pd.DataFrame:
    """Flatten per-subject scored points into one table (subject first)."""
    rows = [
        {SUBJECT_COLUMN: subject, **point.as_dict()}
        for subject, points in scored.items()
        for point in points
    ]
    return pd.DataFrame(rows, columns=[SUBJECT_COLUMN, *HISTORY_COLUMNS])
