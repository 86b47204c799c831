"""Bounded per-subject score history."""
from __future__ import annotations

from collections import deque
from typing import Deque, Iterable, Iterator, List

import pandas as pd

from .config.constants import HistoryConstants
from .domain.scores import SCORE_FIELDS, ScoredPoint

HISTORY_COLUMNS = ["timestamp", *SCORE_FIELDS]


class ScoreHistory:
    """
    Rolling store of scored points.

    Keeps at most ``max_points`` points (oldest dropped first). The live view
    shown while a session runs is ``latest()``; the full store backs exports
    and session reports.
    """

    def __init__(self, max_points: int = HistoryConstants.MAX_HISTORY_POINTS) -> None:
        if max_points < 1:
            raise ValueError("max_points must be >= 1.")
        self.max_points = max_points
        self._points: Deque[ScoredPoint] = deque(maxlen=max_points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[ScoredPoint]:
        return iter(self._points)

    def append(self, point: ScoredPoint) -> None:
        self._points.append(point)

    def extend(self, points: Iterable[ScoredPoint]) -> None:
        self._points.extend(points)

    def latest(self, n: int = HistoryConstants.MAX_LIVE_POINTS) -> List[ScoredPoint]:
        if n <= 0:
            return []
        return list(self._points)[-n:]

    def clear(self) -> None:
        self._points.clear()

    def to_dataframe(self) -> pd.DataFrame:
        """History as a DataFrame with columns timestamp, attention, stress, curiosity."""
        return pd.DataFrame([p.as_dict() for p in self._points], columns=HISTORY_COLUMNS)
