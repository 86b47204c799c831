"""Rolling blink-rate estimate from the eye aspect ratio."""
from __future__ import annotations

import math
from collections import deque
from typing import Deque

from ..config.constants import ScoringConstants


class BlinkRateTracker:
    """
    Count blinks over a rolling time window.

    A blink starts when the EAR drops below ``ear_threshold`` and is counted
    once; the eye must reopen before the next blink can be counted. With the
    default 60 s window the count is directly a blinks-per-minute rate.
    """

    def __init__(
        self,
        ear_threshold: float = ScoringConstants.BLINK_EAR_THRESHOLD,
        window_sec: float = ScoringConstants.BLINK_WINDOW_SEC,
    ) -> None:
        if window_sec <= 0:
            raise ValueError("window_sec must be > 0.")
        self.ear_threshold = ear_threshold
        self.window_sec = window_sec
        self._blinks: Deque[float] = deque()
        self._eye_closed = False

    @property
    def blink_rate(self) -> int:
        return len(self._blinks)

    def observe(self, ear: float, timestamp: float) -> int:
        """Feed one EAR sample taken at ``timestamp`` (seconds); return the blink count in the window."""
        if math.isfinite(ear):
            if ear < self.ear_threshold:
                if not self._eye_closed:
                    self._eye_closed = True
                    self._blinks.append(timestamp)
            else:
                self._eye_closed = False

        while self._blinks and timestamp - self._blinks[0] >= self.window_sec:
            self._blinks.popleft()
        return len(self._blinks)

    def reset(self) -> None:
        self._blinks.clear()
        self._eye_closed = False
