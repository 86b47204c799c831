"""Audio activity gate for the speaking flag."""
from __future__ import annotations

import math
from typing import Sequence, Union

import numpy as np

from ..config.constants import TrackingConstants

AudioSignal = Union[bool, float, Sequence[float], np.ndarray]


def is_audio_active(
    signal: AudioSignal,
    threshold: float = TrackingConstants.AUDIO_ACTIVITY_THRESHOLD,
) -> bool:
    """
    Decide whether someone is talking.

    ``signal`` is either a ready-made flag, a scalar level on the 0-255
    analyser scale, or the analyser's frequency bins (their mean is used).
    """
    if isinstance(signal, (bool, np.bool_)):
        return bool(signal)
    arr = np.asarray(signal, dtype=float)
    if arr.size == 0:
        return False
    level = float(arr.mean())
    return math.isfinite(level) and level > threshold
