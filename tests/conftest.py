from typing import Callable

import numpy as np
import pytest

from neurolens.config import HeatmapConfig
from neurolens.domain.features import ExpressionConfidence, FeatureVector

FRAME_SHAPE = (240, 320, 3)


def make_features(
    yaw: float = 0.0,
    pitch: float = 5.0,
    roll: float = 0.0,
    ear: float = 0.25,
    blink_rate: float = 12.0,
    **expressions: float,
) -> FeatureVector:
    """Attentive, relaxed subject unless overridden."""
    return FeatureVector(
        yaw=yaw,
        pitch=pitch,
        roll=roll,
        ear=ear,
        blink_rate=blink_rate,
        expressions=ExpressionConfidence(**expressions),
    )


def solid_frame(color=(0, 0, 0)) -> np.ndarray:
    frame = np.zeros(FRAME_SHAPE, dtype=np.uint8)
    frame[:, :] = color
    return frame


def block_frame(x0: int, y0: int, x1: int, y1: int, color=(255, 255, 255)) -> np.ndarray:
    """Black frame with a coloured block over pixel columns [x0, x1) and rows [y0, y1)."""
    frame = solid_frame()
    frame[y0:y1, x0:x1] = color
    return frame


@pytest.fixture
def attentive_features() -> FeatureVector:
    return make_features()


@pytest.fixture
def feature_factory() -> Callable[..., FeatureVector]:
    return make_features


@pytest.fixture
def black_frame() -> np.ndarray:
    return solid_frame()


@pytest.fixture
def white_frame() -> np.ndarray:
    return solid_frame((255, 255, 255))


@pytest.fixture
def heatmap_config() -> HeatmapConfig:
    return HeatmapConfig()
