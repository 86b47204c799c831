"""RGB skin-tone heuristic used to weight face motion above background motion."""
from __future__ import annotations

import numpy as np


def skin_mask(rgb: np.ndarray) -> np.ndarray:
    """
    Boolean mask of pixels whose colour matches a uniform-daylight skin rule.

    ``rgb`` has shape (..., 3). A pixel is skin when
    R > 95, G > 40, B > 20, max - min > 15, |R - G| > 15, R > G and R > B.
    """
    px = np.asarray(rgb, dtype=np.int16)
    r, g, b = px[..., 0], px[..., 1], px[..., 2]
    spread = px[..., :3].max(axis=-1) - px[..., :3].min(axis=-1)
    return (
        (r > 95)
        & (g > 40)
        & (b > 20)
        & (spread > 15)
        & (np.abs(r - g) > 15)
        & (r > g)
        & (r > b)
    )


def is_skin(r: int, g: int, b: int) -> bool:
    return bool(skin_mask(np.array([r, g, b])))
