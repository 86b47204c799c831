"""Frame-difference motion accumulation."""

from .mapping import GridRegion, cell_to_percent, pixel_to_cell, split_grid
from .skin import is_skin, skin_mask
from .heatmap import MotionHeatmap

__all__ = [
    "GridRegion",
    "cell_to_percent",
    "pixel_to_cell",
    "split_grid",
    "is_skin",
    "skin_mask",
    "MotionHeatmap",
]
