# neurolens/motion/heatmap.py
"""
Decaying motion heatmap.

A per-pixel frame difference is too noisy to track anything from one frame
to the next. The heatmap keeps a coarse grid of accumulated motion energy
instead: every tick all cells decay by a constant factor, then the sampled
pixels that changed by more than the noise threshold add energy to the cell
they fall into. Pixels passing the skin-tone test count double so tracking
prefers faces over background motion.

With the default decay of 0.96 a burst of motion fades to 1/e after about
25 ticks.
"""
from __future__ import annotations

import logging
from typing import Optional, Tuple

import numpy as np

from ..config import HeatmapConfig
from .mapping import GridRegion, pixel_to_cell
from .skin import skin_mask

logger = logging.getLogger(__name__)

MAX_CELL_VALUE = 100.0

Centroid = Tuple[float, float, float]


class MotionHeatmap:
    """
    Fixed-size motion accumulation grid fed by consecutive frames.

    Frames are ``numpy`` arrays of shape (height, width, channels) with at
    least three (RGB) channels; an alpha channel is ignored.

    Usage:
        heatmap = MotionHeatmap(HeatmapConfig())
        heatmap.ingest(frame, previous_frame)
        centroid = heatmap.centroid_of(region)
    """

    def __init__(self, config: Optional[HeatmapConfig] = None) -> None:
        self.config = config or HeatmapConfig()
        cfg = self.config
        self._grid = np.zeros((cfg.grid_height, cfg.grid_width), dtype=float)
        self._motion = np.zeros_like(self._grid)

        # Sampled pixel positions never change, so their cells are mapped once
        xs = np.arange(0, cfg.frame_width, cfg.sample_stride)
        ys = np.arange(0, cfg.frame_height, cfg.sample_stride)
        cell_x, cell_y = pixel_to_cell(xs, ys, cfg.frame_size, cfg.grid_size)
        self._cell_rows, self._cell_cols = np.meshgrid(cell_y, cell_x, indexing="ij")

        self._sampled = np.zeros(self._grid.shape, dtype=np.int64)
        np.add.at(self._sampled, (self._cell_rows, self._cell_cols), 1)
        self.ticks = 0

    @property
    def grid(self) -> np.ndarray:
        """Copy of the energy grid, shape (grid_height, grid_width)."""
        return self._grid.copy()

    @property
    def last_motion(self) -> np.ndarray:
        """Copy of the raw over-threshold difference per cell from the last ingest."""
        return self._motion.copy()

    @property
    def sampled_pixels(self) -> np.ndarray:
        return self._sampled.copy()

    def _check_frame(self, frame: np.ndarray) -> np.ndarray:
        arr = np.asarray(frame)
        cfg = self.config
        if arr.ndim != 3 or arr.shape[0] != cfg.frame_height or arr.shape[1] != cfg.frame_width or arr.shape[2] < 3:
            raise ValueError(
                f"Expected frame of shape ({cfg.frame_height}, {cfg.frame_width}, >=3), got {arr.shape}."
            )
        return arr

    def ingest(self, current: np.ndarray, previous: Optional[np.ndarray] = None) -> None:
        """Decay the grid, then accumulate motion between ``previous`` and ``current``."""
        cfg = self.config
        cur = self._check_frame(current)

        self._grid *= cfg.decay_factor
        self._motion.fill(0.0)

        if previous is not None:
            prev = self._check_frame(previous)
            step = cfg.sample_stride
            cur_s = cur[::step, ::step, :3].astype(np.int16)
            prev_s = prev[::step, ::step, :3].astype(np.int16)
            diff = np.abs(cur_s - prev_s).sum(axis=-1)
            moving = diff > cfg.diff_noise_threshold

            if moving.any():
                weights = np.where(skin_mask(cur_s), cfg.skin_weight, 1.0)
                increments = diff * cfg.increment_scale * weights
                rows = self._cell_rows[moving]
                cols = self._cell_cols[moving]
                np.add.at(self._grid, (rows, cols), increments[moving])
                np.add.at(self._motion, (rows, cols), diff[moving].astype(float))
                logger.debug("Heatmap tick %d: %d moving samples", self.ticks, int(moving.sum()))

        np.clip(self._grid, 0.0, MAX_CELL_VALUE, out=self._grid)
        self.ticks += 1

    def centroid_of(self, region: GridRegion) -> Optional[Centroid]:
        """
        Energy-weighted centroid of ``region`` in grid coordinates.

        Cells below the noise floor are ignored. Returns ``(x, y, energy)``
        with x/y measured in cells (a cell's centre is at index + 0.5), or
        None when the region holds less than ``min_centroid_energy``.
        """
        cells = self._grid[region.slices]
        weights = np.where(cells >= self.config.cell_noise_floor, cells, 0.0)
        total = float(weights.sum())
        if total <= 0.0 or total < self.config.min_centroid_energy:
            return None
        rows, cols = np.indices(cells.shape)
        cx = region.x0 + float(((cols + 0.5) * weights).sum()) / total
        cy = region.y0 + float(((rows + 0.5) * weights).sum()) / total
        return cx, cy, total

    def region_motion(self, region: GridRegion) -> Tuple[float, int]:
        """(summed over-threshold RGB difference, sampled pixel count) of the last ingest."""
        rows, cols = region.slices
        return float(self._motion[rows, cols].sum()), int(self._sampled[rows, cols].sum())

    def total_energy(self, region: Optional[GridRegion] = None) -> float:
        cells = self._grid if region is None else self._grid[region.slices]
        return float(cells.sum())

    def reset(self) -> None:
        self._grid.fill(0.0)
        self._motion.fill(0.0)
        self.ticks = 0
