"""Coordinate mapping between frame pixels, heatmap cells and percentages."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple, Union

import numpy as np

Size = Tuple[int, int]
Coord = Union[int, float, np.ndarray]


def pixel_to_cell(px: Coord, py: Coord, frame_size: Size, grid_size: Size):
    """
    Map pixel coordinates to heatmap cell indices.

    ``frame_size`` and ``grid_size`` are (width, height). Works on scalars
    and on numpy arrays; out-of-frame coordinates are clamped to the border
    cells.
    """
    fw, fh = frame_size
    gw, gh = grid_size
    cx = np.clip(np.floor_divide(np.asarray(px) * gw, fw), 0, gw - 1).astype(np.intp)
    cy = np.clip(np.floor_divide(np.asarray(py) * gh, fh), 0, gh - 1).astype(np.intp)
    if cx.ndim == 0 and cy.ndim == 0:
        return int(cx), int(cy)
    return cx, cy


def cell_to_percent(cx: float, cy: float, grid_size: Size) -> Tuple[float, float]:
    """Grid coordinates (cell units) -> percent of the frame."""
    gw, gh = grid_size
    return cx / gw * 100.0, cy / gh * 100.0


@dataclass(frozen=True)
class GridRegion:
    """Half-open rectangle of heatmap cells: columns [x0, x1), rows [y0, y1)."""

    x0: int
    y0: int
    x1: int
    y1: int

    def __post_init__(self) -> None:
        if self.x1 <= self.x0 or self.y1 <= self.y0:
            raise ValueError(f"Empty grid region: {self}")

    @property
    def width(self) -> int:
        return self.x1 - self.x0

    @property
    def height(self) -> int:
        return self.y1 - self.y0

    @property
    def slices(self) -> Tuple[slice, slice]:
        """(row slice, column slice) for indexing a (rows, cols) array."""
        return slice(self.y0, self.y1), slice(self.x0, self.x1)

    def to_percent(self, grid_size: Size) -> Tuple[float, float, float, float]:
        """Region bounds as (x, y, w, h) in percent of the frame."""
        left, top = cell_to_percent(self.x0, self.y0, grid_size)
        right, bottom = cell_to_percent(self.x1, self.y1, grid_size)
        return left, top, right - left, bottom - top


def split_grid(grid_size: Size, columns: int, rows: int) -> List[GridRegion]:
    """Partition the grid into ``columns`` x ``rows`` regions, row-major."""
    gw, gh = grid_size
    if columns > gw or rows > gh:
        raise ValueError("More slots than heatmap cells along one axis.")
    xs = [(i * gw) // columns for i in range(columns + 1)]
    ys = [(j * gh) // rows for j in range(rows + 1)]
    return [
        GridRegion(xs[i], ys[j], xs[i + 1], ys[j + 1])
        for j in range(rows)
        for i in range(columns)
    ]
