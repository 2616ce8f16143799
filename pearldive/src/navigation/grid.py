"""Coarse occupancy grid used to steer pursuing enemies around cave walls.

The grid is rasterized from world-space wall rectangles at its own
resolution, independent of the cavern grid those walls came from. Path
queries take world coordinates and answer with world-space waypoints at cell
centres, so callers never deal with grid indices directly.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List, Mapping, Optional, Tuple, Union

import numpy as np

from .astar import find_grid_path
from .rects import WallRect

LOGGER = logging.getLogger(__name__)

DEFAULT_CELL_SIZE = 50.0

RectLike = Union[WallRect, Mapping[str, float]]


class NavCell(IntEnum):
    """Occupancy state of a navigation cell."""

    WALKABLE = 0
    BLOCKED = 1


@dataclass(frozen=True)
class Waypoint:
    """World-space point along a planned path."""

    x: float
    y: float


def _coerce_rect(rect: RectLike) -> WallRect:
    if isinstance(rect, WallRect):
        return rect
    return WallRect.from_mapping(rect)


def _require_positive(value: float, label: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{label} must be a number, got {value!r}") from None
    if not math.isfinite(number) or number <= 0:
        raise ValueError(f"{label} must be a positive finite number, got {value!r}")
    return number


class NavigationGrid:
    """Walkable/blocked grid answering shortest-path queries.

    Parameters
    ----------
    cell_size:
        Edge length of one navigation cell in world units. Coarser cells make
        searches cheaper at the cost of path precision.
    """

    def __init__(self, cell_size: float = DEFAULT_CELL_SIZE) -> None:
        self.cell_size = _require_positive(cell_size, "cell_size")
        self._grid: Optional[np.ndarray] = None

    @property
    def grid(self) -> Optional[np.ndarray]:
        """Occupancy array indexed ``[row, col]``, or ``None`` before ``build_grid``."""

        return self._grid

    @property
    def width(self) -> int:
        return 0 if self._grid is None else int(self._grid.shape[1])

    @property
    def height(self) -> int:
        return 0 if self._grid is None else int(self._grid.shape[0])

    def build_grid(
        self,
        wall_rects: Iterable[RectLike],
        world_width: float,
        world_height: float,
    ) -> None:
        """Rasterize wall rectangles into a fresh occupancy grid.

        Every cell a rectangle overlaps is blocked; rectangles may span many
        cells and are clipped to the grid bounds. Calling this again replaces
        the previous grid.
        """

        world_width = _require_positive(world_width, "world_width")
        world_height = _require_positive(world_height, "world_height")
        cols = math.ceil(world_width / self.cell_size)
        rows = math.ceil(world_height / self.cell_size)
        grid = np.full((rows, cols), int(NavCell.WALKABLE), dtype=np.int8)

        for raw in wall_rects:
            rect = _coerce_rect(raw)
            start_col = max(math.floor(rect.x / self.cell_size), 0)
            start_row = max(math.floor(rect.y / self.cell_size), 0)
            end_col = min(math.ceil(rect.right / self.cell_size), cols)
            end_row = min(math.ceil(rect.bottom / self.cell_size), rows)
            if start_col < end_col and start_row < end_row:
                grid[start_row:end_row, start_col:end_col] = NavCell.BLOCKED

        self._grid = grid
        LOGGER.info(
            "Built %dx%d navigation grid (%s world units per cell)",
            cols,
            rows,
            self.cell_size,
        )

    def _locate(self, x: float, y: float) -> Optional[Tuple[int, int]]:
        try:
            col = x / self.cell_size
            row = y / self.cell_size
        except OverflowError:
            return None
        if not (math.isfinite(col) and math.isfinite(row)):
            return None
        return math.floor(col), math.floor(row)

    def world_to_cell(self, x: float, y: float) -> Tuple[int, int]:
        """Map a world position to its ``(col, row)`` cell.

        Raises ``ValueError`` for positions with no finite cell index.
        """

        cell = self._locate(x, y)
        if cell is None:
            raise ValueError(f"World position ({x!r}, {y!r}) has no finite cell")
        return cell

    def cell_center(self, col: int, row: int) -> Waypoint:
        """World-space centre of a cell."""

        half = self.cell_size / 2
        return Waypoint(x=col * self.cell_size + half, y=row * self.cell_size + half)

    def in_bounds(self, col: int, row: int) -> bool:
        """True when ``(col, row)`` lies inside the built grid."""

        return 0 <= col < self.width and 0 <= row < self.height

    def is_walkable(self, col: int, row: int) -> bool:
        """True for in-bounds cells that no wall overlaps."""

        if self._grid is None or not self.in_bounds(col, row):
            return False
        return bool(self._grid[row, col] == NavCell.WALKABLE)

    def find_path(
        self,
        start_x: float,
        start_y: float,
        target_x: float,
        target_y: float,
    ) -> Optional[List[Waypoint]]:
        """Plan a path between two world positions.

        Returns the cell-centre waypoints from start to target inclusive, or
        ``None`` when either endpoint is off-grid or blocked, or when the
        target cannot be reached. Callers are expected to fall back to their
        own steering in that case.
        """

        if self._grid is None:
            LOGGER.warning("find_path called before build_grid; returning no path")
            return None

        start = self._locate(start_x, start_y)
        goal = self._locate(target_x, target_y)
        if start is None or goal is None:
            return None
        cells = find_grid_path(self._grid == NavCell.WALKABLE, start, goal)
        if cells is None:
            return None
        return [self.cell_center(col, row) for col, row in cells]
