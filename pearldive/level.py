"""Level assembly glue handing cavern walls to the navigation grid.

Generation and navigation never import each other; this module is the one
place that reads a cavern grid and turns it into world-space wall geometry.
"""
from __future__ import annotations

from typing import List

import numpy as np

from .src.generation import CellState, LevelSettings
from .src.navigation import NavigationGrid, WallRect


# //1.- Convert every wall cell of a cavern grid into a tile-sized world rectangle.
def wall_rects_from_grid(grid: np.ndarray, tile_size: float) -> List[WallRect]:
    if tile_size <= 0:
        raise ValueError("tile_size must be positive")
    size = float(tile_size)
    return [
        WallRect(x=int(col) * size, y=int(row) * size, width=size, height=size)
        for row, col in np.argwhere(grid == CellState.WALL)
    ]


# //2.- Rasterize a cavern's walls into a navigation grid covering the whole level.
def build_navigation_grid(grid: np.ndarray, settings: LevelSettings) -> NavigationGrid:
    tile = settings.cavern.tile_size
    rows, cols = grid.shape
    navigation = NavigationGrid(settings.navigation.cell_size)
    navigation.build_grid(wall_rects_from_grid(grid, tile), cols * tile, rows * tile)
    return navigation
