"""Navigation utilities for pursuit steering inside pearldive caverns."""
from .astar import find_grid_path, manhattan_distance
from .grid import DEFAULT_CELL_SIZE, NavCell, NavigationGrid, Waypoint
from .rects import WallRect

__all__ = [
    "find_grid_path",
    "manhattan_distance",
    "DEFAULT_CELL_SIZE",
    "NavCell",
    "NavigationGrid",
    "Waypoint",
    "WallRect",
]
