"""A* search over a 4-connected occupancy grid."""
from __future__ import annotations

import heapq
from typing import Dict, List, Optional, Set, Tuple

import numpy as np

Cell = Tuple[int, int]

_CARDINAL_STEPS = ((1, 0), (-1, 0), (0, 1), (0, -1))


def manhattan_distance(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def _reconstruct(came_from: Dict[Cell, Cell], current: Cell) -> List[Cell]:
    path: List[Cell] = [current]
    while current in came_from:
        current = came_from[current]
        path.append(current)
    path.reverse()
    return path


def find_grid_path(walkable: np.ndarray, start: Cell, goal: Cell) -> Optional[List[Cell]]:
    """Shortest 4-connected path between two ``(col, row)`` cells.

    ``walkable`` is a boolean array indexed ``[row, col]``. Every step costs
    one, so the Manhattan heuristic keeps the result optimal. Frontier ties on
    ``f`` go to the cell nearer the goal, then to the earlier insertion.
    Returns ``None`` when an endpoint is off-grid, blocked or unreachable.
    """

    rows, cols = walkable.shape

    def passable(cell: Cell) -> bool:
        col, row = cell
        return 0 <= col < cols and 0 <= row < rows and bool(walkable[row, col])

    if not passable(start) or not passable(goal):
        return None

    start_h = manhattan_distance(start, goal)
    open_heap: List[Tuple[int, int, int, Cell]] = [(start_h, start_h, 0, start)]
    came_from: Dict[Cell, Cell] = {}
    g_score: Dict[Cell, int] = {start: 0}
    closed: Set[Cell] = set()
    counter = 1

    while open_heap:
        _, _, _, current = heapq.heappop(open_heap)
        if current in closed:
            # Stale entry left behind by a later relaxation.
            continue
        if current == goal:
            return _reconstruct(came_from, current)
        closed.add(current)

        tentative = g_score[current] + 1
        for dx, dy in _CARDINAL_STEPS:
            neighbor = (current[0] + dx, current[1] + dy)
            if neighbor in closed or not passable(neighbor):
                continue
            if tentative < g_score.get(neighbor, tentative + 1):
                came_from[neighbor] = current
                g_score[neighbor] = tentative
                h = manhattan_distance(neighbor, goal)
                heapq.heappush(open_heap, (tentative + h, h, counter, neighbor))
                counter += 1

    return None
