"""Cellular automaton cavern generation with connectivity validation.

The generator fills a wall/open grid with seeded noise, smooths it into
organic blobs and retries until the open space is both connected and large
enough for gameplay. Every generator owns its own ``numpy`` random generator
so two instances built with the same parameters and seed always agree.
"""
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional

import numpy as np

from .config import DEFAULT_MAX_ATTEMPTS
from .settings import CavernSettings

LOGGER = logging.getLogger(__name__)

_CARDINAL_STEPS = ((1, 0), (-1, 0), (0, 1), (0, -1))


class CellState(IntEnum):
    """State of a single cavern cell."""

    OPEN = 0
    WALL = 1


@dataclass(frozen=True)
class GridPosition:
    """Column/row coordinate of a cavern cell."""

    x: int
    y: int


def make_rng(seed: Optional[int]) -> np.random.Generator:
    """Create a numpy Generator without polluting global RNG state."""

    if seed is None:
        return np.random.default_rng()
    # Accept wide Python ints; fold into uint64 for numpy
    return np.random.default_rng(np.uint64(int(seed) & ((1 << 64) - 1)))


def _require_integer(value: int, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValueError(f"{label} must be an integer, got {value!r}")
    return int(value)


def _require_dimension(value: int, label: str) -> int:
    value = _require_integer(value, label)
    if value < 3:
        raise ValueError(f"{label} must be at least 3, got {value}")
    return int(value)


def _require_unit_interval(value: float, label: str) -> float:
    number = float(value)
    if not 0.0 <= number <= 1.0:
        raise ValueError(f"{label} must lie in [0, 1], got {value!r}")
    return number


def _require_iterations(value: int) -> int:
    number = _require_integer(value, "iterations")
    if number < 0:
        raise ValueError(f"iterations must not be negative, got {value!r}")
    return number


def _require_threshold(value: int, label: str) -> int:
    number = _require_integer(value, label)
    if not 0 <= number <= 9:
        raise ValueError(f"{label} must lie in [0, 9], got {value!r}")
    return number


def _seal_border(grid: np.ndarray) -> None:
    grid[0, :] = CellState.WALL
    grid[-1, :] = CellState.WALL
    grid[:, 0] = CellState.WALL
    grid[:, -1] = CellState.WALL


def wall_neighbor_counts(grid: np.ndarray) -> np.ndarray:
    """Return the Moore-neighbourhood wall count of every cell at once.

    Cells beyond the grid edge count as walls, matching
    :meth:`CavernGenerator.count_wall_neighbors`.
    """

    height, width = grid.shape
    padded = np.pad(grid, 1, mode="constant", constant_values=int(CellState.WALL))
    counts = np.zeros(grid.shape, dtype=np.int16)
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if dx == 0 and dy == 0:
                continue
            counts += padded[1 + dy : 1 + dy + height, 1 + dx : 1 + dx + width]
    return counts


def render_ascii(grid: np.ndarray, *, wall: str = "#", floor: str = ".") -> str:
    """Render a cavern grid as text, one line per row."""

    return "\n".join(
        "".join(wall if cell == CellState.WALL else floor for cell in row) for row in grid
    )


class CavernGenerator:
    """Generate connected, sufficiently open caverns from a seed."""

    def __init__(
        self,
        width: int,
        height: int,
        density: float = CavernSettings.density,
        *,
        iterations: int = CavernSettings.iterations,
        birth_threshold: int = CavernSettings.birth_threshold,
        death_threshold: int = CavernSettings.death_threshold,
        min_open_ratio: float = CavernSettings.min_open_ratio,
    ) -> None:
        self.width = _require_dimension(width, "width")
        self.height = _require_dimension(height, "height")
        self.density = _require_unit_interval(density, "density")
        self.iterations = _require_iterations(iterations)
        self.birth_threshold = _require_threshold(birth_threshold, "birth_threshold")
        self.death_threshold = _require_threshold(death_threshold, "death_threshold")
        self.min_open_ratio = _require_unit_interval(min_open_ratio, "min_open_ratio")
        self._rng = make_rng(None)
        self._grid = np.full((self.height, self.width), int(CellState.WALL), dtype=np.int8)
        self.last_attempts = 0
        self.last_validated = False

    @classmethod
    def from_settings(cls, width: int, height: int, settings: CavernSettings) -> "CavernGenerator":
        """Build a generator from a loaded :class:`CavernSettings` bundle."""

        return cls(
            width,
            height,
            settings.density,
            iterations=settings.iterations,
            birth_threshold=settings.birth_threshold,
            death_threshold=settings.death_threshold,
            min_open_ratio=settings.min_open_ratio,
        )

    @property
    def grid(self) -> np.ndarray:
        """The current grid, indexed ``[y, x]``."""

        return self._grid

    def seed(self, seed: Optional[int]) -> None:
        """Reset the private random generator."""

        self._rng = make_rng(seed)

    def initialize_grid(self, density: Optional[float] = None) -> None:
        """Fill the grid with walled borders and random interior walls."""

        wall_probability = self.density if density is None else _require_unit_interval(density, "density")
        grid = np.full((self.height, self.width), int(CellState.WALL), dtype=np.int8)
        noise = self._rng.random((self.height - 2, self.width - 2))
        grid[1:-1, 1:-1] = np.where(noise < wall_probability, CellState.WALL, CellState.OPEN)
        self._grid = grid

    def count_wall_neighbors(self, x: int, y: int) -> int:
        """Count walls around ``(x, y)``; off-grid neighbours count as walls."""

        count = 0
        for ny in range(y - 1, y + 2):
            for nx in range(x - 1, x + 2):
                if nx == x and ny == y:
                    continue
                if not (0 <= nx < self.width and 0 <= ny < self.height):
                    count += 1
                elif self._grid[ny, nx] == CellState.WALL:
                    count += 1
        return count

    def smooth(
        self,
        iterations: Optional[int] = None,
        birth_threshold: Optional[int] = None,
        death_threshold: Optional[int] = None,
    ) -> None:
        """Apply cellular automaton passes, each reading a snapshot of the last."""

        passes = self.iterations if iterations is None else _require_iterations(iterations)
        birth = (
            self.birth_threshold
            if birth_threshold is None
            else _require_threshold(birth_threshold, "birth_threshold")
        )
        death = (
            self.death_threshold
            if death_threshold is None
            else _require_threshold(death_threshold, "death_threshold")
        )
        for _ in range(passes):
            counts = wall_neighbor_counts(self._grid)
            smoothed = self._grid.copy()
            # Birth wins over death when the thresholds overlap.
            smoothed[counts < death] = CellState.OPEN
            smoothed[counts >= birth] = CellState.WALL
            _seal_border(smoothed)
            self._grid = smoothed

    def open_cell_count(self) -> int:
        """Number of open cells in the current grid."""

        return int(np.count_nonzero(self._grid == CellState.OPEN))

    def open_ratio(self) -> float:
        """Fraction of all cells that are open."""

        return self.open_cell_count() / float(self._grid.size)

    def is_connected(self) -> bool:
        """Flood fill from the first open cell and check every open cell was reached."""

        open_cells = np.argwhere(self._grid == CellState.OPEN)
        if len(open_cells) == 0:
            return False
        start_row, start_col = (int(value) for value in open_cells[0])
        visited = np.zeros(self._grid.shape, dtype=bool)
        visited[start_row, start_col] = True
        queue = deque([(start_col, start_row)])
        reached = 0
        while queue:
            cx, cy = queue.popleft()
            reached += 1
            for dx, dy in _CARDINAL_STEPS:
                nx, ny = cx + dx, cy + dy
                if 0 <= nx < self.width and 0 <= ny < self.height and not visited[ny, nx]:
                    if self._grid[ny, nx] == CellState.OPEN:
                        visited[ny, nx] = True
                        queue.append((nx, ny))
        return reached == len(open_cells)

    def validate_open_space(self, min_open_ratio: Optional[float] = None) -> bool:
        """True when the open fraction meets ``min_open_ratio``."""

        ratio = self.min_open_ratio if min_open_ratio is None else float(min_open_ratio)
        return self.open_ratio() >= ratio

    def get_open_positions(self) -> List[GridPosition]:
        """Every interior open cell in row-major order."""

        interior = self._grid[1:-1, 1:-1]
        return [
            GridPosition(x=int(col) + 1, y=int(row) + 1)
            for row, col in np.argwhere(interior == CellState.OPEN)
        ]

    def generate(self, max_attempts: int = DEFAULT_MAX_ATTEMPTS, seed: Optional[int] = None) -> np.ndarray:
        """Generate a cavern, retrying until one is connected and open enough.

        When no attempt validates within ``max_attempts`` the final attempt is
        returned anyway and ``last_validated`` is left ``False``; callers that
        need a guarantee should check it.
        """

        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts!r}")
        if seed is not None:
            self.seed(seed)

        for attempt in range(1, max_attempts + 1):
            self.initialize_grid()
            self.smooth()
            connected = self.is_connected()
            spacious = self.validate_open_space()
            LOGGER.debug(
                "Cavern attempt %d/%d: connected=%s open_ratio=%.3f",
                attempt,
                max_attempts,
                connected,
                self.open_ratio(),
            )
            if connected and spacious:
                self.last_attempts = attempt
                self.last_validated = True
                LOGGER.info(
                    "Generated %dx%d cavern in %d attempt(s) (seed=%s)",
                    self.width,
                    self.height,
                    attempt,
                    seed,
                )
                return self._grid.copy()

        self.last_attempts = max_attempts
        self.last_validated = False
        LOGGER.warning(
            "Failed to generate valid cavern after %d attempts; returning last attempt",
            max_attempts,
        )
        return self._grid.copy()
