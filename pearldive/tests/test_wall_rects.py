"""Tests for the cavern-to-navigation wall hand-off."""
from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import numpy as np
import pytest

from pearldive.level import build_navigation_grid, wall_rects_from_grid
from pearldive.src.generation import CavernGenerator, CavernSettings, CellState, LevelSettings, NavigationSettings
from pearldive.src.navigation import NavCell, NavigationGrid, WallRect

ROOT = Path(__file__).resolve().parents[2]


# //1.- Every wall cell becomes one tile-sized rectangle at its world offset.
def test_wall_rects_cover_border_of_empty_cavern():
    generator = CavernGenerator(4, 3)
    generator.initialize_grid(0.0)
    rects = wall_rects_from_grid(generator.grid, 32)
    assert len(rects) == 10
    assert WallRect(0.0, 0.0, 32.0, 32.0) in rects
    assert WallRect(96.0, 64.0, 32.0, 32.0) in rects
    assert WallRect(32.0, 32.0, 32.0, 32.0) not in rects


def test_wall_rects_reject_non_positive_tile():
    with pytest.raises(ValueError):
        wall_rects_from_grid(np.ones((3, 3), dtype=np.int8), 0)


def test_wall_rect_from_mapping_validates_values():
    assert WallRect.from_mapping({"x": 1, "y": 2, "width": 3, "height": 4}) == WallRect(1.0, 2.0, 3.0, 4.0)
    with pytest.raises(ValueError):
        WallRect.from_mapping({"x": 1, "y": 2, "width": float("nan"), "height": 4})


# //2.- At matching resolution the navigation grid mirrors the cavern walls exactly.
def test_generated_cavern_feeds_navigation_grid():
    generator = CavernGenerator(50, 50)
    cavern = generator.generate(10, seed=42)
    tile = 32.0

    navigation = NavigationGrid(tile)
    navigation.build_grid(wall_rects_from_grid(cavern, tile), 50 * tile, 50 * tile)

    assert navigation.grid.shape == cavern.shape
    assert np.array_equal(navigation.grid == NavCell.BLOCKED, cavern == CellState.WALL)

    positions = generator.get_open_positions()
    first, last = positions[0], positions[-1]
    path = navigation.find_path(
        (first.x + 0.5) * tile,
        (first.y + 0.5) * tile,
        (last.x + 0.5) * tile,
        (last.y + 0.5) * tile,
    )
    assert path is not None
    assert len(path) - 1 >= abs(last.x - first.x) + abs(last.y - first.y)
    for waypoint in path:
        col, row = navigation.world_to_cell(waypoint.x, waypoint.y)
        assert cavern[row, col] == CellState.OPEN


def test_build_navigation_grid_covers_whole_level():
    cavern = np.ones((4, 6), dtype=np.int8)
    cavern[1:-1, 1:-1] = CellState.OPEN
    settings = LevelSettings(cavern=CavernSettings(tile_size=20.0), navigation=NavigationSettings(cell_size=40.0))

    navigation = build_navigation_grid(cavern, settings)

    assert navigation.cell_size == pytest.approx(40.0)
    assert navigation.grid.shape == (2, 3)
    # Every coarse cell touches at least one border wall tile.
    assert np.all(navigation.grid == NavCell.BLOCKED)


# //3.- Navigation loads without pulling in the cavern generator.
def test_navigation_grid_import_does_not_load_generation():
    script = (
        "import sys\n"
        "import pearldive.src.navigation.grid\n"
        "loaded = sorted(name for name in sys.modules if name.startswith('pearldive.src.generation'))\n"
        "assert not loaded, loaded\n"
    )
    result = subprocess.run(
        [sys.executable, "-c", script],
        cwd=str(ROOT),
        capture_output=True,
        text=True,
        check=False,
    )
    assert result.returncode == 0, result.stderr
