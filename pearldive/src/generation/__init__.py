"""Generation utilities for pearldive caverns."""
from .config import DEFAULT_MAX_ATTEMPTS, GenerationConfig, load_generation_config
from .settings import CavernSettings, LevelSettings, NavigationSettings, load_level_settings
from .cavern import (
    CavernGenerator,
    CellState,
    GridPosition,
    make_rng,
    render_ascii,
    wall_neighbor_counts,
)
from .metrics import CavernMetrics, MetricsSummary, collect_cavern_metrics, export_cavern_metrics

__all__ = [
    "DEFAULT_MAX_ATTEMPTS",
    "GenerationConfig",
    "load_generation_config",
    "CavernSettings",
    "LevelSettings",
    "NavigationSettings",
    "load_level_settings",
    "CavernGenerator",
    "CellState",
    "GridPosition",
    "make_rng",
    "render_ascii",
    "wall_neighbor_counts",
    "CavernMetrics",
    "MetricsSummary",
    "collect_cavern_metrics",
    "export_cavern_metrics",
]
