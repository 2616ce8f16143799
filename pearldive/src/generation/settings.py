"""Structured loader for cavern and navigation settings."""
from __future__ import annotations

import json
import math
import os
from dataclasses import dataclass


# //1.- Capture the cellular automaton knobs that shape a generated cavern.
@dataclass(frozen=True)
class CavernSettings:
    density: float = 0.40
    iterations: int = 5
    birth_threshold: int = 5
    death_threshold: int = 3
    min_open_ratio: float = 0.50
    tile_size: float = 32.0


# //2.- Record the pathfinding resolution used by AI steering.
@dataclass(frozen=True)
class NavigationSettings:
    cell_size: float = 50.0


# //3.- Aggregate complete level settings for downstream modules.
@dataclass(frozen=True)
class LevelSettings:
    cavern: CavernSettings
    navigation: NavigationSettings


# //4.- Resolve the bundled configuration directory lazily.
def _default_config_directory() -> str:
    base_dir = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
    return os.path.join(base_dir, "config")


# //5.- Load a single JSON configuration file and coerce to dictionary.
def _read_json_config(path: str) -> dict:
    with open(path, "r", encoding="utf-8") as handle:
        return json.load(handle)


# //6.- Reject ratios outside the unit interval.
def _unit_interval(payload: dict, key: str, default: float) -> float:
    value = float(payload.get(key, default))
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{key} must lie in [0, 1], got {value}")
    return value


# //7.- Reject counts that are not whole JSON integers.
def _whole_number(payload: dict, key: str, default: int) -> int:
    value = payload.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    return value


# //8.- Construct cavern settings from on-disk JSON configuration.
def _load_cavern_settings(config_dir: str) -> CavernSettings:
    payload = _read_json_config(os.path.join(config_dir, "cavern.json"))
    defaults = CavernSettings()
    iterations = _whole_number(payload, "iterations", defaults.iterations)
    if iterations < 0:
        raise ValueError("iterations must not be negative")
    birth = _whole_number(payload, "birth_threshold", defaults.birth_threshold)
    death = _whole_number(payload, "death_threshold", defaults.death_threshold)
    for label, threshold in (("birth_threshold", birth), ("death_threshold", death)):
        if not 0 <= threshold <= 9:
            raise ValueError(f"{label} must lie in [0, 9], got {threshold}")
    tile_size = float(payload.get("tile_size", defaults.tile_size))
    if tile_size <= 0:
        raise ValueError("tile_size must be positive")
    return CavernSettings(
        density=_unit_interval(payload, "density", defaults.density),
        iterations=iterations,
        birth_threshold=birth,
        death_threshold=death,
        min_open_ratio=_unit_interval(payload, "min_open_ratio", defaults.min_open_ratio),
        tile_size=tile_size,
    )


# //9.- Parse navigation configuration describing the pathfinding cell size.
def _load_navigation_settings(config_dir: str) -> NavigationSettings:
    payload = _read_json_config(os.path.join(config_dir, "navigation.json"))
    cell_size = float(payload.get("cell_size", NavigationSettings.cell_size))
    if not math.isfinite(cell_size) or cell_size <= 0:
        raise ValueError("cell_size must be a positive finite number")
    return NavigationSettings(cell_size=cell_size)


# //10.- Public helper assembling the full level settings bundle.
def load_level_settings(config_dir: str | None = None) -> LevelSettings:
    directory = config_dir or _default_config_directory()
    cavern = _load_cavern_settings(directory)
    navigation = _load_navigation_settings(directory)
    return LevelSettings(cavern=cavern, navigation=navigation)
