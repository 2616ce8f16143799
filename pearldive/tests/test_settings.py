"""Tests for level settings and run configuration loading."""
from __future__ import annotations

import json

import pytest

from pearldive.src.generation import (
    GenerationConfig,
    load_generation_config,
    load_level_settings,
)


def _write_config(directory, cavern=None, navigation=None):
    (directory / "cavern.json").write_text(json.dumps(cavern or {}), encoding="utf-8")
    (directory / "navigation.json").write_text(json.dumps(navigation or {}), encoding="utf-8")


# //1.- The bundled JSON files carry the tuned cavern defaults.
def test_load_level_settings_uses_bundled_defaults():
    settings = load_level_settings()
    assert settings.cavern.density == pytest.approx(0.40)
    assert settings.cavern.iterations == 5
    assert settings.cavern.birth_threshold == 5
    assert settings.cavern.death_threshold == 3
    assert settings.cavern.min_open_ratio == pytest.approx(0.50)
    assert settings.cavern.tile_size == pytest.approx(32.0)
    assert settings.navigation.cell_size == pytest.approx(50.0)


def test_load_level_settings_from_custom_directory(tmp_path):
    _write_config(tmp_path, cavern={"density": 0.3, "iterations": 2}, navigation={"cell_size": 16})
    settings = load_level_settings(str(tmp_path))
    assert settings.cavern.density == pytest.approx(0.3)
    assert settings.cavern.iterations == 2
    assert settings.cavern.birth_threshold == 5
    assert settings.navigation.cell_size == pytest.approx(16.0)


@pytest.mark.parametrize(
    "cavern,navigation",
    [
        ({"density": 1.4}, {}),
        ({"min_open_ratio": -0.2}, {}),
        ({"iterations": -1}, {}),
        ({"birth_threshold": 12}, {}),
        ({"iterations": 2.5}, {}),
        ({"death_threshold": 2.9}, {}),
        ({"tile_size": 0}, {}),
        ({}, {"cell_size": 0}),
    ],
)
def test_load_level_settings_rejects_out_of_range_values(tmp_path, cavern, navigation):
    _write_config(tmp_path, cavern=cavern, navigation=navigation)
    with pytest.raises(ValueError):
        load_level_settings(str(tmp_path))


# //2.- Run configuration comes from a mapping or from environment variables.
def test_generation_config_from_mapping():
    config = load_generation_config({"seed": 42, "max_attempts": 25})
    assert config == GenerationConfig(seed=42, max_attempts=25)
    assert load_generation_config({}) == GenerationConfig()


def test_generation_config_from_environment(monkeypatch):
    monkeypatch.setenv("PEARLDIVE_SEED", "7")
    monkeypatch.setenv("PEARLDIVE_MAX_ATTEMPTS", "3")
    config = load_generation_config()
    assert config.seed == 7
    assert config.max_attempts == 3


def test_generation_config_defaults_without_environment(monkeypatch):
    monkeypatch.delenv("PEARLDIVE_SEED", raising=False)
    monkeypatch.delenv("PEARLDIVE_MAX_ATTEMPTS", raising=False)
    config = load_generation_config()
    assert config.seed is None
    assert config.max_attempts == 10


def test_generation_config_rejects_empty_budget():
    with pytest.raises(ValueError):
        GenerationConfig(max_attempts=0)
