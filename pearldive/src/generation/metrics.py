"""Metrics export for checking generated cavern statistics across seeds."""
from __future__ import annotations

import json
import time
from dataclasses import dataclass
from statistics import mean
from typing import List, Sequence

from .cavern import CavernGenerator
from .config import DEFAULT_MAX_ATTEMPTS
from .settings import CavernSettings


# //1.- Encapsulate per-seed metrics derived from one generation run.
@dataclass(frozen=True)
class CavernMetrics:
    seed: int
    attempts: int
    validated: bool
    connected: bool
    open_ratio: float
    open_cells: int
    elapsed_ms: float


# //2.- Aggregate statistics for a collection of seeds plus a compliance summary.
@dataclass(frozen=True)
class MetricsSummary:
    metrics: Sequence[CavernMetrics]
    all_validated: bool
    mean_open_ratio: float


# //3.- Generate a single cavern and measure the outcome.
def _measure_seed(
    seed: int,
    *,
    width: int,
    height: int,
    settings: CavernSettings,
    max_attempts: int,
) -> CavernMetrics:
    generator = CavernGenerator.from_settings(width, height, settings)
    started = time.perf_counter()
    generator.generate(max_attempts, seed)
    elapsed_ms = (time.perf_counter() - started) * 1000.0
    return CavernMetrics(
        seed=int(seed),
        attempts=generator.last_attempts,
        validated=generator.last_validated,
        connected=generator.is_connected(),
        open_ratio=generator.open_ratio(),
        open_cells=len(generator.get_open_positions()),
        elapsed_ms=elapsed_ms,
    )


# //4.- Orchestrate generation across multiple seeds collecting metrics.
def collect_cavern_metrics(
    *,
    seeds: Sequence[int],
    settings: CavernSettings,
    width: int = 50,
    height: int = 50,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> MetricsSummary:
    if not seeds:
        raise ValueError("seeds must not be empty")
    metrics: List[CavernMetrics] = [
        _measure_seed(seed, width=width, height=height, settings=settings, max_attempts=max_attempts)
        for seed in seeds
    ]
    return MetricsSummary(
        metrics=tuple(metrics),
        all_validated=all(metric.validated for metric in metrics),
        mean_open_ratio=mean(metric.open_ratio for metric in metrics),
    )


# //5.- Export the metrics summary to JSON for CI validation or dashboards.
def export_cavern_metrics(
    summary: MetricsSummary,
    *,
    filepath: str,
) -> None:
    payload = {
        "all_validated": summary.all_validated,
        "mean_open_ratio": summary.mean_open_ratio,
        "metrics": [
            {
                "seed": metric.seed,
                "attempts": metric.attempts,
                "validated": metric.validated,
                "connected": metric.connected,
                "open_ratio": metric.open_ratio,
                "open_cells": metric.open_cells,
                "elapsed_ms": metric.elapsed_ms,
            }
            for metric in summary.metrics
        ],
    }
    with open(filepath, "w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2)
