"""Configuration helpers for deterministic cavern generation runs."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Dict, Optional

DEFAULT_MAX_ATTEMPTS = 10


# //1.- Bundle the seed and retry budget that drive one generation run.
@dataclass(frozen=True)
class GenerationConfig:
    """Seed and attempt budget handed to ``CavernGenerator.generate``."""

    seed: Optional[int] = None
    max_attempts: int = DEFAULT_MAX_ATTEMPTS

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    # //2.- Build a config from a mapping, keeping defaults for missing keys.
    @classmethod
    def from_mapping(cls, payload: Optional[Dict[str, int]] = None) -> "GenerationConfig":
        if not payload:
            return cls()
        seed = payload.get("seed")
        return cls(
            seed=int(seed) if seed is not None else None,
            max_attempts=int(payload.get("max_attempts", DEFAULT_MAX_ATTEMPTS)),
        )

    # //3.- Allow overriding the run through environment variables for integration tests.
    @classmethod
    def from_environment(cls, prefix: str = "PEARLDIVE") -> "GenerationConfig":
        seed = os.getenv(f"{prefix}_SEED")
        attempts = os.getenv(f"{prefix}_MAX_ATTEMPTS")
        mapping: Dict[str, int] = {}
        if seed is not None:
            mapping["seed"] = int(seed)
        if attempts is not None:
            mapping["max_attempts"] = int(attempts)
        return cls.from_mapping(mapping)


# //4.- Canonical accessor used by the demo and metrics tooling.
def load_generation_config(
    mapping: Optional[Dict[str, int]] = None,
    *,
    env_prefix: str = "PEARLDIVE",
) -> GenerationConfig:
    if mapping is not None:
        return GenerationConfig.from_mapping(mapping)
    return GenerationConfig.from_environment(prefix=env_prefix)
