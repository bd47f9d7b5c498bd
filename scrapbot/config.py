"""Tunable strategy weights and thresholds, optionally loaded from YAML."""

from dataclasses import dataclass, fields
from pathlib import Path

import yaml


@dataclass
class StrategyConfig:
    """weights and thresholds for the per-turn strategy"""

    strategy: str = "simple_economy"
    score_margin: float = 20.0
    harvest_discount: float = 0.5
    max_builds_per_turn: int = 1
    enemy_adjacency_weight: float = 3.0
    build_distance_penalty: float = 1.0
    min_build_yield: int = 20
    move_distance_weight: float = 1.0
    own_tile_bias: float = 1.0
    neutral_tile_bias: float = 0.0
    min_spawn_lifetime: int = 2
    lifetime_horizon: int = 12
    taunt: bool = True
    seed: int = 0

    @classmethod
    def from_yaml(cls, path):
        """keys missing from the file keep their defaults"""
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            msg = f"unknown config keys in {path}: {sorted(unknown)}"
            raise ValueError(msg)
        return cls(**data)
