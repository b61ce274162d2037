# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Centralized configuration: simulation tunables and environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

SEED_ENV = "HOOPS_SEED"
LOG_LEVEL_ENV = "HOOPS_LOG_LEVEL"


@dataclass(frozen=True)
class SimulationConfig:
    """Tunable constants for the game simulator.

    Times are in simulated seconds.
    """
    game_length: int = 40 * 60
    shot_clock: int = 30
    offensive_rebound_shot_clock: int = 20
    pass_seconds: int = 3
    action_seconds: int = 2
    inbound_seconds: int = 2
    # Opening sequence: 0..max_opening_dribbles forced dribbles, then a
    # forced pass when fewer than opening_pass_threshold were taken.
    max_opening_dribbles: int = 5
    opening_pass_threshold: int = 3
    contest_stddev: float = 0.2
    shoot_baseline: float = 0.3
    three_point_factor: float = 2 / 3
    opening_steal_divisor: float = 5000.0
    steal_divisor: float = 1000.0
    assist_chance: float = 0.1
    block_chance: float = 0.05
    max_possession_events: int = 1000


DEFAULT_CONFIG = SimulationConfig()


def get_seed() -> int | None:
    """Return the seed from HOOPS_SEED, or None if not set."""
    raw = os.environ.get(SEED_ENV, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{SEED_ENV} must be an integer, got {raw!r}") from None


def get_log_level() -> str:
    """Return the CLI log level name (default WARNING)."""
    return os.environ.get(LOG_LEVEL_ENV, "WARNING").strip().upper() or "WARNING"
