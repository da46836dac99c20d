"""config.py

Immutable per-simulation configuration.

Config precedence:
    explicit keyword > environment variable > constants.py

Env vars:
    HEADLESS        : 1/true => no GUI (default on)
    SIM_TILT        : ground tilt in radians
    OBSTACLE_COUNT  : number of terrain boxes
    OBSTACLE_SIZE   : obstacle size scale (amplitude upper bound is size/1000)
    TERRAIN_SEED    : integer seed for the terrain RNG (unset => fresh entropy)
    MAX_FORCE       : servo force limit
    TELEMETRY       : 1/true => write telemetry.jsonl + summary.json
    TELEMETRY_EVERY : log one line every N steps
    TELEMETRY_OUT   : output directory for telemetry
    TELEMETRY_RUN_ID: subdirectory name for this simulation's traces (unset => pid + random suffix)
"""

from __future__ import annotations

import numbers
import os
from dataclasses import dataclass, replace
from typing import Optional

import constants as c

_TRUE = ("1", "true", "yes", "on")


def _env_flag(name, default):
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in _TRUE


def _env(name, default, cast):
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ValueError(f"{name}={raw!r} is not a valid {cast.__name__}") from e


@dataclass(frozen=True)
class SimulationConfig:
    """Everything fixed at SIMULATION construction time.

    Attributes
    ----------
    tilt
        Ground inclination about the y axis (radians). Obstacles follow it.
    headless
        Run without the GUI viewer and without abort polling.
    obstacle_count
        Number of terrain boxes (0 => flat ground).
    obstacle_size
        Size scale; amplitudes are drawn from [0.002, obstacle_size / 1000].
    seed
        Terrain RNG seed. ``None`` draws fresh entropy, so terrain differs per run.
    """

    tilt: float = c.TILT
    headless: bool = True
    obstacle_count: int = c.OBSTACLE_COUNT
    obstacle_size: int = c.OBSTACLE_SIZE
    seed: Optional[int] = None
    gravity_z: float = c.GRAVITY_Z
    max_force: float = c.MAX_FORCE
    telemetry: bool = False
    telemetry_every: int = 10
    telemetry_out: str = "artifacts/telemetry"
    telemetry_run_id: Optional[str] = None

    def __post_init__(self):
        for name in ("obstacle_count", "obstacle_size", "telemetry_every"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if self.obstacle_count < 0:
            raise ValueError(f"obstacle_count must be >= 0, got {self.obstacle_count}")
        if self.obstacle_size <= 0:
            raise ValueError(f"obstacle_size must be > 0, got {self.obstacle_size}")
        if self.max_force <= 0:
            raise ValueError(f"max_force must be > 0, got {self.max_force}")
        if self.telemetry_every < 1:
            raise ValueError(f"telemetry_every must be >= 1, got {self.telemetry_every}")

    @classmethod
    def from_env(cls, **overrides) -> "SimulationConfig":
        """Build a config from env vars; keyword overrides win over the environment."""
        values = dict(
            tilt=_env("SIM_TILT", c.TILT, float),
            headless=_env_flag("HEADLESS", True),
            obstacle_count=_env("OBSTACLE_COUNT", c.OBSTACLE_COUNT, int),
            obstacle_size=_env("OBSTACLE_SIZE", c.OBSTACLE_SIZE, int),
            seed=_env("TERRAIN_SEED", None, int),
            max_force=_env("MAX_FORCE", c.MAX_FORCE, float),
            telemetry=_env_flag("TELEMETRY", False),
            telemetry_every=_env("TELEMETRY_EVERY", 10, int),
            telemetry_out=os.getenv("TELEMETRY_OUT", "artifacts/telemetry"),
            telemetry_run_id=os.getenv("TELEMETRY_RUN_ID") or None,
        )
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def with_seed(self, seed):
        return replace(self, seed=seed)
