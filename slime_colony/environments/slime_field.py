"""
environments/slime_field.py

A torus, a colony, and a clock.

The core is a pure function of (colony, trail). This module owns the
clock: it drives steer -> move -> deposit in that order, tick after
tick, and keeps the latest state around for whoever is watching.
"""

from __future__ import annotations
from dataclasses import dataclass, fields
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple, Union

import numpy as np
import yaml

from slime_colony.core.colony import Colony
from slime_colony.core.trail import Trail, WrapMode

logger = logging.getLogger(__name__)


def tick(colony: Colony, trail: Trail, dt: float) -> Tuple[Colony, Trail]:
    """
    One full simulation step.

    All agents steer on the incoming trail, then move, then deposit
    into a fresh trail. Neither input is modified.
    """
    colony = colony.steer_all(trail)
    colony = colony.move_all(dt, trail)
    trail = colony.deposit_on(trail)
    return colony, trail


@dataclass
class FieldConfig:
    """Configuration for the slime field."""
    grid_size: int = 200                      # Trail is grid_size x grid_size
    population: int = 1000                    # Fixed number of agents
    dt: float = 1.0                           # Time per tick (agents move at unit speed)
    seed: Optional[int] = None                # Spawn RNG seed; None = fresh entropy
    wrap_mode: WrapMode = WrapMode.SINGLE     # See core.trail.WrapMode

    def __post_init__(self):
        # Accept "single" / "modulo" from YAML and CLI
        self.wrap_mode = WrapMode(self.wrap_mode)

    def validate(self) -> None:
        """Reject configurations the core cannot honour."""
        if self.grid_size <= 0:
            raise ValueError(f"grid_size must be positive, got {self.grid_size}")
        if self.population < 0:
            raise ValueError(f"population must be non-negative, got {self.population}")
        # Spawned agents have unit speed, so |dt| is the per-tick displacement
        if self.wrap_mode is WrapMode.SINGLE and abs(self.dt) >= self.grid_size:
            raise ValueError(
                f"dt={self.dt} moves agents a full grid width per tick; "
                f"single wrapping needs |dt| < {self.grid_size}"
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> FieldConfig:
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown field config keys: {sorted(unknown)}")
        return cls(**data)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> FieldConfig:
        """Load a config from a YAML mapping, optionally under a `field:` key."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config at {path} must be a mapping")
        if "field" in data and isinstance(data["field"], dict):
            data = data["field"]
        return cls.from_dict(data)


class SlimeField:
    """
    Stateful driver around the pure tick.

    Features:
    - Random or explicit initial colony and trail
    - Step-based simulation with a time counter
    - Array views for rendering and analysis
    """

    def __init__(
        self,
        config: Optional[FieldConfig] = None,
        colony: Optional[Colony] = None,
        trail: Optional[Trail] = None
    ):
        self.config = config or FieldConfig()
        self.config.validate()
        self.time = 0

        if trail is None:
            trail = Trail(self.config.grid_size, wrap_mode=self.config.wrap_mode)
        elif trail.size != self.config.grid_size:
            raise ValueError(
                f"Trail size {trail.size} does not match "
                f"grid_size {self.config.grid_size}"
            )
        elif trail.wrap_mode is not self.config.wrap_mode:
            raise ValueError(
                f"Trail wraps in {trail.wrap_mode.value} mode, "
                f"config expects {self.config.wrap_mode.value}"
            )
        self.trail = trail

        if colony is None:
            colony = Colony.spawn_random(
                self.config.population,
                self.config.grid_size,
                rng=np.random.default_rng(self.config.seed),
            )
        elif len(colony) != self.config.population:
            raise ValueError(
                f"Colony has {len(colony)} agents, "
                f"config expects {self.config.population}"
            )
        self.colony = colony

        logger.info(
            f"Field initialized: grid={self.config.grid_size}, "
            f"agents={len(self.colony)}, wrap={self.config.wrap_mode.value}"
        )

    def step(self) -> None:
        """Advance the simulation by one tick."""
        self.colony, self.trail = tick(self.colony, self.trail, self.config.dt)
        self.time += 1
        logger.debug(f"tick {self.time}: total trail={self.trail.total():.1f}")

    def run(
        self,
        steps: int,
        callback: Optional[Callable[[SlimeField], bool]] = None
    ) -> int:
        """
        Run up to `steps` ticks.

        `callback` is invoked after every tick; returning True stops the
        run early. Returns the number of ticks actually taken.
        """
        for taken in range(1, steps + 1):
            self.step()
            if callback is not None and callback(self):
                logger.info(f"Run stopped by callback after {taken} ticks")
                return taken
        return steps

    def get_positions(self) -> np.ndarray:
        return self.colony.positions()

    def get_velocities(self) -> np.ndarray:
        return self.colony.velocities()

    def __repr__(self) -> str:
        return (
            f"SlimeField(agents={len(self.colony)}, "
            f"time={self.time}, "
            f"grid={self.config.grid_size})"
        )
