"""
core/colony.py

Many slimes, one rule, no conversation.

Agents never see each other. They meet only through the trail:
every agent reads the same snapshot, and the colony folds its
deposits into the next one.
"""

from __future__ import annotations
from typing import Iterable, Iterator, Optional, Union

import numpy as np

from .agent import Agent
from .trail import Trail
from .vector import Vector2

# Intensity left behind by one agent per tick
DEPOSIT_AMOUNT = 1.0


class Colony:
    """
    A fixed population of agents advanced in lockstep.

    The population is an immutable tuple; every transformation returns a
    new Colony of the same size. Per-agent passes are independent of one
    another and of agent order.
    """

    def __init__(self, agents: Iterable[Agent], size: Optional[int] = None):
        self.agents = tuple(agents)
        if size is not None and len(self.agents) != size:
            raise ValueError(
                f"Colony expects {size} agents, got {len(self.agents)}"
            )

    @classmethod
    def spawn_random(
        cls,
        count: int,
        bound: float,
        rng: Union[np.random.Generator, int, None] = None
    ) -> Colony:
        """
        Scatter `count` unit-speed agents uniformly over [0, bound)^2.

        Headings are uniform in [0°, 360°). `rng` may be a numpy
        Generator or a seed.
        """
        if count < 0:
            raise ValueError(f"Colony size must be non-negative, got {count}")
        if not isinstance(rng, np.random.Generator):
            rng = np.random.default_rng(rng)

        positions = rng.uniform(0.0, bound, size=(count, 2))
        headings = rng.uniform(0.0, 360.0, size=count)

        agents = [
            Agent(
                pos=Vector2(float(px), float(py)),
                vel=Vector2.from_heading(float(h)),
            )
            for (px, py), h in zip(positions, headings)
        ]
        return cls(agents, size=count)

    # ==================== Tick Phases ====================

    def steer_all(self, trail: Trail) -> Colony:
        """Every agent steers against the same, unmodified trail."""
        return Colony((a.steer(trail) for a in self.agents), size=len(self))

    def move_all(self, time: float, trail: Trail) -> Colony:
        return Colony((a.move_by(time, trail) for a in self.agents), size=len(self))

    def deposit_on(self, trail: Trail) -> Trail:
        """
        New trail with DEPOSIT_AMOUNT added under every agent.

        Positions are wrapped through the trail's own cell lookup, so an
        agent that has not been moved yet still lands on a valid cell.
        """
        return trail.with_deposits(
            (trail.cell_index(a.pos) for a in self.agents),
            amount=DEPOSIT_AMOUNT,
        )

    # ==================== Views ====================

    def positions(self) -> np.ndarray:
        """Positions of all agents as an (M, 2) array."""
        return np.array([[a.pos.x, a.pos.y] for a in self.agents]).reshape(-1, 2)

    def velocities(self) -> np.ndarray:
        """Velocities of all agents as an (M, 2) array."""
        return np.array([[a.vel.x, a.vel.y] for a in self.agents]).reshape(-1, 2)

    def __len__(self) -> int:
        return len(self.agents)

    def __iter__(self) -> Iterator[Agent]:
        return iter(self.agents)

    def __getitem__(self, index: int) -> Agent:
        return self.agents[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Colony):
            return NotImplemented
        return self.agents == other.agents

    def __hash__(self) -> int:
        return hash(self.agents)

    def __repr__(self) -> str:
        return f"Colony(agents={len(self.agents)})"
