"""
core/agent.py

A slime knows only three things:
what lies ahead, a little to the left, a little to the right.

Inspired by:
- Physarum polycephalum foraging
- Jones (2010) multi-agent slime mould model
"""

from __future__ import annotations
from dataclasses import dataclass
import math
from typing import TYPE_CHECKING, NamedTuple, Tuple

from .vector import Vector2

if TYPE_CHECKING:
    from .trail import Trail


# Probe offset from the current heading. The sign convention is fixed:
# left is a clockwise turn (-45°), right is counter-clockwise (+45°).
PROBE_ANGLE = math.radians(45)


class Senses(NamedTuple):
    """Trail intensity under each of the three probes."""
    forward: float
    left: float
    right: float


@dataclass(frozen=True)
class Agent:
    """
    A single slime: where it is and where it is going.

    Position is free-ranging; it only lands in [0, N) because motion
    wraps it. Speed is set at spawn and never changes, since steering
    only ever rotates the velocity.
    """
    pos: Vector2
    vel: Vector2

    # ==================== Core Loop ====================

    def move_by(self, time: float, trail: Trail) -> Agent:
        """Euler step of length `time`, wrapped onto the trail's torus."""
        return Agent(pos=trail.wrap_coord(self.pos + self.vel * time), vel=self.vel)

    def heading_vectors(self) -> Tuple[Vector2, Vector2, Vector2]:
        """Candidate velocities: (forward, left, right)."""
        return (
            self.vel,
            self.vel.rotate(-PROBE_ANGLE),
            self.vel.rotate(PROBE_ANGLE),
        )

    def sense(self, trail: Trail) -> Senses:
        """
        Read the trail one velocity-length ahead along each candidate.

        Read-only: sensing never writes to the trail.
        """
        forward, left, right = self.heading_vectors()
        return Senses(
            forward=trail.get_wrapped(self.pos + forward),
            left=trail.get_wrapped(self.pos + left),
            right=trail.get_wrapped(self.pos + right),
        )

    def steer(self, trail: Trail) -> Agent:
        """
        Turn toward the strongest probe.

        Forward wins every tie it is part of; left beats right on a tie
        between the two.
        """
        forward_vel, left_vel, right_vel = self.heading_vectors()
        s = self.sense(trail)

        if s.forward >= s.left:
            if s.forward >= s.right:
                vel = forward_vel
            else:
                vel = right_vel
        else:
            if s.left >= s.right:
                vel = left_vel
            else:
                vel = right_vel

        return Agent(pos=self.pos, vel=vel)

    # ==================== Utilities ====================

    @property
    def speed(self) -> float:
        return self.vel.magnitude()

    @classmethod
    def at(cls, x: float, y: float, vx: float, vy: float) -> Agent:
        """Shorthand constructor from four floats."""
        return cls(pos=Vector2(x, y), vel=Vector2(vx, vy))
