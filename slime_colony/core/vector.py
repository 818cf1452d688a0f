"""
core/vector.py

Two numbers that travel together.

Every operation returns a new value; nothing here is ever modified.
"""

from __future__ import annotations
from dataclasses import dataclass
import math


@dataclass(frozen=True)
class Vector2:
    """Immutable 2D float vector."""
    x: float
    y: float

    def __add__(self, other: Vector2) -> Vector2:
        return Vector2(self.x + other.x, self.y + other.y)

    def __mul__(self, k: float) -> Vector2:
        return Vector2(self.x * k, self.y * k)

    __rmul__ = __mul__

    def rotate(self, theta: float) -> Vector2:
        """
        Rotate by theta radians.

        Positive theta is counter-clockwise in the (x, y) convention
        used for sensing.
        """
        c = math.cos(theta)
        s = math.sin(theta)
        return Vector2(self.x * c - self.y * s, self.x * s + self.y * c)

    def magnitude(self) -> float:
        return math.hypot(self.x, self.y)

    @classmethod
    def from_heading(cls, degrees: float) -> Vector2:
        """Unit vector pointing along `degrees`, measured from +x."""
        return cls(1.0, 0.0).rotate(math.radians(degrees))

    def __iter__(self):
        yield self.x
        yield self.y

    def __repr__(self) -> str:
        return f"Vector2({self.x:.3f}, {self.y:.3f})"


def add(a: Vector2, b: Vector2) -> Vector2:
    return a + b


def scale(v: Vector2, k: float) -> Vector2:
    return v * k


def rotate(v: Vector2, theta: float) -> Vector2:
    return v.rotate(theta)
