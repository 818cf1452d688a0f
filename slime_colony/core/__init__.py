"""
Core components of the slime-colony simulation.

- vector: immutable 2D arithmetic
- trail: the shared pheromone field
- agent: a single slime - sense, steer, move
- colony: the population, advanced in lockstep
"""

from .vector import Vector2
from .trail import Trail, WrapMode
from .agent import Agent, Senses
from .colony import Colony

__all__ = ["Vector2", "Trail", "WrapMode", "Agent", "Senses", "Colony"]
