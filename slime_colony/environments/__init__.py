"""
Environments: drivers that give the core a clock.
"""

from .slime_field import SlimeField, FieldConfig, tick

__all__ = ["SlimeField", "FieldConfig", "tick"]
