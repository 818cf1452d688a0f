"""
Observations: watching the trail form.
"""

from .visualize import TrailVisualizer, animate_study, trail_to_brightness

__all__ = ["TrailVisualizer", "animate_study", "trail_to_brightness"]
