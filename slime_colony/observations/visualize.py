"""
observations/visualize.py

One pixel per cell. Brighter where the colony has passed more often.

The simulation never calls into this module; it only reads the trail
and reports back whether the viewer wants to stop.
"""

from __future__ import annotations
import logging
from typing import Optional, TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from slime_colony.core.trail import Trail
    from slime_colony.environments.slime_field import SlimeField

logger = logging.getLogger(__name__)

# Keys that end an interactive run
QUIT_KEYS = ("escape", "q")


def trail_to_brightness(trail: Trail, max_value: float = 255.0) -> np.ndarray:
    """
    Map intensities to an 8-bit brightness channel.

    Values are clamped to [0, max_value] and scaled so max_value is
    full white. The result is indexed [y, x] for image display.
    """
    if max_value <= 0:
        raise ValueError(f"max_value must be positive, got {max_value}")
    clamped = np.clip(trail.cells, 0.0, max_value)
    return (clamped * (255.0 / max_value)).astype(np.uint8).T


class TrailVisualizer:
    """
    Matplotlib view of a SlimeField's trail.

    Keyboard: Escape or q requests a quit; closing the window does too.
    """

    def __init__(
        self,
        field: SlimeField,
        figsize: tuple = (8, 8),
        max_value: float = 255.0,
        show_agents: bool = False
    ):
        self.field = field
        self.figsize = figsize
        self.max_value = max_value
        self.show_agents = show_agents
        self.quit_requested = False

        # Lazy import matplotlib
        self._plt = None
        self._fig = None
        self._ax = None
        self._image = None

    def _setup_plot(self):
        """Initialize matplotlib figure and input hooks."""
        import matplotlib.pyplot as plt
        self._plt = plt

        self._fig, self._ax = plt.subplots(figsize=self.figsize)
        self._ax.set_axis_off()
        self._fig.patch.set_facecolor('black')
        self._fig.canvas.mpl_connect('key_press_event', self._on_key)
        self._fig.canvas.mpl_connect('close_event', self._on_close)

    def _on_key(self, event) -> None:
        if event.key in QUIT_KEYS:
            logger.info(f"Quit requested via '{event.key}'")
            self.quit_requested = True

    def _on_close(self, event) -> None:
        self.quit_requested = True

    def render(self, pause: float = 0.001) -> None:
        """Draw the current trail."""
        if self._plt is None:
            self._setup_plot()

        brightness = trail_to_brightness(self.field.trail, self.max_value)
        if self._image is None:
            self._image = self._ax.imshow(
                brightness,
                cmap='gray',
                vmin=0,
                vmax=255,
                origin='lower',
                interpolation='nearest'
            )
        else:
            self._image.set_data(brightness)

        if self.show_agents:
            positions = self.field.get_positions()
            # Drop the previous frame's scatter
            for coll in list(self._ax.collections):
                coll.remove()
            if len(positions):
                self._ax.scatter(
                    positions[:, 0], positions[:, 1],
                    s=1, c='#f72585', alpha=0.6
                )

        self._ax.set_title(
            f"Tick: {self.field.time} | Agents: {len(self.field.colony)} | "
            f"Peak: {self.field.trail.max():.0f}",
            color='white', fontsize=11
        )
        self._plt.pause(pause)

    def save_frame(self, path: str) -> None:
        """Save current frame to file."""
        if self._fig is not None:
            self._fig.savefig(path, dpi=150, facecolor=self._fig.get_facecolor())

    def close(self) -> None:
        """Close the visualization."""
        if self._plt is not None:
            self._plt.close(self._fig)


def animate_study(
    field: SlimeField,
    steps: int = 500,
    save_path: Optional[str] = None,
    max_value: float = 255.0
) -> int:
    """
    Step and draw until the step budget runs out or the viewer quits.

    Returns the number of ticks taken.
    """
    viz = TrailVisualizer(field, max_value=max_value)

    try:
        taken = 0
        for _ in range(steps):
            field.step()
            taken += 1
            viz.render()
            if viz.quit_requested:
                break

        if save_path:
            viz.save_frame(save_path)

    finally:
        viz.close()

    return taken
