"""
core/trail.py

The field remembers where the colony has been.

A square grid of intensities on a torus. Agents read it through
wrapped lookups and the colony writes it through deposits; the field
itself never decays. Every tick produces a new field, so the one an
agent reads from is never touched while the tick is in progress.

Inspired by:
- Physarum polycephalum trail networks
- Ant pheromone fields
"""

from __future__ import annotations
from enum import Enum
import math
from typing import Iterable, Optional, Tuple

import numpy as np

from .vector import Vector2


class WrapMode(Enum):
    """How coordinates outside [0, N) are brought back onto the grid."""

    # (v + N) remainder N. Positions below -N are left negative.
    SINGLE = "single"
    # True modulo, correct for any magnitude.
    MODULO = "modulo"


class Trail:
    """
    Square N x N pheromone field with toroidal addressing.

    Cells are float32 and indexed as cells[x, y] on both the read
    (get_wrapped) and the write (set, with_deposits) paths.
    """

    def __init__(
        self,
        size: int,
        cells: Optional[np.ndarray] = None,
        wrap_mode: WrapMode = WrapMode.SINGLE
    ):
        if int(size) != size or size <= 0:
            raise ValueError(f"Trail size must be a positive integer, got {size}")
        self.size = int(size)
        self.wrap_mode = WrapMode(wrap_mode)

        if cells is None:
            self._cells = np.zeros((self.size, self.size), dtype=np.float32)
        else:
            arr = np.array(cells, dtype=np.float32)
            if arr.shape != (self.size, self.size):
                raise ValueError(
                    f"Trail cells must have shape {(self.size, self.size)}, "
                    f"got {arr.shape}"
                )
            self._cells = arr

    # ==================== Construction ====================

    @classmethod
    def zeros(cls, size: int, wrap_mode: WrapMode = WrapMode.SINGLE) -> Trail:
        return cls(size, wrap_mode=wrap_mode)

    @classmethod
    def from_array(cls, cells, wrap_mode: WrapMode = WrapMode.SINGLE) -> Trail:
        """Build a trail from a square array-like, inferring N from its shape."""
        arr = np.asarray(cells)
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
            raise ValueError(f"Trail cells must be square, got shape {arr.shape}")
        return cls(arr.shape[0], arr, wrap_mode=wrap_mode)

    def copy(self) -> Trail:
        return Trail(self.size, self._cells.copy(), wrap_mode=self.wrap_mode)

    # ==================== Addressing ====================

    def _wrap(self, v: float) -> float:
        n = self.size
        if 0 <= v < n:
            return v
        if self.wrap_mode is WrapMode.SINGLE:
            # (v + N) remainder N; stays negative below -N
            wrapped = math.fmod(v + n, n)
        else:
            wrapped = v % n
        # Tiny negatives round up to exactly n
        return 0.0 if wrapped == n else wrapped

    def wrap_coord(self, pos: Vector2) -> Vector2:
        """
        Bring a free-ranging position back onto the torus.

        In SINGLE mode a position more than one grid width below zero
        comes back negative; everything else lands in [0, N).
        """
        return Vector2(self._wrap(pos.x), self._wrap(pos.y))

    def cell_index(self, pos: Vector2) -> Tuple[int, int]:
        """
        Integer cell holding `pos`: floor each axis, then wrap.

        Always a cell on the grid, for any magnitude in either mode.
        """
        return (self._wrap_index(pos.x), self._wrap_index(pos.y))

    def _wrap_index(self, v: float) -> int:
        i = int(self._wrap(math.floor(v)))
        # SINGLE leaves indices below -N negative; numpy must never see them
        return i % self.size

    def get_wrapped(self, pos: Vector2) -> float:
        """Intensity of the cell under `pos`. A position at x=2.9 reads x=2."""
        x, y = self.cell_index(pos)
        return float(self._cells[x, y])

    # ==================== Direct access ====================

    def get(self, x: int, y: int) -> float:
        self._check_index(x, y)
        return float(self._cells[x, y])

    def set(self, x: int, y: int, val: float) -> None:
        """
        Direct write. Callers must pre-wrap; used for fixtures and seeding.

        Do not call on a trail that agents are sensing this tick.
        """
        self._check_index(x, y)
        self._cells[x, y] = val

    def _check_index(self, x: int, y: int) -> None:
        if not (0 <= x < self.size and 0 <= y < self.size):
            raise IndexError(
                f"Cell ({x}, {y}) outside trail of size {self.size}"
            )

    # ==================== Deposit ====================

    def with_deposits(
        self,
        cells: Iterable[Tuple[int, int]],
        amount: float = 1.0
    ) -> Trail:
        """
        New trail equal to this one plus `amount` at every listed cell.

        Repeated cells accumulate. The increments are summed in a single
        reduction, so the order of `cells` never changes the result.
        """
        result = self.copy()
        index = np.asarray(list(cells), dtype=np.intp).reshape(-1, 2)
        if len(index):
            if index.min() < 0 or index.max() >= self.size:
                raise IndexError(
                    f"Deposit cells outside trail of size {self.size}"
                )
            np.add.at(result._cells, (index[:, 0], index[:, 1]), np.float32(amount))
        return result

    # ==================== Views ====================

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the grid, shape (N, N), indexed [x, y]."""
        view = self._cells.view()
        view.flags.writeable = False
        return view

    def total(self) -> float:
        """Sum of all intensities (for monitoring)."""
        return float(self._cells.sum(dtype=np.float64))

    def max(self) -> float:
        return float(self._cells.max())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Trail):
            return NotImplemented
        return self.size == other.size and np.array_equal(self._cells, other._cells)

    __hash__ = None

    def __repr__(self) -> str:
        return (
            f"Trail(size={self.size}, "
            f"total={self.total():.2f}, "
            f"wrap={self.wrap_mode.value})"
        )
