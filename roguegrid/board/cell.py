"""Cell and Zone — grid coordinates and their board classification.

Cells are immutable ``(row, col)`` pairs.  Directions elsewhere in the
code are ``(dx, dy)`` where ``dx`` moves along columns and ``dy`` along
rows.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Zone(Enum):
    """Mutually exclusive classification of a grid cell."""

    OUTER_WALL = "outer_wall"
    SAFE = "safe"
    SPAWNABLE = "spawnable"


@dataclass(frozen=True, order=True)
class Cell:
    """A grid coordinate.

    Attributes:
        row: Row index, 0 at the first row.
        col: Column index, 0 at the first column.
    """

    row: int
    col: int

    def step(self, dx: int, dy: int) -> Cell:
        """Return the cell offset by ``dx`` columns and ``dy`` rows."""
        return Cell(row=self.row + dy, col=self.col + dx)
