"""BoardLayout — zone partitioning and the spawn pool.

The board is split into three concentric zones:

- **Outer wall**: every cell within ``outer_wall_offset`` of an edge.
- **Spawnable**: cells strictly inside both offsets from every edge.
- **Safe**: the ring left between the two.

The layout seeds a ``SpawnPool`` from the spawnable cells, less the
player's start cell.  Population draws from the pool without
replacement, so no two placed objects ever share a drawn cell.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from roguegrid.board.cell import Cell, Zone
from roguegrid.simulation.errors import ConfigurationError, ExhaustedPoolError

if TYPE_CHECKING:
    from roguegrid.simulation.rng import RandomSource

logger = logging.getLogger(__name__)


class SpawnPool:
    """Unused spawnable cells, drawn uniformly without replacement."""

    __slots__ = ("_cells", "_rng")

    def __init__(self, cells: list[Cell], rng: RandomSource) -> None:
        self._cells = list(cells)
        self._rng = rng

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, cell: object) -> bool:
        return cell in self._cells

    def draw(self) -> Cell:
        """Remove and return one cell chosen uniformly at random.

        Raises:
            ExhaustedPoolError: If the pool is empty.
        """
        if not self._cells:
            msg = "spawn pool is empty"
            raise ExhaustedPoolError(msg)
        index = self._rng.choice_index(len(self._cells))
        return self._cells.pop(index)


@dataclass
class BoardLayout:
    """Zone classification for a ``rows`` x ``cols`` board.

    Attributes:
        rows: Number of grid rows.
        cols: Number of grid columns.
        rng: Random source used by the spawn pool.
        outer_wall_offset: Thickness of the outer wall ring.
        safe_zone_offset: Thickness of the safe ring inside the walls.
        zones: Cells of each zone in row-major order.
        spawn_pool: Remaining spawnable cells for this level, never
            including ``start_cell``.
    """

    rows: int
    cols: int
    rng: RandomSource = field(repr=False)
    outer_wall_offset: int = 1
    safe_zone_offset: int = 1
    zones: dict[Zone, list[Cell]] = field(init=False, repr=False)
    spawn_pool: SpawnPool = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Validate the offsets, classify every cell, seed the pool."""
        self._validate()
        self.zones = {zone: [] for zone in Zone}
        for row in range(self.rows):
            for col in range(self.cols):
                cell = Cell(row=row, col=col)
                self.zones[self.zone_of(cell)].append(cell)
        # With no safe ring the start cell is spawnable; keep it clear.
        start = self.start_cell
        self.spawn_pool = SpawnPool(
            [c for c in self.zones[Zone.SPAWNABLE] if c != start],
            self.rng,
        )
        logger.debug(
            "Board %dx%d: %d outer wall, %d safe, %d spawnable cells",
            self.rows,
            self.cols,
            len(self.zones[Zone.OUTER_WALL]),
            len(self.zones[Zone.SAFE]),
            len(self.zones[Zone.SPAWNABLE]),
        )

    def _validate(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            msg = f"board must have positive size, got {self.rows}x{self.cols}"
            raise ConfigurationError(msg)
        if self.outer_wall_offset < 0 or self.safe_zone_offset < 0:
            msg = (
                "offsets must be >= 0, got "
                f"outer={self.outer_wall_offset} safe={self.safe_zone_offset}"
            )
            raise ConfigurationError(msg)
        inset = 2 * (self.outer_wall_offset + self.safe_zone_offset)
        if inset >= min(self.rows, self.cols):
            msg = (
                f"offsets outer={self.outer_wall_offset} "
                f"safe={self.safe_zone_offset} leave no spawnable cells "
                f"on a {self.rows}x{self.cols} board"
            )
            raise ConfigurationError(msg)

    @property
    def inset(self) -> int:
        """Distance from an edge to the first spawnable cell."""
        return self.outer_wall_offset + self.safe_zone_offset

    def in_bounds(self, cell: Cell) -> bool:
        return 0 <= cell.row < self.rows and 0 <= cell.col < self.cols

    def zone_of(self, cell: Cell) -> Zone:
        """Classify a single cell.

        Raises:
            IndexError: If the cell lies outside the board.
        """
        if not self.in_bounds(cell):
            msg = f"{cell} out of bounds for {self.rows}x{self.cols}"
            raise IndexError(msg)
        wall = self.outer_wall_offset
        if (
            cell.row < wall
            or cell.row >= self.rows - wall
            or cell.col < wall
            or cell.col >= self.cols - wall
        ):
            return Zone.OUTER_WALL
        inset = self.inset
        if (
            inset <= cell.row < self.rows - inset
            and inset <= cell.col < self.cols - inset
        ):
            return Zone.SPAWNABLE
        return Zone.SAFE

    def cells(self, zone: Zone) -> list[Cell]:
        """Return a copy of the cells in ``zone``, row-major."""
        return list(self.zones[zone])

    @property
    def exit_cell(self) -> Cell:
        """The far corner of the spawnable area, where the exit sits."""
        return Cell(
            row=self.rows - self.inset - 1,
            col=self.cols - self.inset - 1,
        )

    @property
    def start_cell(self) -> Cell:
        """The near inside corner of the wall ring, where the player starts."""
        return Cell(row=self.outer_wall_offset, col=self.outer_wall_offset)
