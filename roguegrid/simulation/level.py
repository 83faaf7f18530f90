"""Level — the state of one board from setup until exit or game over."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from roguegrid.entities.entity import Entity, Role

if TYPE_CHECKING:
    from roguegrid.board.cell import Cell
    from roguegrid.board.layout import BoardLayout
    from roguegrid.entities.registry import EntityRegistry
    from roguegrid.simulation.scheduler import TurnScheduler, TurnState


@dataclass
class Level:
    """One populated board.

    Attributes:
        number: 1-based level number ("day").
        layout: Zone classification and spawn pool.
        registry: Active entities.
        player: The controlled entity.
        scheduler: Turn state machine for this level.
        floor: Floor tile variants, for presentation.
        starting_food: Player food when the level began.
        completed: True once the player reached the exit.
        game_over: True once the player's food ran out.
    """

    number: int
    layout: BoardLayout
    registry: EntityRegistry
    player: Entity
    scheduler: TurnScheduler
    floor: dict[Cell, int] = field(default_factory=dict, repr=False)
    starting_food: int = 0
    completed: bool = False
    game_over: bool = False

    @property
    def rows(self) -> int:
        return self.layout.rows

    @property
    def cols(self) -> int:
        return self.layout.cols

    @property
    def outer_wall_offset(self) -> int:
        return self.layout.outer_wall_offset

    @property
    def safe_zone_offset(self) -> int:
        return self.layout.safe_zone_offset

    @property
    def turn_state(self) -> TurnState:
        return self.scheduler.state

    @property
    def food(self) -> int:
        """The player's food points."""
        return self.player.points

    @property
    def enemies(self) -> list[Entity]:
        return self.registry.of_role(Role.ENEMY)

    @property
    def exit(self) -> Entity:
        return self.registry.of_role(Role.EXIT)[0]
