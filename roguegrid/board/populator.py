"""LevelPopulator — places everything on a freshly generated board.

Order of placement for one level:

1. Outer walls on every outer-wall cell and a floor variant for every
   other cell (presentation only).
2. The player at the layout's start cell.
3. Breakable walls, consumables, and enemies, each on a cell drawn from
   the spawn pool.
4. The exit at the layout's fixed exit cell (never drawn).

Counts are decided and checked against the pool before anything is
created, so an over-requested level fails without a partial board.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from roguegrid.board.cell import Cell, Zone
from roguegrid.entities.entity import Role
from roguegrid.entities.registry import EntityRegistry
from roguegrid.simulation.errors import ConfigurationError, ExhaustedPoolError

if TYPE_CHECKING:
    from roguegrid.board.layout import BoardLayout
    from roguegrid.simulation.config import GameConfig
    from roguegrid.simulation.rng import RandomSource

logger = logging.getLogger(__name__)


def enemy_count_for(level: int) -> int:
    """Enemies on a level: ``floor(log2(level))``, never negative."""
    if level < 1:
        return 0
    return level.bit_length() - 1


@dataclass
class Population:
    """Everything placed on one level.

    Attributes:
        registry: Active entities in registration order.
        floor: Floor tile variant for every non-wall cell.
        counts: Number of units placed per role.
    """

    registry: EntityRegistry
    floor: dict[Cell, int] = field(default_factory=dict)
    counts: dict[Role, int] = field(default_factory=dict)


class LevelPopulator:
    """Fills a board layout according to a game config."""

    def __init__(self, config: GameConfig, rng: RandomSource) -> None:
        self.config = config
        self.rng = rng

    def populate(
        self,
        layout: BoardLayout,
        level: int,
        player_food: int,
    ) -> Population:
        """Place all entities for ``level`` on ``layout``.

        Args:
            layout: A fresh layout whose spawn pool has not been drawn from.
            level: 1-based level number; drives the enemy count.
            player_food: Food points the player carries into the level.

        Raises:
            ConfigurationError: If a count range or kind table is invalid.
            ExhaustedPoolError: If the drawn counts exceed the pool.
        """
        wall_count = self._pick_count("wall_count", self.config.wall_count)
        food_count = self._pick_count("food_count", self.config.food_count)
        enemy_count = enemy_count_for(level)
        food_kinds = self._kinds("food_kinds", self.config.food_kinds, food_count)
        enemy_kinds = self._kinds("enemy_kinds", self.config.enemy_kinds, enemy_count)

        requested = wall_count + food_count + enemy_count
        available = len(layout.spawn_pool)
        if requested > available:
            msg = (
                f"level {level} needs {requested} spawn cells "
                f"({wall_count} walls, {food_count} food, {enemy_count} enemies) "
                f"but only {available} are available"
            )
            raise ExhaustedPoolError(msg)

        population = Population(registry=EntityRegistry())
        registry = population.registry

        for cell in layout.cells(Zone.OUTER_WALL):
            registry.spawn(
                Role.OUTER_WALL,
                cell,
                kind="outer_wall",
                variant=self._variant(self.config.outer_wall_variants),
            )
        for zone in (Zone.SAFE, Zone.SPAWNABLE):
            for cell in layout.cells(zone):
                population.floor[cell] = self._variant(self.config.floor_variants)

        registry.spawn(
            Role.PLAYER,
            layout.start_cell,
            kind="player",
            points=player_food,
            damage=self.config.wall_damage,
        )

        for _ in range(wall_count):
            registry.spawn(
                Role.WALL,
                layout.spawn_pool.draw(),
                kind="wall",
                variant=self._variant(self.config.wall_variants),
                points=self.config.wall_hp,
            )
        for _ in range(food_count):
            kind, restore = self._choose(food_kinds)
            registry.spawn(
                Role.CONSUMABLE,
                layout.spawn_pool.draw(),
                kind=kind,
                restore=restore,
            )
        for _ in range(enemy_count):
            kind, damage = self._choose(enemy_kinds)
            registry.spawn(
                Role.ENEMY,
                layout.spawn_pool.draw(),
                kind=kind,
                points=1,
                damage=damage,
            )

        registry.spawn(Role.EXIT, layout.exit_cell, kind="exit")

        population.counts = {
            Role.WALL: wall_count,
            Role.CONSUMABLE: food_count,
            Role.ENEMY: enemy_count,
        }
        logger.info(
            "Level %d populated: %d walls, %d food, %d enemies",
            level,
            wall_count,
            food_count,
            enemy_count,
        )
        return population

    def _pick_count(self, name: str, bounds: tuple[int, int]) -> int:
        lo, hi = bounds
        if lo < 0 or hi < lo:
            msg = f"{name} must be an inclusive range 0 <= min <= max, got {bounds}"
            raise ConfigurationError(msg)
        return self.rng.next_int(lo, hi)

    @staticmethod
    def _kinds(name: str, table: dict[str, int], needed: int) -> list[tuple[str, int]]:
        if needed > 0 and not table:
            msg = f"{name} is empty but {needed} units must be placed"
            raise ConfigurationError(msg)
        return list(table.items())

    def _choose(self, kinds: list[tuple[str, int]]) -> tuple[str, int]:
        return kinds[self.rng.choice_index(len(kinds))]

    def _variant(self, count: int) -> int:
        if count <= 1:
            return 0
        return self.rng.choice_index(count)
