"""GameSession — the simulation context shared by every rule.

A session owns the random source, the event sink, the scheduler, and
the current level.  It is the only entry point for the presentation and
input layers:

- ``setup_level`` builds and populates a board.
- ``request_controlled_move`` performs the player's single move.
- ``advance_autonomous_phase`` lets every enemy act once.
- ``is_game_over`` reports the terminal state.

The player's food carries over from one level to the next.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from roguegrid.board.layout import BoardLayout
from roguegrid.board.populator import LevelPopulator
from roguegrid.entities.combat import CombatState
from roguegrid.entities.entity import Entity, Role
from roguegrid.rules.interactions import (
    Interaction,
    InteractionDispatcher,
    InteractionKind,
)
from roguegrid.rules.movement import (
    MovementResolver,
    chase_direction,
    take_cadence_turn,
)
from roguegrid.simulation.config import GameConfig
from roguegrid.simulation.errors import InvalidPhaseTransition
from roguegrid.simulation.events import EventSink, GameOver, LevelCompleted, NullSink
from roguegrid.simulation.level import Level
from roguegrid.simulation.rng import RandomSource
from roguegrid.simulation.scheduler import TurnScheduler

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveOutcome:
    """What one move opportunity did.

    Attributes:
        entity_id: The entity offered the opportunity.
        moved: True if it changed cell.
        blocked: True if something denied the move.
        interactions: Reactions that fired, in order.
        skipped: True if the entity declined per its cadence.
    """

    entity_id: int
    moved: bool = False
    blocked: bool = False
    interactions: tuple[Interaction, ...] = ()
    skipped: bool = False

    @property
    def interaction(self) -> Interaction | None:
        """The first interaction, if any."""
        return self.interactions[0] if self.interactions else None


def input_to_direction(horizontal: int, vertical: int) -> tuple[int, int]:
    """Map raw axis input to a single-axis step.

    Horizontal input wins; the vertical axis is dropped whenever the
    horizontal one is non-zero.
    """
    dx = max(-1, min(1, horizontal))
    dy = 0 if dx != 0 else max(-1, min(1, vertical))
    return dx, dy


class GameSession:
    """Runs levels one after another for a single player.

    Attributes:
        config: Active game configuration.
        rng: Shared random source for generation and population.
        sink: Receiver for simulation events.
        scheduler: Turn state machine, reused across levels.
        level: The current level, or None before the first setup.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        *,
        rng: RandomSource | None = None,
        sink: EventSink | None = None,
        wait: Callable[[float], None] | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.rng = rng if rng is not None else RandomSource(self.config.seed)
        self.sink: EventSink = sink if sink is not None else NullSink()
        self.scheduler = TurnScheduler(
            turn_delay=self.config.turn_delay,
            move_time=self.config.enemy_move_time,
            wait=wait,
        )
        self.level: Level | None = None
        self._carried_food = self.config.starting_food
        self._combat: CombatState | None = None
        self._resolver: MovementResolver | None = None
        self._dispatcher: InteractionDispatcher | None = None

    # -- Level lifecycle --

    def setup_level(
        self,
        level_number: int,
        config: GameConfig | None = None,
    ) -> tuple[Level, list[Entity]]:
        """Generate and populate a level, then start the player's turn.

        Args:
            level_number: 1-based level number.
            config: Replaces the session config once the level is built.

        Returns:
            The new level and its entities in registration order.

        Raises:
            ConfigurationError: If the board offsets or ranges are invalid.
            ExhaustedPoolError: If the placements exceed the spawn zone.
        """
        config = config if config is not None else self.config
        layout = BoardLayout(
            rows=config.rows,
            cols=config.cols,
            rng=self.rng,
            outer_wall_offset=config.outer_wall_offset,
            safe_zone_offset=config.safe_zone_offset,
        )
        population = LevelPopulator(config, self.rng).populate(
            layout,
            level_number,
            self._carried_food,
        )
        self.config = config
        self.scheduler.turn_delay = config.turn_delay
        self.scheduler.move_time = config.enemy_move_time
        self.scheduler.cancel()
        registry = population.registry
        player = registry.of_role(Role.PLAYER)[0]

        self.level = Level(
            number=level_number,
            layout=layout,
            registry=registry,
            player=player,
            scheduler=self.scheduler,
            floor=population.floor,
            starting_food=self._carried_food,
        )
        self._combat = CombatState(registry, self.sink)
        self._resolver = MovementResolver(
            layout,
            registry,
            self.sink,
            allow_diagonal=self.config.allow_diagonal,
        )
        self._dispatcher = InteractionDispatcher(self._combat)

        self.scheduler.begin(self.config.level_start_delay)
        logger.info("Day %d begins with %d food", level_number, player.points)
        return self.level, list(registry)

    def next_level(self) -> tuple[Level, list[Entity]]:
        """Set up the following level after the exit was reached.

        Raises:
            InvalidPhaseTransition: If the current level is not completed.
        """
        level = self._require_level()
        if not level.completed:
            msg = f"level {level.number} is not completed"
            raise InvalidPhaseTransition(msg)
        return self.setup_level(level.number + 1)

    def reset_level(self) -> tuple[Level, list[Entity]]:
        """Abort the current level and rebuild it with its starting food."""
        level = self._require_level()
        self.scheduler.cancel()
        self._carried_food = level.starting_food
        logger.info("Day %d reset", level.number)
        return self.setup_level(level.number)

    def is_game_over(self) -> bool:
        return self.level is not None and self.level.game_over

    # -- Turns --

    def request_controlled_move(self, dx: int, dy: int) -> MoveOutcome:
        """Move the player one step and end the player's turn.

        Every attempt costs ``food_per_move`` whether or not the player
        actually changes cell.

        Raises:
            InvalidPhaseTransition: If it is not the player's turn.
            ValueError: If ``(dx, dy)`` is not a permitted unit step.
        """
        self.scheduler.require_controlled_turn()
        level = self._require_level()
        resolver, dispatcher, combat = self._rules()
        player = level.player

        resolver.validate_direction(dx, dy)
        combat.spend(player, self.config.food_per_move)
        resolution = resolver.move(player, dx, dy)

        interactions: list[Interaction] = []
        if resolution.blocked and resolution.blocking_entity is not None:
            hit = dispatcher.on_blocked(player, resolution.blocking_entity)
            if hit is not None:
                interactions.append(hit)
        elif resolution.moved:
            for other in level.registry.at(player.cell):
                if other is player:
                    continue
                hit = dispatcher.on_overlap(player, other)
                if hit is not None:
                    interactions.append(hit)

        outcome = MoveOutcome(
            entity_id=player.entity_id,
            moved=resolution.moved,
            blocked=resolution.blocked,
            interactions=tuple(interactions),
        )

        if combat.is_defeated(player) or not player.alive:
            self._game_over()
        elif any(i.kind is InteractionKind.EXIT for i in interactions):
            self._complete_level()
        else:
            self.scheduler.end_controlled_turn()
        return outcome

    def advance_autonomous_phase(self) -> Iterator[MoveOutcome]:
        """Offer every enemy one move opportunity, in registration order.

        Returns:
            A lazy, one-shot iterator of per-enemy outcomes.  Exhausting
            it hands the turn back to the player.

        Raises:
            InvalidPhaseTransition: Outside the autonomous phase, or if a
                phase is already running.
        """
        level = self._require_level()
        return self.scheduler.run_phase(
            level.enemies,
            self._act_enemy,
            should_stop=lambda: level.game_over,
        )

    def _act_enemy(self, enemy: Entity) -> MoveOutcome:
        level = self._require_level()
        resolver, dispatcher, combat = self._rules()
        if not enemy.alive or enemy not in level.registry:
            return MoveOutcome(entity_id=enemy.entity_id, skipped=True)
        if not take_cadence_turn(enemy):
            return MoveOutcome(entity_id=enemy.entity_id, skipped=True)

        dx, dy = chase_direction(enemy.cell, level.player.cell)
        resolution = resolver.move(enemy, dx, dy)
        interactions: tuple[Interaction, ...] = ()
        if resolution.blocked and resolution.blocking_entity is not None:
            hit = dispatcher.on_blocked(enemy, resolution.blocking_entity)
            if hit is not None:
                interactions = (hit,)

        if combat.is_defeated(level.player):
            self._game_over()
        return MoveOutcome(
            entity_id=enemy.entity_id,
            moved=resolution.moved,
            blocked=resolution.blocked,
            interactions=interactions,
        )

    # -- Terminal states --

    def _complete_level(self) -> None:
        level = self._require_level()
        level.completed = True
        self._carried_food = level.player.points
        self.scheduler.cancel()
        self.sink.notify(LevelCompleted(level=level.number, food=level.player.points))
        logger.info(
            "Day %d completed with %d food",
            level.number,
            level.player.points,
        )

    def _game_over(self) -> None:
        level = self._require_level()
        if level.game_over:
            return
        level.game_over = True
        self.scheduler.cancel()
        self.sink.notify(GameOver(level=level.number))
        logger.info("After %d days, you starved.", level.number)

    # -- Helpers --

    def _require_level(self) -> Level:
        if self.level is None:
            msg = "no level has been set up"
            raise InvalidPhaseTransition(msg)
        return self.level

    def _rules(self) -> tuple[MovementResolver, InteractionDispatcher, CombatState]:
        if self._resolver is None or self._dispatcher is None or self._combat is None:
            msg = "no level has been set up"
            raise InvalidPhaseTransition(msg)
        return self._resolver, self._dispatcher, self._combat
