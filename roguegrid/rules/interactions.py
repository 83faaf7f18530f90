"""Interactions — what happens when a mover meets another entity.

Reactions are looked up by the ``(mover role, target role)`` pair in two
explicit tables:

- ``BLOCKED_HANDLERS`` fire when the target blocked the move (the player
  chops a wall, an enemy attacks the player).
- ``OVERLAP_HANDLERS`` fire when the mover lands on a non-blocking
  target (the player eats food or reaches the exit).

Pairs missing from a table produce no interaction.  The move is still
denied and still costs the mover its turn.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from roguegrid.entities.entity import Entity, Role

if TYPE_CHECKING:
    from roguegrid.entities.combat import CombatState

logger = logging.getLogger(__name__)


class InteractionKind(Enum):
    """Outcome category of an interaction."""

    ATTACK = auto()
    CONSUME = auto()
    EXIT = auto()


@dataclass(frozen=True)
class Interaction:
    """A resolved reaction between a mover and a target.

    Attributes:
        kind: What kind of reaction fired.
        mover_id: The acting entity.
        target_id: The entity acted upon.
        target_role: Role of the target.
        amount: Damage dealt or points restored.
        target_destroyed: True if the target left the board.
    """

    kind: InteractionKind
    mover_id: int
    target_id: int
    target_role: Role
    amount: int = 0
    target_destroyed: bool = False


Handler = Callable[["CombatState", Entity, Entity], Interaction]


def _chop_wall(combat: CombatState, mover: Entity, wall: Entity) -> Interaction:
    destroyed = combat.apply_damage(wall, mover.damage, source=mover)
    return Interaction(
        InteractionKind.ATTACK,
        mover.entity_id,
        wall.entity_id,
        wall.role,
        amount=mover.damage,
        target_destroyed=destroyed,
    )


def _attack_player(combat: CombatState, enemy: Entity, player: Entity) -> Interaction:
    defeated = combat.apply_damage(player, enemy.damage, source=enemy)
    return Interaction(
        InteractionKind.ATTACK,
        enemy.entity_id,
        player.entity_id,
        player.role,
        amount=enemy.damage,
        target_destroyed=defeated,
    )


def _consume(combat: CombatState, player: Entity, item: Entity) -> Interaction:
    combat.consume(player, item)
    return Interaction(
        InteractionKind.CONSUME,
        player.entity_id,
        item.entity_id,
        item.role,
        amount=item.restore,
        target_destroyed=True,
    )


def _reach_exit(combat: CombatState, player: Entity, exit_: Entity) -> Interaction:
    return Interaction(
        InteractionKind.EXIT,
        player.entity_id,
        exit_.entity_id,
        exit_.role,
    )


BLOCKED_HANDLERS: dict[tuple[Role, Role], Handler] = {
    (Role.PLAYER, Role.WALL): _chop_wall,
    (Role.ENEMY, Role.PLAYER): _attack_player,
}

OVERLAP_HANDLERS: dict[tuple[Role, Role], Handler] = {
    (Role.PLAYER, Role.CONSUMABLE): _consume,
    (Role.PLAYER, Role.EXIT): _reach_exit,
}


class InteractionDispatcher:
    """Looks up and runs the handler for a mover/target role pair."""

    def __init__(
        self,
        combat: CombatState,
        *,
        blocked: dict[tuple[Role, Role], Handler] | None = None,
        overlap: dict[tuple[Role, Role], Handler] | None = None,
    ) -> None:
        self.combat = combat
        self.blocked = dict(BLOCKED_HANDLERS if blocked is None else blocked)
        self.overlap = dict(OVERLAP_HANDLERS if overlap is None else overlap)

    def on_blocked(self, mover: Entity, target: Entity) -> Interaction | None:
        """React to ``target`` blocking ``mover``; None if the pair is unmapped."""
        return self._dispatch(self.blocked, mover, target)

    def on_overlap(self, mover: Entity, target: Entity) -> Interaction | None:
        """React to ``mover`` landing on ``target``; None if the pair is unmapped."""
        return self._dispatch(self.overlap, mover, target)

    def _dispatch(
        self,
        table: dict[tuple[Role, Role], Handler],
        mover: Entity,
        target: Entity,
    ) -> Interaction | None:
        handler = table.get((mover.role, target.role))
        if handler is None or not target.alive:
            return None
        interaction = handler(self.combat, mover, target)
        logger.debug(
            "%s #%d -> %s #%d: %s",
            mover.role.name,
            mover.entity_id,
            target.role.name,
            target.entity_id,
            interaction.kind.name,
        )
        return interaction
