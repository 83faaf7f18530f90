"""Movement — grid collision resolution and enemy movement policy.

A move traces the straight path from the mover's cell to the destination
and stops at the first entity that blocks movement.  The mover itself is
never part of the trace, so an entity can never block its own move.
Unblocked moves commit instantly; smooth interpolation is left to
whatever consumes the ``EntityMoved`` events.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from roguegrid.entities.entity import Capability, Entity, Role
from roguegrid.simulation.events import EntityMoved, EventSink, NullSink

if TYPE_CHECKING:
    from roguegrid.board.cell import Cell
    from roguegrid.board.layout import BoardLayout
    from roguegrid.entities.registry import EntityRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resolution:
    """Result of one movement attempt.

    Attributes:
        origin: Cell the mover started from.
        destination: Cell the mover tried to reach.
        blocked: True if the move was denied.
        blocking_entity: What blocked it, or None for an empty block
            (the board edge).
    """

    origin: Cell
    destination: Cell
    blocked: bool
    blocking_entity: Entity | None = None

    @property
    def moved(self) -> bool:
        return not self.blocked


class MovementResolver:
    """Resolves and commits single-step moves on one level's board."""

    def __init__(
        self,
        layout: BoardLayout,
        registry: EntityRegistry,
        sink: EventSink | None = None,
        *,
        allow_diagonal: bool = False,
    ) -> None:
        self.layout = layout
        self.registry = registry
        self.sink: EventSink = sink if sink is not None else NullSink()
        self.allow_diagonal = allow_diagonal

    def validate_direction(self, dx: int, dy: int) -> None:
        """Reject anything but a unit step.

        Raises:
            ValueError: For a zero vector, a component outside -1..1,
                or a diagonal when diagonals are disabled.
        """
        if dx not in (-1, 0, 1) or dy not in (-1, 0, 1) or (dx == 0 and dy == 0):
            msg = f"({dx}, {dy}) is not a unit step"
            raise ValueError(msg)
        if dx != 0 and dy != 0 and not self.allow_diagonal:
            msg = f"diagonal step ({dx}, {dy}) is not allowed"
            raise ValueError(msg)

    @staticmethod
    def trace(origin: Cell, destination: Cell) -> list[Cell]:
        """Cells on the straight path from ``origin`` to ``destination``.

        The origin is excluded and the destination included, so a unit
        step traces exactly its destination.
        """
        d_col = destination.col - origin.col
        d_row = destination.row - origin.row
        steps = max(abs(d_col), abs(d_row))
        return [
            origin.step(round(d_col * i / steps), round(d_row * i / steps))
            for i in range(1, steps + 1)
        ]

    def resolve(self, mover: Entity, dx: int, dy: int) -> Resolution:
        """Work out whether ``mover`` can step by ``(dx, dy)`` without moving it."""
        self.validate_direction(dx, dy)
        origin = mover.cell
        destination = origin.step(dx, dy)
        for cell in self.trace(origin, destination):
            if not self.layout.in_bounds(cell):
                return Resolution(origin, destination, blocked=True)
            blocker = self.registry.blocking_at(cell, exclude=mover)
            if blocker is not None:
                return Resolution(
                    origin,
                    destination,
                    blocked=True,
                    blocking_entity=blocker,
                )
        return Resolution(origin, destination, blocked=False)

    def move(self, mover: Entity, dx: int, dy: int) -> Resolution:
        """Resolve a step and commit it if nothing is in the way.

        Raises:
            ValueError: If the mover cannot move or the step is invalid.
        """
        if not mover.has(Capability.MOVABLE):
            msg = f"{mover.role.name} #{mover.entity_id} cannot move"
            raise ValueError(msg)
        resolution = self.resolve(mover, dx, dy)
        if resolution.blocked:
            blocker = resolution.blocking_entity
            logger.debug(
                "%s #%d blocked at %s by %s",
                mover.role.name,
                mover.entity_id,
                resolution.destination,
                blocker.role.name if blocker is not None else "board edge",
            )
            return resolution
        mover.cell = resolution.destination
        self.sink.notify(
            EntityMoved(
                entity_id=mover.entity_id,
                role=mover.role,
                origin=resolution.origin,
                destination=resolution.destination,
            ),
        )
        return resolution


def take_cadence_turn(enemy: Entity) -> bool:
    """Enemy cadence gate: act on alternating opportunities.

    Returns:
        True if the enemy moves this opportunity.  The first
        opportunity always moves.
    """
    if enemy.role is not Role.ENEMY:
        return True
    if enemy.skip_move:
        enemy.skip_move = False
        return False
    enemy.skip_move = True
    return True


def chase_direction(hunter: Cell, target: Cell) -> tuple[int, int]:
    """Single-axis step from ``hunter`` toward ``target``.

    Sharing a column moves along rows; otherwise the step closes the
    column gap.  The heuristic never tries the other axis when blocked,
    so an enemy can stay stuck against an obstacle.
    """
    if hunter.col == target.col:
        return 0, 1 if target.row > hunter.row else -1
    return 1 if target.col > hunter.col else -1, 0
