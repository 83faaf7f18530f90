"""CombatState — point counters, damage, consumption, and destruction.

Every damageable entity keeps a single ``points`` counter: hit points
for walls and enemies, food points for the player.  Dropping to zero or
below destroys the entity.  Destroyed walls and enemies leave the
registry, which also removes them from the blocking set.  The player is
never removed; its defeat is what ends the game.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from roguegrid.entities.entity import Capability, Entity, Role
from roguegrid.simulation.events import (
    EntityDamaged,
    EntityDestroyed,
    EventSink,
    ItemConsumed,
    NullSink,
)

if TYPE_CHECKING:
    from roguegrid.entities.registry import EntityRegistry

logger = logging.getLogger(__name__)


class CombatState:
    """Applies point changes to entities of one level.

    Attributes:
        registry: The level's active entities.
        sink: Receiver for damage, destruction, and consumption events.
    """

    def __init__(self, registry: EntityRegistry, sink: EventSink | None = None) -> None:
        self.registry = registry
        self.sink: EventSink = sink if sink is not None else NullSink()

    def apply_damage(
        self,
        target: Entity,
        amount: int,
        *,
        source: Entity | None = None,
    ) -> bool:
        """Subtract ``amount`` from the target's points.

        Args:
            target: A damageable entity.
            amount: Points to remove.
            source: The attacker, reported in the damage event.

        Returns:
            True if the hit destroyed the target.

        Raises:
            ValueError: If the target cannot take damage.
        """
        if not target.has(Capability.DAMAGEABLE):
            msg = f"{target.role.name} #{target.entity_id} is not damageable"
            raise ValueError(msg)
        target.points -= amount
        self.sink.notify(
            EntityDamaged(
                entity_id=target.entity_id,
                role=target.role,
                amount=amount,
                remaining=target.points,
                source_id=source.entity_id if source is not None else None,
            ),
        )
        logger.debug(
            "%s #%d took %d damage (%d left)",
            target.role.name,
            target.entity_id,
            amount,
            target.points,
        )
        return self._evaluate(target)

    def spend(self, entity: Entity, amount: int) -> bool:
        """Charge a movement cost against the entity's points.

        Returns:
            True if the cost left the entity defeated.
        """
        entity.points -= amount
        return self._evaluate(entity)

    def consume(self, consumer: Entity, item: Entity) -> int:
        """Add the item's restore amount to the consumer and destroy the item.

        Returns:
            The consumer's new point total.
        """
        consumer.points += item.restore
        item.alive = False
        self.registry.remove(item)
        self.sink.notify(
            ItemConsumed(
                entity_id=item.entity_id,
                kind=item.kind,
                amount=item.restore,
                total=consumer.points,
            ),
        )
        logger.debug(
            "%s #%d consumed %s (+%d, now %d)",
            consumer.role.name,
            consumer.entity_id,
            item.kind,
            item.restore,
            consumer.points,
        )
        return consumer.points

    @staticmethod
    def is_defeated(entity: Entity) -> bool:
        return entity.points <= 0

    def _evaluate(self, entity: Entity) -> bool:
        if not entity.alive or entity.points > 0:
            return False
        entity.alive = False
        if entity.role is Role.PLAYER:
            logger.info("Player #%d ran out of food", entity.entity_id)
            return True
        self.registry.remove(entity)
        self.sink.notify(
            EntityDestroyed(
                entity_id=entity.entity_id,
                role=entity.role,
                cell=entity.cell,
            ),
        )
        logger.debug("%s #%d destroyed", entity.role.name, entity.entity_id)
        return True
