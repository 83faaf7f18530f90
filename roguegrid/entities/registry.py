"""EntityRegistry — the active entities of one level.

Entities are kept in registration order.  The autonomous phase relies on
that order: enemies act in the order they were placed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from roguegrid.entities.entity import Entity, Role

if TYPE_CHECKING:
    from collections.abc import Iterator

    from roguegrid.board.cell import Cell


class EntityRegistry:
    """Ordered id-to-entity mapping with simple spatial queries."""

    def __init__(self) -> None:
        self._entities: dict[int, Entity] = {}
        self._next_id = 0

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(list(self._entities.values()))

    def __contains__(self, entity: object) -> bool:
        return (
            isinstance(entity, Entity)
            and self._entities.get(entity.entity_id) is entity
        )

    def spawn(self, role: Role, cell: Cell, **attrs: Any) -> Entity:
        """Create an entity with the next id and register it."""
        entity = Entity(entity_id=self._next_id, role=role, cell=cell, **attrs)
        self._next_id += 1
        self._entities[entity.entity_id] = entity
        return entity

    def remove(self, entity: Entity) -> None:
        """Drop an entity from the level.  Removing twice is a no-op."""
        self._entities.pop(entity.entity_id, None)

    def get(self, entity_id: int) -> Entity | None:
        return self._entities.get(entity_id)

    def of_role(self, role: Role) -> list[Entity]:
        """Return all entities with ``role`` in registration order."""
        return [e for e in self._entities.values() if e.role is role]

    def at(self, cell: Cell) -> list[Entity]:
        return [e for e in self._entities.values() if e.cell == cell]

    def blocking_at(self, cell: Cell, exclude: Entity | None = None) -> Entity | None:
        """Return the first movement-blocking entity on ``cell``.

        Args:
            cell: Cell to inspect.
            exclude: Entity to ignore, normally the mover itself.
        """
        for entity in self._entities.values():
            if entity is exclude or entity.cell != cell:
                continue
            if entity.blocks_movement:
                return entity
        return None
