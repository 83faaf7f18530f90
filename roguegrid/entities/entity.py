"""Entity — one record type for everything placed on the board.

Behaviour is not attached to entity subclasses.  Each entity carries a
``Role`` tag and the capability set that role implies; movement and
interaction rules look both up in tables keyed by role.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from roguegrid.board.cell import Cell


class Capability(Enum):
    """What the rules may do with an entity."""

    MOVABLE = auto()
    DAMAGEABLE = auto()
    CONSUMABLE = auto()
    BLOCKS_MOVEMENT = auto()


class Role(Enum):
    """Closed set of entity roles."""

    PLAYER = auto()
    ENEMY = auto()
    WALL = auto()
    OUTER_WALL = auto()
    CONSUMABLE = auto()
    EXIT = auto()


ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.PLAYER: frozenset(
        {Capability.MOVABLE, Capability.DAMAGEABLE, Capability.BLOCKS_MOVEMENT},
    ),
    Role.ENEMY: frozenset(
        {Capability.MOVABLE, Capability.DAMAGEABLE, Capability.BLOCKS_MOVEMENT},
    ),
    Role.WALL: frozenset({Capability.DAMAGEABLE, Capability.BLOCKS_MOVEMENT}),
    Role.OUTER_WALL: frozenset({Capability.BLOCKS_MOVEMENT}),
    Role.CONSUMABLE: frozenset({Capability.CONSUMABLE}),
    Role.EXIT: frozenset(),
}


@dataclass
class Entity:
    """A placed object on the board.

    Attributes:
        entity_id: Unique id within a level, in registration order.
        role: Role tag selecting the capability set and rule handlers.
        cell: Current grid position.
        kind: Configured kind name (e.g. ``"soda"``, ``"enemy2"``).
        variant: Tile variant index, for presentation only.
        points: Hit points for walls, food points for the player.
        damage: Wall damage for the player, player damage for enemies.
        restore: Food points granted when a consumable is eaten.
        skip_move: Enemy cadence flag; True means the next
            opportunity is skipped.
        alive: False once destroyed, consumed, or defeated.
    """

    entity_id: int
    role: Role
    cell: Cell
    kind: str = ""
    variant: int = 0
    points: int = 0
    damage: int = 0
    restore: int = 0
    skip_move: bool = False
    alive: bool = True

    @property
    def capabilities(self) -> frozenset[Capability]:
        return ROLE_CAPABILITIES[self.role]

    def has(self, capability: Capability) -> bool:
        """Return True if this entity's role grants ``capability``."""
        return capability in ROLE_CAPABILITIES[self.role]

    @property
    def blocks_movement(self) -> bool:
        return self.alive and self.has(Capability.BLOCKS_MOVEMENT)

    @property
    def is_alive(self) -> bool:
        return self.alive
