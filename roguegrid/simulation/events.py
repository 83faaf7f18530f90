"""Events — notifications pushed to the presentation layer.

The core commits state changes instantly and then tells the sink what
happened.  Sinks are fire-and-forget: their return value is ignored and
they must not mutate simulation state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, Union

if TYPE_CHECKING:
    from roguegrid.board.cell import Cell
    from roguegrid.entities.entity import Role


@dataclass(frozen=True)
class EntityMoved:
    """An entity committed a one-cell transition."""

    entity_id: int
    role: Role
    origin: Cell
    destination: Cell


@dataclass(frozen=True)
class EntityDamaged:
    """A damageable entity lost points to an attack."""

    entity_id: int
    role: Role
    amount: int
    remaining: int
    source_id: int | None = None


@dataclass(frozen=True)
class EntityDestroyed:
    """An entity left the board (wall chopped down, enemy killed)."""

    entity_id: int
    role: Role
    cell: Cell


@dataclass(frozen=True)
class ItemConsumed:
    """The player ate or drank a consumable."""

    entity_id: int
    kind: str
    amount: int
    total: int


@dataclass(frozen=True)
class LevelCompleted:
    """The player reached the exit."""

    level: int
    food: int


@dataclass(frozen=True)
class GameOver:
    """The player's food ran out."""

    level: int


Event = Union[
    EntityMoved,
    EntityDamaged,
    EntityDestroyed,
    ItemConsumed,
    LevelCompleted,
    GameOver,
]


class EventSink(Protocol):
    """Receiver for simulation events."""

    def notify(self, event: Event) -> None: ...


class NullSink:
    """Discards every event."""

    def notify(self, event: Event) -> None:
        pass


@dataclass
class RecordingSink:
    """Keeps every event in order; handy for replays and tests."""

    events: list[Event] = field(default_factory=list)

    def notify(self, event: Event) -> None:
        self.events.append(event)

    def of_type(self, event_type: type) -> list[Event]:
        return [e for e in self.events if isinstance(e, event_type)]

    def clear(self) -> None:
        self.events.clear()
