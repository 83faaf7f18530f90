"""TurnScheduler — the two-phase turn barrier.

States cycle ``SETUP -> CONTROLLED_TURN -> AUTONOMOUS_PHASE ->
CONTROLLED_TURN -> ...``.  Only one phase holder may mutate the board at
a time:

- In ``CONTROLLED_TURN`` the player may make exactly one move.
- In ``AUTONOMOUS_PHASE`` each registered enemy is offered one move
  opportunity, strictly in registration order.

The autonomous phase is a lazy generator of move outcomes separated by
fixed delays.  Delays are handed to a ``wait`` callback; the default
only records them, so the core never sleeps unless a presentation layer
asks it to.  ``cancel()`` aborts a pending phase between two entity
moves and drops the remaining ones.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import TYPE_CHECKING, TypeVar

from roguegrid.simulation.errors import InvalidPhaseTransition

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class TurnState(Enum):
    """Which phase currently holds the board."""

    SETUP = auto()
    CONTROLLED_TURN = auto()
    AUTONOMOUS_PHASE = auto()


class TurnScheduler:
    """Alternates the controlled turn with the autonomous phase.

    Attributes:
        turn_delay: Seconds before the first autonomous move, and the
            extra floor added when no autonomous entity is registered.
        move_time: Seconds after each autonomous move.
        state: The active phase.
        last_phase_duration: Total delay of the last finished phase.
    """

    def __init__(
        self,
        turn_delay: float = 0.1,
        move_time: float = 0.1,
        wait: Callable[[float], None] | None = None,
    ) -> None:
        self.turn_delay = turn_delay
        self.move_time = move_time
        self._wait = wait
        self.state = TurnState.SETUP
        self.last_phase_duration = 0.0
        self._phase_elapsed = 0.0
        self._phase_running = False
        self._epoch = 0

    @property
    def phase_running(self) -> bool:
        return self._phase_running

    def begin(self, start_delay: float = 0.0) -> None:
        """Leave setup and hand the board to the controlled entity.

        Raises:
            InvalidPhaseTransition: If the scheduler is not in setup.
        """
        if self.state is not TurnState.SETUP:
            msg = f"cannot begin play from {self.state.name}"
            raise InvalidPhaseTransition(msg)
        if start_delay > 0 and self._wait is not None:
            self._wait(start_delay)
        self.state = TurnState.CONTROLLED_TURN

    def require_controlled_turn(self) -> None:
        """Raise unless the controlled entity may move now.

        Raises:
            InvalidPhaseTransition: If the state is not CONTROLLED_TURN.
        """
        if self.state is not TurnState.CONTROLLED_TURN:
            msg = f"controlled move rejected during {self.state.name}"
            raise InvalidPhaseTransition(msg)

    def end_controlled_turn(self) -> None:
        """Hand the board to the autonomous phase after one controlled move."""
        self.require_controlled_turn()
        self.state = TurnState.AUTONOMOUS_PHASE

    def cancel(self) -> None:
        """Abort any pending phase and return to setup.

        Used on level reset, level exit, and game over.  A running phase
        generator stops at its next step without touching the state.
        """
        if self._phase_running:
            logger.debug("Autonomous phase cancelled")
        self._epoch += 1
        self._phase_running = False
        self.state = TurnState.SETUP

    def run_phase(
        self,
        actors: Sequence[T],
        act: Callable[[T], R],
        should_stop: Callable[[], bool] | None = None,
    ) -> Iterator[R]:
        """Start an autonomous phase over ``actors``.

        The returned iterator is one-shot: each actor is offered one
        opportunity through ``act`` and its outcome is yielded.  When the
        iterator is exhausted the state returns to CONTROLLED_TURN.
        The phase only counts as running once its first step is taken;
        calling this again before then supersedes the unstarted phase,
        which then yields nothing.

        Args:
            actors: Autonomous entities in registration order.
            act: Callback that performs one actor's opportunity.
            should_stop: Checked before each actor; True ends the phase
                early (for example once the player is defeated).

        Raises:
            InvalidPhaseTransition: If the state is not AUTONOMOUS_PHASE
                or a phase is already running.
        """
        if self.state is not TurnState.AUTONOMOUS_PHASE:
            msg = f"cannot run the autonomous phase from {self.state.name}"
            raise InvalidPhaseTransition(msg)
        if self._phase_running:
            msg = "autonomous phase already running"
            raise InvalidPhaseTransition(msg)
        self._epoch += 1
        return self._phase(list(actors), act, should_stop, self._epoch)

    def _phase(
        self,
        actors: list[T],
        act: Callable[[T], R],
        should_stop: Callable[[], bool] | None,
        epoch: int,
    ) -> Iterator[R]:
        if epoch != self._epoch:
            return
        self._phase_running = True
        self._phase_elapsed = 0.0
        finished = False
        try:
            self._delay(self.turn_delay)
            if not actors:
                self._delay(self.turn_delay)
            for actor in actors:
                if epoch != self._epoch:
                    return
                if should_stop is not None and should_stop():
                    break
                yield act(actor)
                if epoch != self._epoch:
                    return
                self._delay(self.move_time)
            finished = True
        finally:
            if epoch == self._epoch:
                self._phase_running = False
                self.last_phase_duration = self._phase_elapsed
                if finished and self.state is TurnState.AUTONOMOUS_PHASE:
                    self.state = TurnState.CONTROLLED_TURN

    def _delay(self, seconds: float) -> None:
        self._phase_elapsed += seconds
        if self._wait is not None:
            self._wait(seconds)
