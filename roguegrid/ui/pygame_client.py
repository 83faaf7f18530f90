"""Pygame 2D front end for a roguegrid game session.

Draws the board as coloured squares, maps arrow keys to single-axis
steps, and plays the autonomous phase back in real time.  The session
never sleeps: its ``wait`` callback only adds to a hold timer here, and
the next enemy move is pulled from the phase iterator once the hold has
run out.  All game rules live in the session; this module only reads
state and forwards input.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

import pygame

from roguegrid.entities.entity import Role
from roguegrid.simulation.errors import InvalidPhaseTransition
from roguegrid.simulation.events import (
    EntityDamaged,
    Event,
    GameOver,
    ItemConsumed,
    LevelCompleted,
)
from roguegrid.simulation.game import GameSession, MoveOutcome, input_to_direction
from roguegrid.simulation.scheduler import TurnState

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from roguegrid.simulation.config import GameConfig

# Colour palette
_BG = (20, 12, 16)
_GRID_LINE = (40, 30, 34)
_FLOOR = [(52, 40, 36), (58, 44, 38), (48, 38, 34), (62, 48, 40)]

_ROLE_COLOURS: dict[Role, tuple[int, int, int]] = {
    Role.OUTER_WALL: (90, 70, 60),
    Role.WALL: (150, 110, 70),
    Role.CONSUMABLE: (90, 200, 90),
    Role.EXIT: (60, 60, 200),
    Role.ENEMY: (220, 70, 70),
    Role.PLAYER: (240, 220, 120),
}

_RESTART_DELAY = 1.0


class PygameRenderer:
    """Renders a GameSession into a Pygame window and feeds it input.

    Attributes:
        session: The game session being played.
        cell_size: Pixel size of each grid cell.
        screen: The Pygame display surface.
    """

    _ARROWS: ClassVar[dict[int, tuple[int, int]]] = {
        pygame.K_LEFT: (-1, 0),
        pygame.K_RIGHT: (1, 0),
        pygame.K_UP: (0, -1),
        pygame.K_DOWN: (0, 1),
    }

    def __init__(self, config: GameConfig, cell_size: int = 48) -> None:
        """Initialise the renderer and set up the first level.

        Args:
            config: Game configuration for the session.
            cell_size: Pixel width/height per grid cell.
        """
        self.cell_size = cell_size
        self.session = GameSession(config, sink=self, wait=self._defer)
        self._hold = 0.0
        self._credit = 0.0
        self._restart_in: float | None = None
        self._phase: Iterator[MoveOutcome] | None = None
        self._message = ""
        self._showing_title = False

        w = config.cols * cell_size
        h = config.rows * cell_size
        self._panel_width = 220
        self._win_w = w + self._panel_width
        self._win_h = max(h, 240)

        pygame.init()
        self.screen = pygame.display.set_mode((self._win_w, self._win_h))
        pygame.display.set_caption("roguegrid")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.big_font = pygame.font.SysFont("monospace", 28)
        self.running = True

        self._start_level(self.session.setup_level, 1)

    # -- Session hooks --

    def _defer(self, seconds: float) -> None:
        """``wait`` callback: postpone the next phase step by ``seconds``.

        Delays already held through ``_prepay`` are not held again.
        """
        paid = min(self._credit, seconds)
        self._credit -= paid
        self._hold += seconds - paid

    def _prepay(self, seconds: float) -> None:
        """Hold before pulling a phase step that waits ``seconds`` first.

        Each phase step reports its delay and then moves in one call, so
        the delay is held up front to play before the move.
        """
        self._hold += seconds
        self._credit += seconds

    def notify(self, event: Event) -> None:
        """Event sink: turn simulation events into status-line text."""
        match event:
            case ItemConsumed(kind=kind, amount=amount, total=total):
                self._message = f"+{amount} {kind}  Food: {total}"
            case EntityDamaged(role=Role.PLAYER, amount=amount, remaining=remaining):
                self._message = f"-{amount}  Food: {remaining}"
            case LevelCompleted():
                self._restart_in = _RESTART_DELAY
            case GameOver(level=level):
                self._message = f"After {level} days, you starved."

    def _start_level(self, setup: Callable[..., object], *args: int) -> None:
        """Run a session setup call and show the day title while it holds."""
        self._hold = 0.0
        self._credit = 0.0
        setup(*args)
        self._showing_title = self._hold > 0

    # -- Main loop --

    def run(self, fps: int = 30) -> None:
        """Main loop: handle input, advance phases, render.

        Args:
            fps: Target frames per second.
        """
        while self.running:
            dt = self.clock.tick(fps) / 1000.0
            self._hold = max(0.0, self._hold - dt)
            if self._hold <= 0:
                self._showing_title = False
            self._handle_events()
            self._advance(dt)
            self._draw()

        pygame.quit()

    def _advance(self, dt: float) -> None:
        """Pull the next enemy move or start the next level when due."""
        if self._restart_in is not None:
            self._restart_in -= dt
            if self._restart_in <= 0:
                self._restart_in = None
                self._phase = None
                self._message = ""
                self._start_level(self.session.next_level)
            return

        state = self.session.scheduler.state
        if state is TurnState.AUTONOMOUS_PHASE and self._phase is None:
            self._phase = self.session.advance_autonomous_phase()
            self._prepay(self.session.scheduler.turn_delay)

        while self._phase is not None and self._hold <= 0:
            try:
                next(self._phase)
            except StopIteration:
                self._phase = None
                self._credit = 0.0
            else:
                self._prepay(self.session.scheduler.move_time)

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                elif event.key == pygame.K_r:
                    self._phase = None
                    self._restart_in = None
                    self._hold = 0.0
                    self._message = ""
                    self._start_level(self.session.reset_level)
                elif event.key in self._ARROWS:
                    self._request_move(*self._ARROWS[event.key])

    def _request_move(self, horizontal: int, vertical: int) -> None:
        if self._hold > 0 or self.session.is_game_over():
            return
        dx, dy = input_to_direction(horizontal, vertical)
        try:
            self.session.request_controlled_move(dx, dy)
        except InvalidPhaseTransition:
            # Not the player's turn yet; the key press is dropped.
            return

    # -- Drawing --

    def _draw(self) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        level = self.session.level
        if level is not None:
            self._draw_floor()
            self._draw_entities()
            self._draw_info_panel()
            if self._showing_title:
                self._draw_banner(f"Day {level.number}")
            elif level.game_over:
                self._draw_banner(self._message)
        pygame.display.flip()

    def _draw_floor(self) -> None:
        """Draw floor tiles using their stored variants."""
        cs = self.cell_size
        level = self.session.level
        for cell, variant in level.floor.items():
            colour = _FLOOR[variant % len(_FLOOR)]
            rect = (cell.col * cs, cell.row * cs, cs, cs)
            pygame.draw.rect(self.screen, colour, rect)
            pygame.draw.rect(self.screen, _GRID_LINE, rect, 1)

    def _draw_entities(self) -> None:
        """Draw each entity as a square, movers as circles on top."""
        cs = self.cell_size
        level = self.session.level
        movers = []
        for entity in level.registry:
            if entity.role in (Role.PLAYER, Role.ENEMY):
                movers.append(entity)
                continue
            inset = cs // 6 if entity.role is Role.CONSUMABLE else 0
            pygame.draw.rect(
                self.screen,
                _ROLE_COLOURS[entity.role],
                (
                    entity.cell.col * cs + inset,
                    entity.cell.row * cs + inset,
                    cs - 2 * inset,
                    cs - 2 * inset,
                ),
            )
        radius = max(3, cs // 3)
        for entity in movers:
            cx = entity.cell.col * cs + cs // 2
            cy = entity.cell.row * cs + cs // 2
            pygame.draw.circle(self.screen, _ROLE_COLOURS[entity.role], (cx, cy), radius)

    def _draw_banner(self, text: str) -> None:
        surf = self.big_font.render(text, True, (240, 240, 240))
        rect = surf.get_rect(center=(self._win_w // 2, self._win_h // 2))
        self.screen.blit(surf, rect)

    def _draw_info_panel(self) -> None:
        """Draw a status panel on the right side of the window."""
        level = self.session.level
        panel_x = level.cols * self.cell_size + 10
        y = 10

        lines = [
            f"Day: {level.number}",
            f"Food: {level.food}",
            f"Enemies: {len(level.enemies)}",
            f"Turn: {level.turn_state.name}",
            "",
            self._message,
            "",
            "--- Controls ---",
            "Arrows: move",
            "R: restart day",
            "ESC: quit",
        ]

        for line in lines:
            surf = self.font.render(line, True, (200, 200, 200))
            self.screen.blit(surf, (panel_x, y))
            y += 18
