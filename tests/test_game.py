"""Tests for roguegrid.simulation.game — end-to-end session behaviour."""

import pytest

from roguegrid.board.cell import Cell
from roguegrid.entities.entity import Role
from roguegrid.rules.interactions import InteractionKind
from roguegrid.simulation.config import GameConfig
from roguegrid.simulation.errors import (
    ConfigurationError,
    ExhaustedPoolError,
    InvalidPhaseTransition,
)
from roguegrid.simulation.events import (
    EntityDestroyed,
    EntityMoved,
    GameOver,
    ItemConsumed,
    LevelCompleted,
    RecordingSink,
)
from roguegrid.simulation.game import GameSession, input_to_direction
from roguegrid.simulation.scheduler import TurnState


def finish_turn(session: GameSession) -> list:
    """Run the autonomous phase to completion."""
    return list(session.advance_autonomous_phase())


class TestSetupLevel:
    """Tests for building levels through the session."""

    def test_level_one(self, default_config: GameConfig) -> None:
        session = GameSession(default_config)
        level, entities = session.setup_level(1)
        walls = [e for e in entities if e.role is Role.WALL]
        assert 5 <= len(walls) <= 9
        assert [e for e in entities if e.role is Role.ENEMY] == []
        assert level.exit.cell == Cell(row=5, col=5)
        assert level.turn_state is TurnState.CONTROLLED_TURN
        assert level.food == default_config.starting_food
        assert (level.rows, level.cols) == (8, 8)
        assert (level.outer_wall_offset, level.safe_zone_offset) == (1, 1)
        assert not session.is_game_over()

    def test_same_seed_reproduces_level(self, default_config: GameConfig) -> None:
        _, first = GameSession(default_config).setup_level(4)
        _, second = GameSession(default_config).setup_level(4)
        assert [(e.role, e.cell, e.kind, e.variant) for e in first] == [
            (e.role, e.cell, e.kind, e.variant) for e in second
        ]

    def test_invalid_offsets(self) -> None:
        session = GameSession(GameConfig(outer_wall_offset=2, safe_zone_offset=2))
        with pytest.raises(ConfigurationError):
            session.setup_level(1)
        assert session.level is None

    def test_over_requested_counts(self) -> None:
        session = GameSession(GameConfig(wall_count=(16, 16), food_count=(1, 1)))
        with pytest.raises(ExhaustedPoolError):
            session.setup_level(1)
        assert session.level is None

    def test_config_override_replaces_session_config(self, session: GameSession) -> None:
        level, _ = session.setup_level(1, GameConfig(rows=10, cols=12))
        assert (level.rows, level.cols) == (10, 12)
        assert session.config.cols == 12

    def test_rejected_config_is_not_kept(
        self,
        session: GameSession,
        empty_config: GameConfig,
    ) -> None:
        level = session.level
        bad = GameConfig(outer_wall_offset=2, safe_zone_offset=2, turn_delay=5.0)
        with pytest.raises(ConfigurationError):
            session.setup_level(2, bad)
        assert session.config is empty_config
        assert session.level is level
        assert session.scheduler.turn_delay == empty_config.turn_delay

    def test_requests_before_setup_rejected(self) -> None:
        session = GameSession()
        with pytest.raises(InvalidPhaseTransition):
            session.request_controlled_move(1, 0)
        assert not session.is_game_over()


class TestControlledMove:
    """Tests for the player's single move per turn."""

    def test_move_costs_food_and_ends_turn(
        self,
        session: GameSession,
        sink: RecordingSink,
    ) -> None:
        outcome = session.request_controlled_move(1, 0)
        level = session.level
        assert outcome.moved
        assert not outcome.blocked
        assert outcome.interaction is None
        assert level.player.cell == Cell(1, 2)
        assert level.food == 99
        assert level.turn_state is TurnState.AUTONOMOUS_PHASE
        assert len(sink.of_type(EntityMoved)) == 1

    def test_move_during_autonomous_phase_rejected(self, session: GameSession) -> None:
        session.request_controlled_move(1, 0)
        with pytest.raises(InvalidPhaseTransition):
            session.request_controlled_move(1, 0)
        assert session.level.food == 99

    def test_phase_hands_turn_back(self, session: GameSession) -> None:
        session.request_controlled_move(0, 1)
        assert finish_turn(session) == []
        assert session.level.turn_state is TurnState.CONTROLLED_TURN
        session.request_controlled_move(0, 1)
        assert session.level.player.cell == Cell(3, 1)

    def test_dropped_phase_can_be_requested_again(self, session: GameSession) -> None:
        session.request_controlled_move(0, 1)
        session.advance_autonomous_phase()
        assert finish_turn(session) == []
        assert session.level.turn_state is TurnState.CONTROLLED_TURN

    def test_outer_wall_blocks_without_interaction(self, session: GameSession) -> None:
        outcome = session.request_controlled_move(0, -1)
        assert outcome.blocked
        assert not outcome.moved
        assert outcome.interactions == ()
        assert session.level.food == 99
        assert session.level.turn_state is TurnState.AUTONOMOUS_PHASE

    def test_chopping_a_wall(self, session: GameSession, sink: RecordingSink) -> None:
        level = session.level
        wall = level.registry.spawn(Role.WALL, Cell(1, 2), points=4)
        for chop in range(1, 5):
            outcome = session.request_controlled_move(1, 0)
            assert outcome.blocked
            assert outcome.interaction.kind is InteractionKind.ATTACK
            assert outcome.interaction.target_destroyed is (chop == 4)
            assert (wall in level.registry) is (chop < 4)
            finish_turn(session)
        assert level.player.cell == Cell(1, 1)
        assert len(sink.of_type(EntityDestroyed)) == 1
        assert session.request_controlled_move(1, 0).moved
        assert level.player.cell == Cell(1, 2)

    def test_eating_food(self, session: GameSession, sink: RecordingSink) -> None:
        level = session.level
        soda = level.registry.spawn(
            Role.CONSUMABLE,
            Cell(2, 1),
            kind="soda",
            restore=20,
        )
        outcome = session.request_controlled_move(0, 1)
        assert outcome.moved
        assert outcome.interaction.kind is InteractionKind.CONSUME
        assert level.food == 100 - 1 + 20
        assert soda not in level.registry
        assert len(sink.of_type(ItemConsumed)) == 1

    def test_diagonal_rejected_without_spending_food(self, session: GameSession) -> None:
        with pytest.raises(ValueError):
            session.request_controlled_move(1, 1)
        assert session.level.food == 100
        assert session.level.turn_state is TurnState.CONTROLLED_TURN


class TestLevelLifecycle:
    """Tests for exit, carry-over, reset, and game over."""

    def test_reaching_exit_completes_level(
        self,
        session: GameSession,
        sink: RecordingSink,
    ) -> None:
        level = session.level
        level.player.cell = Cell(5, 4)
        outcome = session.request_controlled_move(1, 0)
        assert outcome.interaction.kind is InteractionKind.EXIT
        assert level.completed
        assert level.turn_state is TurnState.SETUP
        assert sink.of_type(LevelCompleted) == [LevelCompleted(level=1, food=99)]
        with pytest.raises(InvalidPhaseTransition):
            session.request_controlled_move(1, 0)

    def test_next_level_carries_food(self, session: GameSession) -> None:
        session.level.player.cell = Cell(5, 4)
        session.request_controlled_move(1, 0)
        level, _ = session.next_level()
        assert level.number == 2
        assert level.food == 99
        assert len(level.enemies) == 1
        assert level.turn_state is TurnState.CONTROLLED_TURN

    def test_next_level_requires_completion(self, session: GameSession) -> None:
        with pytest.raises(InvalidPhaseTransition):
            session.next_level()

    def test_starving_ends_the_game(self, sink: RecordingSink) -> None:
        config = GameConfig(seed=3, wall_count=(0, 0), food_count=(0, 0), starting_food=2)
        session = GameSession(config, sink=sink)
        session.setup_level(1)
        session.request_controlled_move(1, 0)
        finish_turn(session)
        assert not session.is_game_over()
        session.request_controlled_move(1, 0)
        assert session.is_game_over()
        assert session.level.food == 0
        assert sink.of_type(GameOver) == [GameOver(level=1)]
        with pytest.raises(InvalidPhaseTransition):
            session.request_controlled_move(1, 0)
        with pytest.raises(InvalidPhaseTransition):
            session.advance_autonomous_phase()

    def test_reset_level_aborts_pending_phase(self, empty_config: GameConfig) -> None:
        session = GameSession(empty_config)
        session.setup_level(2)
        session.request_controlled_move(0, 1)
        phase = session.advance_autonomous_phase()
        level, _ = session.reset_level()
        assert list(phase) == []
        assert level.number == 2
        assert level.food == 100
        assert level.turn_state is TurnState.CONTROLLED_TURN


class TestEnemies:
    """Tests for the autonomous phase driven through the session."""

    @pytest.fixture
    def hunted(self, empty_config: GameConfig, sink: RecordingSink) -> GameSession:
        """Level 2 with its single enemy parked two columns right of the player."""
        session = GameSession(empty_config, sink=sink)
        level, _ = session.setup_level(2)
        [enemy] = level.enemies
        enemy.cell = Cell(1, 4)
        enemy.damage = 10
        sink.clear()
        return session

    def test_enemy_chases_then_attacks(self, hunted: GameSession) -> None:
        level = hunted.level
        [enemy] = level.enemies

        hunted.request_controlled_move(1, 0)
        [outcome] = finish_turn(hunted)
        assert outcome.entity_id == enemy.entity_id
        assert outcome.moved
        assert enemy.cell == Cell(1, 3)

        hunted.request_controlled_move(0, 1)
        [outcome] = finish_turn(hunted)
        assert outcome.skipped
        assert enemy.cell == Cell(1, 3)

        hunted.request_controlled_move(0, -1)
        [outcome] = finish_turn(hunted)
        assert outcome.blocked
        assert outcome.interaction.kind is InteractionKind.ATTACK
        assert outcome.interaction.target_role is Role.PLAYER
        assert level.food == 100 - 3 - 10
        assert level.turn_state is TurnState.CONTROLLED_TURN

    def test_enemy_blocked_by_wall_does_nothing(self, hunted: GameSession) -> None:
        level = hunted.level
        wall = level.registry.spawn(Role.WALL, Cell(1, 3), points=4)
        hunted.request_controlled_move(0, 1)
        [outcome] = finish_turn(hunted)
        assert outcome.blocked
        assert outcome.interactions == ()
        assert wall.points == 4

    def test_enemy_defeats_player_mid_phase(
        self,
        hunted: GameSession,
        sink: RecordingSink,
    ) -> None:
        level = hunted.level
        [enemy] = level.enemies
        enemy.cell = Cell(1, 3)
        level.player.points = 11
        hunted.request_controlled_move(1, 0)
        [outcome] = finish_turn(hunted)
        assert outcome.interaction.target_destroyed
        assert hunted.is_game_over()
        assert level.turn_state is TurnState.SETUP
        assert len(sink.of_type(GameOver)) == 1


class TestInputMapping:
    """Tests for raw axis input to steps."""

    @pytest.mark.parametrize(
        ("horizontal", "vertical", "expected"),
        [(1, 0, (1, 0)), (0, -1, (0, -1)), (-1, 1, (-1, 0)), (0, 0, (0, 0)), (3, 0, (1, 0))],
    )
    def test_horizontal_wins(
        self,
        horizontal: int,
        vertical: int,
        expected: tuple[int, int],
    ) -> None:
        assert input_to_direction(horizontal, vertical) == expected
