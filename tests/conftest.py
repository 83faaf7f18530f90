"""Shared fixtures for the roguegrid test suite."""

from __future__ import annotations

import pytest

from roguegrid.board.cell import Cell
from roguegrid.board.layout import BoardLayout
from roguegrid.entities.combat import CombatState
from roguegrid.entities.entity import Entity, Role
from roguegrid.entities.registry import EntityRegistry
from roguegrid.simulation.config import GameConfig
from roguegrid.simulation.events import RecordingSink
from roguegrid.simulation.game import GameSession
from roguegrid.simulation.rng import RandomSource


@pytest.fixture
def rng() -> RandomSource:
    """A deterministic random source for reproducible tests."""
    return RandomSource(seed=12345)


@pytest.fixture
def default_config() -> GameConfig:
    """Default game config (no YAML file needed)."""
    return GameConfig()


@pytest.fixture
def empty_config() -> GameConfig:
    """An 8x8 config that places no walls or food, only what tests add."""
    return GameConfig(seed=7, wall_count=(0, 0), food_count=(0, 0))


@pytest.fixture
def small_layout(rng: RandomSource) -> BoardLayout:
    """An 8x8 board with the default 1/1 offsets."""
    return BoardLayout(rows=8, cols=8, rng=rng)


@pytest.fixture
def registry() -> EntityRegistry:
    return EntityRegistry()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def combat(registry: EntityRegistry, sink: RecordingSink) -> CombatState:
    return CombatState(registry, sink)


@pytest.fixture
def player(registry: EntityRegistry) -> Entity:
    """A player with 100 food at (3, 3) and a wall damage of 1."""
    return registry.spawn(Role.PLAYER, Cell(3, 3), points=100, damage=1)


@pytest.fixture
def session(empty_config: GameConfig, sink: RecordingSink) -> GameSession:
    """A session on an empty level 1: player at (1, 1), exit at (5, 5)."""
    game = GameSession(empty_config, sink=sink)
    game.setup_level(1)
    sink.clear()
    return game
