"""Config — load game parameters from YAML files.

Board size, zone offsets, placement ranges, entity stats, and phase
timing live in YAML and are parsed into a typed dataclass here.  Every
key is optional; anything missing keeps the default below.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml


def _default_food_kinds() -> dict[str, int]:
    return {"food": 10, "soda": 20}


def _default_enemy_kinds() -> dict[str, int]:
    return {"enemy1": 10, "enemy2": 20}


@dataclass
class GameConfig:
    """Top-level game configuration.

    Attributes:
        seed: RNG seed; a fixed seed reproduces identical levels.
        rows: Number of grid rows.
        cols: Number of grid columns.
        outer_wall_offset: Thickness of the indestructible border.
        safe_zone_offset: Thickness of the empty ring inside the border.
        wall_count: Inclusive (min, max) breakable walls per level.
        food_count: Inclusive (min, max) consumables per level.
        wall_hp: Hit points of a breakable wall.
        wall_damage: Damage the player deals to a wall per chop.
        starting_food: Player food points at the start of level 1.
        food_per_move: Food points each player move attempt costs.
        food_kinds: Consumable kind name -> food points restored.
        enemy_kinds: Enemy kind name -> food points taken per hit.
        wall_variants: Number of breakable wall tile variants.
        outer_wall_variants: Number of outer wall tile variants.
        floor_variants: Number of floor tile variants.
        allow_diagonal: Whether unit moves may be diagonal.
        turn_delay: Seconds before the enemy phase starts moving.
        enemy_move_time: Seconds each enemy move takes.
        level_start_delay: Seconds the level title shows before play.
        log_level: Root logging level name.
    """

    seed: int = 42
    rows: int = 8
    cols: int = 8
    outer_wall_offset: int = 1
    safe_zone_offset: int = 1

    # Placement
    wall_count: tuple[int, int] = (5, 9)
    food_count: tuple[int, int] = (1, 5)

    # Stats
    wall_hp: int = 4
    wall_damage: int = 1
    starting_food: int = 100
    food_per_move: int = 1
    food_kinds: dict[str, int] = field(default_factory=_default_food_kinds)
    enemy_kinds: dict[str, int] = field(default_factory=_default_enemy_kinds)

    # Tile variants (presentation only)
    wall_variants: int = 8
    outer_wall_variants: int = 3
    floor_variants: int = 8

    allow_diagonal: bool = False

    # Phase timing
    turn_delay: float = 0.1
    enemy_move_time: float = 0.1
    level_start_delay: float = 2.0

    log_level: str = "INFO"

    @classmethod
    def from_yaml(cls, path: str | Path) -> GameConfig:
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated GameConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        return cls(
            seed=data.get("seed", cls.seed),
            rows=data.get("rows", cls.rows),
            cols=data.get("cols", cls.cols),
            outer_wall_offset=data.get("outer_wall_offset", cls.outer_wall_offset),
            safe_zone_offset=data.get("safe_zone_offset", cls.safe_zone_offset),
            wall_count=tuple(data.get("wall_count", cls.wall_count)),
            food_count=tuple(data.get("food_count", cls.food_count)),
            wall_hp=data.get("wall_hp", cls.wall_hp),
            wall_damage=data.get("wall_damage", cls.wall_damage),
            starting_food=data.get("starting_food", cls.starting_food),
            food_per_move=data.get("food_per_move", cls.food_per_move),
            food_kinds=data.get("food_kinds", _default_food_kinds()),
            enemy_kinds=data.get("enemy_kinds", _default_enemy_kinds()),
            wall_variants=data.get("wall_variants", cls.wall_variants),
            outer_wall_variants=data.get(
                "outer_wall_variants",
                cls.outer_wall_variants,
            ),
            floor_variants=data.get("floor_variants", cls.floor_variants),
            allow_diagonal=data.get("allow_diagonal", cls.allow_diagonal),
            turn_delay=data.get("turn_delay", cls.turn_delay),
            enemy_move_time=data.get("enemy_move_time", cls.enemy_move_time),
            level_start_delay=data.get(
                "level_start_delay",
                cls.level_start_delay,
            ),
            log_level=data.get("log_level", cls.log_level),
        )
