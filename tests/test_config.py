"""Tests for roguegrid.simulation.config — YAML loading and the CLI."""

from pathlib import Path

from roguegrid.__main__ import _DEFAULT_CONFIG, build_parser, load_config
from roguegrid.simulation.config import GameConfig


class TestGameConfig:
    """Tests for YAML config loading."""

    def test_defaults(self) -> None:
        cfg = GameConfig()
        assert cfg.seed == 42
        assert (cfg.rows, cfg.cols) == (8, 8)
        assert cfg.wall_count == (5, 9)
        assert cfg.food_count == (1, 5)
        assert cfg.food_kinds == {"food": 10, "soda": 20}

    def test_from_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "test.yaml"
        yaml_file.write_text(
            "seed: 99\nrows: 10\ncols: 12\nwall_count: [2, 3]\n"
            "enemy_kinds:\n  zombie: 5\n",
        )
        cfg = GameConfig.from_yaml(yaml_file)
        assert cfg.seed == 99
        assert cfg.cols == 12
        assert cfg.wall_count == (2, 3)
        assert cfg.enemy_kinds == {"zombie": 5}
        assert cfg.food_kinds == {"food": 10, "soda": 20}
        assert cfg.wall_hp == 4

    def test_empty_yaml_gives_defaults(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")
        assert GameConfig.from_yaml(yaml_file) == GameConfig()

    def test_shipped_default_matches_dataclass(self) -> None:
        assert GameConfig.from_yaml(_DEFAULT_CONFIG) == GameConfig()


class TestCommandLine:
    """Tests for argument parsing and overrides."""

    def test_overrides(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "cfg.yaml"
        yaml_file.write_text("seed: 5\n")
        args = build_parser().parse_args(
            ["-c", str(yaml_file), "--seed", "11", "--log-level", "DEBUG"],
        )
        cfg = load_config(args)
        assert cfg.seed == 11
        assert cfg.log_level == "DEBUG"

    def test_defaults_use_shipped_config(self) -> None:
        args = build_parser().parse_args([])
        assert args.config == _DEFAULT_CONFIG
        assert load_config(args).seed == 42
