"""Entry point for ``python -m roguegrid``.

Loads the default YAML config, applies command-line overrides, and opens
a Pygame window to play the game.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import pathlib

from roguegrid.simulation.config import GameConfig
from roguegrid.simulation.errors import ConfigurationError
from roguegrid.utils.logging import setup_logging

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Return the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="roguegrid",
        description="roguegrid - turn-based grid survival game",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Override the RNG seed from the config file",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=48,
        help="Pixel size per grid cell (default: 48)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=30,
        help="Target frames per second (default: 30)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: from config)",
    )
    return parser


def load_config(args: argparse.Namespace) -> GameConfig:
    """Load the YAML config and apply command-line overrides."""
    config = GameConfig.from_yaml(args.config)
    if args.seed is not None:
        config = dataclasses.replace(config, seed=args.seed)
    if args.log_level is not None:
        config = dataclasses.replace(config, log_level=args.log_level)
    return config


def main() -> None:
    """Parse CLI args, load config, launch the renderer."""
    parser = build_parser()
    args = parser.parse_args()

    try:
        config = load_config(args)
    except FileNotFoundError:
        parser.error(f"config file not found: {args.config}")

    try:
        setup_logging(config.log_level)
    except ConfigurationError as exc:
        parser.error(str(exc))
    logger.info("Starting roguegrid with seed %d", config.seed)

    from roguegrid.ui.pygame_client import PygameRenderer

    try:
        renderer = PygameRenderer(config=config, cell_size=args.cell_size)
    except ConfigurationError as exc:
        parser.error(str(exc))
    renderer.run(fps=args.fps)


if __name__ == "__main__":
    main()
