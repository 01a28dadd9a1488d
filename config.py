"""
Game configuration for Skirmish.

Defaults live here; a JSON file and command-line flags can override them.
"""

import argparse
import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from combat.ai import DEFAULT_STRATEGY, STRATEGY_DEFAULTS
from combat.enums import BoardTheme
from combat.map import DEFAULT_BOARD_SIZE
from combat.persistence import DEFAULT_SAVE_FILE

MIN_BOARD_SIZE = 4
MAX_BOARD_SIZE = 16


@dataclass
class GameConfig:
    board_size: int = DEFAULT_BOARD_SIZE
    theme: str = BoardTheme.PRAIRIE.value
    strategy: str = DEFAULT_STRATEGY
    save_file: str = DEFAULT_SAVE_FILE
    demo: bool = False
    seed: Optional[int] = None
    ai_delay_ms: int = 300
    damage_duration_ms: int = 600
    projectile_steps: int = 50
    projectile_interval_ms: int = 5
    log_level: str = "INFO"

    def validate(self) -> "GameConfig":
        if not MIN_BOARD_SIZE <= self.board_size <= MAX_BOARD_SIZE:
            raise ValueError(f"board_size must be within [{MIN_BOARD_SIZE}, {MAX_BOARD_SIZE}]")
        BoardTheme(self.theme)
        if self.strategy not in STRATEGY_DEFAULTS:
            raise ValueError(f"Unknown strategy: {self.strategy}")
        if self.projectile_steps < 1:
            raise ValueError("projectile_steps must be at least 1")
        return self

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "GameConfig":
        known = {f.name for f in fields(GameConfig)}
        unknown = set(d) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
        return GameConfig(**d).validate()


def load_config(path) -> GameConfig:
    with open(Path(path), "r", encoding="utf-8") as f:
        return GameConfig.from_dict(json.load(f))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Skirmish - turn-based tactical board game")
    parser.add_argument("--config", help="JSON file with GameConfig values")
    parser.add_argument("--board-size", type=int, dest="board_size")
    parser.add_argument("--theme", choices=[t.value for t in BoardTheme])
    parser.add_argument("--strategy", choices=sorted(STRATEGY_DEFAULTS))
    parser.add_argument("--save-file", dest="save_file")
    parser.add_argument("--seed", type=int)
    parser.add_argument("--demo", action="store_true", default=None,
                        help="Let the AI play both sides")
    parser.add_argument("--log-level", dest="log_level",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def config_from_args(argv: Optional[Sequence[str]] = None) -> GameConfig:
    """Defaults, then the ``--config`` file, then explicit flags."""
    args = build_parser().parse_args(argv)
    config = load_config(args.config) if args.config else GameConfig()
    overrides = {k: v for k, v in vars(args).items() if k != "config" and v is not None}
    return GameConfig.from_dict({**config.to_dict(), **overrides})
