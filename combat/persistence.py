import json
import logging
from pathlib import Path
from typing import Union

from .engine import GameState

logger = logging.getLogger(__name__)

DEFAULT_SAVE_FILE = "skirmish_save.json"


class PersistenceError(RuntimeError):
    """Saving or loading a game failed."""


class GameStateService:
    """Stores a single game slot as JSON on disk."""

    def __init__(self, path: Union[str, Path] = DEFAULT_SAVE_FILE):
        self.path = Path(path)

    def save(self, state: GameState) -> None:
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(state.to_dict(), f, indent=2)
        except (OSError, TypeError, ValueError) as exc:
            raise PersistenceError(f"Could not save game to {self.path}: {exc}") from exc
        logger.info("Saved game to %s", self.path)

    def load(self) -> GameState:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            state = GameState.from_dict(data)
        except (OSError, KeyError, TypeError, ValueError, IndexError) as exc:
            raise PersistenceError(f"Could not load game from {self.path}: {exc}") from exc
        logger.info("Loaded game from %s", self.path)
        return state
