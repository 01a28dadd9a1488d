# Skirmish rules, interaction and AI package

from .enums import (
    Side, ActionKind, TileType, HealthLevel, SelectColor, CursorStyle, BoardTheme,
    MAX_HEALTH,
)
from .map import (
    DEFAULT_BOARD_SIZE, calc_tile_type, calc_health_level, get_board,
    index_to_xy, xy_to_index, chebyshev_distance,
)
from .participant import (
    Character, PositionedCharacter, TurnRecord, CHARACTER_TYPES, create_character,
    types_for_side,
)
from .engine import GameState, IllegalActionError, calc_damage
from .controller import InteractionController, Idle, Armed, IDLE, completed_future, then
from .ai import CombatAI, StrategyResult, STRATEGY_DEFAULTS
from .persistence import GameStateService, PersistenceError

__all__ = [
    "Side", "ActionKind", "TileType", "HealthLevel", "SelectColor", "CursorStyle", "BoardTheme",
    "MAX_HEALTH",
    "DEFAULT_BOARD_SIZE", "calc_tile_type", "calc_health_level", "get_board",
    "index_to_xy", "xy_to_index", "chebyshev_distance",
    "Character", "PositionedCharacter", "TurnRecord", "CHARACTER_TYPES", "create_character",
    "types_for_side",
    "GameState", "IllegalActionError", "calc_damage",
    "InteractionController", "Idle", "Armed", "IDLE", "completed_future", "then",
    "CombatAI", "StrategyResult", "STRATEGY_DEFAULTS",
    "GameStateService", "PersistenceError",
]
