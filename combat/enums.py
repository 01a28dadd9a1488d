from enum import Enum


class Side(Enum):
    PLAYER = "player"
    ENEMY = "enemy"

    def opponent(self) -> "Side":
        return Side.ENEMY if self is Side.PLAYER else Side.PLAYER


class ActionKind(Enum):
    MOVE = "move"
    ATTACK = "attack"


class TileType(Enum):
    TOP_LEFT = "top-left"
    TOP = "top"
    TOP_RIGHT = "top-right"
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM = "bottom"
    BOTTOM_RIGHT = "bottom-right"


class HealthLevel(Enum):
    CRITICAL = "critical"
    NORMAL = "normal"
    HIGH = "high"


class SelectColor(Enum):
    YELLOW = "yellow"
    GREEN = "green"
    RED = "red"


class CursorStyle(Enum):
    AUTO = "auto"
    POINTER = "pointer"
    CROSSHAIR = "crosshair"
    NOT_ALLOWED = "not-allowed"


class BoardTheme(Enum):
    PRAIRIE = "prairie"
    DESERT = "desert"
    ARCTIC = "arctic"
    MOUNTAIN = "mountain"


MAX_HEALTH = 100
CRITICAL_HEALTH = 15
NORMAL_HEALTH = 50
