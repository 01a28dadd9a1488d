from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional
import json

from .enums import MAX_HEALTH, ActionKind, HealthLevel, Side
from .map import calc_health_level

# type -> side and base stats
CHARACTER_TYPES: Dict[str, Dict[str, Any]] = {
    "swordsman": {"side": Side.PLAYER, "attack": 40, "defence": 10, "move_range": 4, "attack_range": 1},
    "bowman": {"side": Side.PLAYER, "attack": 25, "defence": 25, "move_range": 2, "attack_range": 2},
    "magician": {"side": Side.PLAYER, "attack": 10, "defence": 40, "move_range": 1, "attack_range": 4},
    "undead": {"side": Side.ENEMY, "attack": 40, "defence": 10, "move_range": 4, "attack_range": 1},
    "vampire": {"side": Side.ENEMY, "attack": 25, "defence": 25, "move_range": 2, "attack_range": 2},
    "daemon": {"side": Side.ENEMY, "attack": 10, "defence": 10, "move_range": 1, "attack_range": 4},
}

START_HEALTH = 50


def types_for_side(side: Side) -> List[str]:
    return [name for name, stats in CHARACTER_TYPES.items() if stats["side"] is side]


@dataclass(frozen=True)
class Character:
    type: str
    side: Side
    health: float = START_HEALTH
    level: int = 1
    attack: int = 10
    defence: int = 10
    move_range: int = 1
    attack_range: int = 1

    def __post_init__(self):
        if not 0 <= self.health <= MAX_HEALTH:
            raise ValueError(f"Health must be within [0, {MAX_HEALTH}], got {self.health}")

    @property
    def health_level(self) -> HealthLevel:
        return calc_health_level(self.health)

    @property
    def is_alive(self) -> bool:
        return self.health > 0

    def with_health(self, health: float) -> "Character":
        d = asdict(self)
        d["health"] = max(0, min(MAX_HEALTH, health))
        return Character(**d)

    def describe(self) -> str:
        """Short stat line shown in cell tooltips."""
        return f"\U0001F396{self.level} ⚔{self.attack} \U0001F6E1{self.defence} ❤{self.health:g}"

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["side"] = self.side.value
        return d

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "Character":
        return Character(
            type=d["type"],
            side=Side(d["side"]),
            health=d.get("health", START_HEALTH),
            level=d.get("level", 1),
            attack=d.get("attack", 10),
            defence=d.get("defence", 10),
            move_range=d.get("move_range", 1),
            attack_range=d.get("attack_range", 1),
        )


def create_character(char_type: str, health: Optional[float] = None, level: int = 1) -> Character:
    """Build a roster character with its type's base stats."""
    if char_type not in CHARACTER_TYPES:
        raise ValueError(f"Unknown character type: {char_type}")
    stats = CHARACTER_TYPES[char_type]
    return Character(
        type=char_type,
        side=stats["side"],
        health=START_HEALTH if health is None else health,
        level=level,
        attack=stats["attack"],
        defence=stats["defence"],
        move_range=stats["move_range"],
        attack_range=stats["attack_range"],
    )


@dataclass(frozen=True)
class PositionedCharacter:
    character: Character
    position: int

    @property
    def side(self) -> Side:
        return self.character.side

    def moved_to(self, position: int) -> "PositionedCharacter":
        return PositionedCharacter(self.character, position)

    def to_dict(self) -> Dict[str, Any]:
        return {"character": self.character.to_dict(), "position": self.position}

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "PositionedCharacter":
        return PositionedCharacter(Character.from_dict(d["character"]), int(d["position"]))


@dataclass(frozen=True)
class TurnRecord:
    action: ActionKind
    from_index: int
    to_index: int
    side: Side
    damage: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "action": self.action.value,
            "from": self.from_index,
            "to": self.to_index,
            "side": self.side.value,
            "damage": self.damage,
        }

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "TurnRecord":
        return TurnRecord(
            action=ActionKind(d["action"]),
            from_index=int(d["from"]),
            to_index=int(d["to"]),
            side=Side(d["side"]),
            damage=d.get("damage"),
        )
