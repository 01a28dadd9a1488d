"""
Reference rules and state collaborator.

``GameState`` owns the authoritative placement of characters, whose turn it
is, and the turn log. The interaction core only reads positions from it and
asks it to commit actions.
"""

from __future__ import annotations

import logging
import random
from typing import Any, Dict, FrozenSet, List, Optional, Set, Tuple

from .enums import ActionKind, Side
from .map import (
    DEFAULT_BOARD_SIZE,
    check_index,
    get_cells_in_range,
    get_line_cells,
    xy_to_index,
)
from .participant import PositionedCharacter, TurnRecord, create_character, types_for_side

logger = logging.getLogger(__name__)

TEAM_SIZE = 2
# Player's starting lineup; the enemy draws its types at random
PLAYER_START_TYPES = ["swordsman", "bowman"]


class IllegalActionError(ValueError):
    """Raised when a commit does not match the current legal move/attack sets."""


def calc_damage(attacker, target) -> int:
    return int(round(max(attacker.attack - target.defence, attacker.attack * 0.1)))


def start_columns(side: Side, board_size: int) -> Tuple[int, int]:
    if side is Side.PLAYER:
        return 0, 1
    return board_size - 2, board_size - 1


def start_cells(side: Side, board_size: int) -> List[int]:
    cells = []
    for y in range(board_size):
        for x in start_columns(side, board_size):
            cells.append(xy_to_index(x, y, board_size))
    return cells


class GameState:
    def __init__(self, board_size: int = DEFAULT_BOARD_SIZE,
                 positions: Optional[List[PositionedCharacter]] = None,
                 current_side: Side = Side.PLAYER,
                 turns: Optional[List[TurnRecord]] = None):
        self.board_size = board_size
        self.positions: List[PositionedCharacter] = list(positions or [])
        self.current_side = current_side
        self.turns: List[TurnRecord] = list(turns or [])
        for pc in self.positions:
            check_index(pc.position, board_size)

    @classmethod
    def new_game(cls, board_size: int = DEFAULT_BOARD_SIZE,
                 rng: Optional[random.Random] = None) -> "GameState":
        """Place a fresh player team on the left columns and a random enemy team on the right."""
        rng = rng or random.Random()
        enemy_types = [rng.choice(types_for_side(Side.ENEMY)) for _ in range(TEAM_SIZE)]
        positions = []
        for side, types in ((Side.PLAYER, PLAYER_START_TYPES), (Side.ENEMY, enemy_types)):
            cells = rng.sample(start_cells(side, board_size), len(types))
            for char_type, cell in zip(types, cells):
                positions.append(PositionedCharacter(create_character(char_type), cell))
        logger.info("New game on %dx%d board: %s vs %s",
                    board_size, board_size, PLAYER_START_TYPES, enemy_types)
        return cls(board_size=board_size, positions=positions)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def character_at(self, index: int) -> Optional[PositionedCharacter]:
        for pc in self.positions:
            if pc.position == index:
                return pc
        return None

    def owned_positions(self, side: Side) -> Set[int]:
        return {pc.position for pc in self.positions if pc.side is side}

    def occupied(self) -> Set[int]:
        return {pc.position for pc in self.positions}

    def reachable(self, from_index: int) -> Tuple[FrozenSet[int], FrozenSet[int]]:
        """Return ``(move_cells, attack_cells)`` for the character at ``from_index``."""
        check_index(from_index, self.board_size)
        pc = self.character_at(from_index)
        if pc is None:
            return frozenset(), frozenset()
        occupied = self.occupied()
        moves = get_line_cells(from_index, pc.character.move_range, self.board_size, occupied)
        enemies = self.owned_positions(pc.side.opponent())
        attacks = [i for i in get_cells_in_range(from_index, pc.character.attack_range, self.board_size)
                   if i in enemies]
        return frozenset(moves), frozenset(attacks)

    def can_act(self, side: Side) -> bool:
        """True if any of ``side``'s characters has a move or an attack."""
        for index in self.owned_positions(side):
            moves, attacks = self.reachable(index)
            if moves or attacks:
                return True
        return False

    def last_turn(self) -> Optional[TurnRecord]:
        return self.turns[-1] if self.turns else None

    def winner(self) -> Optional[Side]:
        sides = {pc.side for pc in self.positions}
        if len(sides) == 1:
            return sides.pop()
        return None

    def is_over(self) -> bool:
        return self.winner() is not None or not self.positions

    # ------------------------------------------------------------------
    # Commits
    # ------------------------------------------------------------------

    def _acting(self, from_index: int) -> PositionedCharacter:
        pc = self.character_at(from_index)
        if pc is None:
            raise IllegalActionError(f"No character at cell {from_index}")
        if pc.side is not self.current_side:
            raise IllegalActionError(f"Character at cell {from_index} does not belong to {self.current_side.value}")
        return pc

    def commit_move(self, from_index: int, to_index: int) -> List[PositionedCharacter]:
        pc = self._acting(from_index)
        moves, _ = self.reachable(from_index)
        if to_index not in moves:
            raise IllegalActionError(f"Cell {to_index} is not reachable from {from_index}")
        self.positions = [p.moved_to(to_index) if p is pc else p for p in self.positions]
        self.turns.append(TurnRecord(ActionKind.MOVE, from_index, to_index, pc.side))
        logger.debug("%s %s moved %d -> %d", pc.side.value, pc.character.type, from_index, to_index)
        return list(self.positions)

    def commit_attack(self, from_index: int, to_index: int) -> List[PositionedCharacter]:
        attacker = self._acting(from_index)
        _, attacks = self.reachable(from_index)
        if to_index not in attacks:
            raise IllegalActionError(f"Cell {to_index} is not attackable from {from_index}")
        target = self.character_at(to_index)
        damage = calc_damage(attacker.character, target.character)
        wounded = target.character.with_health(target.character.health - damage)
        positions = []
        for p in self.positions:
            if p is target:
                if not wounded.is_alive:
                    logger.info("%s %s at cell %d died", target.side.value, wounded.type, to_index)
                    continue
                p = PositionedCharacter(wounded, to_index)
            positions.append(p)
        self.positions = positions
        self.turns.append(TurnRecord(ActionKind.ATTACK, from_index, to_index, attacker.side, damage))
        logger.debug("%s %s hit cell %d for %d", attacker.side.value, attacker.character.type,
                     to_index, damage)
        return list(self.positions)

    def advance_turn(self) -> Side:
        self.current_side = self.current_side.opponent()
        return self.current_side

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "board_size": self.board_size,
            "current_side": self.current_side.value,
            "positions": [pc.to_dict() for pc in self.positions],
            "turns": [t.to_dict() for t in self.turns],
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "GameState":
        return cls(
            board_size=int(d.get("board_size", DEFAULT_BOARD_SIZE)),
            positions=[PositionedCharacter.from_dict(p) for p in d.get("positions", [])],
            current_side=Side(d.get("current_side", Side.PLAYER.value)),
            turns=[TurnRecord.from_dict(t) for t in d.get("turns", [])],
        )
