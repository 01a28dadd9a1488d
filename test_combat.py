"""
Tests for characters, the reference rules collaborator and persistence.

Tests cover:
- Character construction, health bounds and serialization
- Reachable move/attack sets
- Move/attack commits, damage and deaths
- Turn advance, winner detection and new-game placement
- JSON save/load through GameStateService
"""

import json
import os
import random
import tempfile
import unittest

from combat import (
    ActionKind,
    Character,
    GameState,
    GameStateService,
    HealthLevel,
    IllegalActionError,
    PersistenceError,
    PositionedCharacter,
    Side,
    TurnRecord,
    calc_damage,
    create_character,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _pc(char_type, position, health=None):
    return PositionedCharacter(create_character(char_type, health=health), position)


def _state(*positions, side=Side.PLAYER, board_size=8):
    return GameState(board_size=board_size, positions=list(positions), current_side=side)


class TestCharacter(unittest.TestCase):

    def test_roster_stats(self):
        swordsman = create_character("swordsman")
        self.assertEqual(swordsman.side, Side.PLAYER)
        self.assertEqual((swordsman.attack, swordsman.defence), (40, 10))
        self.assertEqual((swordsman.move_range, swordsman.attack_range), (4, 1))
        daemon = create_character("daemon")
        self.assertEqual(daemon.side, Side.ENEMY)
        self.assertEqual(daemon.attack_range, 4)

    def test_health_bounds(self):
        with self.assertRaises(ValueError):
            Character("bowman", Side.PLAYER, health=101)
        with self.assertRaises(ValueError):
            Character("bowman", Side.PLAYER, health=-1)
        self.assertEqual(Character("bowman", Side.PLAYER, health=0).health, 0)

    def test_with_health_clamps(self):
        c = create_character("undead")
        self.assertEqual(c.with_health(-20).health, 0)
        self.assertFalse(c.with_health(-20).is_alive)
        self.assertEqual(c.with_health(500).health, 100)

    def test_health_level(self):
        self.assertEqual(create_character("bowman", health=10).health_level, HealthLevel.CRITICAL)
        self.assertEqual(create_character("bowman", health=30).health_level, HealthLevel.NORMAL)
        self.assertEqual(create_character("bowman").health_level, HealthLevel.HIGH)

    def test_unknown_type(self):
        with self.assertRaises(ValueError):
            create_character("dragon")

    def test_dict_round_trip(self):
        c = create_character("magician", health=42)
        self.assertEqual(Character.from_dict(json.loads(c.to_json())), c)

    def test_describe_lists_stats(self):
        text = create_character("vampire").describe()
        self.assertIn("⚔25", text)
        self.assertIn("❤50", text)


class TestReachable(unittest.TestCase):

    def test_swordsman_next_to_enemy(self):
        state = _state(_pc("swordsman", 0), _pc("vampire", 9))
        moves, attacks = state.reachable(0)
        self.assertEqual(moves, {1, 2, 3, 4, 8, 16, 24, 32})
        self.assertEqual(attacks, {9})

    def test_bowman_ranged_attack(self):
        state = _state(_pc("bowman", 0), _pc("vampire", 18))
        moves, attacks = state.reachable(0)
        self.assertEqual(moves, {1, 2, 8, 16, 9})
        self.assertEqual(attacks, {18})

    def test_friendly_characters_are_not_targets(self):
        state = _state(_pc("swordsman", 0), _pc("bowman", 1))
        moves, attacks = state.reachable(0)
        self.assertNotIn(1, moves)
        self.assertEqual(attacks, frozenset())

    def test_empty_cell(self):
        state = _state(_pc("swordsman", 0))
        self.assertEqual(state.reachable(30), (frozenset(), frozenset()))

    def test_owned_positions(self):
        state = _state(_pc("swordsman", 0), _pc("bowman", 8), _pc("undead", 63))
        self.assertEqual(state.owned_positions(Side.PLAYER), {0, 8})
        self.assertEqual(state.owned_positions(Side.ENEMY), {63})

    def test_can_act(self):
        frozen = Character("bowman", Side.PLAYER, move_range=0, attack_range=0)
        state = _state(PositionedCharacter(frozen, 0), _pc("undead", 63))
        self.assertFalse(state.can_act(Side.PLAYER))
        self.assertTrue(state.can_act(Side.ENEMY))


class TestCommits(unittest.TestCase):

    def test_move_updates_position_and_log(self):
        state = _state(_pc("swordsman", 0), _pc("undead", 63))
        positions = state.commit_move(0, 3)
        self.assertIn(3, {p.position for p in positions})
        self.assertIsNone(state.character_at(0))
        self.assertEqual(state.last_turn(), TurnRecord(ActionKind.MOVE, 0, 3, Side.PLAYER))

    def test_move_to_unreachable_cell(self):
        state = _state(_pc("swordsman", 0), _pc("undead", 63))
        with self.assertRaises(IllegalActionError):
            state.commit_move(0, 63)
        with self.assertRaises(IllegalActionError):
            state.commit_move(0, 10)

    def test_wrong_side_cannot_act(self):
        state = _state(_pc("swordsman", 0), _pc("undead", 1))
        with self.assertRaises(IllegalActionError):
            state.commit_attack(1, 0)

    def test_attack_damages_target(self):
        state = _state(_pc("swordsman", 0), _pc("vampire", 9))
        state.commit_attack(0, 9)
        self.assertEqual(state.character_at(9).character.health, 35)
        record = state.last_turn()
        self.assertEqual(record.action, ActionKind.ATTACK)
        self.assertEqual(record.damage, 15)

    def test_attack_out_of_range(self):
        state = _state(_pc("swordsman", 0), _pc("vampire", 18))
        with self.assertRaises(IllegalActionError):
            state.commit_attack(0, 18)

    def test_minimum_damage(self):
        weak = create_character("magician")
        tough = create_character("vampire")
        self.assertEqual(calc_damage(weak, tough), 1)

    def test_kill_removes_character_and_decides_winner(self):
        state = _state(_pc("swordsman", 0), _pc("vampire", 9, health=10))
        self.assertFalse(state.is_over())
        positions = state.commit_attack(0, 9)
        self.assertEqual([p.position for p in positions], [0])
        self.assertEqual(state.winner(), Side.PLAYER)
        self.assertTrue(state.is_over())

    def test_advance_turn(self):
        state = _state(_pc("swordsman", 0), _pc("undead", 63))
        self.assertEqual(state.advance_turn(), Side.ENEMY)
        self.assertEqual(state.current_side, Side.ENEMY)
        self.assertEqual(state.advance_turn(), Side.PLAYER)


class TestNewGame(unittest.TestCase):

    def test_teams_start_on_their_columns(self):
        state = GameState.new_game(8, random.Random(7))
        self.assertEqual(len(state.positions), 4)
        self.assertEqual(len({p.position for p in state.positions}), 4)
        for pc in state.positions:
            column = pc.position % 8
            if pc.side is Side.PLAYER:
                self.assertIn(column, (0, 1))
            else:
                self.assertIn(column, (6, 7))
        player_types = sorted(p.character.type for p in state.positions if p.side is Side.PLAYER)
        self.assertEqual(player_types, ["bowman", "swordsman"])
        self.assertEqual(state.current_side, Side.PLAYER)
        self.assertIsNone(state.last_turn())

    def test_seeded_games_repeat(self):
        a = GameState.new_game(8, random.Random(3))
        b = GameState.new_game(8, random.Random(3))
        self.assertEqual(a.positions, b.positions)


class TestPersistence(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmpdir.name, "save.json")

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_save_and_load(self):
        state = _state(_pc("swordsman", 0), _pc("vampire", 9))
        state.commit_attack(0, 9)
        state.advance_turn()
        service = GameStateService(self.path)
        service.save(state)

        loaded = service.load()
        self.assertEqual(loaded.positions, state.positions)
        self.assertEqual(loaded.turns, state.turns)
        self.assertEqual(loaded.current_side, Side.ENEMY)
        self.assertEqual(loaded.board_size, 8)

    def test_missing_file(self):
        with self.assertRaises(PersistenceError):
            GameStateService(self.path).load()

    def test_corrupt_file(self):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("{not json")
        with self.assertRaises(PersistenceError):
            GameStateService(self.path).load()

    def test_bad_payload(self):
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"positions": [{"character": {"type": "bowman", "side": "nobody"},
                                      "position": 0}]}, f)
        with self.assertRaises(PersistenceError):
            GameStateService(self.path).load()

    def test_unwritable_location(self):
        service = GameStateService(os.path.join(self.tmpdir.name, "missing", "save.json"))
        with self.assertRaises(PersistenceError):
            service.save(_state(_pc("swordsman", 0)))


if __name__ == "__main__":
    unittest.main()
