"""
Tests for GameConfig loading, validation and command-line overrides.
"""

import json
import os
import tempfile
import unittest

from config import GameConfig, config_from_args, load_config


class TestGameConfig(unittest.TestCase):

    def test_defaults_are_valid(self):
        config = GameConfig().validate()
        self.assertEqual(config.board_size, 8)
        self.assertEqual(config.theme, "prairie")
        self.assertEqual(config.strategy, "random")
        self.assertFalse(config.demo)

    def test_rejects_bad_values(self):
        with self.assertRaises(ValueError):
            GameConfig(board_size=2).validate()
        with self.assertRaises(ValueError):
            GameConfig(theme="jungle").validate()
        with self.assertRaises(ValueError):
            GameConfig(strategy="berserk").validate()
        with self.assertRaises(ValueError):
            GameConfig(projectile_steps=0).validate()

    def test_unknown_keys(self):
        with self.assertRaises(ValueError):
            GameConfig.from_dict({"board_size": 8, "fog_of_war": True})

    def test_dict_round_trip(self):
        config = GameConfig(board_size=10, theme="desert", seed=5)
        self.assertEqual(GameConfig.from_dict(config.to_dict()), config)


class TestCommandLine(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_no_arguments(self):
        self.assertEqual(config_from_args([]), GameConfig())

    def test_flags_override_defaults(self):
        config = config_from_args(["--board-size", "10", "--strategy", "revenge", "--demo",
                                   "--seed", "3"])
        self.assertEqual(config.board_size, 10)
        self.assertEqual(config.strategy, "revenge")
        self.assertTrue(config.demo)
        self.assertEqual(config.seed, 3)

    def test_flags_override_config_file(self):
        path = os.path.join(self.tmpdir.name, "game.json")
        with open(path, "w", encoding="utf-8") as f:
            json.dump({"theme": "arctic", "board_size": 6}, f)
        self.assertEqual(load_config(path).theme, "arctic")

        config = config_from_args(["--config", path, "--board-size", "12"])
        self.assertEqual(config.theme, "arctic")
        self.assertEqual(config.board_size, 12)

    def test_invalid_board_size_flag(self):
        with self.assertRaises(ValueError):
            config_from_args(["--board-size", "40"])


if __name__ == "__main__":
    unittest.main()
