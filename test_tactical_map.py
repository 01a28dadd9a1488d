"""
Unit tests for the board geometry helpers (combat/map.py).
"""

import unittest

from combat import HealthLevel, TileType
from combat.map import (
    calc_health_level,
    calc_tile_type,
    chebyshev_distance,
    check_index,
    get_board,
    get_cells_in_range,
    get_line_cells,
    index_to_xy,
    xy_to_index,
)


class TestTileType(unittest.TestCase):
    """Tile classification depends only on index and board size."""

    def test_corners_and_edges_on_8x8(self):
        expected = {
            0: TileType.TOP_LEFT,
            1: TileType.TOP,
            7: TileType.TOP_RIGHT,
            8: TileType.LEFT,
            9: TileType.CENTER,
            15: TileType.RIGHT,
            56: TileType.BOTTOM_LEFT,
            57: TileType.BOTTOM,
            63: TileType.BOTTOM_RIGHT,
        }
        for index, tile in expected.items():
            self.assertEqual(calc_tile_type(index, 8), tile, f"index {index}")

    def test_odd_board(self):
        self.assertEqual(calc_tile_type(0, 7), TileType.TOP_LEFT)
        self.assertEqual(calc_tile_type(6, 7), TileType.TOP_RIGHT)
        self.assertEqual(calc_tile_type(24, 7), TileType.CENTER)
        self.assertEqual(calc_tile_type(48, 7), TileType.BOTTOM_RIGHT)

    def test_board_has_one_tile_per_cell(self):
        for size in (4, 5, 8):
            board = get_board(size)
            self.assertEqual(len(board), size ** 2)
            self.assertEqual(board.count(TileType.TOP_LEFT), 1)
            self.assertEqual(board.count(TileType.CENTER), (size - 2) ** 2)

    def test_index_out_of_range(self):
        with self.assertRaises(IndexError):
            calc_tile_type(64, 8)
        with self.assertRaises(IndexError):
            check_index(-1, 8)


class TestHealthLevel(unittest.TestCase):

    def test_bands(self):
        self.assertEqual(calc_health_level(0), HealthLevel.CRITICAL)
        self.assertEqual(calc_health_level(14), HealthLevel.CRITICAL)
        self.assertEqual(calc_health_level(15), HealthLevel.NORMAL)
        self.assertEqual(calc_health_level(49), HealthLevel.NORMAL)
        self.assertEqual(calc_health_level(50), HealthLevel.HIGH)
        self.assertEqual(calc_health_level(100), HealthLevel.HIGH)


class TestDistancesAndRanges(unittest.TestCase):

    def test_index_xy_conversion(self):
        self.assertEqual(index_to_xy(10, 8), (2, 1))
        self.assertEqual(xy_to_index(2, 1, 8), 10)

    def test_chebyshev_distance(self):
        self.assertEqual(chebyshev_distance(0, 63, 8), 7)
        self.assertEqual(chebyshev_distance(0, 18, 8), 2)
        self.assertEqual(chebyshev_distance(0, 9, 8), 1)

    def test_cells_in_range_excludes_centre(self):
        self.assertEqual(sorted(get_cells_in_range(0, 1, 8)), [1, 8, 9])
        around = get_cells_in_range(27, 1, 8)
        self.assertEqual(len(around), 8)
        self.assertNotIn(27, around)

    def test_line_cells_open_board(self):
        self.assertEqual(set(get_line_cells(0, 2, 8)), {1, 2, 8, 16, 9, 18})

    def test_line_cells_stop_before_blocker(self):
        cells = set(get_line_cells(0, 3, 8, blocked={2}))
        self.assertEqual(cells, {1, 8, 16, 24, 9, 18, 27})

    def test_line_cells_respect_board_edge(self):
        cells = get_line_cells(63, 10, 8)
        self.assertEqual(len(cells), 21)
        self.assertTrue(all(0 <= c < 64 for c in cells))


if __name__ == "__main__":
    unittest.main()
