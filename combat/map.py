from typing import List, Tuple

from .enums import CRITICAL_HEALTH, NORMAL_HEALTH, HealthLevel, TileType

DEFAULT_BOARD_SIZE = 8

# Queen directions as (dx, dy)
DIRECTIONS = [(0, -1), (1, -1), (1, 0), (1, 1), (0, 1), (-1, 1), (-1, 0), (-1, -1)]


def check_index(index: int, board_size: int) -> int:
    if not 0 <= index < board_size ** 2:
        raise IndexError(f"Cell index {index} outside board of size {board_size}")
    return index


def index_to_xy(index: int, board_size: int) -> Tuple[int, int]:
    check_index(index, board_size)
    return index % board_size, index // board_size


def xy_to_index(x: int, y: int, board_size: int) -> int:
    return y * board_size + x


def in_bounds(x: int, y: int, board_size: int) -> bool:
    return 0 <= x < board_size and 0 <= y < board_size


def calc_tile_type(index: int, board_size: int) -> TileType:
    """Classify a cell by its place on the board edge."""
    x, y = index_to_xy(index, board_size)
    last = board_size - 1
    if y == 0:
        if x == 0:
            return TileType.TOP_LEFT
        if x == last:
            return TileType.TOP_RIGHT
        return TileType.TOP
    if y == last:
        if x == 0:
            return TileType.BOTTOM_LEFT
        if x == last:
            return TileType.BOTTOM_RIGHT
        return TileType.BOTTOM
    if x == 0:
        return TileType.LEFT
    if x == last:
        return TileType.RIGHT
    return TileType.CENTER


def get_board(board_size: int) -> List[TileType]:
    return [calc_tile_type(i, board_size) for i in range(board_size ** 2)]


def calc_health_level(health: float) -> HealthLevel:
    if health < CRITICAL_HEALTH:
        return HealthLevel.CRITICAL
    if health < NORMAL_HEALTH:
        return HealthLevel.NORMAL
    return HealthLevel.HIGH


def chebyshev_distance(a: int, b: int, board_size: int) -> int:
    ax, ay = index_to_xy(a, board_size)
    bx, by = index_to_xy(b, board_size)
    return max(abs(ax - bx), abs(ay - by))


def get_cells_in_range(center: int, max_range: int, board_size: int) -> List[int]:
    """Cells within Chebyshev distance ``max_range`` of ``center``, centre excluded."""
    cx, cy = index_to_xy(center, board_size)
    cells = []
    for y in range(max(0, cy - max_range), min(board_size, cy + max_range + 1)):
        for x in range(max(0, cx - max_range), min(board_size, cx + max_range + 1)):
            if (x, y) != (cx, cy):
                cells.append(xy_to_index(x, y, board_size))
    return cells


def get_line_cells(start: int, max_steps: int, board_size: int, blocked=frozenset()) -> List[int]:
    """Cells along the eight straight lines from ``start``.

    Each ray stops before the first cell in ``blocked``.
    """
    sx, sy = index_to_xy(start, board_size)
    cells = []
    for dx, dy in DIRECTIONS:
        x, y = sx, sy
        for _ in range(max_steps):
            x += dx
            y += dy
            if not in_bounds(x, y, board_size):
                break
            index = xy_to_index(x, y, board_size)
            if index in blocked:
                break
            cells.append(index)
    return cells
