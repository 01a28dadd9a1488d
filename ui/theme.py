"""
Board theming for Skirmish.
Provides board palettes per theme, selection and health colours, icons and
the window stylesheet.
"""

import logging
from typing import Dict

from PySide6.QtGui import QColor, QIcon
import qtawesome as qta

from combat.enums import BoardTheme, HealthLevel, SelectColor, Side

logger = logging.getLogger(__name__)


class ColorPalette:
    """Centralized color definitions for the board and its window."""

    # Tile fill for inner cells, edge cells and grid lines
    BOARDS = {
        BoardTheme.PRAIRIE: {"tile": "#7fb069", "edge": "#669457", "grid": "#3f5e32"},
        BoardTheme.DESERT: {"tile": "#e6c384", "edge": "#cfa860", "grid": "#8a6a35"},
        BoardTheme.ARCTIC: {"tile": "#e8f1f5", "edge": "#c9dbe3", "grid": "#8aa6b3"},
        BoardTheme.MOUNTAIN: {"tile": "#9a9a9a", "edge": "#808080", "grid": "#4f4f4f"},
    }

    SELECTION = {
        SelectColor.YELLOW: "#f5d300",
        SelectColor.GREEN: "#2ecc71",
        SelectColor.RED: "#e74c3c",
    }

    HEALTH = {
        HealthLevel.CRITICAL: "#e74c3c",
        HealthLevel.NORMAL: "#f1c40f",
        HealthLevel.HIGH: "#2ecc71",
    }

    SIDES = {
        Side.PLAYER: "#1d3f8f",
        Side.ENEMY: "#7a1010",
    }

    HIGHLIGHT_OVERLAY = QColor(255, 255, 255, 90)
    DAMAGE_TEXT = "#d00000"

    WINDOW = {
        "bg_primary": "#1a1410",        # Deep charcoal/brown
        "bg_secondary": "#2d2519",      # Panels
        "text_primary": "#e8dcc4",      # Aged parchment text
        "accent": "#d4af37",            # Gold
    }


def board_palette(theme: BoardTheme) -> Dict[str, str]:
    return ColorPalette.BOARDS[BoardTheme(theme)]


def _safe_icon(primary: str, fallback: str = "") -> QIcon:
    """Try to create a qtawesome icon, falling back gracefully."""
    for name in (primary, fallback):
        if not name:
            continue
        try:
            return qta.icon(name)
        except Exception as exc:
            logger.debug("Icon %s unavailable: %s", name, exc)
    return QIcon()


class IconProvider:
    """Provides Font Awesome icons for the control row."""

    # Icon definitions, lazy loaded since qtawesome needs a QApplication
    _ICON_DEFS = {
        "new": ("fa6s.chess-board", "fa.th"),
        "save": ("fa6s.floppy-disk", "fa.save"),
        "load": ("fa6s.folder-open", "fa.folder-open"),
    }
    _cache: Dict[str, QIcon] = {}

    @staticmethod
    def get_icon(name: str) -> QIcon:
        if name not in IconProvider._cache:
            defs = IconProvider._ICON_DEFS.get(name)
            IconProvider._cache[name] = _safe_icon(*defs) if defs else QIcon()
        return IconProvider._cache[name]


def window_stylesheet() -> str:
    colors = ColorPalette.WINDOW
    return f"""
        QWidget {{ background: {colors['bg_primary']}; color: {colors['text_primary']}; }}
        QPushButton {{ background: {colors['bg_secondary']}; border: 1px solid {colors['accent']};
                      padding: 6px 10px; border-radius: 4px; color: {colors['text_primary']}; }}
        QPushButton:hover {{ background: {colors['accent']}; color: {colors['bg_primary']}; }}
        QLabel {{ color: {colors['text_primary']}; }}
    """
