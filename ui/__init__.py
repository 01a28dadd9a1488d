"""
Skirmish UI module - board presentation surface and its Qt widgets.

This module provides:
- The presentation surface (cell view-state, events, animations)
- The board view widget and control row
- Board theming
"""

from .theme import (
    ColorPalette,
    IconProvider,
    board_palette,
    window_stylesheet,
)

from .animations import (
    DamagePopup,
    ProjectileAnimation,
)

from .components import (
    IconButton,
    ControlRow,
    GameControls,
)

from .map_widget import BoardView

from .board_surface import (
    BoardSurface,
    CellView,
    CharacterGlyph,
    NotBoundError,
    SurfaceError,
)

__all__ = [
    # Theme
    "ColorPalette",
    "IconProvider",
    "board_palette",
    "window_stylesheet",
    # Animations
    "DamagePopup",
    "ProjectileAnimation",
    # Components
    "IconButton",
    "ControlRow",
    "GameControls",
    # Board
    "BoardView",
    "BoardSurface",
    "CellView",
    "CharacterGlyph",
    "NotBoundError",
    "SurfaceError",
]
