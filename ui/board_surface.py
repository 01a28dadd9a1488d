"""
Presentation surface for the Skirmish board.

The surface keeps a plain view-state record per cell (``CellView``) and
mirrors every change onto the Qt items of a ``BoardView``. It knows nothing
about game rules: it only paints what it is told and reports pointer and
button activity to registered listeners as raw cell indices.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Set

from PySide6.QtWidgets import QMessageBox, QVBoxLayout, QWidget

from combat.enums import BoardTheme, CursorStyle, HealthLevel, SelectColor, Side, TileType
from combat.map import DEFAULT_BOARD_SIZE, calc_health_level, check_index, get_board
from ui.animations import (
    DAMAGE_DURATION_MS,
    PROJECTILE_INTERVAL_MS,
    PROJECTILE_STEPS,
    DamagePopup,
    ProjectileAnimation,
)
from ui.components import GameControls
from ui.map_widget import BoardView

logger = logging.getLogger(__name__)


class SurfaceError(RuntimeError):
    """Misuse of the presentation surface."""


class NotBoundError(SurfaceError):
    """A drawing operation ran before ``bind`` and ``render``."""


@dataclass(frozen=True)
class CharacterGlyph:
    """What a cell shows for the character standing on it."""

    type: str
    side: Side
    health: float
    health_level: HealthLevel


@dataclass
class CellView:
    index: int
    tile: TileType
    selected: Optional[SelectColor] = None
    entered: bool = False
    highlighted: bool = False
    tooltip: str = ""
    content: Optional[CharacterGlyph] = None
    transients: List[str] = field(default_factory=list)


class BoardSurface:
    """Owns the visual state of every cell and broadcasts raw interaction events."""

    def __init__(
        self,
        board_size: int = DEFAULT_BOARD_SIZE,
        damage_duration_ms: int = DAMAGE_DURATION_MS,
        projectile_steps: int = PROJECTILE_STEPS,
        projectile_interval_ms: int = PROJECTILE_INTERVAL_MS,
    ) -> None:
        self.board_size = board_size
        self.board = get_board(board_size)
        self.damage_duration_ms = damage_duration_ms
        self.projectile_steps = projectile_steps
        self.projectile_interval_ms = projectile_interval_ms

        self.container: Optional[QWidget] = None
        self.view: Optional[BoardView] = None
        self.controls: Optional[GameControls] = None
        self.theme: Optional[BoardTheme] = None
        self.cells: List[CellView] = []
        self.cursor = CursorStyle.AUTO
        self._selected: Dict[SelectColor, int] = {}
        self._animations: Set = set()

        self.cell_enter_listeners: List[Callable[[int], None]] = []
        self.cell_leave_listeners: List[Callable[[int], None]] = []
        self.cell_click_listeners: List[Callable[[int], None]] = []
        self.new_game_listeners: List[Callable[[], None]] = []
        self.save_game_listeners: List[Callable[[], None]] = []
        self.load_game_listeners: List[Callable[[], None]] = []

    # ------------------------------------------------------------------
    # Binding and rendering
    # ------------------------------------------------------------------

    def bind(self, container: QWidget) -> None:
        if not isinstance(container, QWidget):
            raise TypeError("container is not a QWidget")
        self.container = container
        self.view = None
        self.cells = []

    def check_binding(self) -> None:
        if self.container is None:
            raise NotBoundError("BoardSurface is not bound to a container")
        if self.view is None:
            raise NotBoundError("BoardSurface is bound but not rendered")

    def render(self, theme: BoardTheme = BoardTheme.PRAIRIE) -> None:
        """Build the control row and the N x N board inside the bound container."""
        if self.container is None:
            raise NotBoundError("BoardSurface is not bound to a container")
        if self.view is not None:
            raise SurfaceError("BoardSurface is already rendered for this container")
        self.theme = BoardTheme(theme)

        layout = self.container.layout()
        if layout is None:
            layout = QVBoxLayout()
            self.container.setLayout(layout)

        self.controls = GameControls()
        self.controls.btn_new_game.clicked.connect(self._on_new_game)
        self.controls.btn_save_game.clicked.connect(self._on_save_game)
        self.controls.btn_load_game.clicked.connect(self._on_load_game)
        layout.addWidget(self.controls)

        self.view = BoardView(self.board_size)
        self.view.draw_grid(self.board, self.theme)
        self.view.cellEntered.connect(self._on_cell_enter)
        self.view.cellLeft.connect(self._on_cell_leave)
        self.view.cellClicked.connect(self._on_cell_click)
        layout.addWidget(self.view)

        self.cells = [CellView(index=i, tile=tile) for i, tile in enumerate(self.board)]
        self._selected = {}
        logger.debug("Rendered %dx%d board with theme %s",
                      self.board_size, self.board_size, self.theme.value)

    def set_theme(self, theme: BoardTheme) -> None:
        """Repaint tiles with another theme.

        Cell items are re-tinted in place, so contents and in-flight
        animations carry on; selection pens are re-applied on top.
        """
        self.check_binding()
        self.theme = BoardTheme(theme)
        self.view.restyle(self.board, self.theme)
        for cell in self.cells:
            if cell.selected is not None:
                self.view.paint_selection(cell.index, cell.selected)

    def redraw_positions(self, positions: Iterable) -> None:
        """Full repaint of cell contents from PositionedCharacter-like objects."""
        self.check_binding()
        for cell in self.cells:
            cell.content = None
            self.view.clear_content(cell.index)

        for position in positions:
            index = self._check_index(position.position)
            character = position.character
            glyph = CharacterGlyph(
                type=character.type,
                side=character.side,
                health=character.health,
                health_level=calc_health_level(character.health),
            )
            self.cells[index].content = glyph
            self._draw_glyph(index, glyph)

    def _draw_glyph(self, index: int, glyph: CharacterGlyph) -> None:
        self.view.clear_content(index)
        self.view.draw_character(index, glyph.type, glyph.side, glyph.health, glyph.health_level)

    def _check_index(self, index: int) -> int:
        return check_index(index, self.board_size)

    # ------------------------------------------------------------------
    # Listener registration
    # ------------------------------------------------------------------

    def add_cell_enter_listener(self, callback: Callable[[int], None]) -> None:
        self.cell_enter_listeners.append(callback)

    def add_cell_leave_listener(self, callback: Callable[[int], None]) -> None:
        self.cell_leave_listeners.append(callback)

    def add_cell_click_listener(self, callback: Callable[[int], None]) -> None:
        self.cell_click_listeners.append(callback)

    def add_new_game_listener(self, callback: Callable[[], None]) -> None:
        self.new_game_listeners.append(callback)

    def add_save_game_listener(self, callback: Callable[[], None]) -> None:
        self.save_game_listeners.append(callback)

    def add_load_game_listener(self, callback: Callable[[], None]) -> None:
        self.load_game_listeners.append(callback)

    def _on_cell_enter(self, index: int) -> None:
        for callback in list(self.cell_enter_listeners):
            callback(index)

    def _on_cell_leave(self, index: int) -> None:
        for callback in list(self.cell_leave_listeners):
            callback(index)

    def _on_cell_click(self, index: int) -> None:
        for callback in list(self.cell_click_listeners):
            callback(index)

    def _on_new_game(self) -> None:
        for callback in list(self.new_game_listeners):
            callback()

    def _on_save_game(self) -> None:
        for callback in list(self.save_game_listeners):
            callback()

    def _on_load_game(self) -> None:
        for callback in list(self.load_game_listeners):
            callback()

    # ------------------------------------------------------------------
    # Cell primitives
    # ------------------------------------------------------------------

    def select(self, index: int, color: SelectColor = SelectColor.YELLOW) -> None:
        """Select one cell in a colour channel, releasing the channel's previous cell."""
        self.check_binding()
        self._check_index(index)
        color = SelectColor(color)
        previous = self._selected.get(color)
        if previous is not None and previous != index:
            self.deselect(previous)
        self.deselect(index)
        self.cells[index].selected = color
        self._selected[color] = index
        self.view.paint_selection(index, color)

    def deselect(self, index: int) -> None:
        self.check_binding()
        self._check_index(index)
        cell = self.cells[index]
        if cell.selected is not None and self._selected.get(cell.selected) == index:
            del self._selected[cell.selected]
        cell.selected = None
        self.view.paint_selection(index, None)

    def selected_cell(self, color: SelectColor) -> Optional[int]:
        return self._selected.get(SelectColor(color))

    def enter(self, index: int) -> None:
        self.check_binding()
        self.cells[self._check_index(index)].entered = True

    def leave(self, index: int) -> None:
        self.check_binding()
        self.cells[self._check_index(index)].entered = False

    def highlight(self, indices: Iterable[int]) -> None:
        """Mark cells as legal destinations; adds to whatever is already highlighted."""
        self.check_binding()
        for index in indices:
            self.cells[self._check_index(index)].highlighted = True
            self.view.paint_highlight(index, True)

    def dehighlight(self) -> None:
        self.check_binding()
        for cell in self.cells:
            if cell.highlighted:
                cell.highlighted = False
                self.view.paint_highlight(cell.index, False)

    def highlighted_cells(self) -> Set[int]:
        return {cell.index for cell in self.cells if cell.highlighted}

    def set_tooltip(self, index: int, message: str) -> None:
        self.check_binding()
        self.cells[self._check_index(index)].tooltip = message
        self.view.set_cell_tooltip(index, message)

    def clear_tooltip(self, index: int) -> None:
        self.set_tooltip(index, "")

    def set_cursor(self, style: CursorStyle) -> None:
        self.check_binding()
        self.cursor = CursorStyle(style)
        self.view.apply_cursor(self.cursor)

    # ------------------------------------------------------------------
    # Animations
    # ------------------------------------------------------------------

    def animate_damage(self, index: int, amount) -> Future:
        """Float a damage number over a cell; the future resolves when it is gone."""
        self.check_binding()
        self._check_index(index)
        popup = DamagePopup(self.view.scene, self.view.cell_rect(index), amount,
                            duration_ms=self.damage_duration_ms)
        return self._track(popup, [index], "damage")

    def animate_projectile(self, from_index: int, to_index: int, color: str) -> Future:
        """Fly a projectile between two cell centres in fixed timer steps."""
        self.check_binding()
        self._check_index(from_index)
        self._check_index(to_index)
        projectile = ProjectileAnimation(
            self.view.scene,
            self.view.cell_center(from_index),
            self.view.cell_center(to_index),
            color,
            steps=self.projectile_steps,
            interval_ms=self.projectile_interval_ms,
        )
        return self._track(projectile, [from_index], "projectile")

    def _track(self, animation, indices: List[int], kind: str) -> Future:
        for index in indices:
            self.cells[index].transients.append(kind)
        self._animations.add(animation)

        def _release(_future: Future) -> None:
            self._animations.discard(animation)
            for index in indices:
                if index < len(self.cells) and kind in self.cells[index].transients:
                    self.cells[index].transients.remove(kind)

        animation.future.add_done_callback(_release)
        return animation.start()

    def cancel_animations(self) -> int:
        """Cancel every in-flight animation and remove its element."""
        cancelled = 0
        for animation in list(self._animations):
            if animation.cancel():
                cancelled += 1
        if cancelled:
            logger.debug("Cancelled %d in-flight animations", cancelled)
        return cancelled

    # ------------------------------------------------------------------
    # Dialogs
    # ------------------------------------------------------------------

    def show_error(self, message: str) -> None:
        self.check_binding()
        QMessageBox.critical(self.container, "Error", message)

    def show_message(self, message: str) -> None:
        self.check_binding()
        QMessageBox.information(self.container, "Skirmish", message)
