"""
Board view widget for Skirmish.
Paints the N x N grid with QGraphicsScene items and reports pointer activity
as cell indices.
"""

from typing import Dict, List, Optional

from PySide6.QtCore import QPointF, QRectF, Qt, Signal
from PySide6.QtGui import QBrush, QColor, QCursor, QFont, QPainter, QPen
from PySide6.QtWidgets import QGraphicsScene, QGraphicsView

from combat.enums import BoardTheme, CursorStyle, HealthLevel, SelectColor, Side, TileType
from ui.theme import ColorPalette, board_palette

EDGE_TILES = {
    TileType.TOP_LEFT, TileType.TOP, TileType.TOP_RIGHT, TileType.LEFT,
    TileType.RIGHT, TileType.BOTTOM_LEFT, TileType.BOTTOM, TileType.BOTTOM_RIGHT,
}

CURSOR_SHAPES = {
    CursorStyle.AUTO: Qt.CursorShape.ArrowCursor,
    CursorStyle.POINTER: Qt.CursorShape.PointingHandCursor,
    CursorStyle.CROSSHAIR: Qt.CursorShape.CrossCursor,
    CursorStyle.NOT_ALLOWED: Qt.CursorShape.ForbiddenCursor,
}

# Z layers
Z_TILE = 0
Z_SELECTED = 1
Z_HIGHLIGHT = 2
Z_CONTENT = 3
Z_TRANSIENT = 5


class BoardView(QGraphicsView):
    """Tactical board that emits cell indices for enter, leave and click."""

    CELL_WIDTH = 48
    CELL_HEIGHT = 48

    cellEntered = Signal(int)
    cellLeft = Signal(int)
    cellClicked = Signal(int)

    def __init__(self, board_size: int, parent=None):
        super().__init__(parent)
        self.scene = QGraphicsScene(self)
        self.setScene(self.scene)
        self.board_size = board_size
        self.cell_items = []
        self.overlay_items = []
        self.content_items: Dict[int, List] = {}
        self._grid_pen = QPen(QColor("#999999"))
        self._last_hover: Optional[int] = None

        self.scene.setSceneRect(0, 0, board_size * self.CELL_WIDTH, board_size * self.CELL_HEIGHT)
        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setMouseTracking(True)

    def draw_grid(self, tiles: List[TileType], theme: BoardTheme):
        """Create one rect per cell, tinted by theme and tile classification."""
        palette = board_palette(theme)
        self._grid_pen = QPen(QColor(palette["grid"]))
        self._grid_pen.setWidth(1)
        self.scene.clear()
        self.cell_items = []
        self.overlay_items = []
        self.content_items = {}

        for index, tile in enumerate(tiles):
            rect = self.cell_rect(index)
            color = palette["edge"] if tile in EDGE_TILES else palette["tile"]
            rect_item = self.scene.addRect(rect, self._grid_pen, QBrush(QColor(color)))
            rect_item.setData(0, tile.value)
            rect_item.setZValue(Z_TILE)
            overlay = self.scene.addRect(rect, QPen(Qt.PenStyle.NoPen),
                                         QBrush(ColorPalette.HIGHLIGHT_OVERLAY))
            overlay.setZValue(Z_HIGHLIGHT)
            overlay.setVisible(False)
            self.cell_items.append(rect_item)
            self.overlay_items.append(overlay)
            self.content_items[index] = []

    def restyle(self, tiles: List[TileType], theme: BoardTheme):
        """Re-tint the existing cell items; contents and transient items are untouched."""
        palette = board_palette(theme)
        self._grid_pen = QPen(QColor(palette["grid"]))
        self._grid_pen.setWidth(1)
        for item, tile in zip(self.cell_items, tiles):
            color = palette["edge"] if tile in EDGE_TILES else palette["tile"]
            item.setBrush(QBrush(QColor(color)))
            item.setPen(self._grid_pen)

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def cell_rect(self, index: int) -> QRectF:
        x = (index % self.board_size) * self.CELL_WIDTH
        y = (index // self.board_size) * self.CELL_HEIGHT
        return QRectF(x, y, self.CELL_WIDTH - 1, self.CELL_HEIGHT - 1)

    def cell_center(self, index: int) -> QPointF:
        return self.cell_rect(index).center()

    # ------------------------------------------------------------------
    # Cell painting
    # ------------------------------------------------------------------

    def paint_selection(self, index: int, color: Optional[SelectColor]):
        item = self.cell_items[index]
        if color is None:
            item.setPen(self._grid_pen)
            item.setZValue(Z_TILE)
            return
        pen = QPen(QColor(ColorPalette.SELECTION[color]))
        pen.setWidth(3)
        item.setPen(pen)
        item.setZValue(Z_SELECTED)

    def paint_highlight(self, index: int, highlighted: bool):
        self.overlay_items[index].setVisible(highlighted)

    def set_cell_tooltip(self, index: int, text: str):
        self.cell_items[index].setToolTip(text)

    def clear_content(self, index: int):
        for item in self.content_items[index]:
            self.scene.removeItem(item)
        self.content_items[index] = []

    def draw_character(self, index: int, char_type: str, side: Side,
                       health: float, level: HealthLevel):
        rect = self.cell_rect(index)
        text_item = self.scene.addSimpleText(char_type[:2].title())
        font = QFont()
        font.setPointSize(12)
        font.setBold(True)
        text_item.setFont(font)
        text_item.setBrush(QBrush(QColor(ColorPalette.SIDES[side])))
        text_item.setPos(rect.x() + 10, rect.y() + 6)

        bar_width = rect.width() - 8
        bar = self.scene.addRect(rect.x() + 4, rect.bottom() - 8, bar_width, 4,
                                 QPen(Qt.PenStyle.NoPen), QBrush(QColor("#333333")))
        indicator = self.scene.addRect(rect.x() + 4, rect.bottom() - 8, bar_width * health / 100, 4,
                                       QPen(Qt.PenStyle.NoPen),
                                       QBrush(QColor(ColorPalette.HEALTH[level])))
        for item in (text_item, bar, indicator):
            item.setZValue(Z_CONTENT)
        self.content_items[index] = [text_item, bar, indicator]

    def apply_cursor(self, style: CursorStyle):
        self.viewport().setCursor(QCursor(CURSOR_SHAPES[CursorStyle(style)]))

    # ------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            index = self._event_to_cell(event)
            if index is not None:
                self.cellClicked.emit(index)
        return super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        index = self._event_to_cell(event)
        if index != self._last_hover:
            if self._last_hover is not None:
                self.cellLeft.emit(self._last_hover)
            self._last_hover = index
            if index is not None:
                self.cellEntered.emit(index)
        return super().mouseMoveEvent(event)

    def leaveEvent(self, event):
        if self._last_hover is not None:
            self.cellLeft.emit(self._last_hover)
            self._last_hover = None
        return super().leaveEvent(event)

    def _event_to_cell(self, event) -> Optional[int]:
        scene_pos = self.mapToScene(event.position().toPoint())
        x = int(scene_pos.x() // self.CELL_WIDTH)
        y = int(scene_pos.y() // self.CELL_HEIGHT)
        if 0 <= x < self.board_size and 0 <= y < self.board_size:
            return y * self.board_size + x
        return None
