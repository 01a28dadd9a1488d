"""
Transient board animations for Skirmish.

Each animation owns a ``concurrent.futures.Future`` that resolves when the
animation has finished and its scene item has been removed, so callers can
sequence several of them. Cancelling the future stops the animation and
removes its item.
"""

from concurrent.futures import Future

from PySide6.QtCore import QObject, QPointF, QPropertyAnimation, QTimer, Qt
from PySide6.QtGui import QBrush, QColor, QFont, QPen
from PySide6.QtWidgets import QGraphicsEllipseItem, QGraphicsTextItem

from ui.map_widget import Z_TRANSIENT
from ui.theme import ColorPalette

DAMAGE_DURATION_MS = 600
PROJECTILE_STEPS = 50
PROJECTILE_INTERVAL_MS = 5
PROJECTILE_RADIUS = 4


class _SceneAnimation(QObject):
    """Shared bookkeeping: one scene item, one future."""

    def __init__(self, scene, item, parent=None):
        super().__init__(parent)
        self.scene = scene
        self.item = item
        self.future: Future = Future()
        self._removed = False
        item.setZValue(Z_TRANSIENT)
        scene.addItem(item)
        self.future.add_done_callback(self._on_future_done)

    def _remove_item(self):
        if not self._removed:
            self._removed = True
            self.scene.removeItem(self.item)

    def _halt(self):
        raise NotImplementedError

    def _on_future_done(self, future: Future):
        if future.cancelled():
            self._halt()
            self._remove_item()

    def _finish(self, result=None):
        self._remove_item()
        if not self.future.done():
            self.future.set_result(result)

    def cancel(self) -> bool:
        return self.future.cancel()


class DamagePopup(_SceneAnimation):
    """Damage number floating up from a cell; resolves on the animation's ``finished``."""

    def __init__(self, scene, rect, amount, duration_ms: int = DAMAGE_DURATION_MS, parent=None):
        item = QGraphicsTextItem(f"-{amount}")
        font = QFont()
        font.setPointSize(11)
        font.setBold(True)
        item.setFont(font)
        item.setDefaultTextColor(QColor(ColorPalette.DAMAGE_TEXT))
        super().__init__(scene, item, parent)

        start = QPointF(rect.x() + rect.width() / 4, rect.y() + rect.height() / 3)
        self.animation = QPropertyAnimation(item, b"pos", self)
        self.animation.setStartValue(start)
        self.animation.setEndValue(QPointF(start.x(), rect.y() - rect.height() / 3))
        self.animation.setDuration(duration_ms)
        self.animation.finished.connect(self._finish)

    def start(self) -> Future:
        self.animation.start()
        return self.future

    def _halt(self):
        self.animation.stop()


class ProjectileAnimation(_SceneAnimation):
    """Projectile flying between two points in fixed-size timer steps.

    Every tick moves the projectile by one delta, then checks the remaining
    displacement. The flight ends once it is no larger than one delta on
    both axes, so at least one step always runs.
    """

    def __init__(self, scene, start: QPointF, stop: QPointF, color: str,
                 steps: int = PROJECTILE_STEPS, interval_ms: int = PROJECTILE_INTERVAL_MS,
                 parent=None):
        r = PROJECTILE_RADIUS
        item = QGraphicsEllipseItem(-r, -r, 2 * r, 2 * r)
        item.setBrush(QBrush(QColor(color)))
        item.setPen(QPen(Qt.PenStyle.NoPen))
        item.setPos(start)
        super().__init__(scene, item, parent)

        self.x, self.y = start.x(), start.y()
        self.stop_x, self.stop_y = stop.x(), stop.y()
        self.delta_x = (self.stop_x - self.x) / steps
        self.delta_y = (self.stop_y - self.y) / steps
        self.steps_taken = 0
        self.timer = QTimer(self)
        self.timer.setInterval(interval_ms)
        self.timer.timeout.connect(self.step)

    def start(self) -> Future:
        self.timer.start()
        return self.future

    def converged(self) -> bool:
        return (abs(self.stop_x - self.x) <= abs(self.delta_x)
                and abs(self.stop_y - self.y) <= abs(self.delta_y))

    def step(self):
        if self.future.done():
            self.timer.stop()
            return
        self.x += self.delta_x
        self.y += self.delta_y
        self.item.setPos(self.x, self.y)
        self.steps_taken += 1
        if self.converged():
            self.timer.stop()
            self._finish(self.steps_taken)

    def _halt(self):
        self.timer.stop()
