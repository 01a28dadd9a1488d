"""
Reusable UI components for Skirmish.
"""

from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QWidget

from ui.theme import IconProvider


class IconButton(QPushButton):
    """A button with an icon and optional text."""

    def __init__(self, icon_name: str, text: str = "", tooltip: str = "", parent=None):
        super().__init__(text, parent)
        self.setIcon(IconProvider.get_icon(icon_name))
        if tooltip:
            self.setToolTip(tooltip)
        self.setMinimumHeight(32)


class ControlRow(QWidget):
    """A horizontal row of controls."""

    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QHBoxLayout()
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(12)
        self.setLayout(layout)

    def add_label(self, text: str) -> QLabel:
        label = QLabel(text)
        self.layout().addWidget(label)
        return label

    def add_widget(self, widget):
        self.layout().addWidget(widget)
        return widget

    def add_stretch(self):
        self.layout().addStretch()


class GameControls(ControlRow):
    """New/Save/Load buttons flanked by the two side labels."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.player_label = self.add_label("good")
        self.add_stretch()
        self.btn_new_game = self.add_widget(IconButton("new", "New Game", "Start a new game"))
        self.btn_save_game = self.add_widget(IconButton("save", "Save Game", "Save the current game"))
        self.btn_load_game = self.add_widget(IconButton("load", "Load Game", "Load the saved game"))
        self.add_stretch()
        self.enemy_label = self.add_label("evil")
