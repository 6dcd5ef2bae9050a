"""Color picker field."""

from PySide6.QtCore import Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QColorDialog,
    QHBoxLayout,
    QLineEdit,
    QPushButton,
    QWidget,
)


class ColorField(QWidget):
    """
    A swatch button plus a text field holding a ``#RRGGBB`` color.

    Clicking the swatch opens a color dialog; typing a valid color in the text
    field updates the swatch.  :attr:`color_changed` fires only for valid
    colors.

    Args:
        color: Initial color
        parent: Parent widget

    """

    color_changed = Signal(str)  # Emits the new color string

    def __init__(self, color: str = "#3B82F6", parent: QWidget | None = None):
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self.swatch = QPushButton(self)
        self.swatch.setFixedSize(32, 24)
        self.swatch.clicked.connect(self._pick_color)
        self.edit = QLineEdit(self)
        self.edit.setMaxLength(9)
        self.edit.editingFinished.connect(self._on_text_edited)
        layout.addWidget(self.swatch)
        layout.addWidget(self.edit, stretch=1)
        self._color = ""
        self.set_color(color)

    def color(self) -> str:
        """The current color string."""
        return self._color

    def set_color(self, color: str) -> None:
        """
        Set the color without emitting :attr:`color_changed`.

        Args:
            color: New color; invalid colors are ignored

        """
        if not QColor(color).isValid():
            return
        self._color = color
        self.edit.setText(color)
        self.swatch.setStyleSheet(
            f"background-color: {color}; border: 1px solid #999; border-radius: 3px;"
        )

    def _on_text_edited(self) -> None:
        text = self.edit.text().strip()
        if text == self._color:
            return
        if QColor(text).isValid():
            self.set_color(text)
            self.color_changed.emit(text)
        else:
            # Put back the last good value
            self.edit.setText(self._color)

    def _pick_color(self) -> None:
        chosen = QColorDialog.getColor(QColor(self._color), self, "Choose Color")
        if chosen.isValid():
            name = chosen.name()
            self.set_color(name)
            self.color_changed.emit(name)
