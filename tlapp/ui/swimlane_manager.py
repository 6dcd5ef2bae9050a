"""Swimlane manager UI component."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QColor, QIcon, QPixmap
from PySide6.QtWidgets import (
    QGroupBox,
    QHBoxLayout,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from tlapp.models.timeline import DEFAULT_SWIMLANE_COLOR
from tlapp.ui.color_field import ColorField

if TYPE_CHECKING:
    from tlapp.models.timeline import TimelineData


def color_icon(color: str, size: int = 14) -> QIcon:
    """
    Build a small square icon filled with ``color``.

    Args:
        color: Color string
        size: Icon size in pixels

    Returns:
        The icon

    """
    pixmap = QPixmap(size, size)
    pixmap.fill(QColor(color) if QColor(color).isValid() else QColor("#cccccc"))
    return QIcon(pixmap)


class SwimlaneManager(QGroupBox):
    """
    Widget for adding, editing, deleting and reordering swimlanes.

    The list shows swimlanes in data order, which is also their
    :attr:`~tlapp.models.swimlane.Swimlane.order`.  Selecting a lane loads it
    into the edit row below the list.

    Args:
        timeline: Timeline whose swimlanes are managed
        parent: Parent widget

    """

    changed = Signal()  # Emitted after any swimlane change

    def __init__(self, timeline: TimelineData, parent: QWidget | None = None):
        super().__init__("Swimlanes", parent)
        self.timeline = timeline
        self._setup_ui()
        self.refresh()

    def _setup_ui(self) -> None:
        """Set up the UI layout."""
        layout = QVBoxLayout(self)

        self.lane_list = QListWidget(self)
        self.lane_list.currentRowChanged.connect(self._on_selection_changed)
        layout.addWidget(self.lane_list)

        buttons = QHBoxLayout()
        self.up_button = QPushButton("↑", self)
        self.up_button.setToolTip("Move up")
        self.up_button.clicked.connect(self.move_up)
        self.down_button = QPushButton("↓", self)
        self.down_button.setToolTip("Move down")
        self.down_button.clicked.connect(self.move_down)
        self.delete_button = QPushButton("Delete", self)
        self.delete_button.clicked.connect(self.delete_selected)
        buttons.addWidget(self.up_button)
        buttons.addWidget(self.down_button)
        buttons.addStretch()
        buttons.addWidget(self.delete_button)
        layout.addLayout(buttons)

        edit_row = QHBoxLayout()
        self.name_edit = QLineEdit(self)
        self.name_edit.setPlaceholderText("Swimlane name...")
        self.name_edit.returnPressed.connect(self.add_swimlane)
        self.color_field = ColorField(DEFAULT_SWIMLANE_COLOR, self)
        self.color_field.setFixedWidth(130)
        self.add_button = QPushButton("Add", self)
        self.add_button.clicked.connect(self.add_swimlane)
        self.save_button = QPushButton("Save", self)
        self.save_button.clicked.connect(self.save_selected)
        edit_row.addWidget(self.name_edit, stretch=1)
        edit_row.addWidget(self.color_field)
        edit_row.addWidget(self.add_button)
        edit_row.addWidget(self.save_button)
        layout.addLayout(edit_row)

    def refresh(self, select_row: int | None = None) -> None:
        """
        Reload the list from :attr:`timeline`.

        Keyword Args:
            select_row: Row to select afterwards (defaults to the current row)

        """
        row = self.lane_list.currentRow() if select_row is None else select_row
        self.lane_list.blockSignals(True)  # noqa: FBT003
        self.lane_list.clear()
        for swimlane in self.timeline.swimlanes:
            item = QListWidgetItem(color_icon(swimlane.color), swimlane.name)
            item.setData(Qt.ItemDataRole.UserRole, swimlane.id)
            self.lane_list.addItem(item)
        self.lane_list.blockSignals(False)  # noqa: FBT003
        if 0 <= row < self.lane_list.count():
            self.lane_list.setCurrentRow(row)
        else:
            self._on_selection_changed(-1)

    def selected_swimlane_id(self) -> str | None:
        """ID of the selected swimlane, if any."""
        item = self.lane_list.currentItem()
        if item is None:
            return None
        return item.data(Qt.ItemDataRole.UserRole)

    def _on_selection_changed(self, row: int) -> None:
        has_selection = row >= 0
        count = self.lane_list.count()
        self.up_button.setEnabled(has_selection and row > 0)
        self.down_button.setEnabled(has_selection and row < count - 1)
        self.delete_button.setEnabled(has_selection)
        self.save_button.setEnabled(has_selection)
        if has_selection:
            swimlane = self.timeline.swimlanes[row]
            self.name_edit.setText(swimlane.name)
            self.color_field.set_color(swimlane.color)

    def add_swimlane(self) -> None:
        """Add a swimlane from the edit row.  Blank names are ignored."""
        if self.timeline.add_swimlane(self.name_edit.text(), self.color_field.color()):
            self.name_edit.clear()
            self.color_field.set_color(DEFAULT_SWIMLANE_COLOR)
            self.refresh(select_row=-1)
            self.changed.emit()

    def save_selected(self) -> None:
        """Apply the edit row's name and color to the selected swimlane."""
        swimlane_id = self.selected_swimlane_id()
        if swimlane_id is None or not self.name_edit.text().strip():
            return
        self.timeline.update_swimlane(
            swimlane_id, self.name_edit.text(), self.color_field.color()
        )
        self.refresh()
        self.changed.emit()

    def delete_selected(self) -> None:
        """Delete the selected swimlane."""
        swimlane_id = self.selected_swimlane_id()
        if swimlane_id is None:
            return
        self.timeline.delete_swimlane(swimlane_id)
        self.refresh(select_row=-1)
        self.changed.emit()

    def move_up(self) -> None:
        """Move the selected swimlane one row up."""
        row = self.lane_list.currentRow()
        if row <= 0:
            return
        self.timeline.move_swimlane_up(row)
        self.refresh(select_row=row - 1)
        self.changed.emit()

    def move_down(self) -> None:
        """Move the selected swimlane one row down."""
        row = self.lane_list.currentRow()
        if row < 0 or row >= self.lane_list.count() - 1:
            return
        self.timeline.move_swimlane_down(row)
        self.refresh(select_row=row + 1)
        self.changed.emit()
