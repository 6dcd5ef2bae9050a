"""Project list UI component."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from tlapp.services.dates import format_for_edit
from tlapp.ui.swimlane_manager import color_icon

if TYPE_CHECKING:
    from collections.abc import Iterable

    from tlapp.models.project import Project
    from tlapp.models.swimlane import Swimlane


def describe_dates(project: Project) -> str:
    """
    Human readable dates of ``project``.

    Args:
        project: Project to describe

    Returns:
        "start - end" for a range, the delivery date for a milestone

    """
    if project.is_milestone:
        return format_for_edit(project.delivery_date)
    return (
        f"{format_for_edit(project.start_date)} - {format_for_edit(project.end_date)}"
    )


class ProjectListPanel(QGroupBox):
    """
    List of the timeline's projects with add, edit and delete buttons.

    The panel only shows projects and asks for changes through its signals;
    the main window owns the data.

    Args:
        parent: Parent widget

    """

    #: Shown instead of the list when there are no projects.
    EMPTY_TEXT: Final[str] = 'No projects yet. Click "Add Project" to get started.'

    add_requested = Signal()
    edit_requested = Signal(str)  # Emits project ID
    delete_requested = Signal(str)  # Emits project ID

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__("Projects", parent)
        self._setup_ui()
        self.set_projects([], [])

    def _setup_ui(self) -> None:
        """Set up the UI layout."""
        layout = QVBoxLayout(self)

        self.project_list = QListWidget(self)
        self.project_list.itemDoubleClicked.connect(self._on_item_double_clicked)
        self.project_list.currentRowChanged.connect(self._update_buttons)
        layout.addWidget(self.project_list)

        self.empty_label = QLabel(self.EMPTY_TEXT, self)
        self.empty_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.empty_label.setStyleSheet("color: #374151; padding: 24px;")
        layout.addWidget(self.empty_label)

        buttons = QHBoxLayout()
        self.add_button = QPushButton("Add Project", self)
        self.add_button.clicked.connect(self.add_requested.emit)
        self.edit_button = QPushButton("Edit", self)
        self.edit_button.clicked.connect(self._request_edit)
        self.delete_button = QPushButton("Delete", self)
        self.delete_button.clicked.connect(self._request_delete)
        buttons.addWidget(self.add_button)
        buttons.addStretch()
        buttons.addWidget(self.edit_button)
        buttons.addWidget(self.delete_button)
        layout.addLayout(buttons)

    def set_projects(
        self, projects: Iterable[Project], swimlanes: Iterable[Swimlane]
    ) -> None:
        """
        Show ``projects``, labelling each with its swimlane's name.

        Args:
            projects: Projects in display order
            swimlanes: Swimlanes the projects may belong to

        """
        lane_names = {swimlane.id: swimlane.name for swimlane in swimlanes}
        selected = self.selected_project_id()
        self.project_list.blockSignals(True)  # noqa: FBT003
        self.project_list.clear()
        for project in projects:
            text = f"{project.name}\n{describe_dates(project)}"
            lane_name = lane_names.get(project.swimlane_id)
            if lane_name:
                text += f"  ·  {lane_name}"
            item = QListWidgetItem(color_icon(project.color), text)
            item.setData(Qt.ItemDataRole.UserRole, project.id)
            self.project_list.addItem(item)
            if project.id == selected:
                self.project_list.setCurrentItem(item)
        self.project_list.blockSignals(False)  # noqa: FBT003
        is_empty = self.project_list.count() == 0
        self.project_list.setVisible(not is_empty)
        self.empty_label.setVisible(is_empty)
        self._update_buttons()

    def selected_project_id(self) -> str | None:
        """ID of the selected project, if any."""
        item = self.project_list.currentItem()
        if item is None:
            return None
        return item.data(Qt.ItemDataRole.UserRole)

    def _update_buttons(self, *_args: object) -> None:
        has_selection = self.selected_project_id() is not None
        self.edit_button.setEnabled(has_selection)
        self.delete_button.setEnabled(has_selection)

    def _on_item_double_clicked(self, item: QListWidgetItem) -> None:
        self.edit_requested.emit(item.data(Qt.ItemDataRole.UserRole))

    def _request_edit(self) -> None:
        project_id = self.selected_project_id()
        if project_id is not None:
            self.edit_requested.emit(project_id)

    def _request_delete(self) -> None:
        project_id = self.selected_project_id()
        if project_id is not None:
            self.delete_requested.emit(project_id)
