from __future__ import annotations

from typing import TYPE_CHECKING, Final

from PySide6.QtWidgets import (
    QButtonGroup,
    QComboBox,
    QDialog,
    QDialogButtonBox,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QRadioButton,
    QVBoxLayout,
    QWidget,
)

from tlapp.models.project import DEFAULT_PROJECT_COLOR, Project, ProjectKind
from tlapp.models.swimlane import sort_swimlanes
from tlapp.services.dates import (
    DateRangeError,
    format_for_edit,
    safe_parse,
    validate_range,
)
from tlapp.ui.color_field import ColorField

if TYPE_CHECKING:
    from datetime import date

    from tlapp.ui.main_window import MainWindow


class ProjectDialog:
    """
    Add/edit project dialog.  This gets opened from the "Add Project..." menu
    item, the project list's buttons, or by double-clicking a project.

    Range projects need a start and end date that pass
    :func:`~tlapp.services.dates.validate_range`; milestones need a delivery
    date.  Problems are shown in the dialog and the dialog stays open.

    Args:
        main_window: Main window instance

    Keyword Args:
        project: Project to edit; ``None`` to add a new one

    """

    #: Dialog width
    DIALOG_WIDTH: Final[int] = 480
    #: Dialog height
    DIALOG_HEIGHT: Final[int] = 520
    #: Placeholder shown in empty date fields
    DATE_PLACEHOLDER: Final[str] = "yyyy-mm-dd"

    def __init__(self, main_window: MainWindow, project: Project | None = None) -> None:
        """
        Initialize project dialog.
        """
        self.main_window = main_window
        self.project = project

    @property
    def is_edit(self) -> bool:
        """Whether the dialog edits an existing project."""
        return self.project is not None

    def build(self) -> None:
        """
        Build the project dialog.

        This means:

        - Setting the window title
        - Adding the name, swimlane and type fields
        - Adding the date fields for both project types
        - Adding the color and description fields
        - Filling everything in from :attr:`project` when editing
        """
        self.dialog = QDialog(self.main_window)
        self.dialog.setWindowTitle("Edit Project" if self.is_edit else "Add New Project")
        self.dialog.setMinimumSize(self.DIALOG_WIDTH, self.DIALOG_HEIGHT)
        self.layout = QVBoxLayout(self.dialog)
        self.layout.addWidget(
            QLabel(
                "Update the project details below."
                if self.is_edit
                else "Create a new project for your timeline."
            )
        )
        self._add_name_edit()
        self._add_swimlane_selector()
        self._add_kind_selector()
        self._add_date_fields()
        self._add_color_field()
        self._add_description_edit()

        self.error_label = QLabel(self.dialog)
        self.error_label.setStyleSheet("color: #dc2626;")
        self.error_label.setWordWrap(True)
        self.layout.addWidget(self.error_label)
        self.layout.addStretch()

        self._add_button_box()
        self._load_project()
        self._on_kind_changed()

    def _add_name_edit(self) -> None:
        self.name_edit = QLineEdit(self.dialog)
        self.name_edit.setPlaceholderText("Enter project name...")
        self.layout.addWidget(QLabel("Project Name:"))
        self.layout.addWidget(self.name_edit)

    def _add_swimlane_selector(self) -> None:
        self.swimlane_combo = QComboBox(self.dialog)
        for swimlane in sort_swimlanes(self.main_window.timeline.swimlanes):
            self.swimlane_combo.addItem(swimlane.name, swimlane.id)
        self.layout.addWidget(QLabel("Swimlane:"))
        self.layout.addWidget(self.swimlane_combo)

    def _add_kind_selector(self) -> None:
        self.range_radio = QRadioButton("Date Range", self.dialog)
        self.milestone_radio = QRadioButton("Milestone", self.dialog)
        self.range_radio.setChecked(True)
        self.kind_group = QButtonGroup(self.dialog)
        self.kind_group.addButton(self.range_radio)
        self.kind_group.addButton(self.milestone_radio)
        self.kind_group.buttonToggled.connect(self._on_kind_changed)
        row = QHBoxLayout()
        row.addWidget(self.range_radio)
        row.addWidget(self.milestone_radio)
        row.addStretch()
        self.layout.addWidget(QLabel("Project Type:"))
        self.layout.addLayout(row)

    def _add_date_fields(self) -> None:
        """
        Add the start/end fields (range) and the delivery field (milestone).
        Only the fields for the selected type are visible.
        """
        self.range_widget = QWidget(self.dialog)
        grid = QGridLayout(self.range_widget)
        grid.setContentsMargins(0, 0, 0, 0)
        self.start_edit = QLineEdit(self.range_widget)
        self.start_edit.setPlaceholderText(self.DATE_PLACEHOLDER)
        self.end_edit = QLineEdit(self.range_widget)
        self.end_edit.setPlaceholderText(self.DATE_PLACEHOLDER)
        grid.addWidget(QLabel("Start Date:"), 0, 0)
        grid.addWidget(QLabel("End Date:"), 0, 1)
        grid.addWidget(self.start_edit, 1, 0)
        grid.addWidget(self.end_edit, 1, 1)
        self.layout.addWidget(self.range_widget)

        self.milestone_widget = QWidget(self.dialog)
        column = QVBoxLayout(self.milestone_widget)
        column.setContentsMargins(0, 0, 0, 0)
        self.delivery_edit = QLineEdit(self.milestone_widget)
        self.delivery_edit.setPlaceholderText(self.DATE_PLACEHOLDER)
        column.addWidget(QLabel("Delivery Date:"))
        column.addWidget(self.delivery_edit)
        self.layout.addWidget(self.milestone_widget)

    def _add_color_field(self) -> None:
        self.color_field = ColorField(DEFAULT_PROJECT_COLOR, self.dialog)
        self.layout.addWidget(QLabel("Color:"))
        self.layout.addWidget(self.color_field)

    def _add_description_edit(self) -> None:
        self.description_edit = QPlainTextEdit(self.dialog)
        self.description_edit.setFixedHeight(70)
        self.layout.addWidget(QLabel("Description (Optional):"))
        self.layout.addWidget(self.description_edit)

    def _add_button_box(self) -> None:
        """
        Add the button box to the dialog.  The OK button saves the project;
        the dialog only closes if the project is valid.
        """
        self.button_box = QDialogButtonBox(self.dialog)
        ok_button = self.button_box.addButton(QDialogButtonBox.StandardButton.Ok)
        ok_button.setText("Update Project" if self.is_edit else "Create Project")
        self.button_box.addButton(QDialogButtonBox.StandardButton.Cancel)
        self.button_box.accepted.connect(self.save_project)
        self.button_box.rejected.connect(self.dialog.reject)
        self.layout.addWidget(self.button_box)

    def _load_project(self) -> None:
        project = self.project
        if project is None:
            return
        self.name_edit.setText(project.name)
        index = self.swimlane_combo.findData(project.swimlane_id)
        if index >= 0:
            self.swimlane_combo.setCurrentIndex(index)
        self.milestone_radio.setChecked(project.kind == ProjectKind.MILESTONE)
        self.range_radio.setChecked(project.kind != ProjectKind.MILESTONE)
        self.start_edit.setText(format_for_edit(project.start_date))
        self.end_edit.setText(format_for_edit(project.end_date))
        self.delivery_edit.setText(format_for_edit(project.delivery_date))
        self.color_field.set_color(project.color)
        self.description_edit.setPlainText(project.description or "")

    def _on_kind_changed(self, *_args: object) -> None:
        is_range = self.range_radio.isChecked()
        self.range_widget.setVisible(is_range)
        self.milestone_widget.setVisible(not is_range)

    @property
    def kind(self) -> ProjectKind:
        """The project type currently selected."""
        if self.milestone_radio.isChecked():
            return ProjectKind.MILESTONE
        return ProjectKind.RANGE

    @staticmethod
    def _read_date(edit: QLineEdit) -> tuple[date | None, bool]:
        """
        Read a date field.

        Returns:
            The parsed date and whether the field had unparsable text in it

        """
        text = edit.text().strip()
        parsed = safe_parse(text)
        return parsed, bool(text) and parsed is None

    def validate(self) -> str | None:
        """
        Check the form.

        Returns:
            A message describing the first problem, or ``None`` if the form
            is valid

        """
        if not self.name_edit.text().strip():
            return "Please enter a project name."
        if self.swimlane_combo.currentData() is None:
            return "Please add a swimlane first."
        if self.kind == ProjectKind.MILESTONE:
            delivery, unparsable = self._read_date(self.delivery_edit)
            if unparsable:
                return DateRangeError.INVALID_DATE.message
            if delivery is None:
                return "A delivery date is required"
            result = validate_range(delivery, delivery)
        else:
            start, start_bad = self._read_date(self.start_edit)
            end, end_bad = self._read_date(self.end_edit)
            if start_bad or end_bad:
                return DateRangeError.INVALID_DATE.message
            result = validate_range(start, end)
        if not result.ok and result.error is not None:
            return result.error.message
        return None

    def build_project(self) -> Project:
        """
        Build a :class:`~tlapp.models.project.Project` from the form.

        Returns:
            The project, keeping the edited project's ID when editing

        """
        return Project.create(
            name=self.name_edit.text(),
            swimlane_id=self.swimlane_combo.currentData(),
            kind=self.kind,
            start_date=safe_parse(self.start_edit.text()),
            end_date=safe_parse(self.end_edit.text()),
            delivery_date=safe_parse(self.delivery_edit.text()),
            color=self.color_field.color(),
            description=self.description_edit.toPlainText().strip(),
            project_id=self.project.id if self.project else None,
        )

    def save_project(self) -> None:
        """
        Validate the form and save the project.

        - If the form is invalid, show the problem and keep the dialog open.
        - Otherwise, save the project on the main window and close the dialog.
        """
        error = self.validate()
        if error:
            self.error_label.setText(error)
            return
        project = self.build_project()
        self.main_window.save_project(project)
        self.main_window.show_message(
            f'Project {"updated" if self.is_edit else "created"}: "{project.name}"'
        )
        self.dialog.accept()

    def execute(self) -> None:
        """
        Execute the project dialog.
        """
        self.build()
        self.dialog.exec()
