"""Main application window."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QApplication,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from tlapp.exc import DoesNotExist
from tlapp.models.swimlane import sort_swimlanes
from tlapp.models.timeline import TimelineData
from tlapp.services.export_png import PNGExporter
from tlapp.ui.dialogs import HelpDialog, PreferencesDialog, ProjectDialog
from tlapp.ui.dialogs.settings import export_directory, export_scale_factor
from tlapp.ui.menus import MainMenu
from tlapp.ui.project_list import ProjectListPanel
from tlapp.ui.settings_panel import SettingsPanel
from tlapp.ui.swimlane_manager import SwimlaneManager
from tlapp.ui.timeline_canvas import TimelineCanvas

if TYPE_CHECKING:
    from tlapp.models.project import Project
    from tlapp.models.settings import TimelineSettings

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """
    Main application window.

    The window owns the :class:`~tlapp.models.timeline.TimelineData`.  The
    panels edit it, and every change pushes a fresh snapshot to the
    :class:`~tlapp.ui.timeline_canvas.TimelineCanvas`, which re-renders.

    Keyword Args:
        timeline: Timeline to open with; defaults to the demo timeline

    """

    #: Main window geometry
    MAIN_WINDOW_GEOMETRY: Final[tuple[int, int, int, int]] = (100, 100, 1400, 900)
    #: Width of the right hand settings column
    SETTINGS_COLUMN_WIDTH: Final[int] = 380

    def __init__(self, timeline: TimelineData | None = None) -> None:
        super().__init__()
        #: Timeline being edited
        self.timeline = timeline if timeline is not None else TimelineData.sample()
        self.timeline.ensure_swimlane()
        #: Main window actions
        self.action_service = MainWindowActions(self)

        # Build the main window
        self.build()
        #: PNG exporter bound to the canvas
        self.exporter = PNGExporter(self.canvas, scale_factor=export_scale_factor())
        self.refresh()

    def _setup_main_window(self) -> None:
        """
        Set up the main window.

        The top row holds the project list and swimlane manager on the left
        and the settings and export panels on the right.  The timeline chart
        sits underneath in a scroll area.
        """
        self.setWindowTitle("Timeline Creator")
        # Set window icon from application icon
        app = QApplication.instance()
        if isinstance(app, QApplication) and not app.windowIcon().isNull():
            self.setWindowIcon(app.windowIcon())
        self.setGeometry(*self.MAIN_WINDOW_GEOMETRY)

        central_widget = QWidget()
        central_layout = QVBoxLayout(central_widget)

        heading = QLabel("Timeline Creator")
        heading.setStyleSheet("font-size: 20pt; font-weight: bold; color: #111827;")
        central_layout.addWidget(heading)
        subheading = QLabel(
            "Create Gantt-like timelines with customizable projects and swimlanes"
        )
        subheading.setStyleSheet("color: #1f2937;")
        central_layout.addWidget(subheading)

        top_row = QHBoxLayout()

        # Left column: projects and swimlanes
        left_column = QVBoxLayout()
        self.project_list = ProjectListPanel()
        self.project_list.add_requested.connect(self.action_service.add_project)
        self.project_list.edit_requested.connect(self.action_service.edit_project)
        self.project_list.delete_requested.connect(self.action_service.delete_project)
        left_column.addWidget(self.project_list)
        self.swimlane_manager = SwimlaneManager(self.timeline)
        self.swimlane_manager.changed.connect(self._on_swimlanes_changed)
        left_column.addWidget(self.swimlane_manager)
        top_row.addLayout(left_column, stretch=2)

        # Right column: settings and export
        right_column = QVBoxLayout()
        self.settings_panel = SettingsPanel(self.timeline.settings)
        self.settings_panel.settings_changed.connect(self._on_settings_changed)
        right_column.addWidget(self.settings_panel)
        export_group = QGroupBox("Export")
        export_layout = QVBoxLayout(export_group)
        self.export_button = QPushButton("Export as PNG")
        self.export_button.clicked.connect(self.action_service.export_png)
        export_layout.addWidget(self.export_button)
        right_column.addWidget(export_group)
        right_column.addStretch()
        right_widget = QWidget()
        right_widget.setLayout(right_column)
        right_widget.setFixedWidth(self.SETTINGS_COLUMN_WIDTH)
        top_row.addWidget(right_widget)
        central_layout.addLayout(top_row)

        # Bottom: the chart
        self.title_label = QLabel()
        self.title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.title_label.setStyleSheet("font-size: 16pt; font-weight: bold;")
        central_layout.addWidget(self.title_label)
        self.canvas = TimelineCanvas()
        scroll_area = QScrollArea()
        scroll_area.setWidget(self.canvas)
        scroll_area.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self.scroll_area = scroll_area
        central_layout.addWidget(scroll_area, stretch=1)

        self.setCentralWidget(central_widget)
        self.show_message("Ready")

    def _setup_main_menu(self) -> None:
        """Set up the main menu."""
        menu = MainMenu(self)
        menu.build()

    def build(self) -> None:
        """
        Build the main window.

        - Setup the main window.
        - Setup the main menu.

        """
        self._setup_main_window()
        self._setup_main_menu()

    def show_message(self, message: str, duration: int = 2000) -> None:
        """
        Show a message in the status bar.

        Args:
            message: Message to show

        Keyword Args:
            duration: Duration of the message in milliseconds (default: 2000)

        """
        self.statusBar().showMessage(message, duration)

    def show_warning(self, message: str, title: str = "Warning") -> None:
        """
        Show a warning message.

        Args:
            message: Message to show

        Keyword Args:
            title: Title of the message (default: "Warning")

        """
        QMessageBox.warning(self, title, message)

    def show_error(self, message: str, title: str = "Error") -> None:
        """
        Show an error message.

        Args:
            message: Message to show

        Keyword Args:
            title: Title of the message (default: "Error")

        """
        QMessageBox.critical(self, title, message)

    def show_information(self, message: str, title: str = "Information") -> None:
        """
        Show an information message.

        Args:
            message: Message to show

        Keyword Args:
            title: Title of the message (default: "Information")

        """
        QMessageBox.information(self, title, message)

    def refresh(self) -> None:
        """
        Push the current timeline to the panels and the canvas.
        """
        settings = self.timeline.settings
        self.title_label.setText(settings.title)
        self.project_list.set_projects(self.timeline.projects, self.timeline.swimlanes)
        self.canvas.set_timeline(
            self.timeline.projects,
            sort_swimlanes(self.timeline.swimlanes),
            settings,
        )

    def save_project(self, project: Project) -> None:
        """
        Add or replace a project and redraw.

        Args:
            project: Project to save

        """
        self.timeline.save_project(project)
        self.refresh()

    def delete_project(self, project_id: str) -> None:
        """
        Delete a project and redraw.

        Args:
            project_id: ID of the project to delete

        """
        self.timeline.delete_project(project_id)
        self.refresh()

    def _on_swimlanes_changed(self) -> None:
        if not self.timeline.swimlanes:
            self.timeline.ensure_swimlane()
            logger.info("Last swimlane deleted; added a default swimlane")
            self.swimlane_manager.refresh(select_row=-1)
        self.refresh()

    def _on_settings_changed(self, settings: TimelineSettings) -> None:
        self.timeline.settings = settings
        self.refresh()

    def show_help(self, topic: str | None = None) -> None:
        """
        Show help dialog.

        Args:
            topic: Optional topic to display initially

        """
        dialog = HelpDialog(topic=topic, parent=self)
        dialog.show()

    def show_settings_dialog(self) -> None:
        """
        Show the preferences dialog and pick up the new export scale.
        """
        PreferencesDialog(self).execute()
        self.exporter.scale_factor = export_scale_factor()


class MainWindowActions:
    """
    Main window actions.  We separate the work from the UI to make the code more
    readable and maintainable.

    Args:
        main_window: Main window instance

    """

    def __init__(self, main_window: MainWindow) -> None:
        """
        Initialize main window actions.
        """
        self.main_window = main_window

    def add_project(self) -> None:
        """
        Open the project dialog for a new project.
        """
        ProjectDialog(self.main_window).execute()

    def edit_project(self, project_id: str) -> None:
        """
        Open the project dialog for an existing project.

        Args:
            project_id: ID of the project to edit

        """
        try:
            project = self.main_window.timeline.get_project(project_id)
        except DoesNotExist as e:
            self.main_window.show_warning(str(e))
            return
        ProjectDialog(self.main_window, project=project).execute()

    def delete_project(self, project_id: str) -> None:
        """
        Delete a project.

        Args:
            project_id: ID of the project to delete

        """
        try:
            project = self.main_window.timeline.get_project(project_id)
        except DoesNotExist as e:
            self.main_window.show_warning(str(e))
            return
        self.main_window.delete_project(project_id)
        self.main_window.show_message(f'Project deleted: "{project.name}"')

    def export_png(self) -> None:
        """
        Export the timeline chart to a PNG file.

        The file goes into the export directory from the preferences, named
        after the timeline title and today's date.  The export button is
        disabled while the export runs.
        """
        window = self.main_window
        exporter = window.exporter
        if exporter.busy:
            window.show_message("An export is already running")
            return
        exporter.scale_factor = export_scale_factor()
        directory = export_directory()
        window.export_button.setEnabled(False)
        window.export_button.setText("Exporting...")
        QApplication.processEvents()
        try:
            output_path = exporter.export_to_directory(
                window.timeline.settings.title, directory
            )
        finally:
            window.export_button.setEnabled(True)
            window.export_button.setText("Export as PNG")

        if output_path is not None:
            window.show_information(
                f"Timeline exported successfully to:\n{output_path}",
                title="Export Successful",
            )
            window.show_message("Export completed", duration=3000)
        else:
            window.show_warning(
                "Failed to export timeline. Check console for details.",
                title="Export Failed",
            )
