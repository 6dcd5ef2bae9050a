"""Unit tests for the main window, its actions and the project dialog."""

from datetime import date
from unittest.mock import Mock

import pytest
from PySide6.QtCore import QSettings

from tlapp.models import ProjectKind, TimelineData
from tlapp.ui.dialogs import HelpDialog, ProjectDialog
from tlapp.ui.dialogs.settings import (
    DIRECTORY_KEY,
    SCALE_FACTOR_KEY,
    export_directory,
    export_scale_factor,
)
from tlapp.ui.main_window import MainWindow
from tests.conftest import create_test_project


@pytest.fixture
def window(qapp):
    """A main window on the demo timeline with message boxes stubbed out."""
    main_window = MainWindow(TimelineData.sample())
    main_window.show_information = Mock()
    main_window.show_warning = Mock()
    main_window.show_error = Mock()
    yield main_window
    main_window.close()


@pytest.fixture
def prefs(tmp_path):
    """A preferences store backed by a temporary file."""
    return QSettings(str(tmp_path / "prefs.ini"), QSettings.Format.IniFormat)


class TestMainWindow:
    """Test cases for MainWindow."""

    def test_starts_with_timeline(self, window):
        """Test the window shows the timeline it was given."""
        assert window.title_label.text() == "Project Timeline 2024"
        assert window.project_list.project_list.count() == 2
        assert window.canvas.current_image() is not None

    def test_empty_timeline_gets_default_swimlane(self, qapp):
        """Test a timeline without lanes gets one to put projects in."""
        main_window = MainWindow(TimelineData())
        assert [lane.name for lane in main_window.timeline.swimlanes] == ["Default"]
        main_window.close()

    def test_save_project_redraws(self, window):
        """Test saving a project refreshes the list and the canvas."""
        before = window.canvas.current_image().copy()
        window.save_project(
            create_test_project(
                name="Beta",
                swimlane_id="2",
                start_date=date(2024, 5, 1),
                end_date=date(2024, 7, 1),
            )
        )
        assert window.project_list.project_list.count() == 3
        assert window.canvas.current_image() != before

    def test_settings_change_redraws(self, window):
        """Test a settings change re-renders with the new settings."""
        settings = window.timeline.settings.update(
            title="Roadmap", end_date=date(2024, 6, 30)
        )
        window.settings_panel.settings_changed.emit(settings)
        assert window.timeline.settings.title == "Roadmap"
        assert window.title_label.text() == "Roadmap"
        assert window.canvas.width() == 20 + 6 * 120 + 60 + 20

    def test_deleting_last_swimlane_adds_default(self, window):
        """Test deleting every lane leaves a default one."""
        for lane_id in ["1", "2"]:
            window.timeline.delete_swimlane(lane_id)
            window.swimlane_manager.changed.emit()
        assert [lane.name for lane in window.timeline.swimlanes] == ["Default"]
        assert window.swimlane_manager.lane_list.count() == 1

    def test_menus(self, window):
        """Test the menu bar has File and Help menus with their actions."""
        titles = [action.text() for action in window.menuBar().actions()]
        assert "&File" in titles
        assert "&Help" in titles
        file_menu = window.menuBar().actions()[titles.index("&File")].menu()
        file_actions = [a.text() for a in file_menu.actions() if a.text()]
        assert file_actions[:2] == ["&Add Project...", "&Export PNG..."]
        assert file_actions[-1] == "&Quit"


class TestMainWindowActions:
    """Test cases for MainWindowActions."""

    def test_delete_project(self, window):
        """Test deleting a project by ID."""
        window.action_service.delete_project("1")
        assert [p.id for p in window.timeline.projects] == ["2"]

    def test_delete_unknown_project_warns(self, window):
        """Test deleting an unknown project shows a warning."""
        window.action_service.delete_project("missing")
        window.show_warning.assert_called_once()
        assert len(window.timeline.projects) == 2

    def test_edit_unknown_project_warns(self, window):
        """Test editing an unknown project shows a warning."""
        window.action_service.edit_project("missing")
        window.show_warning.assert_called_once()

    def test_export_png(self, window, tmp_path, monkeypatch):
        """Test exporting writes a PNG into the export directory."""
        monkeypatch.setattr(
            "tlapp.ui.main_window.export_directory", lambda: tmp_path
        )
        monkeypatch.setattr("tlapp.ui.main_window.export_scale_factor", lambda: 2)
        window.action_service.export_png()

        written = list(tmp_path.glob("Project_Timeline_2024_*.png"))
        assert len(written) == 1
        window.show_information.assert_called_once()
        assert window.export_button.isEnabled()
        assert window.export_button.text() == "Export as PNG"
        assert window.exporter.scale_factor == 2
        assert window.canvas.busy is False

    def test_export_png_failure_warns(self, window, tmp_path, monkeypatch):
        """Test a failed export shows a warning and re-enables the button."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        monkeypatch.setattr("tlapp.ui.main_window.export_directory", lambda: blocker)
        monkeypatch.setattr("tlapp.ui.main_window.export_scale_factor", lambda: 1)
        window.action_service.export_png()

        window.show_warning.assert_called_once()
        assert window.export_button.isEnabled()


class TestProjectDialog:
    """Test cases for ProjectDialog."""

    @pytest.fixture
    def dialog(self, window):
        """A built add-project dialog."""
        project_dialog = ProjectDialog(window)
        project_dialog.build()
        return project_dialog

    def test_lists_swimlanes(self, dialog):
        """Test the swimlane selector lists lanes by order."""
        names = [
            dialog.swimlane_combo.itemText(i)
            for i in range(dialog.swimlane_combo.count())
        ]
        assert names == ["Development", "Marketing"]

    def test_requires_name(self, dialog):
        """Test a project needs a name."""
        assert dialog.validate() == "Please enter a project name."

    def test_range_needs_both_dates(self, dialog):
        """Test a range without an end date is rejected."""
        dialog.name_edit.setText("Beta")
        dialog.start_edit.setText("2024-05-01")
        assert dialog.validate() == "Both start and end dates are required"

    def test_range_rejects_unparsable_date(self, dialog):
        """Test typed text that is not a date is rejected."""
        dialog.name_edit.setText("Beta")
        dialog.start_edit.setText("someday")
        dialog.end_edit.setText("2024-06-01")
        assert dialog.validate() == "Invalid date format"

    def test_range_rejects_inverted_dates(self, dialog):
        """Test an end before the start is rejected."""
        dialog.name_edit.setText("Beta")
        dialog.start_edit.setText("2024-06-01")
        dialog.end_edit.setText("2024-05-01")
        assert dialog.validate() == "Start date must be before end date"

    def test_milestone_needs_delivery_date(self, dialog):
        """Test a milestone without a delivery date is rejected."""
        dialog.name_edit.setText("Launch")
        dialog.milestone_radio.setChecked(True)
        assert dialog.validate() == "A delivery date is required"

    def test_kind_switches_date_fields(self, dialog):
        """Test only the selected kind's date fields are shown."""
        assert not dialog.range_widget.isHidden()
        assert dialog.milestone_widget.isHidden()
        dialog.milestone_radio.setChecked(True)
        assert dialog.range_widget.isHidden()
        assert not dialog.milestone_widget.isHidden()

    def test_save_adds_project(self, dialog, window):
        """Test a valid form adds the project to the timeline."""
        dialog.name_edit.setText("Launch")
        dialog.swimlane_combo.setCurrentIndex(1)
        dialog.milestone_radio.setChecked(True)
        dialog.delivery_edit.setText("2024-09-01")
        dialog.save_project()

        project = window.timeline.projects[-1]
        assert project.name == "Launch"
        assert project.swimlane_id == "2"
        assert project.kind == ProjectKind.MILESTONE
        assert project.delivery_date == date(2024, 9, 1)
        assert project.start_date is None

    def test_invalid_form_stays_open(self, dialog, window):
        """Test an invalid form shows its error and saves nothing."""
        dialog.save_project()
        assert dialog.error_label.text() == "Please enter a project name."
        assert len(window.timeline.projects) == 2

    def test_edit_keeps_id(self, window):
        """Test editing loads the project and saves under the same ID."""
        dialog = ProjectDialog(window, project=window.timeline.get_project("1"))
        dialog.build()
        assert dialog.name_edit.text() == "Project Alpha"
        assert dialog.start_edit.text() == "2024-01-15"
        dialog.name_edit.setText("Project Alpha II")
        dialog.save_project()

        assert len(window.timeline.projects) == 2
        assert window.timeline.get_project("1").name == "Project Alpha II"


class TestPreferences:
    """Test cases for the export preferences."""

    def test_defaults(self, prefs):
        """Test the default scale factor and directory."""
        assert export_scale_factor(prefs) == 4
        assert export_directory(prefs).is_dir()

    def test_scale_factor_is_clamped(self, prefs):
        """Test out-of-range scale factors are clamped."""
        prefs.setValue(SCALE_FACTOR_KEY, 20)
        assert export_scale_factor(prefs) == 8
        prefs.setValue(SCALE_FACTOR_KEY, 0)
        assert export_scale_factor(prefs) == 1

    def test_directory(self, prefs, tmp_path):
        """Test a saved directory is returned."""
        prefs.setValue(DIRECTORY_KEY, str(tmp_path))
        assert export_directory(prefs) == tmp_path


class TestHelpDialog:
    """Test cases for HelpDialog."""

    def test_shows_default_topic(self, qapp):
        """Test the first topic is shown when none is asked for."""
        dialog = HelpDialog()
        assert dialog.topic_list.currentItem().text() == "Getting Started"
        assert "Timeline Creator" in dialog.content_view.toPlainText()

    def test_shows_requested_topic(self, qapp):
        """Test a named topic is selected and rendered."""
        dialog = HelpDialog(topic="Exporting")
        assert dialog.topic_list.currentItem().text() == "Exporting"
        assert "Export resolution" in dialog.content_view.toPlainText()

    def test_every_topic_has_a_file(self, qapp):
        """Test every topic's markdown file ships with the package."""
        dialog = HelpDialog()
        for topic in HelpDialog.TOPICS:
            assert not dialog.load_topic(topic).startswith("# Error")
