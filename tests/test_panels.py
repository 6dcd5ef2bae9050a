"""Unit tests for the editing panels."""

from datetime import date

import pytest

from tlapp.models import MonthFormat, TimelineData
from tlapp.ui.color_field import ColorField
from tlapp.ui.project_list import ProjectListPanel, describe_dates
from tlapp.ui.settings_panel import SettingsPanel
from tlapp.ui.swimlane_manager import SwimlaneManager


class TestColorField:
    """Test cases for ColorField."""

    def test_valid_text_emits(self, qapp):
        """Test typing a valid color updates and emits it."""
        field = ColorField("#000000")
        emitted = []
        field.color_changed.connect(emitted.append)
        field.edit.setText("#10B981")
        field.edit.editingFinished.emit()
        assert field.color() == "#10B981"
        assert emitted == ["#10B981"]

    def test_invalid_text_is_reverted(self, qapp):
        """Test typing an invalid color puts the old one back."""
        field = ColorField("#000000")
        field.edit.setText("nope")
        field.edit.editingFinished.emit()
        assert field.color() == "#000000"
        assert field.edit.text() == "#000000"

    def test_set_color_ignores_invalid(self, qapp):
        """Test set_color() ignores invalid colors."""
        field = ColorField("#000000")
        field.set_color("nope")
        assert field.color() == "#000000"


class TestSwimlaneManager:
    """Test cases for SwimlaneManager."""

    @pytest.fixture
    def manager(self, qapp, timeline):
        """A manager editing the demo timeline."""
        return SwimlaneManager(timeline)

    def test_lists_swimlanes(self, manager):
        """Test every lane is listed in order."""
        names = [manager.lane_list.item(i).text() for i in range(2)]
        assert names == ["Development", "Marketing"]

    def test_add_swimlane(self, manager, timeline):
        """Test the edit row adds a lane."""
        changes = []
        manager.changed.connect(lambda: changes.append(True))
        manager.name_edit.setText("Sales")
        manager.add_swimlane()
        assert timeline.swimlanes[-1].name == "Sales"
        assert manager.lane_list.count() == 3
        assert manager.name_edit.text() == ""
        assert changes == [True]

    def test_add_blank_swimlane_is_ignored(self, manager, timeline):
        """Test a blank name adds nothing."""
        manager.name_edit.setText("  ")
        manager.add_swimlane()
        assert len(timeline.swimlanes) == 2

    def test_select_loads_edit_row(self, manager):
        """Test selecting a lane loads its name and color."""
        manager.lane_list.setCurrentRow(1)
        assert manager.name_edit.text() == "Marketing"
        assert manager.color_field.color() == "#10B981"

    def test_save_selected(self, manager, timeline):
        """Test the edit row renames the selected lane."""
        manager.lane_list.setCurrentRow(0)
        manager.name_edit.setText("Engineering")
        manager.save_selected()
        assert timeline.swimlanes[0].name == "Engineering"
        assert manager.lane_list.item(0).text() == "Engineering"

    def test_delete_selected(self, manager, timeline):
        """Test the selected lane is deleted."""
        manager.lane_list.setCurrentRow(0)
        manager.delete_selected()
        assert [lane.name for lane in timeline.swimlanes] == ["Marketing"]

    def test_move_down_and_up(self, manager, timeline):
        """Test moving keeps the moved lane selected."""
        manager.lane_list.setCurrentRow(0)
        manager.move_down()
        assert [lane.id for lane in timeline.swimlanes] == ["2", "1"]
        assert manager.lane_list.currentRow() == 1
        manager.move_up()
        assert [lane.id for lane in timeline.swimlanes] == ["1", "2"]
        assert manager.lane_list.currentRow() == 0

    def test_move_buttons_at_ends(self, manager):
        """Test the first lane cannot move up and the last cannot move down."""
        manager.lane_list.setCurrentRow(0)
        assert not manager.up_button.isEnabled()
        assert manager.down_button.isEnabled()
        manager.lane_list.setCurrentRow(1)
        assert manager.up_button.isEnabled()
        assert not manager.down_button.isEnabled()


class TestSettingsPanel:
    """Test cases for SettingsPanel."""

    @pytest.fixture
    def panel(self, qapp, q1_settings):
        """A panel showing the Q1 settings."""
        return SettingsPanel(q1_settings)

    @pytest.fixture
    def emitted(self, panel):
        """Settings emitted by the panel."""
        values = []
        panel.settings_changed.connect(values.append)
        return values

    def test_loads_settings(self, panel):
        """Test the form shows the settings."""
        assert panel.title_edit.text() == "Q1 Plan"
        assert panel.start_edit.text() == "2024-01-01"
        assert panel.end_edit.text() == "2024-03-31"
        assert panel.show_grid_check.isChecked()
        assert panel.date_error_label.text() == ""

    def test_title_change(self, panel, emitted):
        """Test editing the title emits new settings."""
        panel.title_edit.setText("Roadmap")
        panel.title_edit.editingFinished.emit()
        assert emitted[-1].title == "Roadmap"

    def test_window_change(self, panel, emitted):
        """Test editing the window dates emits new settings."""
        panel.end_edit.setText("2024-06-30")
        panel.end_edit.editingFinished.emit()
        assert emitted[-1].end_date == date(2024, 6, 30)

    def test_unparsable_date_is_reverted(self, panel, emitted):
        """Test text that is not a date is put back."""
        panel.start_edit.setText("soon")
        panel.start_edit.editingFinished.emit()
        assert panel.start_edit.text() == "2024-01-01"
        assert emitted == []

    def test_inverted_window_is_rejected(self, panel, emitted):
        """Test an inverted window is reported and the old window kept."""
        panel.start_edit.setText("2024-05-01")
        panel.start_edit.editingFinished.emit()
        assert emitted == []
        assert panel.settings.start_date == date(2024, 1, 1)
        assert panel.date_error_label.text() == "Start date must be before end date"

    def test_out_of_bounds_window_is_rejected(self, panel, emitted):
        """Test a start before 1900 is reported and the old window kept."""
        panel.start_edit.setText("0001-01-01")
        panel.start_edit.editingFinished.emit()
        assert emitted == []
        assert panel.settings.start_date == date(2024, 1, 1)
        assert panel.date_error_label.text() == "Dates must be between 1900 and 2100"

    def test_corrected_window_clears_error(self, panel, emitted):
        """Test fixing a rejected window applies it and clears the error."""
        panel.start_edit.setText("2024-05-01")
        panel.start_edit.editingFinished.emit()
        panel.end_edit.setText("2024-08-31")
        panel.end_edit.editingFinished.emit()
        assert emitted[-1].start_date == date(2024, 5, 1)
        assert emitted[-1].end_date == date(2024, 8, 31)
        assert panel.date_error_label.text() == ""

    def test_month_format(self, panel, emitted):
        """Test choosing long month names."""
        panel.month_format_combo.setCurrentIndex(1)
        assert emitted[-1].month_format == MonthFormat.LONG

    def test_toggles(self, panel, emitted):
        """Test the grid and year label checkboxes."""
        panel.show_grid_check.setChecked(False)
        panel.show_years_check.setChecked(False)
        assert emitted[-1].show_grid is False
        assert emitted[-1].show_year_labels is False

    def test_colors(self, panel, emitted):
        """Test color fields update the settings."""
        panel.background_field.color_changed.emit("#000000")
        assert emitted[-1].background_color == "#000000"

    def test_set_settings_does_not_emit(self, panel, emitted, q1_settings):
        """Test loading settings is silent."""
        panel.set_settings(q1_settings.update(title="Other", show_grid=False))
        assert emitted == []
        assert panel.title_edit.text() == "Other"


class TestProjectListPanel:
    """Test cases for ProjectListPanel."""

    @pytest.fixture
    def panel(self, qapp):
        """A panel showing the demo projects."""
        timeline = TimelineData.sample()
        widget = ProjectListPanel()
        widget.set_projects(timeline.projects, timeline.swimlanes)
        return widget

    def test_describe_dates(self, alpha, launch):
        """Test ranges show both dates and milestones their delivery date."""
        assert describe_dates(alpha) == "2024-01-15 - 2024-02-10"
        assert describe_dates(launch) == "2024-03-01"

    def test_lists_projects_with_lane_names(self, panel):
        """Test each entry shows name, dates and lane."""
        text = panel.project_list.item(0).text()
        assert "Project Alpha" in text
        assert "2024-01-15 - 2024-03-30" in text
        assert "Development" in text

    def test_empty_state(self, qapp):
        """Test the empty message replaces an empty list."""
        widget = ProjectListPanel()
        assert widget.project_list.isHidden()
        assert not widget.empty_label.isHidden()

    def test_buttons_need_selection(self, panel):
        """Test edit and delete are only enabled with a selection."""
        assert not panel.edit_button.isEnabled()
        panel.project_list.setCurrentRow(0)
        assert panel.edit_button.isEnabled()
        assert panel.delete_button.isEnabled()

    def test_requests(self, panel):
        """Test the buttons ask for changes by project ID."""
        edits, deletes, adds = [], [], []
        panel.edit_requested.connect(edits.append)
        panel.delete_requested.connect(deletes.append)
        panel.add_requested.connect(lambda: adds.append(True))
        panel.project_list.setCurrentRow(1)
        panel.edit_button.click()
        panel.delete_button.click()
        panel.add_button.click()
        assert edits == ["2"]
        assert deletes == ["2"]
        assert adds == [True]

    def test_keeps_selection_on_refresh(self, panel):
        """Test refreshing keeps the selected project selected."""
        timeline = TimelineData.sample()
        panel.project_list.setCurrentRow(1)
        panel.set_projects(timeline.projects, timeline.swimlanes)
        assert panel.selected_project_id() == "2"
