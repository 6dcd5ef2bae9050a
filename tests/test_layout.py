"""Unit tests for the timeline layout."""

from datetime import date

import pytest

from tlapp.models import TimelineSettings
from tlapp.services.layout import LayoutGeometry, compute_layout


class TestComputeLayout:
    """Test cases for compute_layout()."""

    def test_q1_window(self, q1_settings):
        """Test a Q1 window gives three months and 91 days."""
        layout = compute_layout(q1_settings, 2)
        assert layout.window_start == date(2024, 1, 1)
        assert layout.window_end == date(2024, 3, 31)
        assert layout.total_months == 3
        assert layout.total_days == 91

    def test_canvas_size(self, q1_settings):
        """Test canvas size adds padding, header and the year column."""
        layout = compute_layout(q1_settings, 2)
        assert layout.grid_width == 360
        assert layout.grid_height == 160
        assert layout.canvas_width == 20 + 360 + 60 + 20
        assert layout.canvas_height == 60 + 160 + 20

    def test_window_is_widened_to_whole_months(self):
        """Test mid-month bounds are pushed out to month boundaries."""
        settings = TimelineSettings(
            start_date=date(2024, 1, 20), end_date=date(2024, 2, 5)
        )
        layout = compute_layout(settings, 1)
        assert layout.window_start == date(2024, 1, 1)
        assert layout.window_end == date(2024, 2, 29)
        assert layout.total_months == 2
        assert layout.total_days == 60

    def test_inverted_window_still_has_a_column(self):
        """Test an end before the start still lays out one month."""
        settings = TimelineSettings(
            start_date=date(2024, 6, 1), end_date=date(2024, 1, 1)
        )
        layout = compute_layout(settings, 1)
        assert layout.total_months == 1
        assert layout.total_days == 1
        assert layout.canvas_width > 0

    def test_window_is_clamped_to_date_bounds(self):
        """Test bounds before 1900 or after 2100 are pulled back inside."""
        settings = TimelineSettings(
            start_date=date(1, 1, 1), end_date=date(9999, 12, 31)
        )
        layout = compute_layout(settings, 1)
        assert layout.window_start == date(1900, 1, 1)
        assert layout.window_end == date(2100, 12, 31)
        assert layout.total_months == 201 * 12

    def test_early_typo_does_not_widen_canvas(self, q1_settings):
        """Test a year 1 start lays out from 1900, not from year 1."""
        settings = q1_settings.update(start_date=date(1, 1, 1))
        layout = compute_layout(settings, 2)
        assert layout.window_start == date(1900, 1, 1)
        assert layout.total_months == 124 * 12 + 3

    def test_missing_dates_use_default_window(self):
        """Test missing bounds fall back to today through December 31."""
        settings = TimelineSettings(start_date=None, end_date=None)
        layout = compute_layout(settings, 1, today=date(2025, 10, 17))
        assert layout.window_start == date(2025, 10, 1)
        assert layout.window_end == date(2025, 12, 31)
        assert layout.total_months == 3

    def test_no_swimlanes(self, q1_settings):
        """Test zero swimlanes leaves only header and padding."""
        layout = compute_layout(q1_settings, 0)
        assert layout.grid_height == 0
        assert layout.canvas_height == 80

    def test_custom_geometry(self, q1_settings):
        """Test a caller-supplied geometry is used throughout."""
        geometry = LayoutGeometry(
            month_width=100,
            row_height=50,
            header_height=40,
            year_column_width=0,
            padding=10,
        )
        layout = compute_layout(q1_settings, 3, geometry=geometry)
        assert layout.canvas_width == 10 + 300 + 0 + 10
        assert layout.canvas_height == 40 + 150 + 10
        assert layout.swimlane_y(2) == 140


class TestTimelineLayout:
    """Test cases for TimelineLayout positions."""

    @pytest.fixture
    def layout(self, q1_settings):
        """Layout for the Q1 window with two lanes."""
        return compute_layout(q1_settings, 2)

    def test_x_for_date_uses_fraction_of_window(self, layout):
        """Test days are placed by their share of the whole window."""
        assert layout.x_for_date(date(2024, 1, 1)) == 20
        assert layout.x_for_date(date(2024, 1, 15)) == pytest.approx(
            20 + 14 / 91 * 360
        )
        assert layout.x_for_date(date(2024, 2, 10)) == pytest.approx(
            20 + 40 / 91 * 360
        )

    def test_x_for_date_outside_window(self, layout):
        """Test days outside the window map outside the grid."""
        assert layout.x_for_date(date(2023, 12, 1)) < 20
        assert layout.x_for_date(date(2024, 6, 1)) > 20 + layout.grid_width

    def test_month_columns(self, layout):
        """Test month columns start at the padding, one month width apart."""
        assert [layout.month_x(i) for i in range(3)] == [20, 140, 260]
        assert layout.month_starts() == [
            date(2024, 1, 1),
            date(2024, 2, 1),
            date(2024, 3, 1),
        ]

    def test_years_are_distinct_and_ordered(self):
        """Test a window over New Year lists both years once."""
        settings = TimelineSettings(
            start_date=date(2023, 11, 1), end_date=date(2024, 2, 1)
        )
        assert compute_layout(settings, 1).years() == [2023, 2024]

    def test_swimlane_rows(self, layout):
        """Test swimlane rows sit under the header, one row height apart."""
        assert layout.swimlane_y(0) == 60
        assert layout.swimlane_y(1) == 140
