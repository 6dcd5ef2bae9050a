"""
Time axis layout for the timeline chart.

:func:`compute_layout` turns the settings window and the number of swimlanes
into a :class:`TimelineLayout`, which holds every position the renderer needs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Final

from tlapp.services.dates import (
    MAX_DATE,
    MIN_DATE,
    add_months,
    days_between,
    default_window,
    end_of_month,
    months_between,
    parse_date,
    start_of_month,
)

if TYPE_CHECKING:
    from tlapp.models.settings import TimelineSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutGeometry:
    """Fixed sizes, in logical pixels, the chart is built from."""

    #: Width of one month column.
    month_width: float = 120
    #: Height of one swimlane band.
    row_height: float = 80
    #: Height of the month header row.
    header_height: float = 60
    #: Width of the year label column on the right.
    year_column_width: float = 60
    #: Outer padding.
    padding: float = 20


#: The geometry used unless a caller supplies its own.
DEFAULT_GEOMETRY: Final[LayoutGeometry] = LayoutGeometry()


@dataclass(frozen=True)
class TimelineLayout:
    """
    Layout descriptor consumed by :class:`~tlapp.services.renderer.SceneRenderer`.
    """

    #: First day of the month-aligned window.
    window_start: date
    #: Last day of the month-aligned window.
    window_end: date
    #: Number of month columns; never less than 1.
    total_months: int
    #: Number of days in the window; never less than 1.
    total_days: int
    #: Number of swimlane rows.
    swimlane_count: int
    #: Sizes the layout was computed with.
    geometry: LayoutGeometry = field(default=DEFAULT_GEOMETRY)

    @property
    def grid_width(self) -> float:
        """Width of the month grid."""
        return self.total_months * self.geometry.month_width

    @property
    def grid_height(self) -> float:
        """Height of the swimlane grid."""
        return self.swimlane_count * self.geometry.row_height

    @property
    def canvas_width(self) -> float:
        """Logical canvas width."""
        g = self.geometry
        return g.padding + self.grid_width + g.year_column_width + g.padding

    @property
    def canvas_height(self) -> float:
        """Logical canvas height."""
        g = self.geometry
        return g.header_height + self.grid_height + g.padding

    def x_for_date(self, day: date) -> float:
        """
        Map a day to its x position.

        Days are placed by their fraction of the whole window, not snapped to
        their month column, so months of different lengths get equal-width
        columns while days inside them drift slightly.  Days outside the
        window map outside the grid.

        Args:
            day: Day to place

        Returns:
            The logical x coordinate

        """
        fraction = days_between(self.window_start, day) / self.total_days
        return self.geometry.padding + fraction * self.grid_width

    def month_x(self, index: int) -> float:
        """Left edge of month column ``index``."""
        return self.geometry.padding + index * self.geometry.month_width

    def month_starts(self) -> list[date]:
        """First day of each month column, left to right."""
        return [add_months(self.window_start, i) for i in range(self.total_months)]

    def years(self) -> list[int]:
        """Distinct calendar years spanned by the month columns, in order."""
        years: list[int] = []
        for month in self.month_starts():
            if month.year not in years:
                years.append(month.year)
        return years

    def swimlane_y(self, index: int) -> float:
        """Top edge of swimlane row ``index``."""
        return self.geometry.header_height + index * self.geometry.row_height


def compute_layout(
    settings: TimelineSettings,
    swimlane_count: int,
    geometry: LayoutGeometry = DEFAULT_GEOMETRY,
    today: date | None = None,
) -> TimelineLayout:
    """
    Compute the chart layout for a settings window.

    An unreadable window start is replaced by today and an unreadable end by
    December 31 of this year, so there is always something to draw.  Bounds
    outside :data:`~tlapp.services.dates.MIN_DATE`..
    :data:`~tlapp.services.dates.MAX_DATE` are clamped to that range, and the
    window is then widened to whole months.

    Args:
        settings: Timeline settings
        swimlane_count: Number of swimlane rows

    Keyword Args:
        geometry: Fixed sizes to lay out with
        today: Override for the current day

    Returns:
        The layout

    """
    default_start, default_end = default_window(today)
    start = parse_date(settings.start_date)
    end = parse_date(settings.end_date)
    if start is None:
        logger.debug(
            f"Unreadable window start {settings.start_date!r}; using {default_start}"
        )
        start = default_start
    if end is None:
        logger.debug(
            f"Unreadable window end {settings.end_date!r}; using {default_end}"
        )
        end = default_end
    clamped_start = min(max(start, MIN_DATE), MAX_DATE)
    clamped_end = min(max(end, MIN_DATE), MAX_DATE)
    if (clamped_start, clamped_end) != (start, end):
        logger.debug(
            f"Window {start}..{end} clamped to {clamped_start}..{clamped_end}"
        )
        start, end = clamped_start, clamped_end

    window_start = start_of_month(start)
    window_end = end_of_month(end)
    return TimelineLayout(
        window_start=window_start,
        window_end=window_end,
        total_months=max(1, months_between(window_start, window_end) + 1),
        total_days=max(1, days_between(window_start, window_end) + 1),
        swimlane_count=max(0, swimlane_count),
        geometry=geometry,
    )
