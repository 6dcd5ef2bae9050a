"""Timeline settings model."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from enum import StrEnum
from typing import Any, Final

#: English month names; month labels do not follow the system locale.
MONTH_NAMES: Final[tuple[str, ...]] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


class MonthFormat(StrEnum):
    """How month labels are written in the header row."""

    #: Jan, Feb, Mar
    SHORT = "short"
    #: January, February, March
    LONG = "long"

    def label(self, day: date) -> str:
        """
        Month label for the month containing ``day``.

        Args:
            day: Any day in the month

        Returns:
            "Jan" or "January" style label

        """
        name = MONTH_NAMES[day.month - 1]
        return name[:3] if self is MonthFormat.SHORT else name


def _first_of_year() -> date:
    return date(date.today().year, 1, 1)


def _last_of_year() -> date:
    return date(date.today().year, 12, 31)


def _default_title() -> str:
    return f"Project Timeline {date.today().year}"


@dataclass(frozen=True)
class TimelineSettings:
    """
    Visible window and styling of the timeline chart.
    """

    #: First day of the visible window.
    start_date: date | None = field(default_factory=_first_of_year)
    #: Last day of the visible window.
    end_date: date | None = field(default_factory=_last_of_year)
    #: Chart title; also used for the export file name.
    title: str = field(default_factory=_default_title)
    #: Canvas background color.
    background_color: str = "#ffffff"
    #: Grid line, tick and border color.
    grid_color: str = "#d1d5db"
    #: Label color.
    text_color: str = "#111827"
    #: Whether month and swimlane grid lines are drawn.
    show_grid: bool = True
    #: Whether the year column is drawn.
    show_year_labels: bool = True
    #: Whether the current date should be highlighted.
    show_current_date: bool = True
    #: Color of the current date highlight.
    current_date_color: str = "#ef4444"
    #: Month label format.
    month_format: MonthFormat = MonthFormat.SHORT

    def update(self, **changes: Any) -> TimelineSettings:
        """
        Return a copy of these settings with ``changes`` applied.

        Keyword Args:
            changes: Field names and their new values

        Returns:
            The updated :class:`~tlapp.models.settings.TimelineSettings`

        """
        return replace(self, **changes)
