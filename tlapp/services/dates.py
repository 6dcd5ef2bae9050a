"""
Date normalization shared by the editing forms and the timeline renderer.

Every function here is total: bad input produces ``None``, an empty string or
a failed :class:`RangeValidation`, never an exception.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from typing import Final

#: Earliest date a project or window may use.
MIN_DATE: Final[date] = date(1900, 1, 1)
#: Latest date a project or window may use.
MAX_DATE: Final[date] = date(2100, 12, 31)

#: Formats tried, in order, after the ISO form fails.
FALLBACK_FORMATS: Final[tuple[str, ...]] = (
    "%Y-%m-%d",
    "%m/%d/%Y",
    "%d/%m/%Y",
    "%Y/%m/%d",
    "%m-%d-%Y",
    "%d-%m-%Y",
)


class DateRangeError(StrEnum):
    """Reasons a date range can fail validation."""

    MISSING_DATE = "missing_date"
    INVALID_DATE = "invalid_date"
    INVERTED_RANGE = "inverted_range"
    OUT_OF_BOUNDS = "out_of_bounds"

    @property
    def message(self) -> str:
        """Message shown next to the offending field."""
        return _ERROR_MESSAGES[self]


_ERROR_MESSAGES: Final[dict[DateRangeError, str]] = {
    DateRangeError.MISSING_DATE: "Both start and end dates are required",
    DateRangeError.INVALID_DATE: "Invalid date format",
    DateRangeError.INVERTED_RANGE: "Start date must be before end date",
    DateRangeError.OUT_OF_BOUNDS: "Dates must be between 1900 and 2100",
}


@dataclass(frozen=True)
class RangeValidation:
    """Result of :func:`validate_range`."""

    #: Whether the range is usable.
    ok: bool
    #: Why it is not, when :attr:`ok` is ``False``.
    error: DateRangeError | None = None


def _as_date(value: object) -> date | None:
    # datetime is a subclass of date, so it must be checked first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return None


def _parse_iso(text: str) -> date | None:
    text = text.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def parse_date(value: date | str | None) -> date | None:
    """
    Turn a date, datetime or ISO string into a :class:`datetime.date`.

    Args:
        value: Value to convert

    Returns:
        The calendar day, or ``None`` for missing or unparsable input

    """
    if not value:
        return None
    if isinstance(value, str):
        return _parse_iso(value)
    return _as_date(value)


def safe_parse(text: str | None) -> date | None:
    """
    Parse user-typed text into a date.

    The ISO form is tried first, then each of :data:`FALLBACK_FORMATS` in
    order; the first one that parses wins.  Any time of day is dropped.

    Args:
        text: Text to parse

    Returns:
        The calendar day, or ``None`` if nothing matched

    """
    if not text or not isinstance(text, str):
        return None
    if (parsed := _parse_iso(text)) is not None:
        return parsed
    stripped = text.strip()
    for fmt in FALLBACK_FORMATS:
        try:
            return datetime.strptime(stripped, fmt).date()  # noqa: DTZ007
        except ValueError:
            continue
    return None


def validate_range(start: object, end: object) -> RangeValidation:
    """
    Check that ``start`` and ``end`` form a usable date range.

    The checks run in this order and the first failure is reported:

    - either bound is missing or empty: :attr:`DateRangeError.MISSING_DATE`
    - either bound is not a date: :attr:`DateRangeError.INVALID_DATE`
    - ``start`` is after ``end``: :attr:`DateRangeError.INVERTED_RANGE`
    - either bound is outside :data:`MIN_DATE`..:data:`MAX_DATE`:
      :attr:`DateRangeError.OUT_OF_BOUNDS`

    Args:
        start: First day of the range
        end: Last day of the range

    Returns:
        The validation result

    """
    if not start or not end:
        return RangeValidation(ok=False, error=DateRangeError.MISSING_DATE)
    start_day = _as_date(start)
    end_day = _as_date(end)
    if start_day is None or end_day is None:
        return RangeValidation(ok=False, error=DateRangeError.INVALID_DATE)
    if start_day > end_day:
        return RangeValidation(ok=False, error=DateRangeError.INVERTED_RANGE)
    if not (MIN_DATE <= start_day <= MAX_DATE and MIN_DATE <= end_day <= MAX_DATE):
        return RangeValidation(ok=False, error=DateRangeError.OUT_OF_BOUNDS)
    return RangeValidation(ok=True)


def format_for_edit(value: object) -> str:
    """
    Format a date as ``yyyy-MM-dd`` for an edit field.

    Args:
        value: Date to format

    Returns:
        The zero-padded ISO day, or ``""`` for anything that is not a date

    """
    day = _as_date(value)
    if day is None:
        return ""
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def default_window(today: date | None = None) -> tuple[date, date]:
    """
    The window used when the configured one cannot be read.

    Keyword Args:
        today: Override for the current day

    Returns:
        ``(today, December 31 of today's year)``

    """
    today = today or date.today()  # noqa: DTZ011
    return today, date(today.year, 12, 31)


def start_of_month(day: date) -> date:
    """First day of the month containing ``day``."""
    return day.replace(day=1)


def end_of_month(day: date) -> date:
    """Last day of the month containing ``day``."""
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def add_months(day: date, months: int) -> date:
    """
    Move ``day`` by a number of calendar months, clamping to the month's end.

    Args:
        day: Starting day
        months: Months to add (may be negative)

    Returns:
        The shifted day

    """
    index = day.year * 12 + (day.month - 1) + months
    year, month = divmod(index, 12)
    last = calendar.monthrange(year, month + 1)[1]
    return date(year, month + 1, min(day.day, last))


def months_between(start: date, end: date) -> int:
    """Whole calendar months from ``start``'s month to ``end``'s month."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def days_between(start: date, end: date) -> int:
    """Days from ``start`` to ``end``; negative when ``end`` is earlier."""
    return (end - start).days
