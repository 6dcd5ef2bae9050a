"""Timeline settings panel UI component."""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QWidget,
)

from tlapp.models.settings import MonthFormat, TimelineSettings
from tlapp.services.dates import (
    RangeValidation,
    format_for_edit,
    safe_parse,
    validate_range,
)
from tlapp.ui.color_field import ColorField


class SettingsPanel(QGroupBox):
    """
    Form for the timeline's window and style settings.

    Every edit emits :attr:`settings_changed` with a new
    :class:`~tlapp.models.settings.TimelineSettings`.  Window dates that cannot
    be parsed are put back to their previous value.  A window that parses but
    fails :func:`~tlapp.services.dates.validate_range` is not applied; the
    previous window stays in effect and the problem is shown under the date
    fields until the dates are corrected.

    Args:
        settings: Initial settings
        parent: Parent widget

    """

    settings_changed = Signal(object)  # Emits TimelineSettings

    def __init__(self, settings: TimelineSettings, parent: QWidget | None = None):
        super().__init__("Timeline Settings", parent)
        self.settings = settings
        self._setup_ui()
        self.set_settings(settings)

    def _setup_ui(self) -> None:
        """Set up the UI layout."""
        form = QFormLayout(self)

        self.title_edit = QLineEdit(self)
        self.title_edit.editingFinished.connect(
            lambda: self._apply(title=self.title_edit.text())
        )
        form.addRow("Title:", self.title_edit)

        dates_row = QHBoxLayout()
        self.start_edit = QLineEdit(self)
        self.start_edit.setPlaceholderText("yyyy-mm-dd")
        self.start_edit.editingFinished.connect(self._on_dates_edited)
        self.end_edit = QLineEdit(self)
        self.end_edit.setPlaceholderText("yyyy-mm-dd")
        self.end_edit.editingFinished.connect(self._on_dates_edited)
        dates_row.addWidget(self.start_edit)
        dates_row.addWidget(QLabel("to"))
        dates_row.addWidget(self.end_edit)
        form.addRow("Dates:", dates_row)

        self.date_error_label = QLabel(self)
        self.date_error_label.setStyleSheet("color: #dc2626;")
        form.addRow("", self.date_error_label)

        self.month_format_combo = QComboBox(self)
        self.month_format_combo.addItem("Short (Jan, Feb, Mar)", MonthFormat.SHORT.value)
        self.month_format_combo.addItem(
            "Long (January, February, March)", MonthFormat.LONG.value
        )
        self.month_format_combo.currentIndexChanged.connect(
            lambda: self._apply(
                month_format=MonthFormat(self.month_format_combo.currentData())
            )
        )
        form.addRow("Month Format:", self.month_format_combo)

        self.background_field = ColorField(parent=self)
        self.background_field.color_changed.connect(
            lambda color: self._apply(background_color=color)
        )
        form.addRow("Background:", self.background_field)

        self.text_color_field = ColorField(parent=self)
        self.text_color_field.color_changed.connect(
            lambda color: self._apply(text_color=color)
        )
        form.addRow("Text Color:", self.text_color_field)

        self.grid_color_field = ColorField(parent=self)
        self.grid_color_field.color_changed.connect(
            lambda color: self._apply(grid_color=color)
        )
        form.addRow("Grid Color:", self.grid_color_field)

        self.show_grid_check = QCheckBox("Show Grid Lines", self)
        self.show_grid_check.toggled.connect(
            lambda checked: self._apply(show_grid=checked)
        )
        form.addRow(self.show_grid_check)

        self.show_years_check = QCheckBox("Show Year Labels", self)
        self.show_years_check.toggled.connect(
            lambda checked: self._apply(show_year_labels=checked)
        )
        form.addRow(self.show_years_check)

    def set_settings(self, settings: TimelineSettings) -> None:
        """
        Load ``settings`` into the form without emitting any signal.

        Args:
            settings: Settings to show

        """
        self.settings = settings
        widgets = (
            self.title_edit,
            self.start_edit,
            self.end_edit,
            self.month_format_combo,
            self.show_grid_check,
            self.show_years_check,
        )
        for widget in widgets:
            widget.blockSignals(True)  # noqa: FBT003
        self.title_edit.setText(settings.title)
        self.start_edit.setText(format_for_edit(settings.start_date))
        self.end_edit.setText(format_for_edit(settings.end_date))
        index = self.month_format_combo.findData(str(settings.month_format))
        self.month_format_combo.setCurrentIndex(max(index, 0))
        self.show_grid_check.setChecked(settings.show_grid)
        self.show_years_check.setChecked(settings.show_year_labels)
        for widget in widgets:
            widget.blockSignals(False)  # noqa: FBT003
        self.background_field.set_color(settings.background_color)
        self.text_color_field.set_color(settings.text_color)
        self.grid_color_field.set_color(settings.grid_color)
        self._show_date_error()

    def _on_dates_edited(self) -> None:
        start = safe_parse(self.start_edit.text())
        end = safe_parse(self.end_edit.text())
        if start is None:
            self.start_edit.setText(format_for_edit(self.settings.start_date))
            start = self.settings.start_date
        if end is None:
            self.end_edit.setText(format_for_edit(self.settings.end_date))
            end = self.settings.end_date
        if start == self.settings.start_date and end == self.settings.end_date:
            self._show_date_error()
            return
        result = validate_range(start, end)
        if not result.ok:
            self._show_date_error(result)
            return
        self._apply(start_date=start, end_date=end)

    def _show_date_error(self, result: RangeValidation | None = None) -> None:
        if result is None:
            result = validate_range(self.settings.start_date, self.settings.end_date)
        self.date_error_label.setText(
            result.error.message if not result.ok and result.error else ""
        )
        self.date_error_label.setVisible(not result.ok)

    def _apply(self, **changes: Any) -> None:
        updated = self.settings.update(**changes)
        if updated == self.settings:
            return
        self.settings = updated
        self._show_date_error()
        self.settings_changed.emit(updated)
