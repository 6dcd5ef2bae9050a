from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Final, cast

from PySide6.QtCore import QSettings
from PySide6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
)

from tlapp.services.export_png import PNGExporter

if TYPE_CHECKING:
    from tlapp.ui.main_window import MainWindow

#: QSettings key of the export resolution multiplier.
SCALE_FACTOR_KEY: Final[str] = "export/scale_factor"
#: QSettings key of the export directory.
DIRECTORY_KEY: Final[str] = "export/directory"
#: Smallest allowed export resolution multiplier.
MIN_SCALE_FACTOR: Final[int] = 1
#: Largest allowed export resolution multiplier.
MAX_SCALE_FACTOR: Final[int] = 8


def default_export_directory() -> Path:
    """
    Where exports go unless the user picked a directory.

    Returns:
        ``~/Downloads`` if it exists, otherwise the home directory

    """
    downloads = Path.home() / "Downloads"
    return downloads if downloads.is_dir() else Path.home()


def export_scale_factor(settings: QSettings | None = None) -> int:
    """
    Read the export resolution multiplier from the preferences.

    Keyword Args:
        settings: Settings store to read from

    Returns:
        The multiplier, clamped to the allowed range

    """
    if settings is None:
        settings = QSettings()
    value = cast(
        "int",
        settings.value(SCALE_FACTOR_KEY, PNGExporter.DEFAULT_SCALE_FACTOR, type=int),
    )
    value = int(value) if value is not None else PNGExporter.DEFAULT_SCALE_FACTOR
    return min(max(value, MIN_SCALE_FACTOR), MAX_SCALE_FACTOR)


def export_directory(settings: QSettings | None = None) -> Path:
    """
    Read the export directory from the preferences.

    Keyword Args:
        settings: Settings store to read from

    Returns:
        The directory

    """
    if settings is None:
        settings = QSettings()
    value = cast("str | None", settings.value(DIRECTORY_KEY, "", type=str))
    return Path(value) if value else default_export_directory()


class PreferencesDialog:
    """
    Preferences dialog for export configuration.
    """

    #: Dialog width
    DIALOG_WIDTH: Final[int] = 460
    #: Dialog height
    DIALOG_HEIGHT: Final[int] = 200

    def __init__(self, main_window: MainWindow) -> None:
        """
        Initialize preferences dialog.
        """
        self.main_window = main_window
        self.settings = QSettings()

    def build(self) -> None:
        """
        Build the preferences dialog.
        """
        self.dialog = QDialog(self.main_window)
        self.dialog.setWindowTitle("Preferences")
        self.dialog.setMinimumSize(self.DIALOG_WIDTH, self.DIALOG_HEIGHT)
        self.layout = QVBoxLayout(self.dialog)

        # Export resolution
        scale_label = QLabel("Export resolution (multiple of screen resolution):")
        self.scale_spin = QSpinBox(self.dialog)
        self.scale_spin.setMinimum(MIN_SCALE_FACTOR)
        self.scale_spin.setMaximum(MAX_SCALE_FACTOR)
        self.scale_spin.setSuffix("x")
        self.scale_spin.setValue(export_scale_factor(self.settings))
        self.layout.addWidget(scale_label)
        self.layout.addWidget(self.scale_spin)

        # Export directory
        directory_label = QLabel("Save exported images to:")
        directory_row = QHBoxLayout()
        self.directory_edit = QLineEdit(self.dialog)
        self.directory_edit.setText(str(export_directory(self.settings)))
        browse_button = QPushButton("Browse...", self.dialog)
        browse_button.clicked.connect(self._browse)
        directory_row.addWidget(self.directory_edit, stretch=1)
        directory_row.addWidget(browse_button)
        self.layout.addWidget(directory_label)
        self.layout.addLayout(directory_row)
        self.layout.addStretch()

        # Button box
        self.button_box = QDialogButtonBox(self.dialog)
        self.button_box.addButton(QDialogButtonBox.StandardButton.Ok)
        self.button_box.addButton(QDialogButtonBox.StandardButton.Cancel)
        self.button_box.accepted.connect(self.save_settings)
        self.button_box.rejected.connect(self.dialog.reject)
        self.layout.addWidget(self.button_box)

    def _browse(self) -> None:
        directory = QFileDialog.getExistingDirectory(
            self.dialog, "Export Directory", self.directory_edit.text()
        )
        if directory:
            self.directory_edit.setText(directory)

    def save_settings(self) -> None:
        """Save preferences to QSettings."""
        self.settings.setValue(SCALE_FACTOR_KEY, self.scale_spin.value())
        self.settings.setValue(DIRECTORY_KEY, self.directory_edit.text().strip())
        self.dialog.accept()

    def execute(self) -> None:
        """
        Execute the preferences dialog.
        """
        self.build()
        self.dialog.exec()
