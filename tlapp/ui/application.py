import logging
import sys

from PySide6.QtCore import QCoreApplication
from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QApplication

from tlapp import __version__

from .main_window import MainWindow

#: Name shown in the menu bar and used for the QSettings store
APPLICATION_NAME = "Timeline Creator"


def create_application(argv: list[str] | None = None) -> tuple[QApplication, MainWindow]:
    """
    Create the application and its main window.

    Keyword Args:
        argv: Command line arguments; defaults to :data:`sys.argv`

    Returns:
        The application and the (shown) main window

    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    QCoreApplication.setOrganizationName(APPLICATION_NAME)  # Can be any string
    QCoreApplication.setApplicationName(APPLICATION_NAME)  # Name in the menu bar

    app = QApplication(sys.argv if argv is None else argv)
    app.setApplicationName(APPLICATION_NAME)
    app.setApplicationVersion(__version__)

    # Set display name for macOS menu bar
    QGuiApplication.setApplicationDisplayName(APPLICATION_NAME)

    window = MainWindow()
    window.show()
    return app, window
