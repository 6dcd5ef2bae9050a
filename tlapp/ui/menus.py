from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QMenu, QMenuBar

if TYPE_CHECKING:
    from tlapp.ui.main_window import MainWindow


class MainMenu:
    """Main application menu."""

    def __init__(self, main_window: MainWindow) -> None:
        """
        Initialize main menu.

        Args:
            main_window: Main window instance

        """
        #: Main window instance
        self.main_window = main_window
        #: Menu bar
        self.menu = self.main_window.menuBar()

    def add_menu(self, menu: str) -> QMenu:
        """
        Add a menu to the main menu bar.

        Args:
            menu: title of the menu

        Returns:
            The added menu instance

        """
        return self.menu.addMenu(menu)

    def build(self) -> None:
        """Build the main menu."""
        # Save a reference to the file menu so PreferencesMenu can find it,
        # if needed.
        self.file_menu = FileMenu(self, self.main_window).file_menu
        # This must come after the file menu so we can find the right place base
        # on OS; on macOS, it goes in the application menu, on Windows/Linux, it
        # goes in the File menu.
        PreferencesMenu(self, self.main_window)
        QuitAction(self, self.main_window)
        HelpMenu(self, self.main_window)


class FileMenu:
    """
    A "File" menu to be added to the main menu bar with the following actions:

    - Add Project...
    - Export PNG...

    Args:
        main_menu: Main menu instance
        main_window: Main window instance

    """

    def __init__(self, main_menu: MainMenu, main_window: MainWindow) -> None:
        """
        Initialize file menu.
        """
        #: Main window instance
        self.main_window = main_window
        #: Main menu instance
        self.main_menu = main_menu
        self.populate()

    def populate(self) -> None:
        """
        Populate the file menu.

        This means adding a "File" menu to the main menu bar, with the following
        actions:

        - Add Project...
        - Export PNG...

        """
        # Store reference for preferences menu
        self.file_menu = self.main_menu.add_menu("&File")

        add_action = QAction("&Add Project...", self.file_menu)
        add_action.setShortcut(QKeySequence("Ctrl+N"))
        add_action.triggered.connect(self.main_window.action_service.add_project)
        self.file_menu.addAction(add_action)

        self.file_menu.addSeparator()

        export_action = QAction("&Export PNG...", self.file_menu)
        export_action.setShortcut(QKeySequence("Ctrl+E"))
        export_action.triggered.connect(self.main_window.action_service.export_png)
        self.file_menu.addAction(export_action)


class PreferencesMenu:
    """
    A "Preferences" menu to be added to the main menu bar with the following
    actions:

    - Preferences...
    """

    def __init__(self, main_menu: MainMenu, main_window: MainWindow) -> None:
        #: Main window instance
        self.main_window = main_window
        #: Main menu instance
        self.main_menu = main_menu
        self.populate()

    def populate(self) -> None:
        """
        Populate the preferences menu with the following actions:

        - Preferences...

        On macOS, this goes in the application menu.
        On Windows/Linux, this goes in the File menu.

        """
        if sys.platform == "darwin":
            # macOS: Add to application menu (first menu, typically app name)
            menu_bar = self.main_window.menuBar()
            if isinstance(menu_bar, QMenuBar):
                actions = menu_bar.actions()
                if actions:
                    app_menu = actions[0].menu()
                    if isinstance(app_menu, QMenu):
                        app_menu.addSeparator()
                        preferences_action = QAction("&Preferences...", app_menu)
                        preferences_action.setShortcut(QKeySequence("Ctrl+,"))
                        preferences_action.triggered.connect(
                            self.main_window.show_settings_dialog
                        )
                        app_menu.addAction(preferences_action)
        else:
            # Windows/Linux: Add to File menu
            self.main_menu.file_menu.addSeparator()
            settings_action = QAction("&Settings...", self.main_menu.file_menu)
            settings_action.triggered.connect(self.main_window.show_settings_dialog)
            self.main_menu.file_menu.addAction(settings_action)


class QuitAction:
    """
    A "Quit" action at the bottom of the "File" menu.
    """

    def __init__(self, main_menu: MainMenu, main_window: MainWindow) -> None:
        #: Main window instance
        self.main_window = main_window
        #: Main menu instance
        self.main_menu = main_menu
        self.populate()

    def populate(self) -> None:
        """Add the "Quit" action."""
        file_menu = self.main_menu.file_menu
        file_menu.addSeparator()
        quit_action = QAction("&Quit", file_menu)
        quit_action.setShortcut(QKeySequence("Ctrl+Q"))
        quit_action.triggered.connect(self.main_window.close)
        file_menu.addAction(quit_action)


class HelpMenu:
    """
    A "Help" menu to be added to the main menu bar with the following actions:

    - Help
    """

    def __init__(self, main_menu: MainMenu, main_window: MainWindow) -> None:
        #: Main window instance
        self.main_window = main_window
        #: Main menu instance
        self.main_menu = main_menu
        self.populate()

    def populate(self) -> None:
        """
        Adding a "Help" menu to the main menu bar, with the following actions:

        - Help
        """
        self.help_menu = self.main_menu.add_menu("&Help")

        help_action = QAction("&Help", self.help_menu)
        help_action.setShortcut(QKeySequence("F1"))
        help_action.triggered.connect(lambda: self.main_window.show_help())
        self.help_menu.addAction(help_action)
