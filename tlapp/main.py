"""Main entry point for the Timeline Creator application."""

import sys

from tlapp.ui.application import create_application


def main():
    """
    Run the Timeline Creator application.
    """
    app, _window = create_application()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
