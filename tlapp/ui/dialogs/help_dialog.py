"""Help dialog."""

from pathlib import Path
from typing import Final

import markdown
from PySide6.QtCore import QSize, Qt
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QDialog,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QSplitter,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)

from tlapp.utils import get_resource_path

#: HTML template for help content.
HELP_HTML_TEMPLATE = """
    <html>
    <head>
        <style>
            body {{
                font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Arial, sans-serif;
                line-height: 1.6;
                padding: 20px;
                max-width: 800px;
            }}
            h1 {{
                color: #111827;
                border-bottom: 2px solid #3B82F6;
                padding-bottom: 10px;
            }}
            h2 {{
                color: #1f2937;
                margin-top: 30px;
            }}
            table {{
                border-collapse: collapse;
                width: 100%;
                margin: 20px 0;
            }}
            th, td {{
                border: 1px solid #d1d5db;
                padding: 8px;
                text-align: left;
            }}
            th {{
                background-color: #3B82F6;
                color: white;
            }}
            code {{
                background-color: #f3f4f6;
                padding: 2px 6px;
                border-radius: 3px;
                font-family: "Courier New", monospace;
            }}
            ul, ol {{
                margin: 10px 0;
                padding-left: 30px;
            }}
        </style>
    </head>
    <body>
        {}
    </body>
    </html>
"""  # noqa: E501


class HelpDialog(QDialog):
    """
    Help dialog displaying documentation.

    Args:
        topic: Optional topic to display initially
        parent: Parent widget

    """

    #: Help topics mapping
    TOPICS: Final[dict[str, str]] = {
        "Getting Started": "getting-started.md",
        "Projects and Swimlanes": "projects-and-swimlanes.md",
        "Exporting": "exporting.md",
    }
    #: Topic shown when none (or an unknown one) is asked for
    DEFAULT_TOPIC: Final[str] = "Getting Started"

    def __init__(self, topic: str | None = None, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        # Make the dialog non-modal so users can keep it open while working
        self.setModal(False)
        #: The directory containing the help files.
        self.help_dir = get_resource_path("help")
        self._setup_ui()
        self.show_topic(topic if topic in self.TOPICS else self.DEFAULT_TOPIC)

    def _setup_ui(self) -> None:
        """
        Set up the UI layout.

        This means:

        - Setting the window title and size
        - Adding a header label
        - Adding a splitter with the topic list and the content view

        """
        self.setWindowTitle("Timeline Creator - Help")
        self.setGeometry(100, 100, 900, 700)
        self.setMinimumSize(QSize(700, 500))

        layout = QVBoxLayout(self)

        header = QLabel("Help Documentation")
        header_font = QFont()
        header_font.setPointSize(16)
        header_font.setBold(True)
        header.setFont(header_font)
        layout.addWidget(header)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        layout.addWidget(splitter, 1)

        # Topic list (left sidebar)
        self.topic_list = QListWidget()
        self.topic_list.addItems(list(self.TOPICS.keys()))
        self.topic_list.setMaximumWidth(200)
        self.topic_list.currentItemChanged.connect(self._on_topic_changed)
        splitter.addWidget(self.topic_list)

        # Content area (right side)
        self.content_view = QTextBrowser()
        self.content_view.setOpenExternalLinks(True)
        splitter.addWidget(self.content_view)
        splitter.setSizes([200, 700])

    def load_topic(self, topic_name: str) -> str:
        """
        Load a help topic.

        Args:
            topic_name: Name of the topic to load

        Returns:
            The topic's markdown, or an error message if it cannot be read

        """
        filename = self.TOPICS[topic_name]
        filepath = self.help_dir / filename

        if not filepath.exists():
            return f"# Error\n\nHelp file not found: {filename}"
        try:
            with Path(filepath).open(encoding="utf-8") as f:
                return f.read()
        except OSError as e:
            return f"# Error\n\nFailed to read help file: {filename}\n\n{e!s}"

    def _on_topic_changed(
        self,
        current: QListWidgetItem,
        previous: QListWidgetItem,  # noqa: ARG002
    ) -> None:
        if current:
            self._load_topic(current.text())

    def _load_topic(self, topic_name: str) -> None:
        """
        Load and display a help topic.  This means:

        - Loading the topic from the file system
        - Converting the markdown to HTML
        - Displaying the styled HTML in the content view

        Args:
            topic_name: Name of the topic to load

        """
        if topic_name not in self.TOPICS:
            return

        markdown_content = self.load_topic(topic_name)
        try:
            html = markdown.markdown(
                markdown_content,
                extensions=["tables", "fenced_code"],
            )
        except (markdown.MarkdownException, ValueError) as e:
            self.content_view.setHtml(
                f'<h1>Error</h1><p>Failed to process help topic "{topic_name}": {e!s}</p>'  # noqa: E501
            )
            return
        self.content_view.setHtml(HELP_HTML_TEMPLATE.format(html))

    def show_topic(self, topic_name: str) -> None:
        """
        Select ``topic_name`` in the topic list and display it.

        Args:
            topic_name: Name of the topic to show

        """
        if topic_name not in self.TOPICS:
            return
        items = self.topic_list.findItems(topic_name, Qt.MatchFlag.MatchExactly)
        if items:
            self.topic_list.setCurrentItem(items[0])
        self._load_topic(topic_name)
