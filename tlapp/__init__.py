"""Timeline Creator: swimlane timelines rendered to PNG."""

__version__ = "0.1.0"
