"""PySide6 user interface for Timeline Creator."""
