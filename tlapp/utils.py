"""Utility functions for Timeline Creator."""

import sys
import uuid
from pathlib import Path


def get_resource_path(relative_path: str) -> Path:
    """
    Get resource path for bundled application or development.

    Args:
        relative_path: Relative path from the ``tlapp`` package directory

    Returns:
        Path to resource file

    """
    if getattr(sys, "frozen", False) and hasattr(sys, "_MEIPASS"):
        # Running in PyInstaller bundle
        base_path = Path(sys._MEIPASS) / "tlapp"
    else:
        base_path = Path(__file__).parent
    return base_path / relative_path


def generate_id() -> str:
    """
    Generate a new opaque identifier for a project or swimlane.

    Returns:
        A 32 character hex string

    """
    return uuid.uuid4().hex
