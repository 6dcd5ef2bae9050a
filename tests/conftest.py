"""Shared pytest fixtures and test helpers for Timeline Creator tests."""

import os
from datetime import date

# Widgets and QPainter need a platform plugin; tests never open windows.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

from tlapp.models import (
    Project,
    ProjectKind,
    Swimlane,
    TimelineData,
    TimelineSettings,
)


@pytest.fixture(scope="session")
def qapp():
    """Create QApplication instance for testing PySide6 widgets."""
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture
def q1_settings():
    """Settings for a Q1 2024 window."""
    return TimelineSettings(
        start_date=date(2024, 1, 1),
        end_date=date(2024, 3, 31),
        title="Q1 Plan",
    )


@pytest.fixture
def swimlanes():
    """Two swimlanes, "Dev" above "Ops"."""
    return [
        Swimlane(id="dev", name="Dev", color="#3B82F6", order=0),
        Swimlane(id="ops", name="Ops", color="#10B981", order=1),
    ]


@pytest.fixture
def alpha():
    """Range project in the "Dev" lane, Jan 15 to Feb 10 2024."""
    return create_test_project(
        name="Alpha",
        swimlane_id="dev",
        start_date=date(2024, 1, 15),
        end_date=date(2024, 2, 10),
    )


@pytest.fixture
def launch():
    """Milestone in the "Ops" lane on Mar 1 2024."""
    return create_test_project(
        name="Launch",
        swimlane_id="ops",
        kind=ProjectKind.MILESTONE,
        delivery_date=date(2024, 3, 1),
        color="#EF4444",
    )


@pytest.fixture
def timeline():
    """The demo timeline."""
    return TimelineData.sample()


# Test helper functions (not fixtures, but available for import)


def create_test_project(
    name="Test Project",
    swimlane_id="dev",
    kind=ProjectKind.RANGE,
    project_id=None,
    **kwargs,
):
    """
    Helper to create a project with defaults.

    Args:
        name: Project name
        swimlane_id: Owning swimlane ID
        kind: Range or milestone
        project_id: Project ID; a stable one is derived from the name if omitted
        **kwargs: Remaining :class:`~tlapp.models.project.Project` fields

    Returns:
        The project

    """
    return Project(
        id=project_id or name.lower().replace(" ", "-"),
        name=name,
        swimlane_id=swimlane_id,
        kind=kind,
        **kwargs,
    )
