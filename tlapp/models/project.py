"""Project model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Final

from tlapp.utils import generate_id


class ProjectKind(StrEnum):
    """How a project is laid out on the timeline."""

    #: A bar spanning a start and an end date.
    RANGE = "range"
    #: A single triangle marker on the delivery date.
    MILESTONE = "milestone"


#: Color given to projects created without one.
DEFAULT_PROJECT_COLOR: Final[str] = "#3B82F6"


@dataclass(frozen=True)
class Project:
    """
    Represents a project placed in a swimlane.

    A project is either a :attr:`ProjectKind.RANGE` (uses :attr:`start_date`
    and :attr:`end_date`) or a :attr:`ProjectKind.MILESTONE` (uses
    :attr:`delivery_date`).  Dates may be missing while the project is still
    being edited; the renderer skips such projects.
    """

    #: The project ID.
    id: str
    #: The display name.
    name: str
    #: The ID of the swimlane this project is drawn in.
    swimlane_id: str
    #: Range or milestone.
    kind: ProjectKind = ProjectKind.RANGE
    #: First day of a range project.
    start_date: date | None = None
    #: Last day of a range project.
    end_date: date | None = None
    #: Delivery day of a milestone project.
    delivery_date: date | None = None
    #: Fill color, as a ``#RRGGBB`` string.
    color: str = DEFAULT_PROJECT_COLOR
    #: Free-text description.
    description: str | None = None

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        name: str,
        swimlane_id: str,
        kind: ProjectKind = ProjectKind.RANGE,
        start_date: date | None = None,
        end_date: date | None = None,
        delivery_date: date | None = None,
        color: str | None = None,
        description: str | None = None,
        project_id: str | None = None,
    ) -> Project:
        """
        Create a new project.

        Dates that do not belong to ``kind`` are dropped, so a milestone never
        carries a start or end date and a range never carries a delivery date.

        Args:
            name: Project name; blank names become "Untitled Project"
            swimlane_id: Owning swimlane ID

        Keyword Args:
            kind: Range or milestone
            start_date: First day (range only)
            end_date: Last day (range only)
            delivery_date: Delivery day (milestone only)
            color: Fill color
            description: Optional description
            project_id: Keep this ID instead of generating a new one

        Returns:
            The new :class:`~tlapp.models.project.Project` object

        """
        is_range = kind == ProjectKind.RANGE
        return cls(
            id=project_id or generate_id(),
            name=name.strip() or "Untitled Project",
            swimlane_id=swimlane_id,
            kind=kind,
            start_date=start_date if is_range else None,
            end_date=end_date if is_range else None,
            delivery_date=None if is_range else delivery_date,
            color=color or DEFAULT_PROJECT_COLOR,
            description=description or None,
        )

    @property
    def is_milestone(self) -> bool:
        """Whether this project is drawn as a milestone marker."""
        return self.kind == ProjectKind.MILESTONE
