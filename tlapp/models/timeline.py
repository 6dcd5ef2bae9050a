"""The timeline document: projects, swimlanes and settings."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Final

from tlapp.exc import DoesNotExist
from tlapp.models.project import Project, ProjectKind
from tlapp.models.settings import TimelineSettings
from tlapp.models.swimlane import Swimlane
from tlapp.utils import generate_id

#: Color of a swimlane created without one.
DEFAULT_SWIMLANE_COLOR: Final[str] = "#60A5FA"


@dataclass
class TimelineData:
    """
    Mutable container for everything the timeline chart is drawn from.

    The renderer never sees this object; it is handed immutable snapshots of
    :attr:`projects`, :attr:`swimlanes` and :attr:`settings` instead.
    """

    #: Projects, in data order.
    projects: list[Project] = field(default_factory=list)
    #: Swimlanes, in data order.
    swimlanes: list[Swimlane] = field(default_factory=list)
    #: Window and style settings.
    settings: TimelineSettings = field(default_factory=TimelineSettings)

    @classmethod
    def sample(cls) -> TimelineData:
        """
        Build the demo timeline the application opens with.

        Returns:
            A :class:`TimelineData` with two swimlanes and two projects

        """
        development = Swimlane(id="1", name="Development", color="#3B82F6", order=0)
        marketing = Swimlane(id="2", name="Marketing", color="#10B981", order=1)
        return cls(
            projects=[
                Project(
                    id="1",
                    name="Project Alpha",
                    swimlane_id=development.id,
                    kind=ProjectKind.RANGE,
                    start_date=date(2024, 1, 15),
                    end_date=date(2024, 3, 30),
                    color="#3B82F6",
                ),
                Project(
                    id="2",
                    name="Release v2.0",
                    swimlane_id=marketing.id,
                    kind=ProjectKind.MILESTONE,
                    delivery_date=date(2024, 2, 15),
                    color="#EF4444",
                ),
            ],
            swimlanes=[development, marketing],
            settings=TimelineSettings(
                start_date=date(2024, 1, 1),
                end_date=date(2024, 12, 31),
                title="Project Timeline 2024",
            ),
        )

    # ------------------------------------------------------------------
    # Projects
    # ------------------------------------------------------------------

    def get_project(self, project_id: str) -> Project:
        """
        Get a project by ID.

        Args:
            project_id: Project ID

        Raises:
            DoesNotExist: No project has that ID

        Returns:
            The project

        """
        for project in self.projects:
            if project.id == project_id:
                return project
        raise DoesNotExist("Project", project_id)

    def save_project(self, project: Project) -> None:
        """
        Add a project, or replace the project with the same ID.

        Args:
            project: Project to save

        """
        for index, existing in enumerate(self.projects):
            if existing.id == project.id:
                self.projects[index] = project
                return
        self.projects.append(project)

    def delete_project(self, project_id: str) -> None:
        """
        Delete a project.  Unknown IDs are ignored.

        Args:
            project_id: Project ID

        """
        self.projects = [p for p in self.projects if p.id != project_id]

    # ------------------------------------------------------------------
    # Swimlanes
    # ------------------------------------------------------------------

    def get_swimlane(self, swimlane_id: str) -> Swimlane:
        """
        Get a swimlane by ID.

        Args:
            swimlane_id: Swimlane ID

        Raises:
            DoesNotExist: No swimlane has that ID

        Returns:
            The swimlane

        """
        for swimlane in self.swimlanes:
            if swimlane.id == swimlane_id:
                return swimlane
        raise DoesNotExist("Swimlane", swimlane_id)

    def add_swimlane(
        self, name: str, color: str = DEFAULT_SWIMLANE_COLOR
    ) -> Swimlane | None:
        """
        Append a swimlane below the existing ones.

        Args:
            name: Swimlane name; blank names are rejected

        Keyword Args:
            color: Band color

        Returns:
            The new swimlane, or ``None`` if ``name`` was blank

        """
        if not name.strip():
            return None
        swimlane = Swimlane(
            id=generate_id(), name=name, color=color, order=len(self.swimlanes)
        )
        self.swimlanes.append(swimlane)
        return swimlane

    def update_swimlane(self, swimlane_id: str, name: str, color: str) -> None:
        """
        Rename and recolor a swimlane.  Blank names leave the lane unchanged.

        Args:
            swimlane_id: Swimlane ID
            name: New name
            color: New color

        Raises:
            DoesNotExist: No swimlane has that ID

        """
        swimlane = self.get_swimlane(swimlane_id)
        if not name.strip():
            return
        index = self.swimlanes.index(swimlane)
        self.swimlanes[index] = replace(swimlane, name=name, color=color)

    def delete_swimlane(self, swimlane_id: str) -> None:
        """
        Delete a swimlane and renumber the remaining ones.

        Projects that pointed at the deleted lane are kept; they are simply
        not drawn until moved to another lane.

        Args:
            swimlane_id: Swimlane ID

        """
        self._reorder([s for s in self.swimlanes if s.id != swimlane_id])

    def move_swimlane_up(self, index: int) -> None:
        """
        Swap the swimlane at ``index`` with the one above it.

        Args:
            index: Position in :attr:`swimlanes`

        """
        if index <= 0 or index >= len(self.swimlanes):
            return
        lanes = list(self.swimlanes)
        lanes[index - 1], lanes[index] = lanes[index], lanes[index - 1]
        self._reorder(lanes)

    def move_swimlane_down(self, index: int) -> None:
        """
        Swap the swimlane at ``index`` with the one below it.

        Args:
            index: Position in :attr:`swimlanes`

        """
        if index < 0 or index >= len(self.swimlanes) - 1:
            return
        lanes = list(self.swimlanes)
        lanes[index], lanes[index + 1] = lanes[index + 1], lanes[index]
        self._reorder(lanes)

    def ensure_swimlane(self) -> None:
        """Make sure there is at least one swimlane to put projects in."""
        if not self.swimlanes:
            self.swimlanes = [
                Swimlane(id=generate_id(), name="Default", color="#3B82F6", order=0)
            ]

    def _reorder(self, lanes: list[Swimlane]) -> None:
        # Keep order dense: 0..n-1 in list order.
        self.swimlanes = [replace(lane, order=i) for i, lane in enumerate(lanes)]
