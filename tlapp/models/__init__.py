from .project import Project, ProjectKind
from .settings import MonthFormat, TimelineSettings
from .swimlane import Swimlane, sort_swimlanes
from .timeline import TimelineData

__all__ = [
    "MonthFormat",
    "Project",
    "ProjectKind",
    "Swimlane",
    "TimelineData",
    "TimelineSettings",
    "sort_swimlanes",
]
