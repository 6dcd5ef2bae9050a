from .help_dialog import HelpDialog
from .project_dialog import ProjectDialog
from .settings import PreferencesDialog

__all__ = [
    "HelpDialog",
    "PreferencesDialog",
    "ProjectDialog",
]
