"""Model exports.

Import from here: `from src.projecthub.models import Project, ProjectStatus`
"""

from src.projecthub.models.enums import UTILIZED_STATUSES, ProjectStatus, ProjectStatusFilter
from src.projecthub.models.project import Project

__all__ = [
    # Enums
    "ProjectStatus",
    "ProjectStatusFilter",
    "UTILIZED_STATUSES",
    # Tables
    "Project",
]
