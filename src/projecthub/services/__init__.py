from src.projecthub.services.dashboard_service import DashboardService
from src.projecthub.services.project_service import ProjectService

__all__ = [
    "DashboardService",
    "ProjectService",
]
