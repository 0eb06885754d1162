"""FastAPI dependency injection definitions."""

from src.projecthub.api.dependencies.auth import CurrentPrincipal, get_current_principal
from src.projecthub.api.dependencies.db import (
    DashboardDBSession,
    DBSession,
    get_dashboard_session,
    get_db_session,
)
from src.projecthub.api.dependencies.services import (
    DashboardServiceDep,
    ProjectServiceDep,
    get_dashboard_service,
    get_project_service,
)

__all__ = [
    # Auth
    "CurrentPrincipal",
    "get_current_principal",
    # Database
    "DBSession",
    "DashboardDBSession",
    "get_db_session",
    "get_dashboard_session",
    # Services
    "DashboardServiceDep",
    "ProjectServiceDep",
    "get_dashboard_service",
    "get_project_service",
]
