"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends, Request

from src.projecthub.api.dependencies.db import DashboardDBSession, DBSession
from src.projecthub.repositories import ProjectRepository
from src.projecthub.services import DashboardService, ProjectService


def get_project_service(session: DBSession) -> ProjectService:
    """Get project service."""
    return ProjectService(ProjectRepository(session), session)


def get_dashboard_service(request: Request, session: DashboardDBSession) -> DashboardService:
    """Get dashboard service."""
    return DashboardService(
        ProjectRepository(session),
        recent_limit=request.app.state.settings.recent_projects_limit,
    )


ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
DashboardServiceDep = Annotated[DashboardService, Depends(get_dashboard_service)]
