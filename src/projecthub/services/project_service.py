"""Project store service - CRUD rules, commits and error mapping."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.projecthub.core.exceptions import NotFoundError, StorageError
from src.projecthub.core.logging import get_logger
from src.projecthub.models import Project, ProjectStatus
from src.projecthub.models.base import utc_now
from src.projecthub.repositories import ProjectRepository
from src.projecthub.schemas.pagination import PageMeta, page_offset
from src.projecthub.schemas.project import ProjectCreate, ProjectUpdate

logger = get_logger(__name__)


class ProjectService:
    """Create, read, update, delete and list projects.

    Input has already been validated by the request schemas, so nothing here
    can partially apply a bad payload. Store failures are rolled back and
    re-raised as StorageError without retrying.
    """

    def __init__(self, project_repo: ProjectRepository, session: AsyncSession):
        self.project_repo = project_repo
        self.session = session

    @asynccontextmanager
    async def _store_operation(self, failure_message: str) -> AsyncGenerator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.exception("project_store_failure", failure=failure_message)
            raise StorageError(failure_message) from e

    async def create(self, data: ProjectCreate) -> Project:
        """Create a project. The store assigns id and timestamps."""
        project = Project(
            name=data.name,
            status=data.status.value,
            deadline=data.deadline,
            assigned_to=data.assigned_to,
            budget=data.budget,
            progress=data.progress,
        )
        async with self._store_operation("Failed to create project"):
            self.project_repo.add(project)
            await self.session.commit()
            await self.session.refresh(project)

        logger.info("project_created", project_id=str(project.id), status=project.status)
        return project

    async def get(self, project_id: UUID) -> Project:
        """Get a project by id.

        Raises:
            NotFoundError: If no project has this id
        """
        async with self._store_operation("Failed to fetch project"):
            project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project")
        return project

    async def update(self, project_id: UUID, data: ProjectUpdate) -> Project:
        """Apply the supplied fields. ``updated_at`` refreshes even when nothing else changes."""
        project = await self.get(project_id)
        changes = data.changes()

        for field, value in changes.items():
            if isinstance(value, ProjectStatus):
                value = value.value
            setattr(project, field, value)

        # SQLModel has no onupdate hook, so the timestamp is set explicitly
        project.updated_at = utc_now()

        async with self._store_operation("Failed to update project"):
            await self.session.commit()
            await self.session.refresh(project)

        logger.info("project_updated", project_id=str(project.id), fields=sorted(changes))
        return project

    async def delete(self, project_id: UUID) -> None:
        """Delete a project permanently."""
        project = await self.get(project_id)
        async with self._store_operation("Failed to delete project"):
            await self.project_repo.delete(project)
            await self.session.commit()

        logger.info("project_deleted", project_id=str(project_id))

    async def list_projects(
        self,
        status: ProjectStatus | None,
        search: str | None,
        page: int,
        limit: int,
    ) -> tuple[list[Project], PageMeta]:
        """List projects newest first.

        Args:
            status: Status filter, None for all statuses
            search: Case-insensitive name substring; blank means no filter
            page: 1-based page number; pages past the end are empty
            limit: Page size

        Returns:
            Tuple of (projects on this page, pagination metadata)
        """
        term = search.strip() if search else None
        async with self._store_operation("Failed to fetch projects"):
            projects, total = await self.project_repo.list_filtered(
                status=status,
                search=term or None,
                offset=page_offset(page, limit),
                limit=limit,
            )
        return projects, PageMeta.build(total=total, page=page, limit=limit)
