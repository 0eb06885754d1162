"""Repository for Project entity and its aggregate queries."""

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal
from typing import Any

from sqlalchemy import distinct, func
from sqlmodel import col, select

from src.projecthub.models import Project, ProjectStatus
from src.projecthub.repositories.base import BaseRepository


def _to_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project entity."""

    model = Project

    @staticmethod
    def _filtered(status: ProjectStatus | None, search: str | None) -> Any:
        query = select(Project)
        if status is not None:
            query = query.where(Project.status == status.value)
        if search:
            # Case-insensitive substring match; % and _ in the term are literals
            query = query.where(col(Project.name).icontains(search, autoescape=True))
        return query

    async def list_filtered(
        self,
        status: ProjectStatus | None = None,
        search: str | None = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[list[Project], int]:
        """List projects newest first with offset pagination.

        Args:
            status: Only projects with this status; None for all
            search: Case-insensitive substring of the name; None or "" for all
            offset: Number of matching rows to skip
            limit: Maximum number of rows to return

        Returns:
            Tuple of (items, total matching rows)
        """
        query = self._filtered(status, search)
        total = await self.count_rows(query)
        ordered = query.order_by(col(Project.created_at).desc(), col(Project.id).desc())
        items = await self.fetch_page(ordered, offset, limit)
        return items, total

    async def count_by_status(self) -> dict[ProjectStatus, int]:
        """Count projects per status. Statuses with no projects map to 0."""
        result = await self.session.execute(
            select(Project.status, func.count()).group_by(Project.status)
        )
        counts = {status: 0 for status in ProjectStatus}
        for status_value, count in result.all():
            counts[ProjectStatus(status_value)] = int(count)
        return counts

    async def sum_budget(self, statuses: Iterable[ProjectStatus] | None = None) -> Decimal:
        """Sum budgets, optionally restricted to the given statuses."""
        query = select(func.coalesce(func.sum(Project.budget), 0))
        if statuses is not None:
            query = query.where(col(Project.status).in_([s.value for s in statuses]))
        result = await self.session.execute(query)
        return _to_decimal(result.scalar_one())

    async def count_distinct_assignees(self) -> int:
        """Count distinct ``assigned_to`` values (exact string match)."""
        result = await self.session.execute(select(func.count(distinct(Project.assigned_to))))
        return int(result.scalar_one())

    async def created_since(self, since: datetime) -> list[datetime]:
        """Return creation timestamps of projects created at or after ``since``."""
        result = await self.session.execute(
            select(Project.created_at).where(Project.created_at >= since)
        )
        return list(result.scalars().all())

    async def recently_updated(self, limit: int) -> list[Project]:
        """Return the ``limit`` most recently updated projects."""
        result = await self.session.execute(
            select(Project)
            .order_by(col(Project.updated_at).desc(), col(Project.id).desc())
            .limit(limit)
        )
        return list(result.scalars().all())
