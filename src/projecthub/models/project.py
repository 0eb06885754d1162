"""Project model - the managed entity."""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import Index
from sqlmodel import Field, SQLModel

from src.projecthub.models.base import utc_now
from src.projecthub.models.enums import ProjectStatus

MAX_NAME_LENGTH = 100
MAX_ASSIGNEE_LENGTH = 100
MAX_BUDGET = Decimal("999999999")


class Project(SQLModel, table=True):
    """Project record.

    ``assigned_to`` is free text naming a team member, not a foreign key.
    Timestamps are owned by the store layer and never taken from callers.
    """

    __tablename__ = "projects"
    __table_args__ = (Index("ix_projects_created_at_id", "created_at", "id"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=MAX_NAME_LENGTH, index=True)
    status: str = Field(default=ProjectStatus.ACTIVE.value, max_length=20, index=True)
    deadline: date
    assigned_to: str = Field(max_length=MAX_ASSIGNEE_LENGTH)
    budget: Decimal = Field(default=Decimal("0"), max_digits=12, decimal_places=2)
    progress: int = Field(default=0)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now, index=True)

    @property
    def status_enum(self) -> ProjectStatus:
        """Get status as ProjectStatus enum."""
        return ProjectStatus(self.status)
