"""Project schemas for API request/response."""

from datetime import date, datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import Field, field_validator

from src.projecthub.models.enums import ProjectStatus
from src.projecthub.models.project import MAX_ASSIGNEE_LENGTH, MAX_BUDGET, MAX_NAME_LENGTH
from src.projecthub.schemas.base import CamelModel, Money


def parse_deadline(value: Any) -> Any:
    """Accept an ISO date or an ISO datetime string and keep the date part.

    Non-string values are left for pydantic's own date validation.
    """
    if not isinstance(value, str):
        return value
    candidate = value.strip()
    try:
        if "T" in candidate or " " in candidate:
            return datetime.fromisoformat(candidate).date()
        return date.fromisoformat(candidate)
    except ValueError as e:
        raise ValueError("Invalid date format") from e


def require_number(value: Any) -> Any:
    """Reject strings and booleans where a JSON number is expected."""
    if isinstance(value, (str, bool)):
        raise ValueError("Input should be a number")
    return value


def _required_text(v: str, message: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError(message)
    return v


class ProjectCreate(CamelModel):
    """Schema for creating a project."""

    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    status: ProjectStatus
    deadline: date
    assigned_to: str = Field(min_length=1, max_length=MAX_ASSIGNEE_LENGTH)
    budget: Decimal = Field(ge=0, le=MAX_BUDGET, decimal_places=2)
    progress: int = Field(default=0, ge=0, le=100)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _required_text(v, "Project name is required")

    @field_validator("assigned_to")
    @classmethod
    def validate_assigned_to(cls, v: str) -> str:
        return _required_text(v, "Team member name is required")

    @field_validator("deadline", mode="before")
    @classmethod
    def validate_deadline(cls, v: Any) -> Any:
        return parse_deadline(v)

    @field_validator("budget", "progress", mode="before")
    @classmethod
    def validate_numbers(cls, v: Any) -> Any:
        return require_number(v)


class ProjectUpdate(CamelModel):
    """Schema for a partial update. Omitted or null fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=MAX_NAME_LENGTH)
    status: ProjectStatus | None = None
    deadline: date | None = None
    assigned_to: str | None = Field(default=None, min_length=1, max_length=MAX_ASSIGNEE_LENGTH)
    budget: Decimal | None = Field(default=None, ge=0, le=MAX_BUDGET, decimal_places=2)
    progress: int | None = Field(default=None, ge=0, le=100)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is not None:
            v = _required_text(v, "Project name is required")
        return v

    @field_validator("assigned_to")
    @classmethod
    def validate_assigned_to(cls, v: str | None) -> str | None:
        if v is not None:
            v = _required_text(v, "Team member name is required")
        return v

    @field_validator("deadline", mode="before")
    @classmethod
    def validate_deadline(cls, v: Any) -> Any:
        return parse_deadline(v)

    @field_validator("budget", "progress", mode="before")
    @classmethod
    def validate_numbers(cls, v: Any) -> Any:
        return require_number(v)

    def changes(self) -> dict[str, Any]:
        """Fields the caller supplied with a non-null value."""
        return {
            field: value
            for field, value in self.model_dump(exclude_unset=True).items()
            if value is not None
        }


class ProjectRead(CamelModel):
    """Schema for reading a project."""

    id: UUID
    name: str
    status: ProjectStatus
    deadline: date
    assigned_to: str
    budget: Money
    progress: int
    created_at: datetime
    updated_at: datetime
