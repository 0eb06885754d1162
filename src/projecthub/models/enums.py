"""Shared enums for models."""

from enum import Enum


class ProjectStatus(str, Enum):
    """Project lifecycle status. Any status may change to any other."""

    ACTIVE = "ACTIVE"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"


class ProjectStatusFilter(str, Enum):
    """Status filter accepted by the project list; ALL disables filtering."""

    ALL = "ALL"
    ACTIVE = "ACTIVE"
    ON_HOLD = "ON_HOLD"
    COMPLETED = "COMPLETED"

    def to_status(self) -> ProjectStatus | None:
        """Return the status to filter on, or None for ALL."""
        if self is ProjectStatusFilter.ALL:
            return None
        return ProjectStatus(self.value)


# Statuses whose budget counts as utilized
UTILIZED_STATUSES: frozenset[ProjectStatus] = frozenset(
    {ProjectStatus.ACTIVE, ProjectStatus.COMPLETED}
)
