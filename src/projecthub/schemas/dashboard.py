"""Dashboard summary schemas."""

from datetime import date
from uuid import UUID

from pydantic import Field

from src.projecthub.models.enums import ProjectStatus
from src.projecthub.schemas.base import CamelModel, Money


class DashboardStats(CamelModel):
    total_projects: int
    active_projects: int
    on_hold_projects: int
    completed_projects: int
    total_budget: Money
    utilized_budget: Money
    budget_utilization: int = Field(
        description="Percent of total budget held by ACTIVE and COMPLETED projects."
    )
    team_members: int = Field(description="Distinct assignee names.")


class RecentProject(CamelModel):
    id: UUID
    name: str
    status: ProjectStatus
    progress: int
    deadline: date


class MonthlyDataPoint(CamelModel):
    name: str = Field(description="Month abbreviation, e.g. 'Jan'.")
    projects: int


class StatusDataPoint(CamelModel):
    name: str
    value: int
    color: str


class WeeklyActivityDay(CamelModel):
    day: str
    tasks: int


class WeeklyActivity(CamelModel):
    """Weekly task activity.

    No task-completion log exists yet, so the payload is always flagged
    synthetic with zero counts.
    """

    synthetic: bool = True
    days: list[WeeklyActivityDay]


class DashboardCharts(CamelModel):
    monthly_data: list[MonthlyDataPoint]
    status_data: list[StatusDataPoint]
    weekly_activity: WeeklyActivity


class DashboardSummary(CamelModel):
    stats: DashboardStats
    recent_projects: list[RecentProject]
    charts: DashboardCharts
