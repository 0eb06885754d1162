"""Aggregation engine behind the dashboard.

All reads here are independent queries on one session. Unless the session
was opened with a snapshot isolation level, concurrent writes between the
queries may make the numbers disagree slightly within one response.
"""

from collections import Counter
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from sqlalchemy.exc import SQLAlchemyError

from src.projecthub.core.exceptions import StorageError
from src.projecthub.core.logging import get_logger
from src.projecthub.models import UTILIZED_STATUSES, Project, ProjectStatus
from src.projecthub.models.base import utc_now
from src.projecthub.repositories import ProjectRepository
from src.projecthub.schemas.dashboard import (
    DashboardCharts,
    DashboardStats,
    DashboardSummary,
    MonthlyDataPoint,
    RecentProject,
    StatusDataPoint,
    WeeklyActivity,
    WeeklyActivityDay,
)

logger = get_logger(__name__)

MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
TREND_WINDOW = timedelta(days=365)

# (label, colour) per status for the distribution chart
STATUS_CHART_STYLE: dict[ProjectStatus, tuple[str, str]] = {
    ProjectStatus.ACTIVE: ("Active", "#22c55e"),
    ProjectStatus.ON_HOLD: ("On Hold", "#eab308"),
    ProjectStatus.COMPLETED: ("Completed", "#6366f1"),
}


@dataclass(frozen=True)
class StatusCounts:
    active: int
    on_hold: int
    completed: int

    @property
    def total(self) -> int:
        return self.active + self.on_hold + self.completed

    def of(self, status: ProjectStatus) -> int:
        return {
            ProjectStatus.ACTIVE: self.active,
            ProjectStatus.ON_HOLD: self.on_hold,
            ProjectStatus.COMPLETED: self.completed,
        }[status]


@dataclass(frozen=True)
class BudgetUtilization:
    total_budget: Decimal
    utilized_budget: Decimal
    utilization: int


def utilization_percent(total: Decimal, utilized: Decimal) -> int:
    """Whole percent of ``total`` that ``utilized`` represents, rounded half up.

    Zero when there is no budget at all.
    """
    if total <= 0:
        return 0
    return int((utilized * 100 / total).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def monthly_histogram(created: Iterable[datetime], now: datetime) -> list[tuple[str, int]]:
    """Count timestamps per calendar month name, ordered so ``now``'s month is last.

    Buckets are keyed by month name only, so the same month from two
    different years lands in one bucket.
    """
    counts = Counter(MONTH_NAMES[ts.month - 1] for ts in created)
    ordered = [(name, counts.get(name, 0)) for name in MONTH_NAMES]
    current = now.month - 1
    return ordered[current + 1 :] + ordered[: current + 1]


class DashboardService:
    """Read-only statistics over the project store."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        recent_limit: int = 5,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.project_repo = project_repo
        self.recent_limit = recent_limit
        self.clock = clock

    async def status_counts(self) -> StatusCounts:
        counts = await self.project_repo.count_by_status()
        return StatusCounts(
            active=counts[ProjectStatus.ACTIVE],
            on_hold=counts[ProjectStatus.ON_HOLD],
            completed=counts[ProjectStatus.COMPLETED],
        )

    async def budget_utilization(self) -> BudgetUtilization:
        total = await self.project_repo.sum_budget()
        utilized = await self.project_repo.sum_budget(UTILIZED_STATUSES)
        return BudgetUtilization(
            total_budget=total,
            utilized_budget=utilized,
            utilization=utilization_percent(total, utilized),
        )

    async def distinct_assignee_count(self) -> int:
        return await self.project_repo.count_distinct_assignees()

    async def monthly_trend(self) -> list[MonthlyDataPoint]:
        """Creation counts for the trailing twelve months, current month last."""
        now = self.clock()
        created = await self.project_repo.created_since(now - TREND_WINDOW)
        return [
            MonthlyDataPoint(name=name, projects=count)
            for name, count in monthly_histogram(created, now)
        ]

    async def recent_projects(self, limit: int | None = None) -> list[RecentProject]:
        projects: list[Project] = await self.project_repo.recently_updated(
            limit or self.recent_limit
        )
        return [RecentProject.model_validate(p) for p in projects]

    @staticmethod
    def status_distribution(counts: StatusCounts) -> list[StatusDataPoint]:
        return [
            StatusDataPoint(name=label, value=counts.of(status), color=color)
            for status, (label, color) in STATUS_CHART_STYLE.items()
        ]

    @staticmethod
    def weekly_activity() -> WeeklyActivity:
        """Placeholder until task completions are recorded. Always flagged synthetic."""
        return WeeklyActivity(
            synthetic=True,
            days=[WeeklyActivityDay(day=day, tasks=0) for day in WEEKDAY_NAMES],
        )

    async def summary(self) -> DashboardSummary:
        """Build the full dashboard payload."""
        try:
            counts = await self.status_counts()
            budget = await self.budget_utilization()
            team_members = await self.distinct_assignee_count()
            recent = await self.recent_projects()
            monthly = await self.monthly_trend()
        except SQLAlchemyError as e:
            logger.exception("dashboard_query_failed")
            raise StorageError("Failed to fetch dashboard data") from e

        logger.debug("dashboard_summary_built", total_projects=counts.total)
        return DashboardSummary(
            stats=DashboardStats(
                total_projects=counts.total,
                active_projects=counts.active,
                on_hold_projects=counts.on_hold,
                completed_projects=counts.completed,
                total_budget=budget.total_budget,
                utilized_budget=budget.utilized_budget,
                budget_utilization=budget.utilization,
                team_members=team_members,
            ),
            recent_projects=recent,
            charts=DashboardCharts(
                monthly_data=monthly,
                status_data=self.status_distribution(counts),
                weekly_activity=self.weekly_activity(),
            ),
        )
