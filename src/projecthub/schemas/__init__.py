from src.projecthub.schemas.base import ApiResponse, CamelModel, MessageData, Money
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
from src.projecthub.schemas.pagination import PageMeta, PaginatedResponse
from src.projecthub.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate

__all__ = [
    # Base
    "ApiResponse",
    "CamelModel",
    "MessageData",
    "Money",
    # Pagination
    "PageMeta",
    "PaginatedResponse",
    # Project
    "ProjectCreate",
    "ProjectRead",
    "ProjectUpdate",
    # Dashboard
    "DashboardCharts",
    "DashboardStats",
    "DashboardSummary",
    "MonthlyDataPoint",
    "RecentProject",
    "StatusDataPoint",
    "WeeklyActivity",
    "WeeklyActivityDay",
]
