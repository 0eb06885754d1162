"""Dashboard endpoint - aggregate statistics and chart data."""

from fastapi import APIRouter

from src.projecthub.api.dependencies import DashboardServiceDep
from src.projecthub.schemas.base import ApiResponse
from src.projecthub.schemas.dashboard import DashboardSummary

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get(
    "",
    response_model=ApiResponse[DashboardSummary],
    summary="Dashboard summary",
    description=(
        "Status counts, budget utilization, team size, recent projects and chart series. "
        "charts.weeklyActivity is a placeholder and is flagged synthetic."
    ),
    responses={401: {"description": "Missing or invalid bearer token"}},
)
async def get_dashboard(service: DashboardServiceDep) -> ApiResponse[DashboardSummary]:
    return ApiResponse[DashboardSummary](data=await service.summary())
