"""Project endpoints - CRUD plus filtered, paginated listing."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, Request, status

from src.projecthub.api.dependencies import ProjectServiceDep
from src.projecthub.core.exceptions import NotFoundError
from src.projecthub.core.rate_limit import limiter, mutation_limit
from src.projecthub.models import ProjectStatusFilter
from src.projecthub.schemas.base import ApiResponse, MessageData
from src.projecthub.schemas.pagination import PaginatedResponse
from src.projecthub.schemas.project import ProjectCreate, ProjectRead, ProjectUpdate

router = APIRouter(prefix="/projects", tags=["projects"])

DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

_ERROR_RESPONSES = {
    400: {"description": "Validation failed"},
    401: {"description": "Missing or invalid bearer token"},
}
_NOT_FOUND = {404: {"description": "Project not found"}}


def _project_uuid(project_id: str) -> UUID:
    """Parse a path id. Ids are opaque to callers, so a malformed one is simply not found."""
    try:
        return UUID(project_id)
    except ValueError as e:
        raise NotFoundError("Project") from e


@router.get(
    "",
    response_model=PaginatedResponse[ProjectRead],
    summary="List projects",
    description="List projects newest first, filtered by status and name search.",
    responses=_ERROR_RESPONSES,
)
async def list_projects(
    service: ProjectServiceDep,
    status_filter: Annotated[
        ProjectStatusFilter,
        Query(alias="status", description="Status to filter on, or ALL"),
    ] = ProjectStatusFilter.ALL,
    search: Annotated[
        str | None,
        Query(max_length=100, description="Case-insensitive substring of the project name"),
    ] = None,
    page: Annotated[int, Query(ge=1, description="1-based page number")] = 1,
    limit: Annotated[
        int, Query(ge=1, le=MAX_PAGE_SIZE, description="Items per page")
    ] = DEFAULT_PAGE_SIZE,
) -> PaginatedResponse[ProjectRead]:
    projects, meta = await service.list_projects(
        status=status_filter.to_status(),
        search=search,
        page=page,
        limit=limit,
    )
    return PaginatedResponse[ProjectRead](
        data=[ProjectRead.model_validate(p) for p in projects],
        meta=meta,
    )


@router.post(
    "",
    response_model=ApiResponse[ProjectRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    responses={**_ERROR_RESPONSES, 201: {"description": "Project created"}},
)
@limiter.limit(mutation_limit)
async def create_project(
    request: Request,
    payload: ProjectCreate,
    service: ProjectServiceDep,
) -> ApiResponse[ProjectRead]:
    project = await service.create(payload)
    return ApiResponse[ProjectRead](data=ProjectRead.model_validate(project))


@router.get(
    "/{project_id}",
    response_model=ApiResponse[ProjectRead],
    summary="Get project",
    responses={**_ERROR_RESPONSES, **_NOT_FOUND},
)
async def get_project(project_id: str, service: ProjectServiceDep) -> ApiResponse[ProjectRead]:
    project = await service.get(_project_uuid(project_id))
    return ApiResponse[ProjectRead](data=ProjectRead.model_validate(project))


@router.api_route(
    "/{project_id}",
    methods=["PUT", "PATCH"],
    response_model=ApiResponse[ProjectRead],
    summary="Update project",
    description="Partial update: only supplied fields change.",
    responses={**_ERROR_RESPONSES, **_NOT_FOUND},
)
@limiter.limit(mutation_limit)
async def update_project(
    request: Request,
    project_id: str,
    payload: ProjectUpdate,
    service: ProjectServiceDep,
) -> ApiResponse[ProjectRead]:
    project = await service.update(_project_uuid(project_id), payload)
    return ApiResponse[ProjectRead](data=ProjectRead.model_validate(project))


@router.delete(
    "/{project_id}",
    response_model=ApiResponse[MessageData],
    summary="Delete project",
    description="Permanently delete a project.",
    responses={**_ERROR_RESPONSES, **_NOT_FOUND},
)
@limiter.limit(mutation_limit)
async def delete_project(
    request: Request,
    project_id: str,
    service: ProjectServiceDep,
) -> ApiResponse[MessageData]:
    await service.delete(_project_uuid(project_id))
    return ApiResponse[MessageData](data=MessageData(message="Project deleted successfully"))
