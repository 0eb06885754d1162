from fastapi import APIRouter

from src.projecthub.api.v1 import dashboard, projects

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(projects.router)
api_router.include_router(dashboard.router)
