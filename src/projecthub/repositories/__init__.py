"""Repository layer - data access abstraction."""

from src.projecthub.repositories.base import BaseRepository
from src.projecthub.repositories.project import ProjectRepository

__all__ = [
    "BaseRepository",
    "ProjectRepository",
]
