"""Services backing the validation engine."""

from .caching_service import CachingService
from .projects_service import ProjectsService

__all__ = ["CachingService", "ProjectsService"]
