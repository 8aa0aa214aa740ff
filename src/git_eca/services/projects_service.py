"""Projects service: cached access to the project catalog."""

import logging
from typing import List, Optional

from ..api_clients import APIClientError, ProjectsAPIClient
from ..models import Project
from .caching_service import CachingService

logger = logging.getLogger(__name__)

PROJECTS_CACHE_KEY = "projects"


class ProjectsService:
    """Serves the project catalog from the cache, refreshing it from the API."""

    def __init__(self, client: ProjectsAPIClient, cache: CachingService):
        self.client = client
        self.cache = cache

    def get_projects(self) -> List[Project]:
        """Current project catalog, or an empty list when it cannot be loaded."""
        try:
            projects: Optional[List[Project]] = self.cache.get(
                PROJECTS_CACHE_KEY, self.client.get_projects
            )
        except APIClientError as e:
            logger.error(f"Could not load projects: {e}")
            return []
        return projects or []
