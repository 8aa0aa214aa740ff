"""Projects API Client.

Lists Eclipse projects with their committers and registered repositories.
"""

import logging
from typing import List

from ..models import Project
from .base_client import APIClientError, EclipseAPIClient

logger = logging.getLogger(__name__)

# Guards against an API that keeps returning full pages
MAX_PAGES = 1000


class ProjectsAPIClient(EclipseAPIClient):
    """API client for the projects service."""

    def __init__(self, *args, page_size: int = 100, **kwargs):
        super().__init__(*args, **kwargs)
        self.page_size = page_size

    def get_projects(self) -> List[Project]:
        """Fetch all projects, following pages until a short page is returned.

        Raises:
            APIClientError: If any page cannot be read
        """
        projects: List[Project] = []
        for page in range(1, MAX_PAGES + 1):
            data = self._get_json(
                "", params={"page": page, "pagesize": self.page_size}
            )
            if not isinstance(data, list):
                raise APIClientError(
                    f"Unexpected projects response type: {type(data)}"
                )
            projects.extend(self._parse(Project, entry, "projects") for entry in data)
            if len(data) < self.page_size:
                break
        else:
            logger.warning(f"Stopped listing projects after {MAX_PAGES} pages")

        logger.debug(f"Loaded {len(projects)} projects")
        return projects
