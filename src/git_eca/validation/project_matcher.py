"""Matches a request's repository against the project catalog."""

import logging
from typing import List, Optional, Sequence

from ..models import Project, ProviderType

logger = logging.getLogger(__name__)


def match_projects(
    repo_path: Optional[str],
    provider: Optional[ProviderType],
    projects: Optional[Sequence[Project]],
) -> List[Project]:
    """Projects with a repository for the provider whose URL ends with repo_path.

    Only the path of the request's repository URL is compared, as a suffix of
    the registered URL, so scheme and host differences do not matter.
    An empty result means the repository is untracked.
    """
    if not repo_path:
        logger.warning("Can not match empty repo URL path to projects")
        return []
    if not projects:
        logger.warning("Could not find any projects to match against")
        return []

    logger.debug(f"Checking projects for repos that end with: {repo_path}")
    return [
        p
        for p in projects
        if any(r.url and r.url.endswith(repo_path) for r in p.repos_for(provider))
    ]
