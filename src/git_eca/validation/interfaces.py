"""Collaborator interfaces consumed by the validation engine.

The concrete implementations live in ``api_clients`` and ``services``; tests
substitute in-memory fakes.
"""

from typing import Callable, List, Optional, Protocol, TypeVar

from ..models import BotRecord, EclipseUser, Project

T = TypeVar("T")


class DirectoryLookup(Protocol):
    """Account directory.

    Both methods raise ``NotFoundError`` when nothing matches and
    ``APIClientError`` on service or transport failures.
    """

    def get_users_by_mail(self, mail: str) -> List[EclipseUser]: ...

    def get_user_by_github_handle(self, handle: str) -> EclipseUser: ...


class AutomationRegistry(Protocol):
    def get_bots(self) -> List[BotRecord]: ...


class ProjectCatalog(Protocol):
    def get_projects(self) -> List[Project]: ...


class Cache(Protocol):
    """Get-or-compute cache, at most one computation in flight per key."""

    def get(self, key: str, supplier: Callable[[], Optional[T]]) -> Optional[T]: ...
