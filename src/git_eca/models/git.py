"""Request-side models: Git identities, commits and validation requests."""

from enum import Enum
from typing import Any, List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProviderType(str, Enum):
    """Code hosting provider the validated repository lives on."""

    GITHUB = "github"
    GITLAB = "gitlab"
    GERRIT = "gerrit"

    @classmethod
    def _missing_(cls, value: object) -> Optional["ProviderType"]:
        # Accept "GITHUB", "GitHub", ... as well as the canonical lowercase form
        if isinstance(value, str):
            lowered = value.strip().lower()
            for member in cls:
                if member.value == lowered:
                    return member
        return None


class GitUser(BaseModel):
    """Raw author or committer identity taken from a commit."""

    name: Optional[str] = None
    mail: Optional[str] = None


class Commit(BaseModel):
    """A single commit submitted for validation."""

    hash: Optional[str] = None
    subject: Optional[str] = None
    body: Optional[str] = None
    parents: List[str] = Field(default_factory=list)
    author: Optional[GitUser] = None
    committer: Optional[GitUser] = None

    @field_validator("parents", mode="before")
    @classmethod
    def default_parents(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def is_merge(self) -> bool:
        return len(self.parents) > 1


class ValidationRequest(BaseModel):
    """Batch of commits to validate against a repository."""

    model_config = ConfigDict(populate_by_name=True)

    repo_url: Optional[str] = Field(default=None, alias="repoUrl")
    provider: Optional[ProviderType] = None
    strict_mode: bool = Field(default=False, alias="strictMode")
    commits: Optional[List[Commit]] = None

    @field_validator("strict_mode", mode="before")
    @classmethod
    def default_strict_mode(cls, v: Any) -> Any:
        return False if v is None else v

    @property
    def repo_path(self) -> Optional[str]:
        """Path component of the repository URL, or None when there is none."""
        if self.repo_url is None:
            return None
        path = urlparse(self.repo_url).path
        return path or None
