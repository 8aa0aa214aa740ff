"""Models for data returned by the accounts, projects and bots APIs."""

from typing import Any, Dict, Iterator, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .git import GitUser, ProviderType


class ECA(BaseModel):
    """Contributor agreement state recorded against an account."""

    signed: bool = False
    can_contribute_spec_project: bool = False


class EclipseUser(BaseModel):
    """Account directory identity resolved from a Git identity."""

    model_config = ConfigDict(extra="ignore")

    uid: Optional[str] = None
    name: str
    mail: Optional[str] = None
    eca: ECA = Field(default_factory=ECA)
    is_committer: bool = False
    github_handle: Optional[str] = None
    is_bot: bool = False

    @field_validator("eca", mode="before")
    @classmethod
    def default_eca(cls, v: Any) -> Any:
        return ECA() if v is None else v

    @classmethod
    def create_bot_stub(cls, user: GitUser) -> "EclipseUser":
        """Synthesize an identity for an allow-listed or bot address.

        The stub is never looked up in the directory and carries full
        contribution rights.
        """
        return cls(
            name=user.name or "",
            mail=user.mail,
            eca=ECA(signed=True, can_contribute_spec_project=True),
            is_bot=True,
        )


class Repo(BaseModel):
    url: Optional[str] = None


class ProjectCommitter(BaseModel):
    model_config = ConfigDict(extra="ignore")

    username: str
    url: Optional[str] = None


class Project(BaseModel):
    """Project snapshot from the projects API."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    project_id: str
    name: str = ""
    spec_working_group: Optional[str] = Field(
        default=None, alias="spec_project_working_group"
    )
    committers: List[ProjectCommitter] = Field(default_factory=list)
    repos: List[Repo] = Field(default_factory=list)
    github_repos: List[Repo] = Field(default_factory=list)
    gitlab_repos: List[Repo] = Field(default_factory=list)
    gerrit_repos: List[Repo] = Field(default_factory=list)

    @field_validator("spec_working_group", mode="before")
    @classmethod
    def normalize_working_group(cls, v: Any) -> Optional[str]:
        # The API sends an empty list when unset and an object when set
        if not v:
            return None
        if isinstance(v, dict):
            value = v.get("id") or v.get("name")
            return str(value) if value else None
        return str(v)

    @field_validator(
        "committers", "repos", "github_repos", "gitlab_repos", "gerrit_repos",
        mode="before",
    )
    @classmethod
    def default_lists(cls, v: Any) -> Any:
        return [] if v is None else v

    @property
    def is_specification_project(self) -> bool:
        return self.spec_working_group is not None

    def repos_for(self, provider: Optional[ProviderType]) -> List[Repo]:
        """Repositories registered for the given provider."""
        if provider == ProviderType.GITHUB:
            return self.github_repos
        if provider == ProviderType.GITLAB:
            return self.gitlab_repos
        if provider == ProviderType.GERRIT:
            return self.gerrit_repos
        return self.repos

    def has_committer(self, username: Optional[str]) -> bool:
        return any(c.username == username for c in self.committers)


class BotRecord(BaseModel):
    """Bot registry entry.

    Besides the root ``email`` a record holds any number of provider alias
    objects (``"github.com": {"username": ..., "email": ...}``); those land in
    the model extras and are exposed through :meth:`alias_emails`.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[Any] = None
    project_id: Optional[str] = Field(default=None, alias="projectId")
    username: Optional[str] = None
    email: Optional[str] = None

    def alias_emails(self) -> Iterator[str]:
        extras: Dict[str, Any] = self.model_extra or {}
        for value in extras.values():
            if isinstance(value, dict) and value.get("email"):
                yield str(value["email"])

    def is_owned_by(self, project_id: Optional[str]) -> bool:
        if not project_id or not self.project_id:
            return False
        return self.project_id.lower() == project_id.lower()

    def matches_mail(self, mail: Optional[str]) -> bool:
        """True if the root address or any alias address equals mail, ignoring case."""
        if not mail:
            return False
        target = mail.lower()
        if self.email and self.email.lower() == target:
            return True
        return any(alias.lower() == target for alias in self.alias_emails())
