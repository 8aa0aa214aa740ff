"""
Test doubles and sample data for Git ECA tests.

Provides in-memory stand-ins for the accounts, bots and projects APIs plus a
sample directory used across the engine, service and HTTP tests.
"""

from typing import List, Optional

from git_eca.api_clients import NotFoundError
from git_eca.models import (
    ECA,
    BotRecord,
    Commit,
    EclipseUser,
    GitUser,
    Project,
    ValidationRequest,
)


class FakeDirectory:
    """Account directory keyed by mail and GitHub handle."""

    def __init__(self, users: List[EclipseUser]):
        self.users = users
        self.mail_lookups: List[str] = []
        self.handle_lookups: List[str] = []
        self.error: Optional[Exception] = None

    def get_users_by_mail(self, mail: str) -> List[EclipseUser]:
        self.mail_lookups.append(mail)
        if self.error is not None:
            raise self.error
        found = [u for u in self.users if u.mail == mail]
        if not found:
            raise NotFoundError(f"No account with mail {mail}", status_code=404)
        return found

    def get_user_by_github_handle(self, handle: str) -> EclipseUser:
        self.handle_lookups.append(handle)
        if self.error is not None:
            raise self.error
        for user in self.users:
            if user.github_handle == handle:
                return user
        raise NotFoundError(f"No account for handle {handle}", status_code=404)


class FakeRegistry:
    """Bot registry returning a fixed list."""

    def __init__(self, bots: List[BotRecord]):
        self.bots = bots
        self.calls = 0
        self.error: Optional[Exception] = None

    def get_bots(self) -> List[BotRecord]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return list(self.bots)


class FakeCatalog:
    """Project catalog returning a fixed list."""

    def __init__(self, projects: List[Project]):
        self.projects = projects
        self.calls = 0

    def get_projects(self) -> List[Project]:
        self.calls += 1
        return list(self.projects)


WIZARD = GitUser(name="The Wizard", mail="code.wiz@important.co")
GRUNT = GitUser(name="Grunts McGee", mail="grunt@important.co")
NEWBIE = GitUser(name="Newbie Anon", mail="newbie@important.co")
SLOM = GitUser(name="Barshall Blathers", mail="slom@eclipse-foundation.org")
RANDO = GitUser(name="Rando Calressian", mail="rando@nowhere.co")

SAMPLE_REPO = "https://github.com/eclipsefdn/sample"
PROTOTYPE_REPO = "https://github.com/eclipsefdn/prototype"
SPEC_REPO = "https://github.com/eclipsefdn/tck-proto"
GERRIT_REPO = "https://git.eclipse.org/r/gitroot/sample/gerrit.other-project"
UNTRACKED_REPO = "https://github.com/eclipsefdn/not-a-project"

PARENT_HASH = "46bb69bf6aa4ed26b2bf8c322ae05bef0bcc5c10"


def sample_users() -> List[EclipseUser]:
    return [
        EclipseUser(
            uid="1",
            name="da_wizard",
            mail="code.wiz@important.co",
            eca=ECA(signed=True, can_contribute_spec_project=True),
            is_committer=True,
            github_handle="wizard",
        ),
        EclipseUser(
            uid="2",
            name="grunter",
            mail="grunt@important.co",
            eca=ECA(signed=True, can_contribute_spec_project=False),
            is_committer=True,
            github_handle="grunter",
        ),
        EclipseUser(
            uid="3",
            name="newbieAnon",
            mail="newbie@important.co",
            eca=ECA(signed=False, can_contribute_spec_project=False),
        ),
        EclipseUser(
            uid="4",
            name="barshallb",
            mail="slom@eclipse-foundation.org",
            eca=ECA(signed=True, can_contribute_spec_project=False),
        ),
    ]


def sample_bots() -> List[BotRecord]:
    return [
        BotRecord.model_validate(
            {
                "id": 1,
                "projectId": "sample.proj",
                "username": "projbot",
                "email": "1.bot@eclipse.org",
            }
        ),
        BotRecord.model_validate(
            {
                "id": 2,
                "projectId": "sample.proto",
                "username": "protobot",
                "email": "2.bot@eclipse.org",
                "github.com": {
                    "username": "protobot-gh",
                    "email": "2.bot-github@eclipse.org",
                },
            }
        ),
        BotRecord.model_validate(
            {
                "id": 3,
                "projectId": "spec.proj",
                "username": "specbot",
                "email": "3.bot@eclipse.org",
            }
        ),
    ]


def sample_projects() -> List[Project]:
    committers = [{"username": "da_wizard"}, {"username": "grunter"}]
    return [
        Project.model_validate(
            {
                "project_id": "sample.proj",
                "name": "Sample project",
                "committers": committers,
                "github_repos": [{"url": SAMPLE_REPO}],
            }
        ),
        Project.model_validate(
            {
                "project_id": "sample.proto",
                "name": "Sample prototype",
                "committers": committers,
                "github_repos": [{"url": PROTOTYPE_REPO}],
            }
        ),
        Project.model_validate(
            {
                "project_id": "spec.proj",
                "name": "Spec project",
                "spec_project_working_group": {"id": "proj1", "name": "Proj1"},
                "committers": committers,
                "github_repos": [{"url": SPEC_REPO}],
            }
        ),
        Project.model_validate(
            {
                "project_id": "sample.gerrit",
                "name": "Gerrit project",
                "committers": committers,
                "gerrit_repos": [{"url": GERRIT_REPO}],
            }
        ),
    ]


def make_commit(
    commit_hash: str,
    author: GitUser,
    committer: Optional[GitUser] = None,
    parents: Optional[List[str]] = None,
) -> Commit:
    return Commit(
        hash=commit_hash,
        subject="Test commit",
        body=f"Signed-off-by: {author.name} <{author.mail}>",
        parents=parents if parents is not None else [PARENT_HASH],
        author=author,
        committer=committer or author,
    )


def make_request(
    commits: List[Commit],
    repo_url: str = SAMPLE_REPO,
    provider: str = "github",
    strict_mode: bool = False,
) -> ValidationRequest:
    return ValidationRequest.model_validate(
        {
            "repoUrl": repo_url,
            "provider": provider,
            "strictMode": strict_mode,
            "commits": [c.model_dump() for c in commits],
        }
    )
