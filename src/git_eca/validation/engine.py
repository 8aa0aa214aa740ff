"""Commit validation engine.

Validates that every author and committer of the submitted commits is covered
either by an ECA, committer status on the matched project, a bot registration
or the mail allow-list.
"""

import logging
from typing import List, Optional

from ..api_clients import (
    AccountsAPIClient,
    BotsAPIClient,
    OAuthTokenManager,
    ProjectsAPIClient,
)
from ..config import Config, MailPolicy
from ..models import (
    APIStatusCode,
    Commit,
    EclipseUser,
    GitUser,
    Project,
    ValidationRequest,
    ValidationResponse,
)
from ..services import CachingService, ProjectsService
from .agreement_enforcer import AgreementEnforcer, ContributorRole
from .automation_authority import AutomationAuthority
from .commit_helper import validate_commit
from .committer_authority import CommitterAuthority
from .identity_resolver import IdentityResolver
from .interfaces import ProjectCatalog
from .project_matcher import match_projects
from .reporter import ValidationReporter

logger = logging.getLogger(__name__)


class CommitValidationEngine:
    """Produces a validation outcome for a batch of commits.

    Commits are processed strictly in request order. A malformed commit stops
    processing of the whole request; merge commits pass without checks.
    """

    def __init__(
        self,
        projects: ProjectCatalog,
        resolver: IdentityResolver,
        automation: AutomationAuthority,
        committers: Optional[CommitterAuthority] = None,
        enforcer: Optional[AgreementEnforcer] = None,
    ):
        self.projects = projects
        self.resolver = resolver
        self.automation = automation
        self.committers = committers or CommitterAuthority(automation)
        self.enforcer = enforcer or AgreementEnforcer()

    def validate(self, request: ValidationRequest) -> ValidationResponse:
        """Validate all commits of the request."""
        response = ValidationResponse(strict_mode=request.strict_mode)
        reporter = ValidationReporter(response)

        if not request.commits:
            reporter.structural_error(None, "A commit is required to validate")
        if not request.repo_url:
            reporter.structural_error(
                None, "A base repo URL needs to be set in order to validate"
            )
        if request.provider is None:
            reporter.structural_error(
                None, "A provider needs to be set to validate a request"
            )

        if response.error_count == 0:
            logger.debug(f"Processing: {request}")
            matched = match_projects(
                request.repo_path, request.provider, self.projects.get_projects()
            )
            response.tracked_project = bool(matched)
            for commit in request.commits or []:
                if not self._process_commit(commit, reporter, matched):
                    break

        response.passed = response.error_count == 0
        return response

    def _process_commit(
        self,
        commit: Commit,
        reporter: ValidationReporter,
        projects: List[Project],
    ) -> bool:
        """Validate one commit.

        Returns:
            False if processing of the request should stop, True otherwise
        """
        if not validate_commit(commit):
            reporter.structural_error(
                commit.hash if commit else None,
                "One or more commits were invalid. Please check the payload and try again",
            )
            return False

        commit_hash = commit.hash
        author = commit.author
        committer = commit.committer

        reporter.message(commit_hash, f"Reviewing commit: {commit_hash}")
        reporter.message(
            commit_hash, f"Authored by: {author.name} <{author.mail}>"
        )

        if commit.is_merge:
            reporter.message(
                commit_hash,
                f"Commit '{commit_hash}' has multiple parents, merge commit detected, passing",
                APIStatusCode.SUCCESS_SKIPPED,
            )
            return True

        eclipse_author = self._identify(
            author, ContributorRole.AUTHOR, commit_hash, projects, reporter
        )
        if eclipse_author is None:
            return True

        eclipse_committer = self._identify(
            committer, ContributorRole.COMMITTER, commit_hash, projects, reporter
        )
        if eclipse_committer is None:
            return True

        for user, role in (
            (eclipse_author, ContributorRole.AUTHOR),
            (eclipse_committer, ContributorRole.COMMITTER),
        ):
            is_committer = self.committers.is_committer(
                user, commit_hash, projects, reporter
            )
            self.enforcer.enforce(user, is_committer, role, commit_hash, reporter)
        return True

    def _identify(
        self,
        user: GitUser,
        role: ContributorRole,
        commit_hash: Optional[str],
        projects: List[Project],
        reporter: ValidationReporter,
    ) -> Optional[EclipseUser]:
        """Account for the identity, a bot stub, or None after recording an error."""
        if self.automation.is_trusted(user.mail, projects):
            reporter.message(
                commit_hash,
                f"Automated user '{user.mail}' detected for {role.label} of commit {commit_hash}",
            )
            return EclipseUser.create_bot_stub(user)

        eclipse_user = self.resolver.resolve(user)
        if eclipse_user is not None:
            return eclipse_user

        reporter.message(
            commit_hash,
            f"Could not find an Eclipse user with mail '{user.mail}' for {role.label} of commit {commit_hash}",
        )
        if role is ContributorRole.AUTHOR:
            reporter.error(
                commit_hash, "Author must have an Eclipse Account", role.error_code
            )
        else:
            reporter.error(
                commit_hash,
                "Committing user must have an Eclipse Account",
                role.error_code,
            )
        return None


def build_validation_engine(
    config: Config, cache: Optional[CachingService] = None
) -> CommitValidationEngine:
    """Wire the engine to the live Eclipse APIs described by config.

    Args:
        config: Service configuration
        cache: Optional shared CachingService, one is created when omitted
    """
    if cache is None:
        cache = CachingService(
            ttl_seconds=config.cache.ttl_seconds,
            max_entries=config.cache.max_entries,
        )
    mail_policy = MailPolicy.from_config(config.mail)
    token_manager = OAuthTokenManager(
        token_url=config.oauth.token_url,
        client_id=config.oauth.client_id,
        client_secret=config.oauth.client_secret,
        scope=config.oauth.scope,
        refresh_threshold_seconds=config.oauth.refresh_threshold_seconds,
    )

    accounts = AccountsAPIClient(
        config.api.accounts_url, token_manager, timeout=config.api.timeout
    )
    bots = BotsAPIClient(config.api.bots_url, token_manager, timeout=config.api.timeout)
    projects = ProjectsAPIClient(
        config.api.projects_url,
        token_manager,
        timeout=config.api.timeout,
        page_size=config.api.projects_page_size,
    )

    automation = AutomationAuthority(bots, cache, mail_policy)
    return CommitValidationEngine(
        projects=ProjectsService(projects, cache),
        resolver=IdentityResolver(accounts, cache, mail_policy),
        automation=automation,
    )
