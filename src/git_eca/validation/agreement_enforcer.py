"""Contributor agreement enforcement for non-committers."""

from enum import Enum
from typing import Optional

from ..models import APIStatusCode, EclipseUser
from .reporter import ValidationReporter


class ContributorRole(Enum):
    """Role of the identity on the commit, with the error code used for it."""

    AUTHOR = ("author", APIStatusCode.ERROR_AUTHOR)
    COMMITTER = ("committer", APIStatusCode.ERROR_COMMITTER)

    def __init__(self, label: str, error_code: APIStatusCode):
        self.label = label
        self.error_code = error_code


class AgreementEnforcer:
    """Requires a current ECA from anyone who is not a committer."""

    def enforce(
        self,
        user: EclipseUser,
        is_committer: bool,
        role: ContributorRole,
        commit_hash: Optional[str],
        reporter: ValidationReporter,
    ) -> bool:
        """Record the agreement decision; returns False if an ECA was missing."""
        who = f"Eclipse user '{user.name}'({role.label})"
        if is_committer:
            reporter.message(
                commit_hash,
                f"{who} is a committer on the project.",
                APIStatusCode.SUCCESS_COMMITTER,
            )
            return True

        reporter.message(commit_hash, f"{who} is not a committer on the project.")
        if user.eca.signed:
            reporter.message(
                commit_hash,
                f"{who} has a current Eclipse Contributor Agreement (ECA) on file.",
                APIStatusCode.SUCCESS_CONTRIBUTOR,
            )
            return True

        reporter.message(
            commit_hash,
            f"{who} does not have a current Eclipse Contributor Agreement (ECA) on file.\n"
            "If there are multiple commits, please ensure that each author has a ECA.",
        )
        reporter.error(
            commit_hash,
            f"An Eclipse Contributor Agreement is required for {who}.",
            role.error_code,
        )
        return False
