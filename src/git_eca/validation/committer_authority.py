"""Committer status checks against the matched projects."""

import logging
from typing import Optional, Sequence

from ..models import APIStatusCode, EclipseUser, Project
from .automation_authority import AutomationAuthority
from .reporter import ValidationReporter

logger = logging.getLogger(__name__)


class CommitterAuthority:
    """Decides whether an account may push to the matched projects as a committer."""

    def __init__(self, automation: AutomationAuthority):
        self.automation = automation

    def is_committer(
        self,
        user: EclipseUser,
        commit_hash: Optional[str],
        projects: Sequence[Project],
        reporter: ValidationReporter,
    ) -> bool:
        """Check committer status, first matching project wins.

        A committer on a specification project without permission to
        contribute to specifications is denied and an error is recorded. Bots
        registered to the projects count as committers.
        """
        for project in projects:
            logger.debug(f"Checking project '{project.name}' for user '{user.name}'")
            if not project.has_committer(user.name):
                continue

            if (
                project.is_specification_project
                and not user.eca.can_contribute_spec_project
            ):
                reporter.error(
                    commit_hash,
                    f"Project is a specification for the working group "
                    f"'{project.spec_working_group}', but user does not have "
                    f"permission to modify a specification project",
                    APIStatusCode.ERROR_SPEC_PROJECT,
                )
                return False

            logger.debug(
                f"User '{user.mail}' was found to be a committer on current "
                f"project repo '{project.name}'"
            )
            return True

        if user.is_bot or self.automation.is_automation(user.mail, projects):
            logger.debug(f"User '{user.name} <{user.mail}>' was found to be a bot")
            return True
        return False
