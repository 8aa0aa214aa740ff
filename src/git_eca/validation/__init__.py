"""Commit authorization decision engine."""

from .agreement_enforcer import AgreementEnforcer, ContributorRole
from .automation_authority import AutomationAuthority, bot_matches
from .commit_helper import validate_commit
from .committer_authority import CommitterAuthority
from .engine import CommitValidationEngine, build_validation_engine
from .identity_resolver import IdentityResolver, extract_noreply_username
from .project_matcher import match_projects
from .reporter import ValidationReporter

__all__ = [
    "AgreementEnforcer",
    "AutomationAuthority",
    "CommitValidationEngine",
    "CommitterAuthority",
    "ContributorRole",
    "IdentityResolver",
    "ValidationReporter",
    "bot_matches",
    "build_validation_engine",
    "extract_noreply_username",
    "match_projects",
    "validate_commit",
]
