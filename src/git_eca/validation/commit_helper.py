"""Structural checks for submitted commits."""

from typing import Optional

from ..models import Commit, GitUser


def _has_mail(user: Optional[GitUser]) -> bool:
    return user is not None and bool(user.mail and user.mail.strip())


def validate_commit(commit: Optional[Commit]) -> bool:
    """Check that a commit carries the fields needed for validation.

    A commit needs a hash plus an author and a committer, each with a
    non-blank mail address.
    """
    if commit is None:
        return False
    if not commit.hash:
        return False
    return _has_mail(commit.author) and _has_mail(commit.committer)
