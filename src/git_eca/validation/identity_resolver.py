"""Resolves Git identities to Eclipse accounts.

Resolution order for a mail address:

1. No-reply addresses (matched by the configured patterns) on the GitHub
   no-reply domain are reverse-looked-up by the GitHub handle embedded in the
   local part. Both ``handle@users.noreply.github.com`` and
   ``12345+handle@users.noreply.github.com`` are understood.
2. Otherwise, or when the reverse lookup finds nothing, the directory is
   queried by mail and the first returned account wins.

Results are cached under ``user|<mail>`` so repeated identities across
commits and requests cost a single directory call.
"""

import logging
from typing import Optional

from ..api_clients import APIClientError, NotFoundError
from ..config import MailPolicy
from ..models import EclipseUser, GitUser
from .interfaces import Cache, DirectoryLookup

logger = logging.getLogger(__name__)

GITHUB_NOREPLY_SUFFIX = "noreply.github.com"
USER_CACHE_PREFIX = "user|"


def extract_noreply_username(mail: str) -> str:
    """Candidate username from the local part of a no-reply address.

    The local part is split on ``+``; the second segment is used when
    present (``id+user``), the whole local part otherwise.
    """
    local_part = mail.split("@", 1)[0]
    name_parts = local_part.split("+")
    if len(name_parts) > 1 and name_parts[1]:
        return name_parts[1].strip()
    return name_parts[0].strip()


class IdentityResolver:
    """Maps raw Git identities to directory accounts."""

    def __init__(
        self,
        directory: DirectoryLookup,
        cache: Cache,
        mail_policy: MailPolicy,
    ):
        self.directory = directory
        self.cache = cache
        self.mail_policy = mail_policy

    def resolve(self, user: GitUser) -> Optional[EclipseUser]:
        """Account for the Git identity, or None if it cannot be identified.

        Directory failures are logged and reported as unresolved; they never
        propagate to the caller.
        """
        mail = user.mail or ""
        try:
            found = self.cache.get(
                f"{USER_CACHE_PREFIX}{mail}", lambda: self._retrieve_user(user)
            )
        except NotFoundError:
            logger.warning(f"No users found for mail '{mail}'")
            return None
        except APIClientError as e:
            logger.error(f"Error while checking for user with mail '{mail}': {e}")
            return None

        if found is None:
            logger.warning(f"No users found for mail '{mail}'")
        return found

    def _retrieve_user(self, user: GitUser) -> Optional[EclipseUser]:
        eclipse_user = self._check_for_noreply_user(user)
        if eclipse_user is not None:
            return eclipse_user

        mail = user.mail or ""
        logger.debug(f"Checking user with mail {mail}")
        try:
            users = self.directory.get_users_by_mail(mail)
        except NotFoundError:
            logger.warning(f"Could not find user account with mail '{mail}'")
            return None
        # First match is authoritative when several accounts share the address
        return users[0] if users else None

    def _check_for_noreply_user(self, user: GitUser) -> Optional[EclipseUser]:
        mail = (user.mail or "").strip()
        logger.debug(f"Checking user with mail {mail} for no-reply")
        if not mail or not self.mail_policy.is_noreply(mail):
            return None

        username = extract_noreply_username(mail)
        logger.debug(
            f"User with mail {mail} detected as noreply account, "
            f"checking services for username match on '{username}'"
        )
        # GitHub is the only no-reply domain with a reverse lookup route
        if not mail.endswith(GITHUB_NOREPLY_SUFFIX) or not username:
            return None

        try:
            return self.directory.get_user_by_github_handle(username)
        except NotFoundError:
            logger.warning(f"No match for '{username}' in Github")
        except APIClientError as e:
            logger.error(f"Error during GitHub handle lookup for '{username}': {e}")
        return None
