"""Accounts API Client.

Looks up Eclipse accounts by mail address and by GitHub handle.
"""

import logging
from typing import List

from ..models import EclipseUser
from .base_client import APIClientError, EclipseAPIClient, NotFoundError

logger = logging.getLogger(__name__)


class AccountsAPIClient(EclipseAPIClient):
    """API client for the account profile service."""

    def get_users_by_mail(self, mail: str) -> List[EclipseUser]:
        """Find accounts registered with the given mail address.

        Raises:
            NotFoundError: If no account uses the address
            APIClientError: If the service fails
        """
        logger.debug(f"Looking up accounts with mail '{mail}'")
        data = self._get_json("", params={"mail": mail})
        if data is None:
            return []
        if isinstance(data, dict):
            data = [data]
        if not isinstance(data, list):
            raise APIClientError(f"Unexpected accounts response type: {type(data)}")
        return [self._parse(EclipseUser, entry, "accounts") for entry in data]

    def get_user_by_github_handle(self, handle: str) -> EclipseUser:
        """Reverse lookup of an account from its linked GitHub handle.

        Raises:
            NotFoundError: If no account is linked to the handle
            APIClientError: If the service fails
        """
        logger.debug(f"Looking up account with GitHub handle '{handle}'")
        data = self._get_json(f"/github/{handle}")
        if not data:
            raise NotFoundError(f"No account linked to GitHub handle '{handle}'")
        return self._parse(EclipseUser, data, "accounts")
