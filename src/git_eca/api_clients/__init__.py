"""API Client Abstractions for the Eclipse Foundation APIs.

All HTTP functionality is contained within dedicated API client classes;
validation logic only sees typed models and the client exceptions.
"""

from .accounts_client import AccountsAPIClient
from .base_client import (
    APIClientError,
    AuthenticationError,
    EclipseAPIClient,
    NetworkError,
    NotFoundError,
)
from .bots_client import BotsAPIClient
from .oauth_client import OAuthTokenManager, TokenRequestError
from .projects_client import ProjectsAPIClient

__all__ = [
    # Base client
    "EclipseAPIClient",
    "APIClientError",
    "AuthenticationError",
    "NetworkError",
    "NotFoundError",
    # Token management
    "OAuthTokenManager",
    "TokenRequestError",
    # Service clients
    "AccountsAPIClient",
    "BotsAPIClient",
    "ProjectsAPIClient",
]
