"""Base Eclipse Foundation API Client.

Provides common HTTP functionality, bearer token handling and error
classification for the accounts, bots and projects APIs.
"""

import json
import logging
import threading
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .oauth_client import OAuthTokenManager, TokenRequestError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class APIClientError(Exception):
    """Base exception for API client errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(APIClientError):
    """Exception raised when the requested resource does not exist (404)."""

    pass


class AuthenticationError(APIClientError):
    """Exception raised when the API rejects our credentials."""

    pass


class NetworkError(APIClientError):
    """Exception raised when network operations fail or time out."""

    pass


class EclipseAPIClient:
    """Base API client with bearer authentication and common HTTP functionality."""

    def __init__(
        self,
        base_url: str,
        token_manager: Optional[OAuthTokenManager] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize base API client.

        Args:
            base_url: Base URL of the API
            token_manager: Source of bearer tokens, None for anonymous access
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = base_url.rstrip("/")
        self.token_manager = token_manager
        self.timeout = timeout
        self._transport = transport
        self._session: Optional[httpx.Client] = None
        self._session_lock = threading.Lock()

    @property
    def session(self) -> httpx.Client:
        """Get or create HTTP session, shared by all request threads."""
        with self._session_lock:
            if self._session is None or self._session.is_closed:
                timeouts = httpx.Timeout(self.timeout, connect=10.0)
                self._session = httpx.Client(
                    timeout=timeouts,
                    headers={"Accept": "application/json"},
                    follow_redirects=True,
                    transport=self._transport,
                )
            return self._session

    def _auth_headers(self, force_refresh: bool = False) -> Dict[str, str]:
        if self.token_manager is None:
            return {}
        try:
            token = self.token_manager.get_token(force_refresh=force_refresh)
        except TokenRequestError as e:
            raise AuthenticationError(str(e)) from e
        if not token:
            return {}
        return {"Authorization": f"Bearer {token}"}

    def _request(self, method: str, endpoint: str = "", **kwargs: Any) -> httpx.Response:
        """Make an authenticated request, retrying once on 401.

        Raises:
            NotFoundError: If the API returns 404
            AuthenticationError: If the API returns 401/403
            NetworkError: If the connection fails or times out
            APIClientError: For any other error status
        """
        url = f"{self.base_url}{endpoint}"
        extra_headers = kwargs.pop("headers", {})

        for attempt in range(2):
            headers = {**extra_headers, **self._auth_headers(force_refresh=attempt > 0)}
            try:
                response = self.session.request(method, url, headers=headers, **kwargs)
            except httpx.TimeoutException as e:
                raise NetworkError(f"Request to {url} timed out: {e}") from e
            except httpx.HTTPError as e:
                raise NetworkError(f"Request to {url} failed: {e}") from e

            if response.status_code == 401 and attempt == 0 and self.token_manager:
                logger.debug("Received 401, refreshing token and retrying")
                continue
            break

        self._raise_for_status(response, url)
        return response

    @staticmethod
    def _raise_for_status(response: httpx.Response, url: str) -> None:
        status = response.status_code
        if status < 400:
            return

        try:
            detail = response.json().get("detail", f"HTTP {status}")
        except (json.JSONDecodeError, AttributeError, ValueError):
            detail = f"HTTP {status}"

        if status == 404:
            raise NotFoundError(f"Not found: {url}", status_code=status)
        if status in (401, 403):
            raise AuthenticationError(
                f"Authentication failed for {url}: {detail}", status_code=status
            )
        raise APIClientError(f"Request to {url} failed: {detail}", status_code=status)

    def _get_json(self, endpoint: str = "", **kwargs: Any) -> Any:
        response = self._request("GET", endpoint, **kwargs)
        try:
            return response.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise APIClientError(
                f"Invalid JSON from {self.base_url}{endpoint}: {e}"
            ) from e

    def _parse(self, model: Type[M], data: Any, what: str) -> M:
        """Validate one upstream record, mapping schema mismatches to APIClientError."""
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise APIClientError(
                f"Unexpected {what} response from {self.base_url}: {e}"
            ) from e

    def close(self) -> None:
        """Close the HTTP session."""
        with self._session_lock:
            if self._session is not None and not self._session.is_closed:
                self._session.close()
            self._session = None

    def __enter__(self) -> "EclipseAPIClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
