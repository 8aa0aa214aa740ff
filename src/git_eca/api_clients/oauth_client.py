"""OAuth Token Manager for API Client Authentication.

Obtains bearer tokens with the client credentials grant and keeps them in
memory until shortly before they expire.
"""

import logging
import threading
import time
from typing import Callable, Optional, Tuple

import httpx

logger = logging.getLogger(__name__)


class TokenRequestError(Exception):
    """Exception raised when a token could not be obtained."""

    pass


class OAuthTokenManager:
    """Manages client credentials tokens for the Eclipse APIs."""

    def __init__(
        self,
        token_url: str,
        client_id: Optional[str],
        client_secret: Optional[str],
        scope: str = "",
        refresh_threshold_seconds: int = 60,
        transport: Optional[httpx.BaseTransport] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize token manager.

        Args:
            token_url: OAuth2 token endpoint
            client_id: Client ID, None disables authentication
            client_secret: Client secret
            scope: Requested scope
            refresh_threshold_seconds: Seconds before expiry to trigger refresh
            transport: Optional httpx transport (used by tests)
            clock: Monotonic time source
        """
        self.token_url = token_url
        self.client_id = client_id
        self.client_secret = client_secret
        self.scope = scope
        self.refresh_threshold_seconds = refresh_threshold_seconds
        self._transport = transport
        self._clock = clock
        self._token: Optional[str] = None
        self._expires_at = 0.0
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return bool(self.client_id)

    def is_token_near_expiry(self) -> bool:
        if self._token is None:
            return True
        return self._clock() >= self._expires_at - self.refresh_threshold_seconds

    def get_token(self, force_refresh: bool = False) -> Optional[str]:
        """Return a valid access token, requesting a new one when needed.

        Returns:
            Access token, or None when no client credentials are configured

        Raises:
            TokenRequestError: If the token endpoint rejects the request
        """
        if not self.enabled:
            return None

        with self._lock:
            if force_refresh or self.is_token_near_expiry():
                self._token, self._expires_at = self._request_token()
            return self._token

    def invalidate(self) -> None:
        with self._lock:
            self._token = None
            self._expires_at = 0.0

    def _request_token(self) -> Tuple[str, float]:
        logger.debug(f"Requesting access token from {self.token_url}")
        data = {
            "grant_type": "client_credentials",
            "client_id": self.client_id or "",
            "client_secret": self.client_secret or "",
        }
        if self.scope:
            data["scope"] = self.scope

        try:
            with httpx.Client(timeout=10.0, transport=self._transport) as client:
                response = client.post(self.token_url, data=data)
        except httpx.HTTPError as e:
            raise TokenRequestError(f"Token request failed: {e}") from e

        if response.status_code != 200:
            raise TokenRequestError(
                f"Token request failed with HTTP {response.status_code}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise TokenRequestError(f"Invalid token response: {e}") from e

        token = payload.get("access_token")
        if not token or not isinstance(token, str):
            raise TokenRequestError("No valid access token in response")

        expires_in = float(payload.get("expires_in", 3600))
        logger.debug(f"Obtained access token valid for {expires_in:.0f}s")
        return token, self._clock() + expires_in
