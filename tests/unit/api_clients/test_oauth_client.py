"""Tests for OAuthTokenManager."""

import httpx
import pytest

from git_eca.api_clients import OAuthTokenManager, TokenRequestError

TOKEN_URL = "https://auth.example.org/token"


class Clock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def _manager(handler, clock=None, client_id="client"):
    return OAuthTokenManager(
        TOKEN_URL,
        client_id,
        "secret",
        scope="view",
        refresh_threshold_seconds=60,
        transport=httpx.MockTransport(handler),
        clock=clock or Clock(),
    )


class TestOAuthTokenManager:
    def test_disabled_without_client_id(self):
        manager = _manager(lambda r: httpx.Response(500), client_id=None)

        assert manager.enabled is False
        assert manager.get_token() is None

    def test_client_credentials_form_is_posted(self):
        bodies = []

        def handler(request):
            bodies.append(request.content.decode())
            return httpx.Response(200, json={"access_token": "abc", "expires_in": 3600})

        assert _manager(handler).get_token() == "abc"
        assert "grant_type=client_credentials" in bodies[0]
        assert "scope=view" in bodies[0]

    def test_token_is_reused_until_near_expiry(self):
        clock = Clock()
        issued = []

        def handler(request):
            issued.append(1)
            return httpx.Response(
                200, json={"access_token": f"t{len(issued)}", "expires_in": 120}
            )

        manager = _manager(handler, clock)

        assert manager.get_token() == "t1"
        clock.now = 59
        assert manager.get_token() == "t1"
        clock.now = 60
        assert manager.get_token() == "t2"

    def test_force_refresh_and_invalidate(self):
        issued = []

        def handler(request):
            issued.append(1)
            return httpx.Response(200, json={"access_token": f"t{len(issued)}"})

        manager = _manager(handler)
        manager.get_token()

        assert manager.get_token(force_refresh=True) == "t2"
        manager.invalidate()
        assert manager.is_token_near_expiry() is True

    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(401),
            httpx.Response(200, json={"token_type": "bearer"}),
            httpx.Response(200, content=b"not json"),
        ],
    )
    def test_bad_token_responses_raise(self, response):
        with pytest.raises(TokenRequestError):
            _manager(lambda r: response).get_token()

    def test_transport_failure_keeps_cause(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(TokenRequestError) as exc_info:
            _manager(handler).get_token()

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
