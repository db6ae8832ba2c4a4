"""
Unit tests for the UAA authenticator.

The token endpoint is answered by a DummyAuth adapter mounted on the session.
"""

from urllib.parse import parse_qs

import pytest
import requests

from credhub.auth import Authenticator, DummyAuth, UaaAuthenticator, make_response
from credhub.config import CredHubConfig


@pytest.fixture
def token_server():
    return DummyAuth(response=make_response(200, {
        "access_token": "new-access-token",
        "refresh_token": "new-refresh-token",
        "token_type": "bearer",
    }))


def _authenticator(backend, **kwargs):
    session = requests.Session()
    session.mount("https://", backend)
    return UaaAuthenticator("https://uaa.example.com/", session=session, **kwargs)


def _form(request):
    return {key: values[0] for key, values in parse_qs(request.body).items()}


class TestUaaAuthenticator:
    """Tests for UaaAuthenticator."""

    def test_implements_authenticator(self):
        assert isinstance(UaaAuthenticator("https://uaa.example.com"), Authenticator)

    def test_authorize_attaches_bearer_token(self):
        auth = UaaAuthenticator("https://uaa.example.com", access_token="some-token")
        request = requests.Request('GET', "https://example.com/api/v1/data").prepare()

        assert auth.authorize(request).headers["Authorization"] == "Bearer some-token"

    def test_authorize_without_token(self):
        auth = UaaAuthenticator("https://uaa.example.com")
        request = requests.Request('GET', "https://example.com/api/v1/data").prepare()

        assert "Authorization" not in auth.authorize(request).headers

    def test_refresh_token_grant(self, token_server):
        """Test refreshing with a refresh token."""
        refreshed = []
        auth = _authenticator(
            token_server,
            refresh_token="old-refresh-token",
            on_refresh=lambda access, refresh: refreshed.append((access, refresh)),
        )

        assert auth.refresh() is True

        request = token_server.request
        assert request.url == "https://uaa.example.com/oauth/token"
        assert request.method == "POST"
        assert request.headers["Authorization"].startswith("Basic ")
        assert _form(request)["grant_type"] == "refresh_token"
        assert _form(request)["refresh_token"] == "old-refresh-token"
        assert auth.access_token == "new-access-token"
        assert auth.refresh_token == "new-refresh-token"
        assert refreshed == [("new-access-token", "new-refresh-token")]

    def test_client_credentials_grant(self, token_server):
        auth = _authenticator(token_server, client_id="director", client_secret="secret")

        assert auth.refresh() is True
        assert _form(token_server.request)["grant_type"] == "client_credentials"

    def test_refresh_without_material(self, token_server):
        auth = _authenticator(token_server)

        assert auth.refresh() is False
        assert token_server.request is None

    def test_refresh_rejected(self):
        backend = DummyAuth(response=make_response(401, {"error": "invalid_token"}))
        auth = _authenticator(backend, access_token="old", refresh_token="expired")

        assert auth.refresh() is False
        assert auth.access_token == "old"

    def test_refresh_network_failure(self):
        backend = DummyAuth(error=requests.exceptions.ConnectionError("refused"))
        auth = _authenticator(backend, refresh_token="some-refresh")

        assert auth.refresh() is False

    def test_refresh_response_without_token(self):
        backend = DummyAuth(response=make_response(200, "something-invalid"))
        auth = _authenticator(backend, refresh_token="some-refresh")

        assert auth.refresh() is False

    def test_login_password_grant(self, token_server):
        auth = _authenticator(token_server)

        assert auth.login("admin", "some-password") is True

        form = _form(token_server.request)
        assert form["grant_type"] == "password"
        assert form["username"] == "admin"
        assert auth.access_token == "new-access-token"

    def test_from_config(self):
        config = CredHubConfig(
            auth_url="https://uaa.example.com",
            access_token="a",
            refresh_token="r",
            client_secret="s",
        )
        auth = UaaAuthenticator.from_config(config)

        assert auth.auth_url == "https://uaa.example.com"
        assert auth.access_token == "a"
        assert auth.refresh_token == "r"
        assert auth.client_id == "credhub_cli"

    def test_refresh_keeps_token_when_persistence_fails(self, token_server, caplog):
        """Test that an OSError from on_refresh is logged, not raised."""
        def on_refresh(access_token, refresh_token):
            raise OSError("No space left on device")

        auth = _authenticator(token_server, refresh_token="old-refresh-token", on_refresh=on_refresh)

        assert auth.refresh() is True
        assert auth.access_token == "new-access-token"
        assert auth.refresh_token == "new-refresh-token"
        assert "could not persist" in caplog.text
