"""
Unit tests for the command-line interface.
"""

import io
import json

import pytest
import requests
from rich.console import Console

from credhub.auth import DummyAuth, make_response
from credhub.cli.main import EXIT_NETWORK, EXIT_UNAUTHORIZED, EXIT_USAGE, main
from credhub.cli.output import print_message
from credhub.config import CredHubConfig

CERTIFICATE_RESPONSE = {
    "id": "some-id",
    "name": "/example-certificate",
    "type": "certificate",
    "value": {"ca": "some-ca", "certificate": "-----BEGIN CERTIFICATE-----\nabc\n-----END CERTIFICATE-----\n"},
    "version_created_at": "2017-01-01T04:07:18Z",
}


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    for name in ("CREDHUB_SERVER", "CREDHUB_AUTH_URL", "CREDHUB_VERIFY", "CREDHUB_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    path = tmp_path / "config.json"
    CredHubConfig(api_url="https://example.com", auth_url="https://uaa.example.com").save(path)
    return path


class TestApiCommand:
    """Tests for `credhub api`."""

    def test_saves_target(self, tmp_path, capsys):
        path = tmp_path / "config.json"

        code = main(["api", "https://credhub.example.com/", "--auth-url", "https://uaa.example.com",
                     "--skip-tls-validation"], config_path=path)

        config = CredHubConfig.load(path)
        assert code == 0
        assert config.api_url == "https://credhub.example.com"
        assert config.auth_url == "https://uaa.example.com"
        assert config.verify is False
        assert "https://credhub.example.com" in capsys.readouterr().out


class TestSetCommand:
    """Tests for `credhub set`."""

    def test_set_password(self, config_path, capsys):
        dummy = DummyAuth(response=make_response(200, {
            "id": "some-id",
            "name": "/example-password",
            "type": "password",
            "value": "some-password",
            "version_created_at": "2017-01-01T04:07:18Z",
        }))

        code = main(["set", "-n", "/example-password", "-t", "password", "-v", "some-password"],
                    authenticator=dummy, config_path=config_path)

        assert code == 0
        assert json.loads(dummy.request.body) == {
            "name": "/example-password",
            "type": "password",
            "value": "some-password",
            "overwrite": True,
        }
        out = capsys.readouterr().out
        assert "name: /example-password" in out
        assert "value: some-password" in out

    def test_set_no_overwrite(self, config_path):
        dummy = DummyAuth(response=make_response(200, ""))

        main(["set", "-n", "/example-json", "-t", "json", "-v", '{"a": 1}', "--no-overwrite"],
             authenticator=dummy, config_path=config_path)

        body = json.loads(dummy.request.body)
        assert body["overwrite"] is False
        assert body["value"] == {"a": 1}

    def test_set_certificate_from_files(self, config_path, tmp_path, capsys):
        ca = tmp_path / "ca.pem"
        ca.write_text("some-ca")
        dummy = DummyAuth(response=make_response(200, CERTIFICATE_RESPONSE))

        code = main(["set", "-n", "/example-certificate", "-t", "certificate", "--root", str(ca)],
                    authenticator=dummy, config_path=config_path)

        assert code == 0
        assert json.loads(dummy.request.body)["value"] == {"ca": "some-ca"}
        out = capsys.readouterr().out
        assert "ca: some-ca" in out
        assert "-----BEGIN CERTIFICATE-----" in out

    def test_set_user(self, config_path):
        dummy = DummyAuth(response=make_response(200, ""))

        main(["set", "-n", "/example-user", "-t", "user", "--username", "admin", "--password", "pw"],
             authenticator=dummy, config_path=config_path)

        assert json.loads(dummy.request.body)["value"] == {"username": "admin", "password": "pw"}

    def test_missing_value(self, config_path):
        dummy = DummyAuth()

        code = main(["set", "-n", "/example-password", "-t", "password"],
                    authenticator=dummy, config_path=config_path)

        assert code == EXIT_USAGE
        assert dummy.requests == []

    def test_invalid_json(self, config_path):
        code = main(["set", "-n", "/example-json", "-t", "json", "-v", "{not json"],
                    authenticator=DummyAuth(), config_path=config_path)

        assert code == EXIT_USAGE


class TestGetAndDeleteCommands:
    """Tests for `credhub get` and `credhub delete`."""

    def test_get(self, config_path, capsys):
        dummy = DummyAuth(response=make_response(200, CERTIFICATE_RESPONSE))

        code = main(["get", "-n", "/example-certificate"], authenticator=dummy, config_path=config_path)

        assert code == 0
        assert dummy.request.method == "GET"
        assert "type: certificate" in capsys.readouterr().out

    def test_delete(self, config_path, capsys):
        dummy = DummyAuth(response=make_response(204, ""))

        code = main(["delete", "-n", "/example-password"], authenticator=dummy, config_path=config_path)

        assert code == 0
        assert dummy.request.method == "DELETE"
        assert "Credential successfully deleted" in capsys.readouterr().out

    def test_server_error(self, config_path, capsys):
        dummy = DummyAuth(response=make_response(404, {"error": "Credential not found"}))

        code = main(["get", "-n", "/missing"], authenticator=dummy, config_path=config_path)

        assert code == 1
        assert "Credential not found" in capsys.readouterr().err

    def test_network_error(self, config_path):
        dummy = DummyAuth(error=requests.exceptions.ConnectionError("refused"))

        code = main(["get", "-n", "/x"], authenticator=dummy, config_path=config_path)

        assert code == EXIT_NETWORK

    def test_unauthorized(self, config_path):
        dummy = DummyAuth(response=make_response(401, ""))

        code = main(["get", "-n", "/x"], authenticator=dummy, config_path=config_path)

        assert code == EXIT_UNAUTHORIZED
        assert dummy.refresh_count == 1

    def test_no_target(self, tmp_path, monkeypatch):
        monkeypatch.delenv("CREDHUB_SERVER", raising=False)
        dummy = DummyAuth()

        code = main(["get", "-n", "/x"], authenticator=dummy, config_path=tmp_path / "config.json")

        assert code == 1
        assert dummy.requests == []


class TestLoginCommand:
    """Tests for `credhub login`."""

    def test_login_requires_uaa(self, config_path):
        code = main(["login", "-u", "admin", "-p", "pw"], authenticator=DummyAuth(), config_path=config_path)
        assert code == EXIT_USAGE

    def test_login_failure(self, config_path, monkeypatch):
        monkeypatch.setattr("credhub.cli.main.UaaAuthenticator.login", lambda self, u, p: False)

        code = main(["login", "-u", "admin", "-p", "wrong"], config_path=config_path)

        assert code == EXIT_UNAUTHORIZED

    def test_login_saves_tokens(self, config_path, monkeypatch):
        def fake_login(self, username, password):
            self.access_token = "access"
            self.refresh_token = "refresh"
            return True

        monkeypatch.setattr("credhub.cli.main.UaaAuthenticator.login", fake_login)

        code = main(["login", "-u", "admin", "-p", "pw"], config_path=config_path)

        config = CredHubConfig.load(config_path)
        assert code == 0
        assert config.access_token == "access"
        assert config.refresh_token == "refresh"


class TestConfigHandling:
    """Tests for configuration problems and token write-back."""

    def test_invalid_timeout_env(self, config_path, monkeypatch, capsys):
        monkeypatch.setenv("CREDHUB_TIMEOUT", "abc")
        dummy = DummyAuth()

        code = main(["get", "-n", "/x"], authenticator=dummy, config_path=config_path)

        assert code == 1
        assert dummy.requests == []
        assert "CREDHUB_TIMEOUT must be an integer" in capsys.readouterr().err

    def test_refreshed_tokens_are_saved(self, config_path, monkeypatch):
        """Test that tokens renewed during a command are written to the config file."""
        CredHubConfig(
            api_url="https://example.com",
            auth_url="https://uaa.example.com",
            access_token="old-access",
            refresh_token="old-refresh",
        ).save(config_path)
        backend = DummyAuth(responses=[
            make_response(401, {"error": "invalid_token"}),
            make_response(200, {"access_token": "new-access", "refresh_token": "new-refresh"}),
            make_response(200, CERTIFICATE_RESPONSE),
        ])
        monkeypatch.setattr(requests.Session, "get_adapter", lambda self, url: backend)

        code = main(["get", "-n", "/example-certificate"], config_path=config_path)

        config = CredHubConfig.load(config_path)
        first, token_request, retry = backend.requests
        assert code == 0
        assert token_request.url == "https://uaa.example.com/oauth/token"
        assert retry.headers["Authorization"] == "Bearer new-access"
        assert config.access_token == "new-access"
        assert config.refresh_token == "new-refresh"


class TestOutput:
    """Tests for status message rendering."""

    def test_message_is_printed_literally(self):
        console = Console(file=io.StringIO(), highlight=False, emoji=False)

        print_message("Setting the target url: https://[::1]:8844 :smile:", console=console)

        assert console.file.getvalue() == "Setting the target url: https://[::1]:8844 :smile:\n"
