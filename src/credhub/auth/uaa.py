"""
UAA Token Authenticator

OAuth2 bearer-token authentication against a UAA-style token endpoint.
Supports the password grant for login and the refresh_token and
client_credentials grants for renewing an expired access token.
"""
import logging
from typing import Callable, Dict, Optional

import requests

from credhub.config import CredHubConfig

logger = logging.getLogger(__name__)

TOKEN_PATH = "/oauth/token"

TokenCallback = Callable[[str, Optional[str]], None]


class UaaAuthenticator:
    """
    Bearer-token authenticator backed by a UAA server.

    Example:
        >>> auth = UaaAuthenticator("https://uaa.example.com", refresh_token="...")
        >>> auth.refresh()
        True
    """

    def __init__(
        self,
        auth_url: str,
        client_id: str = "credhub_cli",
        client_secret: str = "",
        access_token: Optional[str] = None,
        refresh_token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: int = 30,
        verify: bool = True,
        on_refresh: Optional[TokenCallback] = None,
    ):
        """
        Initialize UAA authenticator.

        Args:
            auth_url: UAA base URL
            client_id: OAuth2 client id
            client_secret: OAuth2 client secret (empty for the public CLI client)
            access_token: Current access token, if any
            refresh_token: Current refresh token, if any
            session: Session used for token requests
            timeout: Token request timeout in seconds
            verify: Whether to verify SSL certificates
            on_refresh: Called with (access_token, refresh_token) whenever tokens change
        """
        self.auth_url = auth_url.rstrip('/')
        self.client_id = client_id
        self.client_secret = client_secret
        self.access_token = access_token
        self.refresh_token = refresh_token
        self.session = session or requests.Session()
        self.timeout = timeout
        self.verify = verify
        self.on_refresh = on_refresh

    @classmethod
    def from_config(
        cls,
        config: CredHubConfig,
        session: Optional[requests.Session] = None,
        on_refresh: Optional[TokenCallback] = None,
    ) -> "UaaAuthenticator":
        """Create an authenticator from stored configuration."""
        return cls(
            auth_url=config.auth_url,
            client_id=config.client_id,
            client_secret=config.client_secret,
            access_token=config.access_token,
            refresh_token=config.refresh_token,
            session=session,
            timeout=config.timeout,
            verify=config.verify,
            on_refresh=on_refresh,
        )

    def authorize(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        if self.access_token:
            request.headers['Authorization'] = f"Bearer {self.access_token}"
        return request

    def refresh(self) -> bool:
        """
        Renew the access token.

        Uses the refresh_token grant when a refresh token is held, otherwise
        the client_credentials grant when a client secret is configured.

        Returns:
            True if a new access token was obtained
        """
        if self.refresh_token:
            grant = {'grant_type': 'refresh_token', 'refresh_token': self.refresh_token}
        elif self.client_secret:
            grant = {'grant_type': 'client_credentials'}
        else:
            logger.warning("Cannot refresh access token: no refresh token or client secret")
            return False

        return self._request_token(grant)

    def login(self, username: str, password: str) -> bool:
        """
        Obtain tokens with the password grant.

        Returns:
            True if login succeeded
        """
        return self._request_token({
            'grant_type': 'password',
            'username': username,
            'password': password,
        })

    def _request_token(self, grant: Dict[str, str]) -> bool:
        if not self.auth_url:
            logger.warning("Cannot request token: auth URL is not set")
            return False

        url = f"{self.auth_url}{TOKEN_PATH}"
        grant_type = grant['grant_type']
        try:
            response = self.session.post(
                url,
                data={**grant, 'response_type': 'token'},
                auth=(self.client_id, self.client_secret),
                headers={
                    'Accept': 'application/json',
                    'Content-Type': 'application/x-www-form-urlencoded',
                },
                timeout=self.timeout,
                verify=self.verify,
            )
        except requests.exceptions.RequestException as e:
            logger.warning(f"Token request ({grant_type}) to {url} failed: {e}")
            return False

        if response.status_code != 200:
            logger.warning(f"Token request ({grant_type}) rejected with status {response.status_code}")
            return False

        try:
            payload = response.json()
            access_token = payload['access_token']
        except (ValueError, KeyError, TypeError):
            logger.warning(f"Token response ({grant_type}) did not contain an access token")
            return False

        self.access_token = access_token
        self.refresh_token = payload.get('refresh_token', self.refresh_token)
        logger.info(f"Obtained access token via {grant_type} grant")

        if self.on_refresh:
            try:
                self.on_refresh(self.access_token, self.refresh_token)
            except OSError as e:
                logger.warning(f"Obtained new access token but could not persist it: {e}")
        return True
