"""
HTTP Transport

Executes a single CredHub request through a ``requests`` session, attaching
authorization material from the injected authenticator. An expired token is
handled by one refresh followed by one retried request.
"""
import logging
from typing import Optional

import requests
from requests.adapters import BaseAdapter

from credhub.auth.base import Authenticator
from credhub.client.classifier import is_unauthorized, network_error
from credhub.errors import UnauthorizedError

logger = logging.getLogger(__name__)


class Transport:
    """
    Authenticated request executor.

    Authenticators that are also ``requests`` adapters (such as ``DummyAuth``)
    are mounted on the session and answer every request themselves.
    """

    def __init__(
        self,
        authenticator: Authenticator,
        session: Optional[requests.Session] = None,
        timeout: int = 30,
        verify: bool = True,
    ):
        """
        Initialize transport.

        Args:
            authenticator: Strategy that authorizes requests and refreshes tokens
            session: Session for connection pooling (created if not given)
            timeout: Request timeout in seconds
            verify: Whether to verify SSL certificates
        """
        self.authenticator = authenticator
        self.session = session or requests.Session()
        self.session.headers.update({
            'Content-Type': 'application/json',
            'Accept': 'application/json',
        })
        self.timeout = timeout
        self.verify = verify

        if isinstance(authenticator, BaseAdapter):
            self.session.mount('http://', authenticator)
            self.session.mount('https://', authenticator)

    def execute(self, request: requests.Request) -> requests.Response:
        """
        Send ``request``, refreshing authorization once on 401.

        Returns:
            The server response (which may still be a 401 after the retry)

        Raises:
            NetworkError: If the server could not be reached
            UnauthorizedError: If authorization could not be refreshed
        """
        response = self._send(request)

        if is_unauthorized(response):
            logger.info(f"{request.method} {request.url} unauthorized, refreshing access token")
            if not self.authenticator.refresh():
                raise UnauthorizedError("You are not authorized to perform this action. Please log in.")
            response = self._send(request)

        return response

    def _send(self, request: requests.Request) -> requests.Response:
        prepared = self.authenticator.authorize(self.session.prepare_request(request))
        logger.debug(f"{prepared.method} {prepared.url}")
        try:
            return self.session.send(prepared, timeout=self.timeout, verify=self.verify)
        except requests.exceptions.RequestException as e:
            raise network_error(e) from e
