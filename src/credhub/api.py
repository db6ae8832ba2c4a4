"""
CredHub client facade.

Typed convenience methods over the action/repository stack:

    >>> ch = CredHub("https://credhub.example.com:8844", auth=UaaAuthenticator(...))
    >>> cred = ch.set_password("/example-password", "some-password", overwrite=False)
    >>> cred.value
    'some-password'
"""
import logging
from typing import Any, Dict, Optional, Union

import requests

from credhub.actions.action import Action
from credhub.auth.base import Authenticator
from credhub.client.request_builders import (
    build_delete_request,
    build_get_request,
    build_set_request,
)
from credhub.client.transport import Transport
from credhub.config import CredHubConfig
from credhub.credentials.values import (
    RSA,
    SSH,
    Certificate,
    Credential,
    CredentialType,
    NoContent,
    User,
)
from credhub.repositories.repository import CredentialRepository

logger = logging.getLogger(__name__)

SetResult = Union[Credential, NoContent]


class CredHub:
    """Client for the CredHub data API."""

    def __init__(
        self,
        base_url: str,
        auth: Authenticator,
        environment: str = "default",
        timeout: int = 30,
        verify: bool = True,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize CredHub client.

        Args:
            base_url: CredHub server URL
            auth: Authenticator attaching and refreshing authorization
            environment: Name of the target environment
            timeout: Request timeout in seconds
            verify: Whether to verify SSL certificates
            session: Session for connection pooling (created if not given)
        """
        self.config = CredHubConfig(
            api_url=base_url,
            environment=environment,
            timeout=timeout,
            verify=verify,
        )
        self.auth = auth
        self.transport = Transport(auth, session=session, timeout=timeout, verify=verify)
        self.repository = CredentialRepository(self.transport)

    @classmethod
    def from_config(cls, config: CredHubConfig, auth: Authenticator) -> "CredHub":
        return cls(
            config.api_url,
            auth,
            environment=config.environment,
            timeout=config.timeout,
            verify=config.verify,
        )

    def _action(self) -> Action:
        return Action(self.repository, self.config)

    def set_credential(
        self,
        name: str,
        credential_type: Union[CredentialType, str],
        value: Any,
        overwrite: bool,
    ) -> SetResult:
        """
        Store a credential.

        With ``overwrite=False`` an existing credential at ``name`` is returned
        unchanged instead of being replaced.
        """
        request = build_set_request(self.config, name, credential_type, value, overwrite)
        return self._action().do_action(request, name)

    def set_password(self, name: str, value: str, overwrite: bool) -> SetResult:
        return self.set_credential(name, CredentialType.PASSWORD, value, overwrite)

    def set_value(self, name: str, value: str, overwrite: bool) -> SetResult:
        return self.set_credential(name, CredentialType.VALUE, value, overwrite)

    def set_json(self, name: str, value: Dict[str, Any], overwrite: bool) -> SetResult:
        return self.set_credential(name, CredentialType.JSON, value, overwrite)

    def set_user(self, name: str, value: User, overwrite: bool) -> SetResult:
        return self.set_credential(name, CredentialType.USER, value, overwrite)

    def set_certificate(self, name: str, value: Certificate, overwrite: bool) -> SetResult:
        return self.set_credential(name, CredentialType.CERTIFICATE, value, overwrite)

    def set_rsa(self, name: str, value: RSA, overwrite: bool) -> SetResult:
        return self.set_credential(name, CredentialType.RSA, value, overwrite)

    def set_ssh(self, name: str, value: SSH, overwrite: bool) -> SetResult:
        return self.set_credential(name, CredentialType.SSH, value, overwrite)

    def get_by_name(self, name: str) -> SetResult:
        """Retrieve the latest version of a credential."""
        return self._action().do_action(build_get_request(self.config, name), name)

    def delete(self, name: str) -> None:
        """Delete a credential and all of its versions."""
        self._action().do_action(build_delete_request(self.config, name), name)
        logger.info(f"Deleted credential {name}")
