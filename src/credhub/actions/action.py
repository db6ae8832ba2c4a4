"""
Action

Entry point used by command handlers: binds a repository to the configured
target for a single invocation.
"""
import logging
from typing import Union

import requests

from credhub.config import CredHubConfig
from credhub.credentials.values import Credential, NoContent
from credhub.errors import NoTargetError
from credhub.repositories.repository import CredentialRepository

logger = logging.getLogger(__name__)


class Action:
    def __init__(self, repository: CredentialRepository, config: CredHubConfig):
        self.repository = repository
        self.config = config

    def do_action(
        self,
        request: requests.Request,
        identifier: str,
    ) -> Union[Credential, NoContent]:
        """
        Run one request against the configured CredHub target.

        Raises:
            NoTargetError: If no API URL is configured
            CredHubError: Any failure from the repository, unchanged
        """
        if not self.config.api_url:
            raise NoTargetError(
                "An API target is not set. Please target the location of your "
                "server with `credhub api URL` to continue."
            )

        logger.debug(f"[{self.config.environment}] {request.method} {identifier}")
        return self.repository.send_request(request, identifier)
