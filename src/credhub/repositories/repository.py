"""
Credential Repository

Runs one request against the CredHub data API: send it through the
transport, classify the outcome and decode the body. Credential content is
interpreted only by the codec.
"""
import logging
from typing import Union

import requests

from credhub.client.classifier import classify
from credhub.client.transport import Transport
from credhub.credentials.codec import decode
from credhub.credentials.values import Credential, NoContent

logger = logging.getLogger(__name__)


class CredentialRepository:
    """Orchestrates transport, classification and decoding for one request."""

    def __init__(self, transport: Transport):
        self.transport = transport

    def send_request(
        self,
        request: requests.Request,
        identifier: str,
    ) -> Union[Credential, NoContent]:
        """
        Execute ``request`` for the credential named ``identifier``.

        Returns:
            The decoded credential, or NO_CONTENT for an empty body

        Raises:
            CredHubError: The first failure from any layer, unchanged
        """
        logger.debug(f"Sending {request.method} for {identifier}")
        response = self.transport.execute(request)
        return decode(classify(response))
