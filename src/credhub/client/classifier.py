"""
Response classification.

Turns the outcome of one HTTP exchange into either a response body to decode
or one of the typed ``credhub.errors`` failures.
"""
import logging
from http import HTTPStatus

import requests

from credhub.credentials.codec import decode_error
from credhub.errors import (
    MalformedResponseError,
    NetworkError,
    ServerError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)


def is_unauthorized(response: requests.Response) -> bool:
    return response.status_code == HTTPStatus.UNAUTHORIZED


def network_error(error: requests.exceptions.RequestException) -> NetworkError:
    """Classify a transport-level failure."""
    if isinstance(error, requests.exceptions.Timeout):
        reason = "request timed out"
    elif isinstance(error, requests.exceptions.SSLError):
        reason = "TLS handshake failed"
    elif isinstance(error, requests.exceptions.ConnectionError):
        reason = "connection failed"
    else:
        reason = "request failed"
    return NetworkError(f"Network error: {reason}: {error}")


def classify(response: requests.Response) -> bytes:
    """
    Classify a completed HTTP response.

    Args:
        response: Response received from the server

    Returns:
        The response body, for 2xx statuses

    Raises:
        UnauthorizedError: On 401
        ServerError: On any other non-2xx status with an error envelope
        MalformedResponseError: On a non-2xx status whose body is not an error envelope
    """
    status = response.status_code or 0

    if 200 <= status <= 299:
        return response.content

    if is_unauthorized(response):
        raise UnauthorizedError("You are not authorized to perform this action. Please log in.")

    try:
        message = decode_error(response.content)
    except MalformedResponseError as e:
        logger.error(f"Server returned status {status} with an unreadable body")
        raise MalformedResponseError(
            f"Server returned status {status} with an unreadable error body"
        ) from e

    logger.debug(f"Server rejected request with status {status}: {message}")
    raise ServerError(message, status_code=status)
