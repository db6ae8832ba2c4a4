"""
CredHub Errors

Exception taxonomy shared by every layer of the client. Transport failures,
authorization failures, domain failures reported by the server and protocol
violations each have their own type so callers can tell them apart.
"""
from typing import Optional


class CredHubError(Exception):
    """Base exception for CredHub client errors."""
    pass


class NetworkError(CredHubError):
    """Raised when the server cannot be reached (refused, timeout, TLS)."""
    pass


class UnauthorizedError(CredHubError):
    """Raised when the server rejects authorization even after a refresh."""
    pass


class ServerError(CredHubError):
    """Raised when the server rejects a request with an error message."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class DecodeError(CredHubError):
    """Raised when a payload does not match any known credential shape."""
    pass


class MalformedResponseError(DecodeError):
    """Raised when a response body is not a decodable JSON document."""
    pass


class NoTargetError(CredHubError):
    """Raised when no CredHub API URL has been configured."""
    pass


class ConfigError(CredHubError):
    """Raised when the configuration file cannot be read or parsed."""
    pass
