"""
CredHub - Credential Management Client

Client library and CLI for storing, retrieving and deleting typed credentials
on a CredHub server over its authenticated HTTP API.

Modules:
- credentials: Credential types and the wire codec
- auth: Authenticators (UAA bearer tokens, recording test double)
- client: Request builders, transport and response classification
- repositories: Request orchestration
- actions: Command-level entry point bound to configuration
"""

__version__ = "0.1.0"
__author__ = "CredHub CLI Development Team"

from credhub.errors import (
    CredHubError,
    NetworkError,
    UnauthorizedError,
    ServerError,
    DecodeError,
    MalformedResponseError,
    NoTargetError,
    ConfigError,
)
from credhub.config import CredHubConfig
from credhub.credentials import (
    CredentialType,
    Credential,
    User,
    Certificate,
    RSA,
    SSH,
    NO_CONTENT,
)
from credhub.auth import Authenticator, UaaAuthenticator, DummyAuth, make_response
from credhub.client import Transport
from credhub.repositories import CredentialRepository
from credhub.actions import Action
from credhub.api import CredHub

__all__ = [
    # Version
    "__version__",
    # Errors
    "CredHubError",
    "NetworkError",
    "UnauthorizedError",
    "ServerError",
    "DecodeError",
    "MalformedResponseError",
    "NoTargetError",
    "ConfigError",
    # Config
    "CredHubConfig",
    # Credentials
    "CredentialType",
    "Credential",
    "User",
    "Certificate",
    "RSA",
    "SSH",
    "NO_CONTENT",
    # Auth
    "Authenticator",
    "UaaAuthenticator",
    "DummyAuth",
    "make_response",
    # Transport stack
    "Transport",
    "CredentialRepository",
    "Action",
    "CredHub",
]
