"""
Authentication strategies for the CredHub client.
"""

from credhub.auth.base import Authenticator
from credhub.auth.uaa import UaaAuthenticator
from credhub.auth.dummy import DummyAuth, make_response

__all__ = [
    "Authenticator",
    "UaaAuthenticator",
    "DummyAuth",
    "make_response",
]
