"""
Authenticator interface.

An authenticator attaches authorization material to outgoing requests and
can re-acquire that material when the server reports it as expired.
"""
from typing import Protocol, runtime_checkable

import requests


@runtime_checkable
class Authenticator(Protocol):
    """Capability set the transport needs from an authentication strategy."""

    def authorize(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        """Attach authorization material to ``request`` and return it."""
        ...

    def refresh(self) -> bool:
        """Re-acquire authorization material. Returns True on success."""
        ...
