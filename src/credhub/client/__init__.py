"""
HTTP layer: request builders, transport and response classification.
"""

from credhub.client.classifier import classify, network_error
from credhub.client.request_builders import (
    build_set_request,
    build_get_request,
    build_delete_request,
)
from credhub.client.transport import Transport

__all__ = [
    "classify",
    "network_error",
    "build_set_request",
    "build_get_request",
    "build_delete_request",
    "Transport",
]
