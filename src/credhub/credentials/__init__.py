"""
Credential types and wire codec.
"""

from credhub.credentials.values import (
    CredentialType,
    Credential,
    User,
    Certificate,
    RSA,
    SSH,
    NoContent,
    NO_CONTENT,
)
from credhub.credentials.codec import encode, decode, decode_error

__all__ = [
    "CredentialType",
    "Credential",
    "User",
    "Certificate",
    "RSA",
    "SSH",
    "NoContent",
    "NO_CONTENT",
    "encode",
    "decode",
    "decode_error",
]
