"""
Credential Values

Typed representations of the credentials stored by CredHub. Each credential
type has exactly one value shape; the pairing is fixed by the codec.
"""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Optional


class CredentialType(str, Enum):
    """Credential type discriminator as it appears on the wire."""
    PASSWORD = "password"
    VALUE = "value"
    JSON = "json"
    USER = "user"
    CERTIFICATE = "certificate"
    RSA = "rsa"
    SSH = "ssh"


@dataclass(frozen=True)
class User:
    """Username/password pair."""
    username: str
    password: str
    password_hash: Optional[str] = None  # Server-assigned, never sent


@dataclass(frozen=True)
class Certificate:
    """Certificate bundle. Any of the parts may be absent."""
    ca: Optional[str] = None
    certificate: Optional[str] = None
    private_key: Optional[str] = None


@dataclass(frozen=True)
class RSA:
    """RSA key pair (PEM encoded)."""
    public_key: Optional[str] = None
    private_key: Optional[str] = None


@dataclass(frozen=True)
class SSH:
    """SSH key pair."""
    public_key: Optional[str] = None
    private_key: Optional[str] = None
    public_key_fingerprint: Optional[str] = None  # Server-assigned, never sent


@dataclass(frozen=True)
class Credential:
    """A named, typed credential as returned by the server."""
    name: str
    type: CredentialType
    value: Any  # str for password/value, dict for json, dataclass otherwise
    id: Optional[str] = None
    version_created_at: Optional[datetime] = None


class NoContent:
    """Result of decoding an empty response body."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_CONTENT"

    def __bool__(self) -> bool:
        return False


NO_CONTENT = NoContent()
