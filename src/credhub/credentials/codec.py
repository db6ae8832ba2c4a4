"""
Credential Codec

Converts typed credential values to and from the CredHub wire format.

Every credential type has exactly one entry in ``_CODECS`` holding the pair of
functions that build and interpret its ``value`` payload. Encoding and
decoding both dispatch through that table, so adding a credential type means
adding one enum member and one table entry.
"""
import json
import logging
import re
from datetime import datetime
from typing import Any, Callable, Dict, NamedTuple, Optional, Union

from credhub.credentials.values import (
    NO_CONTENT,
    RSA,
    SSH,
    Certificate,
    Credential,
    CredentialType,
    NoContent,
    User,
)
from credhub.errors import DecodeError, MalformedResponseError

logger = logging.getLogger(__name__)


class _ValueCodec(NamedTuple):
    encode: Callable[[Any], Any]
    decode: Callable[[Any], Any]


def _compact(fields: Dict[str, Optional[str]]) -> Dict[str, str]:
    """Drop absent sub-fields; they are omitted on the wire, never null."""
    return {key: value for key, value in fields.items() if value is not None}


def _expect(value: Any, expected: type, credential_type: CredentialType) -> Any:
    if not isinstance(value, expected):
        raise TypeError(
            f"{credential_type.value} credentials take a {expected.__name__} value, "
            f"got {type(value).__name__}"
        )
    return value


def _require_object(value: Any, context: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise DecodeError(f"{context} value must be a JSON object")
    return value


def _required_str(document: Dict[str, Any], key: str, context: str) -> str:
    value = document.get(key)
    if value is None:
        raise DecodeError(f"{context} is missing required field '{key}'")
    if not isinstance(value, str):
        raise DecodeError(f"{context} field '{key}' must be a string")
    return value


def _optional_str(document: Dict[str, Any], key: str, context: str) -> Optional[str]:
    value = document.get(key)
    if value is not None and not isinstance(value, str):
        raise DecodeError(f"{context} field '{key}' must be a string")
    return value


# Per-type value encoders

def _encode_string(credential_type: CredentialType) -> Callable[[Any], Any]:
    return lambda value: _expect(value, str, credential_type)


def _encode_json(value: Any) -> Dict[str, Any]:
    return _expect(value, dict, CredentialType.JSON)


def _encode_user(value: Any) -> Dict[str, str]:
    user = _expect(value, User, CredentialType.USER)
    return _compact({"username": user.username, "password": user.password})


def _encode_certificate(value: Any) -> Dict[str, str]:
    cert = _expect(value, Certificate, CredentialType.CERTIFICATE)
    return _compact({
        "ca": cert.ca,
        "certificate": cert.certificate,
        "private_key": cert.private_key,
    })


def _encode_rsa(value: Any) -> Dict[str, str]:
    key_pair = _expect(value, RSA, CredentialType.RSA)
    return _compact({"public_key": key_pair.public_key, "private_key": key_pair.private_key})


def _encode_ssh(value: Any) -> Dict[str, str]:
    key_pair = _expect(value, SSH, CredentialType.SSH)
    return _compact({"public_key": key_pair.public_key, "private_key": key_pair.private_key})


# Per-type value decoders

def _decode_string(credential_type: CredentialType) -> Callable[[Any], str]:
    def decode(value: Any) -> str:
        if not isinstance(value, str):
            raise DecodeError(f"{credential_type.value} value must be a string")
        return value
    return decode


def _decode_json(value: Any) -> Dict[str, Any]:
    return _require_object(value, "json")


def _decode_user(value: Any) -> User:
    fields = _require_object(value, "user")
    return User(
        username=_required_str(fields, "username", "user"),
        password=_required_str(fields, "password", "user"),
        password_hash=_optional_str(fields, "password_hash", "user"),
    )


def _decode_certificate(value: Any) -> Certificate:
    fields = _require_object(value, "certificate")
    return Certificate(
        ca=_optional_str(fields, "ca", "certificate"),
        certificate=_optional_str(fields, "certificate", "certificate"),
        private_key=_optional_str(fields, "private_key", "certificate"),
    )


def _decode_rsa(value: Any) -> RSA:
    fields = _require_object(value, "rsa")
    return RSA(
        public_key=_optional_str(fields, "public_key", "rsa"),
        private_key=_optional_str(fields, "private_key", "rsa"),
    )


def _decode_ssh(value: Any) -> SSH:
    fields = _require_object(value, "ssh")
    return SSH(
        public_key=_optional_str(fields, "public_key", "ssh"),
        private_key=_optional_str(fields, "private_key", "ssh"),
        public_key_fingerprint=_optional_str(fields, "public_key_fingerprint", "ssh"),
    )


_CODECS: Dict[CredentialType, _ValueCodec] = {
    CredentialType.PASSWORD: _ValueCodec(
        _encode_string(CredentialType.PASSWORD), _decode_string(CredentialType.PASSWORD)
    ),
    CredentialType.VALUE: _ValueCodec(
        _encode_string(CredentialType.VALUE), _decode_string(CredentialType.VALUE)
    ),
    CredentialType.JSON: _ValueCodec(_encode_json, _decode_json),
    CredentialType.USER: _ValueCodec(_encode_user, _decode_user),
    CredentialType.CERTIFICATE: _ValueCodec(_encode_certificate, _decode_certificate),
    CredentialType.RSA: _ValueCodec(_encode_rsa, _decode_rsa),
    CredentialType.SSH: _ValueCodec(_encode_ssh, _decode_ssh),
}


def _load_document(payload: Union[bytes, str]) -> Any:
    try:
        return json.loads(payload)
    except ValueError as e:
        raise MalformedResponseError(f"Response body is not valid JSON: {e}") from e


_FRACTION = re.compile(r"\.(\d+)(?=[+-]\d{2}:\d{2}$|$)")


def _parse_timestamp(value: Any) -> Optional[datetime]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise DecodeError("version_created_at must be an RFC 3339 string")
    # fromisoformat before 3.11 accepts only 3 or 6 fractional digits
    normalized = _FRACTION.sub(
        lambda m: "." + m.group(1)[:6].ljust(6, "0"), value.replace("Z", "+00:00"), count=1
    )
    try:
        return datetime.fromisoformat(normalized)
    except ValueError as e:
        raise DecodeError(f"Invalid version_created_at timestamp: {value}") from e


def encode(
    name: str,
    credential_type: Union[CredentialType, str],
    value: Any,
    overwrite: bool,
) -> bytes:
    """
    Build the request payload for storing a credential.

    Args:
        name: Credential name (e.g., "/example-password")
        credential_type: Credential type tag
        value: Value matching the credential type
        overwrite: Replace an existing credential at ``name``

    Returns:
        Compact JSON request body

    Raises:
        TypeError: If ``value`` does not have the shape ``credential_type`` requires
        ValueError: If ``credential_type`` is not a known type
    """
    credential_type = CredentialType(credential_type)
    body = {
        "name": name,
        "type": credential_type.value,
        "value": _CODECS[credential_type].encode(value),
        "overwrite": overwrite,
    }
    return json.dumps(body, separators=(",", ":")).encode("utf-8")


def decode(payload: Union[bytes, str]) -> Union[Credential, NoContent]:
    """
    Decode a credential from a response body.

    An empty body decodes to ``NO_CONTENT``. Unknown fields are ignored.

    Raises:
        MalformedResponseError: If the body is not a JSON object
        DecodeError: If the type tag is missing or unknown, or a required field is absent
    """
    if not payload:
        return NO_CONTENT

    document = _load_document(payload)
    if not isinstance(document, dict):
        raise MalformedResponseError("Response body is not a JSON object")

    type_name = document.get("type")
    if type_name is None:
        raise DecodeError("Credential is missing its 'type' field")
    if not isinstance(type_name, str):
        raise DecodeError("Credential 'type' field must be a string")
    try:
        credential_type = CredentialType(type_name)
    except ValueError:
        raise DecodeError(f"Unknown credential type: {type_name}")

    if "value" not in document:
        raise DecodeError(f"{type_name} credential is missing required field 'value'")

    credential = Credential(
        name=_required_str(document, "name", "credential"),
        type=credential_type,
        value=_CODECS[credential_type].decode(document["value"]),
        id=_optional_str(document, "id", "credential"),
        version_created_at=_parse_timestamp(document.get("version_created_at")),
    )
    logger.debug(f"Decoded {credential_type.value} credential {credential.name}")
    return credential


def decode_error(payload: Union[bytes, str]) -> str:
    """
    Decode the server error envelope ``{"error": "<message>"}``.

    Raises:
        MalformedResponseError: If the body is not an error envelope
    """
    document = _load_document(payload)
    if not isinstance(document, dict) or not isinstance(document.get("error"), str):
        raise MalformedResponseError("Response body is not an error envelope")
    return document["error"]
