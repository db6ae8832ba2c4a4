"""
Request builders for the CredHub data API.
"""
from typing import Any, Union

import requests

from credhub.config import CredHubConfig
from credhub.credentials.codec import encode
from credhub.credentials.values import CredentialType

DATA_PATH = "/api/v1/data"


def _data_url(config: CredHubConfig) -> str:
    return f"{config.api_url.rstrip('/')}{DATA_PATH}"


def build_set_request(
    config: CredHubConfig,
    name: str,
    credential_type: Union[CredentialType, str],
    value: Any,
    overwrite: bool,
) -> requests.Request:
    """PUT /api/v1/data with the encoded credential."""
    return requests.Request(
        'PUT',
        _data_url(config),
        data=encode(name, credential_type, value, overwrite),
    )


def build_get_request(config: CredHubConfig, name: str) -> requests.Request:
    """GET /api/v1/data?name=<name>"""
    return requests.Request('GET', _data_url(config), params={'name': name})


def build_delete_request(config: CredHubConfig, name: str) -> requests.Request:
    """DELETE /api/v1/data?name=<name>"""
    return requests.Request('DELETE', _data_url(config), params={'name': name})
