"""
Recording authenticator for tests.

``DummyAuth`` stands in for both the authenticator and the network: it is a
``requests`` transport adapter that records every outgoing request and
answers with canned responses or a canned error. No real credential exchange
or network traffic takes place.
"""
import json
from typing import Any, List, Optional, Sequence, Union

import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict


def make_response(
    status_code: int = 200,
    body: Union[str, bytes, dict, None] = "",
    headers: Optional[dict] = None,
) -> requests.Response:
    """
    Build a canned response.

    Args:
        status_code: HTTP status code
        body: Raw body text/bytes, or a dict serialized as JSON
        headers: Response headers

    Returns:
        A fully-read ``requests.Response``
    """
    if isinstance(body, dict):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode('utf-8')

    response = requests.Response()
    response.status_code = status_code
    response._content = body or b""
    response._content_consumed = True
    response.encoding = 'utf-8'
    response.headers = CaseInsensitiveDict(headers or {})
    return response


class DummyAuth(BaseAdapter):
    """
    Deterministic authenticator double.

    Responses are served in order; once exhausted the last one repeats.

    Example:
        >>> dummy = DummyAuth(response=make_response(200, body))
        >>> ch = CredHub("https://example.com", auth=dummy)
        >>> ch.get_by_name("/example-password")
        >>> dummy.request.method
        'GET'
    """

    def __init__(
        self,
        response: Optional[requests.Response] = None,
        responses: Optional[Sequence[requests.Response]] = None,
        error: Optional[Exception] = None,
        refresh_result: bool = True,
    ):
        super().__init__()
        if responses is None:
            responses = [response if response is not None else make_response()]
        self.responses: List[requests.Response] = list(responses)
        self.error = error
        self.refresh_result = refresh_result

        self.request: Optional[requests.PreparedRequest] = None
        self.requests: List[requests.PreparedRequest] = []
        self.authorize_count = 0
        self.refresh_count = 0

    def authorize(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        self.authorize_count += 1
        return request

    def refresh(self) -> bool:
        self.refresh_count += 1
        return self.refresh_result

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        self.request = request
        self.requests.append(request)

        if self.error is not None:
            raise self.error

        index = min(len(self.requests), len(self.responses)) - 1
        response = self.responses[index]
        response.request = request
        response.url = request.url
        return response

    def close(self) -> None:
        pass
