# src/houston/twilio/transport.py
"""HTTP transports used by the Twilio client.

The client only needs something that can send a prepared request and hand
back a response. ``requests.Session`` satisfies that, which keeps pooling,
TLS and timeouts out of the client and lets tests swap in a double.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any, Protocol, runtime_checkable

import requests
from requests.adapters import HTTPAdapter

from houston.constants import DEFAULT_POOL_MAXSIZE, DEFAULT_TIMEOUT


@runtime_checkable
class HTTPClient(Protocol):
    """Protocol for the capability that dispatches prepared requests.

    Any exception raised by an implementation is propagated to the caller
    of the Twilio client unchanged.
    """

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        """Send a request and return the response.

        Args:
            request: Fully built request
            **kwargs: Transport specific options (e.g. timeout)

        Returns:
            The HTTP response, whatever its status code
        """
        ...


class PooledHTTPClient:
    """``requests.Session`` backed transport with a connection pool.

    Connections are kept alive and reused across requests, so a single
    instance should be shared by everything talking to the same host.
    """

    def __init__(
        self,
        timeout: float | None = DEFAULT_TIMEOUT,
        pool_maxsize: int = DEFAULT_POOL_MAXSIZE,
    ) -> None:
        """Initialize the session and mount pooled adapters.

        Args:
            timeout: Default timeout in seconds, None to wait forever
            pool_maxsize: Maximum number of connections kept per host
        """
        self.timeout = timeout
        self.session = requests.Session()

        adapter = HTTPAdapter(pool_connections=pool_maxsize, pool_maxsize=pool_maxsize)
        self.session.mount("https://", adapter)
        self.session.mount("http://", adapter)

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        """Send the request through the pooled session."""
        kwargs.setdefault("timeout", self.timeout)
        return self.session.send(request, **kwargs)

    def close(self) -> None:
        """Close pooled connections."""
        self.session.close()


def make_response(
    status_code: int = 200,
    body: str | bytes | dict[str, Any] | list[Any] = b"",
    headers: dict[str, str] | None = None,
) -> requests.Response:
    """Build a ``requests.Response`` without a network round trip.

    Args:
        status_code: HTTP status code
        body: Raw body, or a JSON-serializable object
        headers: Optional response headers

    Returns:
        Response with the given status and content
    """
    if isinstance(body, (dict, list)):
        body = json.dumps(body)
        headers = {"Content-Type": "application/json", **(headers or {})}
    if isinstance(body, str):
        body = body.encode("utf-8")

    resp = requests.Response()
    resp.status_code = status_code
    resp._content = body  # type: ignore[attr-defined]
    resp.encoding = "utf-8"
    resp.headers.update(headers or {})
    return resp


class MockHTTPClient:
    """Mock implementation of HTTPClient for testing.

    Responses (or exceptions) are returned in the order they were queued.
    When the queue is empty an empty 200 response is returned.
    """

    def __init__(self, responses: Iterable[requests.Response | Exception] | None = None):
        self.responses: list[requests.Response | Exception] = list(responses or [])
        self.sent: list[requests.PreparedRequest] = []

    def queue(self, response: requests.Response | Exception) -> None:
        """Queue a response or an exception for the next send."""
        self.responses.append(response)

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        """Record the request and return the next queued response."""
        self.sent.append(request)

        if not self.responses:
            resp = make_response()
        else:
            item = self.responses.pop(0)
            if isinstance(item, Exception):
                raise item
            resp = item

        resp.request = request
        resp.url = request.url or ""
        return resp

    def reset_call_history(self) -> None:
        """Reset the call history for testing."""
        self.sent = []


def create_mock_http_client(
    responses: Iterable[requests.Response | Exception] | None = None,
) -> MockHTTPClient:
    """Create and return a mock transport for testing."""
    return MockHTTPClient(responses)


def assert_request_sent(
    mock_client: MockHTTPClient,
    expected_method: str,
    expected_url: str,
    expected_body: str | None = None,
) -> bool:
    """Assert that the last request sent matches the expected values.

    Args:
        mock_client: The mock transport instance
        expected_method: The expected HTTP method
        expected_url: The expected full URL
        expected_body: Expected body (can be None to skip check)

    Returns:
        True if the assertion passes, raises AssertionError otherwise
    """
    assert len(mock_client.sent) > 0, "No request was sent"
    last = mock_client.sent[-1]
    assert last.method == expected_method, (
        f"Expected method {expected_method}, got {last.method}"
    )
    assert last.url == expected_url, f"Expected {expected_url}, got {last.url}"

    if expected_body is not None:
        body = last.body or ""
        if isinstance(body, bytes):
            body = body.decode("utf-8")
        assert body == expected_body, f"Expected body {expected_body!r}, got {body!r}"

    return True
