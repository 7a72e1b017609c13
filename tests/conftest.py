import base64
import json
import threading
from collections.abc import Generator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any
from urllib.parse import parse_qs, urlsplit

import pytest

from houston.twilio.api import TwilioClient
from houston.twilio.transport import MockHTTPClient

ACCOUNT_JSON: dict[str, Any] = {
    "sid": "ACaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa",
    "date_created": "Thu, 04 Aug 2016 18:32:52 +0000",
    "date_updated": "Wed, 18 Jan 2017 10:11:12 +0000",
    "friendly_name": "dev@example.com",
    "type": "Full",
    "status": "active",
    "auth_token": "",
    "uri": "/2010-04-01/Accounts/ACaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa.json",
    "subresource_uris": {
        "calls": "/2010-04-01/Accounts/ACaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa/Calls.json",
    },
    "owner_account_sid": "ACaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaaa",
}


@pytest.fixture
def account_json() -> dict[str, Any]:
    return json.loads(json.dumps(ACCOUNT_JSON))


@pytest.fixture
def mock_transport() -> MockHTTPClient:
    return MockHTTPClient()


@pytest.fixture
def client(mock_transport: MockHTTPClient) -> TwilioClient:
    return TwilioClient("x", "y", http_client=mock_transport, base_url="http://127.0.0.1:8080")


class _AccountHandler(BaseHTTPRequestHandler):
    """Answers like the account root and a test resource, requiring x:y auth."""

    expected_auth = "Basic " + base64.b64encode(b"x:y").decode("ascii")

    def _reply(self, status: int, body: str) -> None:
        data = body.encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Length", str(len(data)))
        self.end_headers()
        self.wfile.write(data)

    def do_GET(self) -> None:  # noqa: N802
        if self.headers.get("Authorization") != self.expected_auth:
            self._reply(401, "go away")
            return

        url = urlsplit(self.path)
        vals = parse_qs(url.query)

        if not vals and url.path == "/x.json":
            self._reply(200, "imok")
            return

        if len(vals) == 1 and url.path == "/x/q.json" and len(vals.get("testQuery", [])) == 1:
            self._reply(200, f"imok:{vals['testQuery'][0]}")
            return

        self._reply(400, "nook")

    def do_POST(self) -> None:  # noqa: N802
        if self.headers.get("Authorization") != self.expected_auth:
            self._reply(401, "go away")
            return

        length = int(self.headers.get("Content-Length", "0"))
        body = self.rfile.read(length).decode("utf-8")
        self._reply(201, f"{self.path}|{self.headers.get('Content-Type')}|{body}")

    def log_message(self, format: str, *args: Any) -> None:
        pass


@pytest.fixture
def http_server() -> Generator[str, None, None]:
    """Run a local HTTP server and yield its base URL."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), _AccountHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        host, port = server.server_address[:2]
        yield f"http://{host}:{port}"
    finally:
        server.shutdown()
        server.server_close()
