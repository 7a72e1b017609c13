"""Twilio REST API client.

Requests are built against ``{base_url}/{AccountSid}{/Resource}.json`` and
authenticated with HTTP Basic Auth. GET parameters are sent in the query
string and POST parameters as a form-encoded body. Responses are returned
as-is: ``get`` and ``post`` do not look at the status code, callers that
want the error resource decoded use the ``fetch_*`` helpers.
"""

from __future__ import annotations

import functools
import logging
import platform
from types import TracebackType
from typing import TYPE_CHECKING, Final, TypeVar

import requests
from requests.auth import HTTPBasicAuth

from houston.constants import PRODUCT, REPO_URL, TWILIO_API_BASE, VERSION
from houston.twilio.errors import ConfigurationError, RequestError, TwilioAPIError
from houston.twilio.models import Account, Address, TwilioResource
from houston.twilio.transport import HTTPClient, PooledHTTPClient
from houston.twilio.utils import Params, encode_values, format_resource, format_values

if TYPE_CHECKING:
    from houston.settings.user import UserSettings

logger: Final = logging.getLogger(__name__)

FORM_CONTENT_TYPE: Final = "application/x-www-form-urlencoded"

R = TypeVar("R", bound=TwilioResource)


@functools.cache
def user_agent() -> str:
    """Return the User-Agent sent with every request.

    Computed once per process from the package version and runtime platform.
    """
    return (
        f"{PRODUCT}/{VERSION} ({REPO_URL}) python-requests/{requests.__version__} "
        f"({platform.python_implementation()} {platform.python_version()}; "
        f"{platform.system().lower()} {platform.machine()})"
    )


def build_request(
    client: TwilioClient | None,
    method: str,
    resource: str = "",
    params: Params | None = None,
) -> requests.PreparedRequest:
    """Build an authenticated request for a resource under the account.

    Args:
        client: Client providing the base URL and credentials
        method: "GET" or "POST"
        resource: Resource path relative to the account root
        params: Query parameters (GET) or form fields (POST)

    Returns:
        Prepared request ready to be sent by a transport

    Raises:
        RequestError: If the client is None or the method is not supported
    """
    if client is None:
        raise RequestError("client cannot be None")

    method = method.upper()
    url = f"{client.base_url}/{client.sid}{format_resource(resource)}.json"
    headers = {"User-Agent": user_agent()}

    if method == "GET":
        req = requests.Request(method, url + format_values(params), headers=headers)
    elif method == "POST":
        headers["Content-Type"] = FORM_CONTENT_TYPE
        req = requests.Request(method, url, headers=headers, data=encode_values(params))
    else:
        raise RequestError(f"unsupported method {method!r}; expected GET or POST")

    req.auth = HTTPBasicAuth(client.sid, client.secret)
    return req.prepare()


class TwilioClient:
    """Client for the Twilio REST API.

    The sid and secret are either the account's master credentials
    (AccountSid and AuthToken) or a generated API key (API Key SID and
    API Key Secret).

    The client keeps no mutable state besides the transport, so one
    instance can be shared between threads as long as the transport can.

    Examples:
        client = TwilioClient("ACxxxxxxxx", "token")
        resp = client.get("Calls", {"Status": "completed"})
        account = client.fetch_account()
    """

    def __init__(
        self,
        sid: str,
        secret: str,
        http_client: HTTPClient | None = None,
        base_url: str = TWILIO_API_BASE,
    ) -> None:
        """Initialize the client.

        Args:
            sid: Account SID or API key SID
            secret: Auth token or API key secret
            http_client: Transport used to send requests (pooled session by default)
            base_url: API root that account resources are appended to

        Raises:
            ConfigurationError: If sid or secret is empty
        """
        if not sid:
            raise ConfigurationError("sid cannot be zero length")

        if not secret:
            raise ConfigurationError("secret cannot be zero length")

        self._sid = sid
        self._secret = secret
        self._base_url = base_url
        self.http_client: HTTPClient = http_client or PooledHTTPClient()

    @classmethod
    def from_settings(
        cls, settings: UserSettings, http_client: HTTPClient | None = None
    ) -> TwilioClient:
        """Create a client from loaded user settings."""
        return cls(
            settings.account_sid,
            settings.auth_token,
            http_client=http_client
            or PooledHTTPClient(timeout=settings.timeout, pool_maxsize=settings.pool_maxsize),
            base_url=settings.base_url,
        )

    @property
    def sid(self) -> str:
        return self._sid

    @property
    def secret(self) -> str:
        return self._secret

    @property
    def base_url(self) -> str:
        return self._base_url

    def __repr__(self) -> str:
        return f"{type(self).__name__}(sid={self._sid!r}, base_url={self._base_url!r})"

    def get(self, resource: str = "", params: Params | None = None) -> requests.Response:
        """Send a GET request for a resource.

        Transport errors are raised unchanged and the status code is not
        checked.

        Args:
            resource: Resource path relative to the account root
            params: Query string parameters

        Returns:
            The raw HTTP response
        """
        return self._send(build_request(self, "GET", resource, params))

    def post(self, resource: str = "", form_data: Params | None = None) -> requests.Response:
        """Send a POST request with a form-encoded body.

        Transport errors are raised unchanged and the status code is not
        checked.

        Args:
            resource: Resource path relative to the account root
            form_data: Form fields for the request body

        Returns:
            The raw HTTP response
        """
        return self._send(build_request(self, "POST", resource, form_data))

    def fetch_account(self) -> Account:
        """Retrieve the account this client authenticates as.

        Raises:
            TwilioAPIError: If the API answers with an error status
        """
        return self._decode(self.get(), Account)

    def fetch_address(self, address_sid: str) -> Address:
        """Retrieve a single address owned by the account.

        Args:
            address_sid: SID of the address (AD...)

        Raises:
            TwilioAPIError: If the API answers with an error status
        """
        return self._decode(self.get(f"Addresses/{address_sid}"), Address)

    def close(self) -> None:
        """Release the transport's connections, if it holds any."""
        close = getattr(self.http_client, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> TwilioClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # Private helper methods
    def _send(self, req: requests.PreparedRequest) -> requests.Response:
        logger.debug("Twilio request: %s %s", req.method, req.url)
        resp = self.http_client.send(req)
        logger.debug("Twilio response: %s %s -> %s", req.method, req.url, resp.status_code)
        return resp

    def _decode(self, resp: requests.Response, model: type[R]) -> R:
        if not resp.ok:
            err = TwilioAPIError.from_response(resp)
            logger.error("Twilio API error: %s - %s (code %s)", err.status, err.message, err.code)
            raise err

        return model.model_validate(resp.json())
