"""Exception classes for Twilio client interactions.

This module defines a hierarchy of exception classes for the failure modes
of the client: bad construction arguments, request building, timestamp
encoding/decoding, and error resources returned by the Twilio API.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    import requests

    from houston.twilio.models import APIException


class TwilioError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(TwilioError, ValueError):
    """Raised when a client is constructed with invalid credentials."""


class RequestError(TwilioError):
    """Raised when an outbound request cannot be built."""


class TimeEncodeError(TwilioError, ValueError):
    """Raised when a timestamp cannot be represented in Twilio's format."""


class TimeDecodeError(TwilioError, ValueError):
    """Raised when a timestamp string does not match Twilio's format."""

    def __init__(
        self, message: str, original_error: Optional[Exception] = None
    ) -> None:
        """Initialize with parsing error details.

        Args:
            message: Description of the parsing error
            original_error: The original exception that was caught
        """
        super().__init__(message)
        self.original_error = original_error


class TwilioAPIError(TwilioError):
    """Error resource returned by the Twilio API.

    The plain ``get``/``post`` calls never raise this; it is produced by the
    higher level fetch helpers after they decode an error response body.
    """

    def __init__(
        self,
        status: int,
        message: str,
        code: int = 0,
        more_info: str = "",
    ) -> None:
        """Initialize the exception.

        Args:
            status: HTTP status code
            message: Human-readable error message
            code: Twilio application error code
            more_info: URL with more information about the error
        """
        super().__init__(f"[{status}] {message}")
        self.status: int = status
        self.message: str = message
        self.code: int = code
        self.more_info: str = more_info

    @property
    def is_client_error(self) -> bool:
        """Check if this is a client-side error (4xx).

        Returns:
            True for 400-499 status codes
        """
        return 400 <= self.status < 500

    @property
    def is_server_error(self) -> bool:
        """Check if this is a server-side error (5xx).

        Returns:
            True for 500-599 status codes
        """
        return self.status >= 500

    @classmethod
    def from_exception(cls, exc: APIException) -> TwilioAPIError:
        """Create an error from a decoded Twilio exception resource."""
        return cls(exc.status, exc.message, exc.code, exc.more_info)

    @classmethod
    def from_response(cls, response: requests.Response) -> TwilioAPIError:
        """Create an error from a raw HTTP response.

        Bodies that are not a Twilio exception resource fall back to the
        response text as the message.

        Args:
            response: Non-2xx response returned by the transport

        Returns:
            TwilioAPIError describing the failure
        """
        from houston.twilio.models import APIException

        try:
            payload: Any = response.json()
            exc = APIException.model_validate(payload)
        except ValueError:  # not JSON, or not an exception resource
            return cls(response.status_code, response.text or "Unknown error")

        # the body may omit the status, the response never does
        if not exc.status:
            exc.status = response.status_code
        return cls.from_exception(exc)
