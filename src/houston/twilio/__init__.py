"""Twilio package - holds the API client, resource models, and custom errors."""

from .api import TwilioClient, build_request, user_agent
from .errors import (
    ConfigurationError,
    RequestError,
    TimeDecodeError,
    TimeEncodeError,
    TwilioAPIError,
    TwilioError,
)
from .models import Account, Address, APIException
from .transport import HTTPClient, MockHTTPClient, PooledHTTPClient
from .types import TwilioTime, marshal_time, unmarshal_time

# Define what gets imported with: from houston.twilio import *
__all__ = [
    "APIException",
    "Account",
    "Address",
    "ConfigurationError",
    "HTTPClient",
    "MockHTTPClient",
    "PooledHTTPClient",
    "RequestError",
    "TimeDecodeError",
    "TimeEncodeError",
    "TwilioAPIError",
    "TwilioClient",
    "TwilioError",
    "TwilioTime",
    "build_request",
    "marshal_time",
    "unmarshal_time",
    "user_agent",
]
