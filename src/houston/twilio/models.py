"""Typed models for Twilio REST resources.

Only the resources used by the client are modelled for now; add more as needed.
"""

from __future__ import annotations

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    field_validator,
    model_serializer,
)

from houston.twilio.types import ZERO_TIME, TwilioTime


class TwilioResource(BaseModel):
    """Base for resource records; unknown fields are kept, not rejected."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class APIException(TwilioResource):
    """Error resource returned by the API when a request fails."""

    status: int = Field(0, alias="Status")
    message: str = ""
    code: int = 0
    more_info: str = ""

    @field_validator("status", "code", mode="before")
    @classmethod
    def _null_number(cls, v: Any) -> Any:
        return 0 if v is None else v

    @field_validator("message", "more_info", mode="before")
    @classmethod
    def _null_text(cls, v: Any) -> Any:
        return "" if v is None else v


class Account(TwilioResource):
    """A single Twilio account."""

    # 34 character string that uniquely identifies this account
    sid: str
    date_created: TwilioTime = ZERO_TIME
    date_updated: TwilioTime = ZERO_TIME
    # up to 64 characters; defaults to the owner's email address
    friendly_name: str = ""
    # Trial or Full
    type: str = ""
    # active, suspended or closed
    status: str = ""
    auth_token: str = ""
    # relative to https://api.twilio.com
    uri: str = ""
    subresource_uris: dict[str, str] = Field(default_factory=dict)
    owner_account_sid: str = ""

    @model_serializer(mode="wrap")
    def _omit_empty_token(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        if not self.auth_token:
            data.pop("auth_token", None)
        return data

    @property
    def is_active(self) -> bool:
        """Check if the account is active.

        Returns:
            True when the status is "active"
        """
        return self.status == "active"


class Address(TwilioResource):
    """A customer's physical location within a country."""

    sid: str
    account_sid: str = ""
    friendly_name: str = ""
    customer_name: str = ""
    street: str = ""
    city: str = ""
    region: str = ""
    postal_code: str = ""
    # ISO country code
    iso_country: str = ""
    uri: str = ""
    emergency_enabled: bool = False
    # true once the address passed local regulatory validation
    validated: bool = False
