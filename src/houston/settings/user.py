"""User-configurable settings loaded from config.yaml or the environment."""

from __future__ import annotations

import os
import re
import urllib.parse
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from houston.constants import DEFAULT_POOL_MAXSIZE, DEFAULT_TIMEOUT, TWILIO_API_BASE

# Load environment variables from .env file(s)
load_dotenv()


def _interpolate_env(content: str) -> str:
    return re.sub(r"\$\{(\w+)\}", lambda m: os.getenv(m.group(1), ""), content)


class UserSettings(BaseModel):
    """Credentials and transport options for the Twilio client.

    Values usually come from config.yaml, where ``${VAR}`` placeholders are
    replaced from the environment so secrets can stay out of the file:

        account_sid: "${TWILIO_ACCOUNT_SID}"
        auth_token: "${TWILIO_AUTH_TOKEN}"
        timeout: 5
    """

    # Credentials
    account_sid: str = Field(..., min_length=1, description="Account SID or API key SID")
    auth_token: str = Field(..., min_length=1, description="Auth token or API key secret")

    # Transport settings
    base_url: str = Field(TWILIO_API_BASE, description="API root that account resources are appended to")
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0, description="Request timeout (seconds)")
    pool_maxsize: int = Field(
        DEFAULT_POOL_MAXSIZE, ge=1, description="Connections kept alive per host"
    )

    # ---- validators ----
    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require an absolute URL and drop any trailing separator."""
        parsed = urllib.parse.urlparse(v)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError(f"Invalid URL: {v}")
        return v.rstrip("/")

    @classmethod
    def from_env(cls) -> UserSettings:
        """Build settings from TWILIO_* environment variables.

        Returns:
            Validated UserSettings object

        Raises:
            RuntimeError: If the variables are missing or invalid
        """
        data: dict[str, str] = {
            "account_sid": os.getenv("TWILIO_ACCOUNT_SID", ""),
            "auth_token": os.getenv("TWILIO_AUTH_TOKEN", ""),
        }
        if base_url := os.getenv("TWILIO_API_BASE"):
            data["base_url"] = base_url

        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise RuntimeError(f"Invalid environment configuration:\n{err}") from err

    @classmethod
    def load(cls, path: Path | None = None) -> UserSettings:
        """Load configuration from a YAML file.

        ``path`` falls back to the HOUSTON_CONFIG environment variable.

        Raises:
            FileNotFoundError: If neither is given or the file does not exist
            RuntimeError: If the config file cannot be parsed or is invalid
        """
        if path is None:
            env_path = os.environ.get("HOUSTON_CONFIG")
            if not env_path:
                raise FileNotFoundError("No configuration file given; pass a path or set HOUSTON_CONFIG.")
            path = Path(env_path)

        try:
            data = yaml.safe_load(_interpolate_env(path.read_text()))
        except FileNotFoundError:
            raise
        except (OSError, yaml.YAMLError) as exc:
            raise RuntimeError(f"Unable to read config YAML: {exc}") from exc

        try:
            return cls.model_validate(data)
        except ValidationError as err:
            raise RuntimeError(f"Invalid configuration:\n{err}") from err
