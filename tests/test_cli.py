from collections.abc import Generator
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest
import requests
from typer.testing import CliRunner

from houston.cli import app, parse_params
from houston.twilio import TwilioClient
from houston.twilio.transport import MockHTTPClient, make_response

CONFIG_YAML = """\
account_sid: "${TEST_HOUSTON_SID}"
auth_token: "secret"
base_url: "http://127.0.0.1:8080"
timeout: 5
"""

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("TEST_HOUSTON_SID", "ACcli")
    path = tmp_path / "config.yaml"
    path.write_text(CONFIG_YAML)
    return path


@pytest.fixture
def transport() -> Generator[MockHTTPClient, None, None]:
    """Route every client the CLI builds through a mock transport."""
    mock = MockHTTPClient()
    original = TwilioClient.from_settings.__func__  # type: ignore[attr-defined]

    def from_settings(cls: type[TwilioClient], settings: Any, http_client: Any = None) -> TwilioClient:
        return original(cls, settings, http_client=mock)

    with patch.object(TwilioClient, "from_settings", classmethod(from_settings)):
        yield mock


def test_parse_params() -> None:
    assert parse_params(["a=1", "b=2", "a=3", "c="]) == {"a": ["1", "3"], "b": ["2"], "c": [""]}
    assert parse_params(None) == {}


def test_account(config_file: Path, transport: MockHTTPClient, account_json: dict[str, Any]) -> None:
    transport.queue(make_response(200, account_json))

    result = runner.invoke(app, ["account", "--config", str(config_file)])

    assert result.exit_code == 0, result.output
    assert account_json["sid"] in result.output
    assert "Thu, 04 Aug 2016 18:32:52 +0000" in result.output
    assert transport.sent[-1].url == "http://127.0.0.1:8080/ACcli.json"


def test_account_null_date_reports_error(
    config_file: Path, transport: MockHTTPClient, account_json: dict[str, Any]
) -> None:
    account_json["date_updated"] = None
    transport.queue(make_response(200, account_json))

    result = runner.invoke(app, ["account", "--config", str(config_file)])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Cannot render account" in result.output
    assert "year 1 outside of range" in result.output


def test_account_api_error(config_file: Path, transport: MockHTTPClient) -> None:
    transport.queue(make_response(401, {"status": 401, "message": "Authenticate", "code": 20003}))

    result = runner.invoke(app, ["account", "--config", str(config_file)])

    assert result.exit_code == 1


def test_get_with_params(config_file: Path, transport: MockHTTPClient) -> None:
    transport.queue(make_response(200, '{"calls": []}'))

    result = runner.invoke(
        app, ["get", "Calls", "--config", str(config_file), "-p", "Status=completed", "-p", "To=+1555"]
    )

    assert result.exit_code == 0, result.output
    assert "HTTP 200" in result.output
    assert transport.sent[-1].url == (
        "http://127.0.0.1:8080/ACcli/Calls.json?Status=completed&To=%2B1555"
    )


def test_get_error_status_exits_nonzero(config_file: Path, transport: MockHTTPClient) -> None:
    transport.queue(make_response(404, '{"status": 404}'))

    result = runner.invoke(app, ["get", "Calls/CA0", "--config", str(config_file)])

    assert result.exit_code == 1
    assert "HTTP 404" in result.output


def test_get_transport_error(config_file: Path, transport: MockHTTPClient) -> None:
    transport.queue(requests.ConnectionError("refused"))

    result = runner.invoke(app, ["get", "--config", str(config_file)])

    assert result.exit_code == 1


def test_post(config_file: Path, transport: MockHTTPClient) -> None:
    transport.queue(make_response(201, '{"sid": "SM1"}'))

    result = runner.invoke(
        app, ["post", "Messages", "--config", str(config_file), "-p", "Body=hi there"]
    )

    assert result.exit_code == 0, result.output
    sent = transport.sent[-1]
    assert sent.method == "POST"
    assert sent.body == "Body=hi+there"


def test_bad_param(config_file: Path, transport: MockHTTPClient) -> None:
    result = runner.invoke(app, ["get", "Calls", "--config", str(config_file), "-p", "novalue"])

    assert result.exit_code == 2
    assert transport.sent == []


def test_invalid_config(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("account_sid: AC1\n")

    result = runner.invoke(app, ["account", "--config", str(path)])

    assert result.exit_code == 1


def test_config_validate(config_file: Path) -> None:
    result = runner.invoke(app, ["config", "validate", str(config_file)])
    assert result.exit_code == 0
    assert "Config valid" in result.output
