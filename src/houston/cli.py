"""Twilio command-line interface.

This module provides a small command-line front end to the client for
checking credentials and poking at resources by hand.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Final

import requests
import typer
from pydantic_core import PydanticSerializationError

from houston.settings import UserSettings
from houston.twilio import TwilioAPIError, TwilioClient

# ── CLI setup ────────────────────────────────────────────────────────────────
app = typer.Typer(help="Twilio REST API CLI", add_completion=False)
config_app = typer.Typer(help="Config helpers")
app.add_typer(config_app, name="config")

logger: Final = logging.getLogger(__name__)  # Will be "houston.cli"

# Options shared by the commands
CONFIG_OPTION = typer.Option(..., "--config", "-c", exists=True, dir_okay=False)
DEBUG_OPTION = typer.Option(False, "--debug", help="Enable debug logging")
PARAM_OPTION = typer.Option(None, "--param", "-p", help="Parameter as key=value (repeatable)")
RESOURCE_ARGUMENT = typer.Argument("", help="Resource path relative to the account, e.g. Calls")


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )


def parse_params(raw: list[str] | None) -> dict[str, list[str]]:
    """Turn repeated ``key=value`` options into a multi-valued parameter set.

    Raises:
        typer.BadParameter: If an item has no ``=``
    """
    params: dict[str, list[str]] = {}
    for item in raw or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected key=value, got {item!r}", param_hint="--param")
        params.setdefault(key, []).append(value)
    return params


def create_client(config: Path) -> TwilioClient:
    """Load settings and build a client, exiting on invalid configuration."""
    try:
        settings = UserSettings.load(config)
    except RuntimeError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    return TwilioClient.from_settings(settings)


def _echo_response(resp: requests.Response) -> None:
    typer.echo(f"HTTP {resp.status_code}")
    typer.echo(resp.text)
    if not resp.ok:
        raise typer.Exit(code=1)


@app.command()
def account(config: Path = CONFIG_OPTION, debug: bool = DEBUG_OPTION) -> None:
    """Fetch the account the credentials belong to."""
    _setup_logging(debug)

    with create_client(config) as client:
        try:
            acct = client.fetch_account()
        except TwilioAPIError as err:
            typer.secho(f"API error ({err.status}): {err.message}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1) from err
        except requests.RequestException as exc:
            typer.secho(f"Request failed: {exc}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1) from exc

    try:
        typer.echo(acct.model_dump_json(indent=2))
    except PydanticSerializationError as exc:
        # e.g. a null date, which has no representation in Twilio's layout
        typer.secho(f"Cannot render account {acct.sid}: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


@app.command()
def get(
    resource: str = RESOURCE_ARGUMENT,
    config: Path = CONFIG_OPTION,
    param: list[str] | None = PARAM_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Send a GET request and print the raw response."""
    _setup_logging(debug)
    params = parse_params(param)

    with create_client(config) as client:
        try:
            resp = client.get(resource, params)
        except requests.RequestException as exc:
            typer.secho(f"Request failed: {exc}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1) from exc

    _echo_response(resp)


@app.command()
def post(
    resource: str = RESOURCE_ARGUMENT,
    config: Path = CONFIG_OPTION,
    param: list[str] | None = PARAM_OPTION,
    debug: bool = DEBUG_OPTION,
) -> None:
    """Send a form-encoded POST request and print the raw response."""
    _setup_logging(debug)
    form_data = parse_params(param)

    with create_client(config) as client:
        try:
            resp = client.post(resource, form_data)
        except requests.RequestException as exc:
            typer.secho(f"Request failed: {exc}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1) from exc

    _echo_response(resp)


# ───────────────────────── config sub-commands ───────────────────────────────
@config_app.command("validate")
def validate_config(file: Path) -> None:
    """Validate a YAML config file against the schema."""
    try:
        UserSettings.load(file)
        typer.echo("✅ Config valid")
    except (RuntimeError, FileNotFoundError) as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc


# ───────────────────────── module entrypoint ────────────────────────────────
if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        sys.exit(0)
