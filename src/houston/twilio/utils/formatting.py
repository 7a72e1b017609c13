"""Formatting helpers for resource paths and request parameters."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from urllib.parse import urlencode

# Multi-valued parameter set: a key maps to one value or a sequence of values
Params = Mapping[str, str | Sequence[str]]


def format_resource(resource: str) -> str:
    """Ensure a resource path resembles ``/Path/To/Resource``.

    An empty resource stays empty (the account root). Nothing else is
    normalized: repeated or trailing separators are kept as given.

    Args:
        resource: Resource path relative to the account

    Returns:
        Resource path with a leading separator, or an empty string
    """
    if not resource:
        return ""

    if not resource.startswith("/"):
        return "/" + resource

    return resource


def encode_values(params: Params | None) -> str:
    """Encode parameters as ``key=value`` pairs sorted by key.

    Values of a multi-valued key are emitted in their given order.

    Args:
        params: Parameter set to encode

    Returns:
        URL-encoded string, empty when there are no parameters
    """
    if not params:
        return ""

    pairs: list[tuple[str, str]] = []
    for key in sorted(params):
        values = params[key]
        if isinstance(values, str):
            values = [values]
        pairs.extend((key, value) for value in values)

    return urlencode(pairs)


def format_values(params: Params | None) -> str:
    """Render parameters as a query string suffix (``?a=b``) or ``""``."""
    encoded = encode_values(params)
    if not encoded:
        return ""

    return "?" + encoded
