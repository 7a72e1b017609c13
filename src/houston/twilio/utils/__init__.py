"""Utility functions for building Twilio requests."""

from .formatting import Params, encode_values, format_resource, format_values

__all__ = [
    "Params",
    "encode_values",
    "format_resource",
    "format_values",
]
