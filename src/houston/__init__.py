"""houston - a small client library for the Twilio REST API."""

__version__ = "0.0.1"
