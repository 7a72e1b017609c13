"""Timestamp handling for Twilio resources.

Twilio does not use the time format most commonly seen in JSON (RFC-3339 /
ISO-8601). It uses the RFC-2822 (RFC-1123) layout with a numeric zone, e.g.
``"Thu, 01 Jan 1970 00:00:00 +0000"``, which neither ``json`` nor pydantic
parse on their own. The helpers here convert between that layout and
``datetime`` values, and ``TwilioTime`` plugs them into pydantic models.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime, timedelta, timezone
from typing import Annotated, Any, Final

from pydantic import BeforeValidator, PlainSerializer

from houston.twilio.errors import TimeDecodeError, TimeEncodeError

# RFC-1123 with a numeric zone (Go's time.RFC1123Z), for messages only;
# names are written from the tuples below, never from the C locale
RFC1123Z: Final = "Mon, 02 Jan 2006 15:04:05 -0700"

# indexed by datetime.weekday() and month - 1
DAY_NAMES: Final = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_NAMES: Final = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)  # fmt: skip

_RFC1123Z_PATTERN: Final = re.compile(
    r"(?P<weekday>[A-Z][a-z]{2}), (?P<day>\d{2}) (?P<month>[A-Z][a-z]{2}) (?P<year>\d{4}) "
    r"(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2}) "
    r"(?P<sign>[+-])(?P<zone_hour>\d{2})(?P<zone_minute>\d{2})"
)

# RFC-2822: the year is any numeric year 1900 or later, written as 4*DIGIT
MIN_YEAR: Final = 1900
MAX_YEAR: Final = 9999

# Value produced for a null timestamp
ZERO_TIME: Final = datetime(1, 1, 1, tzinfo=UTC)

NULL_TOKEN: Final = "null"


def format_time(dt: datetime) -> str:
    """Render a datetime in Twilio's timestamp layout.

    Naive datetimes are assumed to be UTC.

    Args:
        dt: Datetime to render

    Returns:
        Formatted timestamp without surrounding quotes

    Raises:
        TimeEncodeError: If the year is outside [1900, 9999]
    """
    if not MIN_YEAR <= dt.year <= MAX_YEAR:
        raise TimeEncodeError(
            f"year {dt.year} outside of range [{MIN_YEAR},{MAX_YEAR}]"
        )
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)

    offset = int((dt.utcoffset() or timedelta()).total_seconds()) // 60
    sign = "-" if offset < 0 else "+"
    zone_hour, zone_minute = divmod(abs(offset), 60)

    return (
        f"{DAY_NAMES[dt.weekday()]}, {dt.day:02d} {MONTH_NAMES[dt.month - 1]} {dt.year:04d} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d} {sign}{zone_hour:02d}{zone_minute:02d}"
    )


def marshal_time(dt: datetime) -> bytes:
    """Encode a datetime as a JSON string value in Twilio's layout.

    The quotes are added here rather than by a JSON encoder so the output
    is exactly ``"<layout>"``.

    Raises:
        TimeEncodeError: If the year is outside [1900, 9999]
    """
    out = bytearray(b'"')
    out += format_time(dt).encode("ascii")
    out += b'"'
    return bytes(out)


def unmarshal_time(data: bytes | str) -> datetime:
    """Decode a Twilio timestamp, optionally JSON-quoted.

    The token ``null`` decodes to ``ZERO_TIME``.

    Args:
        data: Raw timestamp text or JSON bytes

    Returns:
        Timezone-aware datetime

    Raises:
        TimeDecodeError: If the text does not match the expected layout
    """
    if isinstance(data, bytes):
        data = data.decode("utf-8", errors="replace")

    text = data.strip('"')
    if text == NULL_TOKEN:
        return ZERO_TIME

    try:
        match = _RFC1123Z_PATTERN.fullmatch(text)
        if match is None:
            raise ValueError(f"time data {text!r} does not match layout {RFC1123Z!r}")
        if match["weekday"] not in DAY_NAMES:
            raise ValueError(f"unknown day name {match['weekday']!r}")
        if match["month"] not in MONTH_NAMES:
            raise ValueError(f"unknown month name {match['month']!r}")

        offset = timedelta(hours=int(match["zone_hour"]), minutes=int(match["zone_minute"]))
        if match["sign"] == "-":
            offset = -offset

        return datetime(
            int(match["year"]),
            MONTH_NAMES.index(match["month"]) + 1,
            int(match["day"]),
            int(match["hour"]),
            int(match["minute"]),
            int(match["second"]),
            tzinfo=timezone(offset) if offset else UTC,
        )
    except ValueError as exc:
        raise TimeDecodeError(f"cannot parse {text!r}: {exc}", exc) from exc


def _validate_time(value: Any) -> Any:
    if value is None:
        return ZERO_TIME
    if isinstance(value, (str, bytes)):
        return unmarshal_time(value)
    return value


# datetime field that reads and writes Twilio's timestamp layout
TwilioTime = Annotated[
    datetime,
    BeforeValidator(_validate_time),
    PlainSerializer(format_time, return_type=str, when_used="json"),
]
