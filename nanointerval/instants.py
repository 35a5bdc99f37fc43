"""Instant and duration conversions.

An instant is an ``int`` count of nanoseconds since the Unix epoch or a
timezone-aware ``datetime``. Durations are ``int`` nanoseconds or a
``timedelta``. Conversions into ``datetime``/``timedelta`` are limited to the
microsecond resolution of the standard library and always floor.
"""

import re
import time
from datetime import datetime, timedelta, timezone
from typing import Any, Literal
from zoneinfo import ZoneInfo

from dateutil.parser import isoparse

from nanointerval.util import HOUR, MICROSECOND, MILLISECOND, MINUTE, SECOND

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_TIMESTAMP = re.compile(
    r"^(?P<head>\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})"
    r"(?:[.,](?P<frac>\d{1,9}))?"
    r"(?P<offset>[Zz]|[+-]\d{2}(?::?\d{2})?)?$"
)


def to_nanos(instant: Any, edge: Literal["start", "end"] = "start") -> int:
    """Convert an instant to integer nanoseconds since the Unix epoch.

    Accepts:
    - int: Passed through as-is (nanoseconds since epoch)
    - datetime: Must be timezone-aware, converted exactly (no float rounding)

    Raises:
        TypeError: If the instant is an unsupported type or a naive datetime
    """
    if isinstance(instant, int) and not isinstance(instant, bool):
        return instant
    if isinstance(instant, datetime):
        if instant.tzinfo is None or instant.utcoffset() is None:
            raise TypeError(
                f"Interval {edge} must be a timezone-aware datetime.\n"
                f"Got naive datetime: {instant!r}\n"
                f"Hint: Add timezone info:\n"
                f"  dt = datetime(..., tzinfo=timezone.utc)"
            )
        return to_duration_nanos(instant - EPOCH)
    raise TypeError(
        f"Interval {edge} must be int (nanoseconds since epoch) or datetime.\n"
        f"Got {type(instant).__name__!r}: {instant!r}\n"
        f"Examples:\n"
        f"  interval(1672574400000000000, 1672574405000000000)  # int nanoseconds\n"
        f"  interval(datetime(2023,1,1,12,tzinfo=timezone.utc), ...)  "
        f"# timezone-aware datetime\n"
        f"  interval(parse_instant('2023-01-01T12:00:00Z'), ...)  # text"
    )


def to_duration_nanos(duration: int | timedelta) -> int:
    """Convert a duration (int nanoseconds or timedelta) to integer nanoseconds."""
    if isinstance(duration, int) and not isinstance(duration, bool):
        return duration
    if isinstance(duration, timedelta):
        seconds = duration.days * 86400 + duration.seconds
        return seconds * SECOND + duration.microseconds * MICROSECOND
    raise TypeError(
        f"Duration must be int (nanoseconds) or timedelta.\n"
        f"Got {type(duration).__name__!r}: {duration!r}"
    )


def from_nanos(nanos: int, tz: str = "UTC") -> datetime:
    """Return the instant as an aware datetime in ``tz``, floored to microseconds."""
    moment = EPOCH + timedelta(microseconds=nanos // MICROSECOND)
    return moment.astimezone(ZoneInfo(tz))


def now() -> int:
    return time.time_ns()


def parse_instant(text: str) -> int:
    """Parse an RFC 3339 timestamp into nanoseconds since the Unix epoch.

    Up to nine fractional digits are kept exactly. The offset (``Z`` or
    ``±HH:MM``) is required.

    Example:
        >>> parse_instant("2023-01-01T12:00:00.123456789Z")
        1672574400123456789
    """
    match = _TIMESTAMP.match(text.strip())
    if match is None:
        raise ValueError(
            f"Invalid timestamp {text!r}.\n"
            f"Expected RFC 3339, e.g. '2023-01-01T12:00:00.123456789Z' "
            f"or '2023-01-01T14:00:00+02:00'"
        )
    offset = match["offset"]
    if offset is None:
        raise ValueError(
            f"Timestamp {text!r} has no UTC offset.\n"
            f"Hint: Append 'Z' for UTC or an explicit offset like '+02:00'"
        )
    whole = isoparse(match["head"] + offset.upper())
    fraction = int((match["frac"] or "").ljust(9, "0"))
    return to_nanos(whole) + fraction


def format_instant(nanos: int) -> str:
    """Format nanoseconds since the epoch as RFC 3339 UTC text.

    Trailing zeros of the fraction are trimmed, and the fraction is omitted
    entirely on whole seconds.
    """
    seconds, fraction = divmod(nanos, SECOND)
    moment = EPOCH + timedelta(seconds=seconds)
    text = f"{moment:%Y-%m-%dT%H:%M:%S}"
    if fraction:
        text += f".{fraction:09d}".rstrip("0")
    return text + "Z"


def _decimal(value: int, scale: int) -> str:
    whole, part = divmod(value, scale)
    if not part:
        return str(whole)
    digits = len(str(scale)) - 1
    return f"{whole}.{part:0{digits}d}".rstrip("0")


def format_duration(nanos: int) -> str:
    """Format a signed nanosecond duration compactly, e.g. ``1m30s`` or ``-5ms``."""
    if nanos == 0:
        return "0s"
    sign = "-" if nanos < 0 else ""
    magnitude = abs(nanos)

    if magnitude < MICROSECOND:
        return f"{sign}{magnitude}ns"
    if magnitude < MILLISECOND:
        return f"{sign}{_decimal(magnitude, MICROSECOND)}µs"
    if magnitude < SECOND:
        return f"{sign}{_decimal(magnitude, MILLISECOND)}ms"

    hours, rest = divmod(magnitude, HOUR)
    minutes, rest = divmod(rest, MINUTE)
    text = f"{_decimal(rest, SECOND)}s"
    if hours:
        return f"{sign}{hours}h{minutes}m{text}"
    if minutes:
        return f"{sign}{minutes}m{text}"
    return sign + text
