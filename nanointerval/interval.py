from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from typing_extensions import Self

from nanointerval.instants import (
    format_duration,
    format_instant,
    from_nanos,
    to_duration_nanos,
    to_nanos,
)
from nanointerval.util import MICROSECOND


@dataclass(frozen=True, kw_only=True, slots=True)
class Interval:
    """Half-open time window ``[start, start + duration)`` in nanoseconds.

    The pair ``(a, b)`` is the canonical form: ``a`` is the start as
    nanoseconds since the Unix epoch and ``b`` is the signed duration in
    nanoseconds. Negative durations are legal and kept as given.

    ``end`` is the exact sum ``a + b``; it never wraps or saturates. Values
    outside signed 64-bit range only fail once they are encoded.
    """

    a: int
    b: int

    @classmethod
    def between(cls, start: Any, end: Any) -> Self:
        """Build an interval from two instants (int nanoseconds or aware datetimes)."""
        a = to_nanos(start, "start")
        return cls(a=a, b=to_nanos(end, "end") - a)

    @classmethod
    def at(cls, start: Any, duration: int | timedelta) -> Self:
        """Build an interval from a start instant and a duration."""
        return cls(a=to_nanos(start, "start"), b=to_duration_nanos(duration))

    @property
    def start(self) -> int:
        return self.a

    @property
    def end(self) -> int:
        return self.a + self.b

    @property
    def duration(self) -> int:
        return self.b

    def start_datetime(self, tz: str = "UTC") -> datetime:
        return from_nanos(self.start, tz)

    def end_datetime(self, tz: str = "UTC") -> datetime:
        return from_nanos(self.end, tz)

    def as_timedelta(self) -> timedelta:
        """Duration as a timedelta, floored to microsecond resolution."""
        return timedelta(microseconds=self.b // MICROSECOND)

    def to_dict(self) -> dict[str, int]:
        from nanointerval.codec import encode

        return encode(self)

    @classmethod
    def from_dict(cls, payload: Any) -> Self:
        from nanointerval.codec import decode

        return decode(payload, cls)

    def to_json(self) -> str:
        from nanointerval.codec import dumps

        return dumps(self)

    @classmethod
    def from_json(cls, text: str | bytes) -> Self:
        from nanointerval.codec import loads

        return loads(text, cls)

    def __str__(self) -> str:
        """Human-friendly string showing range and duration."""
        start = format_instant(self.start)
        end = format_instant(self.end)
        return f"Interval({start}→{end}, {format_duration(self.b)})"


def interval(start: Any, end: Any) -> Interval:
    """Create an interval spanning ``start`` to ``end``.

    Example:
        >>> from datetime import datetime, timezone
        >>> noon = datetime(2023, 1, 1, 12, tzinfo=timezone.utc)
        >>> interval(noon, noon.replace(second=5))
        Interval(a=1672574400000000000, b=5000000000)
    """
    return Interval.between(start, end)
