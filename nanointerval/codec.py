"""Wire encodings for intervals.

The canonical external form is a JSON object with exactly two signed 64-bit
integer fields, ``{"a": <start ns>, "b": <duration ns>}``. The short keys are
part of the persisted format and must not change.

For tabular stores the same pair is kept as two ``int64`` columns.
"""

import json
import operator
from array import array
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, TypeVar

from nanointerval.interval import Interval
from nanointerval.util import INT64_MAX, INT64_MIN, fits_int64

IvlOut = TypeVar("IvlOut", bound=Interval)


class DecodeError(ValueError):
    """Payload is not a well-formed interval object."""


class RangeError(ValueError):
    """Interval field does not fit in a signed 64-bit integer."""


def _check_range(name: str, value: Any) -> int:
    # bool is an int subclass but encodes as JSON true/false
    if isinstance(value, bool):
        raise TypeError(
            f"Interval field {name!r} must be an integer, got bool: {value!r}\n"
            f"Hint: Build intervals from nanosecond ints, e.g. Interval(a=0, b=SECOND)"
        )
    try:
        value = operator.index(value)
    except TypeError as exc:
        raise TypeError(
            f"Interval field {name!r} must be an integer.\n"
            f"Got {type(value).__name__!r}: {value!r}\n"
            f"Hint: Fractional nanoseconds are not representable; "
            f"round explicitly before encoding"
        ) from exc
    if not fits_int64(value):
        raise RangeError(
            f"Interval field {name!r} is outside signed 64-bit range.\n"
            f"Got: {value}\n"
            f"Allowed: [{INT64_MIN}, {INT64_MAX}] nanoseconds "
            f"(roughly ±292 years around 1970)"
        )
    return value


def encode(interval: Interval) -> dict[str, int]:
    """Return the canonical ``{"a": ..., "b": ...}`` mapping for an interval.

    Raises:
        TypeError: If a field is a bool or not an integer
        RangeError: If a field is outside signed 64-bit range
    """
    return {
        "a": _check_range("a", interval.a),
        "b": _check_range("b", interval.b),
    }


def _field(payload: Mapping[Any, Any], name: str) -> int:
    if name not in payload:
        raise DecodeError(
            f"Interval payload is missing field {name!r}.\n"
            f"Got keys: {sorted(map(str, payload))}\n"
            f'Expected: {{"a": <start ns>, "b": <duration ns>}}'
        )
    value = payload[name]
    # bool is an int subclass; JSON true/false is not a number
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(
            f"Interval field {name!r} must be an integer.\n"
            f"Got {type(value).__name__!r}: {value!r}"
        )
    if not fits_int64(value):
        raise DecodeError(
            f"Interval field {name!r} is outside signed 64-bit range.\n"
            f"Got: {value}"
        )
    return value


def decode(payload: Any, cls: type[IvlOut] = Interval) -> IvlOut:
    """Build an interval from a decoded JSON object.

    Unknown keys are ignored. ``cls`` selects the Interval subclass to build.

    Raises:
        DecodeError: If the payload is not a mapping, or ``a``/``b`` is
            missing, not an integer, or outside signed 64-bit range
    """
    if not isinstance(payload, Mapping):
        raise DecodeError(
            f"Interval payload must be a JSON object.\n"
            f"Got {type(payload).__name__!r}: {payload!r}"
        )
    return cls(a=_field(payload, "a"), b=_field(payload, "b"))


def _parse(text: str | bytes | bytearray) -> Any:
    # JSONDecodeError, UnicodeDecodeError and the int digit limit are all ValueError
    try:
        return json.loads(text)
    except (ValueError, RecursionError) as exc:
        raise DecodeError(f"Interval payload is not valid JSON: {exc}") from exc


def dumps(interval: Interval) -> str:
    """Serialize an interval to compact JSON, e.g. ``{"a":123,"b":456}``."""
    return json.dumps(encode(interval), separators=(",", ":"))


def loads(text: str | bytes | bytearray, cls: type[IvlOut] = Interval) -> IvlOut:
    return decode(_parse(text), cls)


def dumps_many(intervals: Iterable[Interval]) -> str:
    """Serialize intervals as a compact JSON array of interval objects."""
    return json.dumps([encode(i) for i in intervals], separators=(",", ":"))


def loads_many(text: str | bytes | bytearray) -> list[Interval]:
    """Parse a JSON array of interval objects.

    Raises:
        DecodeError: If the document is not an array or any element is
            malformed (the message names the failing index)
    """
    payload = _parse(text)
    if not isinstance(payload, list):
        raise DecodeError(
            f"Interval list payload must be a JSON array.\n"
            f"Got {type(payload).__name__!r}"
        )
    result: list[Interval] = []
    for index, item in enumerate(payload):
        try:
            result.append(decode(item))
        except DecodeError as exc:
            raise DecodeError(f"Element {index}: {exc}") from exc
    return result


def to_columns(intervals: Iterable[Interval]) -> tuple[array, array]:
    """Split intervals into ``int64`` start and duration columns."""
    starts = array("q")
    durations = array("q")
    for interval in intervals:
        starts.append(_check_range("a", interval.a))
        durations.append(_check_range("b", interval.b))
    return starts, durations


def from_columns(starts: Sequence[int], durations: Sequence[int]) -> list[Interval]:
    """Rebuild intervals from parallel start and duration columns."""
    if len(starts) != len(durations):
        raise ValueError(
            f"Column lengths differ: {len(starts)} starts vs "
            f"{len(durations)} durations.\n"
            f"Each interval needs exactly one value in each column"
        )
    return [
        Interval(a=_check_range("a", a), b=_check_range("b", b))
        for a, b in zip(starts, durations)
    ]
