import copy
from dataclasses import FrozenInstanceError, replace
from datetime import datetime, timedelta, timezone

import pytest

from nanointerval import Interval, interval, parse_instant
from nanointerval.util import DAY, HOUR, INT64_MAX, INT64_MIN, SECOND

NOON = datetime(2023, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
NOON_NS = 1672574400000000000


@pytest.mark.parametrize(
    ("offset", "expected_b"),
    [
        (5 * SECOND, 5000000000),
        (0, 0),
        (-5 * SECOND, -5000000000),
        (24 * HOUR, 86400000000000),
    ],
)
def test_construct_from_instants(offset: int, expected_b: int) -> None:
    """Test construction at +5s, 0, -5s and +24h from a fixed start."""
    ivl = interval(NOON_NS, NOON_NS + offset)

    assert ivl.a == NOON_NS
    assert ivl.b == expected_b
    assert ivl.duration == offset
    assert ivl.start == NOON_NS
    assert ivl.end == NOON_NS + offset


def test_construct_with_nanosecond_precision() -> None:
    """Test that nanosecond-precise endpoints are recovered exactly."""
    start = parse_instant("2023-01-01T12:00:00.123456789Z")
    end = start + 1 * SECOND + 987654321

    ivl = Interval.between(start, end)

    assert ivl.a == 1672574400123456789
    assert ivl.b == 1987654321
    assert ivl.start == start
    assert ivl.end == end


def test_construct_from_datetimes() -> None:
    """Test construction from aware datetimes and the datetime views."""
    ivl = interval(NOON, NOON + timedelta(seconds=5))

    assert ivl == Interval(a=NOON_NS, b=5 * SECOND)
    assert ivl.start_datetime() == NOON
    assert ivl.end_datetime() == NOON + timedelta(seconds=5)
    assert ivl.as_timedelta() == timedelta(seconds=5)


def test_construct_mixes_datetime_and_nanoseconds() -> None:
    """Test that datetime and int instants can be mixed."""
    ivl = interval(NOON, NOON_NS + 250)

    assert ivl.a == NOON_NS
    assert ivl.b == 250


def test_datetime_in_other_zone_converts_exactly() -> None:
    """Test that non-UTC offsets convert to the same epoch nanoseconds."""
    plus_two = timezone(timedelta(hours=2))
    ivl = interval(datetime(2023, 1, 1, 14, 0, 0, 123456, tzinfo=plus_two), NOON_NS)

    assert ivl.a == NOON_NS + 123456000
    assert ivl.b == -123456000


def test_at_accepts_int_and_timedelta_durations() -> None:
    """Test building from a start plus int or timedelta duration."""
    assert Interval.at(NOON_NS, DAY) == Interval(a=NOON_NS, b=DAY)
    assert Interval.at(NOON, timedelta(days=1)) == Interval(a=NOON_NS, b=DAY)
    assert Interval.at(NOON, timedelta(microseconds=-3)).b == -3000


def test_zero_duration_has_equal_endpoints() -> None:
    """Test that identical endpoints give b == 0 and start == end."""
    ivl = interval(NOON_NS, NOON_NS)

    assert ivl.b == 0
    assert ivl.start == ivl.end


def test_negative_duration_is_preserved() -> None:
    """Swapped endpoints produce a negative duration, never normalized."""
    ivl = interval(NOON_NS, NOON_NS - 5 * SECOND)

    assert ivl.duration == -5 * SECOND
    assert ivl.end < ivl.start
    assert ivl.as_timedelta() == timedelta(seconds=-5)


def test_pre_epoch_start() -> None:
    """Test that instants before 1970 are negative and floor correctly."""
    ivl = interval(-1, 1)

    assert ivl == Interval(a=-1, b=2)
    assert ivl.start_datetime() == datetime(
        1969, 12, 31, 23, 59, 59, 999999, tzinfo=timezone.utc
    )


@pytest.mark.parametrize(
    ("t", "d"),
    [
        (0, 0),
        (NOON_NS, 1),
        (NOON_NS, -1),
        (INT64_MIN, INT64_MAX),
        (INT64_MAX, INT64_MIN),
        (INT64_MIN, 0),
        (INT64_MAX, 0),
    ],
)
def test_endpoints_round_trip_across_range(t: int, d: int) -> None:
    """Test endpoint recovery at the edges of the int64 range."""
    ivl = interval(t, t + d)

    assert ivl.start == t
    assert ivl.end == t + d
    assert ivl.duration == d


def test_end_is_exact_beyond_int64() -> None:
    """Test that end never wraps when a + b exceeds int64."""
    ivl = Interval(a=INT64_MAX, b=1)

    assert ivl.end == INT64_MAX + 1


def test_start_datetime_respects_timezone() -> None:
    """Test that datetime views convert into the requested zone."""
    ivl = Interval(a=NOON_NS, b=HOUR)

    local = ivl.start_datetime(tz="US/Pacific")

    assert local.hour == 4
    assert local == NOON
    assert ivl.end_datetime(tz="US/Pacific").hour == 5


def test_naive_datetime_rejected() -> None:
    """Test that naive datetimes raise TypeError with a hint."""
    with pytest.raises(TypeError, match="timezone-aware"):
        interval(datetime(2023, 1, 1, 12), NOON)


@pytest.mark.parametrize("bad", ["2023-01-01T12:00:00Z", 1.5, True, None])
def test_unsupported_instant_types_rejected(bad: object) -> None:
    """Test that strings, floats, bools and None are not instants."""
    with pytest.raises(TypeError):
        interval(bad, NOON_NS)


def test_interval_is_immutable() -> None:
    """Test that fields cannot be reassigned and there is no __dict__."""
    ivl = Interval(a=123, b=456)

    with pytest.raises(FrozenInstanceError):
        ivl.a = 0  # type: ignore[misc]

    assert not hasattr(ivl, "__dict__")


def test_value_semantics() -> None:
    """Test that copies are equal, hash alike, and replace() leaves the source intact."""
    ivl = Interval(a=123, b=456)
    shallow = copy.copy(ivl)
    deep = copy.deepcopy(ivl)
    moved = replace(ivl, b=0)

    assert shallow == ivl
    assert deep == ivl
    assert hash(shallow) == hash(ivl)
    assert moved == Interval(a=123, b=0)
    assert ivl == Interval(a=123, b=456)
    assert len({ivl, shallow, deep, moved}) == 2


def test_keyword_only_fields() -> None:
    """Test that a and b must be passed by keyword."""
    with pytest.raises(TypeError):
        Interval(123, 456)  # type: ignore[misc]


def test_str_shows_range_and_duration() -> None:
    """Test the human-friendly str and the dataclass repr."""
    ivl = Interval(a=NOON_NS, b=5 * SECOND)

    assert str(ivl) == "Interval(2023-01-01T12:00:00Z→2023-01-01T12:00:05Z, 5s)"
    assert repr(ivl) == "Interval(a=1672574400000000000, b=5000000000)"


def test_json_shortcuts() -> None:
    """Test the to_dict/from_dict/to_json/from_json shortcuts."""
    ivl = Interval(a=123, b=456)

    assert ivl.to_dict() == {"a": 123, "b": 456}
    assert ivl.to_json() == '{"a":123,"b":456}'
    assert Interval.from_dict({"a": 123, "b": 456}) == ivl
    assert Interval.from_json('{"a":123,"b":456}') == ivl
