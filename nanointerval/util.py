"""Utility constants for nanointerval.

Time unit constants represent durations in nanoseconds, the single unit used
by both fields of an interval.
"""

# Time unit constants (all values in nanoseconds)
NANOSECOND = 1
MICROSECOND = 1_000
MILLISECOND = 1_000_000
SECOND = 1_000_000_000
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY

# Signed 64-bit bounds of the wire format
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def fits_int64(value: int) -> bool:
    return INT64_MIN <= value <= INT64_MAX
