from importlib.resources import files

from .codec import (
    DecodeError,
    RangeError,
    decode,
    dumps,
    dumps_many,
    encode,
    from_columns,
    loads,
    loads_many,
    to_columns,
)
from .instants import format_duration, format_instant, now, parse_instant
from .interval import Interval, interval
from .util import (
    DAY,
    HOUR,
    MICROSECOND,
    MILLISECOND,
    MINUTE,
    NANOSECOND,
    SECOND,
    WEEK,
)

# Load documentation files for programmatic access by agents and code-aware tools
_docs_path = files(__package__) / "docs"
docs = {
    "readme": (_docs_path / "README.md").read_text(encoding="utf-8"),
    "api": (_docs_path / "API.md").read_text(encoding="utf-8"),
}

__all__ = [
    "Interval",
    "interval",
    "encode",
    "decode",
    "dumps",
    "loads",
    "dumps_many",
    "loads_many",
    "to_columns",
    "from_columns",
    "DecodeError",
    "RangeError",
    "parse_instant",
    "format_instant",
    "format_duration",
    "now",
    "NANOSECOND",
    "MICROSECOND",
    "MILLISECOND",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "WEEK",
    "docs",
]
