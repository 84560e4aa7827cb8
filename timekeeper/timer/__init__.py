"""Timer package."""

from .config import TimerConfig, DEFAULT_UPDATE_FREQUENCY
from .engine import TimerEngine, TimerState
from .errors import TimerError, MissingArgument, InvalidFormat, InvalidConfig
from .timefmt import (
    StructuredTime,
    TimeConverter,
    to_structured,
    to_pretty_string,
    to_formatted_string,
    parse_duration,
    parse_pretty_string,
    unix_seconds,
)

__all__ = [
    "TimerConfig",
    "DEFAULT_UPDATE_FREQUENCY",
    "TimerEngine",
    "TimerState",
    "TimerError",
    "MissingArgument",
    "InvalidFormat",
    "InvalidConfig",
    "StructuredTime",
    "TimeConverter",
    "to_structured",
    "to_pretty_string",
    "to_formatted_string",
    "parse_duration",
    "parse_pretty_string",
    "unix_seconds",
]
