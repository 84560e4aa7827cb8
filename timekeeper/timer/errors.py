"""Exceptions raised by the time parsers and timer configuration."""


class TimerError(Exception):
    """Base class for every error raised by the timer package."""


class MissingArgument(TimerError, ValueError):
    """A parser was called without the string it needs."""


class InvalidFormat(TimerError, ValueError):
    """A string matched none of the patterns a parser understands."""


class InvalidConfig(TimerError, ValueError):
    """A timer option is out of range or of the wrong type."""
