"""Conversions between raw seconds and displayable time strings.

Pretty time
-----------
The default rendering, chosen by the most significant non-zero unit:

    10000  →  "2:46:40"
      100  →  "1:40 min"
       34  →  "34 sec"

Custom formats
--------------
A template containing any of these tokens::

    %h  hours           %H  hours, zero-padded
    %m  minutes         %M  minutes, zero-padded
    %s  seconds         %S  seconds, zero-padded
    %g  total minutes   %G  total minutes, zero-padded
    %t  total seconds   %T  total seconds, zero-padded

Only the *first* occurrence of each token is replaced.  Anything else in
the template is copied through untouched.

Durations
---------
``parse_duration`` reads the compact ``"1h5m30s"`` notation used for the
``duration`` timer option.  ``parse_pretty_string`` is the inverse of
``to_pretty_string`` and is used when the user edits the display by hand.
"""

from __future__ import annotations

import math
import re
import time
from dataclasses import dataclass

from .errors import InvalidFormat, MissingArgument


SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3600

_HOURS_RE = re.compile(r"(\d{1,2})h", re.IGNORECASE)
_MINUTES_RE = re.compile(r"(\d{1,2})m", re.IGNORECASE)
_SECONDS_RE = re.compile(r"(\d{1,2})s", re.IGNORECASE)
_HMS_RE = re.compile(r"(\d+):(\d{2}):(\d{2})")


# ── structured time ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class StructuredTime:
    """A number of seconds split into display units.

    ``minutes`` is the minute within the hour once ``hours`` is non-zero,
    and the total number of minutes before that.
    """

    hours: int
    minutes: int
    total_minutes: int
    seconds: int
    total_seconds: int


def to_structured(total_seconds: int = 0) -> StructuredTime:
    hours = 0
    total_minutes = total_seconds // SECONDS_PER_MINUTE
    minutes = total_minutes

    if total_seconds >= SECONDS_PER_HOUR:
        hours = total_seconds // SECONDS_PER_HOUR
        minutes = total_seconds % SECONDS_PER_HOUR // SECONDS_PER_MINUTE

    return StructuredTime(
        hours=hours,
        minutes=minutes,
        total_minutes=total_minutes,
        seconds=total_seconds % SECONDS_PER_MINUTE,
        total_seconds=total_seconds,
    )


# ── rendering ───────────────────────────────────────────────────────────


def _padded(value: int) -> str:
    return f"{value:02d}"


def to_pretty_string(total_seconds: int = 0) -> str:
    """Render seconds as ``"H:MM:SS"``, ``"M:SS min"`` or ``"S sec"``."""
    t = to_structured(total_seconds)
    if t.hours:
        return f"{t.hours}:{_padded(t.minutes)}:{_padded(t.seconds)}"
    if t.minutes:
        return f"{t.minutes}:{_padded(t.seconds)} min"
    return f"{t.seconds} sec"


def to_formatted_string(total_seconds: int, fmt: str | None) -> str:
    """Render seconds through a custom ``%``-token template."""
    if not isinstance(fmt, str):
        raise InvalidFormat("to_formatted_string expects a format string")

    t = to_structured(total_seconds)
    tokens = (
        ("%h", str(t.hours)),
        ("%m", str(t.minutes)),
        ("%s", str(t.seconds)),
        ("%g", str(t.total_minutes)),
        ("%t", str(t.total_seconds)),
        ("%H", _padded(t.hours)),
        ("%M", _padded(t.minutes)),
        ("%S", _padded(t.seconds)),
        ("%G", _padded(t.total_minutes)),
        ("%T", _padded(t.total_seconds)),
    )
    for token, value in tokens:
        fmt = fmt.replace(token, value, 1)
    return fmt


# ── parsing ─────────────────────────────────────────────────────────────


def _numeric_seconds(text: str) -> int | None:
    """Return ``text`` as whole seconds if it is a plain number, else None."""
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value) or value < 0 or not value.is_integer():
        raise InvalidFormat(f"{text!r} is not a whole, non-negative number of seconds")
    return int(value)


def parse_duration(text: str | int | None) -> int:
    """Convert a duration such as ``"5m30s"`` to seconds (330).

    Plain numbers are taken as seconds already.  Each unit is matched at
    most once, anywhere in the string, and missing units count as zero.
    """
    if isinstance(text, int) and not isinstance(text, bool):
        if text < 0:
            raise InvalidFormat(f"negative duration: {text}")
        return text
    if not text:
        raise MissingArgument("parse_duration expects a string argument")
    if not isinstance(text, str):
        raise InvalidFormat(f"invalid duration: {text!r}")

    numeric = _numeric_seconds(text.strip()) if text.strip() else None
    if numeric is not None:
        return numeric

    hrs = _HOURS_RE.search(text)
    mins = _MINUTES_RE.search(text)
    secs = _SECONDS_RE.search(text)
    if not (hrs or mins or secs):
        raise InvalidFormat(f"invalid duration string: {text!r}")

    seconds = 0
    if hrs:
        seconds += int(hrs.group(1)) * SECONDS_PER_HOUR
    if mins:
        seconds += int(mins.group(1)) * SECONDS_PER_MINUTE
    if secs:
        seconds += int(secs.group(1))
    return seconds


def _to_int(part: str, original: str) -> int:
    part = part.strip()
    if not part.isdigit():
        raise InvalidFormat(f"cannot read time from {original!r}")
    return int(part)


def parse_pretty_string(text: str | None) -> int:
    """Parse a pretty time string back to seconds.

    Only the output of :func:`to_pretty_string` is understood, not custom
    formats.
    """
    if not text:
        raise MissingArgument("parse_pretty_string expects a string argument")
    if not isinstance(text, str):
        raise InvalidFormat(f"cannot read time from {text!r}")

    if "sec" in text:
        return _to_int(text.replace("sec", ""), text)

    if "min" in text:
        parts = text.replace("min", "").split(":")
        if len(parts) > 2:
            raise InvalidFormat(f"cannot read time from {text!r}")
        minutes = _to_int(parts[0], text)
        seconds = _to_int(parts[1], text) if len(parts) == 2 else 0
        return minutes * SECONDS_PER_MINUTE + seconds

    match = _HMS_RE.fullmatch(text.strip())
    if match:
        h, m, s = (int(g) for g in match.groups())
        return h * SECONDS_PER_HOUR + m * SECONDS_PER_MINUTE + s

    raise InvalidFormat(f"cannot read time from {text!r}")


# ── clock ───────────────────────────────────────────────────────────────


def unix_seconds() -> int:
    """Seconds since the epoch, rounded to the nearest second."""
    return round(time.time())


class TimeConverter:
    """The conversion functions bundled for injection into a TimerEngine."""

    to_structured = staticmethod(to_structured)
    to_pretty_string = staticmethod(to_pretty_string)
    to_formatted_string = staticmethod(to_formatted_string)
    parse_duration = staticmethod(parse_duration)
    parse_pretty_string = staticmethod(parse_pretty_string)
