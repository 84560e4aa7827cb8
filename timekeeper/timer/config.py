"""Options accepted by a timer.

Usage::

    config = TimerConfig(duration="5m", callback=on_done, countdown=True)

``duration`` may be given in seconds or in the compact ``"1h5m30s"``
notation; either way it is stored as seconds.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable

from .errors import InvalidConfig, TimerError
from .timefmt import parse_duration

logger = logging.getLogger(__name__)


DEFAULT_UPDATE_FREQUENCY = 500  # ms


def _time_up() -> None:
    logger.info("Time up!")


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class TimerConfig:
    """Everything a caller can set when creating a timer."""

    seconds: int = 0                        # starting offset
    editable: bool = False                  # pause on focus, read edits back on blur
    restart: bool = False                   # accepted for compatibility; ticks ignore it
    duration: int | str | None = None       # seconds between callback boundaries
    callback: Callable[[], None] = field(default=_time_up)
    repeat: bool = False                    # keep the duration after the first boundary
    countdown: bool = False                 # stop at the first boundary
    format: str | None = None               # custom template, None for pretty time
    update_frequency: int = DEFAULT_UPDATE_FREQUENCY

    def __post_init__(self) -> None:
        if not _is_int(self.seconds) or self.seconds < 0:
            raise InvalidConfig(f"seconds must be a non-negative integer, got {self.seconds!r}")

        if isinstance(self.duration, str):
            try:
                self.duration = parse_duration(self.duration)
            except TimerError as exc:
                raise InvalidConfig(f"invalid duration {self.duration!r}: {exc}") from exc
        if self.duration is not None and (not _is_int(self.duration) or self.duration <= 0):
            raise InvalidConfig(f"duration must be a positive integer, got {self.duration!r}")

        if not _is_int(self.update_frequency) or self.update_frequency <= 0:
            raise InvalidConfig(
                f"update_frequency must be a positive integer, got {self.update_frequency!r}"
            )
        if not callable(self.callback):
            raise InvalidConfig("callback must be callable")
        if self.format is not None and not isinstance(self.format, str):
            raise InvalidConfig(f"format must be a string, got {self.format!r}")

        if self.countdown and self.duration is None:
            logger.warning("countdown requested without a duration; it will never stop on its own")
