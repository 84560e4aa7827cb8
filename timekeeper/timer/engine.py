"""Timer state machine for Timekeeper.

States
------
RUNNING   Counting; a QTimer fires ``_on_tick`` every ``update_frequency`` ms.
PAUSED    Frozen at the last computed ``total_seconds``.
STOPPED   Finished.  Terminal: build a new engine to run again.

Transitions
-----------
(construction) → RUNNING
RUNNING → PAUSED                 (pause)
PAUSED → RUNNING                 (resume)
RUNNING | PAUSED → STOPPED       (stop, or countdown reaching its duration)

Tick policy
-----------
Each tick recomputes the elapsed seconds from the clock and renders them.
With no ``duration`` that is all.  Otherwise the tick is a *firing
boundary* when the elapsed seconds are a multiple of the duration: a
one-shot timer (``repeat=False``) drops its duration there, and a
countdown stops.  The callback is then invoked on every timed tick, not
only on boundaries.
"""

from __future__ import annotations

import dataclasses
import logging
from enum import Enum
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from .config import TimerConfig
from .errors import InvalidConfig
from .timefmt import TimeConverter, unix_seconds

logger = logging.getLogger(__name__)


class TimerState(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    STOPPED = "stopped"


class TimerEngine(QObject):
    """Count-up timer driven by a QTimer.

    The engine starts RUNNING as soon as it is constructed.  Connect to
    ``rendered`` and then call :meth:`render` to show the starting value
    before the first tick arrives.

    Signals
    -------
    rendered(text: str)
        The freshly rendered time string, on every tick and render.
    state_changed(new_state: TimerState)
        Emitted on every state transition.
    boundary_reached(total_seconds: int)
        Emitted when a tick lands on a multiple of ``duration``.
    """

    rendered = pyqtSignal(str)
    state_changed = pyqtSignal(object)
    boundary_reached = pyqtSignal(int)

    def __init__(
        self,
        config: TimerConfig | None = None,
        parent: QObject | None = None,
        *,
        clock: Callable[[], int] = unix_seconds,
        converter: type[TimeConverter] = TimeConverter,
    ) -> None:
        super().__init__(parent)

        # Private copy: ticks may clear ``duration`` on it.
        self._config: TimerConfig = dataclasses.replace(config or TimerConfig())
        self._clock = clock
        self._converter = converter

        self._total_seconds: int = self._config.seconds
        self._start_time: int = self._clock() - self._total_seconds
        self._state: TimerState = TimerState.RUNNING
        self._text: str = ""

        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(self._config.update_frequency)
        self._qt_timer.timeout.connect(self._on_tick)
        self._qt_timer.start()
        logger.debug("timer created at %ss, ticking every %sms",
                     self._total_seconds, self._config.update_frequency)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def config(self) -> TimerConfig:
        return self._config

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def total_seconds(self) -> int:
        return self._total_seconds

    @property
    def start_time(self) -> int:
        """Unix seconds the count is measured from."""
        return self._start_time

    @property
    def is_running(self) -> bool:
        return self._state == TimerState.RUNNING

    @property
    def is_scheduled(self) -> bool:
        """True while the underlying QTimer is active."""
        return self._qt_timer.isActive()

    @property
    def text(self) -> str:
        """The most recently rendered string."""
        return self._text

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def render(self) -> str:
        """Render ``total_seconds`` and push it to the ``rendered`` signal."""
        if self._config.format is not None:
            text = self._converter.to_formatted_string(self._total_seconds, self._config.format)
        else:
            text = self._converter.to_pretty_string(self._total_seconds)
        self._text = text
        self.rendered.emit(text)
        return text

    def pause(self) -> None:
        """Freeze the count.  Does nothing unless RUNNING."""
        if self._state != TimerState.RUNNING:
            return
        self._qt_timer.stop()
        self._set_state(TimerState.PAUSED)

    def resume(self, total_seconds: int | None = None) -> None:
        """Continue counting from the frozen value, or from ``total_seconds``.

        Does nothing unless PAUSED.  An invalid override raises
        ``InvalidConfig`` and the timer stays PAUSED.
        """
        if self._state != TimerState.PAUSED:
            return
        if total_seconds is not None:
            if not isinstance(total_seconds, int) or isinstance(total_seconds, bool) \
                    or total_seconds < 0:
                raise InvalidConfig(
                    f"total_seconds must be a non-negative integer, got {total_seconds!r}"
                )
            self._total_seconds = total_seconds

        self._start_time = self._clock() - self._total_seconds
        self._set_state(TimerState.RUNNING)
        self._qt_timer.start()

    def stop(self) -> None:
        """Stop for good.  Safe to call more than once."""
        if self._state == TimerState.STOPPED:
            return
        self._qt_timer.stop()
        self._set_state(TimerState.STOPPED)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        # A tick already queued when pause/stop ran must not count.
        if self._state != TimerState.RUNNING:
            return

        # Clamped: the wall clock may step backwards.
        self._total_seconds = max(0, self._clock() - self._start_time)
        self.render()

        duration = self._config.duration
        if not duration:
            return

        boundary = self._is_firing_boundary(duration)
        if boundary:
            logger.info("duration of %ss reached at %ss", duration, self._total_seconds)
            self.boundary_reached.emit(self._total_seconds)
            if not self._config.repeat:
                self._config.duration = None

        if self._config.countdown and boundary:
            self.stop()

        # Runs on every timed tick, boundary or not.
        try:
            self._config.callback()
        except Exception:
            logger.exception("timer callback failed")

    def _is_firing_boundary(self, duration: object) -> bool:
        if not isinstance(duration, int) or isinstance(duration, bool) or duration <= 0:
            return False
        return self._total_seconds % duration == 0

    def _set_state(self, new_state: TimerState) -> None:
        logger.debug("timer %s → %s", self._state.value, new_state.value)
        self._state = new_state
        self.state_changed.emit(new_state)
