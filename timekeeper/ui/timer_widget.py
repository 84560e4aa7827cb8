"""Timer display widgets.

``TimerDisplay`` is the surface the engine renders into.  ``TimerWidget``
wraps one display and one ``TimerEngine`` and offers the familiar
start / pause / resume / reset / remove controls.

When the timer is editable, focusing the display pauses the timer and
leaving it reads the edited pretty time back in and resumes from there.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QFocusEvent
from PyQt6.QtWidgets import QLineEdit, QVBoxLayout, QWidget

from ..timer.config import TimerConfig
from ..timer.engine import TimerEngine, TimerState
from ..timer.errors import TimerError
from ..timer.timefmt import parse_pretty_string, unix_seconds

logger = logging.getLogger(__name__)


class TimerDisplay(QLineEdit):
    """A line edit that shows rendered time and reports focus changes."""

    focused = pyqtSignal()
    edited = pyqtSignal(str)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setObjectName("timerDisplay")
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setReadOnly(True)

    def display(self, text: str) -> None:
        if self.text() != text:
            self.setText(text)

    def mirror_state(self, state: TimerState) -> None:
        """Expose the timer state as a ``timerState`` property for stylesheets."""
        self.setProperty("timerState", state.value)
        self.style().unpolish(self)
        self.style().polish(self)

    def focusInEvent(self, event: QFocusEvent) -> None:
        super().focusInEvent(event)
        self.focused.emit()

    def focusOutEvent(self, event: QFocusEvent) -> None:
        super().focusOutEvent(event)
        # The context menu takes focus while the user is still editing.
        if event.reason() == Qt.FocusReason.PopupFocusReason:
            return
        self.edited.emit(self.text())


class TimerWidget(QWidget):
    """A self-contained timer: one display driven by one engine."""

    state_changed = pyqtSignal(object)

    def __init__(
        self,
        config: TimerConfig | None = None,
        parent: QWidget | None = None,
        *,
        autostart: bool = True,
        clock=unix_seconds,
    ) -> None:
        super().__init__(parent)
        self._config = config or TimerConfig()
        self._clock = clock
        self._engine: TimerEngine | None = None
        self._paused_for_edit: bool = False

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self._display = TimerDisplay(self)
        self._display.setReadOnly(not self._config.editable)
        layout.addWidget(self._display)

        if self._config.editable:
            self._display.focused.connect(self._on_focus)
            self._display.edited.connect(self._on_edited)

        if autostart:
            self.start()

    # ── public properties ─────────────────────────────────────────────────

    @property
    def engine(self) -> TimerEngine | None:
        return self._engine

    @property
    def display(self) -> TimerDisplay:
        return self._display

    @property
    def state(self) -> TimerState | None:
        return self._engine.state if self._engine is not None else None

    # ── controls ──────────────────────────────────────────────────────────

    def start(self) -> None:
        """Start counting.  Does nothing while a timer is running or paused."""
        if self._engine is not None and self._engine.state != TimerState.STOPPED:
            return
        self._attach(TimerEngine(self._config, self, clock=self._clock))

    def pause(self) -> None:
        if self._engine is not None:
            self._engine.pause()

    def resume(self) -> None:
        self._paused_for_edit = False
        if self._engine is not None:
            self._engine.resume()

    def reset(self) -> None:
        """Throw away the current run and start again from the configured offset."""
        self._detach()
        self._attach(TimerEngine(self._config, self, clock=self._clock))

    def remove(self) -> None:
        """Stop the timer and clear the display."""
        self._detach()
        self._display.clear()
        self._display.setProperty("timerState", None)

    def get_seconds(self) -> int:
        return self._engine.total_seconds if self._engine is not None else 0

    # ── engine wiring ─────────────────────────────────────────────────────

    def _attach(self, engine: TimerEngine) -> None:
        if self._engine is not None:
            self._detach()
        self._paused_for_edit = False
        self._engine = engine
        engine.rendered.connect(self._display.display)
        engine.state_changed.connect(self._on_state_changed)
        self._on_state_changed(engine.state)
        engine.render()

    def _detach(self) -> None:
        engine = self._engine
        if engine is None:
            return
        engine.stop()
        engine.rendered.disconnect(self._display.display)
        engine.state_changed.disconnect(self._on_state_changed)
        engine.setParent(None)
        engine.deleteLater()
        self._engine = None
        self._paused_for_edit = False

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_state_changed(self, state: TimerState) -> None:
        self._display.mirror_state(state)
        self.state_changed.emit(state)

    def _on_focus(self) -> None:
        # Only a pause made here is undone on blur.
        if self._engine is not None and self._engine.is_running:
            self._engine.pause()
            self._paused_for_edit = True

    def _on_edited(self, text: str) -> None:
        engine = self._engine
        if engine is None or engine.state != TimerState.PAUSED or not self._paused_for_edit:
            return
        try:
            seconds = parse_pretty_string(text)
        except TimerError as exc:
            logger.warning("ignoring edited time %r: %s", text, exc)
            engine.render()
            return
        self._paused_for_edit = False
        engine.resume(total_seconds=seconds)
        engine.render()
