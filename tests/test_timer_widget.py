"""Tests for the timer display and the TimerWidget controls.

Covers:
- Rendering into the display and the timerState style property
- start / pause / resume / reset / remove / get_seconds
- Editable mode: focus pauses, blur reads the edited time back in
"""

from __future__ import annotations

import logging

import pytest
from PyQt6.QtCore import QEvent, Qt
from PyQt6.QtGui import QFocusEvent

from timekeeper.timer.config import TimerConfig
from timekeeper.timer.engine import TimerState
from timekeeper.ui.timer_widget import TimerDisplay, TimerWidget

from helpers import SignalCollector, tick


@pytest.fixture
def make_widget(qapp, clock, callback):
    created = []

    def _make(**options) -> TimerWidget:
        options.setdefault("callback", callback)
        w = TimerWidget(TimerConfig(**options), clock=clock)
        created.append(w)
        return w

    yield _make
    for w in created:
        w.remove()


# ═══════════════════════════════════════════════════════════════════════
#  DISPLAY
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestTimerDisplay:

    def test_display_sets_text(self):
        d = TimerDisplay()
        d.display("1:40 min")
        assert d.text() == "1:40 min"

    def test_read_only_by_default(self):
        assert TimerDisplay().isReadOnly()

    def test_mirror_state_sets_property(self):
        d = TimerDisplay()
        d.mirror_state(TimerState.PAUSED)
        assert d.property("timerState") == "paused"

    def test_focus_events_emit_signals(self):
        d = TimerDisplay()
        d.setText("5 sec")
        focused = SignalCollector()
        edited = SignalCollector()
        d.focused.connect(focused)
        d.edited.connect(edited)

        d.focusInEvent(QFocusEvent(QEvent.Type.FocusIn, Qt.FocusReason.MouseFocusReason))
        d.focusOutEvent(QFocusEvent(QEvent.Type.FocusOut, Qt.FocusReason.MouseFocusReason))

        assert len(focused) == 1
        assert edited.items == ["5 sec"]

    def test_context_menu_focus_loss_not_reported(self):
        d = TimerDisplay()
        edited = SignalCollector()
        d.edited.connect(edited)
        d.focusOutEvent(QFocusEvent(QEvent.Type.FocusOut, Qt.FocusReason.PopupFocusReason))
        assert len(edited) == 0


# ═══════════════════════════════════════════════════════════════════════
#  CONTROLS
# ═══════════════════════════════════════════════════════════════════════


class TestControls:

    def test_autostart_renders_initial_value(self, make_widget):
        w = make_widget(seconds=100)
        assert w.state == TimerState.RUNNING
        assert w.display.text() == "1:40 min"
        assert w.display.property("timerState") == "running"

    def test_no_autostart(self, qapp):
        w = TimerWidget(TimerConfig(), autostart=False)
        assert w.engine is None
        assert w.state is None
        assert w.get_seconds() == 0

    def test_ticks_reach_display(self, make_widget, clock):
        w = make_widget(format="%M:%S")
        tick(w.engine, clock, 65)
        assert w.display.text() == "01:05"
        assert w.get_seconds() == 65

    def test_pause_and_resume(self, make_widget):
        w = make_widget()
        w.pause()
        assert w.state == TimerState.PAUSED
        assert w.display.property("timerState") == "paused"
        w.resume()
        assert w.state == TimerState.RUNNING

    def test_state_changed_forwarded(self, make_widget):
        w = make_widget()
        c = SignalCollector()
        w.state_changed.connect(c)
        w.pause()
        assert c.last == TimerState.PAUSED

    def test_start_is_noop_while_running(self, make_widget):
        w = make_widget()
        engine = w.engine
        w.start()
        assert w.engine is engine

    def test_start_after_countdown_creates_new_engine(self, make_widget, clock):
        w = make_widget(duration=2, countdown=True)
        first = w.engine
        tick(first, clock, 2)
        assert w.state == TimerState.STOPPED

        w.start()
        assert w.engine is not first
        assert w.state == TimerState.RUNNING
        assert w.get_seconds() == 0
        assert w.engine.config.duration == 2

    def test_reset_starts_over_from_offset(self, make_widget, clock):
        w = make_widget(seconds=10)
        first = w.engine
        tick(first, clock, 20)
        assert w.get_seconds() == 30

        w.reset()
        assert w.engine is not first
        assert first.state == TimerState.STOPPED
        assert w.get_seconds() == 10
        assert w.display.text() == "10 sec"

    def test_old_engine_detached_after_reset(self, make_widget, clock):
        w = make_widget()
        first = w.engine
        w.reset()
        first.render()
        tick(w.engine, clock, 3)
        assert w.display.text() == "3 sec"

    def test_remove_clears_display(self, make_widget):
        w = make_widget(seconds=5)
        engine = w.engine
        w.remove()
        assert w.engine is None
        assert engine.state == TimerState.STOPPED
        assert w.display.text() == ""
        assert w.get_seconds() == 0

    def test_controls_after_remove_are_harmless(self, make_widget):
        w = make_widget()
        w.remove()
        w.pause()
        w.resume()
        w.remove()
        assert w.engine is None


# ═══════════════════════════════════════════════════════════════════════
#  EDITABLE MODE
# ═══════════════════════════════════════════════════════════════════════


class TestEditable:

    def test_display_writable_when_editable(self, make_widget):
        assert not make_widget(editable=True).display.isReadOnly()
        assert make_widget().display.isReadOnly()

    def test_focus_pauses(self, make_widget):
        w = make_widget(editable=True)
        w.display.focused.emit()
        assert w.state == TimerState.PAUSED

    def test_blur_resumes_from_edited_time(self, make_widget, clock):
        w = make_widget(editable=True)
        tick(w.engine, clock, 7)
        w.display.focused.emit()

        w.display.setText("1:40 min")
        w.display.edited.emit(w.display.text())

        assert w.state == TimerState.RUNNING
        assert w.get_seconds() == 100
        tick(w.engine, clock, 2)
        assert w.get_seconds() == 102
        assert w.display.text() == "1:42 min"

    def test_unreadable_edit_stays_paused(self, make_widget, clock, caplog):
        w = make_widget(editable=True)
        tick(w.engine, clock, 7)
        w.display.focused.emit()

        w.display.setText("whenever")
        with caplog.at_level(logging.WARNING, logger="timekeeper.ui.timer_widget"):
            w.display.edited.emit(w.display.text())

        assert w.state == TimerState.PAUSED
        assert w.get_seconds() == 7
        assert w.display.text() == "7 sec"
        assert "whenever" in caplog.text

    def test_blur_without_pause_is_ignored(self, make_widget, clock):
        w = make_widget(editable=True)
        tick(w.engine, clock, 4)
        w.display.edited.emit("1:00:00")
        assert w.get_seconds() == 4

    def test_not_editable_ignores_focus(self, make_widget):
        w = make_widget()
        w.display.focused.emit()
        assert w.state == TimerState.RUNNING

    def test_context_menu_mid_edit_keeps_paused(self, make_widget, clock):
        w = make_widget(editable=True)
        tick(w.engine, clock, 3)
        w.display.focusInEvent(QFocusEvent(QEvent.Type.FocusIn, Qt.FocusReason.MouseFocusReason))
        w.display.setText("1:00 min")
        w.display.focusOutEvent(QFocusEvent(QEvent.Type.FocusOut, Qt.FocusReason.PopupFocusReason))
        assert w.state == TimerState.PAUSED
        assert w.get_seconds() == 3

        w.display.focusOutEvent(QFocusEvent(QEvent.Type.FocusOut, Qt.FocusReason.MouseFocusReason))
        assert w.state == TimerState.RUNNING
        assert w.get_seconds() == 60

    def test_click_through_keeps_explicit_pause(self, make_widget, clock):
        w = make_widget(editable=True)
        tick(w.engine, clock, 5)
        w.pause()
        w.display.focused.emit()
        w.display.edited.emit(w.display.text())
        assert w.state == TimerState.PAUSED
        assert w.get_seconds() == 5

    def test_resume_button_after_focus_pause_ends_edit(self, make_widget, clock):
        w = make_widget(editable=True)
        tick(w.engine, clock, 5)
        w.display.focused.emit()
        w.resume()
        w.pause()
        w.display.edited.emit("1:00:00")
        assert w.state == TimerState.PAUSED
        assert w.get_seconds() == 5

    def test_failed_edit_can_be_retried(self, make_widget, clock):
        w = make_widget(editable=True)
        w.display.focused.emit()
        w.display.edited.emit("whenever")
        assert w.state == TimerState.PAUSED
        w.display.edited.emit("2 sec")
        assert w.state == TimerState.RUNNING
        assert w.get_seconds() == 2
