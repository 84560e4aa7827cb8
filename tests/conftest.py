"""Shared pytest fixtures for Timekeeper tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from timekeeper.timer.config import TimerConfig
from timekeeper.timer.engine import TimerEngine

from helpers import CallCounter, FakeClock


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture
def clock():
    """A hand-advanced clock starting at a fixed unix time."""
    return FakeClock(1_700_000_000)


@pytest.fixture
def callback():
    return CallCounter()


@pytest.fixture
def make_engine(qapp, clock, callback):
    """Factory for engines on the fake clock, with ``callback`` wired in."""
    created = []

    def _make(**options) -> TimerEngine:
        options.setdefault("callback", callback)
        engine = TimerEngine(TimerConfig(**options), clock=clock)
        created.append(engine)
        return engine

    yield _make
    for engine in created:
        engine.stop()


@pytest.fixture
def engine(make_engine):
    """Untimed engine counting up from zero."""
    return make_engine()
