"""UI package."""

from .timer_widget import TimerDisplay, TimerWidget

__all__ = [
    "TimerDisplay",
    "TimerWidget",
]
