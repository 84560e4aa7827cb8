"""Timekeeper: a count-up / countdown timer widget for PyQt6."""

__version__ = "0.1.0"
