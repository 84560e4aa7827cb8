#!/usr/bin/env python3
"""Timekeeper entry point.

Run with:
    python main.py [DURATION]
    python -m timekeeper [DURATION]
"""

from timekeeper.__main__ import main


if __name__ == "__main__":
    main()
