"""Allow running Timekeeper as a module: python -m timekeeper [DURATION]."""

from __future__ import annotations

import argparse
import logging
import sys

from PyQt6.QtWidgets import (
    QApplication, QHBoxLayout, QPushButton, QVBoxLayout, QWidget,
)

from .settings import load_settings
from .timer.errors import TimerError
from .ui.timer_widget import TimerWidget

logger = logging.getLogger("timekeeper")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="timekeeper",
        description="Show a count-up timer, optionally firing after a duration.",
    )
    parser.add_argument("duration", nargs="?", default=None,
                        help='seconds or a duration such as "5m30s"')
    parser.add_argument("--format", default=None,
                        help='custom template, e.g. "%%H:%%M:%%S"')
    parser.add_argument("--countdown", action="store_true", default=None,
                        help="stop when the duration is reached")
    parser.add_argument("--repeat", action="store_true", default=None,
                        help="fire at every multiple of the duration")
    parser.add_argument("--editable", action="store_true", default=None,
                        help="allow editing the time by clicking on it")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


class TimerWindow(QWidget):
    """Timer display with pause/resume and reset buttons."""

    def __init__(self, timer: TimerWidget) -> None:
        super().__init__()
        self.setWindowTitle("Timekeeper")
        self.timer = timer

        root = QVBoxLayout(self)
        root.addWidget(timer)

        row = QHBoxLayout()
        self._pause_btn = QPushButton("Pause", self)
        self._reset_btn = QPushButton("Reset", self)
        row.addWidget(self._pause_btn)
        row.addWidget(self._reset_btn)
        root.addLayout(row)

        self._pause_btn.clicked.connect(self._on_pause_resume)
        self._reset_btn.clicked.connect(timer.reset)
        timer.state_changed.connect(self._on_state_changed)

    def _on_pause_resume(self) -> None:
        if self.timer.engine is not None and self.timer.engine.is_running:
            self.timer.pause()
        else:
            self.timer.resume()

    def _on_state_changed(self, state) -> None:
        running = self.timer.engine is not None and self.timer.engine.is_running
        self._pause_btn.setText("Pause" if running else "Resume")


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    overrides = {
        name: value
        for name, value in (
            ("duration", args.duration),
            ("format", args.format),
            ("countdown", args.countdown),
            ("repeat", args.repeat),
            ("editable", args.editable),
        )
        if value is not None
    }
    try:
        config = load_settings().to_config(**overrides)
    except TimerError as exc:
        sys.exit(f"timekeeper: {exc}")

    app = QApplication(sys.argv[:1])
    app.setApplicationName("Timekeeper")

    window = TimerWindow(TimerWidget(config))
    window.show()
    logger.info("Timekeeper ready!")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
