"""Allow running the timer as a module: python -m pomodoro."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .app import PomodoroApp
from .database.db import init_db
from .logger import setup_logging
from .settings import load_settings


def main() -> None:
    settings = load_settings()
    log = setup_logging(console=settings.log_to_console)
    if settings.history_enabled:
        init_db()

    app = QApplication(sys.argv)
    app.setApplicationName("Pomodoro Timer")
    app.setOrganizationName("Pomodoro Timer")

    window = PomodoroApp(settings)
    window.show()
    window.start_ticking()
    log.info("Pomodoro Timer ready")

    exit_code = app.exec()
    logging.shutdown()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
