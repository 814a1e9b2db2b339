"""Logging setup for the application.

Modules log through ``logging.getLogger(__name__)``; everything lands
under the ``pomodoro`` logger, which :func:`setup_logging` wires to a
rotating file (and optionally the console) once at startup.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .settings import APP_SUPPORT_DIR

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s:%(filename)s:%(lineno)d] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_DIR = APP_SUPPORT_DIR / "logs"


def setup_logging(
        name: str = "pomodoro",
        level: int = logging.INFO,
        log_dir: Path | None = None,
        max_bytes: int = 1024 * 1024,
        backup_count: int = 3,
        persistent: bool = True,
        console: bool = False,
) -> logging.Logger:
    """Attach handlers to the package logger.  Safe to call repeatedly."""
    logger = logging.getLogger(name)
    logger.propagate = False
    logger.setLevel(level)

    fmt = logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT)

    persistent_handler_name = f"{name}:persistent"
    if persistent and not any(h.get_name() == persistent_handler_name for h in logger.handlers):
        log_dir = log_dir or LOG_DIR
        log_dir.mkdir(parents=True, exist_ok=True)
        persistent_handler = RotatingFileHandler(
            filename=log_dir / f"{name}.log",
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        persistent_handler.setLevel(level)
        persistent_handler.setFormatter(fmt)
        persistent_handler.set_name(persistent_handler_name)
        logger.addHandler(persistent_handler)

    console_handler_name = f"{name}:console"
    if console and not any(h.get_name() == console_handler_name for h in logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(fmt)
        console_handler.set_name(console_handler_name)
        logger.addHandler(console_handler)

    return logger
