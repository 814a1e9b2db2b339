"""Shared pytest fixtures for Pomodoro Timer tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from pomodoro.database.db import configure_engine, init_db
from pomodoro.timer.driver import SessionDriver
from pomodoro.timer.session import SessionController

from helpers import FakeClock


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def controller(clock):
    """Controller with short round numbers: 10 s work, 5 s rest, 20 % warning."""
    return SessionController(
        clock, work_duration=10, rest_duration=5, warning_ratio=0.2,
    )


@pytest.fixture
def driver(qapp, controller):
    """Driver with history recording ON (in-memory DB)."""
    return SessionDriver(controller, parent=None, history_enabled=True)


@pytest.fixture
def driver_no_db(qapp, controller):
    return SessionDriver(controller, parent=None, history_enabled=False)
