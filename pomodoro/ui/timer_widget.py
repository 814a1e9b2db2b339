"""Control strip: four command buttons above a split work/rest bar.

Layout (top → bottom):
    - Start / Pause / Resume / Stop, each enabled only when the
      controller would accept the command
    - Work bar and rest bar side by side, widths proportional to the
      two phase durations, each labelled with its remaining ``M:SS``
"""

from __future__ import annotations

from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QProgressBar,
)

from ..timer.driver import SessionDriver
from ..timer.session import BarState, Phase, SessionView


BAR_RESOLUTION = 1000
WARNING_COLOR = "#E53935"

_WARNING_STYLE = f"QProgressBar::chunk {{ background-color: {WARNING_COLOR}; }}"


def format_time(seconds: float) -> str:
    """Whole minutes and seconds, e.g. ``24.0`` → ``"0:24"``."""
    m, s = divmod(int(max(0.0, seconds)), 60)
    return f"{m}:{s:02d}"


class TimerWidget(QWidget):
    """Buttons and bars bound to a :class:`SessionDriver`."""

    def __init__(self, driver: SessionDriver, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._driver = driver
        self._warn_shown: dict[Phase, bool] = {Phase.WORK: False, Phase.REST: False}
        self._build_ui()
        self._connect_signals()
        self._refresh(driver.view)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(8, 8, 8, 8)
        root.setSpacing(6)

        # ── commands ─────────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(6)

        self._start_btn = QPushButton("Start", self)
        self._pause_btn = QPushButton("Pause", self)
        self._resume_btn = QPushButton("Resume", self)
        self._stop_btn = QPushButton("Stop", self)

        for btn in (self._start_btn, self._pause_btn, self._resume_btn, self._stop_btn):
            btn_row.addWidget(btn)
        root.addLayout(btn_row)

        # ── bars ─────────────────────────────────────────────────────
        bar_row = QHBoxLayout()
        bar_row.setSpacing(0)

        self._work_bar = self._make_bar()
        self._rest_bar = self._make_bar()

        controller = self._driver.controller
        bar_row.addWidget(self._work_bar, _stretch(controller.duration_for(Phase.WORK)))
        bar_row.addWidget(self._rest_bar, _stretch(controller.duration_for(Phase.REST)))
        root.addLayout(bar_row)

    def _make_bar(self) -> QProgressBar:
        bar = QProgressBar(self)
        bar.setRange(0, BAR_RESOLUTION)
        bar.setTextVisible(True)
        return bar

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_btn.clicked.connect(self._driver.start)
        self._pause_btn.clicked.connect(self._driver.pause)
        self._resume_btn.clicked.connect(self._driver.resume)
        self._stop_btn.clicked.connect(self._driver.stop)

        self._driver.updated.connect(self._refresh)

    # ── slots ─────────────────────────────────────────────────────────────

    def _refresh(self, view: SessionView) -> None:
        self._start_btn.setEnabled(view.can_start)
        self._pause_btn.setEnabled(view.can_pause)
        self._resume_btn.setEnabled(view.can_resume)
        self._stop_btn.setEnabled(view.can_stop)

        self._apply_bar(Phase.WORK, self._work_bar, view.work_bar)
        self._apply_bar(Phase.REST, self._rest_bar, view.rest_bar)

    def _apply_bar(self, phase: Phase, bar: QProgressBar, state: BarState) -> None:
        bar.setValue(round(state.progress * BAR_RESOLUTION))
        bar.setFormat(format_time(state.remaining))
        if self._warn_shown[phase] != state.warn:
            self._warn_shown[phase] = state.warn
            bar.setStyleSheet(_WARNING_STYLE if state.warn else "")


def _stretch(duration: float) -> int:
    """Layout stretch factor for a bar; tenths of a second, at least 1."""
    return max(1, round(duration * 10))
