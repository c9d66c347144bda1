"""Main timer display widget.

Layout (top → bottom):
    - Title
    - MM:SS countdown
    - Adjust row: -5 min / +5 min
    - Action row: Start or Stop, Reset

Control gating lives here, not in the engine: the adjust buttons are
locked while the timer runs, "-5 min" is locked at 00:00, and Start is
locked when there is nothing to count down.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
)

from ..settings import DEFAULT_TITLE
from ..timer.engine import TimerEngine, ADJUST_SECONDS


def format_time(seconds: int) -> str:
    """``MM:SS`` with zero-padded minutes."""
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


class TimerWidget(QWidget):
    """Countdown display plus its controls."""

    def __init__(self, engine: TimerEngine, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._build_ui()
        self._connect_signals()
        self._refresh_display(engine.remaining)
        self._update_controls()

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(32, 24, 32, 28)
        layout.setSpacing(0)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._title_label = QLabel(DEFAULT_TITLE, self)
        self._title_label.setObjectName("titleLabel")
        self._title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._title_label)

        layout.addSpacing(12)

        self._time_label = QLabel("00:00", self)
        self._time_label.setObjectName("timeLabel")
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._time_label)

        layout.addSpacing(20)

        # ── adjust row ───────────────────────────────────────────────
        adjust_row = QHBoxLayout()
        adjust_row.setSpacing(12)
        adjust_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        minutes = ADJUST_SECONDS // 60
        self._minus_btn = QPushButton(f"-{minutes} min", self)
        self._minus_btn.setObjectName("secondaryButton")
        self._plus_btn = QPushButton(f"+{minutes} min", self)
        self._plus_btn.setObjectName("secondaryButton")

        adjust_row.addWidget(self._minus_btn)
        adjust_row.addWidget(self._plus_btn)
        layout.addLayout(adjust_row)

        layout.addSpacing(16)

        # ── action row ───────────────────────────────────────────────
        action_row = QHBoxLayout()
        action_row.setSpacing(12)
        action_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._start_btn = QPushButton("Start", self)
        self._start_btn.setObjectName("primaryButton")
        self._stop_btn = QPushButton("Stop", self)
        self._stop_btn.setObjectName("dangerButton")
        self._reset_btn = QPushButton("Reset", self)

        action_row.addWidget(self._start_btn)
        action_row.addWidget(self._stop_btn)
        action_row.addWidget(self._reset_btn)
        layout.addLayout(action_row)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_btn.clicked.connect(self._engine.start)
        self._stop_btn.clicked.connect(self._engine.stop)
        self._reset_btn.clicked.connect(self._engine.reset)
        self._plus_btn.clicked.connect(lambda: self._engine.add_duration(ADJUST_SECONDS))
        self._minus_btn.clicked.connect(lambda: self._engine.add_duration(-ADJUST_SECONDS))

        self._engine.remaining_changed.connect(self._refresh_display)
        self._engine.remaining_changed.connect(self._update_controls)
        self._engine.running_changed.connect(self._update_controls)

    # ── public API ────────────────────────────────────────────────────────

    def set_title(self, title: str) -> None:
        self._title_label.setText(title or DEFAULT_TITLE)

    @property
    def title(self) -> str:
        return self._title_label.text()

    @property
    def time_text(self) -> str:
        return self._time_label.text()

    # ── slots ─────────────────────────────────────────────────────────────

    def _update_controls(self, *_args) -> None:
        running = self._engine.is_running
        has_time = self._engine.remaining > 0

        self._minus_btn.setEnabled(not running and has_time)
        self._plus_btn.setEnabled(not running)

        self._start_btn.setVisible(not running)
        self._start_btn.setEnabled(has_time)
        self._stop_btn.setVisible(running)

    def _refresh_display(self, remaining: int) -> None:
        self._time_label.setText(format_time(remaining))
