"""Countdown state machine for Focus Timer.

State
-----
remaining     Seconds left on the clock, always within [0, MAX_SECONDS].
running       True only while the one-second tick schedule is armed.

Transitions
-----------
stopped → running        (start, only when remaining > 0)
running → stopped        (stop / reset)
running → stopped        (last tick: remaining hits 0, alert fires once)

Re-arm rule
-----------
Every command that changes state outside ``tick()`` cancels the pending
schedule first and arms a fresh one only if the new state is running.
There is never more than one live schedule per engine.
"""

from __future__ import annotations

import logging
from typing import Protocol

from PyQt6.QtCore import QObject, QTimer, pyqtSignal


logger = logging.getLogger(__name__)


# ── constants ─────────────────────────────────────────────────────────────

MAX_SECONDS = 90 * 60
ADJUST_SECONDS = 5 * 60  # the ±5 min buttons
TICK_INTERVAL_MS = 1000
DEFAULT_SOUND = "beep"


class AlertPlayer(Protocol):
    """Anything with a ``play(sound_type)`` method."""

    def play(self, sound_type: str) -> object: ...


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Single countdown driven by a recurring Qt timer.

    Signals
    -------
    remaining_changed(remaining_seconds: int)
        Emitted whenever the remaining time changes.
    running_changed(is_running: bool)
        Emitted on every run/stop transition.
    expired(sound_type: str)
        Emitted once when the countdown naturally reaches zero.
    """

    remaining_changed = pyqtSignal(int)
    running_changed = pyqtSignal(bool)
    expired = pyqtSignal(str)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        alert: AlertPlayer | None = None,
        sound_type: str = DEFAULT_SOUND,
    ) -> None:
        super().__init__(parent)

        self._alert = alert
        self._sound_type = sound_type

        # ── countdown state ───────────────────────────────────────────
        self._remaining: int = 0
        self._running: bool = False

        # ── Qt timer ──────────────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self.tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def remaining(self) -> int:
        """Seconds left on the clock."""
        return self._remaining

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_scheduled(self) -> bool:
        """True while a tick is pending on the Qt timer."""
        return self._qt_timer.isActive()

    @property
    def sound_type(self) -> str:
        """Sound identifier handed to the alert on expiry."""
        return self._sound_type

    @sound_type.setter
    def sound_type(self, value: str) -> None:
        self._sound_type = value

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Begin counting down.  Ignored when there is no time left."""
        if self._running or self._remaining <= 0:
            return
        self._commit(running=True)
        self._rearm()

    def stop(self) -> None:
        """Freeze the countdown where it is."""
        self._commit(running=False)
        self._rearm()

    def reset(self) -> None:
        """Stop and clear the clock back to 00:00."""
        self._commit(remaining=0, running=False)
        self._rearm()

    def add_duration(self, delta_seconds: int) -> None:
        """Add (or, with a negative delta, remove) time.

        The result is clamped to ``[0, MAX_SECONDS]``.  Run state is not
        checked here; the UI decides when adjusting is allowed.
        """
        remaining = max(0, min(MAX_SECONDS, self._remaining + delta_seconds))
        self._commit(remaining=remaining, running=self._running and remaining > 0)
        self._rearm()

    def tick(self) -> None:
        """Advance the countdown by one second."""
        if not self._running:
            return

        if self._remaining <= 1:
            self._qt_timer.stop()
            self._commit(remaining=0, running=False)
            self._fire_alert()
            return

        self._commit(remaining=self._remaining - 1)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _rearm(self) -> None:
        self._qt_timer.stop()
        if self._running and self._remaining > 0:
            self._qt_timer.start()

    def _fire_alert(self) -> None:
        sound = self._sound_type
        logger.info("Countdown finished, playing %r", sound)
        self.expired.emit(sound)
        if self._alert is None:
            return
        try:
            self._alert.play(sound)
        except Exception:
            logger.exception("Alert playback raised; countdown state kept")

    def _commit(
        self,
        *,
        remaining: int | None = None,
        running: bool | None = None,
    ) -> None:
        """Apply both fields first, then notify, so slots never see a
        running clock at 00:00."""
        remaining_changed = remaining is not None and remaining != self._remaining
        running_changed = running is not None and running != self._running
        if remaining_changed:
            self._remaining = remaining
        if running_changed:
            self._running = running

        if remaining_changed:
            self.remaining_changed.emit(self._remaining)
        if running_changed:
            self.running_changed.emit(self._running)
