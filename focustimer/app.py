"""Main application window for Focus Timer."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QMainWindow, QVBoxLayout, QHBoxLayout, QPushButton, QStatusBar,
)

from .audio.sounds import AlertDispatcher
from .settings import PreferenceStore, Settings, load_settings
from .timer.engine import TimerEngine
from .ui.background import BackgroundImage
from .ui.settings_panel import SettingsPanel
from .ui.styles import build_stylesheet
from .ui.timer_widget import TimerWidget


logger = logging.getLogger(__name__)


class FocusTimerApp(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        store: PreferenceStore | None = None,
        *,
        alerts: AlertDispatcher | None = None,
    ) -> None:
        super().__init__()
        self.setMinimumSize(420, 520)
        self.resize(520, 640)

        # ── settings ──────────────────────────────────────────────────
        self._store = store if store is not None else PreferenceStore()
        self._settings: Settings = load_settings(self._store)

        # ── engine + alert ────────────────────────────────────────────
        self._alerts = alerts if alerts is not None else AlertDispatcher(parent=self)
        self._timer_engine = TimerEngine(
            self, alert=self._alerts, sound_type=self._settings.alarm_sound,
        )
        self._timer_engine.expired.connect(self._on_expired)
        self._timer_engine.running_changed.connect(self._on_running_changed)

        self.setStyleSheet(build_stylesheet())

        # ── central widget (background image behind everything) ──────
        self._background = BackgroundImage()
        self.setCentralWidget(self._background)
        root_layout = QVBoxLayout(self._background)
        root_layout.setContentsMargins(16, 12, 16, 12)
        root_layout.setSpacing(8)

        # ── top bar: gear toggle ──────────────────────────────────────
        top_bar = QHBoxLayout()
        top_bar.addStretch()
        self._gear_btn = QPushButton("⚙️", self._background)
        self._gear_btn.setObjectName("gearButton")
        self._gear_btn.setToolTip("Settings")
        self._gear_btn.setCursor(Qt.CursorShape.PointingHandCursor)
        self._gear_btn.clicked.connect(self.toggle_settings)
        top_bar.addWidget(self._gear_btn)
        root_layout.addLayout(top_bar)

        # ── settings panel (hidden until toggled) ─────────────────────
        self._settings_panel = SettingsPanel(
            self._store,
            self._settings,
            self._background,
            sound_preview_callback=self._alerts.play,
        )
        self._settings_panel.setVisible(False)
        self._settings_panel.background_changed.connect(self._apply_background)
        self._settings_panel.title_changed.connect(self._apply_title)
        self._settings_panel.sound_changed.connect(self._apply_sound)
        root_layout.addWidget(self._settings_panel)

        # ── timer ─────────────────────────────────────────────────────
        self._timer_widget = TimerWidget(self._timer_engine, self._background)
        root_layout.addWidget(self._timer_widget, 1)

        # ── status bar ────────────────────────────────────────────────
        self._status_bar = QStatusBar(self)
        self.setStatusBar(self._status_bar)

        # ── apply stored preferences ──────────────────────────────────
        self._apply_title(self._settings.title)
        self._apply_background(self._settings.background_image or "")

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def engine(self) -> TimerEngine:
        return self._timer_engine

    @property
    def timer_widget(self) -> TimerWidget:
        return self._timer_widget

    @property
    def settings_panel(self) -> SettingsPanel:
        return self._settings_panel

    def toggle_settings(self) -> None:
        self._settings_panel.setVisible(self._settings_panel.isHidden())

    # ══════════════════════════════════════════════════════════════════
    #  PREFERENCES
    # ══════════════════════════════════════════════════════════════════

    def _apply_title(self, title: str) -> None:
        self._timer_widget.set_title(title)
        self.setWindowTitle(self._timer_widget.title)

    def _apply_sound(self, sound_type: str) -> None:
        self._timer_engine.sound_type = sound_type

    def _apply_background(self, data_uri: str) -> None:
        if not self._background.set_image(data_uri or None):
            logger.warning("Background is not a readable image; ignoring it")
            self._status_bar.showMessage("Background image could not be loaded")

    # ══════════════════════════════════════════════════════════════════
    #  TIMER SIGNALS
    # ══════════════════════════════════════════════════════════════════

    def _on_running_changed(self, running: bool) -> None:
        if running:
            self._status_bar.showMessage("Counting down…")
        elif self._timer_engine.remaining > 0:
            self._status_bar.showMessage("Stopped")
        else:
            self._status_bar.clearMessage()

    def _on_expired(self, _sound_type: str) -> None:
        self._status_bar.showMessage("Time's up!")
