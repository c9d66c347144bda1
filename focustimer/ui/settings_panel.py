"""Settings panel for Focus Timer.

An inline panel (toggled from the gear button) for the background image,
the display title, and the alarm sound.  Every change is written to the
preference store straight away and announced through a signal so the
window can apply it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import (
    QFrame, QVBoxLayout, QHBoxLayout, QFormLayout,
    QLabel, QLineEdit, QComboBox, QPushButton, QFileDialog, QWidget,
)

from ..audio.sounds import SoundType, resolve_sound_type
from ..images import IMAGE_FILE_FILTER, encode_data_uri
from ..settings import (
    PreferenceStore, Settings,
    KEY_BACKGROUND, KEY_TITLE, KEY_SOUND, DEFAULT_TITLE,
)


logger = logging.getLogger(__name__)


SOUND_LABELS: dict[SoundType, str] = {
    SoundType.BEEP:    "Beep",
    SoundType.CHIME:   "Chime",
    SoundType.DIGITAL: "Digital",
}


class SettingsPanel(QFrame):
    """Preference controls; hidden until the gear button is pressed."""

    background_changed = pyqtSignal(str)   # data URI, "" when cleared
    title_changed = pyqtSignal(str)
    sound_changed = pyqtSignal(str)

    def __init__(
        self,
        store: PreferenceStore,
        settings: Settings,
        parent: QWidget | None = None,
        *,
        sound_preview_callback: Callable[[str], object] | None = None,
    ) -> None:
        super().__init__(parent)
        self.setObjectName("settingsPanel")

        self._store = store
        self._settings = settings
        self._sound_preview = sound_preview_callback

        self._build_ui()
        self._populate()
        self._connect_signals()

    # ══════════════════════════════════════════════════════════════════
    #  BUILD UI
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(20, 16, 20, 16)
        root.setSpacing(12)

        # ── background ───────────────────────────────────────────────
        root.addWidget(self._section_label("Background Image"))
        bg_row = QHBoxLayout()
        bg_row.setSpacing(10)
        self._upload_btn = QPushButton("Upload File…")
        self._upload_btn.setObjectName("secondaryButton")
        self._clear_bg_btn = QPushButton("Clear Background")
        self._clear_bg_btn.setObjectName("secondaryButton")
        bg_row.addWidget(self._upload_btn)
        bg_row.addWidget(self._clear_bg_btn)
        root.addLayout(bg_row)

        # ── title + sound ────────────────────────────────────────────
        form = QFormLayout()
        form.setContentsMargins(0, 0, 0, 0)
        form.setHorizontalSpacing(20)
        form.setVerticalSpacing(10)

        self._title_input = QLineEdit()
        self._title_input.setPlaceholderText(DEFAULT_TITLE)
        self._title_input.setMaxLength(100)
        form.addRow("Title:", self._title_input)

        sound_row = QHBoxLayout()
        sound_row.setSpacing(10)
        self._sound_combo = QComboBox()
        for sound_type, label in SOUND_LABELS.items():
            self._sound_combo.addItem(label, sound_type.value)
        self._preview_btn = QPushButton("Preview")
        self._preview_btn.setObjectName("secondaryButton")
        sound_row.addWidget(self._sound_combo)
        sound_row.addWidget(self._preview_btn)

        sound_wrapper = QWidget()
        sound_wrapper.setLayout(sound_row)
        form.addRow("Alarm sound:", sound_wrapper)

        root.addLayout(form)

    @staticmethod
    def _section_label(text: str) -> QLabel:
        lbl = QLabel(text)
        lbl.setStyleSheet("font-size: 15px; font-weight: 700;")
        return lbl

    def _populate(self) -> None:
        s = self._settings
        self._title_input.setText(s.title)
        index = self._sound_combo.findData(resolve_sound_type(s.alarm_sound).value)
        self._sound_combo.setCurrentIndex(max(0, index))
        self._clear_bg_btn.setEnabled(s.background_image is not None)

    def _connect_signals(self) -> None:
        self._upload_btn.clicked.connect(self._on_upload_clicked)
        self._clear_bg_btn.clicked.connect(self.clear_background)
        self._title_input.textEdited.connect(self._on_title_edited)
        self._sound_combo.currentIndexChanged.connect(self._on_sound_selected)
        self._preview_btn.clicked.connect(self._on_preview_clicked)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def selected_sound(self) -> str:
        return self._sound_combo.currentData()

    def select_sound(self, sound_type: str) -> None:
        index = self._sound_combo.findData(resolve_sound_type(sound_type).value)
        self._sound_combo.setCurrentIndex(index)

    def set_background_from_file(self, path: Path | str) -> bool:
        """Encode *path* as a data URI and store it as the background."""
        try:
            data_uri = encode_data_uri(path)
        except OSError as exc:
            logger.warning("Could not read background image %s: %s", path, exc)
            return False
        self._settings.background_image = data_uri
        self._store.set(KEY_BACKGROUND, data_uri)
        self._clear_bg_btn.setEnabled(True)
        self.background_changed.emit(data_uri)
        return True

    def clear_background(self) -> None:
        self._settings.background_image = None
        self._store.remove(KEY_BACKGROUND)
        self._clear_bg_btn.setEnabled(False)
        self.background_changed.emit("")

    # ══════════════════════════════════════════════════════════════════
    #  CHANGE HANDLERS — save immediately
    # ══════════════════════════════════════════════════════════════════

    def _on_upload_clicked(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self, "Choose background image", "", IMAGE_FILE_FILTER,
        )
        if path:
            self.set_background_from_file(path)

    def _on_title_edited(self, text: str) -> None:
        title = text.strip() or DEFAULT_TITLE
        self._settings.title = title
        self._store.set(KEY_TITLE, title)
        self.title_changed.emit(title)

    def _on_sound_selected(self, _index: int) -> None:
        sound = self.selected_sound
        self._settings.alarm_sound = sound
        self._store.set(KEY_SOUND, sound)
        self.sound_changed.emit(sound)

    def _on_preview_clicked(self) -> None:
        if self._sound_preview:
            self._sound_preview(self.selected_sound)
