"""Tests for the timer widget, settings panel, and main window.

Covers:
- MM:SS formatting
- Caller-side control gating (adjust locked while running, etc.)
- Settings panel writes every change to the preference store
- Main window applies stored preferences and routes expiry to the alert
"""

from __future__ import annotations

import pytest
from PyQt6.QtGui import QColor, QImage
from PyQt6.QtTest import QTest

from focustimer.app import FocusTimerApp
from focustimer.images import encode_data_uri
from focustimer.settings import (
    KEY_BACKGROUND, KEY_SOUND, KEY_TITLE, DEFAULT_TITLE, PreferenceStore,
    load_settings,
)
from focustimer.ui.background import BackgroundImage
from focustimer.ui.settings_panel import SettingsPanel
from focustimer.ui.timer_widget import TimerWidget, format_time

from helpers import SignalCollector, FakeAlert, run_ticks


def _write_png(path) -> None:
    img = QImage(8, 8, QImage.Format.Format_RGB32)
    img.fill(QColor("#CBA6F7"))
    assert img.save(str(path), "PNG")


# ═══════════════════════════════════════════════════════════════════════
#  FORMAT
# ═══════════════════════════════════════════════════════════════════════


class TestFormatTime:
    @pytest.mark.parametrize("seconds, text", [
        (0, "00:00"),
        (59, "00:59"),
        (60, "01:00"),
        (300, "05:00"),
        (5399, "89:59"),
        (5400, "90:00"),
        (-5, "00:00"),
    ])
    def test_format(self, seconds, text):
        assert format_time(seconds) == text


# ═══════════════════════════════════════════════════════════════════════
#  TIMER WIDGET
# ═══════════════════════════════════════════════════════════════════════


@pytest.fixture
def widget(engine):
    return TimerWidget(engine)


class TestTimerWidgetGating:
    def test_initial_controls(self, widget):
        assert widget.time_text == "00:00"
        assert not widget._minus_btn.isEnabled()
        assert widget._plus_btn.isEnabled()
        assert not widget._start_btn.isHidden()
        assert not widget._start_btn.isEnabled()
        assert widget._stop_btn.isHidden()
        assert widget._reset_btn.isEnabled()

    def test_plus_button_adds_five_minutes(self, widget, engine):
        widget._plus_btn.click()
        assert engine.remaining == 300
        assert widget.time_text == "05:00"
        assert widget._minus_btn.isEnabled()
        assert widget._start_btn.isEnabled()

    def test_minus_button_removes_five_minutes(self, widget, engine):
        widget._plus_btn.click()
        widget._plus_btn.click()
        widget._minus_btn.click()
        assert engine.remaining == 300

    def test_minus_disabled_again_at_zero(self, widget):
        widget._plus_btn.click()
        widget._minus_btn.click()
        assert not widget._minus_btn.isEnabled()

    def test_running_locks_adjust_controls(self, widget, engine):
        widget._plus_btn.click()
        widget._start_btn.click()
        assert engine.is_running
        assert not widget._plus_btn.isEnabled()
        assert not widget._minus_btn.isEnabled()
        assert widget._start_btn.isHidden()
        assert not widget._stop_btn.isHidden()

    def test_disabled_plus_click_does_nothing(self, widget, engine):
        widget._plus_btn.click()
        widget._start_btn.click()
        widget._plus_btn.click()
        assert engine.remaining == 300

    def test_stop_button(self, widget, engine):
        widget._plus_btn.click()
        widget._start_btn.click()
        run_ticks(engine, 3)
        widget._stop_btn.click()
        assert not engine.is_running
        assert widget.time_text == "04:57"
        assert widget._plus_btn.isEnabled()
        assert not widget._start_btn.isHidden()

    def test_reset_button(self, widget, engine):
        widget._plus_btn.click()
        widget._start_btn.click()
        widget._reset_btn.click()
        assert (engine.remaining, engine.is_running) == (0, False)
        assert widget.time_text == "00:00"
        assert not widget._start_btn.isEnabled()

    def test_display_follows_ticks(self, widget, engine):
        engine.add_duration(61)
        engine.start()
        engine.tick()
        assert widget.time_text == "01:00"

    def test_controls_unlock_after_expiry(self, widget, engine, alert):
        engine.add_duration(1)
        engine.start()
        engine.tick()
        assert alert.calls == ["beep"]
        assert widget.time_text == "00:00"
        assert widget._plus_btn.isEnabled()
        assert not widget._start_btn.isEnabled()

    def test_title(self, widget):
        assert widget.title == DEFAULT_TITLE
        widget.set_title("Reading")
        assert widget.title == "Reading"
        widget.set_title("")
        assert widget.title == DEFAULT_TITLE


# ═══════════════════════════════════════════════════════════════════════
#  SETTINGS PANEL
# ═══════════════════════════════════════════════════════════════════════


@pytest.fixture
def panel(qapp, store):
    return SettingsPanel(store, load_settings(store))


class TestSettingsPanel:
    def test_reflects_settings(self, qapp, store):
        store.set(KEY_TITLE, "Deep work")
        store.set(KEY_SOUND, "chime")
        panel = SettingsPanel(store, load_settings(store))
        assert panel._title_input.text() == "Deep work"
        assert panel.selected_sound == "chime"
        assert not panel._clear_bg_btn.isEnabled()

    def test_populate_does_not_write(self, tmp_path, qapp):
        from focustimer.settings import PreferenceStore
        path = tmp_path / "settings.json"
        store = PreferenceStore(path)
        SettingsPanel(store, load_settings(store))
        assert not path.exists()

    def test_title_edit_saved(self, panel, store):
        c = SignalCollector()
        panel.title_changed.connect(c)
        panel._on_title_edited("  Essay  ")
        assert store.get(KEY_TITLE) == "Essay"
        assert c.last == "Essay"

    def test_title_typed_with_unwritable_store(self, qapp, tmp_path, caplog):
        path = tmp_path / "settings.json"
        path.mkdir()
        store = PreferenceStore(path)
        panel = SettingsPanel(store, load_settings(store))
        c = SignalCollector()
        panel.title_changed.connect(c)

        QTest.keyClicks(panel._title_input, "x")

        assert "Could not save preferences" in caplog.text
        assert store.get(KEY_TITLE) == "x"
        assert c.last == "x"

    def test_blank_title_saves_default(self, panel, store):
        panel._on_title_edited("   ")
        assert store.get(KEY_TITLE) == DEFAULT_TITLE

    def test_sound_selection_saved(self, panel, store):
        c = SignalCollector()
        panel.sound_changed.connect(c)
        panel.select_sound("digital")
        assert store.get(KEY_SOUND) == "digital"
        assert panel.settings.alarm_sound == "digital"
        assert c.last == "digital"

    def test_preview_plays_selected_sound(self, qapp, store):
        alert = FakeAlert()
        panel = SettingsPanel(
            store, load_settings(store), sound_preview_callback=alert.play,
        )
        panel.select_sound("chime")
        panel._preview_btn.click()
        assert alert.calls == ["chime"]

    def test_background_upload_saved(self, panel, store, tmp_path):
        image = tmp_path / "bg.png"
        _write_png(image)
        c = SignalCollector()
        panel.background_changed.connect(c)

        assert panel.set_background_from_file(image) is True
        uri = store.get(KEY_BACKGROUND)
        assert uri == encode_data_uri(image)
        assert c.last == uri
        assert panel._clear_bg_btn.isEnabled()

    def test_missing_file_is_ignored(self, panel, store, tmp_path):
        assert panel.set_background_from_file(tmp_path / "gone.png") is False
        assert store.get(KEY_BACKGROUND) is None

    def test_clear_background(self, panel, store, tmp_path):
        image = tmp_path / "bg.png"
        _write_png(image)
        panel.set_background_from_file(image)
        c = SignalCollector()
        panel.background_changed.connect(c)

        panel._clear_bg_btn.click()
        assert KEY_BACKGROUND not in store
        assert panel.settings.background_image is None
        assert c.last == ""
        assert not panel._clear_bg_btn.isEnabled()


# ═══════════════════════════════════════════════════════════════════════
#  BACKGROUND
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestBackgroundImage:
    def test_loads_png(self, tmp_path):
        image = tmp_path / "bg.png"
        _write_png(image)
        bg = BackgroundImage()
        assert bg.set_image(encode_data_uri(image)) is True
        assert bg.has_image

    def test_clear(self, tmp_path):
        image = tmp_path / "bg.png"
        _write_png(image)
        bg = BackgroundImage()
        bg.set_image(encode_data_uri(image))
        assert bg.set_image(None) is True
        assert not bg.has_image

    def test_garbage_is_rejected(self):
        bg = BackgroundImage()
        assert bg.set_image("data:image/png;base64,AAAA") is False
        assert not bg.has_image


# ═══════════════════════════════════════════════════════════════════════
#  MAIN WINDOW
# ═══════════════════════════════════════════════════════════════════════


@pytest.mark.usefixtures("qapp")
class TestFocusTimerApp:
    def test_defaults(self, store):
        win = FocusTimerApp(store, alerts=FakeAlert())
        assert win.windowTitle() == "Focus Timer"
        assert win.engine.sound_type == "beep"
        assert win.engine.remaining == 0
        assert win.settings_panel.isHidden()

    def test_applies_stored_preferences(self, store, tmp_path):
        image = tmp_path / "bg.png"
        _write_png(image)
        store.set(KEY_TITLE, "Exam prep")
        store.set(KEY_SOUND, "chime")
        store.set(KEY_BACKGROUND, encode_data_uri(image))

        win = FocusTimerApp(store, alerts=FakeAlert())
        assert win.windowTitle() == "Exam prep"
        assert win.timer_widget.title == "Exam prep"
        assert win.engine.sound_type == "chime"
        assert win._background.has_image

    def test_corrupt_background_reported(self, store):
        store.set(KEY_BACKGROUND, "data:image/png;base64,AAAA")
        win = FocusTimerApp(store, alerts=FakeAlert())
        assert not win._background.has_image
        assert "could not be loaded" in win._status_bar.currentMessage()

    def test_gear_toggles_settings(self, store):
        win = FocusTimerApp(store, alerts=FakeAlert())
        win._gear_btn.click()
        assert not win.settings_panel.isHidden()
        win._gear_btn.click()
        assert win.settings_panel.isHidden()

    def test_sound_change_reaches_engine(self, store):
        alert = FakeAlert()
        win = FocusTimerApp(store, alerts=alert)
        win.settings_panel.select_sound("digital")
        assert win.engine.sound_type == "digital"

        win.engine.add_duration(1)
        win.engine.start()
        win.engine.tick()
        assert alert.calls == ["digital"]
        assert win._status_bar.currentMessage() == "Time's up!"

    def test_title_change_updates_window(self, store):
        win = FocusTimerApp(store, alerts=FakeAlert())
        win.settings_panel._on_title_edited("Piano practice")
        assert win.windowTitle() == "Piano practice"
        assert win.timer_widget.title == "Piano practice"

    def test_countdown_state_not_persisted(self, store):
        win = FocusTimerApp(store, alerts=FakeAlert())
        win.engine.add_duration(600)
        win.engine.start()

        again = FocusTimerApp(store, alerts=FakeAlert())
        assert again.engine.remaining == 0
        assert again.engine.is_running is False
