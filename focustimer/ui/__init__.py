"""UI package."""

from .timer_widget import TimerWidget, format_time
from .settings_panel import SettingsPanel
from .background import BackgroundImage

__all__ = [
    "TimerWidget",
    "format_time",
    "SettingsPanel",
    "BackgroundImage",
]
