"""Custom background image painted behind the timer.

The image is scaled to cover the whole widget (cropping the overflow)
and darkened with a translucent veil so the countdown stays legible.
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor, QPainter, QPixmap
from PyQt6.QtWidgets import QWidget

from ..images import decode_data_uri
from .styles import OVERLAY_RGBA


class BackgroundImage(QWidget):
    """Widget that paints an optional user-chosen background."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._pixmap: QPixmap | None = None

    # ── public API ─────────────────────────────────────────────────────

    @property
    def has_image(self) -> bool:
        return self._pixmap is not None

    def set_image(self, data_uri: str | None) -> bool:
        """Show the image encoded in *data_uri*; ``None`` clears it.

        Returns ``False`` when the URI could not be decoded into an image
        (the background is cleared in that case).
        """
        self._pixmap = None
        if data_uri:
            raw = decode_data_uri(data_uri)
            pixmap = QPixmap()
            if raw is not None and pixmap.loadFromData(raw):
                self._pixmap = pixmap
        self.update()
        return self._pixmap is not None or not data_uri

    # ── painting ───────────────────────────────────────────────────────

    def paintEvent(self, event) -> None:  # type: ignore[override]
        if self._pixmap is None:
            return
        w, h = self.width(), self.height()
        if w == 0 or h == 0:
            return

        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)

        scaled = self._pixmap.scaled(
            w, h,
            Qt.AspectRatioMode.KeepAspectRatioByExpanding,
            Qt.TransformationMode.SmoothTransformation,
        )
        x = (scaled.width() - w) // 2
        y = (scaled.height() - h) // 2
        painter.drawPixmap(0, 0, scaled, x, y, w, h)
        painter.fillRect(0, 0, w, h, QColor(*OVERLAY_RGBA))

        painter.end()
