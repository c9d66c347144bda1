"""QSS stylesheet and palette for Focus Timer."""

from __future__ import annotations


PALETTE: dict[str, str] = {
    "bg":           "#1A1A2E",
    "bg_secondary": "#232340",
    "surface":      "#2A2A4A",
    "accent":       "#CBA6F7",
    "accent2":      "#89B4FA",
    "text":         "#E2E2F0",
    "text_muted":   "#7A7A9A",
    "danger":       "#F38BA8",
    "border":       "#313154",
}

# Dark veil painted over a custom background image so text stays readable.
OVERLAY_RGBA = (0, 0, 0, 110)


_resolved_font: str | None = None


def resolve_font_family() -> str:
    """Detect the best available system font.  Must be called after
    QApplication is created (font database needs the app context)."""
    global _resolved_font
    if _resolved_font is None:
        from PyQt6.QtGui import QFontDatabase
        families = set(QFontDatabase.families())
        for candidate in ("SF Pro", ".AppleSystemUIFont"):
            if candidate in families:
                _resolved_font = candidate
                break
        else:
            _resolved_font = "Helvetica Neue"
    return _resolved_font


# ── QSS builder ───────────────────────────────────────────────────────


def build_stylesheet(palette: dict[str, str] | None = None) -> str:
    p = palette or PALETTE
    font = resolve_font_family()
    return f"""
    /* ── global ─────────────────────────────────── */
    QWidget {{
        color: {p['text']};
        font-family: "{font}", "Helvetica Neue", Arial;
        font-size: 14px;
    }}

    QMainWindow {{
        background-color: {p['bg']};
    }}

    /* ── headings ────────────────────────────────── */
    QLabel#titleLabel {{
        font-size: 26px;
        font-weight: 700;
        background: transparent;
    }}

    QLabel#timeLabel {{
        font-size: 96px;
        font-weight: 300;
        background: transparent;
    }}

    /* ── buttons ─────────────────────────────────── */
    QPushButton {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 10px 24px;
        font-size: 14px;
        font-weight: 600;
    }}

    QPushButton:hover {{
        background-color: {p['surface']};
        border-color: {p['accent']};
    }}

    QPushButton:disabled {{
        color: {p['text_muted']};
        border-color: {p['bg_secondary']};
    }}

    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: {p['bg']};
        border: none;
        font-size: 17px;
        padding: 14px 40px;
        border-radius: 12px;
        font-weight: 700;
    }}

    QPushButton#primaryButton:hover {{
        background-color: {p['accent2']};
    }}

    QPushButton#primaryButton:disabled {{
        background-color: {p['surface']};
        color: {p['text_muted']};
    }}

    QPushButton#dangerButton {{
        background-color: {p['danger']};
        color: {p['bg']};
        border: none;
        font-size: 17px;
        padding: 14px 40px;
        border-radius: 12px;
        font-weight: 700;
    }}

    QPushButton#secondaryButton {{
        background-color: transparent;
        color: {p['text_muted']};
        border: 1px solid {p['border']};
        font-size: 13px;
        padding: 8px 16px;
        border-radius: 8px;
    }}

    QPushButton#secondaryButton:hover {{
        color: {p['text']};
        border-color: {p['text_muted']};
    }}

    QPushButton#gearButton {{
        background-color: transparent;
        border: none;
        font-size: 20px;
        padding: 4px;
    }}

    /* ── inputs ──────────────────────────────────── */
    QLineEdit, QComboBox {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 8px;
        padding: 6px 12px;
        font-size: 13px;
    }}

    QLineEdit:focus, QComboBox:focus {{
        border-color: {p['accent']};
    }}

    /* ── settings panel ──────────────────────────── */
    QFrame#settingsPanel {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 12px;
    }}

    /* ── status bar ──────────────────────────────── */
    QStatusBar {{
        background-color: {p['bg']};
        color: {p['text_muted']};
        font-size: 12px;
        border-top: 1px solid {p['border']};
    }}
    """
