"""QSS stylesheet and phase colors for WorkoutTimer."""

from __future__ import annotations

from ..timer.engine import Phase

# ── phase colors (progress bar chunk) ───────────────────────────────────

PHASE_COLORS: dict[Phase, str] = {
    Phase.WORKOUT: "#FF6B6B",   # warm coral
    Phase.REST:    "#4ECDC4",   # cool teal
}
IDLE_COLOR = "#6C7086"

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


def phase_color(phase: Phase, running: bool) -> str:
    return PHASE_COLORS[phase] if running else IDLE_COLOR


def progress_chunk_style(color: str) -> str:
    """Per-widget override for the progress bar fill colour."""
    return (
        "QProgressBar::chunk {"
        f" background-color: {color};"
        " border-radius: 8px;"
        " }"
    )


# ── QSS builder ───────────────────────────────────────────────────────


def build_stylesheet(palette: dict[str, str] | None = None) -> str:
    p = palette or PALETTE
    return f"""
    QWidget {{
        background-color: {p['bg']};
        color: {p['text']};
        font-family: "Helvetica Neue", Arial;
        font-size: 14px;
    }}

    QLabel#phaseLabel {{
        font-size: 30px;
        font-weight: 700;
    }}

    QLabel#remainingLabel {{
        font-size: 48px;
        font-weight: 700;
    }}

    QLabel#fieldLabel {{
        color: {p['text_muted']};
        font-size: 12px;
    }}

    QLineEdit {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 8px;
        padding: 8px 10px;
        font-size: 16px;
    }}

    QLineEdit:focus {{
        border-color: {p['accent']};
    }}

    QLineEdit:disabled {{
        color: {p['text_muted']};
    }}

    QProgressBar {{
        background-color: {p['bg_secondary']};
        border: 1px solid {p['border']};
        border-radius: 8px;
        min-height: 16px;
        max-height: 16px;
    }}

    QPushButton {{
        background-color: {p['bg_secondary']};
        color: {p['text']};
        border: 1px solid {p['border']};
        border-radius: 10px;
        padding: 10px 24px;
        font-weight: 600;
    }}

    QPushButton:hover {{
        background-color: {p['surface']};
        border-color: {p['accent']};
    }}

    QPushButton#primaryButton {{
        background-color: {p['accent']};
        color: {p['bg']};
        border: none;
        font-size: 16px;
    }}

    QPushButton#primaryButton:hover {{
        background-color: {p['accent2']};
    }}

    QPushButton#dangerButton {{
        background-color: transparent;
        color: {p['danger']};
    }}

    QPushButton#dangerButton:hover {{
        background-color: {p['danger']};
        color: {p['bg']};
    }}

    QStatusBar {{
        color: {p['text_muted']};
        font-size: 12px;
    }}
    """
