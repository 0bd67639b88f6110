"""Main application window for WorkoutTimer."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtWidgets import QMainWindow, QMessageBox, QStatusBar

from .timer.engine import (
    IntervalTimer, Phase, ProgressEvent, InvalidDurationError, parse_duration,
)
from .ui.timer_widget import TimerWidget
from .ui.styles import build_stylesheet
from .settings import Settings, load_settings, save_settings
from .audio.sounds import SoundManager


logger = logging.getLogger(__name__)

COUNTDOWN_CUE_SECONDS = 3

STATUS_MESSAGES: dict[Phase, str] = {
    Phase.WORKOUT: "Workout — push!",
    Phase.REST:    "Rest — breathe.",
}
IDLE_MESSAGE = "Ready when you are."


class WorkoutTimerApp(QMainWindow):
    """Main application window."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        sound_manager: SoundManager | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("WorkoutTimer")
        self.setMinimumSize(320, 400)

        # ── geometry save timer ────────────────────────────────────────
        self._geometry_save_timer = QTimer(self)
        self._geometry_save_timer.setSingleShot(True)
        self._geometry_save_timer.setInterval(500)
        self._geometry_save_timer.timeout.connect(self._save_geometry)

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings if settings is not None else load_settings()

        # ── engine ────────────────────────────────────────────────────
        self._timer = IntervalTimer(
            self,
            workout_text=str(self._settings.workout_seconds),
            rest_text=str(self._settings.rest_seconds),
        )

        # ── sound ─────────────────────────────────────────────────────
        self._sound_manager = sound_manager or SoundManager(parent=self)
        self._sound_manager.set_enabled(self._settings.sound_enabled)
        self._sound_manager.set_volume(self._settings.sound_volume)

        # ── UI ────────────────────────────────────────────────────────
        self._timer_widget = TimerWidget(self._timer, self)
        self.setCentralWidget(self._timer_widget)

        self._status_bar = QStatusBar(self)
        self.setStatusBar(self._status_bar)
        self._status_bar.showMessage(IDLE_MESSAGE)

        self.setStyleSheet(build_stylesheet())
        self._restore_geometry()
        self._connect_signals()

    # ══════════════════════════════════════════════════════════════════

    def _connect_signals(self) -> None:
        self._timer.phase_changed.connect(self._on_phase_changed)
        self._timer.running_changed.connect(self._on_running_changed)
        self._timer.progress.connect(self._on_progress)
        self._timer.duration_error.connect(self._show_input_error)
        self._timer_widget.start_failed.connect(self._show_input_error)

    @property
    def timer(self) -> IntervalTimer:
        return self._timer

    @property
    def timer_widget(self) -> TimerWidget:
        return self._timer_widget

    # ══════════════════════════════════════════════════════════════════
    #  TIMER SIGNALS
    # ══════════════════════════════════════════════════════════════════

    def _on_phase_changed(self, phase: Phase) -> None:
        if not self._timer.is_running:
            return
        self._status_bar.showMessage(STATUS_MESSAGES[phase])
        self._sound_manager.play_phase(phase)

    def _on_running_changed(self, running: bool) -> None:
        self._sound_manager.play("click")
        if not running:
            self._status_bar.showMessage(IDLE_MESSAGE)

    def _on_progress(self, event: ProgressEvent) -> None:
        if (
            self._timer.is_running
            and event.remaining_millis < event.total_millis
            and 0 < event.seconds_remaining <= COUNTDOWN_CUE_SECONDS
        ):
            self._sound_manager.play("countdown")

    def _show_input_error(self, message: str) -> None:
        self._status_bar.showMessage(message, 5000)
        QMessageBox.warning(self, "Invalid duration", message)

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW STATE
    # ══════════════════════════════════════════════════════════════════

    def _restore_geometry(self) -> None:
        s = self._settings
        if s.window_x is not None and s.window_y is not None:
            self.move(s.window_x, s.window_y)
        if s.window_width and s.window_height:
            self.resize(s.window_width, s.window_height)

    def _save_geometry(self) -> None:
        """Persist current window geometry to settings."""
        if not self.isVisible():
            return
        pos = self.pos()
        size = self.size()
        self._settings.window_x = pos.x()
        self._settings.window_y = pos.y()
        self._settings.window_width = size.width()
        self._settings.window_height = size.height()
        save_settings(self._settings)

    def _schedule_geometry_save(self) -> None:
        """Debounce geometry saves: restart the 500 ms timer on each move or resize."""
        self._geometry_save_timer.start()

    def remember_durations(self) -> None:
        """Keep the typed durations as next launch's defaults (valid ones only)."""
        for phase, attr in (
            (Phase.WORKOUT, "workout_seconds"),
            (Phase.REST, "rest_seconds"),
        ):
            try:
                setattr(self._settings, attr, parse_duration(self._timer.duration_text(phase), phase))
            except InvalidDurationError:
                logger.debug("Not saving unreadable %s duration", phase.value)

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._timer.stop()
        self.remember_durations()
        if self.isVisible():
            self._save_geometry()
        else:
            save_settings(self._settings)
        event.accept()

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        self._schedule_geometry_save()

    def moveEvent(self, event) -> None:  # type: ignore[override]
        super().moveEvent(event)
        self._schedule_geometry_save()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        """Space toggles start/stop, Escape stops."""
        key = event.key()
        if key == Qt.Key.Key_Space and not event.modifiers():
            if self._timer.is_running:
                self._timer_widget.request_stop()
            else:
                self._timer_widget.request_start()
            event.accept()
            return
        if key == Qt.Key.Key_Escape:
            self._timer_widget.request_stop()
            event.accept()
            return
        super().keyPressEvent(event)
