"""Tests for the timer screen and the main window wiring."""

from __future__ import annotations

import pytest
from PyQt6.QtCore import QEvent, Qt
from PyQt6.QtGui import QCloseEvent, QKeyEvent

from workouttimer.app import WorkoutTimerApp, STATUS_MESSAGES, IDLE_MESSAGE
from workouttimer.audio.sounds import SoundManager
from workouttimer.settings import Settings, load_settings
from workouttimer.timer.engine import Phase, ProgressEvent
from workouttimer.ui.timer_widget import TimerWidget

from helpers import SignalCollector, tick


@pytest.fixture
def widget(timer):
    return TimerWidget(timer)


@pytest.fixture
def sounds(qapp, tmp_path):
    mgr = SoundManager(parent=None, sounds_dir=tmp_path / "cues")
    played: list[str] = []
    mgr.play = played.append  # type: ignore[method-assign]
    mgr.played = played
    return mgr


@pytest.fixture
def window(qapp, sounds, monkeypatch):
    warnings: list[str] = []
    monkeypatch.setattr(
        "workouttimer.app.QMessageBox.warning",
        lambda parent, title, text: warnings.append(text),
    )
    win = WorkoutTimerApp(
        Settings(workout_seconds=20, rest_seconds=10),
        sound_manager=sounds,
    )
    win.warnings = warnings
    return win


# ═══════════════════════════════════════════════════════════════════════════
#  TIMER WIDGET
# ═══════════════════════════════════════════════════════════════════════════


class TestTimerWidget:

    def test_initial_display(self, widget):
        assert widget.phase_text == "Workout"
        assert widget.progress_value == 100
        assert widget.remaining_text == "30"

    def test_inputs_prefilled_from_engine(self, widget):
        assert widget.duration_input(Phase.WORKOUT).text() == "30"
        assert widget.duration_input(Phase.REST).text() == "15"

    def test_typing_updates_engine(self, widget, timer):
        widget.duration_input(Phase.REST).setText("25")
        assert timer.duration_text(Phase.REST) == "25"

    def test_start_button_starts_engine(self, widget, timer):
        widget._start_btn.click()
        assert timer.is_running
        assert widget._start_btn.text() == "Restart"

    def test_tick_updates_display(self, widget, timer):
        widget._start_btn.click()
        tick(timer)
        assert widget.progress_value == 97
        assert widget.remaining_text == "29"

    def test_phase_flip_updates_label(self, widget, timer):
        widget._start_btn.click()
        tick(timer, 30)
        assert widget.phase_text == "Rest"
        assert widget.progress_value == 100
        assert widget.remaining_text == "15"

    def test_stop_button_resets_display(self, widget, timer):
        widget._start_btn.click()
        tick(timer, 33)
        widget.duration_input(Phase.WORKOUT).setText("40")
        widget._stop_btn.click()
        assert not timer.is_running
        assert widget.phase_text == "Workout"
        assert widget.progress_value == 100
        assert widget.remaining_text == "40"
        assert widget._start_btn.text() == "Start"

    def test_invalid_input_reports_start_failed(self, widget, timer):
        failed = SignalCollector()
        widget.start_failed.connect(failed)
        widget.duration_input(Phase.WORKOUT).setText("")
        widget._start_btn.click()
        assert len(failed) == 1
        assert "Workout" in failed.last
        assert not timer.is_running

    def test_stale_event_ignored(self, widget, timer):
        widget._start_btn.click()
        tick(timer, 2)
        stale = ProgressEvent(
            phase=Phase.WORKOUT,
            percent_remaining=5,
            seconds_remaining=1,
            remaining_millis=1000,
            total_millis=30000,
            countdown_id=timer.countdown_id - 1,
        )
        widget._on_progress(stale)
        assert widget.progress_value == 93
        assert widget.remaining_text == "28"


# ═══════════════════════════════════════════════════════════════════════════
#  MAIN WINDOW
# ═══════════════════════════════════════════════════════════════════════════


class TestMainWindow:

    def test_engine_uses_settings_durations(self, window):
        assert window.timer.duration_text(Phase.WORKOUT) == "20"
        assert window.timer.duration_text(Phase.REST) == "10"
        assert window.timer_widget.remaining_text == "20"

    def test_idle_status_message(self, window):
        assert window.statusBar().currentMessage() == IDLE_MESSAGE

    def test_start_shows_phase_status_and_plays_cues(self, window, sounds):
        window.timer_widget.request_start()
        assert window.statusBar().currentMessage() == STATUS_MESSAGES[Phase.WORKOUT]
        assert "workout_start" in sounds.played
        assert "click" in sounds.played

    def test_flip_plays_rest_cue(self, window, sounds):
        window.timer_widget.request_start()
        sounds.played.clear()
        tick(window.timer, 20)
        assert "rest_start" in sounds.played
        assert window.statusBar().currentMessage() == STATUS_MESSAGES[Phase.REST]

    def test_final_seconds_play_countdown_cue(self, window, sounds):
        window.timer_widget.request_start()
        sounds.played.clear()
        tick(window.timer, 16)
        assert sounds.played.count("countdown") == 0
        tick(window.timer, 3)  # 3, 2, 1 seconds left
        assert sounds.played.count("countdown") == 3

    def test_stop_returns_to_idle_message(self, window):
        window.timer_widget.request_start()
        window.timer_widget.request_stop()
        assert window.statusBar().currentMessage() == IDLE_MESSAGE

    def test_invalid_start_shows_warning(self, window):
        window.timer_widget.duration_input(Phase.REST).setText("")
        window.timer_widget.request_start()
        assert len(window.warnings) == 1
        assert "Rest" in window.warnings[0]
        assert not window.timer.is_running

    def test_space_toggles_and_escape_stops(self, window):
        space = QKeyEvent(QEvent.Type.KeyPress, Qt.Key.Key_Space, Qt.KeyboardModifier.NoModifier)
        window.keyPressEvent(space)
        assert window.timer.is_running
        window.keyPressEvent(space)
        assert not window.timer.is_running

        window.keyPressEvent(space)
        escape = QKeyEvent(QEvent.Type.KeyPress, Qt.Key.Key_Escape, Qt.KeyboardModifier.NoModifier)
        window.keyPressEvent(escape)
        assert not window.timer.is_running

    def test_close_saves_valid_durations(self, window):
        window.timer_widget.duration_input(Phase.WORKOUT).setText("50")
        window.timer_widget.duration_input(Phase.REST).setText("")
        window.closeEvent(QCloseEvent())
        saved = load_settings()
        assert saved.workout_seconds == 50
        assert saved.rest_seconds == 10

    def test_resize_schedules_geometry_save(self, window):
        window._geometry_save_timer.stop()
        window._schedule_geometry_save()
        assert window._geometry_save_timer.isActive()

    def test_close_stops_running_timer(self, window):
        window.timer_widget.request_start()
        window.closeEvent(QCloseEvent())
        assert not window.timer.is_running
