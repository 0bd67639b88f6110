"""Shared pytest fixtures for WorkoutTimer tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from workouttimer.timer.engine import IntervalTimer


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep settings and cached sounds out of the real home directory."""
    monkeypatch.setattr("workouttimer.settings.APP_SUPPORT_DIR", tmp_path)
    monkeypatch.setattr("workouttimer.settings.SETTINGS_PATH", tmp_path / "settings.json")
    monkeypatch.setattr("workouttimer.audio.sounds.SOUNDS_DIR", tmp_path / "sounds")
    yield tmp_path


@pytest.fixture
def timer(qapp):
    """Fresh IntervalTimer with W=30, R=15."""
    return IntervalTimer(parent=None, workout_text="30", rest_text="15")


@pytest.fixture
def short_timer(qapp):
    """Fresh IntervalTimer with W=3, R=2 for quick phase cycling."""
    return IntervalTimer(parent=None, workout_text="3", rest_text="2")
