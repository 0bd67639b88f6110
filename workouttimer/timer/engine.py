"""Interval timer state machine for WorkoutTimer.

States
------
IDLE              Not running, showing the Workout duration at 100 %.
RUNNING(WORKOUT)  Workout countdown ticking.
RUNNING(REST)     Rest countdown ticking.

Transitions
-----------
IDLE → RUNNING(WORKOUT)                   (start)
RUNNING(p) → RUNNING(p)                   (tick, time left)
RUNNING(p) → RUNNING(other p)             (tick reaches 0, auto-restart)
RUNNING(p) → RUNNING(p)                   (start again: fresh countdown)
Any → IDLE                                (stop)

There is no terminal state: the Workout/Rest loop runs until ``stop()``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum

from PyQt6.QtCore import QObject, QTimer, pyqtSignal


logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class Phase(Enum):
    WORKOUT = "Workout"
    REST = "Rest"

    def other(self) -> "Phase":
        return Phase.REST if self is Phase.WORKOUT else Phase.WORKOUT


# ── constants ─────────────────────────────────────────────────────────────

TICK_INTERVAL_MS = 1000
DEFAULT_WORKOUT_SECONDS = 30
DEFAULT_REST_SECONDS = 15


# ── errors ────────────────────────────────────────────────────────────────


class TimerError(Exception):
    """Base class for interval timer errors."""


class InvalidDurationError(TimerError, ValueError):
    """A duration input could not be read as a positive whole number."""

    def __init__(self, phase: Phase, text: str) -> None:
        self.phase = phase
        self.text = text
        super().__init__(
            f"{phase.value} duration must be a positive whole number "
            f"of seconds (got {text!r})"
        )


def parse_duration(text: str, phase: Phase = Phase.WORKOUT) -> int:
    """Parse a duration field into whole seconds.

    Surrounding whitespace is allowed.  Anything that is not a positive
    base-10 integer raises :class:`InvalidDurationError`.
    """
    stripped = str(text).strip()
    if not stripped.isdigit() or not stripped.isascii():
        raise InvalidDurationError(phase, str(text))
    seconds = int(stripped)
    if seconds <= 0:
        raise InvalidDurationError(phase, str(text))
    return seconds


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


# ── value types ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TimerSession:
    """Snapshot of the active (or just-reset) countdown."""

    phase: Phase
    total_millis: int
    remaining_millis: int
    running: bool = False
    countdown_id: int = 0

    @property
    def percent_remaining(self) -> int:
        if self.total_millis <= 0:
            return 0
        return _round_half_up(self.remaining_millis / self.total_millis * 100)

    @property
    def seconds_remaining(self) -> int:
        return _round_half_up(self.remaining_millis / 1000)


@dataclass(frozen=True)
class ProgressEvent:
    """One progress report handed to the presentation layer."""

    phase: Phase
    percent_remaining: int
    seconds_remaining: int
    remaining_millis: int
    total_millis: int
    countdown_id: int

    @classmethod
    def from_session(cls, session: TimerSession) -> "ProgressEvent":
        return cls(
            phase=session.phase,
            percent_remaining=session.percent_remaining,
            seconds_remaining=session.seconds_remaining,
            remaining_millis=session.remaining_millis,
            total_millis=session.total_millis,
            countdown_id=session.countdown_id,
        )


# ── engine ────────────────────────────────────────────────────────────────


class IntervalTimer(QObject):
    """Qt-based two-phase interval timer.

    Signals
    -------
    progress(event: ProgressEvent)
        Emitted on every tick, and once with the full duration whenever
        a countdown begins or the timer is stopped.
    phase_changed(phase: Phase)
        Emitted when a countdown for *phase* begins and on stop.
    countdown_completed(phase: Phase)
        Emitted when the countdown for *phase* runs out, before the flip.
    running_changed(running: bool)
        Emitted when the timer goes from idle to running or back.
    duration_error(message: str)
        Emitted when an automatic phase flip finds an unreadable input.
        The timer stops in that case.
    """

    progress = pyqtSignal(object)
    phase_changed = pyqtSignal(object)
    countdown_completed = pyqtSignal(object)
    running_changed = pyqtSignal(bool)
    duration_error = pyqtSignal(str)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        workout_text: str = str(DEFAULT_WORKOUT_SECONDS),
        rest_text: str = str(DEFAULT_REST_SECONDS),
    ) -> None:
        super().__init__(parent)

        # ── raw input text, parsed only at countdown start / stop ─────
        self._duration_texts: dict[Phase, str] = {
            Phase.WORKOUT: workout_text,
            Phase.REST: rest_text,
        }
        self._last_workout_seconds: int = self._seconds_or(
            Phase.WORKOUT, DEFAULT_WORKOUT_SECONDS,
        )

        total = self._last_workout_seconds * 1000
        self._session = TimerSession(
            phase=Phase.WORKOUT,
            total_millis=total,
            remaining_millis=total,
        )
        self._completed_count: int = 0

        # ── Qt timer ──────────────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self._on_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def session(self) -> TimerSession:
        """The current immutable session snapshot."""
        return self._session

    @property
    def phase(self) -> Phase:
        return self._session.phase

    @property
    def is_running(self) -> bool:
        return self._session.running

    @property
    def remaining_millis(self) -> int:
        return self._session.remaining_millis

    @property
    def total_millis(self) -> int:
        return self._session.total_millis

    @property
    def percent_remaining(self) -> int:
        return self._session.percent_remaining

    @property
    def seconds_remaining(self) -> int:
        return self._session.seconds_remaining

    @property
    def countdown_id(self) -> int:
        return self._session.countdown_id

    @property
    def completed_count(self) -> int:
        """Countdowns that ran out since the last start from idle."""
        return self._completed_count

    def duration_text(self, phase: Phase) -> str:
        return self._duration_texts[phase]

    def set_duration_text(self, phase: Phase, text: str) -> None:
        """Record the latest input for *phase*.

        Takes effect the next time a countdown for *phase* begins.
        """
        self._duration_texts[phase] = text

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Begin (or restart) the countdown for the current phase.

        Raises :class:`InvalidDurationError` if either input is not a
        positive whole number; nothing changes in that case.
        """
        seconds = {
            phase: parse_duration(self._duration_texts[phase], phase)
            for phase in (Phase.WORKOUT, Phase.REST)
        }
        was_running = self._session.running
        if not was_running:
            self._completed_count = 0

        self._qt_timer.stop()
        phase = self._session.phase
        logger.info(
            "%s %s countdown (%ds)",
            "Restarting" if was_running else "Starting",
            phase.value, seconds[phase],
        )
        self._begin_countdown(phase, seconds[phase] * 1000)
        self._qt_timer.start()
        if not was_running:
            self.running_changed.emit(True)

    def stop(self) -> None:
        """Cancel any countdown and reset to a full Workout display."""
        was_running = self._session.running
        self._qt_timer.stop()

        try:
            self._last_workout_seconds = parse_duration(
                self._duration_texts[Phase.WORKOUT], Phase.WORKOUT,
            )
        except InvalidDurationError:
            logger.debug(
                "Workout input %r unreadable on stop; keeping %ds",
                self._duration_texts[Phase.WORKOUT],
                self._last_workout_seconds,
            )

        total = self._last_workout_seconds * 1000
        self._session = TimerSession(
            phase=Phase.WORKOUT,
            total_millis=total,
            remaining_millis=total,
            running=False,
            countdown_id=self._session.countdown_id + 1,
        )
        if was_running:
            logger.info("Timer stopped")

        self.phase_changed.emit(Phase.WORKOUT)
        self.progress.emit(ProgressEvent.from_session(self._session))
        if was_running:
            self.running_changed.emit(False)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _begin_countdown(self, phase: Phase, total_millis: int) -> None:
        if phase is Phase.WORKOUT:
            self._last_workout_seconds = total_millis // 1000
        self._session = TimerSession(
            phase=phase,
            total_millis=total_millis,
            remaining_millis=total_millis,
            running=True,
            countdown_id=self._session.countdown_id + 1,
        )
        self.phase_changed.emit(phase)
        self.progress.emit(ProgressEvent.from_session(self._session))

    def _on_tick(self) -> None:
        if not self._session.running:
            return
        countdown_id = self._session.countdown_id
        remaining = max(0, self._session.remaining_millis - TICK_INTERVAL_MS)
        self._session = replace(self._session, remaining_millis=remaining)
        logger.debug(
            "%s tick: %dms left", self._session.phase.value, remaining,
        )
        self.progress.emit(ProgressEvent.from_session(self._session))
        # A slot may have stopped or restarted the timer.
        if self._session.countdown_id != countdown_id:
            return

        if remaining <= 0:
            self._finish_countdown()

    def _finish_countdown(self) -> None:
        finished = self._session.phase
        countdown_id = self._session.countdown_id
        self._completed_count += 1
        self.countdown_completed.emit(finished)
        if self._session.countdown_id != countdown_id:
            return

        next_phase = finished.other()
        try:
            seconds = parse_duration(self._duration_texts[next_phase], next_phase)
        except InvalidDurationError as exc:
            logger.warning("Cannot start %s countdown: %s", next_phase.value, exc)
            self.stop()
            self.duration_error.emit(str(exc))
            return

        logger.info(
            "%s finished; switching to %s (%ds)",
            finished.value, next_phase.value, seconds,
        )
        self._begin_countdown(next_phase, seconds * 1000)

    def _seconds_or(self, phase: Phase, fallback: int) -> int:
        try:
            return parse_duration(self._duration_texts[phase], phase)
        except InvalidDurationError:
            return fallback
