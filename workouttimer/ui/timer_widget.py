"""Main timer screen.

Layout (top → bottom):
    - Phase label ("Workout" / "Rest")
    - Progress bar (100 → 0 over each countdown)
    - Remaining seconds
    - Workout / Rest duration inputs
    - Stop / Start buttons
"""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QIntValidator
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGridLayout,
    QLabel, QPushButton, QLineEdit, QProgressBar,
)

from ..timer.engine import IntervalTimer, InvalidDurationError, Phase, ProgressEvent
from .styles import phase_color, progress_chunk_style


MAX_DURATION_SECONDS = 24 * 60 * 60


class TimerWidget(QWidget):
    """Duration inputs, progress display and Start/Stop controls."""

    start_failed = pyqtSignal(str)

    def __init__(
        self,
        engine: IntervalTimer,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._build_ui()
        self._connect_signals()
        self._show_session()

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(28, 24, 28, 24)
        layout.setSpacing(14)

        self._phase_label = QLabel(Phase.WORKOUT.value, self)
        self._phase_label.setObjectName("phaseLabel")
        self._phase_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._phase_label)

        self._progress_bar = QProgressBar(self)
        self._progress_bar.setRange(0, 100)
        self._progress_bar.setValue(100)
        self._progress_bar.setTextVisible(False)
        layout.addWidget(self._progress_bar)

        self._remaining_label = QLabel("", self)
        self._remaining_label.setObjectName("remainingLabel")
        self._remaining_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._remaining_label)

        # ── duration inputs ──────────────────────────────────────────
        inputs = QGridLayout()
        inputs.setHorizontalSpacing(16)
        inputs.setVerticalSpacing(4)
        self._inputs: dict[Phase, QLineEdit] = {}
        for column, phase in enumerate((Phase.WORKOUT, Phase.REST)):
            caption = QLabel(f"{phase.value} (seconds)", self)
            caption.setObjectName("fieldLabel")
            field = QLineEdit(self._engine.duration_text(phase), self)
            field.setValidator(QIntValidator(1, MAX_DURATION_SECONDS, field))
            field.setAlignment(Qt.AlignmentFlag.AlignCenter)
            inputs.addWidget(caption, 0, column)
            inputs.addWidget(field, 1, column)
            self._inputs[phase] = field
        layout.addLayout(inputs)

        layout.addStretch(1)

        # ── controls ─────────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)

        self._stop_btn = QPushButton("Stop", self)
        self._stop_btn.setObjectName("dangerButton")

        self._start_btn = QPushButton("Start", self)
        self._start_btn.setObjectName("primaryButton")

        btn_row.addWidget(self._stop_btn)
        btn_row.addWidget(self._start_btn)
        layout.addLayout(btn_row)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._start_btn.clicked.connect(self.request_start)
        self._stop_btn.clicked.connect(self.request_stop)
        for phase, field in self._inputs.items():
            field.textChanged.connect(
                lambda text, p=phase: self._engine.set_duration_text(p, text)
            )

        self._engine.progress.connect(self._on_progress)
        self._engine.phase_changed.connect(self._on_phase_changed)
        self._engine.running_changed.connect(self._on_running_changed)

    # ── public ────────────────────────────────────────────────────────────

    def request_start(self) -> None:
        """Start (or restart) the countdown; report bad input."""
        try:
            self._engine.start()
        except InvalidDurationError as exc:
            self._inputs[exc.phase].setFocus()
            self.start_failed.emit(str(exc))

    def request_stop(self) -> None:
        self._engine.stop()

    def duration_input(self, phase: Phase) -> QLineEdit:
        return self._inputs[phase]

    @property
    def phase_text(self) -> str:
        return self._phase_label.text()

    @property
    def progress_value(self) -> int:
        return self._progress_bar.value()

    @property
    def remaining_text(self) -> str:
        return self._remaining_label.text()

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_progress(self, event: ProgressEvent) -> None:
        # Drop anything produced by a countdown that has since been
        # cancelled or replaced.
        if event.countdown_id != self._engine.countdown_id:
            return
        self._progress_bar.setValue(event.percent_remaining)
        self._remaining_label.setText(str(event.seconds_remaining))

    def _on_phase_changed(self, phase: Phase) -> None:
        self._phase_label.setText(phase.value)
        self._apply_phase_color()

    def _on_running_changed(self, running: bool) -> None:
        self._start_btn.setText("Restart" if running else "Start")
        self._apply_phase_color()

    def _show_session(self) -> None:
        session = self._engine.session
        self._phase_label.setText(session.phase.value)
        self._progress_bar.setValue(session.percent_remaining)
        self._remaining_label.setText(str(session.seconds_remaining))
        self._apply_phase_color()

    def _apply_phase_color(self) -> None:
        color = phase_color(self._engine.phase, self._engine.is_running)
        self._progress_bar.setStyleSheet(progress_chunk_style(color))
