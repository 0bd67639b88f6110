"""Phase-change cues synthesised with numpy and played via QSoundEffect.

Every cue is built from sine tones shaped by an ADSR envelope, written
once as a WAV file into the cache directory, then loaded on launch.

Sound names
-----------
- ``workout_start`` — bright rising triad, "go"
- ``rest_start``    — soft low bell
- ``countdown``     — short tick for the last three seconds
- ``click``         — button feedback
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path
from typing import Callable

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..settings import APP_SUPPORT_DIR
from ..timer.engine import Phase


logger = logging.getLogger(__name__)

SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SOUND_NAMES = (
    "workout_start",
    "rest_start",
    "countdown",
    "click",
)

PHASE_SOUNDS: dict[Phase, str] = {
    Phase.WORKOUT: "workout_start",
    Phase.REST: "rest_start",
}

SAMPLE_RATE = 44100


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _envelope(
    length: int,
    attack: int,
    decay: int,
    sustain_level: float,
    release: int,
) -> np.ndarray:
    """ADSR envelope; all durations in samples."""
    env = np.full(length, sustain_level, dtype=np.float64)
    a_end = min(attack, length)
    d_end = min(a_end + decay, length)
    r_start = max(length - release, d_end)
    if a_end > 0:
        env[:a_end] = np.linspace(0.0, 1.0, a_end)
    if d_end > a_end:
        env[a_end:d_end] = np.linspace(1.0, sustain_level, d_end - a_end)
    if r_start < length:
        env[r_start:] = np.linspace(sustain_level, 0.0, length - r_start)
    return env


def _tone(freq: float, seconds: float, amplitude: float = 0.5) -> np.ndarray:
    t = np.arange(int(SAMPLE_RATE * seconds)) / SAMPLE_RATE
    return np.sin(2 * np.pi * freq * t) * amplitude


def _silence(seconds: float) -> np.ndarray:
    return np.zeros(int(SAMPLE_RATE * seconds))


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """16-bit mono PCM WAV from float samples in -1..1."""
    pcm = (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(pcm.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_workout_start() -> bytes:
    """Rising D5 → F#5 → A5 → D6, last note held."""
    notes = (587.33, 739.99, 880.00, 1174.66)
    parts: list[np.ndarray] = []
    for i, freq in enumerate(notes):
        last = i == len(notes) - 1
        tone = _tone(freq, 0.30 if last else 0.09, 0.55)
        parts.append(tone * _envelope(len(tone), 60, 150, 0.45, 250 if not last else 5000))
        parts.append(_silence(0.025))
    return _to_wav_bytes(np.concatenate(parts))


def _generate_rest_start() -> bytes:
    """Low bell (G4 with an octave overtone), slow decay."""
    seconds = 1.2
    bell = _tone(392.00, seconds, 0.35) + _tone(784.00, seconds, 0.07)
    env = _envelope(
        len(bell),
        attack=int(SAMPLE_RATE * 0.05),
        decay=int(SAMPLE_RATE * 0.35),
        sustain_level=0.2,
        release=int(SAMPLE_RATE * 0.7),
    )
    return _to_wav_bytes(bell * env)


def _generate_countdown() -> bytes:
    tick = _tone(1000.0, 0.05, 0.3)
    tick = tick * _envelope(len(tick), 30, 120, 0.25, 600)
    return _to_wav_bytes(np.concatenate([tick, _silence(0.05)]))


def _generate_click() -> bytes:
    tick = _tone(1200.0, 0.015, 0.2)
    tick = tick * _envelope(len(tick), 20, 50, 0.0, len(tick) - 70)
    # Trailing silence keeps QSoundEffect from clipping the tail
    return _to_wav_bytes(np.concatenate([tick, _silence(0.03)]))


_GENERATORS: dict[str, Callable[[], bytes]] = {
    "workout_start": _generate_workout_start,
    "rest_start": _generate_rest_start,
    "countdown": _generate_countdown,
    "click": _generate_click,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Generates, caches and plays the timer's cues.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.set_volume(70)
        mgr.play_phase(Phase.REST)
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.7  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}

        self._ensure_wav_files()
        self._load_effects()

    # ── public API ────────────────────────────────────────────────────

    def set_volume(self, level: int) -> None:
        """Set volume (0-100) on every loaded effect."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def play(self, name: str) -> None:
        """Play a cue by name.  No-op if disabled or unknown."""
        if not self._enabled:
            return
        effect = self._effects.get(name)
        if effect is not None:
            effect.play()

    def play_phase(self, phase: Phase) -> None:
        self.play(PHASE_SOUNDS[phase])

    @property
    def volume(self) -> int:
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for name, generate in _GENERATORS.items():
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                logger.debug("Generating %s", path)
                path.write_bytes(generate())

    def _load_effects(self) -> None:
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if path.exists():
                effect = QSoundEffect(self)
                effect.setSource(QUrl.fromLocalFile(str(path)))
                effect.setVolume(self._volume)
                self._effects[name] = effect
