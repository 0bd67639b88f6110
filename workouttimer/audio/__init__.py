"""Audio package."""

from .sounds import SoundManager, SOUND_NAMES, PHASE_SOUNDS

__all__ = ["SoundManager", "SOUND_NAMES", "PHASE_SOUNDS"]
