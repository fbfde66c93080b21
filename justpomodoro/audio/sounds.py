"""Sound synthesis and playback using numpy + QSoundEffect.

The three timer cues are synthesised as sine tones shaped by an ADSR
envelope and written once to WAV files in the app-support directory.
``QSoundEffect.play`` returns immediately, so playing never blocks the
timer.

Sound names
-----------
- ``session_start``    three ascending notes
- ``session_complete`` four-note arpeggio with a held top note
- ``session_pause``    two soft descending notes
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


logger = logging.getLogger(__name__)

SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SOUND_NAMES = (
    "session_start",
    "session_complete",
    "session_pause",
)

SAMPLE_RATE = 44100
DEFAULT_VOLUME = 0.7


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _envelope(
    length: int,
    attack: int = 200,
    decay: int = 400,
    sustain_level: float = 0.7,
    release: int = 800,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.full(length, sustain_level, dtype=np.float64)
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    d_end = min(a + decay, length)
    if d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    r_start = max(length - release, d_end)
    if r_start < length:
        env[r_start:] = np.linspace(sustain_level, 0.0, length - r_start)
    return env


def _tone(freq: float, duration_s: float, amplitude: float = 0.5) -> np.ndarray:
    t = np.arange(int(SAMPLE_RATE * duration_s)) / SAMPLE_RATE
    return amplitude * np.sin(2 * np.pi * freq * t)


def _silence(duration_s: float) -> np.ndarray:
    return np.zeros(int(SAMPLE_RATE * duration_s))


def _note_sequence(
    freqs: list[float],
    note_s: float,
    gap_s: float,
    *,
    tail_s: float = 0.0,
    amplitude: float = 0.5,
) -> np.ndarray:
    """Render *freqs* one after another; the last note lasts *tail_s* if set."""
    parts: list[np.ndarray] = []
    for i, freq in enumerate(freqs):
        last = i == len(freqs) - 1
        tone = _tone(freq, tail_s if last and tail_s else note_s, amplitude)
        release = len(tone) // 2 if last else len(tone) // 3
        parts.append(tone * _envelope(len(tone), attack=80, decay=200,
                                      sustain_level=0.45, release=release))
        if not last:
            parts.append(_silence(gap_s))
    return np.concatenate(parts)


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit mono PCM WAV bytes."""
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


def _generate_start() -> bytes:
    """C5 → E5 → G5."""
    samples = _note_sequence([523.25, 659.25, 783.99], 0.12, 0.03)
    return _to_wav_bytes(np.concatenate([samples, _silence(0.05)]))


def _generate_complete() -> bytes:
    """C5 → E5 → G5 → C6, top note held."""
    return _to_wav_bytes(
        _note_sequence([523.25, 659.25, 783.99, 1046.50], 0.10, 0.02, tail_s=0.35)
    )


def _generate_pause() -> bytes:
    """G4 → D4, quieter."""
    samples = _note_sequence([392.00, 293.66], 0.14, 0.04, amplitude=0.35)
    return _to_wav_bytes(np.concatenate([samples, _silence(0.05)]))


_GENERATORS: dict[str, Callable[[], bytes]] = {
    "session_start": _generate_start,
    "session_complete": _generate_complete,
    "session_pause": _generate_pause,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Synthesises, caches and plays the timer cues.

    Usage::

        sounds = SoundManager(parent=app)
        sounds.play_completion()
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
        volume: float = DEFAULT_VOLUME,
    ) -> None:
        super().__init__(parent)
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._volume = max(0.0, min(volume, 1.0))
        self._effects: dict[str, QSoundEffect] = {}

        self._ensure_wav_files()
        self._load_effects()

    # ── SoundPlayer interface ─────────────────────────────────────────

    def play_completion(self) -> None:
        self.play("session_complete")

    def play_start(self) -> None:
        self.play("session_start")

    def play_pause(self) -> None:
        self.play("session_pause")

    # ── public API ────────────────────────────────────────────────────

    def play(self, name: str) -> None:
        """Play a sound by name.  No-op if the name is unknown."""
        effect = self._effects.get(name)
        if effect is not None:
            effect.play()

    @property
    def volume(self) -> float:
        return self._volume

    @property
    def loaded(self) -> tuple[str, ...]:
        return tuple(self._effects)

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        """Generate any missing WAV files to the cache directory."""
        try:
            self._sounds_dir.mkdir(parents=True, exist_ok=True)
            for name, generate in _GENERATORS.items():
                path = self._sounds_dir / f"{name}.wav"
                if not path.exists():
                    path.write_bytes(generate())
        except OSError:
            logger.warning(
                "Could not write sound cache in %s", self._sounds_dir, exc_info=True,
            )

    def _load_effects(self) -> None:
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                logger.warning("Sound %s unavailable, it will be skipped", name)
                continue
            effect = QSoundEffect(self)
            effect.setSource(QUrl.fromLocalFile(str(path)))
            effect.setVolume(self._volume)
            self._effects[name] = effect
