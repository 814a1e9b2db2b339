"""Sound synthesis and playback using numpy + QSoundEffect.

The three cues are synthesized once as WAV files and cached on disk;
later launches only load them.

Sound names
-----------
- ``start``      tick-tock, played when a timer is started by hand
- ``warning``    single bell ding when a phase enters its warning window
- ``phase_end``  descending "time is up" figure when a phase rolls over
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

log = logging.getLogger(__name__)

# ── paths ────────────────────────────────────────────────────────────────

SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SOUND_NAMES = (
    "start",
    "warning",
    "phase_end",
)

SAMPLE_RATE = 44100


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _decay(length: int, attack: int = 100, half_life_s: float = 0.15) -> np.ndarray:
    """Linear attack followed by exponential decay (lengths in samples)."""
    env = np.exp(-np.arange(length) / (SAMPLE_RATE * half_life_s) * np.log(2))
    a = min(attack, length)
    if a > 0:
        env[:a] *= np.linspace(0.0, 1.0, a)
    return env


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _silence(duration_s: float) -> np.ndarray:
    return np.zeros(int(SAMPLE_RATE * duration_s))


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_ticktock() -> bytes:
    """Start: two tick/tock pairs, a high click then a lower one."""
    parts: list[np.ndarray] = []
    for freq in (2000.0, 1400.0, 2000.0, 1400.0):
        click = _sine(freq, 0.03) * 0.4
        parts.append(click * _decay(len(click), attack=20, half_life_s=0.006))
        parts.append(_silence(0.22))
    return _to_wav_bytes(np.concatenate(parts))


def _generate_ding() -> bytes:
    """Warning: bell strike (C6) with a faint inharmonic partial."""
    duration = 1.2
    base = _sine(1046.5, duration) * 0.4
    partial = _sine(1046.5 * 2.76, duration) * 0.06
    combined = base + partial
    return _to_wav_bytes(combined * _decay(len(combined), attack=60, half_life_s=0.25))


def _generate_times_up() -> bytes:
    """Phase end: three descending notes (G5→E5→C5), last one held."""
    notes = [783.99, 659.25, 523.25]
    parts: list[np.ndarray] = []
    for i, freq in enumerate(notes):
        held = i == len(notes) - 1
        note_dur = 0.6 if held else 0.18
        tone = _sine(freq, note_dur) * 0.5 + _sine(freq * 2, note_dur) * 0.08
        parts.append(tone * _decay(len(tone), attack=120, half_life_s=0.2 if held else 0.06))
        parts.append(_silence(0.04))
    return _to_wav_bytes(np.concatenate(parts))


# Map sound names to generator functions
_GENERATORS: dict[str, Callable[[], bytes]] = {
    "start": _generate_ticktock,
    "warning": _generate_ding,
    "phase_end": _generate_times_up,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Manages sound synthesis, caching, and playback.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.set_volume(70)
        mgr.play("warning")
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
        """Set volume (0-100).  Updates all loaded effects."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def play(self, name: str) -> None:
        """Play a sound by name.  No-op if disabled or name unknown."""
        if not self._enabled:
            return
        effect = self._effects.get(name)
        if effect is None:
            log.debug("No sound loaded for %r", name)
            return
        effect.play()

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        """Generate any missing WAV files to the cache directory."""
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for name, gen_fn in _GENERATORS.items():
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                path.write_bytes(gen_fn())
                log.debug("Synthesized %s", path)

    def _load_effects(self) -> None:
        """Create QSoundEffect instances from cached WAV files."""
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if path.exists():
                effect = QSoundEffect(self)
                effect.setSource(QUrl.fromLocalFile(str(path)))
                effect.setVolume(self._volume)
                self._effects[name] = effect
