"""Alarm synthesis and playback using numpy + QSoundEffect.

The default alarm is a one-second beep pattern generated with sine-wave
synthesis and an ADSR envelope, cached to disk as ``alarm.wav`` and played
on a loop.  A one-shot timer silences it after ``alarm_seconds``.
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QObject, QTimer, QUrl, pyqtSignal
from PyQt6.QtMultimedia import QSoundEffect

_LOGGER = logging.getLogger(__name__)


# ── paths ────────────────────────────────────────────────────────────────

CACHE_DIR = Path.home() / ".cache" / "paneltimer"
ALARM_FILENAME = "alarm.wav"

SAMPLE_RATE = 44100
ALARM_SECONDS = 10


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _make_envelope(
    length: int,
    attack: int = 200,
    decay: int = 400,
    sustain_level: float = 0.7,
    release: int = 800,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.ones(length, dtype=np.float64)
    a = min(attack, length)
    if a > 0:
        env[:a] = np.linspace(0.0, 1.0, a)
    d_end = min(a + decay, length)
    if decay > 0 and d_end > a:
        env[a:d_end] = np.linspace(1.0, sustain_level, d_end - a)
    s_end = max(length - release, d_end)
    if s_end > d_end:
        env[d_end:s_end] = sustain_level
    if release > 0 and s_end < length:
        env[s_end:] = np.linspace(sustain_level, 0.0, length - s_end)
    return env


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


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


def generate_alarm() -> bytes:
    """Classic alarm-clock pattern: four quick 880 Hz beeps, then a rest.

    Exactly one second long so it loops cleanly.
    """
    beep_dur = 0.09
    gap = 0.06
    parts: list[np.ndarray] = []
    for _ in range(4):
        tone = _sine(880.0, beep_dur) * 0.5 + _sine(1760.0, beep_dur) * 0.1
        env = _make_envelope(len(tone), attack=60, decay=200, sustain_level=0.6, release=300)
        parts.append(tone * env)
        parts.append(np.zeros(int(SAMPLE_RATE * gap)))
    used = sum(len(p) for p in parts)
    parts.append(np.zeros(max(0, SAMPLE_RATE - used)))
    return _to_wav_bytes(np.concatenate(parts))


# ═══════════════════════════════════════════════════════════════════════════
#  ALARM PLAYER
# ═══════════════════════════════════════════════════════════════════════════


class AlarmPlayer(QObject):
    """Rings the alarm for a bounded time.

    Usage::

        alarm = AlarmPlayer(parent=self, alarm_seconds=10)
        alarm.set_volume(70)
        alarm.ring()        # stops by itself after 10 s
        alarm.silence()     # or right now

    Signals
    -------
    silenced()
        Emitted once per ring, when playback stops for any reason.
    """

    silenced = pyqtSignal()

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        alarm_seconds: int = ALARM_SECONDS,
        sound_file: str | Path | None = None,
        cache_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.7  # 0.0–1.0
        self._alarm_seconds = max(1, alarm_seconds)
        self._cache_dir = cache_dir or CACHE_DIR
        self._ringing = False

        self._silence_timer = QTimer(self)
        self._silence_timer.setSingleShot(True)
        self._silence_timer.timeout.connect(self.silence)

        self._source = self._resolve_source(sound_file)
        self._effect = QSoundEffect(self)
        self._effect.setSource(QUrl.fromLocalFile(str(self._source)))
        self._effect.setLoopCount(QSoundEffect.Loop.Infinite.value)
        self._effect.setVolume(self._volume)

    # ── public API ────────────────────────────────────────────────────

    def ring(self) -> None:
        """Start playing and (re)arm the silence timer.  No-op if disabled."""
        if not self._enabled:
            return
        _LOGGER.info("Alarm ringing for %d s", self._alarm_seconds)
        self._ringing = True
        self._effect.play()
        self._silence_timer.start(self._alarm_seconds * 1000)

    def silence(self) -> None:
        """Stop playback and cancel the pending silence timer."""
        self._silence_timer.stop()
        if not self._ringing:
            return
        self._ringing = False
        self._effect.stop()
        _LOGGER.debug("Alarm silenced")
        self.silenced.emit()

    def set_volume(self, level: int) -> None:
        """Set volume (0-100)."""
        self._volume = max(0, min(level, 100)) / 100.0
        self._effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled
        if not enabled:
            self.silence()

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def ringing(self) -> bool:
        return self._ringing

    @property
    def silence_pending(self) -> bool:
        return self._silence_timer.isActive()

    @property
    def source(self) -> Path:
        return self._source

    @property
    def alarm_seconds(self) -> int:
        return self._alarm_seconds

    # ── internal ──────────────────────────────────────────────────────

    def _resolve_source(self, sound_file: str | Path | None) -> Path:
        if sound_file is not None:
            path = Path(sound_file).expanduser()
            if path.is_file():
                return path
            _LOGGER.warning("Alarm file %s not found, using built-in tone", path)
        return self._ensure_default_wav()

    def _ensure_default_wav(self) -> Path:
        """Generate the built-in alarm into the cache directory if missing."""
        self._cache_dir.mkdir(parents=True, exist_ok=True)
        path = self._cache_dir / ALARM_FILENAME
        if not path.exists():
            path.write_bytes(generate_alarm())
        return path
