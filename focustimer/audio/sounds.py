"""Alert synthesis and playback using numpy + QSoundEffect.

Every alert is generated programmatically from a ``ToneProfile`` and
written once to a WAV cache on disk.  Each ``play()`` call then loads
that file into a fresh, single-use ``QSoundEffect`` which is released
again as soon as playback ends.

Sound types
-----------
- ``beep``    — sine sweep 880 → 440 Hz, fading out over 0.5 s (default)
- ``chime``   — 880 Hz bell: fast attack, long exponential decay (2 s)
- ``digital`` — 660 Hz square wave, two 0.1 s pulses (0.4 s total)
"""

from __future__ import annotations

import io
import logging
import wave
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QMediaDevices, QSoundEffect


logger = logging.getLogger(__name__)


# ── paths ────────────────────────────────────────────────────────────────

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "FocusTimer"
SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SAMPLE_RATE = 44100


class SoundType(Enum):
    BEEP = "beep"
    CHIME = "chime"
    DIGITAL = "digital"


DEFAULT_SOUND_TYPE = SoundType.BEEP


def resolve_sound_type(value: object) -> SoundType:
    """Map a stored identifier to a ``SoundType``, falling back to beep."""
    if isinstance(value, SoundType):
        return value
    try:
        return SoundType(value)
    except ValueError:
        return DEFAULT_SOUND_TYPE


# ═══════════════════════════════════════════════════════════════════════════
#  TONE PROFILES
# ═══════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class ToneProfile:
    """Parameters for one synthesized alert.

    Pitch glides exponentially from ``start_hz`` to ``end_hz`` over the
    whole duration.  Gain rises linearly from silence to ``start_gain``
    during ``attack_s``, then moves exponentially to ``end_gain``.  When
    ``pulses`` is non-empty the tone is gated: only the listed
    ``(on, off)`` windows (seconds) are audible.
    """

    waveform: str            # "sine" | "square"
    start_hz: float
    end_hz: float
    duration_s: float
    start_gain: float
    end_gain: float
    attack_s: float = 0.0
    pulses: tuple[tuple[float, float], ...] = ()


PROFILES: dict[SoundType, ToneProfile] = {
    SoundType.BEEP: ToneProfile(
        waveform="sine",
        start_hz=880.0, end_hz=440.0,
        duration_s=0.5,
        start_gain=0.1, end_gain=0.01,
    ),
    SoundType.CHIME: ToneProfile(
        waveform="sine",
        start_hz=880.0, end_hz=880.0,
        duration_s=2.0,
        start_gain=0.3, end_gain=0.001,
        attack_s=0.05,
    ),
    SoundType.DIGITAL: ToneProfile(
        waveform="square",
        start_hz=660.0, end_hz=660.0,
        duration_s=0.4,
        start_gain=0.1, end_gain=0.1,
        pulses=((0.0, 0.1), (0.2, 0.3)),
    ),
}


def profile_for(sound_type: object) -> ToneProfile:
    return PROFILES[resolve_sound_type(sound_type)]


# ═══════════════════════════════════════════════════════════════════════════
#  SYNTHESIS
# ═══════════════════════════════════════════════════════════════════════════


def _timeline(duration_s: float) -> np.ndarray:
    n_samples = int(round(SAMPLE_RATE * duration_s))
    return np.arange(n_samples, dtype=np.float64) / SAMPLE_RATE


def _phase(profile: ToneProfile, t: np.ndarray) -> np.ndarray:
    """Instantaneous phase (radians) of an exponential pitch glide."""
    if profile.start_hz == profile.end_hz:
        return 2 * np.pi * profile.start_hz * t
    # f(t) = f0 * exp(k t)  →  phase = 2π f0 (exp(k t) - 1) / k
    k = np.log(profile.end_hz / profile.start_hz) / profile.duration_s
    return 2 * np.pi * profile.start_hz * np.expm1(k * t) / k


def _gain_envelope(profile: ToneProfile, t: np.ndarray) -> np.ndarray:
    env = np.empty_like(t)
    attack = min(profile.attack_s, profile.duration_s)

    rising = t < attack
    if attack > 0:
        env[rising] = profile.start_gain * t[rising] / attack

    falling = ~rising
    if profile.start_gain == profile.end_gain:
        env[falling] = profile.start_gain
    else:
        span = max(profile.duration_s - attack, 1e-9)
        frac = (t[falling] - attack) / span
        ratio = profile.end_gain / profile.start_gain
        env[falling] = profile.start_gain * np.power(ratio, frac)

    if profile.pulses:
        gate = np.zeros_like(t)
        for on, off in profile.pulses:
            gate[(t >= on) & (t < off)] = 1.0
        env *= gate
    return env


def synthesize(profile: ToneProfile) -> np.ndarray:
    """Render *profile* to float64 samples in -1..1 at ``SAMPLE_RATE``."""
    t = _timeline(profile.duration_s)
    wave_ = np.sin(_phase(profile, t))
    if profile.waveform == "square":
        wave_ = np.where(wave_ >= 0.0, 1.0, -1.0)
    return wave_ * _gain_envelope(profile, t)


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


def generate_wav(sound_type: object) -> bytes:
    """WAV bytes for the alert identified by *sound_type*."""
    return _to_wav_bytes(synthesize(profile_for(sound_type)))


# ═══════════════════════════════════════════════════════════════════════════
#  ALERT DISPATCHER
# ═══════════════════════════════════════════════════════════════════════════


class AlertDispatcher(QObject):
    """Plays one alert per call; never raises.

    Usage::

        alerts = AlertDispatcher(parent=self)
        alerts.play("chime")
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        # Effects currently playing; each is dropped once it finishes.
        self._active: set[QSoundEffect] = set()

    # ── public API ────────────────────────────────────────────────────

    def play(self, sound_type: object) -> bool:
        """Play the alert for *sound_type* once.

        Returns ``True`` when playback was started.  Missing audio
        hardware and any synthesis or playback error yield ``False``.
        """
        sound = resolve_sound_type(sound_type)
        try:
            if not self._has_audio_output():
                logger.debug("No audio output available; skipping %s", sound.value)
                return False
            path = self._wav_path(sound)
            effect = self._make_effect(path)
            self._active.add(effect)
            effect.play()
        except Exception:
            logger.exception("Could not play alert %r", sound.value)
            return False
        return True

    @property
    def active_count(self) -> int:
        """Number of alerts still playing."""
        return len(self._active)

    # ── internal ──────────────────────────────────────────────────────

    @staticmethod
    def _has_audio_output() -> bool:
        return bool(QMediaDevices.audioOutputs())

    def _wav_path(self, sound: SoundType) -> Path:
        """Path to the cached WAV for *sound*, generating it if missing."""
        path = self._sounds_dir / f"{sound.value}.wav"
        if not path.exists():
            self._sounds_dir.mkdir(parents=True, exist_ok=True)
            # Rename into place so a crash never leaves a truncated cache.
            partial = path.with_name(path.name + ".part")
            partial.write_bytes(generate_wav(sound))
            partial.replace(path)
        return path

    def _make_effect(self, path: Path) -> QSoundEffect:
        effect = QSoundEffect(self)
        effect.setSource(QUrl.fromLocalFile(str(path)))
        effect.setLoopCount(1)
        effect.setVolume(1.0)  # gain is baked into the samples
        effect.playingChanged.connect(lambda: self._on_playing_changed(effect))
        effect.statusChanged.connect(lambda: self._on_status_changed(effect))
        return effect

    def _on_playing_changed(self, effect: QSoundEffect) -> None:
        if not effect.isPlaying():
            self._release(effect)

    def _on_status_changed(self, effect: QSoundEffect) -> None:
        if effect.status() == QSoundEffect.Status.Error:
            logger.warning("Alert source failed to load: %s", effect.source().toLocalFile())
            self._discard_cached(effect)
            self._release(effect)

    def _release(self, effect: QSoundEffect) -> None:
        if effect in self._active:
            self._active.discard(effect)
            effect.deleteLater()

    @staticmethod
    def _discard_cached(effect: QSoundEffect) -> None:
        """Drop a WAV Qt could not load; the next play regenerates it."""
        path = Path(effect.source().toLocalFile())
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not remove broken alert cache %s: %s", path, exc)
