"""Audio package."""

from .sounds import AlertDispatcher, SoundType, ToneProfile, resolve_sound_type

__all__ = ["AlertDispatcher", "SoundType", "ToneProfile", "resolve_sound_type"]
