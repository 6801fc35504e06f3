"""Error kinds raised by the hit-sound merger."""

from __future__ import annotations


class HitSoundMergerError(Exception):
    """Base class for all merger failures."""


class FormatError(HitSoundMergerError, ValueError):
    """Raised when a WAV stream is malformed or is not linear PCM."""


class UnsupportedFormat(HitSoundMergerError, ValueError):
    """Raised when a PCM layout cannot be converted or mixed."""


class InvalidArgument(HitSoundMergerError, ValueError):
    """Raised for out-of-range durations, empty inputs and bad settings."""


class AudioIOError(HitSoundMergerError, OSError):
    """Raised when an audio file cannot be read or written."""
