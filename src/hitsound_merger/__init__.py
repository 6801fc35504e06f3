"""Offline hit-sound track rendering for rhythm-game levels."""

from hitsound_merger.errors import (
    AudioIOError,
    FormatError,
    HitSoundMergerError,
    InvalidArgument,
    UnsupportedFormat,
)
from hitsound_merger.merger import HitSoundMerger, create_silent_wav, export, mix_audio

__all__ = [
    "AudioIOError",
    "FormatError",
    "HitSoundMerger",
    "HitSoundMergerError",
    "InvalidArgument",
    "UnsupportedFormat",
    "create_silent_wav",
    "export",
    "mix_audio",
]
