"""PCM WAV codec, format normalization, scheduling and mixing."""

from hitsound_merger.audio.cache import InsertCache
from hitsound_merger.audio.mixer import mix
from hitsound_merger.audio.models import (
    CANONICAL_FORMAT,
    AudioBuffer,
    AudioInsert,
    WaveFormatDescriptor,
)
from hitsound_merger.audio.normalizer import FormatNormalizer, normalize
from hitsound_merger.audio.scheduler import compute_position, schedule
from hitsound_merger.audio.wav_codec import create_silent_buffer, encode_wav, parse_wav, read_wav, write_wav

__all__ = [
    "AudioBuffer",
    "AudioInsert",
    "CANONICAL_FORMAT",
    "FormatNormalizer",
    "InsertCache",
    "WaveFormatDescriptor",
    "compute_position",
    "create_silent_buffer",
    "encode_wav",
    "mix",
    "normalize",
    "parse_wav",
    "read_wav",
    "schedule",
    "write_wav",
]
