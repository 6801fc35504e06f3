"""Audio value types shared by the codec, normalizer, scheduler and mixer."""

from __future__ import annotations

from dataclasses import dataclass, field

from hitsound_merger.errors import InvalidArgument

CANONICAL_SAMPLE_RATE = 44_100
CANONICAL_BITS_PER_SAMPLE = 16
CANONICAL_CHANNELS = 2

_U16_MAX = 0xFFFF
_U32_MAX = 0xFFFF_FFFF


@dataclass(frozen=True, slots=True)
class WaveFormatDescriptor:
    sample_rate: int
    bits_per_sample: int
    channels: int

    def __post_init__(self) -> None:
        if not 0 < self.sample_rate <= _U32_MAX:
            raise InvalidArgument(f"sample_rate must be in 1..{_U32_MAX}, got {self.sample_rate}")
        if not 0 < self.bits_per_sample <= _U16_MAX:
            raise InvalidArgument(f"bits_per_sample must be in 1..{_U16_MAX}, got {self.bits_per_sample}")
        if not 0 < self.channels <= _U16_MAX:
            raise InvalidArgument(f"channels must be in 1..{_U16_MAX}, got {self.channels}")
        if self.block_align > _U16_MAX or self.byte_rate > _U32_MAX:
            raise InvalidArgument(f"block align or byte rate of {self} does not fit a WAV header")

    @property
    def bytes_per_sample(self) -> int:
        # samples are padded to whole bytes, e.g. 12-bit PCM occupies 2
        return (self.bits_per_sample + 7) // 8

    @property
    def block_align(self) -> int:
        return self.channels * self.bytes_per_sample

    @property
    def byte_rate(self) -> int:
        return self.sample_rate * self.block_align

    def __str__(self) -> str:
        return f"{self.sample_rate} Hz / {self.bits_per_sample}-bit / {self.channels} ch"


CANONICAL_FORMAT = WaveFormatDescriptor(
    sample_rate=CANONICAL_SAMPLE_RATE,
    bits_per_sample=CANONICAL_BITS_PER_SAMPLE,
    channels=CANONICAL_CHANNELS,
)


@dataclass(slots=True)
class AudioBuffer:
    format: WaveFormatDescriptor
    data: bytes | bytearray

    @property
    def frame_count(self) -> int:
        return len(self.data) // self.format.block_align

    @property
    def duration_sec(self) -> float:
        return self.frame_count / self.format.sample_rate

    def mutable_copy(self) -> AudioBuffer:
        return AudioBuffer(format=self.format, data=bytearray(self.data))


@dataclass(slots=True)
class AudioInsert:
    timestamp_ms: float
    source_path: str
    position: int = field(default=0)
