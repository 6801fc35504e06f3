"""Runtime settings for the merger and its outer surfaces."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from hitsound_merger.audio.models import (
    CANONICAL_BITS_PER_SAMPLE,
    CANONICAL_CHANNELS,
    CANONICAL_SAMPLE_RATE,
    WaveFormatDescriptor,
)
from hitsound_merger.errors import InvalidArgument

DEFAULT_TRAILING_SILENCE_SEC = 1.0


@dataclass(slots=True)
class MergerSettings:
    sample_rate: int = CANONICAL_SAMPLE_RATE
    bits_per_sample: int = CANONICAL_BITS_PER_SAMPLE
    channels: int = CANONICAL_CHANNELS
    trailing_silence_sec: float = DEFAULT_TRAILING_SILENCE_SEC
    temp_dir: Path | None = None

    @property
    def canonical_format(self) -> WaveFormatDescriptor:
        return WaveFormatDescriptor(
            sample_rate=self.sample_rate,
            bits_per_sample=self.bits_per_sample,
            channels=self.channels,
        )

    def validate(self) -> None:
        if self.bits_per_sample != 16:
            raise InvalidArgument("mixing format must be 16-bit PCM")
        if self.channels not in (1, 2):
            raise InvalidArgument("mixing format must be mono or stereo")
        if self.sample_rate <= 0:
            raise InvalidArgument("sample_rate must be positive")
        if self.trailing_silence_sec < 0.0:
            raise InvalidArgument("trailing_silence_sec must be >= 0")

    @staticmethod
    def from_env() -> MergerSettings:
        sample_rate_raw = os.getenv("HITSOUND_MERGER_SAMPLE_RATE", "").strip()
        tail_raw = os.getenv("HITSOUND_MERGER_TRAILING_SILENCE_SEC", "").strip()
        temp_dir_raw = os.getenv("HITSOUND_MERGER_TEMP_DIR", "").strip()
        try:
            sample_rate = int(sample_rate_raw) if sample_rate_raw else CANONICAL_SAMPLE_RATE
        except ValueError:
            sample_rate = CANONICAL_SAMPLE_RATE
        try:
            tail = float(tail_raw) if tail_raw else DEFAULT_TRAILING_SILENCE_SEC
        except ValueError:
            tail = DEFAULT_TRAILING_SILENCE_SEC
        return MergerSettings(
            sample_rate=sample_rate if sample_rate > 0 else CANONICAL_SAMPLE_RATE,
            trailing_silence_sec=max(tail, 0.0),
            temp_dir=Path(temp_dir_raw) if temp_dir_raw else None,
        )
