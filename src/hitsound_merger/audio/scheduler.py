"""Timestamp to byte-offset mapping for audio inserts."""

from __future__ import annotations

import math
from typing import Iterable

from hitsound_merger.audio.models import AudioInsert, WaveFormatDescriptor


def compute_position(timestamp_ms: float, base_format: WaveFormatDescriptor, base_length: int) -> int:
    block_align = base_format.block_align
    end = base_length - base_length % block_align
    frames = timestamp_ms * base_format.sample_rate / 1000.0
    # compare as floats first; huge finite timestamps overflow to inf here
    if not frames > 0.0:
        return 0
    if frames * block_align >= base_length:
        return end
    return min(math.floor(frames) * block_align, end)


def schedule(
    base_format: WaveFormatDescriptor,
    base_length: int,
    inserts: Iterable[tuple[float, str]],
) -> list[AudioInsert]:
    """Resolve frame-aligned positions and order inserts by time.

    Equal timestamps keep their input order; both are mixed.
    """
    scheduled = [
        AudioInsert(
            timestamp_ms=float(timestamp_ms),
            source_path=str(source_path),
            position=compute_position(float(timestamp_ms), base_format, base_length),
        )
        for timestamp_ms, source_path in inserts
    ]
    scheduled.sort(key=lambda item: item.timestamp_ms)
    return scheduled
