"""In-place additive mixing with per-sample saturation."""

from __future__ import annotations

import numpy as np

from hitsound_merger.audio.models import AudioBuffer
from hitsound_merger.errors import UnsupportedFormat

_INT16_MIN = -32768
_INT16_MAX = 32767
_UINT8_MIN = 0
_UINT8_MAX = 255


def mix(base: AudioBuffer, insert: AudioBuffer, position: int) -> int:
    """Add ``insert`` into ``base`` starting at byte ``position``.

    Only the in-bounds prefix of the insert is mixed. Returns the number of
    bytes of ``base`` that were touched.
    """
    if not isinstance(base.data, bytearray):
        raise TypeError("base buffer must hold a bytearray to be mixed in place")
    if base.format.bits_per_sample != insert.format.bits_per_sample or base.format.channels != insert.format.channels:
        raise UnsupportedFormat(f"cannot mix {insert.format} into {base.format}")
    if position < 0:
        raise ValueError(f"position must be non-negative, got {position}")

    bits = base.format.bits_per_sample
    if bits == 16:
        return _mix_int16(base.data, insert.data, position)
    if bits == 8:
        return _mix_uint8(base.data, insert.data, position)
    raise UnsupportedFormat(f"mixing {bits}-bit PCM is not supported")


def _mix_int16(target: bytearray, source: bytes | bytearray, position: int) -> int:
    count = min(len(source) // 2, max(len(target) - position, 0) // 2)
    if count <= 0:
        return 0
    region = np.frombuffer(target, dtype="<i2", count=count, offset=position)
    addend = np.frombuffer(source, dtype="<i2", count=count)
    summed = region.astype(np.int32) + addend.astype(np.int32)
    region[:] = np.clip(summed, _INT16_MIN, _INT16_MAX)
    return count * 2


def _mix_uint8(target: bytearray, source: bytes | bytearray, position: int) -> int:
    count = min(len(source), max(len(target) - position, 0))
    if count <= 0:
        return 0
    region = np.frombuffer(target, dtype=np.uint8, count=count, offset=position)
    addend = np.frombuffer(source, dtype=np.uint8, count=count)
    summed = region.astype(np.int16) + addend.astype(np.int16)
    region[:] = np.clip(summed, _UINT8_MIN, _UINT8_MAX)
    return count
