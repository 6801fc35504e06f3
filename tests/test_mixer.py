import struct

import pytest

from hitsound_merger.audio.mixer import mix
from hitsound_merger.audio.models import CANONICAL_FORMAT, AudioBuffer, WaveFormatDescriptor
from hitsound_merger.errors import UnsupportedFormat

_MONO_8BIT = WaveFormatDescriptor(sample_rate=8_000, bits_per_sample=8, channels=1)


def _pcm16(values: list[int]) -> bytes:
    return struct.pack(f"<{len(values)}h", *values)


def _samples16(data: bytes | bytearray) -> list[int]:
    return list(struct.unpack(f"<{len(data) // 2}h", bytes(data)))


def _base(values: list[int]) -> AudioBuffer:
    return AudioBuffer(format=CANONICAL_FORMAT, data=bytearray(_pcm16(values)))


def test_sum_is_saturated_not_wrapped() -> None:
    base = _base([30000, -30000])
    insert = AudioBuffer(format=CANONICAL_FORMAT, data=_pcm16([20000, -20000]))

    mix(base, insert, 0)
    assert _samples16(base.data) == [32767, -32768]


def test_mix_adds_at_byte_offset() -> None:
    base = _base([1, 2, 3, 4, 5, 6])
    insert = AudioBuffer(format=CANONICAL_FORMAT, data=_pcm16([10, 20]))

    touched = mix(base, insert, 4)
    assert touched == 4
    assert _samples16(base.data) == [1, 2, 13, 24, 5, 6]


def test_overlapping_inserts_accumulate() -> None:
    insert = AudioBuffer(format=CANONICAL_FORMAT, data=_pcm16([1000, -1000, 500, 500]))
    single = _base([0] * 8)
    double = _base([0] * 8)

    mix(single, insert, 8)
    mix(double, insert, 8)
    mix(double, insert, 8)
    assert _samples16(double.data) != _samples16(single.data)
    assert _samples16(double.data)[4:] == [2000, -2000, 1000, 1000]


def test_out_of_range_tail_is_dropped() -> None:
    base = _base([0, 0, 0, 0])
    insert = AudioBuffer(format=CANONICAL_FORMAT, data=_pcm16([7, 7, 7, 7]))

    touched = mix(base, insert, 4)
    assert touched == 4
    assert len(base.data) == 8
    assert _samples16(base.data) == [0, 0, 7, 7]


def test_insert_at_end_of_base_is_a_no_op() -> None:
    base = _base([1, 1])
    insert = AudioBuffer(format=CANONICAL_FORMAT, data=_pcm16([5, 5]))

    assert mix(base, insert, len(base.data)) == 0
    assert _samples16(base.data) == [1, 1]


def test_unsigned_8bit_sum_is_clamped() -> None:
    base = AudioBuffer(format=_MONO_8BIT, data=bytearray([200, 10, 0]))
    insert = AudioBuffer(format=_MONO_8BIT, data=bytes([100, 20, 0, 99]))

    assert mix(base, insert, 0) == 3
    assert list(base.data) == [255, 30, 0]


def test_base_must_be_mutable() -> None:
    base = AudioBuffer(format=CANONICAL_FORMAT, data=_pcm16([0, 0]))
    insert = AudioBuffer(format=CANONICAL_FORMAT, data=_pcm16([1, 1]))

    with pytest.raises(TypeError):
        mix(base, insert, 0)


def test_mismatched_layouts_are_rejected() -> None:
    base = _base([0, 0])
    insert = AudioBuffer(format=_MONO_8BIT, data=bytes([1, 2]))

    with pytest.raises(UnsupportedFormat):
        mix(base, insert, 0)
