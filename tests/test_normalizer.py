import struct

import pytest

from hitsound_merger.audio.models import CANONICAL_FORMAT, AudioBuffer, WaveFormatDescriptor
from hitsound_merger.audio.normalizer import FormatNormalizer, normalize
from hitsound_merger.errors import UnsupportedFormat


def _pcm16(values: list[int]) -> bytes:
    return struct.pack(f"<{len(values)}h", *values)


def _samples16(data: bytes) -> list[int]:
    return list(struct.unpack(f"<{len(data) // 2}h", data))


def test_matching_format_is_returned_unchanged() -> None:
    buffer = AudioBuffer(format=CANONICAL_FORMAT, data=_pcm16([1, 2, 3, 4]))

    assert normalize(buffer) is buffer


def test_mono_is_duplicated_to_both_channels() -> None:
    source = WaveFormatDescriptor(sample_rate=44_100, bits_per_sample=16, channels=1)
    buffer = AudioBuffer(format=source, data=_pcm16([100, -200, 300]))

    result = normalize(buffer)
    assert result.format == CANONICAL_FORMAT
    assert _samples16(result.data) == [100, 100, -200, -200, 300, 300]


def test_unsigned_8bit_is_rebiased_to_signed_16bit() -> None:
    source = WaveFormatDescriptor(sample_rate=44_100, bits_per_sample=8, channels=2)
    buffer = AudioBuffer(format=source, data=bytes([0, 128, 255, 129]))

    result = normalize(buffer)
    assert _samples16(result.data) == [-32768, 0, 32512, 256]


def test_upsampling_repeats_nearest_source_frames() -> None:
    source = WaveFormatDescriptor(sample_rate=22_050, bits_per_sample=16, channels=1)
    buffer = AudioBuffer(format=source, data=_pcm16([0, 100, 200, 300]))

    result = normalize(buffer)
    assert result.frame_count == 8
    assert _samples16(result.data)[0::2] == [0, 100, 100, 200, 200, 300, 300, 300]


def test_downsampling_picks_every_other_frame() -> None:
    source = WaveFormatDescriptor(sample_rate=48_000, bits_per_sample=16, channels=2)
    target = WaveFormatDescriptor(sample_rate=24_000, bits_per_sample=16, channels=2)
    frames = [value for index in range(8) for value in (index, -index)]
    buffer = AudioBuffer(format=source, data=_pcm16(frames))

    result = FormatNormalizer(target).normalize(buffer)
    assert result.format == target
    assert _samples16(result.data) == [0, 0, 2, -2, 4, -4, 6, -6]


def test_resampling_keeps_duration() -> None:
    source = WaveFormatDescriptor(sample_rate=22_050, bits_per_sample=8, channels=1)
    buffer = AudioBuffer(format=source, data=bytes([128]) * 11_025)

    result = normalize(buffer)
    assert result.frame_count == 22_050
    assert result.duration_sec == pytest.approx(buffer.duration_sec)
    assert not any(result.data)


def test_trailing_partial_frame_is_dropped() -> None:
    buffer = AudioBuffer(format=WaveFormatDescriptor(44_100, 16, 1), data=_pcm16([7, 8]) + b"\x01")

    assert _samples16(normalize(buffer).data) == [7, 7, 8, 8]


@pytest.mark.parametrize(
    "source",
    [
        WaveFormatDescriptor(sample_rate=44_100, bits_per_sample=24, channels=2),
        WaveFormatDescriptor(sample_rate=44_100, bits_per_sample=32, channels=1),
        WaveFormatDescriptor(sample_rate=44_100, bits_per_sample=16, channels=6),
    ],
)
def test_unsupported_sources_fail(source: WaveFormatDescriptor) -> None:
    buffer = AudioBuffer(format=source, data=bytes(source.block_align * 4))

    with pytest.raises(UnsupportedFormat):
        normalize(buffer)


def test_stereo_to_mono_is_not_supported() -> None:
    target = WaveFormatDescriptor(sample_rate=44_100, bits_per_sample=16, channels=1)
    buffer = AudioBuffer(format=CANONICAL_FORMAT, data=_pcm16([1, 2]))

    with pytest.raises(UnsupportedFormat, match="downmix"):
        FormatNormalizer(target).normalize(buffer)


def test_non_16bit_target_is_rejected() -> None:
    with pytest.raises(UnsupportedFormat):
        FormatNormalizer(WaveFormatDescriptor(sample_rate=44_100, bits_per_sample=8, channels=2))
