"""Conversion of arbitrary 8/16-bit mono/stereo PCM into the mixing format."""

from __future__ import annotations

import logging

import numpy as np

from hitsound_merger.audio.models import CANONICAL_FORMAT, AudioBuffer, WaveFormatDescriptor
from hitsound_merger.errors import UnsupportedFormat

logger = logging.getLogger(__name__)

SUPPORTED_BITS_PER_SAMPLE: tuple[int, ...] = (8, 16)
SUPPORTED_CHANNELS: tuple[int, ...] = (1, 2)

_UNSIGNED_8BIT_BIAS = 128


class FormatNormalizer:
    """Nearest-sample converter towards one fixed 16-bit target format.

    Supported sources are 8-bit unsigned or 16-bit signed PCM with one or two
    channels. Mono sources are duplicated onto both outputs of a stereo target;
    folding stereo down to mono is not supported.
    """

    def __init__(self, target_format: WaveFormatDescriptor = CANONICAL_FORMAT) -> None:
        if target_format.bits_per_sample != 16:
            raise UnsupportedFormat(f"target must be 16-bit PCM, got {target_format}")
        if target_format.channels not in SUPPORTED_CHANNELS:
            raise UnsupportedFormat(f"target must be mono or stereo, got {target_format}")
        self._target = target_format

    @property
    def target_format(self) -> WaveFormatDescriptor:
        return self._target

    def normalize(self, buffer: AudioBuffer) -> AudioBuffer:
        source = buffer.format
        if source == self._target:
            return buffer
        _require_convertible(source, self._target)

        samples = decode_int16_frames(buffer.data, source)
        if source.channels != self._target.channels:
            samples = np.repeat(samples, self._target.channels, axis=1)
        if source.sample_rate != self._target.sample_rate:
            samples = resample_nearest(samples, source.sample_rate, self._target.sample_rate)

        logger.debug("normalized %d frames from %s to %s", samples.shape[0], source, self._target)
        return AudioBuffer(format=self._target, data=samples.astype("<i2").tobytes())


def normalize(buffer: AudioBuffer, target_format: WaveFormatDescriptor = CANONICAL_FORMAT) -> AudioBuffer:
    return FormatNormalizer(target_format).normalize(buffer)


def decode_int16_frames(data: bytes | bytearray, wave_format: WaveFormatDescriptor) -> np.ndarray:
    """Return a ``(frames, channels)`` int16 array; a trailing partial frame is dropped."""
    frames = len(data) // wave_format.block_align
    count = frames * wave_format.channels
    if frames == 0:
        return np.zeros((0, wave_format.channels), dtype=np.int16)
    if wave_format.bits_per_sample == 8:
        raw = np.frombuffer(data, dtype=np.uint8, count=count).astype(np.int32)
        samples = ((raw - _UNSIGNED_8BIT_BIAS) * 256).astype(np.int16)
    elif wave_format.bits_per_sample == 16:
        samples = np.frombuffer(data, dtype="<i2", count=count).astype(np.int16)
    else:
        raise UnsupportedFormat(f"cannot decode {wave_format.bits_per_sample}-bit PCM")
    return samples.reshape(frames, wave_format.channels)


def resample_nearest(samples: np.ndarray, source_rate: int, target_rate: int) -> np.ndarray:
    """Nearest-sample rate conversion: output frame ``i`` reads ``round(i * source/target)``."""
    source_frames = samples.shape[0]
    if source_frames == 0 or source_rate == target_rate:
        return samples
    target_frames = (source_frames * target_rate + source_rate // 2) // source_rate
    # floor(i * source / target + 1/2) in integer arithmetic
    indices = (np.arange(target_frames, dtype=np.int64) * 2 * source_rate + target_rate) // (2 * target_rate)
    np.minimum(indices, source_frames - 1, out=indices)
    return samples[indices]


def _require_convertible(source: WaveFormatDescriptor, target: WaveFormatDescriptor) -> None:
    if source.bits_per_sample not in SUPPORTED_BITS_PER_SAMPLE:
        raise UnsupportedFormat(
            f"unsupported bit depth {source.bits_per_sample}; convert the source to 8 or 16-bit PCM first"
        )
    if source.channels not in SUPPORTED_CHANNELS:
        raise UnsupportedFormat(
            f"unsupported channel count {source.channels}; convert the source to mono or stereo first"
        )
    if source.channels > target.channels:
        raise UnsupportedFormat(f"cannot downmix {source.channels} channels to {target.channels}")
