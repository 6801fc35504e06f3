"""RIFF/WAVE PCM reader and writer."""

from __future__ import annotations

import logging
import math
import struct
import wave
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Union

from hitsound_merger.audio.models import CANONICAL_FORMAT, AudioBuffer, WaveFormatDescriptor
from hitsound_merger.errors import AudioIOError, FormatError, InvalidArgument, UnsupportedFormat

logger = logging.getLogger(__name__)

WavSource = Union[str, Path, bytes, bytearray, memoryview, BinaryIO]

WAVE_FORMAT_PCM = 0x0001
WAVE_FORMAT_EXTENSIBLE = 0xFFFE

# "RIFF" <u32 size> "WAVE"
_RIFF_HEADER = struct.Struct("<4sI4s")
# <4-byte id> <u32 size>
_CHUNK_HEADER = struct.Struct("<4sI")
# format tag, channels, sample rate, byte rate, block align, bits per sample
_FMT_BODY = struct.Struct("<HHIIHH")
# cbSize, valid bits, channel mask, sub-format GUID (first two bytes hold the tag)
_FMT_EXTENSIBLE_TAIL = struct.Struct("<HHIH14s")


def read_wav(source: WavSource) -> AudioBuffer:
    """Decode a PCM WAV file or in-memory image.

    The format is returned exactly as declared in the ``fmt `` chunk; no
    conversion happens here.
    """
    raw = _read_source(source)
    return parse_wav(raw)


def parse_wav(raw: bytes | bytearray | memoryview) -> AudioBuffer:
    view = memoryview(raw)
    if len(view) < _RIFF_HEADER.size:
        raise FormatError("stream is too short for a RIFF header")
    riff_id, _riff_size, wave_id = _RIFF_HEADER.unpack_from(view, 0)
    if riff_id != b"RIFF":
        raise FormatError("missing 'RIFF' signature")
    if wave_id != b"WAVE":
        raise FormatError("missing 'WAVE' form type")

    offset = _RIFF_HEADER.size
    wave_format: WaveFormatDescriptor | None = None
    while offset + _CHUNK_HEADER.size <= len(view):
        chunk_id, chunk_size = _CHUNK_HEADER.unpack_from(view, offset)
        body_start = offset + _CHUNK_HEADER.size
        if chunk_id == b"fmt ":
            wave_format = _parse_fmt_chunk(view[body_start : body_start + chunk_size])
        elif chunk_id == b"data":
            if wave_format is None:
                raise FormatError("'data' chunk found before any 'fmt ' chunk")
            body_end = min(body_start + chunk_size, len(view))
            if body_end - body_start < chunk_size:
                logger.debug("data chunk declares %d bytes, only %d present", chunk_size, body_end - body_start)
            return AudioBuffer(format=wave_format, data=bytes(view[body_start:body_end]))
        else:
            logger.debug("skipping %r chunk (%d bytes)", chunk_id, chunk_size)
        # chunks are word aligned
        offset = body_start + chunk_size + (chunk_size & 1)

    if wave_format is None:
        raise FormatError("no 'fmt ' chunk found")
    raise FormatError("no 'data' chunk found before end of stream")


def _parse_fmt_chunk(body: memoryview) -> WaveFormatDescriptor:
    if len(body) < _FMT_BODY.size:
        raise FormatError(f"'fmt ' chunk is {len(body)} bytes, expected at least {_FMT_BODY.size}")
    format_tag, channels, sample_rate, _byte_rate, _block_align, bits_per_sample = _FMT_BODY.unpack_from(body, 0)
    if format_tag == WAVE_FORMAT_EXTENSIBLE:
        if len(body) < _FMT_BODY.size + _FMT_EXTENSIBLE_TAIL.size:
            raise FormatError("truncated WAVE_FORMAT_EXTENSIBLE 'fmt ' chunk")
        _cb_size, _valid_bits, _mask, sub_tag, _guid_rest = _FMT_EXTENSIBLE_TAIL.unpack_from(body, _FMT_BODY.size)
        format_tag = sub_tag
    if format_tag != WAVE_FORMAT_PCM:
        raise FormatError(f"format tag 0x{format_tag:04x} is not linear PCM")
    try:
        return WaveFormatDescriptor(
            sample_rate=sample_rate,
            bits_per_sample=bits_per_sample,
            channels=channels,
        )
    except InvalidArgument as exc:
        raise FormatError(f"invalid 'fmt ' chunk: {exc}") from exc


def _read_source(source: WavSource) -> bytes | bytearray | memoryview:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return source
    if isinstance(source, (str, Path)):
        path = Path(source)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise AudioIOError(f"cannot read wav file '{path}': {exc}") from exc
    if source.seekable():
        source.seek(0)
    return source.read()


def encode_wav(wave_format: WaveFormatDescriptor, data: bytes | bytearray) -> bytes:
    """Build a 44-byte-header PCM WAV image in memory."""
    target = BytesIO()
    _write_frames(target, wave_format, data)
    return target.getvalue()


def write_wav(path: str | Path, wave_format: WaveFormatDescriptor, data: bytes | bytearray) -> Path:
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("wb") as handle:
            _write_frames(handle, wave_format, data)
    except OSError as exc:
        raise AudioIOError(f"cannot write wav file '{target}': {exc}") from exc
    except UnsupportedFormat:
        target.unlink(missing_ok=True)
        raise
    return target


def _write_frames(handle: BinaryIO, wave_format: WaveFormatDescriptor, data: bytes | bytearray) -> None:
    if wave_format.bits_per_sample != wave_format.bytes_per_sample * 8:
        raise UnsupportedFormat(f"cannot encode {wave_format}: only whole-byte sample widths can be written")
    try:
        with wave.open(handle, "wb") as wav:
            wav.setnchannels(wave_format.channels)
            wav.setsampwidth(wave_format.bytes_per_sample)
            wav.setframerate(wave_format.sample_rate)
            wav.writeframes(bytes(data))
    except (wave.Error, struct.error) as exc:
        raise UnsupportedFormat(f"cannot encode {wave_format}: {exc}") from exc


def silent_byte_count(duration_sec: float, wave_format: WaveFormatDescriptor) -> int:
    if not duration_sec > 0.0 or math.isinf(duration_sec):
        raise InvalidArgument(f"duration must be a positive finite number of seconds, got {duration_sec}")
    return math.ceil(duration_sec * wave_format.sample_rate) * wave_format.block_align


def create_silent_buffer(duration_sec: float, wave_format: WaveFormatDescriptor = CANONICAL_FORMAT) -> AudioBuffer:
    size = silent_byte_count(duration_sec, wave_format)
    return AudioBuffer(format=wave_format, data=bytearray(size))
