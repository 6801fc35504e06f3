"""Hit-sound export pipeline: silent base -> schedule -> normalize -> mix -> write."""

from __future__ import annotations

import logging
import math
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence

from hitsound_merger.audio.cache import InsertCache
from hitsound_merger.audio.mixer import mix
from hitsound_merger.audio.models import WaveFormatDescriptor
from hitsound_merger.audio.normalizer import FormatNormalizer
from hitsound_merger.audio.scheduler import schedule
from hitsound_merger.audio.wav_codec import WavSource, create_silent_buffer, read_wav, write_wav
from hitsound_merger.config import MergerSettings
from hitsound_merger.errors import InvalidArgument
from hitsound_merger.merger.models import ExportResult, MixResult, ProgressCallback, ProgressEvent

logger = logging.getLogger(__name__)


class HitSoundMerger:
    def __init__(
        self,
        settings: MergerSettings | None = None,
        progress_callback: ProgressCallback | None = None,
    ) -> None:
        self._settings = settings or MergerSettings()
        self._settings.validate()
        self._format = self._settings.canonical_format
        self._progress_callback = progress_callback

    @property
    def settings(self) -> MergerSettings:
        return self._settings

    @property
    def canonical_format(self) -> WaveFormatDescriptor:
        return self._format

    def new_cache(self) -> InsertCache:
        return InsertCache(FormatNormalizer(self._format))

    def create_silent_wav(
        self,
        path: str | Path,
        duration_sec: float,
        wave_format: WaveFormatDescriptor | None = None,
    ) -> Path:
        target_format = wave_format or self._format
        buffer = create_silent_buffer(duration_sec, target_format)
        return write_wav(path, target_format, buffer.data)

    def export(
        self,
        hit_sound_path: str | Path,
        note_times_ms: Sequence[float],
        output_path: str | Path,
        cache: InsertCache | None = None,
    ) -> ExportResult:
        if not note_times_ms:
            raise InvalidArgument("note_times_ms must contain at least one timestamp")
        progress = _ProgressSink(self._progress_callback)
        progress.report(0, 100, "Preparing...")
        temp_path = self._new_temp_path()
        try:
            progress.report(10, 100, "Normalizing timestamps...")
            offsets = normalize_timestamps(note_times_ms)

            progress.report(20, 100, "Creating silent base audio...")
            duration = export_duration_sec(offsets, self._settings.trailing_silence_sec)
            self.create_silent_wav(temp_path, duration)

            progress.report(30, 100, "Building insert list...")
            inserts = [(offset, str(hit_sound_path)) for offset in offsets]

            progress.report(40, 100, "Mixing audio...")
            logger.info("exporting %d hit sounds over %.3fs to %s", len(inserts), duration, output_path)
            self._mix(temp_path, inserts, output_path, cache, _ProgressSink(self._progress_callback, 40, 100))
            progress.report(100, 100, "Complete!")
        finally:
            temp_path.unlink(missing_ok=True)
        return ExportResult(output_path=Path(output_path), insert_count=len(offsets), duration_sec=duration)

    def mix_audio(
        self,
        base_source: WavSource,
        inserts: Iterable[tuple[float, str | Path]],
        output_path: str | Path,
        cache: InsertCache | None = None,
    ) -> MixResult:
        return self._mix(base_source, list(inserts), output_path, cache, _ProgressSink(self._progress_callback))

    def _mix(
        self,
        base_source: WavSource,
        inserts: list[tuple[float, str | Path]],
        output_path: str | Path,
        cache: InsertCache | None,
        progress: _ProgressSink,
    ) -> MixResult:
        for timestamp_ms, source_path in inserts:
            if not str(source_path):
                raise InvalidArgument("insert source path must not be empty")
            if not math.isfinite(float(timestamp_ms)):
                raise InvalidArgument(f"insert timestamp must be finite, got {timestamp_ms}")
        cache = self._resolve_cache(cache)
        total = len(inserts) + 4

        progress.report(0, total, "Reading base audio...")
        base = cache.normalizer.normalize(read_wav(base_source)).mutable_copy()

        progress.report(1, total, "Calculating positions...")
        scheduled = schedule(base.format, len(base.data), inserts)

        progress.report(2, total, "Caching audio files...")
        distinct_paths = list(dict.fromkeys(item.source_path for item in scheduled))
        for index, source_path in enumerate(distinct_paths, start=1):
            cache.get(source_path)
            progress.report(2, total, f"Cached {index}/{len(distinct_paths)}...")

        progress.report(3, total, "Mixing audio...")
        mixed_count = 0
        for index, item in enumerate(scheduled):
            if mix(base, cache.get(item.source_path), item.position) > 0:
                mixed_count += 1
                progress.report(4 + index, total, f"Mixed {index + 1}/{len(scheduled)}...")

        progress.report(total - 1, total, "Writing output file...")
        target = write_wav(output_path, base.format, base.data)
        progress.report(total, total, "Mixing complete!")
        logger.info("mixed %d/%d inserts into %s", mixed_count, len(scheduled), target)
        return MixResult(
            output_path=target,
            insert_count=len(scheduled),
            mixed_count=mixed_count,
            source_count=len(distinct_paths),
        )

    def _resolve_cache(self, cache: InsertCache | None) -> InsertCache:
        if cache is None:
            return self.new_cache()
        if cache.normalizer.target_format != self._format:
            raise InvalidArgument(
                f"cache normalizes to {cache.normalizer.target_format}, merger mixes in {self._format}"
            )
        return cache

    def _new_temp_path(self) -> Path:
        temp_dir = self._settings.temp_dir
        if temp_dir is not None:
            temp_dir.mkdir(parents=True, exist_ok=True)
        handle, name = tempfile.mkstemp(prefix="hitsound-base-", suffix=".wav", dir=temp_dir)
        os.close(handle)
        return Path(name)


def normalize_timestamps(note_times_ms: Sequence[float]) -> list[float]:
    """Shift timestamps so the earliest one lands on zero."""
    if not note_times_ms:
        raise InvalidArgument("note_times_ms must contain at least one timestamp")
    times = [float(value) for value in note_times_ms]
    if not all(math.isfinite(value) for value in times):
        raise InvalidArgument("note times must be finite numbers")
    first = min(times)
    return [value - first for value in times]


def export_duration_sec(offsets_ms: Sequence[float], trailing_silence_sec: float) -> float:
    return max(offsets_ms) / 1000.0 + trailing_silence_sec


@dataclass(slots=True)
class _ProgressSink:
    callback: ProgressCallback | None
    low: int | None = None
    high: int | None = None

    def report(self, current: int, total: int, message: str) -> None:
        if self.callback is None:
            return
        if self.low is None or self.high is None:
            self.callback(ProgressEvent(current=current, total=total, message=message))
            return
        ratio = current / total if total > 0 else 0.0
        mapped = self.low + int(ratio * (self.high - self.low))
        self.callback(ProgressEvent(current=mapped, total=100, message=message))
