"""Module-level API: export, mix_audio and create_silent_wav."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence

from hitsound_merger.audio.cache import InsertCache
from hitsound_merger.audio.models import WaveFormatDescriptor
from hitsound_merger.audio.wav_codec import WavSource
from hitsound_merger.merger.models import ExportResult, MixResult, ProgressCallback
from hitsound_merger.merger.service import HitSoundMerger


def export(
    hit_sound_path: str | Path,
    note_times_ms: Sequence[float],
    output_path: str | Path,
    progress_callback: ProgressCallback | None = None,
    cache: InsertCache | None = None,
) -> ExportResult:
    merger = HitSoundMerger(progress_callback=progress_callback)
    return merger.export(hit_sound_path, note_times_ms, output_path, cache=cache)


def mix_audio(
    base_source: WavSource,
    inserts: Iterable[tuple[float, str | Path]],
    output_path: str | Path,
    progress_callback: ProgressCallback | None = None,
) -> MixResult:
    return HitSoundMerger(progress_callback=progress_callback).mix_audio(base_source, inserts, output_path)


def create_silent_wav(
    path: str | Path,
    duration_sec: float,
    wave_format: WaveFormatDescriptor | None = None,
) -> Path:
    return HitSoundMerger().create_silent_wav(path, duration_sec, wave_format)
