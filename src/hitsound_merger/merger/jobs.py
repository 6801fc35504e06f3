"""Background execution of exports."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Sequence

from hitsound_merger.merger.models import ExportResult
from hitsound_merger.merger.service import HitSoundMerger

# single worker: exports never run concurrently against the same output path
_EXPORT_EXECUTOR = ThreadPoolExecutor(max_workers=1, thread_name_prefix="hitsound-export")


def submit_export_job(
    hit_sound_path: str | Path,
    note_times_ms: Sequence[float],
    output_path: str | Path,
    merger: HitSoundMerger | None = None,
) -> Future[ExportResult]:
    target = merger or HitSoundMerger()
    return _EXPORT_EXECUTOR.submit(target.export, hit_sound_path, list(note_times_ms), output_path)
