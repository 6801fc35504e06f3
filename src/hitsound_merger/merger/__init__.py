"""Export pipeline public exports."""

from hitsound_merger.merger.facade import create_silent_wav, export, mix_audio
from hitsound_merger.merger.jobs import submit_export_job
from hitsound_merger.merger.models import ExportResult, MixResult, ProgressCallback, ProgressEvent
from hitsound_merger.merger.service import HitSoundMerger, export_duration_sec, normalize_timestamps

__all__ = [
    "ExportResult",
    "HitSoundMerger",
    "MixResult",
    "ProgressCallback",
    "ProgressEvent",
    "create_silent_wav",
    "export",
    "export_duration_sec",
    "mix_audio",
    "normalize_timestamps",
    "submit_export_job",
]
