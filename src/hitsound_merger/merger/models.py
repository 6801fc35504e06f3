"""Merger result and progress models."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable


@dataclass(frozen=True, slots=True)
class ProgressEvent:
    current: int
    total: int
    message: str = ""

    @property
    def percentage(self) -> float:
        if self.total <= 0:
            return 0.0
        return self.current / self.total * 100.0


ProgressCallback = Callable[[ProgressEvent], None]


@dataclass(frozen=True, slots=True)
class ExportResult:
    output_path: Path
    insert_count: int
    duration_sec: float


@dataclass(frozen=True, slots=True)
class MixResult:
    output_path: Path
    insert_count: int
    mixed_count: int
    source_count: int
