"""FastAPI request/response schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class ExportRequest(BaseModel):
    hit_sound_path: str = Field(min_length=1)
    note_times_ms: list[float] = Field(min_length=1)
    output_path: str = Field(min_length=1)


class ExportResponse(BaseModel):
    output_path: str
    insert_count: int
    duration_sec: float


class SilentWavRequest(BaseModel):
    path: str = Field(min_length=1)
    duration_sec: float = Field(gt=0.0)
    sample_rate: int | None = Field(default=None, gt=0, le=4_294_967_295)
    bits_per_sample: Literal[8, 16] | None = None
    channels: int | None = Field(default=None, ge=1, le=2)


class SilentWavResponse(BaseModel):
    path: str
    data_bytes: int


class InsertItem(BaseModel):
    timestamp_ms: float
    path: str = Field(min_length=1)


class MixRequest(BaseModel):
    base_path: str = Field(min_length=1)
    inserts: list[InsertItem]
    output_path: str = Field(min_length=1)


class MixResponse(BaseModel):
    output_path: str
    insert_count: int
    mixed_count: int
