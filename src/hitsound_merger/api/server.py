"""HTTP endpoints for hit-sound export and WAV utilities."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response

from hitsound_merger.api.schemas import (
    ExportRequest,
    ExportResponse,
    MixRequest,
    MixResponse,
    SilentWavRequest,
    SilentWavResponse,
)
from hitsound_merger.audio.models import WaveFormatDescriptor
from hitsound_merger.audio.wav_codec import silent_byte_count
from hitsound_merger.config import MergerSettings
from hitsound_merger.errors import AudioIOError, HitSoundMergerError
from hitsound_merger.merger.service import HitSoundMerger


def create_app(merger: HitSoundMerger | None = None) -> FastAPI:
    app = FastAPI(title="hitsound-merger API", version="0.1.0")
    service = merger or HitSoundMerger(settings=MergerSettings.from_env())

    @app.get("/")
    def root() -> dict[str, str]:
        return {
            "service": "hitsound-merger API",
            "status": "ok",
            "docs": "/docs",
        }

    @app.get("/favicon.ico", include_in_schema=False)
    def favicon() -> Response:
        return Response(status_code=204)

    @app.post("/v1/hitsound/export", response_model=ExportResponse)
    def export_hitsound(payload: ExportRequest) -> ExportResponse:
        try:
            result = service.export(payload.hit_sound_path, payload.note_times_ms, payload.output_path)
        except HitSoundMergerError as exc:
            raise _to_http_error(exc) from exc
        return ExportResponse(
            output_path=str(result.output_path),
            insert_count=result.insert_count,
            duration_sec=result.duration_sec,
        )

    @app.post("/v1/wav/silent", response_model=SilentWavResponse)
    def create_silent(payload: SilentWavRequest) -> SilentWavResponse:
        canonical = service.canonical_format
        try:
            wave_format = WaveFormatDescriptor(
                sample_rate=payload.sample_rate or canonical.sample_rate,
                bits_per_sample=payload.bits_per_sample or canonical.bits_per_sample,
                channels=payload.channels or canonical.channels,
            )
            path = service.create_silent_wav(payload.path, payload.duration_sec, wave_format)
        except HitSoundMergerError as exc:
            raise _to_http_error(exc) from exc
        return SilentWavResponse(path=str(path), data_bytes=silent_byte_count(payload.duration_sec, wave_format))

    @app.post("/v1/wav/mix", response_model=MixResponse)
    def mix_wav(payload: MixRequest) -> MixResponse:
        try:
            result = service.mix_audio(
                payload.base_path,
                [(item.timestamp_ms, item.path) for item in payload.inserts],
                payload.output_path,
            )
        except HitSoundMergerError as exc:
            raise _to_http_error(exc) from exc
        return MixResponse(
            output_path=str(result.output_path),
            insert_count=result.insert_count,
            mixed_count=result.mixed_count,
        )

    return app


def _to_http_error(exc: HitSoundMergerError) -> HTTPException:
    if isinstance(exc, AudioIOError):
        cause = exc.__cause__
        status = 404 if isinstance(cause, FileNotFoundError) else 500
        return HTTPException(status_code=status, detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))


app = create_app()
