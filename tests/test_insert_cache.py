import struct
import wave
from pathlib import Path

import pytest

import hitsound_merger.audio.cache as cache_module
from hitsound_merger.audio.cache import InsertCache
from hitsound_merger.audio.models import CANONICAL_FORMAT


def _write_mono_wav(path: Path, values: list[int], sample_rate: int = 44_100) -> None:
    with wave.open(str(path), "wb") as wav:
        wav.setnchannels(1)
        wav.setsampwidth(2)
        wav.setframerate(sample_rate)
        wav.writeframes(struct.pack(f"<{len(values)}h", *values))


def test_repeated_lookups_decode_once(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    hit = tmp_path / "kick.wav"
    _write_mono_wav(hit, [100, 200, 300])
    calls: list[str] = []
    original = cache_module.read_wav

    def _counting_read(source):
        calls.append(str(source))
        return original(source)

    monkeypatch.setattr(cache_module, "read_wav", _counting_read)
    cache = InsertCache()

    first = cache.get(hit)
    for _ in range(50):
        assert cache.get(str(hit)) is first
    assert calls == [str(hit)]
    assert cache.load_count == 1
    assert hit in cache
    assert len(cache) == 1


def test_cached_buffers_are_normalized(tmp_path: Path) -> None:
    hit = tmp_path / "kick.wav"
    _write_mono_wav(hit, [100, -100])

    item = InsertCache().get(hit)
    assert item.format == CANONICAL_FORMAT
    assert struct.unpack("<4h", item.data) == (100, 100, -100, -100)


def test_distinct_paths_are_cached_separately(tmp_path: Path) -> None:
    kick = tmp_path / "kick.wav"
    snare = tmp_path / "snare.wav"
    _write_mono_wav(kick, [1])
    _write_mono_wav(snare, [2])
    cache = InsertCache()

    cache.get(kick)
    cache.get(snare)
    cache.get(kick)
    assert cache.load_count == 2

    cache.clear()
    assert len(cache) == 0
    cache.get(kick)
    assert cache.load_count == 3
