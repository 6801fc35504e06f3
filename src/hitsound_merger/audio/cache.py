"""Decode cache for insert sources, keyed by path."""

from __future__ import annotations

import logging
from pathlib import Path

from hitsound_merger.audio.models import AudioBuffer
from hitsound_merger.audio.normalizer import FormatNormalizer
from hitsound_merger.audio.wav_codec import read_wav

logger = logging.getLogger(__name__)


class InsertCache:
    def __init__(self, normalizer: FormatNormalizer | None = None) -> None:
        self._normalizer = normalizer or FormatNormalizer()
        self._items: dict[str, AudioBuffer] = {}
        self._load_count = 0

    @property
    def load_count(self) -> int:
        return self._load_count

    @property
    def normalizer(self) -> FormatNormalizer:
        return self._normalizer

    def __contains__(self, path: object) -> bool:
        return isinstance(path, (str, Path)) and str(path) in self._items

    def __len__(self) -> int:
        return len(self._items)

    def get(self, path: str | Path) -> AudioBuffer:
        key = str(path)
        item = self._items.get(key)
        if item is not None:
            return item
        decoded = read_wav(key)
        item = self._normalizer.normalize(decoded)
        self._items[key] = item
        self._load_count += 1
        logger.debug("cached insert source %s (%s, %d bytes)", key, decoded.format, len(item.data))
        return item

    def clear(self) -> None:
        self._items.clear()
