from __future__ import annotations

import logging
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Optional

from .results import ClassificationResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CacheEntry:
    result: ClassificationResult
    created_at: float


class SentimentCache:
    """In-process TTL cache for analysis results with LRU eviction.

    Keys are the first ``key_length`` characters of ``"{title} {content}"``.
    Entries older than ``ttl_seconds`` are treated as misses and overwritten on
    the next write; once ``max_size`` entries are held the least recently used
    one is dropped.
    """

    def __init__(
        self,
        ttl_seconds: float = 24 * 60 * 60,
        max_size: int = 1024,
        key_length: int = 100,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.max_size = max(1, max_size)
        self.key_length = key_length
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()

    def make_key(self, content: str, title: Optional[str] = None) -> str:
        return f"{title or ''} {content or ''}"[: self.key_length]

    def get(self, key: str) -> Optional[ClassificationResult]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.created_at > self.ttl_seconds:
            logger.debug("Cache entry expired for key %r", key[:30])
            return None
        self._entries.move_to_end(key)
        return entry.result

    def set(self, key: str, result: ClassificationResult) -> None:
        self._entries[key] = CacheEntry(result=result, created_at=self._clock())
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_size:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted cache entry %r", evicted[:30])

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
