"""Process-lifetime response cache with FIFO eviction.

One instance is built at application startup and handed to the service,
so tests get a fresh cache each time.

Concurrency: reads and writes happen on the event loop thread, so the
table itself is never torn. Two in-flight requests that miss on the same
key will both call the model and both ``put``; the second write wins.
That lost update only costs a duplicate call, never a wrong result, and
is accepted rather than guarded with a lock.
"""

from __future__ import annotations

import hashlib
import itertools
import logging
from collections import OrderedDict
from dataclasses import dataclass

from cqtool.shared.groq_client import ModelResponse

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 50


def make_cache_key(model: str, kind: str, language: str, code: str, extra: str = "") -> str:
    """Deterministic fingerprint for a model call.

    Identical (model, kind, language, code, extra) tuples always map to the
    same key within and across processes.
    """
    digest = hashlib.sha256()
    digest.update(code.encode("utf-8"))
    digest.update(b"\x00")
    digest.update(extra.encode("utf-8"))
    return f"{model}|{kind}|{language.lower()}|{digest.hexdigest()[:32]}"


@dataclass(frozen=True)
class CacheEntry:
    key: str
    value: ModelResponse
    inserted_at: int


class ResponseCache:
    """Bounded key -> ``ModelResponse`` map, oldest insertion evicted first.

    Re-putting an existing key replaces its value but keeps its place in
    the eviction order (FIFO, not LRU). ``get`` never reorders.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("Cache capacity must be at least 1")
        self.capacity = capacity
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._counter = itertools.count()

    def get(self, key: str) -> ModelResponse | None:
        """Return the cached response, or ``None`` on a miss.

        Entries that are not well-formed are dropped and count as misses.
        """
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not isinstance(entry, CacheEntry) or not isinstance(entry.value, ModelResponse):
            logger.warning("Dropping malformed cache entry for key %s", key)
            self._entries.pop(key, None)
            return None
        logger.info("Cache hit for %s", key)
        return entry.value

    def put(self, key: str, value: ModelResponse) -> None:
        if key in self._entries:
            old = self._entries[key]
            inserted_at = old.inserted_at if isinstance(old, CacheEntry) else next(self._counter)
            self._entries[key] = CacheEntry(key, value, inserted_at)
            return
        while len(self._entries) >= self.capacity:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted cache entry %s", evicted)
        self._entries[key] = CacheEntry(key, value, next(self._counter))

    def keys(self) -> list[str]:
        """Keys in insertion order, oldest first."""
        return list(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
