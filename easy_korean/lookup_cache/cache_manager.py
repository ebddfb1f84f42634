"""Persistent text cache for dictionary lookups.

Entries are stored in a :class:`~easy_korean.storage.KeyValueStore` under a
key derived from the target language and the normalized query. Cache
failures are never surfaced: reads degrade to a miss and writes to a no-op.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from pydantic import ValidationError

from easy_korean import logging_manager as log_mgr
from easy_korean.models import DictionaryEntry
from easy_korean.storage import KeyValueStore, StorageError

logger = log_mgr.get_logger().getChild("lookup_cache")

TEXT_CACHE_PREFIX = "ek_text_cache_v1_"

CacheStatus = Literal["hit", "miss", "corrupt", "error"]


def normalize_query(query: str) -> str:
    """Return the lowercased, trimmed form used in cache keys."""
    return (query or "").strip().lower()


def build_cache_key(query: str, language: str) -> str:
    """Return the storage key for ``query`` looked up in ``language``."""
    return f"{TEXT_CACHE_PREFIX}{language}_{normalize_query(query)}"


@dataclass(frozen=True)
class CacheReadResult:
    """Outcome of a cache read; ``entry`` is set only on a hit."""

    key: str
    status: CacheStatus
    entry: Optional[DictionaryEntry] = None

    @property
    def hit(self) -> bool:
        return self.status == "hit"


class TextCache:
    """Cache of :class:`DictionaryEntry` values keyed by query and language."""

    def __init__(self, storage: KeyValueStore) -> None:
        self._storage = storage

    @property
    def storage(self) -> KeyValueStore:
        return self._storage

    def read(self, query: str, language: str) -> CacheReadResult:
        """Look up a cached entry, removing the record if it cannot be parsed."""
        key = build_cache_key(query, language)
        try:
            payload = self._storage.get_item(key)
        except (StorageError, OSError) as exc:
            logger.warning("Cache read failed for %s: %s", key, exc, extra={"event": "cache.read_failed"})
            return CacheReadResult(key=key, status="error")

        if payload is None:
            return CacheReadResult(key=key, status="miss")

        try:
            entry = DictionaryEntry.from_json(payload)
        except (ValidationError, ValueError) as exc:
            logger.warning(
                "Discarding corrupt cache record %s: %s",
                key,
                exc,
                extra={"event": "cache.corrupt"},
            )
            self._discard(key)
            return CacheReadResult(key=key, status="corrupt")

        return CacheReadResult(key=key, status="hit", entry=entry)

    def get(self, query: str, language: str) -> Optional[DictionaryEntry]:
        return self.read(query, language).entry

    def put(self, query: str, language: str, entry: DictionaryEntry) -> bool:
        """Store ``entry``; returns ``False`` when the write failed."""
        key = build_cache_key(query, language)
        try:
            self._storage.set_item(key, entry.to_json())
        except (StorageError, OSError) as exc:
            logger.warning("Cache write failed for %s: %s", key, exc, extra={"event": "cache.write_failed"})
            return False
        return True

    def _discard(self, key: str) -> None:
        try:
            self._storage.remove_item(key)
        except (StorageError, OSError) as exc:
            logger.warning("Failed to remove corrupt cache record %s: %s", key, exc)


__all__ = [
    "CacheReadResult",
    "TEXT_CACHE_PREFIX",
    "TextCache",
    "build_cache_key",
    "normalize_query",
]
