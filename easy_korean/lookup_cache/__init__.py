"""Caches used by dictionary lookups.

Key Components:
    - TextCache: persisted lookup results keyed by language and query
    - SessionCaches: in-memory image and audio caches for one session
    - LanguagePreference: the stored display language

Usage Example:
    from easy_korean.lookup_cache import TextCache
    from easy_korean.storage import JsonFileStore

    cache = TextCache(JsonFileStore("~/.easy_korean/storage.json"))
    entry = cache.get("안녕", "English")
"""

from .cache_manager import (
    TEXT_CACHE_PREFIX,
    CacheReadResult,
    TextCache,
    build_cache_key,
    normalize_query,
)
from .preferences import PREFERENCE_KEY, LanguagePreference
from .session import (
    SessionCache,
    SessionCaches,
    get_session_caches,
    reset_session_caches,
)

__all__ = [
    "CacheReadResult",
    "LanguagePreference",
    "PREFERENCE_KEY",
    "SessionCache",
    "SessionCaches",
    "TEXT_CACHE_PREFIX",
    "TextCache",
    "build_cache_key",
    "get_session_caches",
    "normalize_query",
    "reset_session_caches",
]
