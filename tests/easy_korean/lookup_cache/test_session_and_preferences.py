from __future__ import annotations

import pytest

from easy_korean.lookup_cache import (
    PREFERENCE_KEY,
    LanguagePreference,
    SessionCache,
    get_session_caches,
    reset_session_caches,
)
from easy_korean.storage import MemoryStore, StorageError


class _UnreadableStore(MemoryStore):
    def get_item(self, key):
        raise StorageError("unreadable")


def test_session_cache_basic_operations():
    cache: SessionCache[str] = SessionCache()

    cache.set("prompt", "data:image/png;base64,AAA")

    assert "prompt" in cache
    assert len(cache) == 1
    assert cache.get("prompt") == "data:image/png;base64,AAA"
    cache.clear()
    assert cache.get("prompt") is None


def test_session_caches_are_shared_until_reset():
    first = get_session_caches()
    first.images.set("p", "url")

    assert get_session_caches() is first

    reset_session_caches()
    assert get_session_caches() is not first
    assert get_session_caches().images.get("p") is None


def test_preference_defaults_to_korean_and_is_persisted():
    store = MemoryStore()

    assert LanguagePreference(store).load() == "한국어 (Korean)"
    assert store.get_item(PREFERENCE_KEY) == "한국어 (Korean)"


def test_saved_preference_is_returned_verbatim():
    store = MemoryStore()
    preference = LanguagePreference(store)

    preference.save("Español (Spanish)")

    assert LanguagePreference(store).load() == "Español (Spanish)"


def test_blank_preference_is_rejected():
    with pytest.raises(ValueError):
        LanguagePreference(MemoryStore()).save("   ")


def test_unreadable_preference_falls_back_to_default():
    assert LanguagePreference(_UnreadableStore(), default="English").load() == "English"
