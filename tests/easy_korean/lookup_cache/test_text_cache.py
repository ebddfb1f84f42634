from __future__ import annotations

import json

from easy_korean.lookup_cache import TEXT_CACHE_PREFIX, TextCache, build_cache_key
from easy_korean.storage import JsonFileStore, MemoryStore, StorageError

from tests.helpers.fakes import entry_payload


class _BrokenStore(MemoryStore):
    def get_item(self, key):
        raise StorageError("disk unavailable")

    def set_item(self, key, value):
        raise StorageError("disk full")


def test_cache_key_normalizes_query_but_not_language():
    assert build_cache_key("  Hello ", "English") == f"{TEXT_CACHE_PREFIX}English_hello"
    assert build_cache_key("안녕", "한국어 (Korean)") == "ek_text_cache_v1_한국어 (Korean)_안녕"


def test_put_then_get_returns_equal_entry(memory_store, sample_entry):
    cache = TextCache(memory_store)

    assert cache.put("안녕", "English", sample_entry) is True

    assert cache.get("안녕", "English") == sample_entry
    assert cache.get("  안녕  ", "English") == sample_entry


def test_entries_are_separated_by_language(memory_store, sample_entry):
    cache = TextCache(memory_store)
    cache.put("안녕", "English", sample_entry)

    assert cache.get("안녕", "Español (Spanish)") is None


def test_stored_record_uses_wire_names(memory_store, sample_entry):
    TextCache(memory_store).put("안녕", "English", sample_entry)

    record = json.loads(memory_store.get_item(build_cache_key("안녕", "English")))

    assert record["partOfSpeech"] == "Expression"
    assert record["difficultyLevel"] == "Beginner"
    assert "imageUrl" not in record


def test_unparseable_record_is_removed_on_read(memory_store):
    key = build_cache_key("안녕", "English")
    memory_store.set_item(key, "{truncated")
    cache = TextCache(memory_store)

    result = cache.read("안녕", "English")

    assert result.status == "corrupt"
    assert result.entry is None
    assert memory_store.get_item(key) is None


def test_record_missing_required_fields_is_removed(memory_store):
    key = build_cache_key("안녕", "English")
    memory_store.set_item(key, json.dumps(entry_payload(examples=[])))

    assert TextCache(memory_store).get("안녕", "English") is None
    assert memory_store.get_item(key) is None


def test_storage_failures_are_not_raised(sample_entry):
    cache = TextCache(_BrokenStore())

    assert cache.put("안녕", "English", sample_entry) is False
    assert cache.read("안녕", "English").status == "error"


def test_put_over_quota_is_swallowed(tmp_path, sample_entry):
    cache = TextCache(JsonFileStore(tmp_path / "storage.json", max_bytes=64))

    assert cache.put("안녕", "English", sample_entry) is False
    assert cache.get("안녕", "English") is None
