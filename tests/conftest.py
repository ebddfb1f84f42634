import os
import tempfile

# The package logger opens its file handler on import.
os.environ.setdefault("EASY_KOREAN_LOG_DIR", tempfile.mkdtemp(prefix="easy-korean-logs-"))

import pytest  # noqa: E402

from easy_korean import config_manager as cfg  # noqa: E402
from easy_korean.lookup_cache import reset_session_caches  # noqa: E402
from easy_korean.models import DictionaryEntry  # noqa: E402
from easy_korean.storage import MemoryStore  # noqa: E402

from tests.helpers.fakes import entry_payload  # noqa: E402

_CONFIG_ENV_VARS = (
    "EASY_KOREAN_API_KEY",
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "VITE_API_KEY",
    "API_KEY",
    "EASY_KOREAN_LOOKUP_MODELS",
    "EASY_KOREAN_TARGET_LANGUAGE",
    "EASY_KOREAN_REQUEST_TIMEOUT",
    "EASY_KOREAN_REQUEST_TIMEOUT_SECONDS",
    "EASY_KOREAN_STORAGE_PATH",
    "EASY_KOREAN_IMAGES",
    "EASY_KOREAN_SPEECH_BACKEND",
    "EASY_KOREAN_TTS_BACKEND",
    "EASY_KOREAN_DEBUG",
)


@pytest.fixture(autouse=True)
def isolated_configuration(monkeypatch):
    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    cfg.set_settings(None)
    reset_session_caches()
    yield
    cfg.set_settings(None)
    reset_session_caches()


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def sample_entry() -> DictionaryEntry:
    return DictionaryEntry.model_validate(entry_payload())
