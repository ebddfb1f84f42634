"""Persisted display-language preference."""

from __future__ import annotations

from typing import Optional

from easy_korean import logging_manager as log_mgr
from easy_korean.config_manager import DEFAULT_DISPLAY_LANGUAGE
from easy_korean.storage import KeyValueStore, StorageError

logger = log_mgr.get_logger().getChild("lookup_cache.preferences")

PREFERENCE_KEY = "easy_korean_preference_v1"


class LanguagePreference:
    """Single stored language string, written with a default on first run."""

    def __init__(self, storage: KeyValueStore, *, default: str = DEFAULT_DISPLAY_LANGUAGE) -> None:
        self._storage = storage
        self._default = default

    @property
    def default(self) -> str:
        return self._default

    def load(self) -> str:
        """Return the stored language, persisting the default if none exists."""
        try:
            stored: Optional[str] = self._storage.get_item(PREFERENCE_KEY)
        except (StorageError, OSError) as exc:
            logger.warning("Failed to read language preference: %s", exc)
            return self._default

        if stored and stored.strip():
            return stored

        try:
            self._storage.set_item(PREFERENCE_KEY, self._default)
        except (StorageError, OSError) as exc:
            logger.warning("Failed to persist default language preference: %s", exc)
        return self._default

    def save(self, language: str) -> str:
        """Overwrite the stored preference with ``language``."""
        value = (language or "").strip()
        if not value:
            raise ValueError("Language cannot be empty.")
        self._storage.set_item(PREFERENCE_KEY, value)
        logger.info(
            "Language preference changed",
            extra={"event": "preference.changed", "language": value},
        )
        return value


__all__ = ["LanguagePreference", "PREFERENCE_KEY"]
