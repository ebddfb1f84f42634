"""Key-value storage with ``localStorage`` semantics.

Values are plain strings. :class:`JsonFileStore` persists every item in a
single JSON document written atomically; :class:`MemoryStore` keeps items for
the lifetime of the object.
"""

from __future__ import annotations

import json
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

from easy_korean import logging_manager

_LOGGER = logging_manager.get_logger().getChild("storage")


class StorageError(OSError):
    """Raised when the backing store cannot be read or written."""


class StorageQuotaExceeded(StorageError):
    """Raised when a write would grow the store past its size limit."""


class KeyValueStore(ABC):
    """String-to-string store."""

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the value stored under ``key`` or ``None``."""

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete ``key``; missing keys are ignored."""

    @abstractmethod
    def keys(self) -> List[str]:
        """Return all stored keys."""


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._items: Dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        with self._lock:
            self._items.pop(key, None)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._items)


class JsonFileStore(KeyValueStore):
    """Store backed by one JSON object on disk.

    The file is read lazily on first access. An unreadable or non-object file
    is logged and treated as empty; the next write replaces it.
    """

    def __init__(self, path: Path | str, *, max_bytes: Optional[int] = None) -> None:
        self._path = Path(path).expanduser()
        self._max_bytes = max_bytes if max_bytes and max_bytes > 0 else None
        self._items: Optional[Dict[str, str]] = None
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Dict[str, str]:
        if self._items is not None:
            return self._items
        items: Dict[str, str] = {}
        if self._path.exists():
            try:
                payload = json.loads(self._path.read_text(encoding="utf-8"))
            except (OSError, json.JSONDecodeError) as exc:
                _LOGGER.warning(
                    "Discarding unreadable storage file %s: %s",
                    self._path,
                    exc,
                    extra={"event": "storage.load_failed"},
                )
                payload = {}
            if isinstance(payload, dict):
                items = {str(key): value for key, value in payload.items() if isinstance(value, str)}
        self._items = items
        return items

    def _write(self, items: Dict[str, str]) -> None:
        payload = json.dumps(items, ensure_ascii=False, sort_keys=True)
        if self._max_bytes is not None and len(payload.encode("utf-8")) > self._max_bytes:
            raise StorageQuotaExceeded(f"Storage quota of {self._max_bytes} bytes exceeded")

        self._path.parent.mkdir(parents=True, exist_ok=True)
        temp_path: Path | None = None
        try:
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self._path.parent, delete=False
            ) as handle:
                temp_path = Path(handle.name)
                handle.write(payload)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_path, self._path)
        except OSError:
            if temp_path is not None:
                try:
                    temp_path.unlink()
                except OSError:
                    pass
            raise

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            items = dict(self._load())
            items[key] = str(value)
            self._write(items)
            self._items = items

    def remove_item(self, key: str) -> None:
        with self._lock:
            items = self._load()
            if key not in items:
                return
            remaining = {k: v for k, v in items.items() if k != key}
            self._write(remaining)
            self._items = remaining

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._load())


__all__ = [
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "StorageError",
    "StorageQuotaExceeded",
]
