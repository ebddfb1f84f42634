"""Session-scoped in-memory caches for generated images and audio.

Nothing here is persisted. A :class:`SessionCaches` instance lives for the
running process unless a caller injects its own.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Dict, Generic, Optional, TypeVar, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - typing only
    from pydub import AudioSegment

V = TypeVar("V")


class SessionCache(Generic[V]):
    """Thread-safe mapping keyed by the exact prompt or spoken text."""

    def __init__(self) -> None:
        self._items: Dict[str, V] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[V]:
        with self._lock:
            return self._items.get(key)

    def set(self, key: str, value: V) -> None:
        with self._lock:
            self._items[key] = value

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._items

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


@dataclass
class SessionCaches:
    """Image URLs keyed by prompt and audio keyed by spoken text."""

    images: SessionCache[str] = field(default_factory=SessionCache)
    audio: "SessionCache[AudioSegment]" = field(default_factory=SessionCache)

    def clear(self) -> None:
        self.images.clear()
        self.audio.clear()


_SESSION: Optional[SessionCaches] = None
_SESSION_LOCK = threading.Lock()


def get_session_caches() -> SessionCaches:
    """Return the process-wide caches, creating them on first use."""

    global _SESSION
    with _SESSION_LOCK:
        if _SESSION is None:
            _SESSION = SessionCaches()
        return _SESSION


def reset_session_caches() -> None:
    """Drop the process-wide caches; the next access starts a fresh session."""

    global _SESSION
    with _SESSION_LOCK:
        _SESSION = None


__all__ = [
    "SessionCache",
    "SessionCaches",
    "get_session_caches",
    "reset_session_caches",
]
