"""Base interfaces for speech providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from pydub import AudioSegment

from easy_korean.errors import SpeechError


class BaseSpeechProvider(ABC):
    """Abstract base class for concrete speech providers.

    Implementations surface every operational failure as :class:`SpeechError`
    so callers can handle the native, buffered and remote variants alike.
    """

    name: str = "base"

    def __init__(self, *, executable_path: Optional[str] = None) -> None:
        self._executable_path = executable_path

    @property
    def executable_path(self) -> Optional[str]:
        """Return the user-provided executable path override, if any."""

        return self._executable_path

    @abstractmethod
    def synthesize(self, text: str) -> AudioSegment:
        """Generate Korean speech audio for ``text``."""


__all__ = ["BaseSpeechProvider", "SpeechError"]
