"""Pronunciation playback for entries and example sentences."""

from __future__ import annotations

from typing import Optional

from pydub import AudioSegment
from pydub.exceptions import CouldntEncodeError

from easy_korean import logging_manager as log_mgr
from easy_korean.errors import SpeechError
from easy_korean.lookup_cache import SessionCache, get_session_caches

from .backends import BaseSpeechProvider, get_speech_provider

logger = log_mgr.get_logger().getChild("audio.speech")

MAX_SPEECH_CHARS = 500


def validate_speech_text(text: str) -> str:
    """Return ``text`` stripped, raising :class:`SpeechError` when unspeakable."""

    cleaned = (text or "").strip()
    if not cleaned:
        raise SpeechError("Nothing to speak")
    if len(cleaned) > MAX_SPEECH_CHARS:
        raise SpeechError(f"Text is too long to speak ({len(cleaned)} > {MAX_SPEECH_CHARS} characters)")
    return cleaned


class SpeechService:
    """Synthesize Korean speech, caching audio per exact text for the session."""

    def __init__(
        self,
        provider: Optional[BaseSpeechProvider] = None,
        *,
        cache: Optional[SessionCache[AudioSegment]] = None,
    ) -> None:
        self._provider = provider or get_speech_provider()
        self._cache = cache if cache is not None else get_session_caches().audio

    @property
    def provider(self) -> BaseSpeechProvider:
        return self._provider

    def speak(self, text: str) -> AudioSegment:
        cleaned = validate_speech_text(text)
        cached = self._cache.get(cleaned)
        if cached is not None:
            return cached

        with log_mgr.log_context(query=cleaned):
            logger.debug(
                "Synthesizing with %s",
                self._provider.name,
                extra={"event": "speech.synthesize"},
            )
            audio = self._provider.synthesize(cleaned)
        self._cache.set(cleaned, audio)
        return audio

    def export(self, text: str, destination: str, *, audio_format: str = "mp3") -> str:
        """Synthesize ``text`` and write it to ``destination``."""

        audio = self.speak(text)
        try:
            audio.export(destination, format=audio_format)
        except (CouldntEncodeError, OSError, RuntimeError) as exc:
            raise SpeechError(f"Unable to write audio to {destination}") from exc
        return destination


__all__ = ["MAX_SPEECH_CHARS", "SpeechService", "validate_speech_text"]
