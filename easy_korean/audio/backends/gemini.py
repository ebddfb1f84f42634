"""Gemini audio-modality provider returning a rendered PCM buffer."""

from __future__ import annotations

from typing import Callable, Optional, Protocol

from pydub import AudioSegment

from easy_korean import config_manager as cfg
from easy_korean import logging_manager as log_mgr
from easy_korean.audio.audio_utils import decode_pcm16
from easy_korean.errors import LookupFailure
from easy_korean.llm_client import create_client

from .base import BaseSpeechProvider, SpeechError

logger = log_mgr.get_logger().getChild("audio.gemini")


class SpeechBackend(Protocol):
    def generate_speech(self, *, model: str, text: str, voice: Optional[str] = None) -> Optional[bytes]:
        ...


class GeminiSpeechProvider(BaseSpeechProvider):
    """Speak ``text`` with a prebuilt Gemini voice."""

    name = "gemini"

    def __init__(
        self,
        *,
        executable_path: Optional[str] = None,
        client_factory: Callable[[], SpeechBackend] = create_client,
        model: Optional[str] = None,
        voice: Optional[str] = None,
    ) -> None:
        super().__init__(executable_path=executable_path)
        settings = cfg.get_settings()
        self._client_factory = client_factory
        self._model = model or settings.tts_model
        self._voice = voice or settings.tts_voice

    def _request(self, client: SpeechBackend, text: str, voice: Optional[str]) -> Optional[bytes]:
        try:
            return client.generate_speech(model=self._model, text=text, voice=voice)
        except Exception as exc:  # noqa: BLE001 - provider errors become SpeechError
            raise SpeechError(f"Speech request failed: {exc}") from exc

    def synthesize(self, text: str) -> AudioSegment:
        try:
            client = self._client_factory()
        except LookupFailure as exc:
            raise SpeechError(exc.user_message) from exc

        audio = self._request(client, text, self._voice)
        if not audio:
            logger.info(
                "No audio with voice %s; retrying with the default voice",
                self._voice,
                extra={"event": "speech.retry_default_voice", "model": self._model},
            )
            audio = self._request(client, text, None)
        if not audio:
            raise SpeechError("No audio data received")
        return decode_pcm16(audio)


__all__ = ["GeminiSpeechProvider", "SpeechBackend"]
