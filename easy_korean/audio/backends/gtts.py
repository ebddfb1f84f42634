"""gTTS speech provider."""

from __future__ import annotations

import io
from typing import Optional

from gtts import gTTS
from gtts.tts import gTTSError
from pydub import AudioSegment
from pydub.exceptions import CouldntDecodeError

from .base import BaseSpeechProvider, SpeechError


class GTTSSpeechProvider(BaseSpeechProvider):
    """Remote fallback using the Google Translate text-to-speech endpoint."""

    name = "gtts"

    def __init__(self, *, executable_path: Optional[str] = None, lang: str = "ko") -> None:
        super().__init__(executable_path=executable_path)
        self._lang = lang

    def synthesize(self, text: str) -> AudioSegment:
        buffer = io.BytesIO()
        try:
            gTTS(text=text, lang=self._lang).write_to_fp(buffer)
        except (gTTSError, AssertionError, ValueError) as exc:
            raise SpeechError("gTTS synthesis failed") from exc

        buffer.seek(0)
        try:
            return AudioSegment.from_file(buffer, format="mp3")
        except (CouldntDecodeError, OSError) as exc:
            raise SpeechError("Unable to decode gTTS audio") from exc


__all__ = ["GTTSSpeechProvider"]
