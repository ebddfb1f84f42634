"""macOS ``say`` command provider."""

from __future__ import annotations

import os
import subprocess
import tempfile
from typing import Optional

from pydub import AudioSegment
from pydub.exceptions import CouldntDecodeError

from easy_korean import config_manager as cfg
from easy_korean import logging_manager as log_mgr

from .base import BaseSpeechProvider, SpeechError

logger = log_mgr.get_logger().getChild("audio.native")

# ``say`` speaks about 175 words per minute at its default rate.
BASE_WORDS_PER_MINUTE = 175


def rate_to_wpm(rate: float) -> int:
    return max(1, int(round(BASE_WORDS_PER_MINUTE * rate)))


class NativeSpeechProvider(BaseSpeechProvider):
    """Platform synthesizer using the macOS ``say`` utility."""

    name = "native"

    def __init__(
        self,
        *,
        executable_path: Optional[str] = None,
        voice: Optional[str] = None,
        rate: Optional[float] = None,
    ) -> None:
        super().__init__(executable_path=executable_path)
        settings = cfg.get_settings()
        self._voice = voice or settings.native_voice
        self._rate = rate if rate is not None else settings.native_rate

    def _resolve_executable(self) -> str:
        if self.executable_path:
            return self.executable_path
        return "say"

    def build_command(self, text: str, destination: str) -> list[str]:
        return [
            self._resolve_executable(),
            "-v",
            self._voice,
            "-r",
            str(rate_to_wpm(self._rate)),
            "-o",
            destination,
            text,
        ]

    def synthesize(self, text: str) -> AudioSegment:
        handle = tempfile.NamedTemporaryFile(suffix=".aiff", delete=False)
        destination = handle.name
        handle.close()

        cmd = self.build_command(text, destination)
        try:
            try:
                subprocess.run(cmd, check=True, capture_output=True, text=True)
            except (OSError, subprocess.CalledProcessError) as exc:
                stderr = getattr(exc, "stderr", None)
                logger.warning(
                    "Native synthesis failed: %s",
                    stderr or exc,
                    extra={"event": "speech.native_failed"},
                )
                raise SpeechError("Native speech synthesis failed") from exc
            try:
                return AudioSegment.from_file(destination, format="aiff")
            except (CouldntDecodeError, OSError) as exc:
                raise SpeechError("Unable to decode native speech output") from exc
        finally:
            if os.path.exists(destination):
                os.remove(destination)


__all__ = ["BASE_WORDS_PER_MINUTE", "NativeSpeechProvider", "rate_to_wpm"]
