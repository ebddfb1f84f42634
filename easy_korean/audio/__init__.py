"""Speech synthesis for dictionary entries."""

from .audio_utils import decode_base64, decode_pcm16
from .backends import (
    BaseSpeechProvider,
    GTTSSpeechProvider,
    GeminiSpeechProvider,
    NativeSpeechProvider,
    create_backend,
    get_speech_provider,
)
from .speech import MAX_SPEECH_CHARS, SpeechService, validate_speech_text

__all__ = [
    "BaseSpeechProvider",
    "GTTSSpeechProvider",
    "GeminiSpeechProvider",
    "MAX_SPEECH_CHARS",
    "NativeSpeechProvider",
    "SpeechService",
    "create_backend",
    "decode_base64",
    "decode_pcm16",
    "get_speech_provider",
    "validate_speech_text",
]
