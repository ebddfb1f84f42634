"""Adapter around the Gemini ``generate_content`` API."""

from __future__ import annotations

import base64
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from google import genai
from google.genai import types

from easy_korean import config_manager as cfg
from easy_korean import logging_manager as log_mgr
from easy_korean.errors import (
    DEFAULT_CLASSIFIER,
    AuthError,
    ErrorCategory,
    ErrorClassifier,
    ImageGenerationError,
)

logger = log_mgr.get_logger().getChild("llm_client")

TokenUsage = Dict[str, int]

_MISSING_KEY_MESSAGE = (
    "API Key is missing. Please configure GEMINI_API_KEY in your .env.local file."
)


def _string(description: Optional[str] = None) -> types.Schema:
    return types.Schema(type=types.Type.STRING, description=description)


DICTIONARY_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "word": _string("The Korean word, phrase, or short sentence."),
        "romanization": _string("Romanized pronunciation (Latin characters ONLY)."),
        "partOfSpeech": _string(
            "Noun, Verb, Adjective, Phrase, Expression, etc. (Translated to target language)"
        ),
        "definition": _string("A simple, easy-to-understand definition in the target language."),
        "difficultyLevel": types.Schema(
            type=types.Type.STRING,
            enum=["Beginner", "Intermediate", "Advanced"],
        ),
        "examples": types.Schema(
            type=types.Type.ARRAY,
            description="2-3 common example sentences.",
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "korean": _string(),
                    "english": _string("Translation of the example strictly in the target language."),
                    "romanization": _string(
                        "Romanized pronunciation (Latin characters ONLY). NO Hangul."
                    ),
                },
            ),
        ),
        "culturalNote": _string(
            "A brief fun fact or nuance about usage in the target language. "
            "Mention politeness level (formal/informal) for phrases."
        ),
        "breakdown": types.Schema(
            type=types.Type.ARRAY,
            description="Crucial for phrases/sentences. Break down key words and grammatical particles.",
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "part": _string("The specific Korean word or particle."),
                    "romanization": _string("Romanized pronunciation (Latin characters ONLY)."),
                    "meaning": _string("Meaning of the part in the target language."),
                },
            ),
        ),
    },
    required=["word", "romanization", "definition", "examples", "difficultyLevel"],
)


@dataclass(frozen=True)
class ClientSettings:
    """Immutable collection of configuration parameters for a :class:`GeminiClient`."""

    api_key: Optional[str] = None
    timeout_seconds: Optional[float] = None
    debug: bool = False

    def resolve_api_key(self) -> Optional[str]:
        if self.api_key and self.api_key.strip():
            return self.api_key.strip()
        return cfg.get_settings().api_key_value()

    def resolve_timeout(self) -> float:
        if self.timeout_seconds and self.timeout_seconds > 0:
            return float(self.timeout_seconds)
        return cfg.get_request_timeout()

    def with_updates(self, **updates: Any) -> "ClientSettings":
        return replace(self, **updates)


@dataclass
class LLMResponse:
    """Result of one structured generation call.

    ``error`` and ``category`` are set together when the call failed.
    """

    text: str
    model: str
    token_usage: TokenUsage = field(default_factory=dict)
    raw: Optional[Any] = None
    error: Optional[str] = None
    category: Optional[ErrorCategory] = None
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _status_code(exc: BaseException) -> Optional[int]:
    code = getattr(exc, "code", None)
    return code if isinstance(code, int) else None


class GeminiClient:
    """Thin wrapper issuing Gemini calls with the project's schema and timeouts."""

    def __init__(
        self,
        settings: Optional[ClientSettings] = None,
        *,
        client: Optional[Any] = None,
        classifier: ErrorClassifier = DEFAULT_CLASSIFIER,
    ) -> None:
        self._settings = settings or ClientSettings()
        self._classifier = classifier
        if client is None:
            api_key = self._settings.resolve_api_key()
            if not api_key:
                logger.error(_MISSING_KEY_MESSAGE, extra={"event": "llm.credentials_missing"})
                raise AuthError(_MISSING_KEY_MESSAGE)
            timeout_ms = int(self._settings.resolve_timeout() * 1000)
            client = genai.Client(
                api_key=api_key,
                http_options=types.HttpOptions(timeout=timeout_ms),
            )
        self._client = client

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    @property
    def classifier(self) -> ErrorClassifier:
        return self._classifier

    def _log_debug(self, message: str, *args: Any) -> None:
        if self._settings.debug:
            logger.debug(message, *args)

    def _extract_token_usage(self, response: Any) -> TokenUsage:
        usage: TokenUsage = {}
        metadata = getattr(response, "usage_metadata", None)
        if metadata is None:
            return usage
        for key in ("prompt_token_count", "candidates_token_count"):
            value = getattr(metadata, key, None)
            if isinstance(value, int):
                usage[key] = value
        return usage

    def _failure(self, model: str, exc: BaseException) -> LLMResponse:
        message = str(exc) or exc.__class__.__name__
        status_code = _status_code(exc)
        return LLMResponse(
            text="",
            model=model,
            error=message,
            category=self._classifier.classify(message, status_code),
            status_code=status_code,
        )

    def generate_entry(self, *, model: str, prompt: str, system_instruction: str) -> LLMResponse:
        """Request a JSON dictionary entry from ``model``.

        Provider failures are returned as an errored :class:`LLMResponse`
        rather than raised. The body is not validated here.
        """

        config = types.GenerateContentConfig(
            response_mime_type="application/json",
            response_schema=DICTIONARY_SCHEMA,
            system_instruction=system_instruction,
        )
        self._log_debug("Dispatching structured request to %s", model)
        try:
            response = self._client.models.generate_content(
                model=model,
                contents=prompt,
                config=config,
            )
        except Exception as exc:  # noqa: BLE001 - every provider failure becomes a result
            return self._failure(model, exc)

        text = (getattr(response, "text", None) or "").strip()
        if not text:
            return LLMResponse(
                text="",
                model=model,
                raw=response,
                error="No response from AI",
                category=ErrorCategory.MALFORMED,
            )

        usage = self._extract_token_usage(response)
        if usage:
            self._log_debug(
                "Token usage - prompt: %s, completion: %s",
                usage.get("prompt_token_count", 0),
                usage.get("candidates_token_count", 0),
            )
        return LLMResponse(text=text, model=model, token_usage=usage, raw=response)

    def generate_image(self, *, model: str, prompt: str) -> tuple[bytes, str]:
        """Return ``(image_bytes, mime_type)`` for ``prompt``.

        Raises :class:`ImageGenerationError` when nothing usable comes back.
        """

        try:
            response = self._client.models.generate_images(
                model=model,
                prompt=prompt,
                config=types.GenerateImagesConfig(number_of_images=1),
            )
        except Exception as exc:  # noqa: BLE001
            raise ImageGenerationError(f"Image request failed: {exc}") from exc

        generated = list(getattr(response, "generated_images", None) or [])
        image = getattr(generated[0], "image", None) if generated else None
        data = getattr(image, "image_bytes", None)
        if not data:
            raise ImageGenerationError("Image response did not contain image data")
        mime_type = getattr(image, "mime_type", None) or "image/png"
        return data, mime_type

    def generate_speech(self, *, model: str, text: str, voice: Optional[str] = None) -> Optional[bytes]:
        """Return raw PCM audio for ``text`` or ``None`` if the reply had none.

        Provider exceptions propagate to the caller.
        """

        speech_config = None
        if voice:
            speech_config = types.SpeechConfig(
                voice_config=types.VoiceConfig(
                    prebuilt_voice_config=types.PrebuiltVoiceConfig(voice_name=voice),
                )
            )
        response = self._client.models.generate_content(
            model=model,
            contents=text,
            config=types.GenerateContentConfig(
                response_modalities=["AUDIO"],
                speech_config=speech_config,
            ),
        )
        return extract_inline_audio(response)


def extract_inline_audio(response: Any) -> Optional[bytes]:
    """Return the first inline audio payload of ``response`` as bytes."""

    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return None
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    if not parts:
        return None
    inline = getattr(parts[0], "inline_data", None)
    data = getattr(inline, "data", None)
    if not data:
        return None
    if isinstance(data, str):
        return base64.b64decode(data)
    return bytes(data)


def create_client(
    *,
    api_key: Optional[str] = None,
    timeout_seconds: Optional[float] = None,
    debug: Optional[bool] = None,
    client: Optional[Any] = None,
) -> GeminiClient:
    """Return a new :class:`GeminiClient`; raises :class:`AuthError` without a key."""

    settings = ClientSettings(
        api_key=api_key,
        timeout_seconds=timeout_seconds,
        debug=cfg.get_settings().debug if debug is None else debug,
    )
    return GeminiClient(settings=settings, client=client)


__all__ = [
    "ClientSettings",
    "DICTIONARY_SCHEMA",
    "GeminiClient",
    "LLMResponse",
    "TokenUsage",
    "create_client",
    "extract_inline_audio",
]
