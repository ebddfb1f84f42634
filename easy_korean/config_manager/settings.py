"""Pydantic models and helper utilities for configuration values."""
from __future__ import annotations

import sys
from typing import Any, Dict, Optional

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    SecretStr,
    ValidationError,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from easy_korean import logging_manager

from .constants import (
    DEFAULT_DISPLAY_LANGUAGE,
    DEFAULT_IMAGE_MODEL,
    DEFAULT_LOOKUP_MODELS,
    DEFAULT_NATIVE_RATE,
    DEFAULT_NATIVE_VOICE,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_STORAGE_MAX_BYTES,
    DEFAULT_STORAGE_PATH,
    DEFAULT_TARGET_LANGUAGE,
    DEFAULT_TTS_MODEL,
    DEFAULT_TTS_VOICE,
    VALID_SPEECH_BACKENDS,
)

logger = logging_manager.get_logger().getChild("config")


def _default_speech_backend() -> str:
    return "native" if sys.platform == "darwin" else "gtts"


class EasyKoreanSettings(BaseModel):
    """Typed representation of the application configuration."""

    model_config = ConfigDict(extra="ignore")

    gemini_api_key: Optional[SecretStr] = None
    lookup_models: list[str] = Field(default_factory=lambda: list(DEFAULT_LOOKUP_MODELS))
    default_target_language: str = DEFAULT_TARGET_LANGUAGE
    default_display_language: str = DEFAULT_DISPLAY_LANGUAGE
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    storage_path: str = str(DEFAULT_STORAGE_PATH)
    storage_max_bytes: Optional[int] = DEFAULT_STORAGE_MAX_BYTES
    image_generation_enabled: bool = False
    image_model: str = DEFAULT_IMAGE_MODEL
    speech_backend: str = Field(default_factory=_default_speech_backend)
    tts_model: str = DEFAULT_TTS_MODEL
    tts_voice: str = DEFAULT_TTS_VOICE
    native_voice: str = DEFAULT_NATIVE_VOICE
    native_rate: float = DEFAULT_NATIVE_RATE
    native_executable_path: Optional[str] = None
    debug: bool = False

    def api_key_value(self) -> Optional[str]:
        """Return the plain API key, or ``None`` when unset or blank."""

        if self.gemini_api_key is None:
            return None
        value = self.gemini_api_key.get_secret_value().strip()
        return value or None


class EnvironmentOverrides(BaseSettings):
    """Configuration overrides sourced from environment variables."""

    model_config = SettingsConfigDict(env_prefix="", extra="ignore")

    gemini_api_key: Optional[SecretStr] = Field(
        default=None,
        validation_alias=AliasChoices(
            "EASY_KOREAN_API_KEY",
            "GEMINI_API_KEY",
            "GOOGLE_API_KEY",
            "VITE_API_KEY",
            "API_KEY",
        ),
    )
    lookup_models: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("EASY_KOREAN_LOOKUP_MODELS")
    )
    default_target_language: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("EASY_KOREAN_TARGET_LANGUAGE")
    )
    request_timeout_seconds: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices(
            "EASY_KOREAN_REQUEST_TIMEOUT", "EASY_KOREAN_REQUEST_TIMEOUT_SECONDS"
        ),
    )
    storage_path: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("EASY_KOREAN_STORAGE_PATH")
    )
    image_generation_enabled: Optional[bool] = Field(
        default=None, validation_alias=AliasChoices("EASY_KOREAN_IMAGES")
    )
    speech_backend: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("EASY_KOREAN_SPEECH_BACKEND", "EASY_KOREAN_TTS_BACKEND"),
    )
    debug: Optional[bool] = Field(
        default=None, validation_alias=AliasChoices("EASY_KOREAN_DEBUG")
    )


def _split_model_list(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


def load_environment_overrides() -> Dict[str, Any]:
    """Return configuration overrides sourced from environment variables."""

    try:
        overrides = EnvironmentOverrides()
    except ValidationError as exc:
        logger.warning(
            "Invalid environment configuration detected; using defaults.",
            extra={"event": "config.env.validation_error", "error": str(exc)},
        )
        return {}
    payload = overrides.model_dump(exclude_none=True)
    if "lookup_models" in payload:
        models = _split_model_list(payload["lookup_models"])
        if models:
            payload["lookup_models"] = models
        else:
            payload.pop("lookup_models")
    return payload


def apply_settings_updates(
    settings: EasyKoreanSettings, updates: Dict[str, Any]
) -> EasyKoreanSettings:
    """Return a copy of ``settings`` updated with ``updates`` if any values exist."""

    if not updates:
        return settings
    return settings.model_copy(update=updates)


def normalize_speech_backend(candidate: Any) -> str:
    """Return a known speech backend identifier, defaulting per platform."""

    if isinstance(candidate, str):
        normalized = candidate.strip().lower()
        if normalized in VALID_SPEECH_BACKENDS:
            return normalized
    return _default_speech_backend()


__all__ = [
    "EasyKoreanSettings",
    "EnvironmentOverrides",
    "apply_settings_updates",
    "load_environment_overrides",
    "normalize_speech_backend",
]
