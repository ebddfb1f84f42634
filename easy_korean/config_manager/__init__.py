"""High-level configuration management for easy-korean."""
from __future__ import annotations

from .constants import (
    CONF_DIR,
    DEFAULT_CONFIG_PATH,
    DEFAULT_DISPLAY_LANGUAGE,
    DEFAULT_LOCAL_CONFIG_PATH,
    DEFAULT_LOOKUP_MODELS,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_STORAGE_PATH,
    DEFAULT_TARGET_LANGUAGE,
    SUPPORTED_LANGUAGES,
    VALID_SPEECH_BACKENDS,
)
from .loader import export_configuration, get_settings, load_configuration, set_settings
from .settings import (
    EasyKoreanSettings,
    EnvironmentOverrides,
    apply_settings_updates,
    load_environment_overrides,
    normalize_speech_backend,
)


def get_lookup_models() -> list[str]:
    """Return the ordered fallback chain of model identifiers."""

    models = [model.strip() for model in get_settings().lookup_models if model.strip()]
    return models or list(DEFAULT_LOOKUP_MODELS)


def get_request_timeout() -> float:
    """Return the per-call timeout in seconds."""

    timeout = get_settings().request_timeout_seconds
    if timeout and timeout > 0:
        return float(timeout)
    return DEFAULT_REQUEST_TIMEOUT_SECONDS


__all__ = [
    "CONF_DIR",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_DISPLAY_LANGUAGE",
    "DEFAULT_LOCAL_CONFIG_PATH",
    "DEFAULT_LOOKUP_MODELS",
    "DEFAULT_REQUEST_TIMEOUT_SECONDS",
    "DEFAULT_STORAGE_PATH",
    "DEFAULT_TARGET_LANGUAGE",
    "EasyKoreanSettings",
    "EnvironmentOverrides",
    "SUPPORTED_LANGUAGES",
    "VALID_SPEECH_BACKENDS",
    "apply_settings_updates",
    "export_configuration",
    "get_lookup_models",
    "get_request_timeout",
    "get_settings",
    "load_configuration",
    "load_environment_overrides",
    "normalize_speech_backend",
    "set_settings",
]
