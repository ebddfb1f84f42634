"""Registry and helpers for speech providers."""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping, Optional, Type

from easy_korean import config_manager as cfg

from .base import BaseSpeechProvider, SpeechError
from .gemini import GeminiSpeechProvider
from .gtts import GTTSSpeechProvider
from .native import NativeSpeechProvider


_BACKENDS: MutableMapping[str, Type[BaseSpeechProvider]] = {
    NativeSpeechProvider.name: NativeSpeechProvider,
    GeminiSpeechProvider.name: GeminiSpeechProvider,
    GTTSSpeechProvider.name: GTTSSpeechProvider,
}

_BACKEND_ALIASES = {
    "macos": NativeSpeechProvider.name,
    "macos_say": NativeSpeechProvider.name,
    "say": NativeSpeechProvider.name,
    "google": GTTSSpeechProvider.name,
}


def register_backend(name: str, backend_cls: Type[BaseSpeechProvider]) -> None:
    """Register ``backend_cls`` under ``name``."""

    _BACKENDS[name.lower()] = backend_cls


def resolve_backend_name(value: Optional[str]) -> str:
    if value is None or not value.strip() or value.strip().lower() == "auto":
        return cfg.normalize_speech_backend(None)
    normalized = value.strip().lower()
    return _BACKEND_ALIASES.get(normalized, normalized)


def create_backend(
    name: str,
    *,
    executable_path: Optional[str] = None,
    **options: Any,
) -> BaseSpeechProvider:
    """Instantiate the provider registered as ``name``."""

    backend_cls = _BACKENDS.get(resolve_backend_name(name))
    if backend_cls is None:
        raise KeyError(f"Unknown speech backend: {name}")
    return backend_cls(executable_path=executable_path, **options)


def get_speech_provider(config: Optional[Mapping[str, Any]] = None) -> BaseSpeechProvider:
    """Return the provider selected by ``config`` or the active settings."""

    settings = cfg.get_settings()
    backend_name: Optional[str] = None
    executable_override: Optional[str] = None
    if config is not None:
        backend_name = config.get("speech_backend")
        executable_override = config.get("native_executable_path")
    backend_name = backend_name or settings.speech_backend
    executable_override = executable_override or settings.native_executable_path
    return create_backend(backend_name, executable_path=executable_override)


__all__ = [
    "BaseSpeechProvider",
    "GTTSSpeechProvider",
    "GeminiSpeechProvider",
    "NativeSpeechProvider",
    "SpeechError",
    "create_backend",
    "get_speech_provider",
    "register_backend",
    "resolve_backend_name",
]
