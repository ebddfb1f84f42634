"""Shared constants for the configuration manager package."""
from __future__ import annotations

from pathlib import Path

MODULE_DIR = Path(__file__).resolve().parent
SCRIPT_DIR = MODULE_DIR.parent.parent.resolve()
CONF_DIR = SCRIPT_DIR / "conf"
DEFAULT_CONFIG_PATH = CONF_DIR / "config.json"
DEFAULT_LOCAL_CONFIG_PATH = CONF_DIR / "config.local.json"

DEFAULT_STORAGE_PATH = Path("~/.easy_korean/storage.json")
# Browsers cap localStorage at roughly 5 MiB per origin.
DEFAULT_STORAGE_MAX_BYTES = 5 * 1024 * 1024

# Efficient models first, then older/stable ones.
DEFAULT_LOOKUP_MODELS: tuple[str, ...] = (
    "gemini-1.5-flash",
    "gemini-1.5-flash-001",
    "gemini-1.5-pro",
    "gemini-1.0-pro",
)
DEFAULT_TARGET_LANGUAGE = "English"
DEFAULT_DISPLAY_LANGUAGE = "한국어 (Korean)"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0

DEFAULT_IMAGE_MODEL = "imagen-3.0-generate-002"
DEFAULT_TTS_MODEL = "gemini-2.5-flash-preview-tts"
DEFAULT_TTS_VOICE = "Kore"
DEFAULT_NATIVE_VOICE = "Yuna"
DEFAULT_NATIVE_RATE = 0.9

VALID_SPEECH_BACKENDS = {"native", "gemini", "gtts"}
SENSITIVE_CONFIG_KEYS = {"gemini_api_key"}

SUPPORTED_LANGUAGES: tuple[str, ...] = (
    "English",
    "한국어 (Korean)",
    "Español (Spanish)",
    "Français (French)",
    "Deutsch (German)",
    "Italiano (Italian)",
    "Português (Portuguese)",
    "Русский (Russian)",
    "中文 (Chinese)",
    "日本語 (Japanese)",
    "Tiếng Việt (Vietnamese)",
    "ไทย (Thai)",
    "Bahasa Indonesia",
    "العربية (Arabic)",
    "हिन्दी (Hindi)",
    "Türkçe (Turkish)",
    "Polski (Polish)",
    "Nederlands (Dutch)",
    "Svenska (Swedish)",
)

__all__ = [
    "CONF_DIR",
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_DISPLAY_LANGUAGE",
    "DEFAULT_IMAGE_MODEL",
    "DEFAULT_LOCAL_CONFIG_PATH",
    "DEFAULT_LOOKUP_MODELS",
    "DEFAULT_NATIVE_RATE",
    "DEFAULT_NATIVE_VOICE",
    "DEFAULT_REQUEST_TIMEOUT_SECONDS",
    "DEFAULT_STORAGE_MAX_BYTES",
    "DEFAULT_STORAGE_PATH",
    "DEFAULT_TARGET_LANGUAGE",
    "DEFAULT_TTS_MODEL",
    "DEFAULT_TTS_VOICE",
    "MODULE_DIR",
    "SCRIPT_DIR",
    "SENSITIVE_CONFIG_KEYS",
    "SUPPORTED_LANGUAGES",
    "VALID_SPEECH_BACKENDS",
]
