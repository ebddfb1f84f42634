"""Configuration loading utilities."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from easy_korean import logging_manager

from .constants import DEFAULT_CONFIG_PATH, DEFAULT_LOCAL_CONFIG_PATH, SENSITIVE_CONFIG_KEYS
from .settings import (
    EasyKoreanSettings,
    apply_settings_updates,
    load_environment_overrides,
)

logger = logging_manager.get_logger().getChild("config")
console_info = logging_manager.console_info
console_warning = logging_manager.console_warning


_ACTIVE_SETTINGS: Optional[EasyKoreanSettings] = None


def _read_config_json(path: Optional[Path], verbose: bool = False, label: str = "configuration") -> Dict[str, Any]:
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = json.load(handle)
    except FileNotFoundError:
        if verbose:
            console_info("No %s found at %s.", label, path, logger_obj=logger)
        return {}
    except (OSError, json.JSONDecodeError) as exc:
        console_warning(
            "Error loading %s from %s: %s. Proceeding without it.",
            label,
            path,
            exc,
            logger_obj=logger,
        )
        return {}
    if not isinstance(data, dict):
        console_warning("Ignoring %s at %s: expected a JSON object.", label, path, logger_obj=logger)
        return {}
    if verbose:
        console_info("Loaded %s from %s", label, path, logger_obj=logger)
    return data


def _deep_merge_dict(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    result = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _deep_merge_dict(result[key], value)
        else:
            result[key] = value
    return result


def _resolve_override_path(config_file: Optional[str]) -> Path:
    if not config_file:
        return DEFAULT_LOCAL_CONFIG_PATH
    override_path = Path(config_file).expanduser()
    if not override_path.is_absolute():
        override_path = (Path.cwd() / override_path).resolve()
    return override_path


def load_configuration(config_file: Optional[str] = None, verbose: bool = False) -> EasyKoreanSettings:
    """Load defaults, the JSON config files and environment overrides, in that order."""

    global _ACTIVE_SETTINGS

    payload = _read_config_json(DEFAULT_CONFIG_PATH, verbose=verbose, label="default configuration")
    override_config = _read_config_json(
        _resolve_override_path(config_file), verbose=verbose, label="local configuration"
    )
    payload = _deep_merge_dict(payload, override_config)

    try:
        settings = EasyKoreanSettings.model_validate(payload)
    except ValidationError as exc:
        raise RuntimeError("Invalid configuration detected") from exc

    settings = apply_settings_updates(settings, load_environment_overrides())
    _ACTIVE_SETTINGS = settings
    return settings


def export_configuration(settings: EasyKoreanSettings) -> Dict[str, Any]:
    """Return a dictionary view of ``settings`` without secret values."""

    return settings.model_dump(mode="python", exclude=set(SENSITIVE_CONFIG_KEYS))


def get_settings() -> EasyKoreanSettings:
    """Return the currently loaded :class:`EasyKoreanSettings` instance."""

    global _ACTIVE_SETTINGS
    if _ACTIVE_SETTINGS is None:
        settings = EasyKoreanSettings()
        settings = apply_settings_updates(settings, load_environment_overrides())
        _ACTIVE_SETTINGS = settings
    return _ACTIVE_SETTINGS


def set_settings(settings: Optional[EasyKoreanSettings]) -> None:
    """Replace the active settings; ``None`` forces a reload on next access."""

    global _ACTIVE_SETTINGS
    _ACTIVE_SETTINGS = settings


__all__ = [
    "export_configuration",
    "get_settings",
    "load_configuration",
    "set_settings",
]
