"""Sub-command implementations for the easy-korean CLI."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Callable, Dict, Optional, TextIO

from .. import config_manager as cfg
from .. import logging_manager as log_mgr
from ..audio import SpeechService, create_backend
from ..errors import LookupFailure, SpeechError
from ..lookup_cache import LanguagePreference, TextCache
from ..models import DictionaryEntry
from ..services import DictionaryService, EntryView, ImageGenerator, enrich_entry
from ..storage import JsonFileStore, KeyValueStore, StorageError

logger = log_mgr.get_logger().getChild("cli")


def prepare_settings(args: argparse.Namespace) -> cfg.EasyKoreanSettings:
    """Load configuration and apply the command-line overrides."""

    settings = cfg.load_configuration(getattr(args, "config", None))
    updates: Dict[str, object] = {}
    if getattr(args, "storage_path", None):
        updates["storage_path"] = args.storage_path
    if getattr(args, "debug", False):
        updates["debug"] = True
    if getattr(args, "images", False):
        updates["image_generation_enabled"] = True
    settings = cfg.apply_settings_updates(settings, updates)
    cfg.set_settings(settings)
    log_mgr.configure_logging_level(debug_enabled=settings.debug)
    return settings


def open_storage(settings: cfg.EasyKoreanSettings) -> KeyValueStore:
    return JsonFileStore(settings.storage_path, max_bytes=settings.storage_max_bytes)


def _resolve_language(
    args: argparse.Namespace, storage: KeyValueStore, settings: cfg.EasyKoreanSettings
) -> str:
    explicit = (getattr(args, "language", None) or "").strip()
    if explicit:
        return explicit
    return LanguagePreference(storage, default=settings.default_display_language).load()


def _emit(entry: DictionaryEntry, out: TextIO) -> None:
    out.write(json.dumps(entry.to_dict(), ensure_ascii=False, indent=2) + "\n")


def _present(entry: DictionaryEntry, settings: cfg.EasyKoreanSettings) -> DictionaryEntry:
    if not settings.image_generation_enabled:
        return entry
    generator = ImageGenerator()
    view = EntryView(lambda current: enrich_entry(current, generator))
    try:
        view.present(entry).result()
        return view.current or entry
    finally:
        view.close()


def _run_lookup(
    args: argparse.Namespace,
    fetch: Callable[[DictionaryService, str], DictionaryEntry],
    out: TextIO,
) -> int:
    settings = prepare_settings(args)
    storage = open_storage(settings)
    language = _resolve_language(args, storage, settings)
    service = DictionaryService(TextCache(storage))
    try:
        entry = fetch(service, language)
    except LookupFailure as exc:
        log_mgr.console_error("%s", exc.user_message, logger_obj=logger)
        return 1
    except ValueError as exc:
        log_mgr.console_error("%s", exc, logger_obj=logger)
        return 2
    _emit(_present(entry, settings), out)
    return 0


def command_lookup(args: argparse.Namespace, out: TextIO) -> int:
    return _run_lookup(args, lambda service, language: service.lookup(args.query, language), out)


def command_daily(args: argparse.Namespace, out: TextIO) -> int:
    return _run_lookup(args, lambda service, language: service.daily_word(language), out)


def command_language(args: argparse.Namespace, out: TextIO) -> int:
    settings = prepare_settings(args)
    if args.list_languages:
        for language in cfg.SUPPORTED_LANGUAGES:
            out.write(language + "\n")
        return 0

    preference = LanguagePreference(open_storage(settings), default=settings.default_display_language)
    if args.new_language is None:
        out.write(preference.load() + "\n")
        return 0
    try:
        saved = preference.save(args.new_language)
    except (ValueError, StorageError) as exc:
        log_mgr.console_error("Unable to save language preference: %s", exc, logger_obj=logger)
        return 1
    out.write(saved + "\n")
    return 0


def command_speak(args: argparse.Namespace, out: TextIO) -> int:
    settings = prepare_settings(args)
    backend = args.backend or settings.speech_backend
    destination = Path(args.output).expanduser()
    audio_format = destination.suffix.lstrip(".").lower() or "mp3"
    try:
        service = SpeechService(
            create_backend(backend, executable_path=settings.native_executable_path)
        )
        service.export(args.text, str(destination), audio_format=audio_format)
    except SpeechError as exc:
        log_mgr.console_error("Speech synthesis failed: %s", exc, logger_obj=logger)
        return 1
    out.write(str(destination) + "\n")
    return 0


COMMANDS: Dict[str, Callable[[argparse.Namespace, TextIO], int]] = {
    "lookup": command_lookup,
    "daily": command_daily,
    "language": command_language,
    "speak": command_speak,
}


def execute_command(args: argparse.Namespace, out: Optional[TextIO] = None) -> int:
    handler = COMMANDS[args.command]
    return handler(args, out or sys.stdout)


__all__ = [
    "COMMANDS",
    "command_daily",
    "command_language",
    "command_lookup",
    "command_speak",
    "execute_command",
    "open_storage",
    "prepare_settings",
]
