"""Structured logging for easy-korean.

Every record is rendered as one JSON object. Lookup fields (query, target
language, model, failure category, timing) are lifted to the top level; any
other ``extra`` values are nested under ``extra``.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import os
import time
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, Iterator, Optional

LOG_DIR_ENV = "EASY_KOREAN_LOG_DIR"
DEFAULT_LOG_DIR = Path.home() / ".easy_korean" / "log"
LOG_FILENAME = "app.log"
DEFAULT_LOG_LEVEL = logging.INFO
LOGGER_NAME = "easy_korean"

LOOKUP_FIELDS: tuple[str, ...] = ("event", "query", "language", "model", "status", "duration_ms")

# Attributes every LogRecord carries; anything else came from ``extra``.
_RECORD_ATTRIBUTES = frozenset(
    vars(logging.LogRecord(LOGGER_NAME, logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}

_logger: Optional[logging.Logger] = None
_lookup_context: contextvars.ContextVar[Dict[str, object]] = contextvars.ContextVar(
    "easy_korean_lookup_context", default={}
)


class JSONLogFormatter(logging.Formatter):
    """Render records as JSON with lookup fields at the top level."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: Dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        extra: Dict[str, object] = {}
        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRIBUTES or value is None:
                continue
            if key in LOOKUP_FIELDS:
                payload[key] = value
            else:
                extra[key] = value
        if extra:
            payload["extra"] = extra
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


class LookupContextFilter(logging.Filter):
    """Copy the active lookup context onto each record without overriding ``extra``."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        for key, value in _lookup_context.get().items():
            if getattr(record, key, None) is None:
                setattr(record, key, value)
        return True


def resolve_log_dir() -> Path:
    override = os.environ.get(LOG_DIR_ENV, "").strip()
    return Path(override).expanduser() if override else DEFAULT_LOG_DIR


def _attach_handlers(logger: logging.Logger) -> None:
    formatter = JSONLogFormatter()
    context_filter = LookupContextFilter()
    handlers: list[logging.Handler] = [logging.StreamHandler()]

    log_dir = resolve_log_dir()
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                log_dir / LOG_FILENAME,
                maxBytes=2 * 1024 * 1024,
                backupCount=3,
                encoding="utf-8",
            )
        )
    except OSError as exc:
        logger.warning("File logging disabled; cannot write to %s: %s", log_dir, exc)

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        logger.addHandler(handler)


def get_logger() -> logging.Logger:
    """Return the package logger, attaching handlers on first use."""
    global _logger
    if _logger is None:
        logger = logging.getLogger(LOGGER_NAME)
        logger.propagate = False
        _attach_handlers(logger)
        _logger = logger
        configure_logging_level()
    return _logger


def configure_logging_level(debug_enabled: bool = False, log_level: Optional[int] = None) -> int:
    """Set the package logger and its handlers to ``log_level`` or the debug/info default."""
    if log_level is None:
        log_level = logging.DEBUG if debug_enabled else DEFAULT_LOG_LEVEL
    logger = get_logger()
    logger.setLevel(log_level)
    for handler in logger.handlers:
        handler.setLevel(log_level)
    return log_level


def console_info(message: str, *args: object, logger_obj: Optional[logging.Logger] = None) -> None:
    (logger_obj or get_logger()).info(message, *args)


def console_warning(message: str, *args: object, logger_obj: Optional[logging.Logger] = None) -> None:
    (logger_obj or get_logger()).warning(message, *args)


def console_error(message: str, *args: object, logger_obj: Optional[logging.Logger] = None) -> None:
    (logger_obj or get_logger()).error(message, *args, extra={"event": "cli.error"})


@contextlib.contextmanager
def log_context(
    *,
    query: Optional[str] = None,
    language: Optional[str] = None,
    model: Optional[str] = None,
) -> Iterator[None]:
    """Tag every record logged inside the block with the given lookup fields.

    Nested blocks add to the outer context; ``None`` values leave the outer
    value in place.
    """

    current = dict(_lookup_context.get())
    current.update(
        {key: value for key, value in (("query", query), ("language", language), ("model", model)) if value is not None}
    )
    token = _lookup_context.set(current)
    try:
        yield
    finally:
        _lookup_context.reset(token)


def elapsed_ms(started: float) -> float:
    """Milliseconds since ``started``, a :func:`time.perf_counter` reading."""

    return round((time.perf_counter() - started) * 1000, 1)


logger = get_logger()
