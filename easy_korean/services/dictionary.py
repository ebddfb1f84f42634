"""Dictionary lookups with a persistent cache and a multi-model fallback chain."""

from __future__ import annotations

import random
import time
from typing import Callable, Optional, Protocol, Sequence

from pydantic import ValidationError

from easy_korean import config_manager as cfg
from easy_korean import logging_manager as log_mgr
from easy_korean import prompt_templates
from easy_korean.errors import (
    AuthError,
    ErrorCategory,
    LookupFailure,
    UnknownLookupError,
    failure_for,
)
from easy_korean.llm_client import LLMResponse, create_client
from easy_korean.lookup_cache import TextCache
from easy_korean.models import DictionaryEntry
from easy_korean.storage import JsonFileStore

logger = log_mgr.get_logger().getChild("services.dictionary")


class EntryGenerator(Protocol):
    def generate_entry(self, *, model: str, prompt: str, system_instruction: str) -> LLMResponse:
        ...


ClientFactory = Callable[[], EntryGenerator]


def parse_entry(response: LLMResponse) -> DictionaryEntry:
    """Validate the body of a successful response against the entry schema."""

    try:
        return DictionaryEntry.from_json(response.text)
    except (ValidationError, ValueError) as exc:
        raise failure_for(ErrorCategory.MALFORMED, str(exc), model=response.model) from exc


class DictionaryService:
    """Resolve queries into :class:`DictionaryEntry` values.

    The cache is consulted first. On a miss each configured model is tried in
    order, one at a time, until one returns a valid entry. A credential
    failure stops the chain at once; any other failure moves on to the next
    model, and the last one is raised when the chain is exhausted.
    """

    def __init__(
        self,
        cache: TextCache,
        *,
        client_factory: ClientFactory = create_client,
        models: Optional[Sequence[str]] = None,
        default_language: Optional[str] = None,
    ) -> None:
        self._cache = cache
        self._client_factory = client_factory
        self._models = tuple(models) if models is not None else None
        self._default_language = default_language

    @property
    def cache(self) -> TextCache:
        return self._cache

    @property
    def models(self) -> tuple[str, ...]:
        if self._models is not None:
            return self._models
        return tuple(cfg.get_lookup_models())

    @property
    def default_language(self) -> str:
        return self._default_language or cfg.get_settings().default_target_language

    def lookup(self, query: str, target_language: Optional[str] = None) -> DictionaryEntry:
        """Return the entry for ``query`` explained in ``target_language``.

        Raises:
            ValueError: ``query`` is blank.
            LookupFailure: every model failed; the subclass names the category
                of the last failure.
        """

        if not (query or "").strip():
            raise ValueError("Query cannot be empty.")
        language = (target_language or "").strip() or self.default_language

        with log_mgr.log_context(query=query.strip(), language=language):
            cached = self._cache.read(query, language)
            if cached.hit and cached.entry is not None:
                logger.debug("Cache hit for %s", cached.key, extra={"event": "lookup.cache_hit"})
                return cached.entry

            try:
                return self._lookup_remote(query, language)
            except LookupFailure as exc:
                logger.error(
                    "Dictionary lookup failed: %s",
                    exc.detail or exc.user_message,
                    extra={"event": "lookup.failed", "status": exc.category.value},
                )
                raise

    def _lookup_remote(self, query: str, language: str) -> DictionaryEntry:
        client = self._client_factory()
        prompt = prompt_templates.build_lookup_prompt(query, language)
        system_instruction = prompt_templates.build_system_instruction(language)
        last_error: Optional[LookupFailure] = None

        for model in self.models:
            logger.info("Attempting search with model: %s", model, extra={"event": "lookup.attempt", "model": model})
            started = time.perf_counter()
            response = client.generate_entry(
                model=model,
                prompt=prompt,
                system_instruction=system_instruction,
            )
            try:
                if not response.ok:
                    raise failure_for(
                        response.category or ErrorCategory.UNKNOWN,
                        response.error or "",
                        model=model,
                    )
                entry = parse_entry(response)
            except AuthError:
                raise
            except LookupFailure as exc:
                logger.warning(
                    "Model %s failed: %s",
                    model,
                    exc.detail,
                    extra={"event": "lookup.model_failed", "model": model, "status": exc.category.value},
                )
                last_error = exc
                continue

            self._cache.put(query, language, entry)
            logger.info(
                "Lookup succeeded",
                extra={
                    "event": "lookup.success",
                    "model": model,
                    "duration_ms": log_mgr.elapsed_ms(started),
                },
            )
            return entry

        if last_error is not None:
            raise last_error
        raise UnknownLookupError("All models failed.")

    def daily_word(
        self,
        target_language: Optional[str] = None,
        *,
        rng: Optional[random.Random] = None,
    ) -> DictionaryEntry:
        """Look up a beginner word for a randomly chosen everyday topic."""

        topic = prompt_templates.pick_daily_topic(rng)
        return self.lookup(prompt_templates.build_daily_word_query(topic), target_language)


def create_dictionary_service(
    *,
    storage_path: Optional[str] = None,
    client_factory: ClientFactory = create_client,
) -> DictionaryService:
    """Return a service backed by the configured JSON storage file."""

    settings = cfg.get_settings()
    store = JsonFileStore(storage_path or settings.storage_path, max_bytes=settings.storage_max_bytes)
    return DictionaryService(TextCache(store), client_factory=client_factory)


__all__ = [
    "ClientFactory",
    "DictionaryService",
    "EntryGenerator",
    "create_dictionary_service",
    "parse_entry",
]
