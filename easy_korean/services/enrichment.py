"""Background illustration of dictionary entries."""

from __future__ import annotations

import base64
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Callable, Optional, Protocol

from easy_korean import config_manager as cfg
from easy_korean import logging_manager as log_mgr
from easy_korean import prompt_templates
from easy_korean.llm_client import create_client
from easy_korean.lookup_cache import SessionCache, get_session_caches
from easy_korean.models import DictionaryEntry, EntryImages

logger = log_mgr.get_logger().getChild("services.enrichment")


class ImageBackend(Protocol):
    def generate_image(self, *, model: str, prompt: str) -> tuple[bytes, str]:
        ...


def to_data_url(data: bytes, mime_type: str) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


class ImageGenerator:
    """Produce illustration URLs, cached per exact prompt for the session."""

    def __init__(
        self,
        client_factory: Callable[[], ImageBackend] = create_client,
        *,
        cache: Optional[SessionCache[str]] = None,
        model: Optional[str] = None,
        enabled: Optional[bool] = None,
    ) -> None:
        settings = cfg.get_settings()
        self._client_factory = client_factory
        self._cache = cache if cache is not None else get_session_caches().images
        self._model = model or settings.image_model
        self._enabled = settings.image_generation_enabled if enabled is None else enabled
        self._client: Optional[ImageBackend] = None
        self._client_lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self._enabled

    def _get_client(self) -> ImageBackend:
        with self._client_lock:
            if self._client is None:
                self._client = self._client_factory()
            return self._client

    def generate(self, subject: str, kind: prompt_templates.ImageKind) -> Optional[str]:
        """Return a ``data:`` URL for the illustration, or ``None``.

        Propagates whatever the image backend raises.
        """

        prompt = prompt_templates.build_image_prompt(subject, kind)
        cached = self._cache.get(prompt)
        if cached is not None:
            return cached
        if not self._enabled:
            return None

        data, mime_type = self._get_client().generate_image(model=self._model, prompt=prompt)
        url = to_data_url(data, mime_type)
        self._cache.set(prompt, url)
        return url


def _safe_generate(generator: ImageGenerator, subject: str, kind: prompt_templates.ImageKind) -> Optional[str]:
    try:
        return generator.generate(subject, kind)
    except Exception as exc:  # noqa: BLE001 - each illustration fails on its own
        logger.warning("%s image generation failed: %s", kind, exc, extra={"event": "enrichment.image_failed"})
        return None


def enrich_entry(
    entry: DictionaryEntry,
    generator: ImageGenerator,
    *,
    executor: Optional[Executor] = None,
) -> EntryImages:
    """Generate the word and cultural illustrations for ``entry`` concurrently.

    Each illustration succeeds or fails on its own; only successful ones are
    present in the result.
    """

    owns_executor = executor is None
    pool = executor or ThreadPoolExecutor(max_workers=2, thread_name_prefix="enrichment")
    try:
        word_future = pool.submit(_safe_generate, generator, entry.word, "word")
        culture_future: Optional[Future[Optional[str]]] = None
        if entry.cultural_note:
            culture_future = pool.submit(_safe_generate, generator, entry.cultural_note, "culture")
        image_url = word_future.result()
        cultural_image_url = culture_future.result() if culture_future is not None else None
    finally:
        if owns_executor:
            pool.shutdown(wait=False)
    return EntryImages(image_url=image_url, cultural_image_url=cultural_image_url)


Enricher = Callable[[DictionaryEntry], EntryImages]


class EntryView:
    """The entry currently on display and the merge point for enrichment.

    Enrichment results are applied only while the displayed entry still has
    the headword they were requested for; anything else is discarded.
    """

    def __init__(self, enricher: Enricher, *, executor: Optional[Executor] = None) -> None:
        self._enricher = enricher
        self._executor = executor or ThreadPoolExecutor(max_workers=2, thread_name_prefix="entry-view")
        self._lock = threading.Lock()
        self._current: Optional[DictionaryEntry] = None

    @property
    def current(self) -> Optional[DictionaryEntry]:
        with self._lock:
            return self._current

    def show(self, entry: Optional[DictionaryEntry]) -> None:
        with self._lock:
            self._current = entry

    def clear(self) -> None:
        self.show(None)

    def apply_images(self, requested_for: DictionaryEntry, images: EntryImages) -> bool:
        """Merge ``images`` into the current entry if it is still ``requested_for``."""

        with self._lock:
            current = self._current
            if current is None or current.word != requested_for.word:
                logger.debug(
                    "Discarding stale enrichment for %s",
                    requested_for.word,
                    extra={"event": "enrichment.stale"},
                )
                return False
            if images.is_empty():
                return False
            self._current = current.with_images(images)
            return True

    def _enrich_and_apply(self, entry: DictionaryEntry) -> bool:
        try:
            images = self._enricher(entry)
        except Exception as exc:  # noqa: BLE001 - enrichment never reaches the caller
            logger.warning("Background image fetch failed: %s", exc, extra={"event": "enrichment.failed"})
            return False
        return self.apply_images(entry, images)

    def start_enrichment(self, entry: DictionaryEntry) -> "Future[bool]":
        """Schedule enrichment for ``entry``; the future reports whether it was applied."""

        return self._executor.submit(self._enrich_and_apply, entry)

    def present(self, entry: DictionaryEntry) -> "Future[bool]":
        """Display ``entry`` immediately and enrich it in the background."""

        self.show(entry)
        return self.start_enrichment(entry)

    def close(self) -> None:
        self._executor.shutdown(wait=False)


__all__ = [
    "EntryView",
    "Enricher",
    "ImageBackend",
    "ImageGenerator",
    "enrich_entry",
    "to_data_url",
]
