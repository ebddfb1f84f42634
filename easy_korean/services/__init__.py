"""Lookup and enrichment services."""

from .dictionary import DictionaryService, create_dictionary_service, parse_entry
from .enrichment import EntryView, ImageGenerator, enrich_entry

__all__ = [
    "DictionaryService",
    "EntryView",
    "ImageGenerator",
    "create_dictionary_service",
    "enrich_entry",
    "parse_entry",
]
