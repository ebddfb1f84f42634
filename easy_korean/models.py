"""Data models for dictionary entries.

Field aliases keep the camelCase names used by the response schema and by
records already persisted in the text cache.
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

DifficultyLevel = Literal["Beginner", "Intermediate", "Advanced"]
DIFFICULTY_LEVELS: tuple[str, ...] = ("Beginner", "Intermediate", "Advanced")


class _EntryModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class ExampleSentence(_EntryModel):
    """One usage example for an entry."""

    korean: str
    english: str = ""
    """Translation in the current target language; the name is historical."""

    romanization: str = ""


class Morpheme(_EntryModel):
    """A word or particle from the breakdown of a phrase."""

    part: str
    romanization: str = ""
    meaning: str = ""


class EntryImages(_EntryModel):
    """Illustrations produced by background enrichment."""

    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    cultural_image_url: Optional[str] = Field(default=None, alias="culturalImageUrl")

    def is_empty(self) -> bool:
        return self.image_url is None and self.cultural_image_url is None

    def to_dict(self) -> dict[str, str]:
        """Return only the fields that were generated, using wire names."""
        return self.model_dump(by_alias=True, exclude_none=True)


class DictionaryEntry(_EntryModel):
    """A single structured dictionary result for one word or phrase."""

    word: str = Field(min_length=1)
    romanization: str = Field(min_length=1)
    part_of_speech: str = Field(default="", alias="partOfSpeech")
    definition: str = Field(min_length=1)
    difficulty_level: DifficultyLevel = Field(alias="difficultyLevel")
    examples: List[ExampleSentence] = Field(min_length=1)
    cultural_note: Optional[str] = Field(default=None, alias="culturalNote")
    breakdown: Optional[List[Morpheme]] = None
    image_url: Optional[str] = Field(default=None, alias="imageUrl")
    cultural_image_url: Optional[str] = Field(default=None, alias="culturalImageUrl")

    def to_json(self) -> str:
        """Serialize using the camelCase wire names."""
        return self.model_dump_json(by_alias=True, exclude_none=True)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def from_json(cls, payload: str | bytes) -> "DictionaryEntry":
        return cls.model_validate_json(payload)

    def with_images(self, images: EntryImages) -> "DictionaryEntry":
        """Return a copy with the generated image fields merged in.

        Fields missing from ``images`` keep their current value.
        """
        updates = {}
        if images.image_url is not None:
            updates["image_url"] = images.image_url
        if images.cultural_image_url is not None:
            updates["cultural_image_url"] = images.cultural_image_url
        if not updates:
            return self
        return self.model_copy(update=updates)


__all__ = [
    "DIFFICULTY_LEVELS",
    "DictionaryEntry",
    "DifficultyLevel",
    "EntryImages",
    "ExampleSentence",
    "Morpheme",
]
