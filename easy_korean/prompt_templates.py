"""Prompt templates used for communicating with the generative model."""

from __future__ import annotations

import random
from typing import Literal, Optional, Sequence

ImageKind = Literal["word", "culture"]

DAILY_WORD_TOPICS: tuple[str, ...] = (
    "food",
    "travel",
    "emotions",
    "daily routine",
    "weather",
    "shopping",
    "school",
    "dating",
    "emergency",
)


def build_lookup_prompt(query: str, target_language: str) -> str:
    """Build the instruction asking for one dictionary entry as JSON."""

    instructions = [
        f'Input: "{query}"',
        f"Target Language: {target_language}",
        "",
        "Task: Create a Korean dictionary entry JSON.",
        "",
        "If Input is NOT Korean: Translate to common Korean word first.",
        "",
        "Rules:",
        "1. 'word' field: Korean word/phrase.",
        f"2. Explanations/Definitions/Translations: In {target_language}.",
        "3. 'romanization': Latin chars only.",
        "",
        "Return valid JSON matching schema.",
    ]
    return "\n".join(instructions)


def build_system_instruction(target_language: str) -> str:
    return f"You are a Korean tutor. Return JSON only. Explanations in {target_language}."


def build_image_prompt(subject: str, kind: ImageKind) -> str:
    """Build the illustration prompt for a headword or a cultural note."""

    if kind == "word":
        return (
            "Generate a cute, simple, flat vector style illustration representing the concept of: "
            f'"{subject}". White background, minimalist, easy to understand. '
            "Do not include any text in the image."
        )
    if kind == "culture":
        return (
            "Generate a warm, inviting, flat vector style illustration describing this Korean "
            f'cultural context: "{subject}". White background, minimalist, educational art style. '
            "Do not include any text in the image."
        )
    raise ValueError(f"Unknown image kind: {kind!r}")


def build_daily_word_query(topic: str) -> str:
    return f"A random useful beginner Korean word or short phrase related to {topic}"


def pick_daily_topic(
    rng: Optional[random.Random] = None,
    topics: Sequence[str] = DAILY_WORD_TOPICS,
) -> str:
    chooser = rng or random
    return chooser.choice(list(topics))


__all__ = [
    "DAILY_WORD_TOPICS",
    "ImageKind",
    "build_daily_word_query",
    "build_image_prompt",
    "build_lookup_prompt",
    "build_system_instruction",
    "pick_daily_topic",
]
