"""Error taxonomy for dictionary lookups.

The categories in :class:`ErrorCategory` are the stable contract surfaced to
callers. Mapping provider error text onto them is done by
:class:`ErrorClassifier`, whose patterns can be swapped without touching the
lookup pipeline.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Pattern, Sequence

_DETAIL_PREVIEW_CHARS = 100


class ErrorCategory(str, Enum):
    AUTH = "auth_error"
    QUOTA = "quota_exceeded"
    MODEL_UNAVAILABLE = "model_unavailable"
    MALFORMED = "malformed_response"
    UNKNOWN = "unknown_error"


class LookupFailure(RuntimeError):
    """Base class for failures surfaced by the lookup pipeline."""

    category: ErrorCategory = ErrorCategory.UNKNOWN

    def __init__(self, detail: str = "", *, model: Optional[str] = None) -> None:
        self.detail = (detail or "").strip()
        self.model = model
        super().__init__(self.user_message)

    @property
    def user_message(self) -> str:
        """Localized message shown in place of a result."""
        preview = self.detail[:_DETAIL_PREVIEW_CHARS] or "All models failed."
        return f"오류가 발생했습니다: {preview}..."


class AuthError(LookupFailure):
    """Credential missing or rejected; retrying other models cannot help."""

    category = ErrorCategory.AUTH

    @property
    def user_message(self) -> str:
        return (
            "API Key가 잘못되었습니다. (Invalid API Key) "
            "Set GEMINI_API_KEY in your environment or .env.local file."
        )


class QuotaExceeded(LookupFailure):
    category = ErrorCategory.QUOTA

    @property
    def user_message(self) -> str:
        return "하루 무료 사용량을 초과했습니다. (Quota Exceeded)"


class ModelUnavailable(LookupFailure):
    category = ErrorCategory.MODEL_UNAVAILABLE

    @property
    def user_message(self) -> str:
        return "모델을 찾을 수 없습니다. (Model Not Found)"


class MalformedResponse(LookupFailure):
    category = ErrorCategory.MALFORMED

    @property
    def user_message(self) -> str:
        return "응답을 해석할 수 없습니다. (Malformed Response)"


class UnknownLookupError(LookupFailure):
    category = ErrorCategory.UNKNOWN


_FAILURE_TYPES: dict[ErrorCategory, type[LookupFailure]] = {
    ErrorCategory.AUTH: AuthError,
    ErrorCategory.QUOTA: QuotaExceeded,
    ErrorCategory.MODEL_UNAVAILABLE: ModelUnavailable,
    ErrorCategory.MALFORMED: MalformedResponse,
    ErrorCategory.UNKNOWN: UnknownLookupError,
}


def failure_for(category: ErrorCategory, detail: str = "", *, model: Optional[str] = None) -> LookupFailure:
    """Return the exception instance matching ``category``."""

    return _FAILURE_TYPES[category](detail, model=model)


def _compile(patterns: Sequence[str]) -> tuple[Pattern[str], ...]:
    return tuple(re.compile(pattern, re.IGNORECASE) for pattern in patterns)


@dataclass(frozen=True)
class ErrorClassifier:
    """Map provider status codes and error text onto :class:`ErrorCategory`.

    Status codes win over text; text patterns are checked in the order auth,
    quota, model-unavailable.
    """

    auth_patterns: tuple[Pattern[str], ...] = field(
        default_factory=lambda: _compile((r"API\s?Key", r"UNAUTHENTICATED", r"PERMISSION_DENIED"))
    )
    quota_patterns: tuple[Pattern[str], ...] = field(
        default_factory=lambda: _compile((r"quota", r"\b429\b", r"RESOURCE_EXHAUSTED", r"rate.?limit"))
    )
    unavailable_patterns: tuple[Pattern[str], ...] = field(
        default_factory=lambda: _compile((r"not found", r"\b404\b", r"NOT_FOUND"))
    )

    def classify(self, message: str, status_code: Optional[int] = None) -> ErrorCategory:
        if status_code in (401, 403):
            return ErrorCategory.AUTH
        if status_code == 429:
            return ErrorCategory.QUOTA
        if status_code == 404:
            return ErrorCategory.MODEL_UNAVAILABLE

        text = message or ""
        if any(pattern.search(text) for pattern in self.auth_patterns):
            return ErrorCategory.AUTH
        if any(pattern.search(text) for pattern in self.quota_patterns):
            return ErrorCategory.QUOTA
        if any(pattern.search(text) for pattern in self.unavailable_patterns):
            return ErrorCategory.MODEL_UNAVAILABLE
        return ErrorCategory.UNKNOWN


DEFAULT_CLASSIFIER = ErrorClassifier()


class SpeechError(RuntimeError):
    """Raised when a speech provider cannot produce audio."""


class ImageGenerationError(RuntimeError):
    """Raised when an illustration cannot be generated."""


__all__ = [
    "AuthError",
    "DEFAULT_CLASSIFIER",
    "ErrorCategory",
    "ErrorClassifier",
    "ImageGenerationError",
    "LookupFailure",
    "MalformedResponse",
    "ModelUnavailable",
    "QuotaExceeded",
    "SpeechError",
    "UnknownLookupError",
    "failure_for",
]
