import re

import pytest

from easy_korean.errors import (
    DEFAULT_CLASSIFIER,
    AuthError,
    ErrorCategory,
    ErrorClassifier,
    MalformedResponse,
    ModelUnavailable,
    QuotaExceeded,
    UnknownLookupError,
    failure_for,
)


@pytest.mark.parametrize(
    "message, expected",
    [
        ("API key not valid. Please pass a valid API key.", ErrorCategory.AUTH),
        ("400 INVALID_ARGUMENT", ErrorCategory.UNKNOWN),
        ("403 PERMISSION_DENIED", ErrorCategory.AUTH),
        ("429 RESOURCE_EXHAUSTED", ErrorCategory.QUOTA),
        ("You exceeded your current quota", ErrorCategory.QUOTA),
        (
            "models/gemini-1.0-pro is not found for this version",
            ErrorCategory.MODEL_UNAVAILABLE,
        ),
        ("404 NOT_FOUND", ErrorCategory.MODEL_UNAVAILABLE),
        ("connection reset by peer", ErrorCategory.UNKNOWN),
        ("", ErrorCategory.UNKNOWN),
    ],
)
def test_default_classifier_maps_provider_text(message, expected):
    assert DEFAULT_CLASSIFIER.classify(message) == expected


def test_status_code_wins_over_message_text():
    assert DEFAULT_CLASSIFIER.classify("quota exceeded", 401) == ErrorCategory.AUTH
    assert DEFAULT_CLASSIFIER.classify("something odd", 429) == ErrorCategory.QUOTA
    assert DEFAULT_CLASSIFIER.classify("something odd", 404) == ErrorCategory.MODEL_UNAVAILABLE


def test_classifier_patterns_can_be_replaced():
    classifier = ErrorClassifier(quota_patterns=(re.compile("slow down", re.IGNORECASE),))

    assert classifier.classify("Please SLOW DOWN") == ErrorCategory.QUOTA
    assert classifier.classify("quota") == ErrorCategory.UNKNOWN


@pytest.mark.parametrize(
    "category, expected_type",
    [
        (ErrorCategory.AUTH, AuthError),
        (ErrorCategory.QUOTA, QuotaExceeded),
        (ErrorCategory.MODEL_UNAVAILABLE, ModelUnavailable),
        (ErrorCategory.MALFORMED, MalformedResponse),
        (ErrorCategory.UNKNOWN, UnknownLookupError),
    ],
)
def test_failure_for_returns_matching_exception(category, expected_type):
    failure = failure_for(category, "detail", model="gemini-1.5-flash")

    assert isinstance(failure, expected_type)
    assert failure.category == category
    assert failure.model == "gemini-1.5-flash"


def test_unknown_failure_message_truncates_detail():
    failure = UnknownLookupError("x" * 150)

    assert failure.user_message == f"오류가 발생했습니다: {'x' * 100}..."
    assert str(failure) == failure.user_message


def test_category_messages_are_bilingual():
    assert "(Quota Exceeded)" in QuotaExceeded().user_message
    assert "(Invalid API Key)" in AuthError().user_message
    assert "(Model Not Found)" in ModelUnavailable().user_message
