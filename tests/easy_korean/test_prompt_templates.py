import random

import pytest

from easy_korean import prompt_templates


def test_lookup_prompt_carries_query_and_language_rules():
    prompt = prompt_templates.build_lookup_prompt("apple", "Español (Spanish)")

    assert 'Input: "apple"' in prompt
    assert "Target Language: Español (Spanish)" in prompt
    assert "Translate to common Korean word first" in prompt
    assert "Latin chars only" in prompt
    assert "In Español (Spanish)." in prompt


def test_system_instruction_is_parameterized_by_language_only():
    assert prompt_templates.build_system_instruction("English") == (
        "You are a Korean tutor. Return JSON only. Explanations in English."
    )


@pytest.mark.parametrize(
    "kind, marker",
    [("word", "concept of"), ("culture", "cultural context")],
)
def test_image_prompts_embed_subject(kind, marker):
    prompt = prompt_templates.build_image_prompt("김치", kind)

    assert marker in prompt
    assert '"김치"' in prompt
    assert "Do not include any text" in prompt


def test_image_prompt_rejects_unknown_kind():
    with pytest.raises(ValueError):
        prompt_templates.build_image_prompt("김치", "poster")


def test_daily_word_topic_comes_from_fixed_list():
    topic = prompt_templates.pick_daily_topic(random.Random(7))

    assert topic in prompt_templates.DAILY_WORD_TOPICS
    assert prompt_templates.build_daily_word_query(topic).endswith(f"related to {topic}")
