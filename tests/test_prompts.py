"""Tests for system prompt composition."""

from app.core.prompts import (
    CONTEXT_HEADER,
    DEFAULT_TONE,
    MISSION,
    build_context_block,
    build_language_directive,
    build_system_prompt,
    compose_system_message,
    fallback_message,
    format_passage,
)
from app.core.schemas_knowledge import KnowledgePassage


def test_sections_in_fixed_order(storyteller):
    prompt = build_system_prompt(storyteller, "en", "it")

    mission_at = prompt.index(MISSION)
    tone_at = prompt.index(storyteller.tone_instructions)
    language_at = prompt.index("You MUST respond only in English")

    assert mission_at < tone_at < language_at


def test_tone_instructions_included_verbatim(storyteller):
    prompt = build_system_prompt(storyteller, "it", "it")

    assert "Persona: Storyteller" in prompt
    assert storyteller.tone_instructions in prompt


def test_default_tone_without_persona():
    prompt = build_system_prompt(None, "es", "it")

    assert DEFAULT_TONE in prompt
    assert "Spanish" in prompt


def test_cross_language_directive_forbids_quoting_corpus():
    directive = build_language_directive("en", "it")

    assert "respond only in English" in directive
    assert "context provided to you is in Italian" in directive
    assert "DO NOT quote" in directive


def test_same_language_directive_is_short():
    directive = build_language_directive("it", "it")

    assert "respond only in Italian" in directive
    assert "DO NOT quote" not in directive


def test_unknown_response_language_falls_back_to_english():
    assert "respond only in English" in build_language_directive("de", "it")


def test_format_passage_tags_category_and_location():
    passage = KnowledgePassage(
        title="Castello - Storia Medievale",
        content="Forte longobardo, poi normanno.",
        category="monument",
        location="Castello",
    )

    assert format_passage(passage) == (
        "Castello - Storia Medievale (monument, Castello): Forte longobardo, poi normanno."
    )


def test_context_block_omitted_when_nothing_retrieved():
    assert build_context_block([]) == ""
    assert compose_system_message("SYSTEM", []) == "SYSTEM"


def test_context_block_appended_after_prompt():
    message = compose_system_message("SYSTEM", ["snippet one", "snippet two"])

    assert message.startswith("SYSTEM\n\n" + CONTEXT_HEADER)
    assert message.index("snippet one") < message.index("snippet two")


def test_fallback_messages_per_language():
    assert fallback_message("it").startswith("Al momento")
    assert fallback_message("es").startswith("Estoy")
    assert fallback_message("fr") == fallback_message("en")
