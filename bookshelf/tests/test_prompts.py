"""
Tests for assistant system prompts.
"""

from bookshelf.prompts import (
    MAX_CONTENT_CHARS,
    _truncate_content,
    article_mode_prompt,
    build_article_context,
    general_mode_prompt,
)


def test_general_prompt_per_language():
    assert "bookshelf" in general_mode_prompt("en")
    assert "Kitaplık" in general_mode_prompt("tr")


def test_unknown_language_falls_back_to_english():
    assert general_mode_prompt("de") == general_mode_prompt("en")


def test_article_context_includes_both_tiers(catalog):
    context = build_article_context(catalog.get_by_id(3), "en")
    assert "Title: Immune Changes in Astronauts" in context
    assert "Author: Amara Okafor" in context
    assert "Dormant viruses" in context
    assert "Latent herpesviruses" in context


def test_translated_context_falls_back_per_field(catalog):
    context = build_article_context(catalog.get_by_id(1), "tr")
    assert "Başlık: Mikro Yerçekiminde Kemik Kaybı" in context
    # No Turkish advanced text, so the English one is used
    assert "Osteoclast activity" in context


def test_article_prompt_embeds_context(catalog):
    prompt = article_mode_prompt(catalog.get_by_id(2), "en")
    assert "CURRENTLY OPEN ARTICLE" in prompt
    assert "Plant Growth Aboard the Station" in prompt


def test_truncate_content():
    assert _truncate_content("short") == "short"
    assert _truncate_content("") == ""
    long_text = "Sentence. " * (MAX_CONTENT_CHARS // 5)
    truncated = _truncate_content(long_text)
    assert len(truncated) < len(long_text)
    assert truncated.endswith("[Content truncated for length]")
