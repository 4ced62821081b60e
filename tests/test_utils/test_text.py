"""
Unit tests for text normalization.
"""

import unicodedata

import pytest
from tweetstats.utils.text import clean_text, normalize_location, URL_RE


def test_html_entities_decoded():
    """Test entity decoding (decoded < and > are symbols, so they are dropped too)."""
    assert clean_text("Fish &amp; chips &lt;3 &gt;") == "Fish & chips 3"


def test_urls_removed():
    """Test that http and https links are stripped."""
    text = clean_text("Read this https://t.co/abc123 and http://example.com/x?y=1 now")
    assert text == "Read this and now"


def test_emoji_and_symbols_removed():
    """Test that emoji and math/currency symbols are replaced by spaces."""
    assert clean_text("Great day 😀🎉 #sunny") == "Great day #sunny"
    assert clean_text("a+b=$5") == "a b 5"


def test_whitespace_collapsed_and_trimmed():
    """Test that tabs/newlines collapse to single spaces."""
    assert clean_text("  hello\t\tworld\n\nagain  ") == "hello world again"


def test_non_latin_letters_kept():
    """Test that letters from any script survive cleaning."""
    assert clean_text("東京 São Paulo Москва") == "東京 São Paulo Москва"


def test_empty_and_none_input():
    """Test that empty input returns empty string."""
    assert clean_text("") == ""
    assert clean_text(None) == ""


@pytest.mark.parametrize("raw", [
    "check https://a.b/c 😀 &amp; more",
    "http://x http://y",
    "​zero​width https://t.co/1\u0007",
    "♥♥♥ love ♥♥♥ https://love.example",
])
def test_clean_text_output_has_only_allowed_characters(raw):
    """Test that output has no URL and only letters, digits, punctuation, whitespace."""
    cleaned = clean_text(raw)

    assert URL_RE.search(cleaned) is None
    for ch in cleaned:
        assert ch.isspace() or unicodedata.category(ch)[0] in ("L", "N", "P", "Z")


def test_normalize_location():
    """Test location trimming and whitespace collapse."""
    assert normalize_location("  New   Delhi,\tIndia ") == "New Delhi, India"
    assert normalize_location("Tokyo") == "Tokyo"


def test_normalize_location_blank_is_none():
    """Test that blank or missing locations are absent."""
    assert normalize_location(None) is None
    assert normalize_location("") is None
    assert normalize_location("   ") is None
