"""
Text normalization helpers.

Cleans tweet bodies and user locations before they are counted.
"""

import re
import unicodedata
from typing import Optional

URL_RE = re.compile(r"https?://\S+")
WHITESPACE_RE = re.compile(r"\s+")

HTML_ENTITIES = [
    ("&amp;", "&"),
    ("&lt;", "<"),
    ("&gt;", ">"),
]

# Letters, numbers, punctuation and separators
KEPT_CATEGORY_PREFIXES = ("L", "N", "P", "Z")


def _is_kept_char(ch: str) -> bool:
    return ch.isspace() or unicodedata.category(ch).startswith(KEPT_CATEGORY_PREFIXES)


def clean_text(raw: str) -> str:
    """
    Clean a tweet body.

    Decodes a few HTML entities, drops URLs, replaces emoji, symbols and
    control characters with spaces, then collapses whitespace.

    Args:
        raw: Raw tweet text

    Returns:
        Cleaned text (possibly empty)
    """
    text = raw or ""

    for entity, literal in HTML_ENTITIES:
        text = text.replace(entity, literal)

    text = URL_RE.sub(" ", text)
    text = "".join(ch if _is_kept_char(ch) else " " for ch in text)

    return WHITESPACE_RE.sub(" ", text).strip()


def normalize_location(raw: Optional[str]) -> Optional[str]:
    """Trim a user location and collapse inner whitespace; None when blank."""
    if raw is None:
        return None
    trimmed = raw.strip()
    if not trimmed:
        return None
    return WHITESPACE_RE.sub(" ", trimmed)
