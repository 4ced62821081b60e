"""
Country classification by file name.
"""

from typing import List, Tuple

import config.settings as settings


def classify_country(
    file_name: str,
    country_tokens: List[Tuple[str, str]] = None,
    unknown_label: str = settings.UNKNOWN_LABEL
) -> str:
    """
    Map a source file name to a country label.

    Args:
        file_name: Base name of the CSV file (e.g. "Brazil_tweets.csv")
        country_tokens: Ordered (token, label) pairs; first match wins
        unknown_label: Label returned when no token matches

    Returns:
        Country label, never empty
    """
    tokens = settings.COUNTRY_TOKENS if country_tokens is None else country_tokens
    lower = file_name.lower()

    for token, label in tokens:
        if token in lower:
            return label

    return unknown_label
