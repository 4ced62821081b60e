"""
Phrase-count loading.

Reads the optional "<phrase><TAB><count>" file produced by an external
n-gram job and ranks its entries.
"""

import logging
from pathlib import Path
from typing import List, Optional, Union

from tweetstats.models.tweet import PhraseCount

logger = logging.getLogger(__name__)


def parse_phrase_line(line: str) -> Optional[PhraseCount]:
    """Split a line at its last tab; None when there is no tab or the count is not an int."""
    line = line.strip()
    if not line:
        return None

    idx = line.rfind("\t")
    if idx == -1:
        return None

    try:
        count = int(line[idx + 1:].strip())
    except ValueError:
        return None

    return PhraseCount(phrase=line[:idx].strip(), count=count)


def load_phrase_counts(path: Union[str, Path]) -> List[PhraseCount]:
    """
    Load phrase counts from a tab-separated file.

    Args:
        path: Phrase file path

    Returns:
        Parsed entries, or an empty list if the file doesn't exist
    """
    path = Path(path)
    if not path.exists():
        logger.debug(f"No phrase file at {path}")
        return []

    phrases = []
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        for line in f:
            entry = parse_phrase_line(line)
            if entry is not None:
                phrases.append(entry)

    logger.info(f"Loaded {len(phrases)} phrase counts from {path}")
    return phrases


def top_phrases(
    phrases: List[PhraseCount],
    limit: int,
    containing: Optional[str] = None
) -> List[PhraseCount]:
    """
    Highest-count phrases first.

    Args:
        phrases: Loaded phrase counts
        limit: Maximum number of entries returned
        containing: Keep only phrases whose lower-cased text contains this token
    """
    if containing is not None:
        token = containing.lower()
        phrases = [p for p in phrases if token in p.phrase.lower()]
    return sorted(phrases, key=lambda p: p.count, reverse=True)[:limit]
