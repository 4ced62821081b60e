"""
Tweet deduplication.

The datasets carry no tweet id, so duplicates are detected with
Tweet.identity_key() (country, created_at, month label, raw text).
Two distinct tweets that share all four collapse into one.
"""

import logging
from typing import Iterable, List

from tweetstats.models.tweet import Tweet

logger = logging.getLogger(__name__)


def dedupe(tweets: Iterable[Tweet]) -> List[Tweet]:
    """Keep the first tweet seen for each identity key, preserving order."""
    seen = set()
    unique = []

    for tweet in tweets:
        key = tweet.identity_key()
        if key in seen:
            continue
        seen.add(key)
        unique.append(tweet)

    return unique


class TweetDeduplicator:
    """Deduplication stage with logging of how many rows were dropped."""

    def run(self, tweets: List[Tweet]) -> List[Tweet]:
        unique = dedupe(tweets)
        logger.info(
            f"Deduplicated {len(tweets)} tweets to {len(unique)} "
            f"({len(tweets) - len(unique)} duplicates removed)"
        )
        return unique
