"""
Tweet Aggregator.

Turns the deduplicated tweet list into the counts and averages used by the
console summary and the CSV reports.
"""

import logging
import re
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import pandas as pd

from tweetstats.models.tweet import Tweet
from tweetstats.utils.text import clean_text
import config.settings as settings

logger = logging.getLogger(__name__)

HASHTAG_RE = re.compile(r"#\w+", re.ASCII)  # [A-Za-z0-9_] only


@dataclass
class AggregationConfig:
    """Top-N sizes and filters used when ranking aggregates."""
    top_country_count: int = settings.TOP_COUNTRY_COUNT
    top_month_count: int = settings.TOP_MONTH_COUNT
    top_hashtag_count: int = settings.TOP_HASHTAG_COUNT
    top_phrase_count: int = settings.TOP_PHRASE_COUNT
    sentiment_country: str = settings.INDIA_COUNTRY
    phrase_token: str = settings.PHRASE_TOKEN
    month_label_pattern: str = settings.SENTIMENT_MONTH_LABEL_PATTERN


@dataclass
class MonthSentiment:
    """Average sentiment for one month label."""
    month_label: str
    average_sentiment: float
    tweet_count: int


@dataclass
class TweetStatistics:
    """All aggregates computed from one run."""
    config: AggregationConfig
    country_counts: Counter = field(default_factory=Counter)
    month_counts: Counter = field(default_factory=Counter)
    country_month_counts: Dict[str, Counter] = field(default_factory=dict)
    hashtags_by_country: Dict[str, Counter] = field(default_factory=dict)
    sentiment_by_country: Dict[str, float] = field(default_factory=dict)
    sentiment_by_month: List[MonthSentiment] = field(default_factory=list)

    def top_countries(self) -> List[Tuple[str, int]]:
        return rank(self.country_counts, self.config.top_country_count)

    def top_months(self) -> List[Tuple[str, int]]:
        return rank(self.month_counts, self.config.top_month_count)

    def top_hashtags(self, country: str) -> List[Tuple[str, int]]:
        return rank(self.hashtags_by_country.get(country, Counter()), self.config.top_hashtag_count)


def rank(counts: Counter, limit: Optional[int] = None) -> List[Tuple[str, int]]:
    """
    Sort (key, count) pairs by count descending.

    Ties keep first-seen order since sorted() is stable.
    """
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return ranked if limit is None else ranked[:limit]


def extract_hashtags(text: str) -> List[str]:
    """Lower-cased hashtags from the cleaned tweet text."""
    return HASHTAG_RE.findall(clean_text(text).lower())


class TweetAggregator:
    """
    Computes volume, hashtag and sentiment aggregates.

    All month grouping goes through Tweet.month_key() so every report
    buckets tweets the same way.
    """

    def __init__(self, config: AggregationConfig = None):
        self.config = config or AggregationConfig()
        self.month_label_re = re.compile(self.config.month_label_pattern)

    def aggregate(self, tweets: List[Tweet]) -> TweetStatistics:
        """
        Compute all aggregates.

        Args:
            tweets: Deduplicated tweets

        Returns:
            TweetStatistics for reporting
        """
        stats = TweetStatistics(config=self.config)

        country_month: Dict[str, Counter] = defaultdict(Counter)
        hashtags: Dict[str, Counter] = defaultdict(Counter)

        for tweet in tweets:
            month = tweet.month_key()
            stats.country_counts[tweet.country] += 1
            stats.month_counts[month] += 1
            country_month[tweet.country][month] += 1

            for tag in extract_hashtags(tweet.text):
                hashtags[tweet.country][tag] += 1

        stats.country_month_counts = dict(country_month)
        stats.hashtags_by_country = dict(hashtags)
        stats.sentiment_by_country, stats.sentiment_by_month = self._sentiment(tweets)

        logger.info(
            f"Aggregated {len(tweets)} tweets: {len(stats.country_counts)} countries, "
            f"{len(stats.month_counts)} months, "
            f"{sum(len(c) for c in stats.hashtags_by_country.values())} country hashtags"
        )
        return stats

    def _sentiment(self, tweets: List[Tweet]) -> Tuple[Dict[str, float], List[MonthSentiment]]:
        """Average sentiment per country, and per month label for the configured country."""
        scored = pd.DataFrame(
            [
                (t.country, t.month_key(), t.sentiment_score)
                for t in tweets
                if t.sentiment_score is not None
            ],
            columns=["country", "month", "sentiment_score"]
        )

        if scored.empty:
            logger.info("No tweets carry a sentiment score")
            return {}, []

        by_country = scored.groupby("country", sort=False)["sentiment_score"].mean()

        country_rows = scored[scored["country"] == self.config.sentiment_country]
        by_month = (
            country_rows.groupby("month", sort=True)["sentiment_score"]
            .agg(["mean", "count"])
        )

        monthly = [
            MonthSentiment(
                month_label=month,
                average_sentiment=float(row["mean"]),
                tweet_count=int(row["count"])
            )
            for month, row in by_month.iterrows()
            if row["count"] > 0 and self.month_label_re.fullmatch(month)
        ]

        return {country: float(avg) for country, avg in by_country.items()}, monthly
