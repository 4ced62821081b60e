"""
Storage utility.

Writes the aggregate CSV reports under <data_root>/output.
"""

import csv
import logging
import os
from typing import Dict, List

import pandas as pd

from tweetstats.agents.aggregation import TweetStatistics, rank
import config.settings as settings

logger = logging.getLogger(__name__)


class ReportWriter:
    """
    Manages the CSV reports produced at the end of a run.

    Handles:
    - country_tweet_counts.csv
    - month_tweet_counts.csv
    - hashtag_top{N}_by_country.csv
    - {country}_sentiment_by_month.csv
    - country_month_tweet_counts.csv
    """

    def __init__(self, output_dir: str):
        """
        Initialize report writer.

        Args:
            output_dir: Report directory (e.g., /path/to/data/output)
        """
        self.output_dir = str(output_dir)
        os.makedirs(self.output_dir, exist_ok=True)

        logger.info(f"Initialized ReportWriter with output_dir={self.output_dir}")

    def write_all(self, stats: TweetStatistics) -> List[str]:
        """Write every report and return their paths."""
        return [
            self.write_country_counts(stats.country_counts),
            self.write_month_counts(stats.month_counts),
            self.write_hashtag_top(stats.hashtags_by_country, stats.config.top_hashtag_count),
            self.write_sentiment_by_month(stats),
            self.write_country_month_counts(stats.country_month_counts),
        ]

    def write_country_counts(self, counts: Dict[str, int]) -> str:
        """country,tweet_count sorted by count descending."""
        df = pd.DataFrame(rank(counts), columns=["country", "tweet_count"])
        return self._write(df, "country_tweet_counts.csv", quoting=csv.QUOTE_MINIMAL)

    def write_month_counts(self, counts: Dict[str, int]) -> str:
        """month,tweet_count sorted by count descending."""
        df = pd.DataFrame(rank(counts), columns=["month", "tweet_count"])
        return self._write(df, "month_tweet_counts.csv", quoting=csv.QUOTE_MINIMAL)

    def write_hashtag_top(self, hashtags_by_country: Dict[str, Dict[str, int]], top_n: int) -> str:
        """country,hashtag,count with the top N hashtags of each country."""
        rows = [
            (country, tag, count)
            for country, counts in hashtags_by_country.items()
            for tag, count in rank(counts, top_n)
        ]
        df = pd.DataFrame(rows, columns=["country", "hashtag", "count"])
        return self._write(df, f"hashtag_top{top_n}_by_country.csv")

    def write_sentiment_by_month(self, stats: TweetStatistics) -> str:
        """month_label,average_sentiment,tweet_count for the sentiment country."""
        rows = [
            (m.month_label, m.average_sentiment, m.tweet_count)
            for m in stats.sentiment_by_month
        ]
        df = pd.DataFrame(rows, columns=["month_label", "average_sentiment", "tweet_count"])
        file_name = f"{stats.config.sentiment_country.lower()}_sentiment_by_month.csv"
        return self._write(df, file_name)

    def write_country_month_counts(self, counts: Dict[str, Dict[str, int]]) -> str:
        """country,month,tweet_count with months ascending inside each country."""
        rows = [
            (country, month, count)
            for country, month_counts in counts.items()
            for month, count in sorted(month_counts.items())
        ]
        df = pd.DataFrame(rows, columns=["country", "month", "tweet_count"])
        return self._write(df, "country_month_tweet_counts.csv")

    def _write(self, df: pd.DataFrame, file_name: str, quoting: int = csv.QUOTE_NONNUMERIC) -> str:
        """
        Write header plus rows.

        The header is always unquoted; text cells follow `quoting`.
        """
        filepath = os.path.join(self.output_dir, file_name)

        try:
            with open(filepath, "w", encoding="utf-8", newline="") as f:
                f.write(",".join(df.columns) + "\n")
                if not df.empty:
                    df.to_csv(f, header=False, index=False, quoting=quoting, lineterminator="\n")
            logger.info(f"Saved {len(df)} rows to {filepath}")
        except Exception as e:
            logger.error(f"Failed to write report {filepath}: {e}")
            raise

        return filepath


def default_output_dir(data_root: str) -> str:
    return os.path.join(str(data_root), settings.OUTPUT_DIR_NAME)
