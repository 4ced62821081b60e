"""
Ingestion Agent.

Discovers tweet CSV files under a data directory and converts every row
into a canonical Tweet. Two layouts are supported:

- Header-based CSV (created_at, text|tweet, user_location, sentiment_score, month)
- India.csv: id,tweet,sentiment,month where the tweet field holds raw,
  unquoted commas
"""

import csv
import logging
import math
from pathlib import Path
from typing import List, Optional, Tuple, Union

import pandas as pd

from tweetstats.agents.classification import classify_country
from tweetstats.models.tweet import IndiaRow, Tweet
from tweetstats.utils.dates import parse_twitter_date
from tweetstats.utils.text import normalize_location
import config.settings as settings

logger = logging.getLogger(__name__)


def parse_float(value: Optional[str]) -> Optional[float]:
    """Parse a numeric cell, returning None for missing or non-numeric values."""
    if value is None:
        return None
    try:
        number = float(value.strip())
    except (AttributeError, ValueError):
        return None
    return None if math.isnan(number) else number


def india_delimiter_positions(line: str, delimiter: str = ",") -> Optional[Tuple[int, int, int]]:
    """
    Locate the three delimiters that split an India.csv line.

    Returns (first, second_last, last) indices, or None when the line has
    fewer than three delimiters. Everything between `first` and
    `second_last` belongs to the free-text tweet field.
    """
    first = line.find(delimiter)
    if first == -1:
        return None

    last = line.rfind(delimiter)
    if last <= first:
        return None

    second_last = line.rfind(delimiter, 0, last)
    if second_last <= first:
        return None

    return first, second_last, last


def parse_india_line(raw_line: str) -> Optional[IndiaRow]:
    """
    Slice one India.csv line into id, tweet, sentiment and month.

    Args:
        raw_line: Line as read from the file, newline included or not

    Returns:
        IndiaRow, or None for blank or malformed lines
    """
    line = raw_line.rstrip("\r\n")
    if not line.strip():
        return None

    positions = india_delimiter_positions(line)
    if positions is None:
        return None
    first, second_last, last = positions

    return IndiaRow(
        id=line[:first],
        tweet=line[first + 1:second_last],
        sentiment=line[second_last + 1:last],
        month=line[last + 1:]
    )


def check_field_counts(path: Path) -> None:
    """
    Require every non-blank record to have as many fields as the header.

    Raises:
        ValueError: On the first record whose field count differs
    """
    with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
        reader = csv.reader(f, delimiter=",", quotechar='"')

        expected = None
        for record in reader:
            if not record:
                continue
            if expected is None:
                expected = len(record)
                continue
            if len(record) != expected:
                raise ValueError(
                    f"Expected {expected} fields in line {reader.line_num}, saw {len(record)}"
                )


class CsvTweetParser:
    """
    Parses header-based tweet CSVs with pandas.

    Structural errors (a row whose field count differs from the header,
    an unterminated quote) raise and are handled by the caller.
    """

    def parse(self, path: Path) -> List[Tweet]:
        country = classify_country(path.name)

        # pandas pads short rows and turns surplus leading fields into an
        # index, so field counts are checked before reading
        check_field_counts(path)

        try:
            df = pd.read_csv(
                path,
                sep=",",
                quotechar='"',
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                index_col=False,
                encoding="utf-8",
                encoding_errors="replace"
            )
        except pd.errors.EmptyDataError:
            logger.warning(f"Empty CSV file: {path}")
            return []

        tweets = [self._row_to_tweet(row, country) for row in df.to_dict(orient="records")]
        logger.debug(f"Parsed {len(tweets)} rows from {path} (country={country})")
        return tweets

    def _row_to_tweet(self, row: dict, country: str) -> Tweet:
        created_at_raw = _cell(row, "created_at")
        created_at = None
        if created_at_raw is not None and created_at_raw.strip():
            created_at = parse_twitter_date(created_at_raw)

        text = _cell(row, "text")
        if text is None:
            text = _cell(row, "tweet")

        return Tweet(
            country=country,
            created_at=created_at,
            text=text if text is not None else "",
            user_location=normalize_location(_cell(row, "user_location")),
            sentiment_score=parse_float(_cell(row, "sentiment_score")),
            month_raw=_cell(row, "month")
        )


class IndiaTweetParser:
    """
    Line-based parser for India.csv.

    The tweet field is not quoted and may contain commas, so a CSV reader
    cannot split it. Lines are cut at the first comma and at the last two.
    """

    def __init__(self, country: str = settings.INDIA_COUNTRY):
        self.country = country

    def parse(self, path: Path) -> List[Tweet]:
        tweets = []
        skipped = 0

        with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
            f.readline()  # header: id,tweet,sentiment_score,month

            for raw_line in f:
                row = parse_india_line(raw_line)
                if row is None:
                    if raw_line.strip():
                        skipped += 1
                    continue
                tweets.append(self._row_to_tweet(row))

        if skipped:
            logger.debug(f"Skipped {skipped} malformed lines in {path}")
        logger.debug(f"Parsed {len(tweets)} rows from {path} (country={self.country})")
        return tweets

    def _row_to_tweet(self, row: IndiaRow) -> Tweet:
        return Tweet(
            country=self.country,
            created_at=None,
            text=row.tweet,
            user_location=None,
            sentiment_score=parse_float(row.sentiment),
            month_raw=row.month.strip()
        )


class TweetIngestionAgent:
    """
    Loads every tweet CSV below a data directory.

    Files directly inside an "output" directory are skipped so that
    reports from a previous run are not read back as input. A file that
    fails to parse is logged and contributes no tweets.
    """

    def __init__(
        self,
        india_file_token: str = settings.INDIA_FILE_TOKEN,
        output_dir_name: str = settings.OUTPUT_DIR_NAME
    ):
        self.india_file_token = india_file_token.lower()
        self.output_dir_name = output_dir_name.lower()
        self.csv_parser = CsvTweetParser()
        self.india_parser = IndiaTweetParser()

    def discover_files(self, root: Union[str, Path]) -> List[Path]:
        """Return all *.csv files under root (case-insensitive), sorted, minus output/."""
        root = Path(root)
        return [
            path for path in sorted(root.rglob("*"))
            if path.is_file()
            and path.suffix.lower() == ".csv"
            and path.parent.name.lower() != self.output_dir_name
        ]

    def select_parser(self, path: Path):
        if self.india_file_token in path.name.lower():
            return self.india_parser
        return self.csv_parser

    def ingest(self, root: Union[str, Path]) -> List[Tweet]:
        """
        Read all tweets under root.

        Args:
            root: Data directory

        Returns:
            Tweets from every readable file, in file order
        """
        files = self.discover_files(root)
        logger.info(f"Found {len(files)} CSV files under {root}")

        tweets: List[Tweet] = []
        for path in files:
            parser = self.select_parser(path)
            try:
                file_tweets = parser.parse(path)
            except Exception as e:
                logger.error(f"Failed to read CSV: {path} -> {type(e).__name__}: {e}")
                continue

            logger.info(f"Loaded {len(file_tweets)} tweets from {path.name}")
            tweets.extend(file_tweets)

        logger.info(f"Ingested {len(tweets)} tweets in total")
        return tweets


def _cell(row: dict, column: str) -> Optional[str]:
    """Cell value as a string, or None if the column is absent."""
    value = row.get(column)
    return value if isinstance(value, str) else None
