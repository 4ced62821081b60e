"""
Unit tests for the Ingestion Agent and its row parsers.
"""

from datetime import datetime

import pytest
from tweetstats.agents.ingestion import (
    CsvTweetParser,
    IndiaTweetParser,
    TweetIngestionAgent,
    india_delimiter_positions,
    parse_float,
    parse_india_line,
)


# --- India.csv line slicing ---------------------------------------------------

def test_india_line_with_embedded_commas():
    """Test that commas inside the tweet field stay in the tweet."""
    row = parse_india_line("1,hello, world, again,0.5,Mar 25")

    assert row.id == "1"
    assert row.tweet == "hello, world, again"
    assert row.sentiment == "0.5"
    assert row.month == "Mar 25"


def test_india_line_exactly_three_commas():
    """Test the minimal valid line."""
    row = parse_india_line("7,text,-0.25,Apr 01\r\n")

    assert (row.id, row.tweet, row.sentiment, row.month) == ("7", "text", "-0.25", "Apr 01")


def test_india_line_adjacent_commas_give_empty_fields():
    """Test that back-to-back delimiters produce empty fields, not errors."""
    assert parse_india_line("1,,0.5,Mar 25").tweet == ""

    row = parse_india_line("1,text,,Mar 25")
    assert row.tweet == "text"
    assert row.sentiment == ""

    row = parse_india_line(",,,")
    assert (row.id, row.tweet, row.sentiment, row.month) == ("", "", "", "")


@pytest.mark.parametrize("line", [
    "1,onlytwo,0.5",
    "no delimiters at all",
    "1,",
    "",
    "   ",
    "\r\n",
])
def test_india_line_malformed_is_skipped(line):
    """Test that lines with fewer than three commas are rejected."""
    assert parse_india_line(line) is None


def test_india_delimiter_positions():
    """Test boundary positions are strictly increasing."""
    assert india_delimiter_positions("a,b,c,d") == (1, 3, 5)
    assert india_delimiter_positions("a,b,c") is None


def test_parse_float():
    """Test numeric parsing degrades to None."""
    assert parse_float("0.5") == 0.5
    assert parse_float(" -1 ") == -1.0
    assert parse_float("abc") is None
    assert parse_float("") is None
    assert parse_float(None) is None
    assert parse_float("nan") is None


# --- File parsers -------------------------------------------------------------

def test_india_parser_reads_file(tmp_path):
    """Test India parser skips header, blank and malformed lines."""
    path = tmp_path / "India.csv"
    path.write_text(
        "id,tweet,sentiment_score,month\n"
        "1,lockdown, day one,0.5,Mar 25\n"
        "\n"
        "2,broken line,0.1\n"
        "3,stay home #covid,not-a-number, Apr 01 \r\n",
        encoding="utf-8"
    )

    tweets = IndiaTweetParser().parse(path)

    assert len(tweets) == 2
    assert tweets[0].country == "India"
    assert tweets[0].text == "lockdown, day one"
    assert tweets[0].sentiment_score == 0.5
    assert tweets[0].month_raw == "Mar 25"
    assert tweets[0].created_at is None
    assert tweets[0].user_location is None

    assert tweets[1].sentiment_score is None
    assert tweets[1].month_raw == "Apr 01"


def test_india_parser_keeps_raw_text(tmp_path):
    """Test that India text is not cleaned at parse time."""
    path = tmp_path / "india_tweets.csv"
    path.write_text("id,tweet,sentiment_score,month\n1,Hi &amp; bye https://t.co/x,0.2,Mar 26\n", encoding="utf-8")

    tweets = IndiaTweetParser().parse(path)

    assert tweets[0].text == "Hi &amp; bye https://t.co/x"


def test_csv_parser_full_row(tmp_path):
    """Test the header-based parser maps every known column."""
    path = tmp_path / "Japan_tweets.csv"
    path.write_text(
        "created_at,text,user_location,sentiment_score,extra\n"
        '"Wed Dec 08 04:25:46 +0000 2021","Hello, Tokyo #japan","  Tokyo   Japan ",0.75,x\n',
        encoding="utf-8"
    )

    tweets = CsvTweetParser().parse(path)

    assert len(tweets) == 1
    tweet = tweets[0]
    assert tweet.country == "Japan"
    assert tweet.created_at == datetime(2021, 12, 8, 4, 25, 46)
    assert tweet.text == "Hello, Tokyo #japan"
    assert tweet.user_location == "Tokyo Japan"
    assert tweet.sentiment_score == 0.75
    assert tweet.month_raw is None


def test_csv_parser_tweet_column_fallback(tmp_path):
    """Test that 'tweet' is used when 'text' is absent, and missing columns are None."""
    path = tmp_path / "brazil.csv"
    path.write_text("tweet,month\nolá #brasil,Mar 25\n", encoding="utf-8")

    tweet = CsvTweetParser().parse(path)[0]

    assert tweet.country == "Brazil"
    assert tweet.text == "olá #brasil"
    assert tweet.created_at is None
    assert tweet.user_location is None
    assert tweet.sentiment_score is None
    assert tweet.month_raw == "Mar 25"


def test_csv_parser_without_text_columns(tmp_path):
    """Test that text defaults to an empty string."""
    path = tmp_path / "australia.csv"
    path.write_text("created_at,user_location\nnot-a-date,\n", encoding="utf-8")

    tweet = CsvTweetParser().parse(path)[0]

    assert tweet.text == ""
    assert tweet.created_at is None
    assert tweet.user_location is None


def test_csv_parser_blank_created_at_and_bad_sentiment(tmp_path):
    """Test per-field failures degrade to None without dropping the row."""
    path = tmp_path / "indonesia.csv"
    path.write_text(
        "created_at,text,sentiment_score\n"
        ",halo,positive\n"
        "\n"
        "Mon Jan 04 10:00:00 +0700 2021,apa kabar,0.1\n",
        encoding="utf-8"
    )

    tweets = CsvTweetParser().parse(path)

    assert len(tweets) == 2
    assert tweets[0].created_at is None
    assert tweets[0].sentiment_score is None
    assert tweets[1].created_at == datetime(2021, 1, 4, 10, 0, 0)


def test_csv_parser_rejects_malformed_structure(tmp_path):
    """Test that a row with too many fields raises for the whole file."""
    path = tmp_path / "japan.csv"
    path.write_text("created_at,text\na,b\nc,d,e,f\n", encoding="utf-8")

    with pytest.raises(Exception):
        CsvTweetParser().parse(path)


def test_csv_parser_rejects_short_row(tmp_path):
    """Test that a row with fewer fields than the header raises."""
    path = tmp_path / "japan.csv"
    path.write_text(
        "created_at,text,user_location,month\n"
        "Wed Dec 08 04:25:46 +0000 2021,hi\n",
        encoding="utf-8"
    )

    with pytest.raises(ValueError, match="Expected 4 fields in line 2, saw 2"):
        CsvTweetParser().parse(path)


def test_csv_parser_rejects_extra_field_on_every_row(tmp_path):
    """Test that one surplus field per row is not absorbed as an index column."""
    path = tmp_path / "japan.csv"
    path.write_text("text,user_location\n1,hello,Tokyo\n2,bye,Osaka\n", encoding="utf-8")

    with pytest.raises(ValueError, match="Expected 2 fields in line 2, saw 3"):
        CsvTweetParser().parse(path)


def test_ingest_drops_files_with_wrong_field_counts(tmp_path, caplog):
    """Test that structurally broken files contribute no tweets."""
    (tmp_path / "japan.csv").write_text(
        "created_at,text,user_location,month\nWed Dec 08 04:25:46 +0000 2021,hi\n", encoding="utf-8"
    )
    (tmp_path / "brazil.csv").write_text("text,user_location\n1,hello,Tokyo\n2,bye,Osaka\n", encoding="utf-8")
    (tmp_path / "australia.csv").write_text("text,user_location\ng'day,Sydney\n", encoding="utf-8")

    with caplog.at_level("ERROR"):
        tweets = TweetIngestionAgent().ingest(tmp_path)

    assert [(t.country, t.text) for t in tweets] == [("Australia", "g'day")]
    assert "japan.csv -> ValueError" in caplog.text
    assert "brazil.csv -> ValueError" in caplog.text


def test_csv_parser_quoted_newlines_are_one_record(tmp_path):
    """Test that a quoted multi-line text counts as a single record."""
    path = tmp_path / "japan.csv"
    path.write_text('text,user_location\n"line one\nline two",Tokyo\n', encoding="utf-8")

    tweets = CsvTweetParser().parse(path)

    assert [t.text for t in tweets] == ["line one\nline two"]


def test_csv_parser_empty_file(tmp_path):
    """Test that an empty file yields no tweets."""
    path = tmp_path / "japan.csv"
    path.write_text("", encoding="utf-8")

    assert CsvTweetParser().parse(path) == []


# --- Orchestration ------------------------------------------------------------

@pytest.fixture
def data_dir(tmp_path):
    """Data directory with a mix of formats, an output dir and non-CSV files."""
    (tmp_path / "india").mkdir()
    (tmp_path / "india" / "India.csv").write_text(
        "id,tweet,sentiment_score,month\n1,namaste, india,0.4,Mar 25\n", encoding="utf-8"
    )
    (tmp_path / "Japan.CSV").write_text("text\nkonnichiwa\nsayonara\n", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("text\nignored\n", encoding="utf-8")
    (tmp_path / "Output").mkdir()
    (tmp_path / "Output" / "country_tweet_counts.csv").write_text("country,tweet_count\nJapan,2\n", encoding="utf-8")
    return tmp_path


def test_discover_files_skips_output_and_non_csv(data_dir):
    """Test discovery is recursive, case-insensitive and ignores output/."""
    agent = TweetIngestionAgent()

    names = [p.name for p in agent.discover_files(data_dir)]

    assert sorted(names) == ["India.csv", "Japan.CSV"]


def test_select_parser_by_file_name(tmp_path):
    """Test that 'india' in the file name selects the custom parser."""
    agent = TweetIngestionAgent()

    assert agent.select_parser(tmp_path / "INDIA_2020.csv") is agent.india_parser
    assert agent.select_parser(tmp_path / "indonesia.csv") is agent.csv_parser
    assert agent.select_parser(tmp_path / "japan.csv") is agent.csv_parser


def test_ingest_merges_all_files(data_dir):
    """Test that all parsed files are concatenated."""
    tweets = TweetIngestionAgent().ingest(data_dir)

    assert len(tweets) == 3
    assert sorted(t.country for t in tweets) == ["India", "Japan", "Japan"]


def test_ingest_isolates_file_failures(data_dir, caplog):
    """Test that one broken file is logged and skipped."""
    (data_dir / "brazil.csv").write_text('text\n"unterminated\n', encoding="utf-8")
    (data_dir / "australia.csv").write_text("a,b\n1,2\n3,4,5,6\n", encoding="utf-8")

    with caplog.at_level("ERROR"):
        tweets = TweetIngestionAgent().ingest(data_dir)

    assert len(tweets) == 3
    assert "Failed to read CSV" in caplog.text
    assert "australia.csv" in caplog.text
