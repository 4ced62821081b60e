"""
Configuration settings for TweetStats.

Centralized configuration for ingestion, aggregation and reporting.
"""

import os

# Input / output layout (relative to the data directory given on the CLI)
OUTPUT_DIR_NAME = "output"
PHRASE_FILE_NAME = "india_phrases.txt"

# Country tagging by file name (first match wins)
COUNTRY_TOKENS = [
    ("australia", "Australia"),
    ("brazil", "Brazil"),
    ("india", "India"),
    ("indonesia", "Indonesia"),
    ("japan", "Japan"),
]
UNKNOWN_LABEL = "Unknown"

# India.csv uses the custom id,tweet,sentiment,month layout
INDIA_FILE_TOKEN = "india"
INDIA_COUNTRY = "India"

# Twitter created_at, e.g. "Wed Dec 08 04:25:46 +0000 2021"
TWITTER_DATE_FORMAT = "%a %b %d %H:%M:%S %z %Y"

# Reporting
TOP_COUNTRY_COUNT = 5
TOP_MONTH_COUNT = 10
TOP_HASHTAG_COUNT = 5
TOP_PHRASE_COUNT = 20
PHRASE_TOKEN = "india"
SENTIMENT_MONTH_LABEL_PATTERN = r"[A-Za-z]{3} [0-9]{2}"  # "Mar 25"

# Logging
LOG_LEVEL = os.getenv("TWEETSTATS_LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = os.getenv("TWEETSTATS_LOG_FILE", "tweetstats.log")
