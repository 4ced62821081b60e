"""
TweetStats - Multi-country Tweet Statistics

CLI entry point for running the ingestion and reporting pipeline.
"""

import argparse
import logging
import os
import sys

from tweetstats.agents.aggregation import AggregationConfig
from tweetstats.agents.phrases import top_phrases
from tweetstats.orchestrator import PipelineOrchestrator, PipelineResult
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def print_summary(result: PipelineResult, config: AggregationConfig):
    """Print the run summary to stdout."""
    stats = result.statistics

    print("=== Summary ===")
    print(f"Total raw tweets: {result.raw_count}")
    print(f"Total unique tweets: {result.unique_count}")

    print(f"\n=== Top {config.top_country_count} countries by tweet volume ===")
    for country, count in stats.top_countries():
        print(f"{country}\t{count}")

    print(f"\n=== Top {config.top_month_count} months by tweet volume ===")
    for month, count in stats.top_months():
        print(f"{month}\t{count}")

    print(f"\n=== Top {config.top_hashtag_count} hashtags by country ===")
    for country in sorted(stats.hashtags_by_country):
        print(f"[{country}]")
        for tag, count in stats.top_hashtags(country):
            print(f"  {tag}\t{count}")

    print("\n=== Average sentiment (only rows with sentiment_score) ===")
    for country, avg in stats.sentiment_by_country.items():
        print(f"{country}\t{avg}")

    print(f"\n=== {config.sentiment_country} average sentiment by month (filtered labels) ===")
    if not stats.sentiment_by_month:
        print(f"(no sentiment data for {config.sentiment_country})")
    else:
        for month in stats.sentiment_by_month:
            print(f"{month.month_label}\t{month.average_sentiment}\t(count={month.tweet_count})")

    if result.phrase_counts:
        print(f"\n=== Top {config.top_phrase_count} phrases from {settings.PHRASE_FILE_NAME} ===")
        for pc in top_phrases(result.phrase_counts, config.top_phrase_count):
            print(f"{pc.count}\t{pc.phrase}")

        print(f"\n=== Top {config.top_phrase_count} phrases containing '{config.phrase_token}' ===")
        for pc in top_phrases(result.phrase_counts, config.top_phrase_count, containing=config.phrase_token):
            print(f"{pc.count}\t{pc.phrase}")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="TweetStats - aggregate multi-country tweet CSVs into reports",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Process every CSV under ./data, reports go to ./data/output
  python main.py ./data

  # Verbose run
  python main.py ./data --log-level DEBUG
        """
    )

    parser.add_argument(
        "data_dir",
        nargs="?",
        help="Directory containing the tweet CSV files"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    args = parser.parse_args(argv)

    if not args.data_dir:
        print("Usage: tweetstats <data directory path>")
        return

    if not os.path.isdir(args.data_dir):
        print(f"Data directory not found: {args.data_dir}")
        return

    # Setup logging
    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    config = AggregationConfig()

    try:
        orchestrator = PipelineOrchestrator(data_root=args.data_dir, config=config)
        result = orchestrator.run()

    except KeyboardInterrupt:
        logger.warning("Pipeline interrupted by user")
        print("\nPipeline interrupted")
        sys.exit(1)

    except Exception as e:
        logger.error(f"Pipeline failed: {e}", exc_info=True)
        print(f"\nPipeline failed: {e}")
        print(f"Check {settings.LOG_FILE} for details")
        sys.exit(1)

    print_summary(result, config)
    logger.info("TweetStats completed successfully")


if __name__ == "__main__":
    main()
