"""
Pipeline Orchestrator.

Coordinates the sequential stages of a TweetStats run.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import List

from tweetstats.agents.aggregation import AggregationConfig, TweetAggregator, TweetStatistics
from tweetstats.agents.deduplication import TweetDeduplicator
from tweetstats.agents.ingestion import TweetIngestionAgent
from tweetstats.agents.phrases import load_phrase_counts
from tweetstats.models.tweet import PhraseCount
from tweetstats.utils.storage import ReportWriter, default_output_dir
import config.settings as settings

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Everything the CLI needs to print the run summary."""
    raw_count: int
    unique_count: int
    statistics: TweetStatistics
    phrase_counts: List[PhraseCount] = field(default_factory=list)
    report_paths: List[str] = field(default_factory=list)


class PipelineOrchestrator:
    """
    Orchestrates one batch run over a data directory.

    Coordinates:
    1. Ingestion → 2. Deduplication → 3. Aggregation
    → 4. Report writing → 5. Phrase-count loading
    """

    def __init__(self, data_root: str, config: AggregationConfig = None):
        """
        Initialize pipeline orchestrator.

        Args:
            data_root: Directory holding the tweet CSVs
            config: Aggregation settings (defaults come from config.settings)
        """
        self.data_root = str(data_root)
        self.config = config or AggregationConfig()

        logger.info("Initializing pipeline components...")

        self.ingestion_agent = TweetIngestionAgent()
        self.deduplicator = TweetDeduplicator()
        self.aggregator = TweetAggregator(self.config)
        self.output_dir = default_output_dir(self.data_root)
        self.phrase_path = os.path.join(self.data_root, settings.PHRASE_FILE_NAME)

        logger.info("Pipeline initialized successfully")

    def run(self) -> PipelineResult:
        """
        Run the complete pipeline.

        Per-file read errors are absorbed during ingestion; failures in
        aggregation or report writing propagate to the caller.

        Returns:
            PipelineResult with counts, statistics and report paths
        """
        logger.info(f"Starting pipeline for {self.data_root}")

        # STAGE 1: Ingestion
        raw_tweets = self.ingestion_agent.ingest(self.data_root)

        # STAGE 2: Deduplication
        tweets = self.deduplicator.run(raw_tweets)

        # STAGE 3: Aggregation
        statistics = self.aggregator.aggregate(tweets)

        # STAGE 4: Reports
        writer = ReportWriter(self.output_dir)
        report_paths = writer.write_all(statistics)

        # STAGE 5: Phrase counts (optional input)
        phrase_counts = load_phrase_counts(self.phrase_path)

        logger.info(f"Pipeline complete! Reports written to {self.output_dir}")

        return PipelineResult(
            raw_count=len(raw_tweets),
            unique_count=len(tweets),
            statistics=statistics,
            phrase_counts=phrase_counts,
            report_paths=report_paths
        )
