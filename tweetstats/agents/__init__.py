"""
Pipeline stages for TweetStats.

Contains the modules that move tweets through the pipeline:
- Ingestion (row parsers + file discovery)
- Country classification
- Deduplication
- Aggregation
- Phrase counts
"""
