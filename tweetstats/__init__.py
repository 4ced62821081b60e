"""
TweetStats - multi-country tweet CSV ingestion and reporting.
"""

__version__ = "1.0.0"
