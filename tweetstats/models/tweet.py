"""
Tweet data model.

Represents one tweet after ingestion, regardless of which CSV layout it came from.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import config.settings as settings


@dataclass(frozen=True)
class Tweet:
    """
    Canonical tweet record.
    Produced by both row parsers, consumed by deduplication and aggregation.
    """
    country: str  # Known country label or "Unknown"
    created_at: Optional[datetime] = None  # Zone-naive; absent for India.csv
    text: str = ""  # Raw tweet body (cleaned later, at aggregation time)
    user_location: Optional[str] = None
    sentiment_score: Optional[float] = None  # Only India.csv carries it
    month_raw: Optional[str] = None  # Free-text month label, e.g. "Mar 25"

    def __post_init__(self):
        if not self.country:
            raise ValueError("Tweet.country must be a non-empty label")
        if self.text is None:
            raise ValueError("Tweet.text must be a string, use '' when absent")

    def identity_key(self) -> str:
        """
        Surrogate key for deduplication.

        The source data has no tweet id, so identity is
        country | created_at | month_raw | text.
        """
        created = self.created_at.isoformat() if self.created_at else ""
        return "|".join([self.country, created, self.month_raw or "", self.text])

    def month_key(self) -> str:
        """Grouping key: "YYYY-MM" from created_at, else month_raw, else "Unknown"."""
        if self.created_at is not None:
            return self.created_at.strftime("%Y-%m")
        if self.month_raw is not None:
            return self.month_raw
        return settings.UNKNOWN_LABEL


@dataclass
class IndiaRow:
    """One India.csv line sliced into its four raw fields."""
    id: str
    tweet: str
    sentiment: str
    month: str


@dataclass
class PhraseCount:
    """A phrase and its occurrence count from the phrase-count file."""
    phrase: str
    count: int
