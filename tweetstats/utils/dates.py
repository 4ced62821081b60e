"""
Twitter timestamp parsing.
"""

import logging
from datetime import datetime
from typing import Optional

import config.settings as settings

logger = logging.getLogger(__name__)


def parse_twitter_date(raw: Optional[str], fmt: str = settings.TWITTER_DATE_FORMAT) -> Optional[datetime]:
    """
    Parse a Twitter created_at value such as "Wed Dec 08 04:25:46 +0000 2021".

    The offset is dropped and the wall-clock time kept, so the result is a
    naive datetime. Anything unparseable yields None.
    """
    if not isinstance(raw, str):
        return None

    try:
        parsed = datetime.strptime(raw, fmt)
    except ValueError:
        logger.debug(f"Unparseable created_at value: {raw!r}")
        return None

    # strptime ignores the weekday and accepts unpadded fields
    if parsed.strftime(fmt) != raw:
        logger.debug(f"Inconsistent created_at value: {raw!r}")
        return None

    return parsed.replace(tzinfo=None)
