"""
Timezone utilities for Bookmarked.
Provides consistent UTC datetime handling for API timestamps.
"""
from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Get current UTC datetime with timezone info.
    Replacement for deprecated datetime.utcnow().
    """
    return datetime.now(timezone.utc)
