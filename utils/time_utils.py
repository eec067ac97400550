"""
utils/time_utils.py

Purpose: Timestamp helpers
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """
    Current UTC time, timezone-aware.
    """
    return datetime.now(timezone.utc)


def to_iso(dt: Optional[datetime]) -> Optional[str]:
    """
    Formats a datetime as ISO-8601. Naive values are taken as UTC,
    which is how MongoDB hands them back.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.isoformat()
