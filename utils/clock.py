"""
utils/clock.py
--------------
UTC time helpers. Timestamps are stored as fixed-width ISO-8601 strings,
so comparing them as text in SQL gives chronological order.
"""

from datetime import datetime, timezone
from typing import Optional

from dateutil.parser import isoparse


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_db(value: Optional[datetime]) -> Optional[str]:
    """Serialize a datetime for storage, e.g. ``2026-01-31T08:00:00.000000+00:00``."""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def from_db(value: Optional[str]) -> Optional[datetime]:
    """Parse a stored timestamp back into an aware UTC datetime."""
    if value is None:
        return None
    parsed = isoparse(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)
