"""
Datetime utilities for the key handler.

The store keeps UTC timestamps; SQLite hands them back naive, so readers
go through ensure_timezone_aware before formatting.
"""
from datetime import datetime, timezone
from typing import Optional


def get_current_datetime() -> datetime:
    """Get the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_timezone_aware(
    dt: Optional[datetime],
    default_timezone: timezone = timezone.utc
) -> Optional[datetime]:
    """
    Ensure a datetime object has timezone information.

    Naive datetimes are assumed to be in default_timezone.
    """
    if dt is None:
        return None

    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        return dt.replace(tzinfo=default_timezone)

    return dt


def format_iso(dt: Optional[datetime]) -> Optional[str]:
    """Format a datetime as an ISO 8601 string, or None."""
    if dt is None:
        return None
    return ensure_timezone_aware(dt).isoformat()
