"""Datetime helpers for session start times.

Start times are stored as the ISO 8601 strings clients send. They are parsed
only to derive the date partition and to sort the schedule; naive values are
assumed to be UTC.
"""

from datetime import datetime, timezone
from typing import Optional, Tuple


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO 8601 string into a timezone-aware UTC datetime.

    Args:
        value: ISO string such as '2026-03-15T14:00:00Z' or '2026-03-15'

    Returns:
        UTC datetime, or None if the value is empty or not a valid timestamp

    Examples:
        >>> parse_iso_datetime('2026-03-15T10:00:00-04:00')
        datetime.datetime(2026, 3, 15, 14, 0, tzinfo=datetime.timezone.utc)
        >>> parse_iso_datetime('not-a-date') is None
        True
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_utc(value)

    text = str(value).strip()
    if not text:
        return None

    # Handle both 'Z' and '+00:00' timezone formats
    if text[-1] in ('Z', 'z'):
        text = text[:-1] + '+00:00'
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        return None
    return to_utc(dt)


def to_utc(dt: datetime) -> datetime:
    """Convert datetime to UTC; naive datetimes are assumed to already be UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def partition_key_for(start_time: str) -> str:
    """Derive the date partition ('YYYY-MM-DD', UTC) for a start time.

    Raises:
        ValueError: If start_time is not a valid ISO timestamp
    """
    dt = parse_iso_datetime(start_time)
    if dt is None:
        raise ValueError(f"Invalid startTime {start_time!r}")
    return dt.date().isoformat()


def start_time_sort_key(start_time: Optional[str]) -> Tuple[int, float]:
    """Sort key that orders valid start times ascending and invalid ones last."""
    dt = parse_iso_datetime(start_time)
    if dt is None:
        return (1, 0.0)
    return (0, dt.timestamp())


def format_iso_utc(dt: datetime) -> str:
    """Format a datetime as 'YYYY-MM-DDTHH:MM:SSZ' in UTC."""
    return to_utc(dt).strftime('%Y-%m-%dT%H:%M:%SZ')

