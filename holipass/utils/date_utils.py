"""Date and time utility functions."""
from datetime import datetime, timezone
from typing import Optional


def to_iso_timestamp(moment: Optional[datetime] = None) -> str:
    """
    Format a moment as a UTC ISO 8601 timestamp with millisecond precision.

    Args:
        moment: Aware or naive datetime (naive values are treated as UTC);
            defaults to now

    Returns:
        Timestamp such as "2025-03-01T09:30:00.000Z"
    """
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    else:
        moment = moment.astimezone(timezone.utc)

    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def parse_iso_timestamp(timestamp: str) -> datetime:
    """
    Parse an ISO 8601 timestamp, accepting a trailing Z.

    Raises:
        ValueError: If timestamp format is invalid
    """
    if not isinstance(timestamp, str):
        raise ValueError(f"Invalid timestamp format: {timestamp!r}")
    return datetime.fromisoformat(timestamp.replace("Z", "+00:00"))


def format_event_date(date_str: str) -> str:
    """
    Format a YYYY-MM-DD date for display.

    Example: "2025-03-11" → "March 11, 2025"

    Raises:
        ValueError: If date format is invalid
    """
    date_obj = datetime.strptime(date_str, "%Y-%m-%d")
    return f"{date_obj.strftime('%B')} {date_obj.day}, {date_obj.year}"
