"""Datetime utilities for the Mailosaur client."""

from datetime import datetime, timezone


def parse_iso_timestamp(timestamp_str: str) -> datetime:
    """Parse an ISO 8601 timestamp string to datetime.

    Handles both 'Z' suffix and '+00:00' timezone formats.

    Args:
        timestamp_str: ISO 8601 formatted timestamp string.

    Returns:
        A datetime object.
    """
    if timestamp_str.endswith("Z"):
        timestamp_str = timestamp_str[:-1] + "+00:00"
    return datetime.fromisoformat(timestamp_str)


def format_iso_timestamp(value: datetime) -> str:
    """Format a datetime as an ISO 8601 string with a 'Z' suffix for UTC.

    Naive datetimes are treated as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat().replace("+00:00", "Z")
