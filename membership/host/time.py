"""Time and timestamp utilities."""

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Get current UTC time.

    Returns:
        datetime object with UTC timezone
    """
    return datetime.now(timezone.utc)


def now_iso() -> str:
    """Get current UTC time as ISO 8601 string with 'Z' suffix.

    Returns:
        ISO 8601 formatted timestamp string (e.g. '2025-12-23T10:30:00Z')
    """
    return now_utc().strftime("%Y-%m-%dT%H:%M:%SZ")
